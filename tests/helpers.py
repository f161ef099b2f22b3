# tests/helpers.py
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_password_hash
from app.models.member import Member
from app.models.package import Package, PaymentMethod
from app.models.staff import StaffUser


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_staff_in_db(db: Session, *, username: str, password: str, is_active: bool = True) -> StaffUser:
    staff = StaffUser(
        username=username,
        password_hash=get_password_hash(password),
        name="FRONT DESK",
        is_active=is_active,
    )
    db.add(staff)
    db.commit()
    db.refresh(staff)
    return staff


def login_staff(client, db: Session) -> str:
    """직원 계정 생성 + 로그인 → access token"""
    username = f"staff_{uuid.uuid4().hex[:6]}"
    password = "StaffPassw0rd!"
    create_staff_in_db(db, username=username, password=password)

    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def seed_catalog(db: Session) -> dict:
    """결제 수단 1개 + 일일권 / 1개월 / 3개월 패키지"""
    cash = PaymentMethod(name="Cash", is_active=True)
    day_pass = Package(name=settings.DAY_PASS_PACKAGE_NAME, duration_months=0, price=Decimal("10000"), is_active=True)
    one_month = Package(name="1 Month", duration_months=1, price=Decimal("60000"), is_active=True)
    three_months = Package(name="3 Months", duration_months=3, price=Decimal("160000"), is_active=True)
    db.add_all([cash, day_pass, one_month, three_months])
    db.commit()
    return {
        "cash": cash.id,
        "day_pass": day_pass.id,
        "one_month": one_month.id,
        "three_months": three_months.id,
    }


def create_member_in_db(
    db: Session,
    *,
    name: str,
    start_date: date,
    end_date: date,
    phone: str | None = None,
    membership_type: str = "1 Month",
) -> Member:
    member = Member(
        name=name,
        phone=phone,
        membership_type=membership_type,
        start_date=start_date,
        end_date=end_date,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def setup_desk(client, db: Session) -> dict:
    """
    로그인한 직원 토큰 + 기본 패키지/결제 수단 세팅
    """
    token = login_staff(client, db)
    catalog = seed_catalog(db)
    return {"token": token, "headers": auth_header(token), **catalog}
