"""
services/members.py

회원(Member) 관리 서비스.

주요 기능:
- 신규 가입 (회원 생성 + 첫 결제 거래를 한 트랜잭션으로 기록)
- 회원 정보 수정 / 삭제
- 상태별 회원 목록 (상태는 조회 시점에 계산)
- 회원 이력 (결제 거래 + 입장 기록)

설계 원칙:
- 기간 계산은 app.engine.renewal.initial_period 에 위임
- 일일권은 시작일 당일에 종료 (end_date == start_date)
- commit은 라우터에서 수행

관련 파일:
- app.engine.status      : 상태 계산
- app.services.transactions : 거래 기록

"""

import logging
from datetime import date

from sqlalchemy import delete, desc, select
from sqlalchemy.orm import Session

from app.engine.dates import validate_range
from app.engine.errors import NotFoundError, ValidationError
from app.engine.renewal import initial_period
from app.engine.status import classify
from app.engine.types import MembershipStatus
from app.models.member import Member
from app.models.transaction import CheckIn, Transaction, TransactionKind
from app.services.catalog import get_package, get_payment_method
from app.services.transactions import record_transaction

logger = logging.getLogger(__name__)


def get_member(db: Session, member_id: int) -> Member:
    member = db.get(Member, member_id)
    if not member:
        raise NotFoundError("Member not found")
    return member


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


"""
신규 회원 가입

- 패키지 기간으로 종료일 계산 (일일권이면 당일 종료)
- 결제 금액 미지정 시 패키지 가격 사용
- 회원 생성과 첫 거래 기록은 같은 세션에서 flush (commit은 호출 측)

"""

def create_member(
    db: Session,
    *,
    name: str,
    package_id: int,
    payment_method_id: int,
    today: date,
    phone: str | None = None,
    email: str | None = None,
    amount=None,
    start_date: date | None = None,
    notes: str | None = None,
    created_by: int | None = None,
) -> tuple[Member, Transaction]:
    name = name.strip()
    if not name:
        raise ValidationError("name must not be empty", field="name")

    package = get_package(db, package_id, active_only=True)
    get_payment_method(db, payment_method_id)

    start = start_date or today
    if package.is_day_pass and start != today:
        raise ValidationError("a day pass can only start today", field="start_date")
    start, end = initial_period(start, package.duration_months)

    member = Member(
        name=name,
        phone=_clean(phone),
        email=_clean(email),
        membership_type=package.name,
        start_date=start,
        end_date=end,
        notes=notes,
    )
    db.add(member)
    db.flush()

    tx = record_transaction(
        db,
        member_id=member.id,
        package_id=package.id,
        payment_method_id=payment_method_id,
        amount=package.price if amount is None else amount,
        kind=TransactionKind.DAY_PASS if package.is_day_pass else TransactionKind.NEW_MEMBERSHIP,
        notes=notes,
        created_by=created_by,
    )
    logger.info("member %s created with package %r (%s ~ %s)", member.id, package.name, start, end)
    return member, tx


def update_member(db: Session, member_id: int, **changes) -> Member:
    member = get_member(db, member_id)

    if "name" in changes and changes["name"] is not None:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise ValidationError("name must not be empty", field="name")
    for field in ("phone", "email"):
        if field in changes:
            changes[field] = _clean(changes[field])

    for field, value in changes.items():
        if value is None and field in ("name", "membership_type", "start_date", "end_date"):
            continue
        setattr(member, field, value)

    validate_range(member.start_date, member.end_date)
    db.flush()
    return member


"""
회원 삭제

- 회원의 입장 기록 / 거래 내역을 함께 삭제
- 호출 측에서 commit

"""

def delete_member(db: Session, member_id: int) -> None:
    member = get_member(db, member_id)
    db.execute(delete(CheckIn).where(CheckIn.member_id == member.id))
    db.execute(delete(Transaction).where(Transaction.member_id == member.id))
    db.delete(member)
    db.flush()
    logger.info("member %s deleted", member_id)


def list_members(db: Session, *, today: date, status: MembershipStatus | None = None) -> list[Member]:
    members = db.scalars(select(Member).order_by(Member.id)).all()
    if status is None:
        return list(members)
    return [m for m in members if classify(m.start_date, m.end_date, today).status == status]


def member_history(db: Session, member_id: int) -> tuple[list[Transaction], list[CheckIn]]:
    member = get_member(db, member_id)
    transactions = db.scalars(
        select(Transaction)
        .where(Transaction.member_id == member.id)
        .order_by(desc(Transaction.created_at), desc(Transaction.id))
    ).all()
    checkins = db.scalars(
        select(CheckIn)
        .where(CheckIn.member_id == member.id)
        .order_by(desc(CheckIn.checked_in_at), desc(CheckIn.id))
    ).all()
    return list(transactions), list(checkins)
