"""

초기 데이터 생성 스크립트.

- 서버 최초 세팅 시 실행하는 용도 (여러 번 실행해도 중복 생성하지 않음)
- .env 에 정의된 ADMIN_* 환경 변수로 첫 직원(관리자) 계정을 만든다.
- 기본 결제 수단과 기본 패키지(일일권 포함)를 만든다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.seed

"""

import os
from decimal import Decimal

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from app.core.config import settings
from app.core.security import get_password_hash
from app.db.session import SessionLocal
from app.models.package import Package, PaymentMethod
from app.models.staff import StaffUser


DEFAULT_PAYMENT_METHODS = ["Cash", "Card", "Bank Transfer"]

DEFAULT_PACKAGES = [
    (settings.DAY_PASS_PACKAGE_NAME, 0, Decimal("10000")),
    ("1 Month", 1, Decimal("60000")),
    ("3 Months", 3, Decimal("160000")),
    ("6 Months", 6, Decimal("300000")),
    ("12 Months", 12, Decimal("540000")),
]


def main():
    db = SessionLocal()
    try:
        username = os.environ["ADMIN_USERNAME"]
        password = os.environ["ADMIN_PASSWORD"]
        name = os.environ.get("ADMIN_NAME", "Admin")

        if db.scalar(select(StaffUser).where(StaffUser.username == username)):
            print(f"✅ staff '{username}' already exists. Skip creation.")
        else:
            db.add(StaffUser(username=username, password_hash=get_password_hash(password), name=name, is_active=True))
            print(f"🚀 staff created: {username}")

        for method_name in DEFAULT_PAYMENT_METHODS:
            if not db.scalar(select(PaymentMethod).where(PaymentMethod.name == method_name)):
                db.add(PaymentMethod(name=method_name, is_active=True))

        for pkg_name, months, price in DEFAULT_PACKAGES:
            if not db.scalar(select(Package).where(Package.name == pkg_name)):
                db.add(Package(name=pkg_name, duration_months=months, price=price, is_active=True))

        db.commit()
        print("✅ payment methods / packages ready")

    finally:
        db.close()


if __name__ == "__main__":
    main()
