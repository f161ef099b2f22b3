"""
package.py

회원권 상품(Package) 및 결제 수단(PaymentMethod) 모델.

Package:
- duration_months == 0 이면 일일권(Day Pass)
- 거래 내역이 참조하는 패키지는 삭제하지 않고 is_active=False 로 비활성화

PaymentMethod:
- 현금 / 카드 / 계좌이체 등 결제 수단 목록 (관리자 시드 데이터)

"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Package(Base):
    __tablename__ = "packages"
    __table_args__ = (
        CheckConstraint("duration_months >= 0", name="ck_packages_duration"),
        CheckConstraint("price >= 0", name="ck_packages_price"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    duration_months: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    @property
    def is_day_pass(self) -> bool:
        return self.duration_months == 0


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
