"""
transaction.py

결제 거래(Transaction) 및 입장 기록(CheckIn) 모델.

Transaction:
- 신규 가입 / 연장 / 일일권 / 기타 결제 1건
- 회원 날짜 변경과 같은 DB 트랜잭션 안에서 함께 기록된다

CheckIn:
- 입장이 허용된 방문 1건 (방문 기록, visit log)
- 입장 판단 자체(app.engine.checkin)는 이 기록을 참조하지 않는다

"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TransactionKind(str, Enum):
    NEW_MEMBERSHIP = "NEW_MEMBERSHIP"
    RENEWAL = "RENEWAL"
    DAY_PASS = "DAY_PASS"
    OTHER = "OTHER"


class CheckInMethod(str, Enum):
    MANUAL = "MANUAL"
    QR = "QR"
    DAY_PASS = "DAY_PASS"


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_member_id", "member_id"),
        Index("ix_transactions_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    member_id: Mapped[int] = mapped_column(Integer, ForeignKey("members.id"), nullable=False)
    package_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("packages.id"), nullable=True)
    payment_method_id: Mapped[int] = mapped_column(Integer, ForeignKey("payment_methods.id"), nullable=False)

    kind: Mapped[TransactionKind] = mapped_column(
        SAEnum(TransactionKind, name="transaction_kind"), nullable=False, default=TransactionKind.OTHER
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("staff_users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)


class CheckIn(Base):
    __tablename__ = "checkins"
    __table_args__ = (
        Index("ix_checkins_member_id", "member_id"),
        Index("ix_checkins_checked_in_at", "checked_in_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    member_id: Mapped[int] = mapped_column(Integer, ForeignKey("members.id"), nullable=False)
    method: Mapped[CheckInMethod] = mapped_column(
        SAEnum(CheckInMethod, name="checkin_method"), nullable=False, default=CheckInMethod.MANUAL
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("staff_users.id"), nullable=True)
    checked_in_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
