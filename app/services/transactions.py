"""
services/transactions.py

결제 거래(Transaction) 기록 및 조회 서비스.

- 거래 기록은 db.flush() 까지만 수행하고 commit은 호출 측에서 한다.
  (회원 날짜 변경과 한 트랜잭션으로 묶기 위함)
- 목록 조회는 최신순 + 페이지네이션

"""

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from app.engine.errors import NotFoundError
from app.models.member import Member
from app.models.transaction import Transaction, TransactionKind
from app.services.catalog import get_package, get_payment_method


def record_transaction(
    db: Session,
    *,
    member_id: int,
    payment_method_id: int,
    amount,
    kind: TransactionKind,
    package_id: int | None = None,
    notes: str | None = None,
    created_by: int | None = None,
) -> Transaction:
    if not db.get(Member, member_id):
        raise NotFoundError("Member not found")
    get_payment_method(db, payment_method_id)
    if package_id is not None:
        get_package(db, package_id)

    tx = Transaction(
        member_id=member_id,
        package_id=package_id,
        payment_method_id=payment_method_id,
        kind=kind,
        amount=amount,
        notes=notes,
        created_by=created_by,
    )
    db.add(tx)
    db.flush()
    return tx


def list_transactions(db: Session, *, page: int = 1, limit: int = 50, member_id: int | None = None):
    stmt = select(Transaction)
    count_stmt = select(func.count()).select_from(Transaction)
    if member_id is not None:
        stmt = stmt.where(Transaction.member_id == member_id)
        count_stmt = count_stmt.where(Transaction.member_id == member_id)

    total = db.scalar(count_stmt) or 0
    rows = db.scalars(
        stmt.order_by(desc(Transaction.created_at), desc(Transaction.id)).offset((page - 1) * limit).limit(limit)
    ).all()
    return list(rows), total
