"""
transactions.py

결제 거래(Transaction) API.

- 거래 목록: 최신순, page / limit 페이지네이션, member_id 필터
- 거래 직접 기록 (연장/가입 외 기타 결제)

"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import StaffSession, get_current_staff, get_db
from app.schemas.transaction import TransactionCreateRequest, TransactionResponse
from app.services.transactions import list_transactions, record_transaction

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("")
def get_transactions(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    member_id: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    rows, total = list_transactions(db, page=page, limit=limit, member_id=member_id)
    return {
        "data": [TransactionResponse.model_validate(t) for t in rows],
        "meta": {"page": page, "limit": limit, "total": total, "count": len(rows)},
    }


@router.post("", response_model=TransactionResponse)
def create_transaction(
    body: TransactionCreateRequest,
    db: Session = Depends(get_db),
    session: StaffSession = Depends(get_current_staff),
):
    try:
        tx = record_transaction(
            db,
            member_id=body.member_id,
            package_id=body.package_id,
            payment_method_id=body.payment_method_id,
            amount=body.amount,
            kind=body.kind,
            notes=body.notes,
            created_by=session.staff_id,
        )
        db.commit()
        db.refresh(tx)
        return tx
    except Exception:
        db.rollback()
        raise
