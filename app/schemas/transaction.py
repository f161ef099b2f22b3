from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.transaction import CheckInMethod, TransactionKind


class TransactionCreateRequest(BaseModel):
    member_id: int = Field(..., gt=0, le=2**31 - 1)
    package_id: Optional[int] = None
    payment_method_id: int
    amount: Decimal = Field(..., ge=0, examples=[50000])
    kind: TransactionKind = TransactionKind.OTHER
    notes: Optional[str] = None

    # 가입 / 연장 / 일일권 결제는 회원 날짜 변경과 함께 각 API에서만 기록
    @field_validator("kind")
    @classmethod
    def _only_other(cls, v: TransactionKind) -> TransactionKind:
        if v != TransactionKind.OTHER:
            raise ValueError("only OTHER transactions can be recorded directly")
        return v


class TransactionResponse(BaseModel):
    id: int
    member_id: int
    package_id: Optional[int]
    payment_method_id: int
    kind: TransactionKind
    amount: Decimal
    notes: Optional[str]
    created_by: Optional[int]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CheckInLogResponse(BaseModel):
    id: int
    member_id: int
    method: CheckInMethod
    status: str
    checked_in_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MemberHistoryResponse(BaseModel):
    transactions: list[TransactionResponse]
    checkins: list[CheckInLogResponse]
