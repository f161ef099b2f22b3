from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.member import MemberResponse
from app.schemas.transaction import TransactionResponse


class RenewalPreviewRequest(BaseModel):
    package_id: int


class RenewalRequest(BaseModel):
    package_id: int
    payment_method_id: int
    amount: Decimal = Field(..., ge=0)
    notes: Optional[str] = None


class RenewalPreviewResponse(BaseModel):
    package_name: Optional[str]
    duration: int
    current_end_date: date
    new_start_date: date
    new_end_date: date
    extension_days: int
    is_expired: bool


class RenewalResponse(BaseModel):
    member: MemberResponse
    transaction: TransactionResponse
    preview: RenewalPreviewResponse
