from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.engine.types import MembershipStatus
from app.schemas.member import MemberResponse


class QRCheckInRequest(BaseModel):
    raw: str = Field(..., description="스캔 또는 수기 입력한 QR 텍스트(JSON)")


class DayPassRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    payment_method_id: int
    amount: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None


class CheckInResponse(BaseModel):
    can_enter: bool
    status: MembershipStatus
    message: str
    warning: Optional[str] = None
    days_remaining: Optional[int] = None
    checkin_id: Optional[int] = None
    member: MemberResponse
