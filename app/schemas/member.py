from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.engine.matcher import ByName, ByNumber, ByPhone, ByQR
from app.engine.qr import decode
from app.engine.status import classify
from app.engine.types import MembershipStatus


class MemberCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = None
    package_id: int
    payment_method_id: int
    amount: Optional[Decimal] = Field(default=None, ge=0)  # 미지정 시 패키지 가격
    start_date: Optional[date] = None  # 미지정 시 오늘
    notes: Optional[str] = None


class MemberUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = None
    membership_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MemberResponse(BaseModel):
    id: int
    name: str
    phone: Optional[str]
    email: Optional[str]
    membership_type: str
    start_date: date
    end_date: date
    notes: Optional[str]
    status: MembershipStatus
    days_remaining: Optional[int]

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def build(cls, member, today: date) -> "MemberResponse":
        report = classify(member.start_date, member.end_date, today)
        return cls(
            id=member.id,
            name=member.name,
            phone=member.phone,
            email=member.email,
            membership_type=member.membership_type,
            start_date=member.start_date,
            end_date=member.end_date,
            notes=member.notes,
            status=report.status,
            days_remaining=report.days_remaining,
        )


# 검색 조건 (type 필드로 구분되는 tagged union)

class NumberCriterion(BaseModel):
    type: Literal["member_number"]
    member_number: int

    def to_criterion(self):
        return ByNumber(self.member_number)


class PhoneCriterion(BaseModel):
    type: Literal["phone"]
    phone: str

    def to_criterion(self):
        return ByPhone(self.phone)


class NameCriterion(BaseModel):
    type: Literal["name"]
    name: str

    def to_criterion(self):
        return ByName(self.name)


class QRCriterion(BaseModel):
    type: Literal["qr"]
    raw: str

    def to_criterion(self):
        return ByQR(decode(self.raw))


SearchCriterionRequest = Annotated[
    Union[NumberCriterion, PhoneCriterion, NameCriterion, QRCriterion],
    Field(discriminator="type"),
]


class QRCodeResponse(BaseModel):
    payload: dict
    text: str
