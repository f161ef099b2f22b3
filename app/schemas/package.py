from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PackageCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    duration_months: int = Field(..., ge=0, examples=[1])  # 0 = 일일권
    price: Decimal = Field(..., ge=0, examples=[50000])
    description: Optional[str] = Field(default=None, max_length=255)


class PackageUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    duration_months: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class PackageResponse(BaseModel):
    id: int
    name: str
    duration_months: int
    price: Decimal
    description: Optional[str]
    is_active: bool
    is_day_pass: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentMethodResponse(BaseModel):
    id: int
    name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
