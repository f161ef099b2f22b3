from decimal import Decimal

from pydantic import BaseModel

from app.schemas.member import MemberResponse


class DashboardStats(BaseModel):
    total_members: int = 0
    active_members: int = 0
    expiring_soon: int = 0
    expired_members: int = 0
    inactive_members: int = 0
    today_checkins: int = 0
    month_revenue: Decimal = Decimal("0")
    expiring_soon_members: list[MemberResponse] = []


class RevenueRow(BaseModel):
    name: str
    count: int
    total: Decimal


class MonthlyReport(BaseModel):
    year: int
    month: int
    transaction_count: int
    total_revenue: Decimal
    new_members: int
    checkins: int
    by_package: list[RevenueRow]
    by_payment_method: list[RevenueRow]
