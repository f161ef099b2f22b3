"""
engine/checkin.py

입장 허용 판단(CheckInDecider).

회원 스냅샷과 기준일(now)만으로 입장 가능 여부를 결정한다.

- active / expiring_soon : 입장 허용
  (expiring_soon 이면 남은 일수를 담은 경고를 함께 반환, 입장은 막지 않음)
- expired / inactive     : 입장 거부, 상태를 밝히는 사유 메시지 반환

당일 중복 입장은 여기서 막지 않는다.
입장 기록(visit log)은 서비스 계층(app.services.checkin)의 책임이다.
"""

from dataclasses import dataclass
from datetime import date

from app.engine.status import classify
from app.engine.types import MemberSnapshot, MembershipStatus


@dataclass(frozen=True)
class CheckInDecision:
    can_enter: bool
    status: MembershipStatus
    message: str
    member: MemberSnapshot
    days_remaining: int | None = None
    warning: str | None = None


def decide(member: MemberSnapshot, now: date) -> CheckInDecision:
    report = classify(member.start_date, member.end_date, now)

    if report.status == MembershipStatus.EXPIRED:
        return CheckInDecision(
            can_enter=False,
            status=report.status,
            message=f"Membership expired on {member.end_date.isoformat()}",
            member=member,
            days_remaining=report.days_remaining,
        )

    if report.status == MembershipStatus.INACTIVE:
        return CheckInDecision(
            can_enter=False,
            status=report.status,
            message=f"Membership inactive until {member.start_date.isoformat()}",
            member=member,
        )

    warning = None
    if report.status == MembershipStatus.EXPIRING_SOON:
        warning = _expiry_warning(report.days_remaining)

    return CheckInDecision(
        can_enter=True,
        status=report.status,
        message=f"Welcome {member.name}!",
        member=member,
        days_remaining=report.days_remaining,
        warning=warning,
    )


def _expiry_warning(days_remaining: int) -> str:
    if days_remaining == 0:
        return "Membership expires today"
    if days_remaining == 1:
        return "Membership expires in 1 day"
    return f"Membership expires in {days_remaining} days"
