"""
engine/status.py

회원권 상태 판정(StatusClassifier).

(start_date, end_date, now) 만으로 상태를 계산하는 순수 함수.
상태는 저장하지 않으므로 시간이 지나도 낡은 값이 남지 않는다.

판정 규칙 (위에서부터 처음 일치하는 규칙 적용):
1. now < start_date                 → inactive (아직 시작 전)
2. now > end_date                   → expired
3. end_date - now <= 7일 (경계 포함) → expiring_soon
4. 그 외                             → active

days_remaining:
- active / expiring_soon : 남은 일수 (0 이상)
- expired                : 음수
- inactive               : None

"""

from dataclasses import dataclass
from datetime import date

from app.engine.dates import days_between
from app.engine.types import MembershipStatus

EXPIRING_SOON_DAYS = 7


@dataclass(frozen=True)
class StatusReport:
    status: MembershipStatus
    days_remaining: int | None

    @property
    def is_admissible(self) -> bool:
        return self.status in (MembershipStatus.ACTIVE, MembershipStatus.EXPIRING_SOON)


def classify(start_date: date, end_date: date, now: date) -> StatusReport:
    if now < start_date:
        return StatusReport(MembershipStatus.INACTIVE, None)

    remaining = days_between(now, end_date)
    if now > end_date:
        return StatusReport(MembershipStatus.EXPIRED, remaining)
    if remaining <= EXPIRING_SOON_DAYS:
        return StatusReport(MembershipStatus.EXPIRING_SOON, remaining)
    return StatusReport(MembershipStatus.ACTIVE, remaining)


def is_expired(end_date: date, now: date) -> bool:
    # 연장 기준: 종료일 당일도 만료로 본다 (end_date <= now)
    return end_date <= now
