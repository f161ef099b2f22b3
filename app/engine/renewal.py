"""
engine/renewal.py

회원권 연장 계획(RenewalPlanner).

새 시작일/종료일과 연장 일수를 계산하여 미리보기(RenewalPreview)만 만든다.
실제 반영(회원 날짜 변경 + 거래 기록)은 서비스 계층에서
하나의 DB 트랜잭션으로 처리한다.

연장 정책:
- 아직 만료 전 (current_end_date > now) : 기존 종료일 다음으로 이어 붙임 (남은 기간 보존)
- 이미 만료   (current_end_date <= now) : 오늘부터 새로 시작 (소급/보상 없음)
- new_end_date   = add_months(new_start_date, duration_months)
- extension_days = new_end_date - current_end_date
  (만료 상태에서 연장하면 공백 기간까지 포함되어 크게 나올 수 있음)

제약:
- duration_months < 0  : ValidationError
- duration_months == 0 : PolicyViolation (일일권은 첫 방문 전용 상품)

"""

from dataclasses import dataclass
from datetime import date

from app.engine.dates import add_months, days_between
from app.engine.errors import PolicyViolation, ValidationError
from app.engine.status import is_expired


@dataclass(frozen=True)
class RenewalPreview:
    package_name: str | None
    duration: int
    current_end_date: date
    new_start_date: date
    new_end_date: date
    extension_days: int
    is_expired: bool


def plan(current_end_date: date, now: date, duration_months: int, package_name: str | None = None) -> RenewalPreview:
    if duration_months < 0:
        raise ValidationError("duration_months must be a positive number of months", field="duration_months")
    if duration_months == 0:
        raise PolicyViolation(
            "Day pass cannot be used to renew an existing membership",
            rule="day_pass_renewal",
        )

    expired = is_expired(current_end_date, now)
    new_start = now if expired else current_end_date
    new_end = add_months(new_start, duration_months)

    return RenewalPreview(
        package_name=package_name,
        duration=duration_months,
        current_end_date=current_end_date,
        new_start_date=new_start,
        new_end_date=new_end,
        extension_days=days_between(current_end_date, new_end),
        is_expired=expired,
    )


def initial_period(start_date: date, duration_months: int) -> tuple[date, date]:
    """
    신규 가입 시 회원권 기간 계산

    - 일일권(duration_months == 0) 은 시작일 당일에 종료
    - 그 외에는 시작일 + duration_months
    """
    if duration_months < 0:
        raise ValidationError("duration_months must not be negative", field="duration_months")
    if duration_months == 0:
        return start_date, start_date
    return start_date, add_months(start_date, duration_months)
