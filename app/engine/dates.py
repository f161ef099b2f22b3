"""
engine/dates.py

달력 날짜 계산 유틸리티.

- 월 단위 더하기 (말일 보정: 1/31 + 1개월 = 2/28 또는 2/29)
- 두 날짜 사이의 일수
- 시작일 <= 종료일 검증
- 업장 시간대 기준 "오늘" 과 날짜 구간의 UTC 경계

회원권 날짜는 시간대 없는 달력 날짜이고,
거래 / 입장 시각은 UTC(naive)로 저장된다. 둘을 비교할 때는 utc_bounds 를 거친다.
"""

from datetime import date, datetime, time, timezone, tzinfo

from dateutil import tz
from dateutil.relativedelta import relativedelta

from app.engine.errors import ValidationError


def add_months(start: date, months: int) -> date:
    return start + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def local_zone(name: str | None) -> tzinfo:
    zone = tz.gettz(name) if name else tz.tzlocal()
    if zone is None:
        raise ValidationError(f"unknown time zone: {name}", field="timezone")
    return zone


def today(zone: tzinfo | None = None) -> date:
    return datetime.now(zone or tz.tzlocal()).date()


def utc_bounds(first_day: date, end_day: date, zone: tzinfo) -> tuple[datetime, datetime]:
    """
    업장 시간대의 [first_day 00:00, end_day 00:00) 구간을 naive UTC 경계로 변환

    created_at / checked_in_at 처럼 UTC 로 저장된 시각과 비교할 때 사용한다.
    """
    def to_utc(day: date) -> datetime:
        local = datetime.combine(day, time.min).replace(tzinfo=zone)
        return local.astimezone(timezone.utc).replace(tzinfo=None)

    return to_utc(first_day), to_utc(end_day)


def validate_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date", field="end_date")
