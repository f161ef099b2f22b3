"""

회원권 상태 판정(classify) 단위 테스트.
- 판정 규칙 순서(inactive → expired → expiring_soon → active),
  7일 경계, 남은 일수, 시간이 지나도 상태가 "회복"되지 않는지 확인한다.

"""

from datetime import date, timedelta

import pytest

from app.engine.status import EXPIRING_SOON_DAYS, classify, is_expired
from app.engine.types import MembershipStatus


START = date(2023, 12, 10)
END = date(2024, 1, 10)


def test_before_start_is_inactive():
    report = classify(START, END, START - timedelta(days=1))
    assert report.status == MembershipStatus.INACTIVE
    assert report.days_remaining is None
    assert report.is_admissible is False


def test_day_after_end_is_expired():
    report = classify(START, END, END + timedelta(days=1))
    assert report.status == MembershipStatus.EXPIRED
    assert report.days_remaining == -1


def test_seven_days_left_is_expiring_soon():
    report = classify(START, END, END - timedelta(days=7))
    assert report.status == MembershipStatus.EXPIRING_SOON
    assert report.days_remaining == 7


def test_eight_days_left_is_active():
    report = classify(START, END, END - timedelta(days=8))
    assert report.status == MembershipStatus.ACTIVE
    assert report.days_remaining == 8
    assert report.is_admissible is True


def test_last_day_is_still_expiring_soon():
    report = classify(START, END, END)
    assert report.status == MembershipStatus.EXPIRING_SOON
    assert report.days_remaining == 0


def test_five_days_left():
    report = classify(START, END, date(2024, 1, 5))
    assert report.days_remaining == 5
    assert report.status == MembershipStatus.EXPIRING_SOON


def test_day_pass_is_expiring_soon_on_its_day_and_expired_next_day():
    day = date(2024, 3, 1)
    assert classify(day, day, day).status == MembershipStatus.EXPIRING_SOON
    assert classify(day, day, day + timedelta(days=1)).status == MembershipStatus.EXPIRED


def test_inactive_wins_over_expiring_window():
    # 시작 전이면서 종료까지 7일 이내여도 inactive
    start = date(2024, 1, 8)
    end = date(2024, 1, 10)
    assert classify(start, end, date(2024, 1, 5)).status == MembershipStatus.INACTIVE


ORDER = {
    MembershipStatus.ACTIVE: 0,
    MembershipStatus.EXPIRING_SOON: 1,
    MembershipStatus.EXPIRED: 2,
}


@pytest.mark.parametrize("length_days", [0, 3, 8, 30, 365])
def test_status_never_moves_backward_as_time_passes(length_days):
    start = date(2024, 2, 1)
    end = start + timedelta(days=length_days)

    previous = None
    now = start
    while now <= end + timedelta(days=EXPIRING_SOON_DAYS + 3):
        status = classify(start, end, now).status
        rank = ORDER[status]
        if previous is not None:
            assert rank >= previous
        previous = rank
        now += timedelta(days=1)


def test_is_expired_counts_end_day_as_expired():
    assert is_expired(END, END) is True
    assert is_expired(END, END - timedelta(days=1)) is False
