"""

입장 허용 판단(decide) 단위 테스트.

"""

from datetime import date

from app.engine.checkin import decide
from app.engine.types import MemberSnapshot, MembershipStatus


MEMBER = MemberSnapshot(
    id=7,
    name="Kim",
    membership_type="1 Month",
    start_date=date(2023, 12, 10),
    end_date=date(2024, 1, 10),
)


def test_active_member_is_admitted_without_warning():
    decision = decide(MEMBER, date(2023, 12, 20))
    assert decision.can_enter is True
    assert decision.status == MembershipStatus.ACTIVE
    assert decision.warning is None
    assert decision.days_remaining == 21
    assert decision.message == "Welcome Kim!"


def test_expiring_member_is_admitted_with_warning():
    decision = decide(MEMBER, date(2024, 1, 7))
    assert decision.can_enter is True
    assert decision.status == MembershipStatus.EXPIRING_SOON
    assert decision.warning == "Membership expires in 3 days"


def test_expiring_today_warning():
    decision = decide(MEMBER, date(2024, 1, 10))
    assert decision.can_enter is True
    assert decision.warning == "Membership expires today"


def test_expired_member_is_denied():
    decision = decide(MEMBER, date(2024, 1, 11))
    assert decision.can_enter is False
    assert decision.status == MembershipStatus.EXPIRED
    assert "expired" in decision.message
    assert decision.warning is None


def test_not_started_member_is_denied():
    decision = decide(MEMBER, date(2023, 12, 1))
    assert decision.can_enter is False
    assert decision.status == MembershipStatus.INACTIVE
    assert "inactive" in decision.message


def test_same_member_can_be_admitted_twice():
    now = date(2023, 12, 20)
    assert decide(MEMBER, now) == decide(MEMBER, now)
