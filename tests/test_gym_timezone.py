"""

업장 시간대 기준 집계 테스트. (업장 Asia/Bangkok = UTC+7, 기준일 2024-01-05)
- 입장 / 거래 시각은 UTC 로 저장되고, "오늘" 과 월 구간은 업장 시간대로 자른다.

"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.core.config import settings
from app.engine.dates import local_zone, utc_bounds
from app.models.transaction import CheckIn, CheckInMethod, Transaction, TransactionKind
from tests.helpers import create_member_in_db, setup_desk


@pytest.fixture(autouse=True)
def bangkok(monkeypatch):
    monkeypatch.setattr(settings, "GYM_TIMEZONE", "Asia/Bangkok")


def test_utc_bounds_for_local_day():
    start, end = utc_bounds(date(2024, 1, 5), date(2024, 1, 6), local_zone("Asia/Bangkok"))
    assert start == datetime(2024, 1, 4, 17, 0)
    assert end == datetime(2024, 1, 5, 17, 0)


def test_dashboard_counts_checkins_by_local_day(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Night Owl", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    for stamp in (
        datetime(2024, 1, 4, 16, 30),  # 01-04 23:30 현지
        datetime(2024, 1, 4, 17, 30),  # 01-05 00:30 현지
        datetime(2024, 1, 5, 16, 59),  # 01-05 23:59 현지
        datetime(2024, 1, 5, 17, 0),   # 01-06 00:00 현지
    ):
        db_session.add(CheckIn(member_id=m.id, method=CheckInMethod.MANUAL, status="active", checked_in_at=stamp))
    db_session.commit()

    r = client.get("/dashboard/stats", headers=ctx["headers"])
    assert r.status_code == 200, r.text
    assert r.json()["today_checkins"] == 2


def test_monthly_report_uses_local_month(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Month End", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    for stamp, amount in (
        (datetime(2024, 1, 31, 16, 0), Decimal("1000")),  # 01-31 23:00 현지
        (datetime(2024, 1, 31, 18, 0), Decimal("2000")),  # 02-01 01:00 현지
    ):
        db_session.add(
            Transaction(
                member_id=m.id,
                payment_method_id=ctx["cash"],
                kind=TransactionKind.OTHER,
                amount=amount,
                created_at=stamp,
            )
        )
    db_session.commit()

    jan = client.get("/reports/monthly?year=2024&month=1", headers=ctx["headers"]).json()
    feb = client.get("/reports/monthly?year=2024&month=2", headers=ctx["headers"]).json()
    assert Decimal(jan["total_revenue"]) == Decimal("1000")
    assert Decimal(feb["total_revenue"]) == Decimal("2000")
