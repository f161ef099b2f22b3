"""

대시보드 / 월별 리포트 / 거래 내역 내보내기 테스트.
- 거래 / 입장 기록은 UTC 현재 시각으로 저장되므로 업장 시간대와 기준일도 UTC 로 맞춘다.

"""

import csv
import io
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from app.core.config import settings

from tests.helpers import create_member_in_db, setup_desk


@pytest.fixture(autouse=True)
def utc_gym(monkeypatch):
    monkeypatch.setattr(settings, "GYM_TIMEZONE", "UTC")


@pytest.fixture()
def today():
    return datetime.utcnow().date()


def _renew(client, ctx, member_id, package_key="one_month", amount=60000):
    r = client.post(
        f"/members/{member_id}/renew",
        headers=ctx["headers"],
        json={"package_id": ctx[package_key], "payment_method_id": ctx["cash"], "amount": amount},
    )
    assert r.status_code == 200, r.text


def test_dashboard_stats(client, db_session, today):
    ctx = setup_desk(client, db_session)
    active = create_member_in_db(db_session, name="Active", start_date=today - timedelta(days=30), end_date=today + timedelta(days=60))
    soon = create_member_in_db(db_session, name="Soon", start_date=today - timedelta(days=30), end_date=today + timedelta(days=2))
    create_member_in_db(db_session, name="Gone", start_date=today - timedelta(days=90), end_date=today - timedelta(days=1))
    create_member_in_db(db_session, name="Later", start_date=today + timedelta(days=3), end_date=today + timedelta(days=40))

    client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": active.id})
    _renew(client, ctx, soon.id)

    r = client.get("/dashboard/stats", headers=ctx["headers"])
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["total_members"] == 4
    # 연장 후 Soon 은 active 로 바뀐다
    assert body["active_members"] == 2
    assert body["expiring_soon"] == 0
    assert body["expired_members"] == 1
    assert body["inactive_members"] == 1
    assert body["today_checkins"] == 1
    assert Decimal(body["month_revenue"]) == Decimal("60000")
    assert body["expiring_soon_members"] == []


def test_dashboard_lists_expiring_members(client, db_session, today):
    ctx = setup_desk(client, db_session)
    soon = create_member_in_db(db_session, name="Soon", start_date=today - timedelta(days=30), end_date=today + timedelta(days=2))

    body = client.get("/dashboard/stats", headers=ctx["headers"]).json()
    assert [m["id"] for m in body["expiring_soon_members"]] == [soon.id]
    assert body["expiring_soon_members"][0]["days_remaining"] == 2


def test_monthly_report(client, db_session, today):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Payer", start_date=today - timedelta(days=30), end_date=today + timedelta(days=20))
    _renew(client, ctx, m.id, "one_month", 60000)
    _renew(client, ctx, m.id, "three_months", 150000)

    r = client.get(f"/reports/monthly?year={today.year}&month={today.month}", headers=ctx["headers"])
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["transaction_count"] == 2
    assert Decimal(body["total_revenue"]) == Decimal("210000")
    assert [row["name"] for row in body["by_package"]] == ["3 Months", "1 Month"]
    assert body["by_payment_method"][0]["name"] == "Cash"
    assert body["by_payment_method"][0]["count"] == 2


def test_monthly_report_rejects_bad_month(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.get("/reports/monthly?year=2024&month=13", headers=ctx["headers"])
    assert r.status_code == 422


def test_export_csv(client, db_session, today):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="김회원", start_date=today - timedelta(days=30), end_date=today + timedelta(days=20))
    _renew(client, ctx, m.id)

    r = client.get(f"/reports/transactions/export?year={today.year}&month={today.month}", headers=ctx["headers"])
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]

    text = r.content.decode("utf-8")
    assert text.startswith("\ufeff")

    rows = list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))
    assert rows[0][:4] == ["transaction_id", "created_at", "member_id", "member_name"]
    assert len(rows) == 2
    assert rows[1][3] == "김회원"
    assert rows[1][4] == "RENEWAL"
    assert rows[1][5] == "1 Month"


def test_export_xlsx(client, db_session, today):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Sheet", start_date=today - timedelta(days=30), end_date=today + timedelta(days=20))
    _renew(client, ctx, m.id)

    r = client.get(f"/reports/transactions/export.xlsx?year={today.year}&month={today.month}", headers=ctx["headers"])
    assert r.status_code == 200, r.text

    ws = load_workbook(io.BytesIO(r.content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][0] == "transaction_id"
    assert len(rows) == 2
    assert rows[1][3] == "Sheet"


def test_reports_require_login(client):
    assert client.get("/dashboard/stats").status_code == 401
