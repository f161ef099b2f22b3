"""

입장(Check-in) 통합 테스트. (기준일 2024-01-05)
- 정상 / 만료 임박(경고) / 만료(거부) / 시작 전(거부)
- 이름 검색 중복 → 409 + 후보 목록, 선택 후 번호로 재요청
- QR 입장 (id 재조회, 잘못된 QR 400)
- 일일권 등록 + 즉시 입장
- 입장이 허용된 경우에만 입장 기록이 남는지 확인한다.

"""

import json
from datetime import date
from decimal import Decimal

from tests.helpers import create_member_in_db, setup_desk


def _history(client, headers, member_id):
    r = client.get(f"/members/{member_id}/history", headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_active_member_checks_in(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Active Kim", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": m.id})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["can_enter"] is True
    assert body["status"] == "active"
    assert body["warning"] is None
    assert body["checkin_id"] is not None
    assert body["member"]["id"] == m.id

    assert len(_history(client, ctx["headers"], m.id)["checkins"]) == 1


def test_expiring_member_checks_in_with_warning(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(
        db_session, name="Soon Park", phone="010-5555-0000", start_date=date(2023, 12, 10), end_date=date(2024, 1, 10)
    )

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "phone", "phone": "010-5555-0000"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["can_enter"] is True
    assert body["status"] == "expiring_soon"
    assert body["days_remaining"] == 5
    assert body["warning"] == "Membership expires in 5 days"


def test_expired_member_is_denied_and_not_logged(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Late Lee", start_date=date(2023, 11, 1), end_date=date(2024, 1, 4))

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": m.id})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["can_enter"] is False
    assert body["status"] == "expired"
    assert "expired" in body["message"]
    assert body["checkin_id"] is None

    assert _history(client, ctx["headers"], m.id)["checkins"] == []


def test_not_started_member_is_denied(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Future Choi", start_date=date(2024, 2, 1), end_date=date(2024, 3, 1))

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": m.id})
    assert r.status_code == 200, r.text
    assert r.json()["can_enter"] is False
    assert r.json()["status"] == "inactive"


def test_duplicate_names_require_selection(client, db_session):
    ctx = setup_desk(client, db_session)
    a = create_member_in_db(db_session, name="John Smith", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))
    b = create_member_in_db(db_session, name="John Doe", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "name", "name": "John"})
    assert r.status_code == 409, r.text
    candidates = r.json()["candidates"]
    assert [c["id"] for c in candidates] == [a.id, b.id]

    # 아무도 입장 처리되지 않음
    assert _history(client, ctx["headers"], a.id)["checkins"] == []
    assert _history(client, ctx["headers"], b.id)["checkins"] == []

    # 데스크에서 선택 후 번호로 재요청
    again = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": b.id})
    assert again.status_code == 200, again.text
    assert again.json()["member"]["name"] == "John Doe"


def test_unknown_member_is_not_found(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "name", "name": "Nobody"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Member not found"


def test_empty_name_is_bad_request(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "name", "name": "  "})
    assert r.status_code == 400
    assert r.json()["field"] == "name"


def test_qr_checkin_uses_live_member_record(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Card Jung", start_date=date(2023, 11, 1), end_date=date(2024, 3, 1))

    # 카드에는 오래된 종료일이 찍혀 있어도 DB 기준으로 판단
    raw = json.dumps({
        "id": m.id,
        "name": "Card Jung",
        "membershipType": "1 Month",
        "endDate": "2023-12-01",
        "phone": "",
        "timestamp": 1700000000000,
    })
    r = client.post("/checkin/qr", headers=ctx["headers"], json={"raw": raw})
    assert r.status_code == 200, r.text
    assert r.json()["can_enter"] is True
    assert r.json()["member"]["end_date"] == "2024-03-01"

    checkins = _history(client, ctx["headers"], m.id)["checkins"]
    assert [c["method"] for c in checkins] == ["QR"]


def test_qr_card_with_unknown_id_does_not_admit_partial_name_match(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Joanna Kim", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    raw = json.dumps({"id": 999, "name": "Ann", "membershipType": "1 Month", "endDate": "2024-03-01", "phone": ""})
    r = client.post("/checkin/qr", headers=ctx["headers"], json={"raw": raw})
    assert r.status_code == 404
    assert _history(client, ctx["headers"], m.id)["checkins"] == []

    # 이름 전체가 같으면 id 가 바뀐 카드라도 입장
    raw = json.dumps({"id": 999, "name": "joanna kim", "phone": ""})
    r = client.post("/checkin/qr", headers=ctx["headers"], json={"raw": raw})
    assert r.status_code == 200, r.text
    assert r.json()["member"]["id"] == m.id


def test_member_number_out_of_range_is_not_found(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": 10**20})
    assert r.status_code == 404

    r = client.post("/members/search", headers=ctx["headers"], json={"type": "member_number", "member_number": 10**20})
    assert r.status_code == 200
    assert r.json()["result"] == "none"


def test_qr_checkin_rejects_invalid_payload(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.post("/checkin/qr", headers=ctx["headers"], json={"raw": "hello"})
    assert r.status_code == 400
    assert "not valid JSON" in r.json()["detail"]

    r = client.post("/checkin/qr", headers=ctx["headers"], json={"raw": '{"name": "x"}'})
    assert r.status_code == 400
    assert r.json()["field"] == "id"


def test_same_day_reentry_is_allowed(client, db_session):
    ctx = setup_desk(client, db_session)
    m = create_member_in_db(db_session, name="Twice Han", start_date=date(2023, 12, 1), end_date=date(2024, 3, 1))

    for _ in range(2):
        r = client.post("/checkin", headers=ctx["headers"], json={"type": "member_number", "member_number": m.id})
        assert r.status_code == 200
        assert r.json()["can_enter"] is True

    assert len(_history(client, ctx["headers"], m.id)["checkins"]) == 2


def test_day_pass_creates_member_and_checks_in(client, db_session):
    ctx = setup_desk(client, db_session)

    r = client.post(
        "/checkin/day-pass",
        headers=ctx["headers"],
        json={"name": "Walk In", "phone": "010-7777-0000", "payment_method_id": ctx["cash"]},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["can_enter"] is True
    assert body["member"]["membership_type"] == "Day Pass"
    assert body["member"]["start_date"] == "2024-01-05"
    assert body["member"]["end_date"] == "2024-01-05"

    history = _history(client, ctx["headers"], body["member"]["id"])
    assert [t["kind"] for t in history["transactions"]] == ["DAY_PASS"]
    assert Decimal(history["transactions"][0]["amount"]) == Decimal("10000")
    assert [c["method"] for c in history["checkins"]] == ["DAY_PASS"]
