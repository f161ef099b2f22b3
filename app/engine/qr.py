"""
engine/qr.py

회원카드 QR 페이로드 인코딩/디코딩(QRCodec).

이미 발급되어 인쇄된 회원카드와의 호환을 위해
JSON 필드 이름은 아래와 정확히 일치해야 한다.

    {"id", "name", "membershipType", "endDate", "phone", "timestamp"}

- timestamp : 인코딩 시각(ms, epoch). 참고용이며 만료 검사는 하지 않는다.
- 디코딩 결과는 "주장(claim)"일 뿐이다.
  membershipType / endDate 는 발급 시점의 값이므로,
  호출 측은 반드시 id 로 회원을 다시 조회한 뒤 판단해야 한다.

디코딩 검증:
- JSON 형식이어야 함 (객체)
- id, name 이 존재하고 비어 있지 않아야 함
- id 는 양의 정수 (숫자 문자열 허용)

"""

import json
import time
from dataclasses import dataclass

from app.engine.errors import DecodeError

PAYLOAD_FIELDS = ("id", "name", "membershipType", "endDate", "phone", "timestamp")


@dataclass(frozen=True)
class QRPayload:
    id: int
    name: str
    membership_type: str | None = None
    end_date: str | None = None
    phone: str = ""
    timestamp: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "membershipType": self.membership_type,
            "endDate": self.end_date,
            "phone": self.phone,
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def encode(member, timestamp: int | None = None) -> QRPayload:
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    end_date = member.end_date.isoformat() if member.end_date is not None else None
    return QRPayload(
        id=member.id,
        name=member.name,
        membership_type=member.membership_type,
        end_date=end_date,
        phone=member.phone or "",
        timestamp=timestamp,
    )


def decode(raw) -> QRPayload:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise DecodeError("Invalid QR code format - not valid JSON")
    if not isinstance(raw, str) or not raw.strip():
        raise DecodeError("Invalid QR code format - not valid JSON")

    try:
        data = json.loads(raw)
    except ValueError:
        raise DecodeError("Invalid QR code format - not valid JSON")

    if not isinstance(data, dict):
        raise DecodeError("Invalid QR code format - expected a JSON object")

    member_id = _parse_id(data.get("id"))
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise DecodeError("Invalid member QR code - missing ID or name", field="name")

    timestamp = data.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        timestamp = None

    return QRPayload(
        id=member_id,
        name=name,
        membership_type=_optional_str(data.get("membershipType")),
        end_date=_optional_str(data.get("endDate")),
        phone=_optional_str(data.get("phone")) or "",
        timestamp=int(timestamp) if timestamp is not None else None,
    )


def _parse_id(value) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise DecodeError("Invalid member QR code - missing ID or name", field="id")
    if isinstance(value, int):
        member_id = value
    elif isinstance(value, str) and value.strip().isdecimal():
        member_id = int(value.strip())
    else:
        raise DecodeError("Invalid member QR code - id must be a member number", field="id")
    if member_id <= 0:
        raise DecodeError("Invalid member QR code - id must be a member number", field="id")
    return member_id


def _optional_str(value) -> str | None:
    if value is None:
        return None
    return str(value)
