"""
engine/types.py

엔진이 다루는 값 객체(Value Object) 정의.

- MembershipStatus : 날짜 범위로부터 매번 계산되는 회원권 상태 (DB 저장 안 함)
- MemberSnapshot   : 판단 시점의 회원 정보 (불변)

ORM 모델(app.models.member.Member)과 분리하여
엔진이 DB/세션 없이도 동작하도록 한다.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MembershipStatus(str, Enum):
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class MemberSnapshot:
    id: int
    name: str
    start_date: date
    end_date: date
    membership_type: str = ""
    phone: str | None = None
    email: str | None = None
    notes: str | None = None

    @classmethod
    def from_orm(cls, obj) -> "MemberSnapshot":
        return cls(
            id=obj.id,
            name=obj.name,
            start_date=obj.start_date,
            end_date=obj.end_date,
            membership_type=obj.membership_type or "",
            phone=obj.phone,
            email=obj.email,
            notes=obj.notes,
        )
