"""
engine/matcher.py

회원 검색 결과 판정(MemberMatcher).

검색 조건(SearchCriterion)을 회원 저장소(MemberRepository)에 질의하여
결과를 세 가지 중 하나로 돌려준다.

- Single    : 정확히 한 명
- NoMatch   : 없음 ("찾을 수 없음" 표시용)
- Ambiguous : 여러 명 (후보 전체 반환, 절대 임의로 고르지 않음)

검색 조건 (tagged union):
- ByNumber(member_id) : 회원번호 정확 일치 → 중복 불가
- ByPhone(phone)      : 전화번호 정확 일치 → 0/1/여러 명
- ByName(fragment)    : 이름 부분 일치 (대소문자 무시) → 자주 중복
- ByQR(payload)       : QR의 id 우선. id로 못 찾으면 이름 전체가 일치하고
                        (카드에 전화번호가 있으면) 전화번호도 같은 회원만 인정

Ambiguous 를 받은 호출 측은 사람이 후보를 고르게 한 뒤
ByNumber 로 다시 호출해야 한다.

설계 원칙:
- 저장소는 조회만 하고 엔진은 아무것도 수정하지 않음
- 저장소 오류는 해석하지 않고 그대로 전파

"""

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from app.engine.errors import AmbiguousMatchError, NotFoundError, ValidationError
from app.engine.qr import QRPayload
from app.engine.types import MemberSnapshot

# members.id 는 32bit 정수 컬럼
MAX_MEMBER_NUMBER = 2**31 - 1


class MemberRepository(Protocol):
    def find_by_member_number(self, member_id: int) -> MemberSnapshot | None: ...

    def find_by_phone(self, phone: str) -> Sequence[MemberSnapshot]: ...

    def find_by_name_like(self, fragment: str) -> Sequence[MemberSnapshot]: ...


@dataclass(frozen=True)
class ByNumber:
    member_id: int


@dataclass(frozen=True)
class ByPhone:
    phone: str


@dataclass(frozen=True)
class ByName:
    fragment: str


@dataclass(frozen=True)
class ByQR:
    payload: QRPayload


SearchCriterion = Union[ByNumber, ByPhone, ByName, ByQR]


@dataclass(frozen=True)
class Single:
    member: MemberSnapshot


@dataclass(frozen=True)
class NoMatch:
    pass


@dataclass(frozen=True)
class Ambiguous:
    members: tuple[MemberSnapshot, ...]


MatchResult = Union[Single, NoMatch, Ambiguous]


class MemberMatcher:
    def __init__(self, repository: MemberRepository):
        self.repository = repository

    def resolve(self, criterion: SearchCriterion) -> MatchResult:
        if isinstance(criterion, ByNumber):
            return self._by_number(criterion.member_id)
        if isinstance(criterion, ByPhone):
            return self._by_phone(criterion.phone)
        if isinstance(criterion, ByName):
            return self._by_name(criterion.fragment)
        if isinstance(criterion, ByQR):
            return self._by_qr(criterion.payload)
        raise ValidationError("a search criterion is required", field="criterion")

    def resolve_one(self, criterion: SearchCriterion) -> MemberSnapshot:
        """
        resolve() 결과를 단일 회원 또는 예외로 변환

        - NoMatch   → NotFoundError
        - Ambiguous → AmbiguousMatchError (후보 목록 포함)
        """
        result = self.resolve(criterion)
        if isinstance(result, Single):
            return result.member
        if isinstance(result, Ambiguous):
            raise AmbiguousMatchError(result.members, criterion=criterion)
        raise NotFoundError(criterion=criterion)

    def _by_number(self, member_id) -> MatchResult:
        if isinstance(member_id, bool) or not isinstance(member_id, int) or member_id <= 0:
            raise ValidationError("member number must be a positive integer", field="member_number")
        if member_id > MAX_MEMBER_NUMBER:
            return NoMatch()
        member = self.repository.find_by_member_number(member_id)
        return Single(member) if member is not None else NoMatch()

    def _by_phone(self, phone: str) -> MatchResult:
        phone = (phone or "").strip()
        if not phone:
            raise ValidationError("phone must not be empty", field="phone")
        return _to_result(m for m in self.repository.find_by_phone(phone) if (m.phone or "").strip() == phone)

    def _by_name(self, fragment: str) -> MatchResult:
        fragment = (fragment or "").strip()
        if not fragment:
            raise ValidationError("name must not be empty", field="name")
        needle = fragment.casefold()
        return _to_result(m for m in self.repository.find_by_name_like(fragment) if needle in m.name.casefold())

    def _by_qr(self, payload: QRPayload) -> MatchResult:
        result = self._by_number(payload.id)
        if not isinstance(result, NoMatch):
            return result

        # id 로 못 찾으면 이름 전체 일치 + (카드에 있으면) 전화번호 일치만 인정
        name = (payload.name or "").strip()
        phone = (payload.phone or "").strip()
        if not name:
            return NoMatch()
        pool = self.repository.find_by_phone(phone) if phone else self.repository.find_by_name_like(name)
        return _to_result(
            m for m in pool
            if m.name.strip().casefold() == name.casefold()
            and (not phone or (m.phone or "").strip() == phone)
        )


def _to_result(members) -> MatchResult:
    unique = {}
    for m in members:
        unique.setdefault(m.id, m)
    found = tuple(unique[k] for k in sorted(unique))
    if not found:
        return NoMatch()
    if len(found) == 1:
        return Single(found[0])
    return Ambiguous(found)
