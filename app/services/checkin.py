"""
services/checkin.py

입장(Check-in) 처리 서비스.

처리 흐름:
1. 검색 조건(번호/전화/이름/QR) → MemberMatcher 로 회원 1명 확정
   - 여러 명이면 AmbiguousMatchError (후보 목록 포함) → 데스크에서 선택 후 번호로 재요청
   - 없으면 NotFoundError
2. CheckInDecider 로 입장 허용 여부 판단
3. 허용된 경우에만 입장 기록(CheckIn) 추가

QR 입장:
- QR 내용은 발급 시점의 "주장"이므로 id 로 회원을 다시 조회한 결과로만 판단한다.

일일권(Day Pass):
- 처음 방문한 손님을 일일권 회원으로 등록 + 결제 기록 + 바로 입장

"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.config import settings
from app.engine.checkin import CheckInDecision, decide
from app.engine.errors import AmbiguousMatchError, NotFoundError
from app.engine.matcher import ByQR, MemberMatcher, SearchCriterion
from app.engine.types import MemberSnapshot
from app.models.transaction import CheckIn, CheckInMethod
from app.services.catalog import get_package_by_name
from app.services.members import create_member
from app.services.repository import SqlMemberRepository

logger = logging.getLogger(__name__)


def _log_visit(db: Session, decision: CheckInDecision, *, method: CheckInMethod, created_by: int | None) -> CheckIn:
    visit = CheckIn(
        member_id=decision.member.id,
        method=method,
        status=decision.status.value,
        created_by=created_by,
    )
    db.add(visit)
    db.flush()
    return visit


def check_in(
    db: Session,
    criterion: SearchCriterion,
    *,
    today: date,
    created_by: int | None = None,
) -> tuple[CheckInDecision, CheckIn | None]:
    matcher = MemberMatcher(SqlMemberRepository(db))
    try:
        member = matcher.resolve_one(criterion)
    except AmbiguousMatchError as e:
        logger.info("check-in search matched %d members, asking for selection", len(e.candidates))
        raise
    except NotFoundError:
        logger.info("check-in search found no member: %r", criterion)
        raise

    decision = decide(member, today)
    if not decision.can_enter:
        logger.warning("check-in denied for member %s: %s", member.id, decision.status.value)
        return decision, None

    method = CheckInMethod.QR if isinstance(criterion, ByQR) else CheckInMethod.MANUAL
    visit = _log_visit(db, decision, method=method, created_by=created_by)
    logger.info("member %s checked in (%s)", member.id, decision.status.value)
    return decision, visit


def day_pass_check_in(
    db: Session,
    *,
    name: str,
    payment_method_id: int,
    today: date,
    phone: str | None = None,
    amount=None,
    notes: str | None = None,
    created_by: int | None = None,
) -> tuple[CheckInDecision, CheckIn]:
    package = get_package_by_name(db, settings.DAY_PASS_PACKAGE_NAME)
    if not package or not package.is_active:
        raise NotFoundError("Day Pass package not found")

    member, _ = create_member(
        db,
        name=name,
        phone=phone,
        package_id=package.id,
        payment_method_id=payment_method_id,
        amount=amount,
        start_date=today,
        today=today,
        notes=notes or "Day Pass - Single visit",
        created_by=created_by,
    )

    decision = decide(MemberSnapshot.from_orm(member), today)
    visit = _log_visit(db, decision, method=CheckInMethod.DAY_PASS, created_by=created_by)
    logger.info("day pass member %s created and checked in", member.id)
    return decision, visit
