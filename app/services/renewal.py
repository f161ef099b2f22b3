"""
services/renewal.py

회원권 연장(Renewal) 서비스.

연장 날짜 계산은 app.engine.renewal.plan 에 맡기고,
이 파일은 계산 결과를 DB에 반영하는 역할만 한다.

반영 규칙:
- 회원 날짜 변경(start_date/end_date/membership_type)과 거래 기록을
  같은 세션에서 flush 한다. commit/rollback 은 라우터가 한 번에 수행하므로
  둘 중 하나만 저장되는 일은 없다.
- 만료 전 연장: start_date 는 그대로, end_date 만 뒤로 연장
- 만료 후 연장: start_date 를 오늘로, end_date 는 오늘 + 기간

관련 파일:
- app.engine.renewal        : RenewalPlanner
- app.routers.members       : 연장 미리보기 / 연장 API

"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.engine.renewal import RenewalPreview, plan
from app.models.member import Member
from app.models.transaction import Transaction, TransactionKind
from app.services.catalog import get_package, get_payment_method
from app.services.members import get_member
from app.services.transactions import record_transaction

logger = logging.getLogger(__name__)


def preview_renewal(db: Session, *, member_id: int, package_id: int, today: date) -> RenewalPreview:
    member = get_member(db, member_id)
    package = get_package(db, package_id, active_only=True)
    return plan(member.end_date, today, package.duration_months, package_name=package.name)


def commit_renewal(
    db: Session,
    *,
    member_id: int,
    package_id: int,
    payment_method_id: int,
    amount,
    today: date,
    notes: str | None = None,
    created_by: int | None = None,
) -> tuple[Member, Transaction, RenewalPreview]:
    member = get_member(db, member_id)
    package = get_package(db, package_id, active_only=True)
    get_payment_method(db, payment_method_id)

    preview = plan(member.end_date, today, package.duration_months, package_name=package.name)

    if preview.is_expired:
        member.start_date = preview.new_start_date
    member.end_date = preview.new_end_date
    member.membership_type = package.name

    tx = record_transaction(
        db,
        member_id=member.id,
        package_id=package.id,
        payment_method_id=payment_method_id,
        amount=amount,
        kind=TransactionKind.RENEWAL,
        notes=notes,
        created_by=created_by,
    )
    db.flush()

    logger.info(
        "member %s renewed with %r: %s -> %s (+%d days%s)",
        member.id,
        package.name,
        preview.current_end_date,
        preview.new_end_date,
        preview.extension_days,
        ", from expired" if preview.is_expired else "",
    )
    return member, tx, preview
