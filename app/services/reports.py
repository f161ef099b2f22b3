"""
services/reports.py

대시보드 / 매출 리포트 계산 서비스.

주요 기능:
- 대시보드 통계 (상태별 회원 수, 오늘 입장 수, 이번 달 매출, 만료 임박 회원 목록)
- 월별 리포트 (총매출, 패키지별 / 결제 수단별 매출, 신규 가입, 입장 수)
- 월별 거래 내역 행(row) 목록 (CSV / XLSX 내보내기용)

설계 원칙:
- 회원 상태는 저장하지 않으므로 매번 app.engine.status.classify 로 집계
- 금액 합계는 항상 DB 기준으로 계산

"""

from collections import Counter
from datetime import date, datetime
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.engine.dates import local_zone, utc_bounds
from app.engine.errors import ValidationError
from app.engine.status import classify
from app.engine.types import MembershipStatus
from app.models.member import Member
from app.models.package import Package, PaymentMethod
from app.models.transaction import CheckIn, Transaction, TransactionKind


def _zone():
    return local_zone(settings.GYM_TIMEZONE)


# 업장 시간대 기준 한 달을 UTC 경계로 (created_at / checked_in_at 은 UTC 저장)
def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    if month < 1 or month > 12:
        raise ValidationError("month must be between 1 and 12", field="month")
    first = date(year, month, 1)
    return utc_bounds(first, first + relativedelta(months=1), _zone())


def _revenue_between(db: Session, start: datetime, end: datetime) -> Decimal:
    total = db.scalar(
        select(func.coalesce(func.sum(Transaction.amount), 0))
        .where(Transaction.created_at >= start)
        .where(Transaction.created_at < end)
    )
    return Decimal(str(total or 0))


def dashboard_stats(db: Session, *, today: date) -> dict:
    members = db.scalars(select(Member).order_by(Member.end_date, Member.id)).all()

    counts = Counter()
    expiring = []
    for m in members:
        st = classify(m.start_date, m.end_date, today).status
        counts[st] += 1
        if st == MembershipStatus.EXPIRING_SOON:
            expiring.append(m)

    day_start, day_end = utc_bounds(today, today + relativedelta(days=1), _zone())
    today_checkins = db.scalar(
        select(func.count())
        .select_from(CheckIn)
        .where(CheckIn.checked_in_at >= day_start)
        .where(CheckIn.checked_in_at < day_end)
    ) or 0

    month_start, month_end = month_range(today.year, today.month)

    return {
        "total_members": len(members),
        "active_members": counts[MembershipStatus.ACTIVE],
        "expiring_soon": counts[MembershipStatus.EXPIRING_SOON],
        "expired_members": counts[MembershipStatus.EXPIRED],
        "inactive_members": counts[MembershipStatus.INACTIVE],
        "today_checkins": today_checkins,
        "month_revenue": _revenue_between(db, month_start, month_end),
        "expiring_soon_members": expiring,
    }


def _grouped_revenue(db: Session, name_col, join_on, start: datetime, end: datetime) -> list[dict]:
    rows = db.execute(
        select(name_col, func.count(Transaction.id), func.coalesce(func.sum(Transaction.amount), 0))
        .select_from(Transaction)
        .join(join_on[0], join_on[1])
        .where(Transaction.created_at >= start)
        .where(Transaction.created_at < end)
        .group_by(name_col)
        .order_by(func.sum(Transaction.amount).desc())
    ).all()
    return [{"name": name, "count": count, "total": Decimal(str(total))} for name, count, total in rows]


def monthly_report(db: Session, *, year: int, month: int) -> dict:
    start, end = month_range(year, month)

    tx_count = db.scalar(
        select(func.count()).select_from(Transaction)
        .where(Transaction.created_at >= start)
        .where(Transaction.created_at < end)
    ) or 0
    new_members = db.scalar(
        select(func.count()).select_from(Transaction)
        .where(Transaction.kind.in_([TransactionKind.NEW_MEMBERSHIP, TransactionKind.DAY_PASS]))
        .where(Transaction.created_at >= start)
        .where(Transaction.created_at < end)
    ) or 0
    checkins = db.scalar(
        select(func.count()).select_from(CheckIn)
        .where(CheckIn.checked_in_at >= start)
        .where(CheckIn.checked_in_at < end)
    ) or 0

    return {
        "year": year,
        "month": month,
        "transaction_count": tx_count,
        "total_revenue": _revenue_between(db, start, end),
        "new_members": new_members,
        "checkins": checkins,
        "by_package": _grouped_revenue(db, Package.name, (Package, Transaction.package_id == Package.id), start, end),
        "by_payment_method": _grouped_revenue(
            db, PaymentMethod.name, (PaymentMethod, Transaction.payment_method_id == PaymentMethod.id), start, end
        ),
    }


EXPORT_HEADER = ["transaction_id", "created_at", "member_id", "member_name", "kind", "package", "payment_method", "amount", "notes"]


def transaction_rows(db: Session, *, year: int, month: int) -> list[list]:
    start, end = month_range(year, month)
    rows = db.execute(
        select(Transaction, Member.name, Package.name, PaymentMethod.name)
        .join(Member, Transaction.member_id == Member.id)
        .outerjoin(Package, Transaction.package_id == Package.id)
        .join(PaymentMethod, Transaction.payment_method_id == PaymentMethod.id)
        .where(Transaction.created_at >= start)
        .where(Transaction.created_at < end)
        .order_by(Transaction.created_at, Transaction.id)
    ).all()

    return [
        [
            tx.id,
            tx.created_at.isoformat() if tx.created_at else "",
            tx.member_id,
            member_name,
            tx.kind.value,
            package_name or "",
            method_name,
            str(tx.amount),
            tx.notes or "",
        ]
        for tx, member_name, package_name, method_name in rows
    ]
