"""
checkin.py

입장(Check-in) API 모음.

주요 기능:
- 번호 / 전화번호 / 이름으로 입장
- QR 스캔(또는 수기 입력한 QR 텍스트)으로 입장
- 처음 온 손님의 일일권 등록 + 즉시 입장

응답 규칙:
- 입장 허용/거부 모두 200 으로 반환하고 can_enter 로 구분
- 여러 회원이 검색되면 409 + 후보 목록 (데스크에서 선택 후 member_number 로 재요청)
- 회원이 없으면 404

관련 파일:
- app.services.checkin     : 입장 처리 / 입장 기록
- app.engine.checkin       : 입장 허용 판단
- app.engine.qr            : QR 디코딩

"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import StaffSession, get_current_staff, get_db, get_today
from app.engine import qr
from app.engine.checkin import CheckInDecision
from app.engine.matcher import ByQR
from app.schemas.checkin import CheckInResponse, DayPassRequest, QRCheckInRequest
from app.schemas.member import MemberResponse, SearchCriterionRequest
from app.services.checkin import check_in, day_pass_check_in

router = APIRouter(prefix="/checkin", tags=["checkin"])


def _to_response(decision: CheckInDecision, visit, today: date) -> CheckInResponse:
    return CheckInResponse(
        can_enter=decision.can_enter,
        status=decision.status,
        message=decision.message,
        warning=decision.warning,
        days_remaining=decision.days_remaining,
        checkin_id=visit.id if visit is not None else None,
        member=MemberResponse.build(decision.member, today),
    )


def _run(db: Session, criterion, today: date, session: StaffSession) -> CheckInResponse:
    try:
        decision, visit = check_in(db, criterion, today=today, created_by=session.staff_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return _to_response(decision, visit, today)


@router.post("", response_model=CheckInResponse)
def checkin(
    body: SearchCriterionRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    session: StaffSession = Depends(get_current_staff),
):
    return _run(db, body.to_criterion(), today, session)


"""
QR 입장 API

- QR 텍스트를 디코딩 (JSON 아님 / id·name 누락 → 400)
- QR 내용은 믿지 않고 id 로 회원을 다시 조회하여 판단

"""
@router.post("/qr", response_model=CheckInResponse)
def checkin_qr(
    body: QRCheckInRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    session: StaffSession = Depends(get_current_staff),
):
    return _run(db, ByQR(qr.decode(body.raw)), today, session)


@router.post("/day-pass", response_model=CheckInResponse)
def checkin_day_pass(
    body: DayPassRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    session: StaffSession = Depends(get_current_staff),
):
    try:
        decision, visit = day_pass_check_in(
            db,
            name=body.name,
            phone=body.phone,
            payment_method_id=body.payment_method_id,
            amount=body.amount,
            notes=body.notes,
            today=today,
            created_by=session.staff_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return _to_response(decision, visit, today)
