"""
members.py

회원(Member) 관리 API 모음.

주요 기능:
- 회원 목록 (상태 필터) / 단건 조회
- 신규 가입 (회원 + 첫 결제를 한 트랜잭션으로 저장)
- 회원 정보 수정 / 삭제
- 회원 검색 (번호 / 전화번호 / 이름 / QR)
- 회원카드 QR 페이로드 발급
- 결제 / 입장 이력 조회
- 회원권 연장 미리보기 / 연장

설계 원칙:
- 모든 엔드포인트는 직원 로그인(get_current_staff)을 요구
- 상태(status)는 저장하지 않고 응답 시점에 계산
- 비즈니스 로직은 service / engine 계층에 위임
- 엔진 예외는 app.main 의 예외 핸들러가 HTTP 응답으로 변환

관련 파일:
- app.services.members     : 회원 생성/수정/삭제
- app.services.renewal     : 연장 반영
- app.engine.matcher       : 검색 결과 판정
- app.engine.qr            : QR 페이로드

"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import StaffSession, get_current_staff, get_db, get_today
from app.engine import qr
from app.engine.matcher import Ambiguous, MemberMatcher, Single
from app.engine.types import MembershipStatus
from app.schemas.member import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
    QRCodeResponse,
    SearchCriterionRequest,
)
from app.schemas.renewal import (
    RenewalPreviewRequest,
    RenewalPreviewResponse,
    RenewalRequest,
    RenewalResponse,
)
from app.schemas.transaction import CheckInLogResponse, MemberHistoryResponse, TransactionResponse
from app.services import members as member_service
from app.services.renewal import commit_renewal, preview_renewal
from app.services.repository import SqlMemberRepository

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=list[MemberResponse])
def list_members(
    status: Optional[MembershipStatus] = Query(default=None, description="active / expiring_soon / expired / inactive"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    members = member_service.list_members(db, today=today, status=status)
    return [MemberResponse.build(m, today) for m in members]


"""
회원 검색 API

- 결과를 single / none / ambiguous 로 구분하여 반환
- ambiguous 인 경우 후보 전체를 반환하고 임의로 고르지 않음

"""
@router.post("/search")
def search_members(
    body: SearchCriterionRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    result = MemberMatcher(SqlMemberRepository(db)).resolve(body.to_criterion())

    if isinstance(result, Single):
        kind, found = "single", [result.member]
    elif isinstance(result, Ambiguous):
        kind, found = "ambiguous", list(result.members)
    else:
        kind, found = "none", []

    return {
        "result": kind,
        "data": [MemberResponse.build(m, today) for m in found],
        "meta": {"count": len(found)},
    }


@router.get("/{member_id}", response_model=MemberResponse)
def get_member(
    member_id: int,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    return MemberResponse.build(member_service.get_member(db, member_id), today)


@router.post("", response_model=MemberResponse)
def create_member(
    body: MemberCreateRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    session: StaffSession = Depends(get_current_staff),
):
    try:
        member, _ = member_service.create_member(
            db,
            name=body.name,
            phone=body.phone,
            email=body.email,
            package_id=body.package_id,
            payment_method_id=body.payment_method_id,
            amount=body.amount,
            start_date=body.start_date,
            notes=body.notes,
            today=today,
            created_by=session.staff_id,
        )
        db.commit()
        db.refresh(member)
    except Exception:
        db.rollback()
        raise
    return MemberResponse.build(member, today)


@router.put("/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int,
    body: MemberUpdateRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    try:
        member = member_service.update_member(db, member_id, **body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(member)
    except Exception:
        db.rollback()
        raise
    return MemberResponse.build(member, today)


@router.delete("/{member_id}")
def delete_member(
    member_id: int,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    try:
        member_service.delete_member(db, member_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Member deleted", "data": {"id": member_id}}


"""
회원카드 QR 페이로드 발급 API

- payload : QR에 담기는 JSON 객체 (필드 이름 고정)
- text    : QR 이미지로 렌더링할 JSON 문자열

"""
@router.get("/{member_id}/qr", response_model=QRCodeResponse)
def member_qr(
    member_id: int,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    payload = qr.encode(member_service.get_member(db, member_id))
    return QRCodeResponse(payload=payload.to_dict(), text=payload.to_json())


@router.get("/{member_id}/history", response_model=MemberHistoryResponse)
def member_history(
    member_id: int,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    transactions, checkins = member_service.member_history(db, member_id)
    return MemberHistoryResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        checkins=[CheckInLogResponse.model_validate(c) for c in checkins],
    )


@router.post("/{member_id}/renew/preview", response_model=RenewalPreviewResponse)
def renewal_preview(
    member_id: int,
    body: RenewalPreviewRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    preview = preview_renewal(db, member_id=member_id, package_id=body.package_id, today=today)
    return RenewalPreviewResponse(**preview.__dict__)


"""
회원권 연장 API

- 회원 날짜 변경과 결제 거래 기록을 한 번의 commit으로 저장
- 어느 하나라도 실패하면 전체 rollback

"""
@router.post("/{member_id}/renew", response_model=RenewalResponse)
def renew_member(
    member_id: int,
    body: RenewalRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    session: StaffSession = Depends(get_current_staff),
):
    try:
        member, tx, preview = commit_renewal(
            db,
            member_id=member_id,
            package_id=body.package_id,
            payment_method_id=body.payment_method_id,
            amount=body.amount,
            notes=body.notes,
            today=today,
            created_by=session.staff_id,
        )
        db.commit()
        db.refresh(member)
        db.refresh(tx)
    except Exception:
        db.rollback()
        raise

    return RenewalResponse(
        member=MemberResponse.build(member, today),
        transaction=TransactionResponse.model_validate(tx),
        preview=RenewalPreviewResponse(**preview.__dict__),
    )
