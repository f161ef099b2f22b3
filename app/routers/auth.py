"""
auth.py

직원(Staff) 인증 API.

주요 기능:
- 로그인 및 Access Token 발급
- 현재 로그인한 직원 정보 조회

설계 원칙:
- Access Token은 Authorization Header(Bearer)로 전달
- 로그인 상태는 전역 변수가 아닌 StaffSession 의존성으로만 전달
- 비활성화된 직원 계정은 로그인 불가

관련 파일:
- app.core.security        : 비밀번호 해시 / JWT 생성·검증
- app.core.deps            : 인증 의존성(get_current_staff)
- app.models.staff         : StaffUser 모델

"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.deps import StaffSession, get_current_staff, get_db
from app.core.security import create_access_token, verify_password
from app.models.staff import StaffUser
from app.schemas.auth import LoginRequest, StaffResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
로그인 API

- username / password 인증
- 비활성 계정은 401 (존재 여부를 드러내지 않음)
- Access Token과 만료 시각을 응답 바디로 반환

"""

@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    staff = db.scalar(select(StaffUser).where(StaffUser.username == data.username.strip()))

    if not staff or not staff.is_active or not verify_password(data.password, staff.password_hash):
        logger.warning("failed login for username %r", data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token, expires_at = create_access_token(subject=str(staff.id))
    return TokenResponse(access_token=token, expires_at=expires_at)


@router.get("/me", response_model=StaffResponse)
def me(session: StaffSession = Depends(get_current_staff), db: Session = Depends(get_db)):
    staff = db.get(StaffUser, session.staff_id)
    return StaffResponse(id=staff.id, username=staff.username, name=staff.name)
