"""
deps.py

FastAPI 공통 의존성(Dependency) 모음.

- get_db            : 요청 단위 DB 세션
- get_current_staff : Bearer 토큰을 검증하여 현재 로그인한 직원 세션 반환

인증 상태는 전역 변수에 두지 않는다.
로그인 정보는 StaffSession 객체로 만들어 필요한 라우터/서비스에 명시적으로 전달한다.

"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.config import settings
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.engine.dates import local_zone, today
from app.models.staff import StaffUser

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class StaffSession:
    staff_id: int
    username: str
    expires_at: datetime


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_staff(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> StaffSession:
    if cred is None:
        raise _unauthorized("Not authenticated")

    try:
        sub, expires_at = decode_access_token(cred.credentials)
        staff_id = int(sub)
    except Exception:
        raise _unauthorized("Could not validate credentials")

    staff = db.scalar(select(StaffUser).where(StaffUser.id == staff_id))
    if not staff or not staff.is_active:
        raise _unauthorized("Staff account not found")

    return StaffSession(staff_id=staff.id, username=staff.username, expires_at=expires_at)


# 상태 판정 기준일 (업장 시간대 기준). 테스트에서는 dependency_overrides 로 고정한다.
def get_today() -> date:
    return today(local_zone(settings.GYM_TIMEZONE))
