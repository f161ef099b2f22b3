"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

주요 역할:
- FastAPI 앱 인스턴스 생성 및 로깅 초기화
- CORS 미들웨어 설정
- 각 도메인별 라우터(auth, members, checkin, packages, transactions, reports) 등록
- 엔진 예외 → HTTP 응답 변환 (한 곳에서만 처리)
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

예외 → HTTP 상태 코드:
- ValidationError / DecodeError : 400
- NotFoundError                 : 404
- AmbiguousMatchError           : 409 (+ candidates: 후보 회원 목록)
- PolicyViolation               : 422

관련 파일:
- app.core.config        : 환경 변수 및 설정 로드
- app.engine.errors      : 엔진 예외 정의
- app.routers.*          : 기능별 API 라우터

"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_db
from app.engine.errors import (
    AmbiguousMatchError,
    DecodeError,
    NotFoundError,
    PolicyViolation,
    ValidationError,
)
from app.routers import auth, checkin, members, packages, reports, transactions

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Gym Admin Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(members.router)
app.include_router(checkin.router)
app.include_router(packages.router)
app.include_router(transactions.router)
app.include_router(reports.router)


@app.exception_handler(ValidationError)
def handle_validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(DecodeError)
def handle_decode_error(request: Request, exc: DecodeError):
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(PolicyViolation)
def handle_policy_violation(request: Request, exc: PolicyViolation):
    return JSONResponse(status_code=422, content={"detail": exc.message, "rule": exc.rule})


"""
여러 회원이 매칭된 경우

- 실패가 아니라 "선택 요청" 신호
- 후보 전체를 돌려주고, 선택된 회원은 member_number 로 다시 요청받는다

"""
@app.exception_handler(AmbiguousMatchError)
def handle_ambiguous(request: Request, exc: AmbiguousMatchError):
    candidates = [
        {
            "id": m.id,
            "name": m.name,
            "phone": m.phone,
            "email": m.email,
            "membership_type": m.membership_type,
            "start_date": m.start_date.isoformat(),
            "end_date": m.end_date.isoformat(),
        }
        for m in exc.candidates
    ]
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "candidates": candidates},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
