"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

.env 환경 변수를 Pydantic BaseSettings로 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- JWT 인증 시크릿 및 만료 정책
- CORS 허용 도메인 목록
- 로그 레벨
- 일일권(Day Pass) 패키지 이름
- 업장 시간대

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main               : CORS / 로깅 초기화 시 설정 사용
- app.core.security      : JWT 시크릿 / 만료 설정 사용
- app.db.session         : DATABASE_URL 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 데스크 근무 1교대 기준

    LOG_LEVEL: str = "INFO"

    # 일일권 판매/입장에 사용하는 패키지 이름
    DAY_PASS_PACKAGE_NAME: str = "Day Pass"

    # 업장 시간대 (예: "Asia/Bangkok"). 비워두면 서버 로컬 시간대
    # 거래 / 입장 시각은 UTC 로 저장되고, "오늘" 과 월별 집계 구간은 이 시간대로 계산한다.
    GYM_TIMEZONE: str | None = None

    # CORS 허용 도메인 (관리자 콘솔 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
settings = Settings()
