"""
engine/errors.py

회원권 엔진(engine) 예외 정의 파일.

엔진은 예외를 재시도하거나 삼키지 않는다.
모든 예외는 호출 측이 다시 조회하지 않고도 대응할 수 있도록
구조화된 데이터(문제 필드, 후보 목록 등)를 함께 담는다.

예외 분류:
- ValidationError      : 잘못된 날짜/기간, 검색 조건 누락 등 입력 오류
- NotFoundError        : 검색 조건에 맞는 회원 없음
- AmbiguousMatchError  : 여러 회원이 매칭됨 (실패가 아니라 선택 요청 신호)
- DecodeError          : QR 페이로드가 JSON이 아니거나 필수 필드 누락
- PolicyViolation      : 정책 위반 (기존 회원의 일일권 연장 등)

관련 파일:
- app.main               : 예외 → HTTP 응답 변환
"""


class EngineError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EngineError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(EngineError):
    def __init__(self, message: str = "Member not found", *, criterion=None):
        super().__init__(message)
        self.criterion = criterion


class AmbiguousMatchError(EngineError):
    # candidates: 매칭된 회원 전체 (자동 선택하지 않음)
    def __init__(self, candidates, *, criterion=None, message: str | None = None):
        super().__init__(message or f"{len(candidates)} members match, select one")
        self.candidates = list(candidates)
        self.criterion = criterion


class DecodeError(EngineError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class PolicyViolation(EngineError):
    def __init__(self, message: str, *, rule: str):
        super().__init__(message)
        self.rule = rule
