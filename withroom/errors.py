"""
에러 분류

- ApiError : 네트워크/서버 오류 (2xx가 아닌 응답, 요청 예외)
- FetchError : 목록 조회 실패 또는 응답 형식 오류
- AuthRequired : 토큰이 없거나 만료된 경우 (로그인 페이지로 안내)

서버가 200 응답과 함께 false를 돌려주는 업무 규칙 거절과
제출 전 입력값 검증 실패는 예외가 아니라 ActionResult로 전달한다.
"""
from dataclasses import dataclass

SUCCESS = 'success'
REJECTED = 'rejected'
INVALID = 'invalid'
FAILED = 'failed'
CANCELLED = 'cancelled'


class ApiError(Exception):
    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status


class FetchError(ApiError):
    pass


class AuthRequired(ApiError):
    def __init__(self, message='로그인이 필요합니다.', status=None):
        super().__init__(message, status)


@dataclass
class ActionResult:
    """사용자 액션(관심, 참여, 수락 등)의 결과"""
    ok: bool
    message: str
    category: str = SUCCESS
    value: object = None

    @classmethod
    def success(cls, message, value=None):
        return cls(True, message, SUCCESS, value)

    @classmethod
    def rejected(cls, message):
        return cls(False, message, REJECTED)

    @classmethod
    def invalid(cls, message):
        return cls(False, message, INVALID)

    @classmethod
    def failed(cls, message):
        return cls(False, message, FAILED)

    @classmethod
    def cancelled(cls):
        return cls(False, '취소되었습니다.', CANCELLED)

    @property
    def flash_category(self):
        # 템플릿에서 알림 색상을 고르는 데 사용
        return 'success' if self.ok else 'error'
