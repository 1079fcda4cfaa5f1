"""
API Client Exceptions

대시보드 API 클라이언트 전용 예외 클래스.
클라이언트 레이어 밖으로는 ApiError / DatabaseConnectionError 두 종류만 전달됩니다.
"""

from enum import Enum
from typing import Any, Optional

import httpx


class ErrorKind(str, Enum):
    """에러 분류 (호출부는 kind로 분기)"""
    CLIENT = "client"
    AUTH = "auth"
    SERVER = "server"
    CONNECTIVITY = "connectivity"
    UNKNOWN = "unknown"


AUTH_STATUSES = (401, 403)

CONNECTIVITY_MARKERS = (
    "ECONNREFUSED",
    "ETIMEDOUT",
    "ENOTFOUND",
    "Network request failed",
)

DB_ERROR_KEYWORDS = (
    "database",
    "connection",
    "pool",
    "timeout",
    "econnrefused",
    "etimedout",
    "server error",
)


class ApiClientError(Exception):
    """API 클라이언트 기본 예외"""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class ApiError(ApiClientError):
    """API 응답 에러 (4xx, 5xx) 또는 분류되지 않은 실패"""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message, status)
        self.code = code
        self.details = details

    @property
    def kind(self) -> ErrorKind:
        if self.status is None:
            return ErrorKind.UNKNOWN
        if self.status in AUTH_STATUSES:
            return ErrorKind.AUTH
        if 400 <= self.status < 500:
            return ErrorKind.CLIENT
        if self.status >= 500:
            return ErrorKind.SERVER
        return ErrorKind.UNKNOWN

    @classmethod
    def from_response_body(cls, status: int, body: Any, reason: str = "") -> "ApiError":
        """JSON 에러 바디로부터 ApiError 생성 (message → error → HTTP 상태 순)"""
        message = f"HTTP {status}: {reason}" if reason else f"HTTP {status}"
        code = None
        details = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("error") or message
            code = body.get("code")
            details = body
        elif body is not None:
            details = body

        return cls(str(message), status=status, code=code, details=details)

    def __repr__(self):
        return f"ApiError(status={self.status}, message={self.message!r})"


class DatabaseConnectionError(ApiClientError):
    """DB/네트워크 연결 실패 (재시도 소진 후 전달)"""

    kind = ErrorKind.CONNECTIVITY

    DEFAULT_MESSAGE = (
        "Unable to connect to the database. "
        "Please check your connection and try again."
    )

    def __init__(
        self,
        message: str = DEFAULT_MESSAGE,
        status: Optional[int] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message, status)
        self.original_error = original_error

    def __repr__(self):
        return (
            f"DatabaseConnectionError(status={self.status}, "
            f"original_error={self.original_error!r})"
        )


def is_connectivity_error(error: BaseException) -> bool:
    """
    연결성 에러 판별 (best-effort 휴리스틱)

    1. 전송 계층 실패 (연결 거부, DNS 실패, 타임아웃)
    2. 메시지에 ECONNREFUSED 등 연결 실패 패턴 포함
    3. 5xx 응답 중 메시지에 database/pool 등 키워드 포함
    """
    if isinstance(error, DatabaseConnectionError):
        return True

    if isinstance(error, httpx.TransportError):
        return True

    message = getattr(error, "message", None) or str(error)
    if any(marker in message for marker in CONNECTIVITY_MARKERS):
        return True

    if isinstance(error, ApiError) and error.status and error.status >= 500:
        text = message.lower()
        return any(keyword in text for keyword in DB_ERROR_KEYWORDS)

    return False
