"""
Retry Policy

재시도 여부와 대기 시간(지수 백오프)을 결정하는 정책 객체.
sleep은 호출하는 쪽(ApiClient)이 담당합니다.
"""

from dataclasses import dataclass

from class_lib.api_client.errors import ApiError, ErrorKind


def is_client_side(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.kind in (ErrorKind.CLIENT, ErrorKind.AUTH)


@dataclass(frozen=True)
class RetryPolicy:
    """재시도 정책 (max_retries회 재시도, base_delay × 2^attempt 초 대기)"""
    max_retries: int = 3
    base_delay: float = 1.0

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        return cls(
            max_retries=config.api_retry_attempts,
            base_delay=config.api_retry_delay_ms / 1000
        )

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """attempt(0부터)번째 실패 후 대기 시간 (초)"""
        return self.base_delay * (2 ** attempt)

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        if attempt >= self.max_retries:
            return False

        # 4xx (401/403 포함)는 재시도하지 않음
        if is_client_side(error):
            return False

        # 연결성 에러, 5xx, 미분류 에러는 재시도
        return True

    def with_retries(self, max_retries: int) -> "RetryPolicy":
        return RetryPolicy(max_retries=max_retries, base_delay=self.base_delay)
