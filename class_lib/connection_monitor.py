"""
Connection Monitor

백엔드(DB) 연결 상태 확인 및 지수 백오프 재확인.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from class_lib.api_client import endpoints
from class_lib.api_client.client import ApiClient
from class_lib.api_client.errors import ApiClientError


@dataclass
class ConnectionState:
    is_connected: bool = True
    is_checking: bool = False
    last_error: Optional[ApiClientError] = None
    last_checked: Optional[datetime] = None
    retry_count: int = 0


class ConnectionMonitor:

    PROBE_TIMEOUT = 5.0

    def __init__(
        self,
        client: ApiClient,
        logger,
        max_retries: int = 3,
        retry_delay: float = 2.0,
        probe_endpoint: str = endpoints.HEALTH
    ):
        self.client = client
        self.logger = logger
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.probe_endpoint = probe_endpoint
        self.state = ConnectionState()

    async def check_connection(self) -> bool:
        """가벼운 GET 요청으로 연결 확인 (클라이언트 재시도 없음)"""
        self.state.is_checking = True

        try:
            await self.client.get(self.probe_endpoint, timeout=self.PROBE_TIMEOUT, retries=0)

        except ApiClientError as e:
            self.logger.warning(f"[ConnectionMonitor] Connection check failed: {e}")
            self.state.is_connected = False
            self.state.last_error = e
            return False

        else:
            self.state.is_connected = True
            self.state.last_error = None
            self.state.retry_count = 0
            return True

        finally:
            self.state.is_checking = False
            self.state.last_checked = datetime.now()

    async def retry(self) -> bool:
        if self.state.retry_count >= self.max_retries:
            self.logger.warning("[ConnectionMonitor] Maximum retry attempts reached")
            return False

        delay = self.retry_delay * (2 ** self.state.retry_count)
        self.state.retry_count += 1
        self.logger.info(
            f"[ConnectionMonitor] Retry {self.state.retry_count}/{self.max_retries} in {delay}s"
        )
        await asyncio.sleep(delay)

        # 성공 시 check_connection이 retry_count를 0으로 초기화
        return await self.check_connection()

    def reset(self):
        self.state = ConnectionState()
