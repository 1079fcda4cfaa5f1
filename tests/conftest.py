import pytest
import httpx
from unittest.mock import patch, MagicMock, AsyncMock

from class_lib.api_client.client import ApiClient
from class_lib.api_client.retry import RetryPolicy


BASE_URL = "https://api.example.com"


# ─────────────────────────────────────────────
# Logger Fixture
# ─────────────────────────────────────────────

@pytest.fixture
def logger():
    """Mock 로거 (loguru 대체)"""
    return MagicMock()


# ─────────────────────────────────────────────
# ApiClient Fixture (httpx.MockTransport)
# ─────────────────────────────────────────────

@pytest.fixture
def make_client(logger):
    """
    handler(request) -> httpx.Response 로 ApiClient 생성

    client.calls 에 전송된 요청이 기록됩니다.
    """
    def _make(handler, **kwargs):
        calls = []

        def _recording(request: httpx.Request):
            calls.append(request)
            return handler(request)

        kwargs.setdefault("base_url", BASE_URL)
        kwargs.setdefault("timeout", 10.0)
        kwargs.setdefault("retry_policy", RetryPolicy(max_retries=3, base_delay=1.0))

        client = ApiClient(logger, transport=httpx.MockTransport(_recording), **kwargs)
        client.calls = calls
        return client

    return _make


@pytest.fixture
def mock_sleep():
    """백오프 sleep Mock (대기 시간 기록용)"""
    with patch("class_lib.api_client.client.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


# ─────────────────────────────────────────────
# Response Helpers
# ─────────────────────────────────────────────

@pytest.fixture
def json_handler():
    """고정 JSON 응답 handler factory"""
    def _factory(status_code: int, payload=None):
        def _handler(request):
            if payload is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=payload)
        return _handler
    return _factory


@pytest.fixture
def project_rows():
    return [
        {
            "id": "1",
            "name": "X",
            "groupId": "g1",
            "status": "active",
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-01-02T00:00:00Z",
        }
    ]


@pytest.fixture
def deployment_rows():
    return [
        {"id": "41", "name": "release-41", "projectId": "1", "status": "completed"},
        {"id": "42", "name": "release-42", "projectId": "1", "status": "failed"},
    ]
