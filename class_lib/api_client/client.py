"""
Dashboard API Client

운영 대시보드 REST API를 호출하는 비동기 클라이언트.
- 인터셉터 체인 (request / response / error)
- 시도별 타임아웃
- 재시도 및 지수 백오프
- 연결성 에러 분류 (DatabaseConnectionError)
- 401/403 응답 시 인증 정보 삭제 + 리스너 통지
"""

import asyncio
import inspect
from typing import Any, Callable, Optional

import httpx

from class_config.class_env import Config
from class_lib.api_client.credentials import CredentialStore
from class_lib.api_client.errors import (
    AUTH_STATUSES,
    ApiClientError,
    ApiError,
    DatabaseConnectionError,
    is_connectivity_error,
)
from class_lib.api_client.interceptors import Interceptors, RequestDescriptor
from class_lib.api_client.retry import RetryPolicy, is_client_side

AuthFailureListener = Callable[[ApiError, str], None]


class ApiClient:
    """
    대시보드 API 클라이언트

    사용법:
        from class_lib.api_client.client import ApiClient
        from class_config.class_log import ConfigLogger

        logger = ConfigLogger('dashboard_log', 30).get_logger('api')
        async with ApiClient(logger) as client:
            projects = await client.get("/projects")
    """

    def __init__(
        self,
        logger,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retry_policy: Optional[RetryPolicy] = None,
        credentials: Optional[CredentialStore] = None,
        on_auth_failure: Optional[AuthFailureListener] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.logger = logger
        self.config = Config()

        self.base_url = (base_url or self.config.api_base_url).rstrip('/')
        self.timeout = timeout if timeout is not None else self.config.api_timeout_ms / 1000
        self.retry_policy = retry_policy or RetryPolicy.from_config(self.config)
        self.credentials = credentials or CredentialStore()
        self.login_path = self.config.login_path

        self.interceptors = Interceptors()
        self.interceptors.request.use(self._inject_auth_token)

        self._auth_failure_listeners: list[AuthFailureListener] = []
        if on_auth_failure:
            self.add_auth_failure_listener(on_auth_failure)

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        self.logger.info(
            f"[ApiClient] Initialized: base_url={self.base_url}, timeout={self.timeout}s, "
            f"retries={self.retry_policy.max_retries}, retry_delay={self.retry_policy.base_delay}s"
        )

    def _get_client(self) -> httpx.AsyncClient:
        """httpx AsyncClient lazy 초기화"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(transport=self._transport)
        return self._client

    async def close(self):
        """클라이언트 종료"""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self.logger.info("[ApiClient] Client closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def add_auth_failure_listener(self, listener: AuthFailureListener) -> Callable[[], None]:
        """401/403 발생 시 호출될 리스너 등록 (해제 함수 반환)"""
        self._auth_failure_listeners.append(listener)

        def _remove():
            if listener in self._auth_failure_listeners:
                self._auth_failure_listeners.remove(listener)
        return _remove

    # ─────────────────────────────────────────────
    # Public Methods
    # ─────────────────────────────────────────────

    async def get(self, endpoint: str, **options) -> Any:
        return await self.request("GET", endpoint, **options)

    async def post(self, endpoint: str, body: Any = None, **options) -> Any:
        return await self.request("POST", endpoint, body=body, **options)

    async def put(self, endpoint: str, body: Any = None, **options) -> Any:
        return await self.request("PUT", endpoint, body=body, **options)

    async def patch(self, endpoint: str, body: Any = None, **options) -> Any:
        return await self.request("PATCH", endpoint, body=body, **options)

    async def delete(self, endpoint: str, **options) -> Any:
        return await self.request("DELETE", endpoint, **options)

    async def post_form_data(
        self,
        endpoint: str,
        files: dict,
        data: Optional[dict] = None,
        headers: Optional[dict] = None,
        **options
    ) -> Any:
        """
        multipart/form-data POST

        Content-Type은 httpx가 boundary와 함께 설정하므로 호출부 값은 제거합니다.
        """
        headers = {
            key: value for key, value in (headers or {}).items()
            if key.lower() != "content-type"
        }
        return await self.request(
            "POST", endpoint, files=files, data=data, headers=headers, **options
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        files: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> Any:
        """
        API 호출 (인터셉터 → 전송 → 분류 → 재시도)

        Returns:
            파싱된 JSON (204 또는 빈/비JSON 바디는 {})

        Raises:
            ApiError: 4xx, 5xx, 미분류 에러
            DatabaseConnectionError: 재시도 소진 후 연결성 에러
        """
        descriptor = self._build_descriptor(
            method, endpoint, body, headers, params, timeout, retries, files, data
        )
        descriptor = self._apply_request_interceptors(descriptor)

        policy = self.retry_policy
        if descriptor.retries != policy.max_retries:
            policy = policy.with_retries(max(descriptor.retries, 0))

        self.logger.debug(f"[ApiClient] API Request: {descriptor.method} {descriptor.url}")

        for attempt in range(policy.total_attempts):
            try:
                return await self._send(descriptor)

            except Exception as e:
                if not policy.should_retry(e, attempt):
                    final = self._finalize_error(e)
                    if final is e:
                        raise
                    raise final from e

                delay = policy.delay_for(attempt)
                self.logger.warning(
                    f"[ApiClient] {descriptor.method} {descriptor.url} failed: {e!r} "
                    f"(API Retry attempt {attempt + 1}/{policy.max_retries} after {delay * 1000:.0f}ms)"
                )
                await asyncio.sleep(delay)

    # ─────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────

    def _build_descriptor(
        self, method, endpoint, body, headers, params, timeout, retries, files, data
    ) -> RequestDescriptor:
        request_headers = {}
        # multipart는 httpx가 Content-Type(boundary 포함)을 설정
        if files is None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        return RequestDescriptor(
            method=method.upper(),
            url=f"{self.base_url}{endpoint}",
            headers=request_headers,
            body=body,
            files=files,
            data=data,
            params=params,
            timeout=timeout if timeout is not None else self.timeout,
            retries=retries if retries is not None else self.retry_policy.max_retries,
        )

    def _inject_auth_token(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        """저장된 토큰이 있으면 Authorization 헤더 추가"""
        token = self.credentials.get_token()
        if token and "Authorization" not in descriptor.headers:
            descriptor.headers["Authorization"] = f"Bearer {token}"
        return descriptor

    def _apply_request_interceptors(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        for interceptor in self.interceptors.request:
            try:
                result = interceptor(descriptor)
                if result is not None:
                    descriptor = result
            except Exception as e:
                self.logger.warning(f"[ApiClient] Request interceptor error: {e}")
        return descriptor

    async def _apply_response_interceptors(self, response: httpx.Response) -> httpx.Response:
        for interceptor in self.interceptors.response:
            try:
                result = interceptor(response)
                if inspect.isawaitable(result):
                    result = await result
                if result is not None:
                    response = result
            except Exception as e:
                self.logger.warning(f"[ApiClient] Response interceptor error: {e}")
        return response

    async def _send(self, descriptor: RequestDescriptor) -> Any:
        """1회 시도: 전송 + 응답 처리"""
        response = await self._fetch_with_timeout(descriptor)
        response = await self._apply_response_interceptors(response)

        self.logger.debug(
            f"[ApiClient] API Response: {response.status_code} {response.reason_phrase} "
            f"({descriptor.method} {descriptor.url})"
        )

        if not response.is_success:
            error = ApiError.from_response_body(
                response.status_code, self._parse_json(response), response.reason_phrase
            )

            if response.status_code in AUTH_STATUSES:
                self._handle_auth_failure(error)
                raise error

            for interceptor in self.interceptors.error:
                replacement = interceptor(error)
                if replacement is not None:
                    raise replacement

            raise error

        # 204 No Content (DELETE 등)
        if response.status_code == 204 or not response.content:
            return {}

        data = self._parse_json(response)
        if data is None:
            self.logger.warning(
                f"[ApiClient] Response could not be parsed as JSON: {descriptor.method} {descriptor.url}"
            )
            return {}
        return data

    async def _fetch_with_timeout(self, descriptor: RequestDescriptor) -> httpx.Response:
        """시도별 절대 타임아웃 (초과 시 요청 취소 후 TimeoutException)"""
        client = self._get_client()
        kwargs = {
            "headers": descriptor.headers,
            "params": descriptor.params,
            "timeout": httpx.Timeout(descriptor.timeout),
        }
        if descriptor.files is not None:
            kwargs["files"] = descriptor.files
            kwargs["data"] = descriptor.data
        elif descriptor.body is not None:
            kwargs["json"] = descriptor.body

        try:
            return await asyncio.wait_for(
                client.request(descriptor.method, descriptor.url, **kwargs),
                timeout=descriptor.timeout
            )
        except asyncio.TimeoutError:
            raise httpx.TimeoutException(
                f"ETIMEDOUT: request aborted after {descriptor.timeout}s"
            )

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _handle_auth_failure(self, error: ApiError):
        """인증 정보 삭제 후 리스너 통지 (로그인 화면 이동 등은 호스트 앱이 처리)"""
        self.credentials.clear()
        self.logger.warning(
            f"[ApiClient] Authentication/Authorization failed ({error.status}): {error.message}"
        )

        for listener in list(self._auth_failure_listeners):
            try:
                listener(error, self.login_path)
            except Exception as e:
                self.logger.error(f"[ApiClient] Auth failure listener error: {e}")

    def _finalize_error(self, error: Exception) -> ApiClientError:
        """재시도 종료 시 호출부에 전달할 에러 결정"""
        if isinstance(error, DatabaseConnectionError) or is_client_side(error):
            return error

        if is_connectivity_error(error):
            return DatabaseConnectionError(
                status=error.status if isinstance(error, ApiError) else None,
                original_error=error
            )

        if isinstance(error, ApiError):
            return error

        self.logger.error(f"[ApiClient] Unexpected error: {error!r}")
        return ApiError(str(error) or type(error).__name__, details={"type": type(error).__name__})
