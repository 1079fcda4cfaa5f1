"""
Auth Service

로그인/로그아웃/토큰 갱신. 성공 시 토큰과 사용자 정보를 CredentialStore에 저장합니다.
ApiClient가 저장된 토큰을 Authorization 헤더로 주입합니다.
"""

from class_lib.api_client import endpoints
from class_lib.api_client.client import ApiClient
from class_lib.api_client.errors import ApiClientError, ApiError, DatabaseConnectionError
from class_lib.models import AuthResponse, User
from class_lib.services.base import parse_model


AUTH_ERROR_MESSAGES = {
    400: "Please fill in all required fields correctly.",
    403: "Your account does not have permission to access this service.",
    404: "Authentication service is not available. Please try again later or contact support.",
    409: "A conflict occurred. Please try again.",
    429: "Too many login attempts. Please wait a few minutes before trying again.",
    500: "Server error occurred. Please try again later.",
    503: "Authentication service is temporarily unavailable. Please try again later.",
}


class AuthService:

    def __init__(self, client: ApiClient, logger):
        self.client = client
        self.credentials = client.credentials
        self.logger = logger

    async def login(self, email: str, password: str) -> AuthResponse:
        try:
            result = await self.client.post(
                endpoints.AUTH_LOGIN,
                {"email": email, "password": password},
                retries=0
            )
        except ApiClientError as e:
            raise self._friendly_error(e, "login") from e

        response = parse_model(AuthResponse, result)
        self._store(response)
        self.logger.info(f"[Auth] Logged in: {email}")
        return response

    async def logout(self):
        """서버 로그아웃 실패와 무관하게 로컬 인증 정보는 항상 삭제"""
        try:
            await self.client.post(endpoints.AUTH_LOGOUT, retries=0)
        except ApiClientError as e:
            self.logger.warning(f"[Auth] Server logout failed: {e}")
        finally:
            self.credentials.clear()
            self.logger.info("[Auth] Logged out")

    async def refresh_token(self) -> AuthResponse:
        try:
            result = await self.client.post(endpoints.AUTH_REFRESH, retries=0)
        except ApiClientError as e:
            self.credentials.clear()
            raise self._friendly_error(e, "token refresh") from e

        response = parse_model(AuthResponse, result)
        self._store(response)
        return response

    async def get_current_user(self) -> User:
        result = await self.client.get(endpoints.AUTH_ME)
        return parse_model(User, result)

    async def change_password(self, current_password: str, new_password: str):
        try:
            await self.client.post(
                endpoints.AUTH_CHANGE_PASSWORD,
                {"currentPassword": current_password, "newPassword": new_password},
                retries=0
            )
        except ApiClientError as e:
            raise self._friendly_error(e, "password change") from e

    @property
    def is_authenticated(self) -> bool:
        return self.credentials.is_authenticated

    # ─────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────

    def _store(self, response: AuthResponse):
        if response.token:
            self.credentials.set_token(response.token)
            self.credentials.set_user(
                response.user.model_dump(by_alias=True) if response.user else None
            )

    def _friendly_error(self, error: ApiClientError, operation: str) -> ApiClientError:
        """사용자용 메시지로 변환 (status/code/details는 유지)"""
        self.logger.error(f"[Auth] {operation} error: {error!r}")

        if isinstance(error, DatabaseConnectionError):
            return error

        if error.status == 401:
            message = (
                "Invalid email or password. Please check your credentials and try again."
                if operation == "login"
                else "Your session has expired. Please log in again."
            )
        elif error.status in AUTH_ERROR_MESSAGES:
            message = AUTH_ERROR_MESSAGES[error.status]
        else:
            message = error.message or f"An error occurred during {operation}. Please try again."

        return ApiError(
            message,
            status=error.status,
            code=getattr(error, "code", None),
            details=getattr(error, "details", None)
        )
