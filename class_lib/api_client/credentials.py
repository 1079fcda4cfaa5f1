"""
Credential Store

인증 토큰/사용자 정보를 메모리에 보관합니다.
ApiClient가 매 요청마다 읽고, 401/403 응답 시 비웁니다.
"""

from typing import Optional


class CredentialStore:
    TOKEN_KEY = "dashboard_auth_token"
    USER_KEY = "dashboard_user"

    def __init__(self):
        self._data: dict = {}

    def get_token(self) -> Optional[str]:
        return self._data.get(self.TOKEN_KEY)

    def set_token(self, token: str):
        self._data[self.TOKEN_KEY] = token

    def get_user(self) -> Optional[dict]:
        return self._data.get(self.USER_KEY)

    def set_user(self, user: Optional[dict]):
        self._data[self.USER_KEY] = user

    def clear(self):
        self._data.pop(self.TOKEN_KEY, None)
        self._data.pop(self.USER_KEY, None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.get_token())
