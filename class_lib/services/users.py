"""
User Service

사용자 관리 API 파사드 (관리자 전용).
백엔드는 목록을 {users, total}, 생성/수정 결과를 {message, user}로 감쌉니다.
"""

from typing import Any, Optional, Union

from class_lib.api_client import endpoints
from class_lib.models import User
from class_lib.services.base import CrudService, to_payload


class UserService(CrudService[User]):
    endpoint = endpoints.USERS
    model = User

    async def get_all(self, params: Optional[dict] = None) -> list[User]:
        data = await self.client.get(self.endpoint, params=params)
        return self._parse_list(self._unwrap(data, "users"))

    async def create(self, data: Union[User, dict]) -> User:
        result = await self.client.post(self.endpoint, to_payload(data))
        return self._parse(self._unwrap(result, "user"))

    async def update(self, id: str, data: Union[User, dict]) -> User:
        result = await self.client.put(f"{self.endpoint}/{id}", to_payload(data))
        return self._parse(self._unwrap(result, "user"))

    async def change_password(self, id: str, new_password: str, confirm_password: str) -> dict:
        return await self.client.put(
            f"{self.endpoint}/{id}/password",
            {"newPassword": new_password, "confirmPassword": confirm_password}
        )

    async def get_stats(self) -> dict:
        return await self.client.get(f"{self.endpoint}/stats")

    @staticmethod
    def _unwrap(result: Any, key: str) -> Any:
        if isinstance(result, dict) and key in result:
            return result[key]
        return result
