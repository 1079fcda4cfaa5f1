"""
Service Base

도메인 서비스 공통 CRUD (고정 엔드포인트 + 응답 모델 변환)
"""

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import ValidationError

from class_lib.api_client.client import ApiClient
from class_lib.api_client.errors import ApiError
from class_lib.models import DashboardModel

M = TypeVar("M", bound=DashboardModel)


def to_payload(data: Union[DashboardModel, dict, None]) -> Optional[dict]:
    if isinstance(data, DashboardModel):
        return data.to_payload()
    return data


def parse_model(model: type[M], data: Any) -> M:
    """응답 → 모델 (검증 실패는 ApiError)"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ApiError(
            f"Invalid {model.__name__} response",
            details={"errors": e.errors(include_url=False)}
        ) from e


def parse_model_list(model: type[M], data: Any) -> list[M]:
    if not isinstance(data, list):
        raise ApiError(
            f"Expected a list of {model.__name__}",
            details={"response": data}
        )
    return [parse_model(model, item) for item in data]


class ReadService(Generic[M]):
    """getAll / getById"""

    endpoint: str = ""
    model: type[M]

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self, params: Optional[dict] = None) -> list[M]:
        data = await self.client.get(self.endpoint, params=params)
        return self._parse_list(data)

    async def get_by_id(self, id: str) -> M:
        data = await self.client.get(f"{self.endpoint}/{id}")
        return self._parse(data)

    # ─────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────

    def _parse(self, data: Any) -> M:
        return parse_model(self.model, data)

    def _parse_list(self, data: Any) -> list[M]:
        return parse_model_list(self.model, data)


class CrudService(ReadService[M]):
    """getAll / getById / create / update / delete"""

    async def create(self, data: Union[M, dict]) -> M:
        result = await self.client.post(self.endpoint, to_payload(data))
        return self._parse(result)

    async def update(self, id: str, data: Union[M, dict]) -> M:
        result = await self.client.put(f"{self.endpoint}/{id}", to_payload(data))
        return self._parse(result)

    async def delete(self, id: str) -> dict:
        return await self.client.delete(f"{self.endpoint}/{id}")
