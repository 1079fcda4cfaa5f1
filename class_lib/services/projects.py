from class_lib.api_client import endpoints
from class_lib.models import Project
from class_lib.services.base import CrudService


class ProjectService(CrudService[Project]):
    endpoint = endpoints.PROJECTS
    model = Project

    async def get_by_group(self, group_id: str) -> list[Project]:
        return await self.get_all(params={"groupId": group_id})

    async def get_by_engineer(self, engineer_id: str) -> list[Project]:
        return await self.get_all(params={"engineerId": engineer_id})
