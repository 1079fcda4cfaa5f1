from class_lib.api_client import endpoints
from class_lib.models import Deployment, DeploymentStatus
from class_lib.services.base import CrudService


class DeploymentService(CrudService[Deployment]):
    endpoint = endpoints.DEPLOYMENTS
    model = Deployment

    async def get_by_project(self, project_id: str) -> list[Deployment]:
        return await self.get_all(params={"projectId": project_id})

    async def get_by_engineer(self, engineer_id: str) -> list[Deployment]:
        return await self.get_all(params={"engineerId": engineer_id})

    async def get_by_status(self, status: DeploymentStatus) -> list[Deployment]:
        return await self.get_all(params={"status": status})
