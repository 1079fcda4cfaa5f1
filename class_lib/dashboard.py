"""
Dashboard 파사드

ApiClient + 도메인 서비스 + Store를 하나로 묶는 진입점.
서비스 호출 결과를 Store에 반영합니다.

사용법:
    from class_lib.dashboard import Dashboard
    from class_config.class_log import ConfigLogger

    logger = ConfigLogger('dashboard_log', 30).get_logger('dashboard')
    dashboard = Dashboard(logger)

    await dashboard.fetch_projects()
    print(dashboard.state.projects)
"""

from typing import Optional

from class_lib.api_client.client import ApiClient
from class_lib.api_client.errors import ApiClientError, DatabaseConnectionError
from class_lib.services.auth import AuthService
from class_lib.services.deployments import DeploymentService
from class_lib.services.engineers import EngineerService
from class_lib.services.maintenance import MaintenanceService
from class_lib.services.project_groups import ProjectGroupService
from class_lib.services.projects import ProjectService
from class_lib.services.users import UserService
from class_lib.store.reducer import Action, AppState, Store


class Dashboard:
    """Dashboard 파사드 (데이터 조회 + 상태 반영)"""

    def __init__(self, logger, client: Optional[ApiClient] = None, store: Optional[Store] = None):
        self.logger = logger
        self.client = client or ApiClient(logger)
        self.store = store or Store()

        self.auth = AuthService(self.client, logger)
        self.projects = ProjectService(self.client)
        self.deployments = DeploymentService(self.client)
        self.project_groups = ProjectGroupService(self.client)
        self.engineers = EngineerService(self.client)
        self.maintenance = MaintenanceService(self.client)
        self.users = UserService(self.client)

        self.logger.info("[Dashboard] Initialized")

    @property
    def state(self) -> AppState:
        return self.store.state

    # ─────────────────────────────────────────────
    # Fetch
    # ─────────────────────────────────────────────

    async def fetch_projects(self):
        await self._fetch("projects", self.projects, "SET_PROJECTS")

    async def fetch_deployments(self):
        await self._fetch("deployments", self.deployments, "SET_DEPLOYMENTS")

    async def fetch_project_groups(self):
        await self._fetch("project_groups", self.project_groups, "SET_PROJECT_GROUPS")

    async def fetch_engineers(self):
        await self._fetch("engineers", self.engineers, "SET_ENGINEERS")

    # ─────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────

    async def create_project(self, data):
        project = await self.projects.create(data)
        self.store.dispatch(Action("ADD_PROJECT", project))
        return project

    async def update_project(self, id: str, data):
        project = await self.projects.update(id, data)
        self.store.dispatch(Action("UPDATE_PROJECT", project))
        return project

    async def delete_project(self, id: str):
        await self.projects.delete(id)
        self.store.dispatch(Action("DELETE_PROJECT", id))

    async def create_deployment(self, data):
        deployment = await self.deployments.create(data)
        self.store.dispatch(Action("ADD_DEPLOYMENT", deployment))
        return deployment

    async def update_deployment(self, id: str, data):
        deployment = await self.deployments.update(id, data)
        self.store.dispatch(Action("UPDATE_DEPLOYMENT", deployment))
        return deployment

    async def delete_deployment(self, id: str):
        await self.deployments.delete(id)
        self.store.dispatch(Action("DELETE_DEPLOYMENT", id))

    async def create_project_group(self, data):
        group = await self.project_groups.create(data)
        self.store.dispatch(Action("ADD_PROJECT_GROUP", group))
        return group

    async def update_project_group(self, id: str, data):
        group = await self.project_groups.update(id, data)
        self.store.dispatch(Action("UPDATE_PROJECT_GROUP", group))
        return group

    async def delete_project_group(self, id: str):
        await self.project_groups.delete(id)
        self.store.dispatch(Action("DELETE_PROJECT_GROUP", id))

    # ─────────────────────────────────────────────
    # Selectors
    # ─────────────────────────────────────────────

    def projects_by_group(self, group_id: str) -> list:
        return [p for p in self.state.projects if p.group_id == group_id]

    def deployments_by_project(self, project_id: str) -> list:
        return [d for d in self.state.deployments if d.project_id == project_id]

    async def close(self):
        """리소스 정리"""
        await self.client.close()
        self.logger.info("[Dashboard] Closed")

    # ─────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────

    async def _fetch(self, key: str, service, action_type: str):
        """
        목록 조회 → Store 반영

        - 연결성 에러: 로딩 해제 후 재전달 (서비스 불가 화면 처리용)
        - 그 외 에러: error[key]에 메시지 저장
        """
        self.store.dispatch(Action("SET_LOADING", {"key": key, "loading": True}))
        self.store.dispatch(Action("SET_ERROR", {"key": key, "error": None}))

        try:
            items = await service.get_all()

        except DatabaseConnectionError:
            self.store.dispatch(Action("SET_LOADING", {"key": key, "loading": False}))
            raise

        except ApiClientError as e:
            self.logger.warning(f"[Dashboard] fetch {key} failed: {e}")
            self.store.dispatch(Action("SET_ERROR", {"key": key, "error": e.message}))
            self.store.dispatch(Action("SET_LOADING", {"key": key, "loading": False}))
            return

        self.store.dispatch(Action(action_type, items))
        self.logger.info(f"[Dashboard] Fetched {len(items)} {key}")
