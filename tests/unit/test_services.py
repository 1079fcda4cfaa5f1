"""도메인 서비스 파사드 단위 테스트 (엔드포인트 + HTTP 메서드)"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from class_lib.api_client.errors import ApiError, DatabaseConnectionError
from class_lib.models import Deployment, Engineer, MaintenanceRequest, Project, ProjectGroup, User
from class_lib.services.deployments import DeploymentService
from class_lib.services.engineers import EngineerService
from class_lib.services.maintenance import MaintenanceService
from class_lib.services.project_groups import ProjectGroupService
from class_lib.services.projects import ProjectService
from class_lib.services.users import UserService


@pytest.fixture
def api():
    """ApiClient Mock"""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock(return_value={})
    client.post_form_data = AsyncMock()
    return client


class TestProjectService:
    """ProjectService"""

    @pytest.mark.asyncio
    async def test_get_all_returns_models(self, make_client, json_handler, project_rows):
        """GET /projects 200 → list[Project]"""
        client = make_client(json_handler(200, project_rows))
        service = ProjectService(client)

        projects = await service.get_all()

        assert len(projects) == 1
        assert isinstance(projects[0], Project)
        assert projects[0].id == "1"
        assert projects[0].name == "X"
        assert projects[0].group_id == "g1"
        assert str(client.calls[0].url) == "https://api.example.com/projects"

    @pytest.mark.asyncio
    async def test_get_by_id(self, api):
        api.get.return_value = {"id": 7, "name": "Seven"}

        project = await ProjectService(api).get_by_id("7")

        api.get.assert_awaited_once_with("/projects/7")
        assert project.id == "7"

    @pytest.mark.asyncio
    async def test_create_with_model_uses_camel_case(self, make_client, json_handler):
        client = make_client(json_handler(201, {"id": "9", "name": "New", "groupId": "g1"}))

        project = await ProjectService(client).create(
            Project(id="tmp", name="New", group_id="g1")
        )

        body = json.loads(client.calls[0].content)
        assert client.calls[0].method == "POST"
        assert body == {"id": "tmp", "name": "New", "groupId": "g1"}
        assert project.id == "9"

    @pytest.mark.asyncio
    async def test_update(self, api):
        api.put.return_value = {"id": "1", "name": "Renamed"}

        project = await ProjectService(api).update("1", {"name": "Renamed"})

        api.put.assert_awaited_once_with("/projects/1", {"name": "Renamed"})
        assert project.name == "Renamed"

    @pytest.mark.asyncio
    async def test_delete(self, api):
        result = await ProjectService(api).delete("1")

        api.delete.assert_awaited_once_with("/projects/1")
        assert result == {}

    @pytest.mark.asyncio
    async def test_get_by_group(self, make_client, json_handler):
        client = make_client(json_handler(200, []))

        await ProjectService(client).get_by_group("g1")

        assert client.calls[0].url.params["groupId"] == "g1"

    @pytest.mark.asyncio
    async def test_get_by_engineer(self, api):
        api.get.return_value = []

        await ProjectService(api).get_by_engineer("e1")

        api.get.assert_awaited_once_with("/projects", params={"engineerId": "e1"})

    @pytest.mark.asyncio
    async def test_errors_propagate_unchanged(self, api):
        error = DatabaseConnectionError(status=500)
        api.get.side_effect = error

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await ProjectService(api).get_all()

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_invalid_payload(self, api):
        """목록이 아닌 응답 → ApiError"""
        api.get.return_value = {}

        with pytest.raises(ApiError):
            await ProjectService(api).get_all()

    @pytest.mark.asyncio
    async def test_invalid_item(self, api):
        """필수 필드 누락 → ApiError"""
        api.get.return_value = {"id": "1"}

        with pytest.raises(ApiError) as exc_info:
            await ProjectService(api).get_by_id("1")

        assert "errors" in exc_info.value.details


class TestDeploymentService:
    """DeploymentService"""

    @pytest.mark.asyncio
    async def test_delete_204(self, make_client, json_handler):
        """DELETE /deployments/42 204 → {}"""
        client = make_client(json_handler(204))

        result = await DeploymentService(client).delete("42")

        assert result == {}
        assert client.calls[0].method == "DELETE"
        assert client.calls[0].url.path == "/deployments/42"

    @pytest.mark.asyncio
    async def test_get_all(self, api, deployment_rows):
        api.get.return_value = deployment_rows

        deployments = await DeploymentService(api).get_all()

        assert [d.id for d in deployments] == ["41", "42"]
        assert all(isinstance(d, Deployment) for d in deployments)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, arg, param", [
        ("get_by_project", "p1", {"projectId": "p1"}),
        ("get_by_engineer", "e1", {"engineerId": "e1"}),
        ("get_by_status", "failed", {"status": "failed"}),
    ])
    async def test_filters(self, api, method, arg, param):
        api.get.return_value = []

        await getattr(DeploymentService(api), method)(arg)

        api.get.assert_awaited_once_with("/deployments", params=param)

    @pytest.mark.asyncio
    async def test_create(self, api):
        api.post.return_value = {"id": "50", "projectId": "1", "status": "pending"}

        deployment = await DeploymentService(api).create({"projectId": "1"})

        api.post.assert_awaited_once_with("/deployments", {"projectId": "1"})
        assert deployment.status == "pending"


class TestProjectGroupService:
    """ProjectGroupService"""

    @pytest.mark.asyncio
    async def test_crud_endpoints(self, api):
        api.get.return_value = [{"id": "g1", "name": "Core"}]
        api.post.return_value = {"id": "g2", "name": "Edge"}
        api.put.return_value = {"id": "g2", "name": "Edge+"}
        service = ProjectGroupService(api)

        groups = await service.get_all()
        created = await service.create({"name": "Edge"})
        updated = await service.update("g2", {"name": "Edge+"})
        await service.delete("g2")

        assert isinstance(groups[0], ProjectGroup)
        api.post.assert_awaited_once_with("/project-groups", {"name": "Edge"})
        api.put.assert_awaited_once_with("/project-groups/g2", {"name": "Edge+"})
        api.delete.assert_awaited_once_with("/project-groups/g2")
        assert created.id == "g2"
        assert updated.name == "Edge+"


class TestEngineerService:
    """EngineerService (조회 전용)"""

    @pytest.mark.asyncio
    async def test_get_all(self, api):
        api.get.return_value = [{"id": 3, "email": "e@x.io", "firstName": "Ada", "fullName": "Ada L"}]

        engineers = await EngineerService(api).get_all()

        api.get.assert_awaited_once_with("/engineers", params=None)
        assert isinstance(engineers[0], Engineer)
        assert engineers[0].id == "3"
        assert engineers[0].first_name == "Ada"

    def test_read_only(self, api):
        assert not hasattr(EngineerService(api), "delete")


class TestMaintenanceService:
    """MaintenanceService"""

    @pytest.mark.asyncio
    async def test_get_all_unwraps_and_filters(self, api):
        """빈 필터 제외 + maintenanceRequests 추출 + snake_case row"""
        api.get.return_value = {
            "maintenanceRequests": [
                {"id": 1, "request_number": "MR-1", "client_name": "ACME", "status": "pending"}
            ],
            "pagination": {"page": 1},
        }

        requests = await MaintenanceService(api).get_all({"status": "pending", "search": "", "priority": None})

        api.get.assert_awaited_once_with("/admin/maintenance", params={"status": "pending"})
        assert isinstance(requests[0], MaintenanceRequest)
        assert requests[0].id == "1"
        assert requests[0].request_number == "MR-1"
        assert requests[0].client_name == "ACME"

    @pytest.mark.asyncio
    async def test_create_unwraps_response(self, api):
        api.post.return_value = {"message": "created", "maintenanceRequest": {"id": "5", "title": "Disk full"}}

        created = await MaintenanceService(api).create({"title": "Disk full"})

        assert created.id == "5"
        assert created.title == "Disk full"

    @pytest.mark.asyncio
    async def test_update_status(self, api):
        api.put.return_value = {"maintenanceRequest": {"id": "5", "status": "completed"}}

        updated = await MaintenanceService(api).update_status("5", "completed", reason="fixed")

        api.put.assert_awaited_once_with(
            "/admin/maintenance/5/status", {"status": "completed", "reason": "fixed"}
        )
        assert updated.status == "completed"

    @pytest.mark.asyncio
    async def test_work_logs(self, api):
        api.get.return_value = {"workLogs": [{"id": 1, "description": "rebooted", "hours_worked": 0.5}]}
        api.post.return_value = {"id": 2, "description": "patched"}
        service = MaintenanceService(api)

        logs = await service.get_work_logs("5")
        added = await service.add_work_log("5", "patched", hours_worked=1.5)

        assert logs[0].hours_worked == 0.5
        api.post.assert_awaited_once_with(
            "/admin/maintenance/5/work-logs",
            {"entry_type": "note", "description": "patched", "hours_worked": 1.5}
        )
        assert added.id == "2"

    @pytest.mark.asyncio
    async def test_upload_attachment_uses_form_data(self, api):
        api.post_form_data.return_value = {"id": "a1", "fileName": "log.txt"}

        attachment = await MaintenanceService(api).upload_attachment("5", "log.txt", b"data", "text/plain")

        call = api.post_form_data.call_args
        assert call.args[0] == "/admin/maintenance/5/attachments"
        assert call.kwargs["files"] == {"file": ("log.txt", b"data", "text/plain")}
        assert call.kwargs["data"] == {"attachment_type": "Other"}
        assert attachment.file_name == "log.txt"

    @pytest.mark.asyncio
    async def test_upload_attachment_multipart_fields(self, make_client, json_handler):
        """multipart 바디에 attachment_type / description 포함"""
        client = make_client(json_handler(201, {"id": 3, "original_filename": "shot.png"}))

        attachment = await MaintenanceService(client).upload_attachment(
            "5", "shot.png", b"\x89PNG", "image/png", attachment_type="Screenshot", description="error page"
        )

        body = client.calls[0].content
        assert b'name="attachment_type"' in body
        assert b"Screenshot" in body
        assert b'name="description"' in body
        assert client.calls[0].headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert attachment.original_filename == "shot.png"

    @pytest.mark.asyncio
    async def test_add_work_log_enveloped_response(self, make_client, json_handler):
        """{message, workLog} 응답 → workLog 추출"""
        client = make_client(json_handler(201, {
            "message": "Work log added",
            "workLog": {"id": 7, "request_id": 5, "description": "patched", "hours_worked": 2},
        }))

        added = await MaintenanceService(client).add_work_log("5", "patched", hours_worked=2)

        assert added.id == "7"
        assert added.request_id == "5"
        assert added.hours_worked == 2.0

    @pytest.mark.asyncio
    async def test_work_log_empty_response(self, make_client, json_handler):
        """204 빈 응답 → ApiError"""
        client = make_client(json_handler(204))

        with pytest.raises(ApiError):
            await MaintenanceService(client).add_work_log("5", "patched")

    @pytest.mark.asyncio
    async def test_invalid_attachments_payload(self, api):
        api.get.return_value = [{"file_name": "no-id.txt"}]

        with pytest.raises(ApiError) as exc_info:
            await MaintenanceService(api).get_attachments("5")

        assert "errors" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_status_history(self, api):
        """statusHistory 추출"""
        api.get.return_value = {"statusHistory": [
            {"id": 1, "request_id": 5, "old_status": "pending", "new_status": "in_progress",
             "changed_by_id": 3, "change_reason": "picked up", "changed_at": "2024-03-01T10:00:00Z"},
        ]}

        history = await MaintenanceService(api).get_status_history("5")

        api.get.assert_awaited_once_with("/admin/maintenance/5/status-history")
        assert history[0].id == "1"
        assert history[0].new_status == "in_progress"
        assert history[0].changed_by_id == "3"

    @pytest.mark.asyncio
    async def test_delete_attachment(self, api):
        await MaintenanceService(api).delete_attachment("5", "a1")
        api.delete.assert_awaited_once_with("/admin/maintenance/5/attachments/a1")


class TestUserService:
    """UserService (관리자 사용자 관리)"""

    @pytest.mark.asyncio
    async def test_get_all_unwraps_users(self, api):
        api.get.return_value = {"users": [{"id": 1, "username": "ada", "first_name": "Ada"}], "total": 1}

        users = await UserService(api).get_all()

        api.get.assert_awaited_once_with("/users", params=None)
        assert isinstance(users[0], User)
        assert users[0].id == "1"
        assert users[0].first_name == "Ada"

    @pytest.mark.asyncio
    async def test_get_all_missing_users(self, api):
        """users 키 없는 응답 → ApiError"""
        api.get.return_value = {"total": 0}

        with pytest.raises(ApiError):
            await UserService(api).get_all()

    @pytest.mark.asyncio
    async def test_create_and_update_unwrap_user(self, api):
        api.post.return_value = {"message": "created", "user": {"id": 9, "email": "new@x.io"}}
        api.put.return_value = {"message": "updated", "user": {"id": 9, "role": "Manager"}}
        service = UserService(api)

        created = await service.create({"email": "new@x.io", "password": "pw"})
        updated = await service.update("9", {"role": "Manager"})

        api.post.assert_awaited_once_with("/users", {"email": "new@x.io", "password": "pw"})
        api.put.assert_awaited_once_with("/users/9", {"role": "Manager"})
        assert created.id == "9"
        assert updated.role == "Manager"

    @pytest.mark.asyncio
    async def test_get_by_id_and_delete(self, api):
        api.get.return_value = {"id": 4, "username": "bo"}
        service = UserService(api)

        user = await service.get_by_id("4")
        await service.delete("4")

        api.get.assert_awaited_once_with("/users/4")
        api.delete.assert_awaited_once_with("/users/4")
        assert user.username == "bo"

    @pytest.mark.asyncio
    async def test_change_password(self, make_client, json_handler):
        client = make_client(json_handler(200, {"message": "ok"}))

        await UserService(client).change_password("4", "n3w", "n3w")

        assert client.calls[0].method == "PUT"
        assert client.calls[0].url.path == "/users/4/password"
        assert json.loads(client.calls[0].content) == {"newPassword": "n3w", "confirmPassword": "n3w"}

    @pytest.mark.asyncio
    async def test_get_stats(self, api):
        api.get.return_value = {"totalUsers": 3, "adminCount": 1}

        stats = await UserService(api).get_stats()

        api.get.assert_awaited_once_with("/users/stats")
        assert stats["totalUsers"] == 3
