"""
Dashboard Models

백엔드 JSON 응답 모델.
camelCase(alias)와 snake_case(필드명) 모두 허용합니다.
"""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _to_str(value):
    # DB의 INTEGER id를 문자열로 정규화
    return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


IdStr = Annotated[str, BeforeValidator(_to_str)]


class DashboardModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict:
        """API 요청 바디 (alias 기준, 미설정 필드 제외)"""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class EngineerSummary(DashboardModel):
    id: IdStr
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    full_name: str = ""


# =============================================================================
# Core Models
# =============================================================================

class Engineer(DashboardModel):
    id: IdStr
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    full_name: str = ""
    initials: str = ""
    last_login: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProjectGroup(DashboardModel):
    id: IdStr
    name: str
    description: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Project(DashboardModel):
    id: IdStr
    name: str
    description: Optional[str] = None
    group_id: Optional[IdStr] = None
    repository_url: Optional[str] = None
    status: Optional[str] = None
    assigned_engineer_id: Optional[IdStr] = None
    assigned_engineer: Optional[EngineerSummary] = None
    project_group_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


DeploymentStatus = Literal["pending", "running", "completed", "failed"]


class Deployment(DashboardModel):
    id: IdStr
    name: str = ""
    project_id: Optional[IdStr] = None
    status: DeploymentStatus = "pending"
    deployed_at: Optional[str] = None
    engineer_id: Optional[IdStr] = None
    engineer: Optional[EngineerSummary] = None
    description: str = ""
    services: Optional[str] = None
    project_name: Optional[str] = None
    project_group_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# =============================================================================
# Maintenance
# =============================================================================

MaintenanceStatus = Literal["pending", "in_progress", "on_hold", "completed", "cancelled"]


class MaintenanceRequest(DashboardModel):
    id: IdStr
    request_number: Optional[str] = None
    client_name: str = ""
    client_email: str = ""
    client_phone: Optional[str] = None
    client_company: Optional[str] = None
    title: str = ""
    description: str = ""
    priority: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    requested_date: Optional[str] = None
    scheduled_date: Optional[str] = None
    completed_date: Optional[str] = None
    assigned_engineer_id: Optional[IdStr] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MaintenanceWorkLog(DashboardModel):
    id: IdStr
    request_id: Optional[IdStr] = None
    engineer_id: Optional[IdStr] = None
    entry_type: Optional[str] = None
    title: Optional[str] = None
    description: str = ""
    hours_worked: Optional[float] = None
    created_at: Optional[str] = None


class MaintenanceAttachment(DashboardModel):
    id: IdStr
    request_id: Optional[IdStr] = None
    file_name: str = ""
    original_filename: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    attachment_type: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None


class MaintenanceStatusHistory(DashboardModel):
    id: IdStr
    request_id: Optional[IdStr] = None
    old_status: Optional[str] = None
    new_status: Optional[str] = None
    changed_by_id: Optional[IdStr] = None
    changed_by_name: Optional[str] = None
    change_reason: Optional[str] = None
    changed_at: Optional[str] = None


# =============================================================================
# Auth
# =============================================================================

class User(DashboardModel):
    id: IdStr
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = "User"
    last_login: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AuthResponse(DashboardModel):
    token: Optional[str] = None
    user: Optional[User] = None
    message: Optional[str] = None
