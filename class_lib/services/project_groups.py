from class_lib.api_client import endpoints
from class_lib.models import ProjectGroup
from class_lib.services.base import CrudService


class ProjectGroupService(CrudService[ProjectGroup]):
    endpoint = endpoints.PROJECT_GROUPS
    model = ProjectGroup
