from class_lib.api_client import endpoints
from class_lib.models import Engineer
from class_lib.services.base import ReadService


class EngineerService(ReadService[Engineer]):
    """엔지니어 목록 (조회 전용)"""
    endpoint = endpoints.ENGINEERS
    model = Engineer
