"""
Maintenance Service

유지보수 요청 API 파사드.
- 요청 CRUD / 상태 변경
- 작업 로그
- 첨부파일 (multipart 업로드)
"""

from typing import Any, Optional, Union

from class_lib.api_client import endpoints
from class_lib.models import (
    MaintenanceAttachment,
    MaintenanceRequest,
    MaintenanceStatus,
    MaintenanceStatusHistory,
    MaintenanceWorkLog,
)
from class_lib.services.base import CrudService, parse_model, parse_model_list, to_payload


class MaintenanceService(CrudService[MaintenanceRequest]):
    endpoint = endpoints.MAINTENANCE
    model = MaintenanceRequest

    async def get_all(self, filters: Optional[dict] = None) -> list[MaintenanceRequest]:
        """필터 조회 (빈 값은 쿼리에서 제외)"""
        params = {
            key: value for key, value in (filters or {}).items()
            if value not in (None, "")
        }
        data = await self.client.get(self.endpoint, params=params or None)

        # 백엔드 응답: {maintenanceRequests: [...], pagination: {...}}
        if isinstance(data, dict):
            data = data.get("maintenanceRequests", [])
        return self._parse_list(data)

    async def create(self, data: Union[MaintenanceRequest, dict]) -> MaintenanceRequest:
        result = await self.client.post(self.endpoint, self._to_row(data))
        return self._parse(self._unwrap(result))

    async def update(self, id: str, data: Union[MaintenanceRequest, dict]) -> MaintenanceRequest:
        result = await self.client.put(f"{self.endpoint}/{id}", self._to_row(data))
        return self._parse(self._unwrap(result))

    async def update_status(
        self,
        id: str,
        status: MaintenanceStatus,
        reason: Optional[str] = None
    ) -> MaintenanceRequest:
        body = {"status": status}
        if reason:
            body["reason"] = reason
        result = await self.client.put(f"{self.endpoint}/{id}/status", body)
        return self._parse(self._unwrap(result))

    async def get_status_history(self, request_id: str) -> list[MaintenanceStatusHistory]:
        data = await self.client.get(f"{self.endpoint}/{request_id}/status-history")
        return parse_model_list(MaintenanceStatusHistory, self._unwrap(data, "statusHistory"))

    # ─────────────────────────────────────────────
    # Work Logs
    # ─────────────────────────────────────────────

    async def get_work_logs(self, request_id: str) -> list[MaintenanceWorkLog]:
        data = await self.client.get(f"{self.endpoint}/{request_id}/work-logs")
        return parse_model_list(MaintenanceWorkLog, self._unwrap(data, "workLogs"))

    async def add_work_log(
        self,
        request_id: str,
        description: str,
        entry_type: str = "note",
        title: Optional[str] = None,
        hours_worked: Optional[float] = None
    ) -> MaintenanceWorkLog:
        body = {
            "entry_type": entry_type,
            "title": title,
            "description": description,
            "hours_worked": hours_worked,
        }
        result = await self.client.post(
            f"{self.endpoint}/{request_id}/work-logs",
            {key: value for key, value in body.items() if value is not None}
        )
        # 백엔드 응답: {message, workLog}
        return parse_model(MaintenanceWorkLog, self._unwrap(result, "workLog"))

    # ─────────────────────────────────────────────
    # Attachments
    # ─────────────────────────────────────────────

    async def get_attachments(self, request_id: str) -> list[MaintenanceAttachment]:
        data = await self.client.get(f"{self.endpoint}/{request_id}/attachments")
        return parse_model_list(MaintenanceAttachment, data or [])

    async def upload_attachment(
        self,
        request_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        attachment_type: str = "Other",
        description: Optional[str] = None
    ) -> MaintenanceAttachment:
        form = {"attachment_type": attachment_type}
        if description:
            form["description"] = description

        result = await self.client.post_form_data(
            f"{self.endpoint}/{request_id}/attachments",
            files={"file": (filename, content, content_type)},
            data=form
        )
        return parse_model(MaintenanceAttachment, result)

    async def delete_attachment(self, request_id: str, attachment_id: str) -> dict:
        return await self.client.delete(
            f"{self.endpoint}/{request_id}/attachments/{attachment_id}"
        )

    async def get_stats(self) -> dict:
        return await self.client.get(f"{self.endpoint}/stats")

    # ─────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────

    @staticmethod
    def _to_row(data: Union[MaintenanceRequest, dict]) -> dict:
        """요청 바디는 DB 스키마(snake_case) 기준"""
        if isinstance(data, MaintenanceRequest):
            return data.model_dump(exclude_unset=True, mode="json")
        return to_payload(data)

    @staticmethod
    def _unwrap(result: Any, key: str = "maintenanceRequest") -> Any:
        # {message, <key>} 형태 응답 처리
        if isinstance(result, dict) and key in result:
            return result[key]
        return result
