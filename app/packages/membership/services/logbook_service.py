"""工作组日志条目业务逻辑。"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.packages.membership.core.constants import HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.membership.core.enums import LogbookEntryStatusEnum, LogbookEntryTypeEnum
from app.packages.membership.core.exceptions import AppException
from app.packages.membership.core.responses import create_response
from app.packages.membership.core.timezone import format_datetime, now as tz_now, to_utc
from app.packages.membership.crud.logbook_entries import logbook_entry_crud
from app.packages.membership.crud.workgroups import workgroup_crud
from app.packages.membership.models.logbook import LogbookEntry


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class LogbookService:

    def list_entries(
        self,
        db: Session,
        *,
        workgroup_id: Optional[int] = None,
        status: Optional[str] = None,
        entry_type: Optional[str] = None,
    ) -> dict[str, Any]:
        items = logbook_entry_crud.list_with_filters(
            db,
            workgroup_id=workgroup_id,
            status=_enum_value(status),
            entry_type=_enum_value(entry_type),
        )
        return create_response("获取日志条目成功", [self._serialize(item) for item in items], HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, entry_id: int) -> dict[str, Any]:
        entry = self._get_or_404(db, entry_id)
        return create_response("获取日志条目成功", self._serialize(entry), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        if workgroup_crud.get(db, payload["workgroup_id"]) is None:
            raise AppException("工作组不存在", HTTP_STATUS_NOT_FOUND)
        entry = logbook_entry_crud.create(
            db,
            {
                "workgroup_id": payload["workgroup_id"],
                "description": payload["description"],
                "date": to_utc(payload.get("date")) or to_utc(tz_now()),
                "type": _enum_value(payload.get("type")) or LogbookEntryTypeEnum.DOCUMENTATION.value,
                "status": _enum_value(payload.get("status")) or LogbookEntryStatusEnum.ACTIVE.value,
            },
        )
        return create_response("创建日志条目成功", self._serialize(entry), HTTP_STATUS_OK)

    def update(self, db: Session, *, entry_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        entry = self._get_or_404(db, entry_id)
        if payload.get("description") is not None:
            entry.description = payload["description"]
        if payload.get("date") is not None:
            entry.date = to_utc(payload["date"])
        if payload.get("type") is not None:
            entry.type = _enum_value(payload["type"])
        if payload.get("status") is not None:
            entry.status = _enum_value(payload["status"])
        saved = logbook_entry_crud.save(db, entry)
        return create_response("更新日志条目成功", self._serialize(saved), HTTP_STATUS_OK)

    def delete(self, db: Session, *, entry_id: int) -> dict[str, Any]:
        entry = self._get_or_404(db, entry_id)
        logbook_entry_crud.remove(db, entry)
        return create_response("删除日志条目成功", {"id": entry_id}, HTTP_STATUS_OK)

    @staticmethod
    def _get_or_404(db: Session, entry_id: int) -> LogbookEntry:
        entry = logbook_entry_crud.get(db, entry_id)
        if entry is None:
            raise AppException("日志条目不存在", HTTP_STATUS_NOT_FOUND)
        return entry

    @staticmethod
    def _serialize(entry: LogbookEntry) -> Dict[str, Any]:
        return {
            "id": entry.id,
            "workgroup_id": entry.workgroup_id,
            "date": format_datetime(entry.date),
            "description": entry.description,
            "type": entry.type,
            "status": entry.status,
        }


logbook_service = LogbookService()
