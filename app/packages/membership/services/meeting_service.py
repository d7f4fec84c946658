"""会议与出勤业务逻辑。"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.membership.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from app.packages.membership.core.enums import MeetingTypeEnum
from app.packages.membership.core.exceptions import AppException
from app.packages.membership.core.logger import logger
from app.packages.membership.core.responses import create_response
from app.packages.membership.core.timezone import format_datetime, to_utc
from app.packages.membership.crud.meetings import attendance_crud, meeting_crud
from app.packages.membership.crud.members import member_crud
from app.packages.membership.crud.workgroups import workgroup_crud
from app.packages.membership.models.meeting import Attendance, Meeting

_TEXT_FIELDS = ("title", "location", "agenda", "minutes")


class MeetingService:
    """封装会议的增删改查。"""

    def list_meetings(
        self,
        db: Session,
        *,
        workgroup_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> dict[str, Any]:
        start, end = to_utc(start), to_utc(end)
        if start is not None and end is not None and start > end:
            raise AppException("开始时间不能晚于结束时间", HTTP_STATUS_BAD_REQUEST)
        items = meeting_crud.list_with_filters(db, workgroup_id=workgroup_id, start=start, end=end)
        return create_response("获取会议列表成功", [self._serialize(item) for item in items], HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, meeting_id: int) -> dict[str, Any]:
        meeting = self.get_or_404(db, meeting_id)
        return create_response("获取会议详情成功", self._serialize(meeting), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        self._ensure_workgroup(db, payload["workgroup_id"])
        values: Dict[str, Any] = {name: payload.get(name) for name in _TEXT_FIELDS}
        values.update(
            {
                "workgroup_id": payload["workgroup_id"],
                "date": to_utc(payload["date"]),
                "type": getattr(payload.get("type"), "value", payload.get("type")) or MeetingTypeEnum.PRESENTIAL.value,
            }
        )
        meeting = meeting_crud.create(db, values)
        logger.info("Created meeting %s for workgroup %s", meeting.id, meeting.workgroup_id)
        return create_response("创建会议成功", self._serialize(meeting), HTTP_STATUS_OK)

    def update(self, db: Session, *, meeting_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        meeting = self.get_or_404(db, meeting_id)

        if payload.get("workgroup_id") is not None:
            self._ensure_workgroup(db, payload["workgroup_id"])
            meeting.workgroup_id = payload["workgroup_id"]
        if payload.get("date") is not None:
            meeting.date = to_utc(payload["date"])
        if payload.get("type") is not None:
            meeting.type = getattr(payload["type"], "value", payload["type"])
        for name in _TEXT_FIELDS:
            if name in payload:
                setattr(meeting, name, payload[name])

        saved = meeting_crud.save(db, meeting)
        return create_response("更新会议成功", self._serialize(saved), HTTP_STATUS_OK)

    def delete(self, db: Session, *, meeting_id: int) -> dict[str, Any]:
        meeting = self.get_or_404(db, meeting_id)
        meeting_crud.remove(db, meeting)
        logger.info("Deleted meeting %s", meeting_id)
        return create_response("删除会议成功", {"id": meeting_id}, HTTP_STATUS_OK)

    def get_or_404(self, db: Session, meeting_id: int) -> Meeting:
        meeting = meeting_crud.get(db, meeting_id)
        if meeting is None:
            raise AppException("会议不存在", HTTP_STATUS_NOT_FOUND)
        return meeting

    @staticmethod
    def _ensure_workgroup(db: Session, workgroup_id: int) -> None:
        if workgroup_crud.get(db, workgroup_id) is None:
            raise AppException("工作组不存在", HTTP_STATUS_NOT_FOUND)

    @staticmethod
    def _serialize(meeting: Meeting) -> Dict[str, Any]:
        return {
            "id": meeting.id,
            "workgroup_id": meeting.workgroup_id,
            "date": format_datetime(meeting.date),
            "type": meeting.type,
            "title": meeting.title,
            "location": meeting.location,
            "agenda": meeting.agenda,
            "minutes": meeting.minutes,
        }


class AttendanceService:
    """封装出勤记录的维护，(member_id, meeting_id) 唯一。"""

    def list_attendances(
        self,
        db: Session,
        *,
        member_id: Optional[int] = None,
        meeting_id: Optional[int] = None,
    ) -> dict[str, Any]:
        items = attendance_crud.list_with_filters(db, member_id=member_id, meeting_id=meeting_id)
        return create_response("获取出勤记录成功", [self._serialize(item) for item in items], HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, member_id: int, meeting_id: int) -> dict[str, Any]:
        attendance = self._get_or_404(db, member_id, meeting_id)
        return create_response("获取出勤记录成功", self._serialize(attendance), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        member_id = payload["member_id"]
        meeting_id = payload["meeting_id"]
        if member_crud.get(db, member_id) is None:
            raise AppException("成员不存在", HTTP_STATUS_NOT_FOUND)
        if meeting_crud.get(db, meeting_id) is None:
            raise AppException("会议不存在", HTTP_STATUS_NOT_FOUND)
        if attendance_crud.get_by_key(db, member_id=member_id, meeting_id=meeting_id) is not None:
            raise AppException("出勤记录已存在", HTTP_STATUS_CONFLICT)

        try:
            attendance = attendance_crud.create(
                db,
                {
                    "member_id": member_id,
                    "meeting_id": meeting_id,
                    "present": payload.get("present", True),
                    "justification": payload.get("justification"),
                },
            )
        except IntegrityError as exc:
            db.rollback()
            raise AppException("出勤记录已存在", HTTP_STATUS_CONFLICT) from exc
        return create_response("创建出勤记录成功", self._serialize(attendance), HTTP_STATUS_OK)

    def update(self, db: Session, *, member_id: int, meeting_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        attendance = self._get_or_404(db, member_id, meeting_id)
        if payload.get("present") is not None:
            attendance.present = payload["present"]
        if "justification" in payload:
            attendance.justification = payload["justification"]
        saved = attendance_crud.save(db, attendance)
        return create_response("更新出勤记录成功", self._serialize(saved), HTTP_STATUS_OK)

    def delete(self, db: Session, *, member_id: int, meeting_id: int) -> dict[str, Any]:
        attendance = self._get_or_404(db, member_id, meeting_id)
        attendance_crud.remove(db, attendance)
        return create_response(
            "删除出勤记录成功", {"member_id": member_id, "meeting_id": meeting_id}, HTTP_STATUS_OK
        )

    @staticmethod
    def _get_or_404(db: Session, member_id: int, meeting_id: int) -> Attendance:
        attendance = attendance_crud.get_by_key(db, member_id=member_id, meeting_id=meeting_id)
        if attendance is None:
            raise AppException("出勤记录不存在", HTTP_STATUS_NOT_FOUND)
        return attendance

    @staticmethod
    def _serialize(attendance: Attendance) -> Dict[str, Any]:
        return {
            "member_id": attendance.member_id,
            "meeting_id": attendance.meeting_id,
            "present": attendance.present,
            "justification": attendance.justification,
            "member_name": attendance.member.name if attendance.member else None,
        }


meeting_service = MeetingService()
attendance_service = AttendanceService()
