"""会议与出勤 CRUD。"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.packages.membership.crud.base import CRUDBase
from app.packages.membership.models.meeting import Attendance, Meeting


class CRUDMeeting(CRUDBase[Meeting]):

    def list_with_filters(
        self,
        db: Session,
        *,
        workgroup_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Meeting]:
        """按工作组与日期区间（闭区间）过滤会议，按日期排序。"""
        query = self.query(db)
        if workgroup_id is not None:
            query = query.filter(Meeting.workgroup_id == workgroup_id)
        if start is not None:
            query = query.filter(Meeting.date >= start)
        if end is not None:
            query = query.filter(Meeting.date <= end)
        return query.order_by(Meeting.date.asc(), Meeting.id.asc()).all()


class CRUDAttendance(CRUDBase[Attendance]):

    def get_by_key(self, db: Session, *, member_id: int, meeting_id: int) -> Optional[Attendance]:
        return self.get(db, member_id, meeting_id)

    def list_with_filters(
        self,
        db: Session,
        *,
        member_id: Optional[int] = None,
        meeting_id: Optional[int] = None,
    ) -> list[Attendance]:
        query = self.query(db)
        if member_id is not None:
            query = query.filter(Attendance.member_id == member_id)
        if meeting_id is not None:
            query = query.filter(Attendance.meeting_id == meeting_id)
        return query.order_by(Attendance.meeting_id.asc(), Attendance.member_id.asc()).all()


meeting_crud = CRUDMeeting(Meeting)
attendance_crud = CRUDAttendance(Attendance)
