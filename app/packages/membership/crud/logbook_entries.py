"""工作组日志条目 CRUD。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.membership.crud.base import CRUDBase
from app.packages.membership.models.logbook import LogbookEntry


class CRUDLogbookEntry(CRUDBase[LogbookEntry]):

    def list_with_filters(
        self,
        db: Session,
        *,
        workgroup_id: Optional[int] = None,
        status: Optional[str] = None,
        entry_type: Optional[str] = None,
    ) -> list[LogbookEntry]:
        """按工作组、状态与类型过滤，最新的条目在前。"""
        query = self.query(db)
        if workgroup_id is not None:
            query = query.filter(LogbookEntry.workgroup_id == workgroup_id)
        if status:
            query = query.filter(LogbookEntry.status == status)
        if entry_type:
            query = query.filter(LogbookEntry.type == entry_type)
        return query.order_by(LogbookEntry.date.desc(), LogbookEntry.id.desc()).all()


logbook_entry_crud = CRUDLogbookEntry(LogbookEntry)
