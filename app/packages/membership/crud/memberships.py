"""成员关系 CRUD：联合主键 (member_id, workgroup_id, start_date)。"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.packages.membership.crud.base import CRUDBase
from app.packages.membership.models.membership import Membership


class CRUDMembership(CRUDBase[Membership]):

    def get_by_key(
        self, db: Session, *, member_id: int, workgroup_id: int, start_date: datetime
    ) -> Optional[Membership]:
        return self.get(db, member_id, workgroup_id, start_date)

    def list_with_filters(
        self,
        db: Session,
        *,
        member_id: Optional[int] = None,
        workgroup_id: Optional[int] = None,
        active_at: Optional[datetime] = None,
    ) -> list[Membership]:
        """按成员、工作组过滤；传入 ``active_at`` 时仅返回该时刻仍有效的记录。"""
        query = self.query(db)
        if member_id is not None:
            query = query.filter(Membership.member_id == member_id)
        if workgroup_id is not None:
            query = query.filter(Membership.workgroup_id == workgroup_id)
        if active_at is not None:
            query = query.filter(
                Membership.start_date <= active_at,
                or_(Membership.end_date.is_(None), Membership.end_date > active_at),
            )
        return query.order_by(
            Membership.member_id.asc(), Membership.workgroup_id.asc(), Membership.start_date.asc()
        ).all()


membership_crud = CRUDMembership(Membership)
