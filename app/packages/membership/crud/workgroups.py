"""工作组 CRUD：管理工作组相关的数据库操作。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.membership.crud.base import CRUDBase
from app.packages.membership.models.workgroup import Workgroup


class CRUDWorkgroup(CRUDBase[Workgroup]):
    """提供工作组实体的便捷查询方法。"""

    def list_all(self, db: Session) -> list[Workgroup]:
        """获取全部未删除的工作组，按 id 排序，作为层级构建的输入快照。"""
        return self.query(db).order_by(Workgroup.id.asc()).all()

    def list_with_filters(
        self,
        db: Session,
        *,
        keyword: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Workgroup], int]:
        query = self.query(db)
        if keyword:
            trimmed = keyword.strip()
            if trimmed:
                query = query.filter(Workgroup.name.ilike(f"%{trimmed}%"))
        if status:
            query = query.filter(Workgroup.status == status)
        return self.paginate(query.order_by(Workgroup.id.asc()), skip=skip, limit=limit)

    def list_children(self, db: Session, parent_id: int) -> list[Workgroup]:
        return self.query(db).filter(Workgroup.parent_id == parent_id).order_by(Workgroup.id.asc()).all()

    def has_children(self, db: Session, parent_id: int) -> bool:
        return self.query(db).filter(Workgroup.parent_id == parent_id).first() is not None


workgroup_crud = CRUDWorkgroup(Workgroup)
