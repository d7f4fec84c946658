"""成员 CRUD。"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.packages.membership.crud.base import CRUDBase
from app.packages.membership.models.member import Member


class CRUDMember(CRUDBase[Member]):
    """提供成员实体的便捷查询方法。"""

    def get_by_email(self, db: Session, email: str) -> Optional[Member]:
        """按邮箱（不区分大小写）检索未删除的成员。"""
        return self.query(db).filter(func.lower(Member.email) == email.lower()).first()

    def list_with_filters(
        self,
        db: Session,
        *,
        keyword: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Member], int]:
        """按照关键字（匹配姓名、姓氏或邮箱）与状态过滤成员。"""
        query = self.query(db)
        if keyword:
            trimmed = keyword.strip()
            if trimmed:
                pattern = f"%{trimmed}%"
                query = query.filter(
                    or_(
                        Member.name.ilike(pattern),
                        Member.surname.ilike(pattern),
                        Member.email.ilike(pattern),
                    )
                )
        if status:
            query = query.filter(Member.status == status)
        return self.paginate(query.order_by(Member.id.asc()), skip=skip, limit=limit)


member_crud = CRUDMember(Member)
