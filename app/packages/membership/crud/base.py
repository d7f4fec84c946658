"""CRUD 基类：封装各实体共用的查询、分页与持久化逻辑。"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.orm import Query, Session

from app.packages.membership.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """按模型是否带 ``is_deleted`` 字段自动区分软删除与物理删除。"""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "is_deleted")

    def query(self, db: Session, *, include_deleted: bool = False) -> Query:
        query = db.query(self.model)
        if self.soft_deletable and not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def get(self, db: Session, *pk: Any) -> Optional[ModelType]:
        """按主键读取；联合主键按列定义顺序传入，已软删除的行视为不存在。"""
        identity = pk[0] if len(pk) == 1 else tuple(pk)
        obj = db.get(self.model, identity)
        if obj is not None and self.soft_deletable and obj.is_deleted:
            return None
        return obj

    @staticmethod
    def paginate(query: Query, *, skip: int = 0, limit: int = 100) -> Tuple[List[Any], int]:
        """返回当前页数据与过滤后的总数，调用方负责排序。"""
        total = query.count()
        return query.offset(skip).limit(limit).all(), total

    def create(self, db: Session, values: Dict[str, Any]) -> ModelType:
        return self.save(db, self.model(**values))

    def save(self, db: Session, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, db_obj: ModelType) -> None:
        """软删除实体仅打标记，关联记录（成员关系、出勤）直接删除行。"""
        if self.soft_deletable:
            db_obj.is_deleted = True
            db.add(db_obj)
        else:
            db.delete(db_obj)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
