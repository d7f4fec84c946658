"""声明式基类与审计字段。

- ``Base``：带命名约定，``datetime`` 注解默认映射为带时区的 ``DateTime``；
- ``TimestampMixin``：记录行的创建与更新时间；
- ``SoftDeleteMixin``：自增主键实体（工作组、成员、会议、日志条目）使用的删除标记。
  成员关系与出勤以联合主键标识，删除时直接移除行。
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, MetaData, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import expression

metadata_obj = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


class Base(DeclarativeBase):
    metadata = metadata_obj
    type_annotation_map = {datetime: DateTime(timezone=True)}

    def __repr__(self) -> str:
        identity = inspect(self).identity
        return f"<{type(self).__name__} {identity}>"


class TimestampMixin:
    create_time: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    update_time: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SoftDeleteMixin:
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=expression.false(),
        nullable=False,
        index=True,
    )
