"""工作组日志条目模型。"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.membership.core.enums import LogbookEntryStatusEnum, LogbookEntryTypeEnum
from app.packages.membership.models.base import Base, SoftDeleteMixin, TimestampMixin


class LogbookEntry(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "logbook_entries"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    workgroup_id: Mapped[int] = mapped_column(ForeignKey("workgroups.id"), index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    description: Mapped[str] = mapped_column(Text)
    type: Mapped[str] = mapped_column(
        String(20), default=LogbookEntryTypeEnum.DOCUMENTATION.value, nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), default=LogbookEntryStatusEnum.ACTIVE.value, nullable=False, index=True
    )

    workgroup: Mapped["Workgroup"] = relationship("Workgroup")
