"""会议与出勤模型。"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import expression

from app.packages.membership.core.enums import MeetingTypeEnum
from app.packages.membership.models.base import Base, SoftDeleteMixin, TimestampMixin


class Meeting(TimestampMixin, SoftDeleteMixin, Base):
    """工作组召开的一次会议。"""

    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    workgroup_id: Mapped[int] = mapped_column(ForeignKey("workgroups.id"), index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    type: Mapped[str] = mapped_column(String(20), default=MeetingTypeEnum.PRESENTIAL.value, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    agenda: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    minutes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    workgroup: Mapped["Workgroup"] = relationship("Workgroup")
    attendances: Mapped[List["Attendance"]] = relationship("Attendance", back_populates="meeting")


class Attendance(TimestampMixin, Base):
    """成员在某次会议上的出勤记录，(member_id, meeting_id) 唯一。"""

    __tablename__ = "attendances"

    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), primary_key=True, index=True)
    meeting_id: Mapped[int] = mapped_column(ForeignKey("meetings.id"), primary_key=True, index=True)
    present: Mapped[bool] = mapped_column(Boolean, default=True, server_default=expression.true(), nullable=False)
    justification: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    member: Mapped["Member"] = relationship("Member")
    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="attendances")
