"""成员关系模型：成员在某段时间内以某个角色加入工作组。"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.membership.core.enums import MembershipRoleEnum
from app.packages.membership.models.base import Base, TimestampMixin


class Membership(TimestampMixin, Base):
    """以 (member_id, workgroup_id, start_date) 为联合主键，同一成员可多次加入同一工作组。"""

    __tablename__ = "memberships"

    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), primary_key=True, index=True)
    workgroup_id: Mapped[int] = mapped_column(ForeignKey("workgroups.id"), primary_key=True, index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), default=MembershipRoleEnum.GUEST.value, nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    member: Mapped["Member"] = relationship("Member", back_populates="memberships")
    workgroup: Mapped["Workgroup"] = relationship("Workgroup", back_populates="memberships")
