"""工作组模型：描述组织内部的层级工作单元。"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from app.packages.membership.core.enums import WorkgroupStatusEnum
from app.packages.membership.models.base import Base, SoftDeleteMixin, TimestampMixin


class Workgroup(TimestampMixin, SoftDeleteMixin, Base):
    """工作组实体，通过 `parent_id` 形成邻接表树。

    - 防止自引用（`parent_id != id`）；更深的环路由服务层在写入前校验。
    - `coordinator_id` 指向负责协调的成员，可空。
    """

    __tablename__ = "workgroups"
    __table_args__ = (
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="no_self_parent"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=WorkgroupStatusEnum.ACTIVE.value, nullable=False, index=True
    )
    creation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    dissolution_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("workgroups.id", ondelete="SET NULL"), nullable=True, index=True
    )
    coordinator_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True
    )

    parent: Mapped[Optional["Workgroup"]] = relationship(
        "Workgroup",
        primaryjoin=lambda: foreign(Workgroup.parent_id) == Workgroup.id,
        remote_side=lambda: Workgroup.id,
        back_populates="children",
    )
    children: Mapped[List["Workgroup"]] = relationship(
        "Workgroup",
        primaryjoin=lambda: foreign(Workgroup.parent_id) == Workgroup.id,
        back_populates="parent",
    )
    coordinator: Mapped[Optional["Member"]] = relationship("Member", foreign_keys=[coordinator_id])
    memberships: Mapped[List["Membership"]] = relationship("Membership", back_populates="workgroup")
