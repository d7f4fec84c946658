"""成员模型。"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.membership.core.enums import MemberStatusEnum
from app.packages.membership.models.base import Base, SoftDeleteMixin, TimestampMixin


class Member(TimestampMixin, SoftDeleteMixin, Base):
    """组织成员，记录联系方式与在册状态。

    邮箱唯一性仅对未删除的成员生效，由服务层校验，因此数据库层只建普通索引。
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    surname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    dni: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    organization: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone1: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    phone1_description: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone2: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    phone2_description: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone3: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    phone3_description: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=MemberStatusEnum.ACTIVE.value, nullable=False, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deactivation_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    deactivation_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    memberships: Mapped[List["Membership"]] = relationship("Membership", back_populates="member")
