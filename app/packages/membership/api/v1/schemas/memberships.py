"""成员关系相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.packages.membership.api.v1.schemas.common import ResponseEnvelope, normalize_optional_text
from app.packages.membership.core.enums import MembershipRoleEnum


class MembershipCreateRequest(BaseModel):
    member_id: int = Field(..., ge=1)
    workgroup_id: int = Field(..., ge=1)
    role: MembershipRoleEnum = Field(default=MembershipRoleEnum.GUEST, description="角色，默认 GUEST")
    start_date: Optional[datetime] = Field(default=None, description="开始时间（ISO 8601），默认当前时间")
    end_date: Optional[datetime] = None
    end_date_description: Optional[str] = None

    @field_validator("end_date_description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class MembershipUpdateRequest(BaseModel):
    """主键字段位于路径中，请求体只允许修改角色与结束信息。"""

    role: Optional[MembershipRoleEnum] = None
    end_date: Optional[datetime] = None
    end_date_description: Optional[str] = None

    @field_validator("end_date_description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class MembershipItem(BaseModel):
    member_id: int
    workgroup_id: int
    start_date: str
    role: str
    end_date: Optional[str]
    end_date_description: Optional[str]
    member_name: Optional[str]
    workgroup_name: Optional[str]


class MembershipKeyPayload(BaseModel):
    member_id: int
    workgroup_id: int
    start_date: str


MembershipListResponse = ResponseEnvelope[list[MembershipItem]]
MembershipDetailResponse = ResponseEnvelope[MembershipItem]
MembershipDeletionResponse = ResponseEnvelope[MembershipKeyPayload]
