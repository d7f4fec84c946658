"""工作组相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.packages.membership.api.v1.schemas.common import (
    PagedPayload,
    ResponseEnvelope,
    normalize_optional_text,
)
from app.packages.membership.core.enums import WorkgroupStatusEnum


class WorkgroupCreateRequest(BaseModel):
    """新建工作组的请求体。"""

    name: str = Field(..., min_length=1, max_length=100, description="工作组名称")
    description: Optional[str] = Field(default=None, description="工作组说明")
    status: WorkgroupStatusEnum = Field(default=WorkgroupStatusEnum.ACTIVE, description="状态")
    creation_date: Optional[datetime] = Field(default=None, description="成立时间，默认当前时间")
    dissolution_date: Optional[datetime] = Field(default=None, description="解散时间")
    parent_id: Optional[int] = Field(default=None, ge=1, description="上级工作组 ID")
    coordinator_id: Optional[int] = Field(default=None, ge=1, description="协调人成员 ID")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("工作组名称不能为空")
        return trimmed

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class WorkgroupUpdateRequest(BaseModel):
    """更新工作组的请求体，仅提交的字段会被修改。"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    status: Optional[WorkgroupStatusEnum] = None
    dissolution_date: Optional[datetime] = None
    parent_id: Optional[int] = Field(default=None, ge=1)
    coordinator_id: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("工作组名称不能为空")
        return trimmed

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class WorkgroupItem(BaseModel):
    id: int
    name: str
    description: Optional[str]
    status: str
    creation_date: Optional[str]
    dissolution_date: Optional[str]
    parent_id: Optional[int]
    coordinator_id: Optional[int]
    create_time: Optional[str]
    update_time: Optional[str]


class WorkgroupBreadcrumbItem(BaseModel):
    """面包屑中的单个工作组。"""

    id: int
    name: str
    parent_id: Optional[int]
    status: Optional[str]


class WorkgroupTreeNode(WorkgroupBreadcrumbItem):
    children: list["WorkgroupTreeNode"]


class WorkgroupDeletionPayload(BaseModel):
    id: int


WorkgroupListResponse = ResponseEnvelope[PagedPayload[WorkgroupItem]]
WorkgroupDetailResponse = ResponseEnvelope[WorkgroupItem]
WorkgroupChildrenResponse = ResponseEnvelope[list[WorkgroupItem]]
WorkgroupTreeResponse = ResponseEnvelope[list[WorkgroupTreeNode]]
WorkgroupPathResponse = ResponseEnvelope[list[WorkgroupBreadcrumbItem]]
WorkgroupDeletionResponse = ResponseEnvelope[WorkgroupDeletionPayload]
