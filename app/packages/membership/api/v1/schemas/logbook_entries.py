"""工作组日志条目的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.packages.membership.api.v1.schemas.common import ResponseEnvelope
from app.packages.membership.core.enums import LogbookEntryStatusEnum, LogbookEntryTypeEnum


def _require_text(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("描述不能为空")
    return trimmed


class LogbookEntryCreateRequest(BaseModel):
    workgroup_id: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)
    date: Optional[datetime] = Field(default=None, description="记录时间，默认当前时间")
    type: LogbookEntryTypeEnum = LogbookEntryTypeEnum.DOCUMENTATION
    status: LogbookEntryStatusEnum = LogbookEntryStatusEnum.ACTIVE

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        return _require_text(value)


class LogbookEntryUpdateRequest(BaseModel):
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    type: Optional[LogbookEntryTypeEnum] = None
    status: Optional[LogbookEntryStatusEnum] = None

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _require_text(value)


class LogbookEntryItem(BaseModel):
    id: int
    workgroup_id: int
    date: str
    description: str
    type: str
    status: str


class LogbookEntryDeletionPayload(BaseModel):
    id: int


LogbookEntryListResponse = ResponseEnvelope[list[LogbookEntryItem]]
LogbookEntryDetailResponse = ResponseEnvelope[LogbookEntryItem]
LogbookEntryDeletionResponse = ResponseEnvelope[LogbookEntryDeletionPayload]
