"""成员相关的请求与响应模型。"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.packages.membership.api.v1.schemas.common import (
    PagedPayload,
    ResponseEnvelope,
    normalize_optional_text,
)
from app.packages.membership.core.enums import MemberStatusEnum

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_OPTIONAL_TEXT_FIELDS = (
    "surname",
    "dni",
    "position",
    "organization",
    "phone1",
    "phone1_description",
    "phone2",
    "phone2_description",
    "phone3",
    "phone3_description",
    "deactivation_description",
)


def _normalize_email(value: str) -> str:
    trimmed = value.strip()
    if not _EMAIL_PATTERN.match(trimmed):
        raise ValueError("邮箱格式不正确")
    return trimmed


class MemberFields(BaseModel):
    """成员的可选资料字段。"""

    surname: Optional[str] = Field(default=None, max_length=100)
    dni: Optional[str] = Field(default=None, max_length=50, description="证件号")
    position: Optional[str] = Field(default=None, max_length=100)
    organization: Optional[str] = Field(default=None, max_length=100)
    phone1: Optional[str] = Field(default=None, max_length=50)
    phone1_description: Optional[str] = Field(default=None, max_length=100)
    phone2: Optional[str] = Field(default=None, max_length=50)
    phone2_description: Optional[str] = Field(default=None, max_length=100)
    phone3: Optional[str] = Field(default=None, max_length=50)
    phone3_description: Optional[str] = Field(default=None, max_length=100)
    deactivation_date: Optional[datetime] = None
    deactivation_description: Optional[str] = None

    @model_validator(mode="after")
    def _normalize_optional_texts(self):
        for name in _OPTIONAL_TEXT_FIELDS:
            if name in self.model_fields_set:
                setattr(self, name, normalize_optional_text(getattr(self, name)))
        return self


class MemberCreateRequest(MemberFields):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    status: MemberStatusEnum = MemberStatusEnum.ACTIVE
    start_date: Optional[datetime] = Field(default=None, description="入会时间，默认当前时间")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("姓名不能为空")
        return trimmed

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _normalize_email(value)


class MemberUpdateRequest(MemberFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    status: Optional[MemberStatusEnum] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("姓名不能为空")
        return trimmed

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _normalize_email(value)


class MemberItem(BaseModel):
    id: int
    name: str
    surname: Optional[str]
    email: str
    dni: Optional[str]
    position: Optional[str]
    organization: Optional[str]
    phone1: Optional[str]
    phone1_description: Optional[str]
    phone2: Optional[str]
    phone2_description: Optional[str]
    phone3: Optional[str]
    phone3_description: Optional[str]
    status: str
    start_date: Optional[str]
    deactivation_date: Optional[str]
    deactivation_description: Optional[str]
    create_time: Optional[str]
    update_time: Optional[str]


class MemberDeletionPayload(BaseModel):
    id: int


MemberListResponse = ResponseEnvelope[PagedPayload[MemberItem]]
MemberDetailResponse = ResponseEnvelope[MemberItem]
MemberDeletionResponse = ResponseEnvelope[MemberDeletionPayload]
