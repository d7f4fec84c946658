"""会议与出勤相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.packages.membership.api.v1.schemas.common import ResponseEnvelope, normalize_optional_text
from app.packages.membership.core.enums import MeetingTypeEnum


# ---------------------------------------------------------------------------
# 会议
# ---------------------------------------------------------------------------


class MeetingCreateRequest(BaseModel):
    workgroup_id: int = Field(..., ge=1)
    date: datetime
    type: MeetingTypeEnum = MeetingTypeEnum.PRESENTIAL
    title: Optional[str] = Field(default=None, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    agenda: Optional[str] = None
    minutes: Optional[str] = None

    @field_validator("title", "location", "agenda", "minutes")
    @classmethod
    def _strip_texts(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class MeetingUpdateRequest(BaseModel):
    workgroup_id: Optional[int] = Field(default=None, ge=1)
    date: Optional[datetime] = None
    type: Optional[MeetingTypeEnum] = None
    title: Optional[str] = Field(default=None, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    agenda: Optional[str] = None
    minutes: Optional[str] = None

    @field_validator("title", "location", "agenda", "minutes")
    @classmethod
    def _strip_texts(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class MeetingItem(BaseModel):
    id: int
    workgroup_id: int
    date: str
    type: str
    title: Optional[str]
    location: Optional[str]
    agenda: Optional[str]
    minutes: Optional[str]


class MeetingDeletionPayload(BaseModel):
    id: int


MeetingListResponse = ResponseEnvelope[list[MeetingItem]]
MeetingDetailResponse = ResponseEnvelope[MeetingItem]
MeetingDeletionResponse = ResponseEnvelope[MeetingDeletionPayload]


# ---------------------------------------------------------------------------
# 出勤
# ---------------------------------------------------------------------------


class AttendanceCreateRequest(BaseModel):
    member_id: int = Field(..., ge=1)
    meeting_id: int = Field(..., ge=1)
    present: bool = True
    justification: Optional[str] = None

    @field_validator("justification")
    @classmethod
    def _strip_justification(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class AttendanceUpdateRequest(BaseModel):
    present: Optional[bool] = None
    justification: Optional[str] = None

    @field_validator("justification")
    @classmethod
    def _strip_justification(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional_text(value)


class AttendanceItem(BaseModel):
    member_id: int
    meeting_id: int
    present: bool
    justification: Optional[str]
    member_name: Optional[str]


class AttendanceKeyPayload(BaseModel):
    member_id: int
    meeting_id: int


AttendanceListResponse = ResponseEnvelope[list[AttendanceItem]]
AttendanceDetailResponse = ResponseEnvelope[AttendanceItem]
AttendanceDeletionResponse = ResponseEnvelope[AttendanceKeyPayload]
