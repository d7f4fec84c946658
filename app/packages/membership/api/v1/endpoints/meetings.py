"""会议与出勤路由定义。"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.membership.api.v1.schemas.meetings import (
    AttendanceCreateRequest,
    AttendanceDeletionResponse,
    AttendanceDetailResponse,
    AttendanceListResponse,
    AttendanceUpdateRequest,
    MeetingCreateRequest,
    MeetingDeletionResponse,
    MeetingDetailResponse,
    MeetingListResponse,
    MeetingUpdateRequest,
)
from app.packages.membership.core.dependencies import get_db
from app.packages.membership.services.meeting_service import attendance_service, meeting_service

router = APIRouter(prefix="/meetings", tags=["meetings"])
attendance_router = APIRouter(prefix="/attendances", tags=["attendances"])


@router.get("", response_model=MeetingListResponse)
def list_meetings(
    workgroup_id: Optional[int] = Query(None, description="按工作组过滤"),
    start: Optional[datetime] = Query(None, description="起始时间（含）"),
    end: Optional[datetime] = Query(None, description="结束时间（含）"),
    db: Session = Depends(get_db),
) -> MeetingListResponse:
    return meeting_service.list_meetings(db, workgroup_id=workgroup_id, start=start, end=end)


@router.get("/{meeting_id}", response_model=MeetingDetailResponse)
def get_meeting(meeting_id: int, db: Session = Depends(get_db)) -> MeetingDetailResponse:
    return meeting_service.get_detail(db, meeting_id=meeting_id)


@router.get("/{meeting_id}/attendances", response_model=AttendanceListResponse)
def list_meeting_attendances(meeting_id: int, db: Session = Depends(get_db)) -> AttendanceListResponse:
    meeting_service.get_or_404(db, meeting_id)
    return attendance_service.list_attendances(db, meeting_id=meeting_id)


@router.post("", response_model=MeetingDetailResponse)
def create_meeting(payload: MeetingCreateRequest, db: Session = Depends(get_db)) -> MeetingDetailResponse:
    return meeting_service.create(db, payload=payload.model_dump())


@router.put("/{meeting_id}", response_model=MeetingDetailResponse)
def update_meeting(
    meeting_id: int,
    payload: MeetingUpdateRequest,
    db: Session = Depends(get_db),
) -> MeetingDetailResponse:
    return meeting_service.update(db, meeting_id=meeting_id, payload=payload.model_dump(exclude_unset=True))


@router.delete("/{meeting_id}", response_model=MeetingDeletionResponse)
def delete_meeting(meeting_id: int, db: Session = Depends(get_db)) -> MeetingDeletionResponse:
    return meeting_service.delete(db, meeting_id=meeting_id)


@attendance_router.get("", response_model=AttendanceListResponse)
def list_attendances(
    member_id: Optional[int] = Query(None, description="按成员过滤"),
    meeting_id: Optional[int] = Query(None, description="按会议过滤"),
    db: Session = Depends(get_db),
) -> AttendanceListResponse:
    return attendance_service.list_attendances(db, member_id=member_id, meeting_id=meeting_id)


@attendance_router.post("", response_model=AttendanceDetailResponse)
def create_attendance(payload: AttendanceCreateRequest, db: Session = Depends(get_db)) -> AttendanceDetailResponse:
    return attendance_service.create(db, payload=payload.model_dump())


@attendance_router.get("/{member_id}/{meeting_id}", response_model=AttendanceDetailResponse)
def get_attendance(member_id: int, meeting_id: int, db: Session = Depends(get_db)) -> AttendanceDetailResponse:
    return attendance_service.get_detail(db, member_id=member_id, meeting_id=meeting_id)


@attendance_router.put("/{member_id}/{meeting_id}", response_model=AttendanceDetailResponse)
def update_attendance(
    member_id: int,
    meeting_id: int,
    payload: AttendanceUpdateRequest,
    db: Session = Depends(get_db),
) -> AttendanceDetailResponse:
    return attendance_service.update(
        db, member_id=member_id, meeting_id=meeting_id, payload=payload.model_dump(exclude_unset=True)
    )


@attendance_router.delete("/{member_id}/{meeting_id}", response_model=AttendanceDeletionResponse)
def delete_attendance(member_id: int, meeting_id: int, db: Session = Depends(get_db)) -> AttendanceDeletionResponse:
    return attendance_service.delete(db, member_id=member_id, meeting_id=meeting_id)
