"""成员关系路由定义，单条记录以 成员/工作组/开始时间 三段路径定位。"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.membership.api.v1.schemas.memberships import (
    MembershipCreateRequest,
    MembershipDeletionResponse,
    MembershipDetailResponse,
    MembershipListResponse,
    MembershipUpdateRequest,
)
from app.packages.membership.core.dependencies import get_db
from app.packages.membership.services.membership_service import membership_service

router = APIRouter(prefix="/memberships", tags=["memberships"])


@router.get("", response_model=MembershipListResponse)
def list_memberships(
    member_id: Optional[int] = Query(None, description="按成员过滤"),
    workgroup_id: Optional[int] = Query(None, description="按工作组过滤"),
    active_only: bool = Query(False, description="仅返回当前有效的成员关系"),
    db: Session = Depends(get_db),
) -> MembershipListResponse:
    return membership_service.list_memberships(
        db, member_id=member_id, workgroup_id=workgroup_id, active_only=active_only
    )


@router.post("", response_model=MembershipDetailResponse)
def create_membership(payload: MembershipCreateRequest, db: Session = Depends(get_db)) -> MembershipDetailResponse:
    return membership_service.create(db, payload=payload.model_dump())


@router.get("/{member_id}/{workgroup_id}/{start_date}", response_model=MembershipDetailResponse)
def get_membership(
    member_id: int,
    workgroup_id: int,
    start_date: datetime,
    db: Session = Depends(get_db),
) -> MembershipDetailResponse:
    return membership_service.get_detail(db, member_id=member_id, workgroup_id=workgroup_id, start_date=start_date)


@router.put("/{member_id}/{workgroup_id}/{start_date}", response_model=MembershipDetailResponse)
def update_membership(
    member_id: int,
    workgroup_id: int,
    start_date: datetime,
    payload: MembershipUpdateRequest,
    db: Session = Depends(get_db),
) -> MembershipDetailResponse:
    return membership_service.update(
        db,
        member_id=member_id,
        workgroup_id=workgroup_id,
        start_date=start_date,
        payload=payload.model_dump(exclude_unset=True),
    )


@router.delete("/{member_id}/{workgroup_id}/{start_date}", response_model=MembershipDeletionResponse)
def delete_membership(
    member_id: int,
    workgroup_id: int,
    start_date: datetime,
    db: Session = Depends(get_db),
) -> MembershipDeletionResponse:
    return membership_service.delete(db, member_id=member_id, workgroup_id=workgroup_id, start_date=start_date)
