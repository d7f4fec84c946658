"""成员路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.membership.api.v1.schemas.members import (
    MemberCreateRequest,
    MemberDeletionResponse,
    MemberDetailResponse,
    MemberListResponse,
    MemberUpdateRequest,
)
from app.packages.membership.api.v1.schemas.memberships import MembershipListResponse
from app.packages.membership.core.dependencies import get_db
from app.packages.membership.core.enums import MemberStatusEnum
from app.packages.membership.services.member_service import member_service
from app.packages.membership.services.membership_service import membership_service

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=MemberListResponse)
def list_members(
    keyword: Optional[str] = Query(None, description="按姓名、姓氏或邮箱模糊搜索"),
    status: Optional[MemberStatusEnum] = Query(None, description="按状态过滤"),
    page: int = Query(1, ge=1, description="页码，从 1 开始"),
    page_size: int = Query(100, ge=1, le=500, description="每页数量"),
    db: Session = Depends(get_db),
) -> MemberListResponse:
    return member_service.list_members(db, keyword=keyword, status=status, page=page, page_size=page_size)


@router.get("/{member_id}", response_model=MemberDetailResponse)
def get_member(member_id: int, db: Session = Depends(get_db)) -> MemberDetailResponse:
    return member_service.get_detail(db, member_id=member_id)


@router.get("/{member_id}/memberships", response_model=MembershipListResponse)
def list_member_memberships(
    member_id: int,
    active_only: bool = Query(False, description="仅返回当前有效的成员关系"),
    db: Session = Depends(get_db),
) -> MembershipListResponse:
    """返回指定成员所属的全部工作组关系。"""
    member_service.get_or_404(db, member_id)
    return membership_service.list_memberships(db, member_id=member_id, active_only=active_only)


@router.post("", response_model=MemberDetailResponse)
def create_member(payload: MemberCreateRequest, db: Session = Depends(get_db)) -> MemberDetailResponse:
    return member_service.create(db, payload=payload.model_dump())


@router.put("/{member_id}", response_model=MemberDetailResponse)
def update_member(
    member_id: int,
    payload: MemberUpdateRequest,
    db: Session = Depends(get_db),
) -> MemberDetailResponse:
    return member_service.update(db, member_id=member_id, payload=payload.model_dump(exclude_unset=True))


@router.delete("/{member_id}", response_model=MemberDeletionResponse)
def delete_member(member_id: int, db: Session = Depends(get_db)) -> MemberDeletionResponse:
    return member_service.delete(db, member_id=member_id)
