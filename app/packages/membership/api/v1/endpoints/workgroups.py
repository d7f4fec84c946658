"""工作组路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.membership.api.v1.schemas.workgroups import (
    WorkgroupChildrenResponse,
    WorkgroupCreateRequest,
    WorkgroupDeletionResponse,
    WorkgroupDetailResponse,
    WorkgroupListResponse,
    WorkgroupPathResponse,
    WorkgroupTreeResponse,
    WorkgroupUpdateRequest,
)
from app.packages.membership.core.dependencies import get_db
from app.packages.membership.core.enums import WorkgroupStatusEnum
from app.packages.membership.services.workgroup_service import workgroup_service

router = APIRouter(prefix="/workgroups", tags=["workgroups"])


@router.get("", response_model=WorkgroupListResponse)
def list_workgroups(
    keyword: Optional[str] = Query(None, description="按名称模糊搜索"),
    status: Optional[WorkgroupStatusEnum] = Query(None, description="按状态过滤"),
    page: int = Query(1, ge=1, description="页码，从 1 开始"),
    page_size: int = Query(100, ge=1, le=500, description="每页数量"),
    db: Session = Depends(get_db),
) -> WorkgroupListResponse:
    return workgroup_service.list_workgroups(db, keyword=keyword, status=status, page=page, page_size=page_size)


@router.get("/tree", response_model=WorkgroupTreeResponse)
def get_workgroup_tree(db: Session = Depends(get_db)) -> WorkgroupTreeResponse:
    """以树形结构返回全部工作组（包含 parent_id / children）。"""
    return workgroup_service.list_tree(db)


@router.get("/{workgroup_id}", response_model=WorkgroupDetailResponse)
def get_workgroup(workgroup_id: int, db: Session = Depends(get_db)) -> WorkgroupDetailResponse:
    return workgroup_service.get_detail(db, workgroup_id=workgroup_id)


@router.get("/{workgroup_id}/path", response_model=WorkgroupPathResponse)
def get_workgroup_path(workgroup_id: int, db: Session = Depends(get_db)) -> WorkgroupPathResponse:
    """返回面包屑：从最顶层工作组到当前工作组。"""
    return workgroup_service.get_path(db, workgroup_id=workgroup_id)


@router.get("/{workgroup_id}/children", response_model=WorkgroupChildrenResponse)
def list_workgroup_children(workgroup_id: int, db: Session = Depends(get_db)) -> WorkgroupChildrenResponse:
    return workgroup_service.list_children(db, workgroup_id=workgroup_id)


@router.post("", response_model=WorkgroupDetailResponse)
def create_workgroup(payload: WorkgroupCreateRequest, db: Session = Depends(get_db)) -> WorkgroupDetailResponse:
    return workgroup_service.create(db, payload=payload.model_dump())


@router.put("/{workgroup_id}", response_model=WorkgroupDetailResponse)
def update_workgroup(
    workgroup_id: int,
    payload: WorkgroupUpdateRequest,
    db: Session = Depends(get_db),
) -> WorkgroupDetailResponse:
    """更新工作组，仅修改请求体中出现的字段；`parent_id: null` 表示提升为顶层。"""
    return workgroup_service.update(db, workgroup_id=workgroup_id, payload=payload.model_dump(exclude_unset=True))


@router.delete("/{workgroup_id}", response_model=WorkgroupDeletionResponse)
def delete_workgroup(workgroup_id: int, db: Session = Depends(get_db)) -> WorkgroupDeletionResponse:
    return workgroup_service.delete(db, workgroup_id=workgroup_id)
