"""工作组日志条目路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.membership.api.v1.schemas.logbook_entries import (
    LogbookEntryCreateRequest,
    LogbookEntryDeletionResponse,
    LogbookEntryDetailResponse,
    LogbookEntryListResponse,
    LogbookEntryUpdateRequest,
)
from app.packages.membership.core.dependencies import get_db
from app.packages.membership.core.enums import LogbookEntryStatusEnum, LogbookEntryTypeEnum
from app.packages.membership.services.logbook_service import logbook_service

router = APIRouter(prefix="/logbook-entries", tags=["logbook_entries"])


@router.get("", response_model=LogbookEntryListResponse)
def list_logbook_entries(
    workgroup_id: Optional[int] = Query(None, description="按工作组过滤"),
    status: Optional[LogbookEntryStatusEnum] = Query(None, description="按状态过滤"),
    type: Optional[LogbookEntryTypeEnum] = Query(None, description="按类型过滤"),
    db: Session = Depends(get_db),
) -> LogbookEntryListResponse:
    return logbook_service.list_entries(db, workgroup_id=workgroup_id, status=status, entry_type=type)


@router.get("/{entry_id}", response_model=LogbookEntryDetailResponse)
def get_logbook_entry(entry_id: int, db: Session = Depends(get_db)) -> LogbookEntryDetailResponse:
    return logbook_service.get_detail(db, entry_id=entry_id)


@router.post("", response_model=LogbookEntryDetailResponse)
def create_logbook_entry(
    payload: LogbookEntryCreateRequest, db: Session = Depends(get_db)
) -> LogbookEntryDetailResponse:
    return logbook_service.create(db, payload=payload.model_dump())


@router.put("/{entry_id}", response_model=LogbookEntryDetailResponse)
def update_logbook_entry(
    entry_id: int,
    payload: LogbookEntryUpdateRequest,
    db: Session = Depends(get_db),
) -> LogbookEntryDetailResponse:
    return logbook_service.update(db, entry_id=entry_id, payload=payload.model_dump(exclude_unset=True))


@router.delete("/{entry_id}", response_model=LogbookEntryDeletionResponse)
def delete_logbook_entry(entry_id: int, db: Session = Depends(get_db)) -> LogbookEntryDeletionResponse:
    return logbook_service.delete(db, entry_id=entry_id)
