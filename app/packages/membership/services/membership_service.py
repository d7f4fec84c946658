"""成员关系业务逻辑：成员以某个角色在一段时间内加入工作组。"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.membership.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from app.packages.membership.core.enums import MembershipRoleEnum
from app.packages.membership.core.exceptions import AppException
from app.packages.membership.core.logger import logger
from app.packages.membership.core.responses import create_response
from app.packages.membership.core.timezone import format_datetime, now as tz_now, to_utc
from app.packages.membership.crud.members import member_crud
from app.packages.membership.crud.memberships import membership_crud
from app.packages.membership.crud.workgroups import workgroup_crud
from app.packages.membership.models.membership import Membership


class MembershipService:

    def list_memberships(
        self,
        db: Session,
        *,
        member_id: Optional[int] = None,
        workgroup_id: Optional[int] = None,
        active_only: bool = False,
    ) -> dict[str, Any]:
        """列出成员关系；``active_only`` 时仅保留当前仍有效的记录。"""
        items = membership_crud.list_with_filters(
            db,
            member_id=member_id,
            workgroup_id=workgroup_id,
            active_at=to_utc(tz_now()) if active_only else None,
        )
        return create_response("获取成员关系列表成功", [self._serialize(item) for item in items], HTTP_STATUS_OK)

    def get_detail(
        self, db: Session, *, member_id: int, workgroup_id: int, start_date: datetime
    ) -> dict[str, Any]:
        membership = self._get_or_404(db, member_id, workgroup_id, start_date)
        return create_response("获取成员关系成功", self._serialize(membership), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        member_id = payload["member_id"]
        workgroup_id = payload["workgroup_id"]
        if member_crud.get(db, member_id) is None:
            raise AppException("成员不存在", HTTP_STATUS_NOT_FOUND)
        if workgroup_crud.get(db, workgroup_id) is None:
            raise AppException("工作组不存在", HTTP_STATUS_NOT_FOUND)

        start_date = to_utc(payload.get("start_date")) or to_utc(tz_now())
        end_date = to_utc(payload.get("end_date"))
        self._ensure_date_order(start_date, end_date)

        if membership_crud.get_by_key(
            db, member_id=member_id, workgroup_id=workgroup_id, start_date=start_date
        ) is not None:
            raise AppException("成员关系已存在", HTTP_STATUS_CONFLICT)

        role = getattr(payload.get("role"), "value", payload.get("role")) or MembershipRoleEnum.GUEST.value
        try:
            membership = membership_crud.create(
                db,
                {
                    "member_id": member_id,
                    "workgroup_id": workgroup_id,
                    "start_date": start_date,
                    "role": role,
                    "end_date": end_date,
                    "end_date_description": payload.get("end_date_description"),
                },
            )
        except IntegrityError as exc:
            db.rollback()
            raise AppException("成员关系已存在", HTTP_STATUS_CONFLICT) from exc
        logger.info("Member %s joined workgroup %s as %s", member_id, workgroup_id, role)
        return create_response("创建成员关系成功", self._serialize(membership), HTTP_STATUS_OK)

    def update(
        self,
        db: Session,
        *,
        member_id: int,
        workgroup_id: int,
        start_date: datetime,
        payload: Dict[str, Any],
    ) -> dict[str, Any]:
        """更新角色与结束信息；``end_date`` 显式置空表示恢复为进行中。"""
        membership = self._get_or_404(db, member_id, workgroup_id, start_date)

        if payload.get("role") is not None:
            membership.role = getattr(payload["role"], "value", payload["role"])
        if "end_date" in payload:
            end_date = to_utc(payload["end_date"])
            self._ensure_date_order(to_utc(membership.start_date), end_date)
            membership.end_date = end_date
        if "end_date_description" in payload:
            membership.end_date_description = payload["end_date_description"]

        saved = membership_crud.save(db, membership)
        return create_response("更新成员关系成功", self._serialize(saved), HTTP_STATUS_OK)

    def delete(
        self, db: Session, *, member_id: int, workgroup_id: int, start_date: datetime
    ) -> dict[str, Any]:
        membership = self._get_or_404(db, member_id, workgroup_id, start_date)
        key = self._serialize_key(membership)
        membership_crud.remove(db, membership)
        logger.info("Deleted membership %s", key)
        return create_response("删除成员关系成功", key, HTTP_STATUS_OK)

    def _get_or_404(self, db: Session, member_id: int, workgroup_id: int, start_date: datetime) -> Membership:
        membership = membership_crud.get_by_key(
            db, member_id=member_id, workgroup_id=workgroup_id, start_date=to_utc(start_date)
        )
        if membership is None:
            raise AppException("成员关系不存在", HTTP_STATUS_NOT_FOUND)
        return membership

    @staticmethod
    def _ensure_date_order(start_date: datetime, end_date: Optional[datetime]) -> None:
        if end_date is not None and end_date < start_date:
            raise AppException("结束时间不能早于开始时间", HTTP_STATUS_BAD_REQUEST)

    @staticmethod
    def _serialize_key(membership: Membership) -> Dict[str, Any]:
        return {
            "member_id": membership.member_id,
            "workgroup_id": membership.workgroup_id,
            "start_date": format_datetime(membership.start_date),
        }

    def _serialize(self, membership: Membership) -> Dict[str, Any]:
        data = self._serialize_key(membership)
        data.update(
            {
                "role": membership.role,
                "end_date": format_datetime(membership.end_date),
                "end_date_description": membership.end_date_description,
                "member_name": membership.member.name if membership.member else None,
                "workgroup_name": membership.workgroup.name if membership.workgroup else None,
            }
        )
        return data


membership_service = MembershipService()
