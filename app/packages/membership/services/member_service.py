"""成员相关业务逻辑。"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.membership.core.constants import (
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from app.packages.membership.core.enums import MemberStatusEnum
from app.packages.membership.core.exceptions import AppException
from app.packages.membership.core.logger import logger
from app.packages.membership.core.responses import create_response
from app.packages.membership.core.timezone import format_datetime, now as tz_now, to_utc
from app.packages.membership.crud.members import member_crud
from app.packages.membership.models.member import Member

_PROFILE_FIELDS = (
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
)


class MemberService:
    """封装成员的增删改查。"""

    def list_members(
        self,
        db: Session,
        *,
        keyword: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 100,
    ) -> dict[str, Any]:
        items, total = member_crud.list_with_filters(
            db,
            keyword=keyword,
            status=getattr(status, "value", status),
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        payload = {
            "total": total,
            "page": page,
            "size": page_size,
            "list": [self.serialize(item) for item in items],
        }
        return create_response("获取成员列表成功", payload, HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, member_id: int) -> dict[str, Any]:
        member = self.get_or_404(db, member_id)
        return create_response("获取成员详情成功", self.serialize(member), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        self._ensure_unique_email(db, payload["email"])

        values: Dict[str, Any] = {name: payload.get(name) for name in _PROFILE_FIELDS}
        values.update(
            {
                "name": payload["name"],
                "email": payload["email"],
                "status": getattr(payload.get("status"), "value", payload.get("status")) or MemberStatusEnum.ACTIVE.value,
                "start_date": to_utc(payload.get("start_date")) or to_utc(tz_now()),
                "deactivation_date": to_utc(payload.get("deactivation_date")),
                "deactivation_description": payload.get("deactivation_description"),
            }
        )
        self._apply_status_rule(values)

        try:
            member = member_crud.create(db, values)
        except IntegrityError as exc:
            db.rollback()
            raise AppException("成员数据冲突", HTTP_STATUS_CONFLICT) from exc
        logger.info("Created member %s", member.id)
        return create_response("创建成员成功", self.serialize(member), HTTP_STATUS_OK)

    def update(self, db: Session, *, member_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        member = self.get_or_404(db, member_id)

        email = payload.get("email")
        if email is not None:
            # 仅大小写不同视为同一邮箱，不做唯一性校验但仍保存新写法
            if email.lower() != member.email.lower():
                self._ensure_unique_email(db, email)
            member.email = email
        if payload.get("name") is not None:
            member.name = payload["name"]
        for name in _PROFILE_FIELDS:
            if name in payload:
                setattr(member, name, payload[name])

        values = {
            "status": getattr(payload.get("status"), "value", payload.get("status")) or member.status,
            "deactivation_date": (
                to_utc(payload["deactivation_date"]) if "deactivation_date" in payload else member.deactivation_date
            ),
            "deactivation_description": payload.get("deactivation_description", member.deactivation_description),
        }
        self._apply_status_rule(values)
        for key, value in values.items():
            setattr(member, key, value)

        try:
            saved = member_crud.save(db, member)
        except IntegrityError as exc:
            db.rollback()
            raise AppException("成员数据冲突", HTTP_STATUS_CONFLICT) from exc
        logger.info("Updated member %s", member_id)
        return create_response("更新成员成功", self.serialize(saved), HTTP_STATUS_OK)

    def delete(self, db: Session, *, member_id: int) -> dict[str, Any]:
        member = self.get_or_404(db, member_id)
        member_crud.remove(db, member)
        logger.info("Deleted member %s", member_id)
        return create_response("删除成员成功", {"id": member_id}, HTTP_STATUS_OK)

    def get_or_404(self, db: Session, member_id: int) -> Member:
        member = member_crud.get(db, member_id)
        if member is None:
            raise AppException("成员不存在", HTTP_STATUS_NOT_FOUND)
        return member

    def _ensure_unique_email(self, db: Session, email: str) -> None:
        if member_crud.get_by_email(db, email) is not None:
            raise AppException("邮箱已被其他成员使用", HTTP_STATUS_CONFLICT)

    @staticmethod
    def _apply_status_rule(values: Dict[str, Any]) -> None:
        # 在册成员不保留停用信息；停用成员未给出时间时按当前时间记录
        if values["status"] == MemberStatusEnum.ACTIVE.value:
            values["deactivation_date"] = None
            values["deactivation_description"] = None
        elif values.get("deactivation_date") is None:
            values["deactivation_date"] = to_utc(tz_now())

    @staticmethod
    def serialize(member: Member) -> Dict[str, Any]:
        data = {name: getattr(member, name) for name in _PROFILE_FIELDS}
        data.update(
            {
                "id": member.id,
                "name": member.name,
                "email": member.email,
                "status": member.status,
                "start_date": format_datetime(member.start_date),
                "deactivation_date": format_datetime(member.deactivation_date),
                "deactivation_description": member.deactivation_description,
                "create_time": format_datetime(member.create_time),
                "update_time": format_datetime(member.update_time),
            }
        )
        return data


member_service = MemberService()
