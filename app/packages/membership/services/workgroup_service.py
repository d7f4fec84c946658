"""工作组相关业务逻辑：增删改查、树形结构与面包屑路径。"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.membership.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from app.packages.membership.core.enums import WorkgroupStatusEnum
from app.packages.membership.core.exceptions import AppException
from app.packages.membership.core.logger import logger
from app.packages.membership.core.responses import create_response
from app.packages.membership.core.timezone import format_datetime, now as tz_now, to_utc
from app.packages.membership.crud.members import member_crud
from app.packages.membership.crud.workgroups import workgroup_crud
from app.packages.membership.models.workgroup import Workgroup
from app.packages.membership.services.workgroup_hierarchy import (
    CyclicAncestryError,
    WorkgroupRecord,
    build_tree,
    collect_descendant_ids,
    get_ancestor_path,
)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class WorkgroupService:
    """封装工作组的查询与维护逻辑。"""

    def list_workgroups(
        self,
        db: Session,
        *,
        keyword: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 100,
    ) -> dict[str, Any]:
        items, total = workgroup_crud.list_with_filters(
            db,
            keyword=keyword,
            status=_enum_value(status),
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        payload = {
            "total": total,
            "page": page,
            "size": page_size,
            "list": [self._serialize(item) for item in items],
        }
        return create_response("获取工作组列表成功", payload, HTTP_STATUS_OK)

    def list_tree(self, db: Session) -> dict[str, Any]:
        """返回工作组的树形结构，同级节点按快照顺序（id 升序）排列。"""
        roots = build_tree(self._snapshot(db))
        return create_response("获取工作组树成功", [root.to_dict() for root in roots], HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, workgroup_id: int) -> dict[str, Any]:
        workgroup = self._get_or_404(db, workgroup_id)
        return create_response("获取工作组详情成功", self._serialize(workgroup), HTTP_STATUS_OK)

    def get_path(self, db: Session, *, workgroup_id: int) -> dict[str, Any]:
        """返回从顶层工作组到当前工作组的面包屑路径。"""
        self._get_or_404(db, workgroup_id)
        try:
            path = get_ancestor_path(workgroup_id, self._snapshot(db))
        except CyclicAncestryError as exc:
            logger.error("Workgroup %s has cyclic ancestry: %s", workgroup_id, exc.cycle)
            raise AppException("工作组上级关系存在环路", HTTP_STATUS_CONFLICT, data={"cycle": exc.cycle}) from exc
        return create_response("获取工作组路径成功", [record.to_dict() for record in path], HTTP_STATUS_OK)

    def list_children(self, db: Session, *, workgroup_id: int) -> dict[str, Any]:
        self._get_or_404(db, workgroup_id)
        children = workgroup_crud.list_children(db, workgroup_id)
        return create_response("获取下级工作组成功", [self._serialize(child) for child in children], HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        parent_id = payload.get("parent_id")
        if parent_id is not None:
            self._get_or_404(db, parent_id, msg="上级工作组不存在")
        self._ensure_coordinator(db, payload.get("coordinator_id"))

        status = _enum_value(payload.get("status")) or WorkgroupStatusEnum.ACTIVE.value
        values = {
            "name": payload["name"],
            "description": payload.get("description"),
            "status": status,
            "creation_date": to_utc(payload.get("creation_date")) or to_utc(tz_now()),
            "dissolution_date": to_utc(payload.get("dissolution_date")),
            "parent_id": parent_id,
            "coordinator_id": payload.get("coordinator_id"),
        }
        self._apply_status_rule(values)

        try:
            workgroup = workgroup_crud.create(db, values)
        except IntegrityError as exc:
            db.rollback()
            raise AppException("工作组数据冲突", HTTP_STATUS_CONFLICT) from exc
        logger.info("Created workgroup %s (%s)", workgroup.id, workgroup.name)
        return create_response("创建工作组成功", self._serialize(workgroup), HTTP_STATUS_OK)

    def update(self, db: Session, *, workgroup_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        """按提交字段更新工作组；修改上级时拒绝自引用与环路。"""
        workgroup = self._get_or_404(db, workgroup_id)

        if "parent_id" in payload:
            self._ensure_valid_parent(db, workgroup_id, payload["parent_id"])
            workgroup.parent_id = payload["parent_id"]
        if "coordinator_id" in payload:
            self._ensure_coordinator(db, payload["coordinator_id"])
            workgroup.coordinator_id = payload["coordinator_id"]
        if payload.get("name") is not None:
            workgroup.name = payload["name"]
        if "description" in payload:
            workgroup.description = payload["description"]

        values = {
            "status": _enum_value(payload.get("status")) or workgroup.status,
            "dissolution_date": (
                to_utc(payload["dissolution_date"]) if "dissolution_date" in payload else workgroup.dissolution_date
            ),
        }
        self._apply_status_rule(values)
        workgroup.status = values["status"]
        workgroup.dissolution_date = values["dissolution_date"]

        try:
            saved = workgroup_crud.save(db, workgroup)
        except IntegrityError as exc:
            db.rollback()
            raise AppException("工作组数据冲突", HTTP_STATUS_CONFLICT) from exc
        logger.info("Updated workgroup %s", workgroup_id)
        return create_response("更新工作组成功", self._serialize(saved), HTTP_STATUS_OK)

    def delete(self, db: Session, *, workgroup_id: int) -> dict[str, Any]:
        """软删除工作组，仍有下级工作组时拒绝删除。"""
        workgroup = self._get_or_404(db, workgroup_id)
        if workgroup_crud.has_children(db, workgroup_id):
            raise AppException("该工作组包含下级工作组，无法删除", HTTP_STATUS_BAD_REQUEST)

        workgroup_crud.remove(db, workgroup)
        logger.info("Deleted workgroup %s", workgroup_id)
        return create_response("删除工作组成功", {"id": workgroup_id}, HTTP_STATUS_OK)

    # ------------------------------------------------------------------
    # 内部工具
    # ------------------------------------------------------------------

    def _snapshot(self, db: Session) -> List[WorkgroupRecord]:
        return [WorkgroupRecord.from_model(item) for item in workgroup_crud.list_all(db)]

    def _get_or_404(self, db: Session, workgroup_id: int, *, msg: str = "工作组不存在") -> Workgroup:
        workgroup = workgroup_crud.get(db, workgroup_id)
        if workgroup is None:
            raise AppException(msg, HTTP_STATUS_NOT_FOUND)
        return workgroup

    def _ensure_valid_parent(self, db: Session, workgroup_id: int, parent_id: Optional[int]) -> None:
        if parent_id is None:
            return
        if parent_id == workgroup_id:
            raise AppException("不能将工作组设为自身的上级", HTTP_STATUS_BAD_REQUEST)
        self._get_or_404(db, parent_id, msg="上级工作组不存在")
        if parent_id in collect_descendant_ids(workgroup_id, self._snapshot(db)):
            raise AppException("不能将下级工作组设为上级", HTTP_STATUS_BAD_REQUEST)

    def _ensure_coordinator(self, db: Session, coordinator_id: Optional[int]) -> None:
        if coordinator_id is not None and member_crud.get(db, coordinator_id) is None:
            raise AppException("协调人成员不存在", HTTP_STATUS_NOT_FOUND)

    @staticmethod
    def _apply_status_rule(values: Dict[str, Any]) -> None:
        # 停用时补齐解散时间，启用时清空
        if values["status"] == WorkgroupStatusEnum.ACTIVE.value:
            values["dissolution_date"] = None
        elif values.get("dissolution_date") is None:
            values["dissolution_date"] = to_utc(tz_now())

    @staticmethod
    def _serialize(workgroup: Workgroup) -> Dict[str, Any]:
        return {
            "id": workgroup.id,
            "name": workgroup.name,
            "description": workgroup.description,
            "status": workgroup.status,
            "creation_date": format_datetime(workgroup.creation_date),
            "dissolution_date": format_datetime(workgroup.dissolution_date),
            "parent_id": workgroup.parent_id,
            "coordinator_id": workgroup.coordinator_id,
            "create_time": format_datetime(workgroup.create_time),
            "update_time": format_datetime(workgroup.update_time),
        }


workgroup_service = WorkgroupService()
