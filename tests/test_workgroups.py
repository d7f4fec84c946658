"""工作组接口的集成测试用例。"""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from app.packages.membership.models.workgroup import Workgroup


def _create_workgroup(client: TestClient, name: str, parent_id: int | None = None, **extra) -> dict:
    response = client.post("/api/v1/workgroups", json={"name": name, "parent_id": parent_id, **extra})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def _find(nodes: list[dict], node_id: int) -> dict | None:
    for node in nodes:
        if node["id"] == node_id:
            return node
        found = _find(node["children"], node_id)
        if found is not None:
            return found
    return None


def test_root_workgroup_is_seeded(client: TestClient):
    """初始化后至少存在一个顶层工作组。"""
    response = client.get("/api/v1/workgroups/tree")

    assert response.status_code == 200
    payload = response.json()
    assert payload["code"] == 200
    assert payload["msg"] == "获取工作组树成功"
    assert any(node["name"] == "Root group" and node["parent_id"] is None for node in payload["data"])


def test_workgroup_crud_flow(client: TestClient):
    """验证工作组的增删改查流程。"""
    suffix = uuid.uuid4().hex[:6]
    created = _create_workgroup(client, f"  Finanzas-{suffix}  ", description="Budget")
    assert created["name"] == f"Finanzas-{suffix}"
    assert created["status"] == "ACTIVE"
    assert created["dissolution_date"] is None
    assert created["creation_date"] is not None

    detail = client.get(f"/api/v1/workgroups/{created['id']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["description"] == "Budget"

    listed = client.get("/api/v1/workgroups", params={"keyword": f"finanzas-{suffix}"})
    assert listed.status_code == 200
    list_payload = listed.json()["data"]
    assert list_payload["total"] == 1
    assert list_payload["list"][0]["id"] == created["id"]

    updated = client.put(f"/api/v1/workgroups/{created['id']}", json={"status": "INACTIVE"})
    assert updated.status_code == 200
    updated_data = updated.json()["data"]
    assert updated_data["status"] == "INACTIVE"
    assert updated_data["dissolution_date"] is not None
    assert updated_data["description"] == "Budget"

    inactive = client.get("/api/v1/workgroups", params={"keyword": suffix, "status": "INACTIVE"})
    assert [item["id"] for item in inactive.json()["data"]["list"]] == [created["id"]]

    reactivated = client.put(f"/api/v1/workgroups/{created['id']}", json={"status": "ACTIVE"})
    assert reactivated.json()["data"]["dissolution_date"] is None

    deleted = client.delete(f"/api/v1/workgroups/{created['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["data"] == {"id": created["id"]}

    missing = client.get(f"/api/v1/workgroups/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["msg"] == "工作组不存在"


def test_tree_children_and_path(client: TestClient):
    """树形结构、下级列表与面包屑保持一致。"""
    suffix = uuid.uuid4().hex[:6]
    top = _create_workgroup(client, f"Top-{suffix}")
    middle = _create_workgroup(client, f"Middle-{suffix}", parent_id=top["id"])
    leaf_a = _create_workgroup(client, f"LeafA-{suffix}", parent_id=middle["id"])
    leaf_b = _create_workgroup(client, f"LeafB-{suffix}", parent_id=middle["id"])

    tree = client.get("/api/v1/workgroups/tree").json()["data"]
    top_node = _find(tree, top["id"])
    assert top_node is not None
    assert top_node in tree
    assert [child["id"] for child in top_node["children"]] == [middle["id"]]
    assert [child["id"] for child in top_node["children"][0]["children"]] == [leaf_a["id"], leaf_b["id"]]

    children = client.get(f"/api/v1/workgroups/{middle['id']}/children").json()["data"]
    assert [child["id"] for child in children] == [leaf_a["id"], leaf_b["id"]]

    path_resp = client.get(f"/api/v1/workgroups/{leaf_b['id']}/path")
    assert path_resp.status_code == 200
    path = path_resp.json()["data"]
    assert [item["id"] for item in path] == [top["id"], middle["id"], leaf_b["id"]]
    assert path[0]["parent_id"] is None

    root_path = client.get(f"/api/v1/workgroups/{top['id']}/path").json()["data"]
    assert [item["id"] for item in root_path] == [top["id"]]


def test_path_for_unknown_workgroup_returns_404(client: TestClient):
    response = client.get("/api/v1/workgroups/999999/path")

    assert response.status_code == 404


def test_path_reports_cycle_as_conflict(client: TestClient, db_session_fixture):
    """数据库中已存在的环路不会导致死循环，而是返回 409。"""
    suffix = uuid.uuid4().hex[:6]
    first = _create_workgroup(client, f"CycleA-{suffix}")
    second = _create_workgroup(client, f"CycleB-{suffix}", parent_id=first["id"])

    # 绕过服务层校验直接写入环路
    row = db_session_fixture.get(Workgroup, first["id"])
    row.parent_id = second["id"]
    db_session_fixture.commit()

    try:
        response = client.get(f"/api/v1/workgroups/{second['id']}/path")
        assert response.status_code == 409
        payload = response.json()
        assert payload["msg"] == "工作组上级关系存在环路"
        assert set(payload["data"]["cycle"]) == {first["id"], second["id"]}

        # 环上节点的上级均可解析，因此不会出现在树的根节点中
        tree = client.get("/api/v1/workgroups/tree").json()["data"]
        assert _find(tree, first["id"]) is None
    finally:
        db_session_fixture.rollback()
        row = db_session_fixture.get(Workgroup, first["id"])
        row.parent_id = None
        db_session_fixture.commit()


def test_reparenting_rejects_self_and_descendants(client: TestClient):
    suffix = uuid.uuid4().hex[:6]
    top = _create_workgroup(client, f"ReTop-{suffix}")
    child = _create_workgroup(client, f"ReChild-{suffix}", parent_id=top["id"])
    grandchild = _create_workgroup(client, f"ReGrand-{suffix}", parent_id=child["id"])

    self_parent = client.put(f"/api/v1/workgroups/{top['id']}", json={"parent_id": top["id"]})
    assert self_parent.status_code == 400
    assert self_parent.json()["msg"] == "不能将工作组设为自身的上级"

    descendant_parent = client.put(f"/api/v1/workgroups/{top['id']}", json={"parent_id": grandchild["id"]})
    assert descendant_parent.status_code == 400
    assert descendant_parent.json()["msg"] == "不能将下级工作组设为上级"

    promoted = client.put(f"/api/v1/workgroups/{grandchild['id']}", json={"parent_id": None})
    assert promoted.status_code == 200
    assert promoted.json()["data"]["parent_id"] is None

    moved = client.put(f"/api/v1/workgroups/{top['id']}", json={"parent_id": grandchild["id"]})
    assert moved.status_code == 200
    path = client.get(f"/api/v1/workgroups/{child['id']}/path").json()["data"]
    assert [item["id"] for item in path] == [grandchild["id"], top["id"], child["id"]]


def test_create_with_unknown_parent_returns_404(client: TestClient):
    response = client.post("/api/v1/workgroups", json={"name": "Orphan", "parent_id": 999999})

    assert response.status_code == 404
    assert response.json()["msg"] == "上级工作组不存在"


def test_delete_workgroup_with_children_is_rejected(client: TestClient):
    suffix = uuid.uuid4().hex[:6]
    parent = _create_workgroup(client, f"DelParent-{suffix}")
    _create_workgroup(client, f"DelChild-{suffix}", parent_id=parent["id"])

    response = client.delete(f"/api/v1/workgroups/{parent['id']}")

    assert response.status_code == 400
    assert response.json()["msg"] == "该工作组包含下级工作组，无法删除"


def test_create_workgroup_validation_error(client: TestClient):
    response = client.post("/api/v1/workgroups", json={"name": "   "})

    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == 422
    assert payload["msg"] == "请求参数验证失败"
