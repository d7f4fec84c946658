"""成员关系接口的集成测试用例。"""

import uuid
from urllib.parse import quote

from fastapi.testclient import TestClient


def _setup_member_and_workgroup(client: TestClient) -> tuple[int, int]:
    suffix = uuid.uuid4().hex[:8]
    member = client.post(
        "/api/v1/members",
        json={"name": "Luis", "email": f"luis.{suffix}@example.org"},
    ).json()["data"]
    workgroup = client.post("/api/v1/workgroups", json={"name": f"Comms-{suffix}"}).json()["data"]
    return member["id"], workgroup["id"]


def _key_path(data: dict) -> str:
    return f"/api/v1/memberships/{data['member_id']}/{data['workgroup_id']}/{quote(data['start_date'], safe='')}"


def test_membership_crud_flow(client: TestClient):
    """验证成员关系的增删改查流程。"""
    member_id, workgroup_id = _setup_member_and_workgroup(client)

    create_resp = client.post(
        "/api/v1/memberships",
        json={"member_id": member_id, "workgroup_id": workgroup_id, "start_date": "2024-01-01T00:00:00Z"},
    )
    assert create_resp.status_code == 200
    created = create_resp.json()["data"]
    assert created["role"] == "GUEST"
    assert created["end_date"] is None
    assert created["start_date"].startswith("2024-01-01T00:00:00")

    detail_resp = client.get(_key_path(created))
    assert detail_resp.status_code == 200
    assert detail_resp.json()["data"]["member_id"] == member_id

    update_resp = client.put(
        _key_path(created),
        json={"role": "PRESIDENT", "end_date": "2024-06-30T00:00:00Z", "end_date_description": "Term ended"},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["role"] == "PRESIDENT"
    assert updated["end_date"].startswith("2024-06-30")
    assert updated["end_date_description"] == "Term ended"

    # 已结束的成员关系不出现在有效列表中
    active_resp = client.get("/api/v1/memberships", params={"workgroup_id": workgroup_id, "active_only": True})
    assert active_resp.json()["data"] == []
    all_resp = client.get("/api/v1/memberships", params={"workgroup_id": workgroup_id})
    assert len(all_resp.json()["data"]) == 1

    reopen_resp = client.put(_key_path(created), json={"end_date": None})
    assert reopen_resp.json()["data"]["end_date"] is None
    active_resp = client.get("/api/v1/memberships", params={"workgroup_id": workgroup_id, "active_only": True})
    assert len(active_resp.json()["data"]) == 1

    delete_resp = client.delete(_key_path(created))
    assert delete_resp.status_code == 200
    assert delete_resp.json()["data"]["member_id"] == member_id

    missing_resp = client.get(_key_path(created))
    assert missing_resp.status_code == 404
    assert missing_resp.json()["msg"] == "成员关系不存在"


def test_membership_same_key_conflicts(client: TestClient):
    member_id, workgroup_id = _setup_member_and_workgroup(client)
    body = {"member_id": member_id, "workgroup_id": workgroup_id, "start_date": "2023-05-01T09:00:00Z"}

    assert client.post("/api/v1/memberships", json=body).status_code == 200
    duplicate = client.post("/api/v1/memberships", json=body)

    assert duplicate.status_code == 409
    assert duplicate.json()["msg"] == "成员关系已存在"

    # 同一成员可在不同时间再次加入
    rejoin = client.post("/api/v1/memberships", json={**body, "start_date": "2025-01-01T00:00:00Z"})
    assert rejoin.status_code == 200


def test_membership_requires_existing_member_and_workgroup(client: TestClient):
    member_id, workgroup_id = _setup_member_and_workgroup(client)

    unknown_member = client.post("/api/v1/memberships", json={"member_id": 999999, "workgroup_id": workgroup_id})
    assert unknown_member.status_code == 404
    assert unknown_member.json()["msg"] == "成员不存在"

    unknown_group = client.post("/api/v1/memberships", json={"member_id": member_id, "workgroup_id": 999999})
    assert unknown_group.status_code == 404
    assert unknown_group.json()["msg"] == "工作组不存在"


def test_membership_end_date_before_start_is_rejected(client: TestClient):
    member_id, workgroup_id = _setup_member_and_workgroup(client)

    response = client.post(
        "/api/v1/memberships",
        json={
            "member_id": member_id,
            "workgroup_id": workgroup_id,
            "start_date": "2024-03-01T00:00:00Z",
            "end_date": "2024-02-01T00:00:00Z",
        },
    )

    assert response.status_code == 400
    assert response.json()["msg"] == "结束时间不能早于开始时间"


def test_membership_defaults_start_date_to_now(client: TestClient):
    member_id, workgroup_id = _setup_member_and_workgroup(client)

    created = client.post(
        "/api/v1/memberships",
        json={"member_id": member_id, "workgroup_id": workgroup_id, "role": "ASSISTANT"},
    ).json()["data"]

    assert created["start_date"] is not None
    assert client.get(_key_path(created)).status_code == 200
