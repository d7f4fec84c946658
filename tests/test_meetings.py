"""会议与出勤接口的集成测试用例。"""

import uuid

from fastapi.testclient import TestClient


def _create_workgroup(client: TestClient) -> int:
    response = client.post("/api/v1/workgroups", json={"name": f"Board-{uuid.uuid4().hex[:6]}"})
    return response.json()["data"]["id"]


def _create_member(client: TestClient, name: str) -> int:
    response = client.post(
        "/api/v1/members",
        json={"name": name, "email": f"{name.lower()}.{uuid.uuid4().hex[:8]}@example.org"},
    )
    return response.json()["data"]["id"]


def test_meeting_crud_flow(client: TestClient):
    """验证会议的增删改查与日期过滤。"""
    workgroup_id = _create_workgroup(client)

    create_resp = client.post(
        "/api/v1/meetings",
        json={"workgroup_id": workgroup_id, "date": "2024-04-10T18:00:00Z", "title": "Quarterly review"},
    )
    assert create_resp.status_code == 200
    meeting = create_resp.json()["data"]
    assert meeting["type"] == "PRESENTIAL"
    assert meeting["title"] == "Quarterly review"

    client.post(
        "/api/v1/meetings",
        json={"workgroup_id": workgroup_id, "date": "2024-09-10T18:00:00Z", "type": "ONLINE"},
    )

    listed = client.get("/api/v1/meetings", params={"workgroup_id": workgroup_id}).json()["data"]
    assert len(listed) == 2
    assert listed[0]["id"] == meeting["id"]

    ranged = client.get(
        "/api/v1/meetings",
        params={"workgroup_id": workgroup_id, "start": "2024-01-01T00:00:00Z", "end": "2024-06-30T00:00:00Z"},
    ).json()["data"]
    assert [item["id"] for item in ranged] == [meeting["id"]]

    update_resp = client.put(
        f"/api/v1/meetings/{meeting['id']}",
        json={"minutes": "Budget approved", "type": "ONLINE"},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["minutes"] == "Budget approved"
    assert updated["type"] == "ONLINE"
    assert updated["title"] == "Quarterly review"

    delete_resp = client.delete(f"/api/v1/meetings/{meeting['id']}")
    assert delete_resp.status_code == 200
    assert client.get(f"/api/v1/meetings/{meeting['id']}").status_code == 404


def test_meeting_requires_existing_workgroup(client: TestClient):
    response = client.post("/api/v1/meetings", json={"workgroup_id": 999999, "date": "2024-04-10T18:00:00Z"})

    assert response.status_code == 404
    assert response.json()["msg"] == "工作组不存在"


def test_meeting_range_must_be_ordered(client: TestClient):
    response = client.get(
        "/api/v1/meetings",
        params={"start": "2024-06-30T00:00:00Z", "end": "2024-01-01T00:00:00Z"},
    )

    assert response.status_code == 400


def test_attendance_crud_flow(client: TestClient):
    """验证出勤记录的增删改查。"""
    workgroup_id = _create_workgroup(client)
    meeting_id = client.post(
        "/api/v1/meetings",
        json={"workgroup_id": workgroup_id, "date": "2024-05-01T10:00:00Z"},
    ).json()["data"]["id"]
    alice = _create_member(client, "Alice")
    bob = _create_member(client, "Bob")

    first = client.post("/api/v1/attendances", json={"member_id": alice, "meeting_id": meeting_id})
    assert first.status_code == 200
    assert first.json()["data"]["present"] is True
    assert first.json()["data"]["member_name"] == "Alice"

    second = client.post(
        "/api/v1/attendances",
        json={"member_id": bob, "meeting_id": meeting_id, "present": False, "justification": "Travelling"},
    )
    assert second.status_code == 200

    duplicate = client.post("/api/v1/attendances", json={"member_id": alice, "meeting_id": meeting_id})
    assert duplicate.status_code == 409
    assert duplicate.json()["msg"] == "出勤记录已存在"

    by_meeting = client.get(f"/api/v1/meetings/{meeting_id}/attendances").json()["data"]
    assert [(item["member_id"], item["present"]) for item in by_meeting] == [(alice, True), (bob, False)]

    update_resp = client.put(f"/api/v1/attendances/{bob}/{meeting_id}", json={"present": True, "justification": None})
    assert update_resp.status_code == 200
    assert update_resp.json()["data"]["present"] is True
    assert update_resp.json()["data"]["justification"] is None

    by_member = client.get("/api/v1/attendances", params={"member_id": bob}).json()["data"]
    assert len(by_member) == 1

    delete_resp = client.delete(f"/api/v1/attendances/{alice}/{meeting_id}")
    assert delete_resp.status_code == 200
    assert delete_resp.json()["data"] == {"member_id": alice, "meeting_id": meeting_id}
    assert client.get(f"/api/v1/attendances/{alice}/{meeting_id}").status_code == 404


def test_attendance_requires_existing_meeting(client: TestClient):
    member_id = _create_member(client, "Carol")

    response = client.post("/api/v1/attendances", json={"member_id": member_id, "meeting_id": 999999})

    assert response.status_code == 404
    assert response.json()["msg"] == "会议不存在"
