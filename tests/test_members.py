"""成员接口的集成测试用例。"""

import uuid

from fastapi.testclient import TestClient


def _member_payload(**overrides) -> dict:
    suffix = uuid.uuid4().hex[:8]
    payload = {
        "name": "Ana",
        "surname": "García",
        "email": f"ana.{suffix}@example.org",
        "dni": f"DNI-{suffix}",
        "position": "Engineer",
        "phone1": "600000000",
        "phone1_description": "mobile",
    }
    payload.update(overrides)
    return payload


def test_member_crud_flow(client: TestClient):
    """验证成员的增删改查流程。"""
    body = _member_payload()
    create_resp = client.post("/api/v1/members", json=body)
    assert create_resp.status_code == 200
    created = create_resp.json()["data"]
    assert created["email"] == body["email"]
    assert created["status"] == "ACTIVE"
    assert created["start_date"] is not None
    assert created["deactivation_date"] is None
    member_id = created["id"]

    list_resp = client.get("/api/v1/members", params={"keyword": body["email"]})
    assert list_resp.status_code == 200
    listed = list_resp.json()["data"]
    assert listed["total"] == 1
    assert listed["list"][0]["id"] == member_id

    update_resp = client.put(
        f"/api/v1/members/{member_id}",
        json={"position": "Manager", "phone2": "  ", "status": "INACTIVE", "deactivation_description": "Moved"},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["position"] == "Manager"
    assert updated["phone2"] is None
    assert updated["status"] == "INACTIVE"
    assert updated["deactivation_date"] is not None
    assert updated["deactivation_description"] == "Moved"
    assert updated["surname"] == "García"

    # 恢复在册时清除停用信息
    reactivate_resp = client.put(f"/api/v1/members/{member_id}", json={"status": "ACTIVE"})
    reactivated = reactivate_resp.json()["data"]
    assert reactivated["deactivation_date"] is None
    assert reactivated["deactivation_description"] is None

    delete_resp = client.delete(f"/api/v1/members/{member_id}")
    assert delete_resp.status_code == 200
    assert delete_resp.json()["data"]["id"] == member_id

    missing_resp = client.get(f"/api/v1/members/{member_id}")
    assert missing_resp.status_code == 404
    assert missing_resp.json()["msg"] == "成员不存在"


def test_active_member_drops_deactivation_fields_on_create(client: TestClient):
    body = _member_payload(deactivation_date="2024-01-01T00:00:00Z", deactivation_description="stale")

    created = client.post("/api/v1/members", json=body).json()["data"]

    assert created["deactivation_date"] is None
    assert created["deactivation_description"] is None


def test_member_email_must_be_unique(client: TestClient):
    body = _member_payload()
    assert client.post("/api/v1/members", json=body).status_code == 200

    duplicate = client.post("/api/v1/members", json=_member_payload(email=body["email"].upper()))

    assert duplicate.status_code == 409
    assert duplicate.json()["msg"] == "邮箱已被其他成员使用"


def test_member_email_format_is_validated(client: TestClient):
    response = client.post("/api/v1/members", json=_member_payload(email="not-an-email"))

    assert response.status_code == 422


def test_member_memberships_endpoint(client: TestClient):
    member = client.post("/api/v1/members", json=_member_payload()).json()["data"]
    workgroup = client.post("/api/v1/workgroups", json={"name": f"MemberWG-{uuid.uuid4().hex[:6]}"}).json()["data"]
    client.post(
        "/api/v1/memberships",
        json={"member_id": member["id"], "workgroup_id": workgroup["id"], "role": "SECRETARY"},
    )

    response = client.get(f"/api/v1/members/{member['id']}/memberships")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 1
    assert data[0]["workgroup_name"] == workgroup["name"]
    assert data[0]["role"] == "SECRETARY"


def test_member_email_case_change_is_saved(client: TestClient):
    suffix = uuid.uuid4().hex[:6]
    created = client.post("/api/v1/members", json=_member_payload(email=f"Ana-{suffix}@Example.com")).json()["data"]

    response = client.put(f"/api/v1/members/{created['id']}", json={"email": f"ana-{suffix}@example.com"})

    assert response.status_code == 200
    assert response.json()["data"]["email"] == f"ana-{suffix}@example.com"
    detail = client.get(f"/api/v1/members/{created['id']}").json()["data"]
    assert detail["email"] == f"ana-{suffix}@example.com"
