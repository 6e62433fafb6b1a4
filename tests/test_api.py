"""HTTP surface tests: envelopes, status codes and the route table."""

import pytest
from fastapi.testclient import TestClient

import db
from api import create_app


@pytest.fixture
def client(session):
    app = create_app(init_tables=False)

    def _session_override():
        yield session

    app.dependency_overrides[db.get_session] = _session_override
    with TestClient(app) as c:
        yield c


def as_user(user):
    return {"X-User-Id": str(user.id)}


def test_requests_without_a_caller_are_rejected(client):
    r = client.get("/projects")
    assert r.status_code == 401
    assert r.json() == {"statusCode": 401, "message": "Unauthorized request"}

    r = client.get("/projects", headers={"X-User-Id": "12345"})
    assert r.status_code == 401


def test_empty_project_list_is_distinct_from_an_error(client, member_user):
    r = client.get("/projects", headers=as_user(member_user))
    assert r.status_code == 404
    assert r.json() == {"statusCode": 404, "data": [], "message": "No projects found"}


def test_project_routes(client, admin_user, member_user, dates):
    admin_h = as_user(admin_user)

    r = client.post("/projects", json={"name": "Apollo", "description": "Moon"}, headers=admin_h)
    assert r.status_code == 200
    body = r.json()
    assert body["statusCode"] == 200
    assert body["message"] == "Project created successfully"
    pid = body["data"]["id"]

    r = client.post("/projects", json={"name": "Nope"}, headers=as_user(member_user))
    assert r.status_code == 403
    assert "data" not in r.json()

    r = client.post("/projects", json={}, headers=admin_h)
    assert r.status_code == 400

    r = client.patch(f"/projects/{pid}", json={"name": "Artemis"}, headers=admin_h)
    assert r.json()["data"]["name"] == "Artemis"
    assert r.json()["data"]["description"] == "Moon"

    r = client.post(f"/projects/assign/{pid}", headers=admin_h, json={
        "userid": member_user.id,
        "startDate": dates[0].isoformat(),
        "endDate": dates[1].isoformat(),
    })
    assert r.status_code == 200
    assert r.json()["data"]["assignedTo"][0]["startDate"] == dates[0].isoformat()

    r = client.post(f"/projects/assign/{pid}", headers=admin_h, json={
        "userid": member_user.id,
        "startDate": dates[0].isoformat(),
        "endDate": dates[1].isoformat(),
    })
    assert r.status_code == 409
    assert r.json()["message"] == "User is already assigned to this project"

    r = client.get(f"/projects/{pid}", headers=as_user(member_user))
    assert r.status_code == 200
    assert "assignedTo" not in r.json()["data"]

    r = client.get("/projects", headers=as_user(member_user))
    assert [p["id"] for p in r.json()["data"]] == [pid]

    r = client.request("DELETE", f"/projects/assign/{pid}", json={"userId": admin_user.id},
                       headers=admin_h)
    assert r.status_code == 404
    assert r.json() == {"message": "User not assigned to this project"}

    r = client.request("DELETE", f"/projects/assign/{pid}", json={"userId": member_user.id},
                       headers=admin_h)
    assert r.status_code == 200
    assert r.json()["data"]["project"]["assignedTo"] == []

    r = client.delete(f"/projects/{pid}", headers=admin_h)
    assert r.json() == {"statusCode": 200, "data": {}, "message": "Project deleted successfully"}

    r = client.get(f"/projects/{pid}", headers=admin_h)
    assert r.status_code == 404
    assert r.json() == {"statusCode": 404, "message": "Project not found"}


def test_task_routes_and_scoring(client, admin_user, member_user, dates):
    admin_h, member_h = as_user(admin_user), as_user(member_user)
    pid = client.post("/projects", json={"name": "P"}, headers=admin_h).json()["data"]["id"]

    r = client.post(f"/tasks/{pid}", json={"name": "T1", "description": "first"}, headers=admin_h)
    assert r.status_code == 201
    tid = r.json()["data"]["task"]["id"]
    assert r.json()["data"]["task"]["score"] == 10

    client.post(f"/projects/assign/{pid}", headers=admin_h, json={
        "userid": member_user.id,
        "startDate": dates[0].isoformat(),
        "endDate": dates[1].isoformat(),
    })

    r = client.get(f"/tasks/t/{tid}", headers=member_h)
    assert r.json()["data"]["userProgress"]["status"] == "Pending"

    r = client.post(f"/tasks/t/{tid}", json={"status": "Finished"}, headers=member_h)
    assert r.status_code == 400

    r = client.post(f"/tasks/t/{tid}", json={"status": "Completed"}, headers=member_h)
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "Completed"

    r = client.post(f"/tasks/t/{tid}", json={"status": "Completed"}, headers=member_h)
    assert r.status_code == 409
    assert r.json()["message"] == "This task has already been completed"

    data = client.get(f"/projects/{pid}", headers=admin_h).json()["data"]
    assert data["totalScore"] == 10
    assert data["scoreByUser"] == [{"userId": member_user.id, "score": 10}]

    r = client.patch(f"/tasks/t/{tid}", json={"description": "updated"}, headers=admin_h)
    assert r.json()["data"]["description"] == "updated"

    r = client.delete(f"/tasks/t/{tid}", headers=member_h)
    assert r.status_code == 403

    r = client.delete(f"/tasks/t/{tid}", headers=admin_h)
    assert r.status_code == 200
    assert client.get(f"/projects/{pid}", headers=admin_h).json()["data"]["totalScore"] == 0


def test_malformed_ids_are_rejected_before_dispatch(client, admin_user):
    r = client.get("/tasks/t/not-an-id", headers=as_user(admin_user))
    assert r.status_code == 422


def test_malformed_bodies_get_the_error_envelope(client, admin_user, member_user):
    admin_h = as_user(admin_user)
    pid = client.post("/projects", json={"name": "P"}, headers=admin_h).json()["data"]["id"]

    r = client.post(f"/tasks/{pid}", json={"name": "T", "description": "d", "score": "ten"},
                    headers=admin_h)
    assert r.status_code == 400
    assert set(r.json()) == {"statusCode", "message"}
    assert r.json()["statusCode"] == 400
    assert "score" in r.json()["message"]

    r = client.post(f"/projects/assign/{pid}", headers=admin_h, json={
        "userid": member_user.id, "startDate": 20300110, "endDate": 20300201,
    })
    assert r.status_code == 400
    assert set(r.json()) == {"statusCode", "message"}
    assert "startDate" in r.json()["message"]

    r = client.post("/projects", content="{not json", headers={**admin_h, "Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["statusCode"] == 400
