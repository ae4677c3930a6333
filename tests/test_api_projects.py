"""API tests for projects, materials and the ownership guard."""

import pytest

from buildhub.domain.roles import Permission
from buildhub.interfaces.api import deps as api_deps

TOWER = {"name": "Riverside Tower", "budget": 850000, "client": "Acme Corp", "location": "Lisbon"}
CEMENT = {"name": "Cement", "current_stock": 5, "total_required": 100, "cost": 8.5, "supplier": "BuildCo"}


@pytest.fixture
def project(client, user_session):
    _, headers = user_session
    response = client.post("/api/projects", json=TOWER, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["project"]


def _titles(client, headers):
    return [n["title"] for n in client.get("/api/notifications", headers=headers).json()["notifications"]]


# =============================================================================
# Projects
# =============================================================================


class TestProjects:
    def test_create_applies_defaults(self, project):
        assert project["status"] == "planning"
        assert project["progress"] == 0
        assert project["spent"] == 0
        assert project["budget_utilization"] == 0
        assert project["materials"] == []

    def test_create_validation(self, client, user_session):
        _, headers = user_session
        response = client.post("/api/projects", json={"name": "Free", "budget": 0}, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "budget"

    def test_list_only_own(self, client, project, user_session, other_session):
        _, headers = user_session
        _, other_headers = other_session

        assert [p["id"] for p in client.get("/api/projects", headers=headers).json()["projects"]] == [project["id"]]
        assert client.get("/api/projects", headers=other_headers).json()["projects"] == []

    def test_update(self, client, project, user_session):
        _, headers = user_session
        response = client.put(
            f"/api/projects/{project['id']}",
            json={"status": "active", "progress": 40, "spent": 585000},
            headers=headers,
        )

        assert response.status_code == 200
        updated = response.json()["project"]
        assert updated["status"] == "active"
        assert updated["budget_utilization"] == 69
        assert _titles(client, headers)[0] == "Progress Update"

    def test_update_rejects_out_of_range_progress(self, client, project, user_session):
        _, headers = user_session
        response = client.put(f"/api/projects/{project['id']}", json={"progress": 120}, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "progress"

    def test_delete(self, client, project, user_session):
        _, headers = user_session

        assert client.delete(f"/api/projects/{project['id']}", headers=headers).status_code == 204
        assert client.get(f"/api/projects/{project['id']}", headers=headers).status_code == 404
        assert _titles(client, headers)[0] == "Project Deleted"


# =============================================================================
# Ownership guard
# =============================================================================


class TestOwnershipGuard:
    def test_other_user_gets_not_found(self, client, project, other_session):
        _, headers = other_session

        for method in ("get", "put", "delete"):
            kwargs = {"json": {"name": "Mine now"}} if method == "put" else {}
            response = getattr(client, method)(f"/api/projects/{project['id']}", headers=headers, **kwargs)
            assert response.status_code == 404
            assert response.json()["message"] == "Project not found or access denied"

    def test_admin_bypasses_ownership(self, client, project, admin_session):
        _, headers = admin_session
        response = client.get(f"/api/projects/{project['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["project"]["name"] == "Riverside Tower"

    def test_admin_lists_every_project(self, client, project, admin_session):
        _, headers = admin_session
        assert len(client.get("/api/projects", headers=headers).json()["projects"]) == 1

    def test_invalid_id(self, client, user_session):
        _, headers = user_session
        response = client.get("/api/projects/abc", headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid project ID"

    def test_unknown_id(self, client, user_session):
        _, headers = user_session
        assert client.get("/api/projects/9999", headers=headers).status_code == 404

    def test_requires_authentication(self, client, project):
        assert client.get(f"/api/projects/{project['id']}").status_code == 401

    def test_permission_is_checked_before_ownership(self, client, project, other_session, monkeypatch):
        _, headers = other_session
        monkeypatch.setattr(api_deps, "permissions_for", lambda role: frozenset({Permission.READ_OWN}))

        update = client.put(f"/api/projects/{project['id']}", json={"name": "Mine now"}, headers=headers)
        assert update.status_code == 403
        assert update.json()["required"] == "write:own"

        delete = client.delete(f"/api/projects/{project['id']}", headers=headers)
        assert delete.status_code == 403
        assert delete.json()["required"] == "delete:own"

        material = client.post(f"/api/projects/{project['id']}/materials", json=CEMENT, headers=headers)
        assert material.status_code == 403
        assert client.put("/api/materials/9999", json={"current_stock": 1}, headers=headers).status_code == 403

        # the read route has no permission gate
        assert client.get(f"/api/projects/{project['id']}", headers=headers).status_code == 404


# =============================================================================
# Materials
# =============================================================================


class TestMaterials:
    def test_create_derives_status_and_alerts(self, client, project, user_session):
        _, headers = user_session
        response = client.post(f"/api/projects/{project['id']}/materials", json=CEMENT, headers=headers)

        assert response.status_code == 201
        assert response.json()["material"]["status"] == "critical"
        assert _titles(client, headers)[:2] == ["Critical Stock Alert", "Material Added"]

    def test_project_embeds_materials(self, client, project, user_session):
        _, headers = user_session
        client.post(f"/api/projects/{project['id']}/materials", json=CEMENT, headers=headers)

        fetched = client.get(f"/api/projects/{project['id']}", headers=headers).json()["project"]
        assert [m["name"] for m in fetched["materials"]] == ["Cement"]
        listed = client.get(f"/api/projects/{project['id']}/materials", headers=headers).json()["materials"]
        assert len(listed) == 1

    def test_update_and_delete(self, client, project, user_session, other_session):
        _, headers = user_session
        material = client.post(
            f"/api/projects/{project['id']}/materials", json=CEMENT, headers=headers,
        ).json()["material"]

        _, other_headers = other_session
        hidden = client.put(f"/api/materials/{material['id']}", json={"current_stock": 90}, headers=other_headers)
        assert hidden.status_code == 404
        assert hidden.json()["message"] == "Material not found or access denied"

        response = client.put(f"/api/materials/{material['id']}", json={"current_stock": 90}, headers=headers)
        assert response.status_code == 200
        assert response.json()["material"]["status"] == "adequate"

        assert client.delete(f"/api/materials/{material['id']}", headers=headers).status_code == 204
        assert client.get("/api/materials", headers=headers).json()["materials"] == []

    def test_deleting_project_removes_materials(self, client, project, user_session):
        _, headers = user_session
        client.post(f"/api/projects/{project['id']}/materials", json=CEMENT, headers=headers)
        client.delete(f"/api/projects/{project['id']}", headers=headers)

        assert client.get("/api/materials", headers=headers).json()["materials"] == []
