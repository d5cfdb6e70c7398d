"""
Project CRUD, scoped to the owning user.
"""

import uuid

import pytest
from sqlalchemy import func, select

from app.models import ActivityLog, Task


class TestProjectCrud:

    @pytest.mark.asyncio
    async def test_create_project(self, client, owner):
        user, headers = owner

        response = await client.post(
            "/projects",
            json={"name": "  Website Redesign  ", "description": "New look"},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Project created successfully"
        assert body["project"]["name"] == "Website Redesign"
        assert body["project"]["description"] == "New look"
        assert body["project"]["ownerId"] == user["id"]
        assert body["project"]["owner"]["email"] == "owner@example.com"

    @pytest.mark.asyncio
    async def test_blank_name_is_rejected(self, client, owner):
        _, headers = owner

        response = await client.post("/projects", json={"name": "   "}, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"]

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.post("/projects", json={"name": "Nope"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_only_returns_own_projects(self, client, owner, project, register):
        _, other_headers = await register("other@example.com")
        await client.post("/projects", json={"name": "Other's Project"}, headers=other_headers)

        _, headers = owner
        response = await client.get("/projects", headers=headers)

        assert response.status_code == 200
        projects = response.json()["projects"]
        assert [p["id"] for p in projects] == [project["id"]]
        assert projects[0]["tasks"] == []

    @pytest.mark.asyncio
    async def test_get_project_includes_tasks(self, client, owner, project):
        _, headers = owner
        await client.post(
            "/tasks",
            json={"title": "First", "projectId": project["id"]},
            headers=headers,
        )

        response = await client.get(f"/projects/{project['id']}", headers=headers)

        assert response.status_code == 200
        detail = response.json()["project"]
        assert detail["name"] == "Test Project"
        assert [t["title"] for t in detail["tasks"]] == ["First"]
        assert detail["tasks"][0]["assignee"] is None

    @pytest.mark.asyncio
    async def test_update_project(self, client, owner, project):
        _, headers = owner

        response = await client.put(
            f"/projects/{project['id']}",
            json={"name": "Renamed", "description": "Updated"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Project updated successfully"
        assert response.json()["project"]["name"] == "Renamed"
        assert response.json()["project"]["description"] == "Updated"

    @pytest.mark.asyncio
    async def test_update_requires_name(self, client, owner, project):
        _, headers = owner

        response = await client.put(
            f"/projects/{project['id']}",
            json={"description": "No name"},
            headers=headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_project(self, client, owner, project):
        _, headers = owner

        response = await client.delete(f"/projects/{project['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Project deleted successfully"}
        missing = await client.get(f"/projects/{project['id']}", headers=headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_cascades_to_tasks_and_activity(self, client, owner, project, test_session):
        _, headers = owner
        task_ids = []
        for title in ("One", "Two"):
            created = await client.post(
                "/tasks",
                json={"title": title, "projectId": project["id"]},
                headers=headers,
            )
            task_ids.append(created.json()["task"]["id"])
        await client.patch(f"/tasks/{task_ids[0]}/complete", headers=headers)

        response = await client.delete(f"/projects/{project['id']}", headers=headers)
        assert response.status_code == 200

        for task_id in task_ids:
            fetched = await client.get(f"/tasks/{task_id}", headers=headers)
            assert fetched.status_code == 404

        remaining_tasks = await test_session.execute(select(func.count()).select_from(Task))
        remaining_logs = await test_session.execute(select(func.count()).select_from(ActivityLog))
        assert remaining_tasks.scalar_one() == 0
        assert remaining_logs.scalar_one() == 0


class TestProjectIsolation:
    """Another user's project is indistinguishable from one that does not exist."""

    @pytest.mark.asyncio
    async def test_foreign_project_reads_as_not_found(self, client, project, register):
        _, intruder = await register("intruder@example.com")

        foreign = await client.get(f"/projects/{project['id']}", headers=intruder)
        missing = await client.get(f"/projects/{uuid.uuid4()}", headers=intruder)

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json() == {"error": "Project not found"}

    @pytest.mark.asyncio
    async def test_foreign_project_cannot_be_updated(self, client, owner, project, register):
        _, intruder = await register("intruder@example.com")

        response = await client.put(
            f"/projects/{project['id']}",
            json={"name": "Hijacked"},
            headers=intruder,
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Project not found"}
        _, headers = owner
        unchanged = await client.get(f"/projects/{project['id']}", headers=headers)
        assert unchanged.json()["project"]["name"] == "Test Project"

    @pytest.mark.asyncio
    async def test_foreign_project_cannot_be_deleted(self, client, owner, project, register):
        _, intruder = await register("intruder@example.com")

        response = await client.delete(f"/projects/{project['id']}", headers=intruder)

        assert response.status_code == 404
        _, headers = owner
        still_there = await client.get(f"/projects/{project['id']}", headers=headers)
        assert still_there.status_code == 200
