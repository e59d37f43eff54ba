"""Tests for the /api/tasks endpoints."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.errors import StorageError
from taskboard.server.api import create_app
from taskboard.storage import InMemoryTaskRepository, YamlTaskRepository


@pytest.fixture(params=["memory", "yaml"])
def app(request, tmp_path: Path):
    """Create a test app backed by each storage backend."""
    if request.param == "memory":
        repository = InMemoryTaskRepository()
    else:
        repository = YamlTaskRepository(tmp_path / "tasks.yaml")
    return create_app(repository=repository, enable_cors=False)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.anyio
class TestTaskCRUD:
    async def test_list_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/api/tasks")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_create_with_only_title_applies_defaults(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json={"title": "  Set up Docker network  "})
        assert resp.status_code == 201
        task = resp.json()
        assert task["title"] == "Set up Docker network"
        assert task["description"] == ""
        assert task["priority"] == "medium"
        assert task["status"] == "todo"
        assert task["dueDate"] is None
        assert task["id"]
        assert task["createdAt"]

    async def test_create_full_payload(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json={
            "title": "Ship",
            "description": " write notes ",
            "priority": "high",
            "status": "in-progress",
            "dueDate": "2026-11-02",
        })
        assert resp.status_code == 201
        task = resp.json()
        assert task["description"] == "write notes"
        assert task["priority"] == "high"
        assert task["status"] == "in-progress"
        assert task["dueDate"] == "2026-11-02"

    async def test_create_ignores_invalid_enums_and_dates(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json={
            "title": "Lenient",
            "priority": "urgent",
            "status": "blocked",
            "dueDate": "not a date",
        })
        assert resp.status_code == 201
        task = resp.json()
        assert task["priority"] == "medium"
        assert task["status"] == "todo"
        assert task["dueDate"] is None

    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"title": 42}, {"description": "x"}])
    async def test_create_without_title_is_rejected(self, client: AsyncClient, body) -> None:
        resp = await client.post("/api/tasks", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "title is required"}

        resp = await client.get("/api/tasks")
        assert resp.json() == []

    async def test_create_with_non_object_body_is_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json=["title"])
        assert resp.status_code == 400
        assert "error" in resp.json()

    async def test_create_with_malformed_json_is_rejected(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/tasks",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "error" in resp.json()

    async def test_created_task_round_trips_through_list(self, client: AsyncClient) -> None:
        created = (await client.post("/api/tasks", json={
            "title": "Round trip",
            "priority": "low",
            "dueDate": "2026-12-24T10:00:00Z",
        })).json()

        listed = (await client.get("/api/tasks")).json()
        assert listed == [created]

    async def test_list_is_newest_first(self, client: AsyncClient) -> None:
        for title in ("first", "second", "third"):
            await client.post("/api/tasks", json={"title": title})

        titles = [t["title"] for t in (await client.get("/api/tasks")).json()]
        assert titles == ["third", "second", "first"]

    async def test_list_with_filters(self, client: AsyncClient) -> None:
        await client.post("/api/tasks", json={"title": "A", "status": "done", "priority": "high"})
        await client.post("/api/tasks", json={"title": "B", "status": "done", "priority": "low"})
        await client.post("/api/tasks", json={"title": "C", "status": "todo", "priority": "high"})

        resp = await client.get("/api/tasks", params={"status": "done"})
        assert resp.status_code == 200
        assert sorted(t["title"] for t in resp.json()) == ["A", "B"]

        resp = await client.get("/api/tasks", params={"status": "done", "priority": "high"})
        assert [t["title"] for t in resp.json()] == ["A"]

        resp = await client.get("/api/tasks", params={"priority": "urgent"})
        assert resp.json() == []

    async def test_update(self, client: AsyncClient) -> None:
        task_id = (await client.post("/api/tasks", json={"title": "Old"})).json()["id"]

        resp = await client.patch(f"/api/tasks/{task_id}", json={
            "title": " New ",
            "priority": "high",
            "status": "done",
            "dueDate": "2027-01-05",
        })
        assert resp.status_code == 200
        task = resp.json()
        assert task["title"] == "New"
        assert task["priority"] == "high"
        assert task["status"] == "done"
        assert task["dueDate"] == "2027-01-05"

    async def test_update_with_invalid_priority_keeps_existing(self, client: AsyncClient) -> None:
        task_id = (await client.post("/api/tasks", json={"title": "T", "priority": "low"})).json()["id"]

        resp = await client.patch(f"/api/tasks/{task_id}", json={"priority": "urgent"})
        assert resp.status_code == 200
        assert resp.json()["priority"] == "low"

    async def test_update_with_no_valid_fields_returns_unchanged(self, client: AsyncClient) -> None:
        created = (await client.post("/api/tasks", json={"title": "Same"})).json()

        resp = await client.patch(f"/api/tasks/{created['id']}", json={"bogus": 1, "title": "  "})
        assert resp.status_code == 200
        assert resp.json() == created

    async def test_update_can_clear_due_date(self, client: AsyncClient) -> None:
        task_id = (await client.post("/api/tasks", json={"title": "T", "dueDate": "2026-10-20"})).json()["id"]

        resp = await client.patch(f"/api/tasks/{task_id}", json={"dueDate": None})
        assert resp.json()["dueDate"] is None

    async def test_update_unknown_id(self, client: AsyncClient) -> None:
        resp = await client.patch("/api/tasks/nope", json={"status": "done"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Task not found"}

    async def test_delete(self, client: AsyncClient) -> None:
        task_id = (await client.post("/api/tasks", json={"title": "To delete"})).json()["id"]

        resp = await client.delete(f"/api/tasks/{task_id}")
        assert resp.status_code == 204
        assert resp.content == b""

        resp = await client.get("/api/tasks")
        assert resp.json() == []

    async def test_delete_unknown_id(self, client: AsyncClient) -> None:
        resp = await client.delete("/api/tasks/missing")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Task not found"}

        ids = [t["id"] for t in (await client.get("/api/tasks")).json()]
        assert "missing" not in ids


class _BrokenRepository(InMemoryTaskRepository):
    def list(self, task_filter=None):
        raise StorageError("disk on fire")

    def create(self, fields):
        raise StorageError("disk on fire")

    def update(self, task_id, changes):
        raise StorageError("disk on fire")

    def delete(self, task_id):
        raise StorageError("disk on fire")


@pytest.mark.anyio
class TestInternalErrors:
    @pytest.fixture
    async def client(self):
        app = create_app(repository=_BrokenRepository(), enable_cors=False)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c

    async def test_list_failure_is_generic_500(self, client: AsyncClient) -> None:
        resp = await client.get("/api/tasks")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to load tasks"}

    async def test_create_failure_is_generic_500(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json={"title": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to create task"}

    async def test_create_validation_still_wins(self, client: AsyncClient) -> None:
        resp = await client.post("/api/tasks", json={"title": ""})
        assert resp.status_code == 400

    async def test_update_and_delete_failures(self, client: AsyncClient) -> None:
        resp = await client.patch("/api/tasks/x", json={"status": "done"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to update task"}

        resp = await client.delete("/api/tasks/x")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to delete task"}
        assert "disk on fire" not in resp.text


@pytest.mark.anyio
async def test_root_reports_storage_backend(tmp_path: Path) -> None:
    app = create_app(repository=YamlTaskRepository(tmp_path / "t.yaml"), enable_cors=False)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.get("/")
    assert resp.status_code == 200
    assert resp.json()["storage"] == "yaml"
    assert resp.json()["status"] == "running"


def test_app_factory_reads_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    from fastapi.testclient import TestClient

    from taskboard.server.api import app_factory

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKBOARD_CONFIG", raising=False)
    monkeypatch.setenv("TASKBOARD_DATABASE_URL", str(tmp_path / "tasks.yaml"))
    client = TestClient(app_factory())
    assert client.get("/").json()["storage"] == "yaml"
    assert client.post("/api/tasks", json={"title": "persisted"}).status_code == 201
    assert (tmp_path / "tasks.yaml").exists()
