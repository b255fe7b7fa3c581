"""Tests for the assembled application: routing, auth and the error boundary end to end."""

from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from application.settings import app_settings
from domain.exceptions import DuplicateTaskError
from domain.repositories import UserDirectory
from integration.repositories import InMemoryTaskStore
from tests.fixtures.factories import TokenFactory, UserFactory


def _auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {TokenFactory.create(user_id)}"}


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setattr(app_settings, "use_in_memory_store", True)
    monkeypatch.setattr(app_settings, "observability_enabled", False)
    monkeypatch.setattr(app_settings, "debug", False)
    monkeypatch.setattr(app_settings, "auth_require_known_user", True)

    from main import create_app

    app = create_app()
    directory = app.state.services.get_required_service(UserDirectory)
    for user in UserFactory.create_many("alice", "bob", "carol"):
        directory.add(user)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _create(client: TestClient, user_id: str = "alice", **body: Any) -> dict[str, Any]:
    response = client.post("/api/tasks/", json={"title": "Plan sprint", "priority": "HIGH", **body}, headers=_auth(user_id))
    assert response.status_code == 201, response.text
    return response.json()


class TestApplication:
    def test_create_then_list_visible_tasks(self, client: TestClient) -> None:
        created = _create(client, checklist=[{"text": "Collect tickets"}], assignees=["bob"])

        assert created["creator"]["id"] == "alice"
        assert created["assignees"][0]["name"] == "Bob"
        assert created["status"] == "TODO"

        for user_id in ("alice", "bob"):
            listed = client.get("/api/tasks/", headers=_auth(user_id))
            assert listed.status_code == 200
            assert [t["id"] for t in listed.json()] == [created["id"]]

        assert client.get("/api/tasks/", headers=_auth("carol")).json() == []

    def test_change_status_and_share(self, client: TestClient) -> None:
        created = _create(client)

        moved = client.patch(f"/api/tasks/{created['id']}/status", json={"status": "IN_PROGRESS"}, headers=_auth("alice"))
        shared = client.post(f"/api/tasks/{created['id']}/share", json={"userIds": ["carol", "carol"]}, headers=_auth("alice"))

        assert moved.status_code == 200
        assert moved.json()["status"] == "IN_PROGRESS"
        assert shared.status_code == 200
        assert [u["id"] for u in shared.json()["sharedWith"]] == ["carol"]
        assert client.get(f"/api/tasks/{created['id']}", headers=_auth("carol")).status_code == 200

    def test_only_the_creator_can_share(self, client: TestClient) -> None:
        created = _create(client, assignees=["bob"])

        response = client.post(f"/api/tasks/{created['id']}/share", json={"userIds": ["carol"]}, headers=_auth("bob"))

        assert response.status_code == 404
        assert "message" in response.json()

    def test_missing_token_is_rejected(self, client: TestClient) -> None:
        response = client.get("/api/tasks/")

        assert response.status_code == 401
        assert "message" in response.json()

    def test_unknown_user_is_rejected(self, client: TestClient) -> None:
        response = client.get("/api/tasks/", headers=_auth("mallory"))

        assert response.status_code == 401

    def test_unexpected_error_is_a_json_500(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        async def failing_insert(self, task):
            raise RuntimeError("storage exploded")

        monkeypatch.setattr(InMemoryTaskStore, "insert_async", failing_insert)

        response = client.post("/api/tasks/", json={"title": "Plan sprint", "priority": "HIGH"}, headers=_auth("alice"))

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"message": "Internal Server Error"}

    def test_duplicate_is_a_json_409(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        async def duplicate_insert(self, task):
            raise DuplicateTaskError(field="id")

        monkeypatch.setattr(InMemoryTaskStore, "insert_async", duplicate_insert)

        response = client.post("/api/tasks/", json={"title": "Plan sprint", "priority": "HIGH"}, headers=_auth("alice"))

        assert response.status_code == 409
        assert response.json() == {"message": "Duplicate field value entered", "field": "id"}
