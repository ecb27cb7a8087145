"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from notelytic.api.app import create_app
from notelytic.core import config
from notelytic.core.notebook import set_notebook

API_KEY = "test-key"


@pytest.fixture
def client(notebook, monkeypatch):
    """Authenticated test client backed by a temporary notebook."""
    monkeypatch.setattr(config, "NOTELYTIC_API_KEY", API_KEY)
    monkeypatch.setattr(config, "NOTELYTIC_ALLOW_NO_AUTH", False)
    set_notebook(notebook)
    with TestClient(create_app(), headers={"X-API-Key": API_KEY}) as test_client:
        yield test_client
    set_notebook(None)


def _create(client, **fields):
    body = {"title": "Meeting", "content": "Agenda", "category": "Work 💼"}
    body.update(fields)
    response = client.post("/api/v1/notes", json=body)
    assert response.status_code == 201
    return response.json()


class TestAuth:
    """Tests for API key checks."""

    def test_missing_key(self, client):
        response = client.get("/api/v1/notes", headers={"X-API-Key": ""})

        assert response.status_code == 401

    def test_wrong_key(self, client):
        response = client.get("/api/v1/notes", headers={"X-API-Key": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_unconfigured_key_fails_closed(self, client, monkeypatch):
        monkeypatch.setattr(config, "NOTELYTIC_API_KEY", None)

        assert client.get("/api/v1/notes").status_code == 503

    def test_no_auth_override(self, client, monkeypatch):
        monkeypatch.setattr(config, "NOTELYTIC_API_KEY", None)
        monkeypatch.setattr(config, "NOTELYTIC_ALLOW_NO_AUTH", True)

        assert client.get("/api/v1/notes").status_code == 200

    def test_health_is_public(self, client):
        response = client.get("/api/v1/health", headers={"X-API-Key": ""})

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["components"]["database"]["healthy"] is True

    def test_health_degraded(self, client, notebook, monkeypatch):
        """An unreadable database reports degraded with 503."""
        monkeypatch.setattr(
            notebook, "health_check", lambda: {"database": (False, "disk I/O error")}
        )

        response = client.get("/api/v1/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["components"]["database"] == {
            "healthy": False,
            "message": "disk I/O error",
        }


class TestNotes:
    """Tests for note endpoints."""

    def test_create_and_get(self, client):
        created = _create(client, tags=["q3", "q3"])

        assert created["color"] == "#FF5733"
        assert created["tags"] == ["q3"]
        assert created["isPinned"] is False

        response = client.get(f"/api/v1/notes/{created['id']}")
        assert response.json() == created

    def test_create_requires_fields(self, client):
        response = client.post("/api/v1/notes", json={"title": "Only a title"})

        assert response.status_code == 400
        assert "required fields" in response.json()["detail"]

    def test_get_missing(self, client):
        assert client.get("/api/v1/notes/missing").status_code == 404

    def test_list_filters(self, client):
        _create(client, title="Alpha")
        _create(client, title="Beta", category="Ideas 💡")

        response = client.get(
            "/api/v1/notes", params={"category": "Ideas 💡", "sort_by": "title"}
        )

        assert [n["title"] for n in response.json()] == ["Beta"]

    def test_patch(self, client):
        created = _create(client)

        response = client.patch(
            f"/api/v1/notes/{created['id']}", json={"title": "Retro"}
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Retro"
        assert response.json()["content"] == "Agenda"

    def test_delete(self, client):
        created = _create(client)

        response = client.delete(f"/api/v1/notes/{created['id']}")

        assert response.status_code == 204
        assert client.delete(f"/api/v1/notes/{created['id']}").status_code == 404

    def test_pin_limit_conflict(self, client):
        notes = [_create(client, title=f"Note {i}") for i in range(4)]
        for note in notes[:3]:
            response = client.post(f"/api/v1/notes/{note['id']}/pin")
            assert response.json()["isPinned"] is True

        response = client.post(f"/api/v1/notes/{notes[3]['id']}/pin")

        assert response.status_code == 409
        assert response.json()["detail"] == "You can only pin up to 3 notes"

    def test_archive(self, client):
        created = _create(client)

        client.post(f"/api/v1/notes/{created['id']}/archive")

        assert client.get("/api/v1/notes").json() == []
        archived = client.get("/api/v1/notes", params={"archived": True}).json()
        assert [n["id"] for n in archived] == [created["id"]]

    def test_tags(self, client):
        created = _create(client)

        response = client.put(
            f"/api/v1/notes/{created['id']}/tags", json={"tags": ["a", " b "]}
        )

        assert response.json()["tags"] == ["a", "b"]
        tags = client.get("/api/v1/tags").json()
        assert tags == {"tags": ["a", "b"], "counts": {"a": 1, "b": 1}}


class TestCategories:
    """Tests for category endpoints."""

    def test_list_default_categories(self, client):
        names = [c["name"] for c in client.get("/api/v1/categories").json()]

        assert "Work 💼" in names

    def test_create(self, client):
        response = client.post(
            "/api/v1/categories", json={"name": "Travel", "color": "#123456"}
        )

        assert response.status_code == 201
        assert response.json() == {"name": "Travel", "color": "#123456"}

    def test_create_blank_name(self, client):
        response = client.post(
            "/api/v1/categories", json={"name": " ", "color": "#123456"}
        )

        assert response.status_code == 400

    def test_delete_moves_notes(self, client):
        created = _create(client)

        response = client.delete("/api/v1/categories/Work 💼")

        assert response.json() == {"name": "Work 💼", "notes_moved": 1}
        note = client.get(f"/api/v1/notes/{created['id']}").json()
        assert note["category"] == "Uncategorized"

    def test_delete_missing(self, client):
        assert client.delete("/api/v1/categories/Nope").status_code == 404


class TestBackup:
    """Tests for export, import and stats."""

    def test_export(self, client):
        _create(client)

        response = client.get("/api/v1/export")

        assert response.status_code == 200
        assert "attachment" in response.headers["content-disposition"]
        assert len(response.json()["notes"]) == 1

    def test_import(self, client, browser_backup):
        response = client.post("/api/v1/import", content=browser_backup)

        assert response.status_code == 200
        assert response.json() == {"notes": 1, "categories": 2}
        assert client.get("/api/v1/notes/1714564800000").status_code == 200

    def test_import_invalid(self, client):
        response = client.post("/api/v1/import", content="{}")

        assert response.status_code == 400
        assert "Failed to import data" in response.json()["detail"]

    def test_stats(self, client):
        _create(client)

        stats = client.get("/api/v1/stats").json()

        assert stats["total_notes"] == 1
        assert stats["notes_per_category"] == {"Work 💼": 1}
