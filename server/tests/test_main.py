"""Tests for app-level routes: root, health and the JSON 404."""

import pytest
from fastapi.testclient import TestClient

from findmysong.main import app

client = TestClient(app)


@pytest.fixture
def database(monkeypatch, fake_db):
    monkeypatch.setattr(app.state, "db", fake_db, raising=False)
    return fake_db


class TestRoot:
    def test_banner(self):
        response = client.get("/")
        assert response.status_code == 200
        assert "FindMySong" in response.text


class TestHealth:
    def test_ok(self, database):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert database.calls[0][1] == "SELECT 1"

    def test_database_error(self, database):
        async def broken(sql, *params):
            raise ConnectionError("connection refused")

        database.fetchrow = broken
        response = client.get("/health")
        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "connection refused"}

    def test_no_database(self, monkeypatch):
        monkeypatch.setattr(app.state, "db", None, raising=False)
        response = client.get("/health")
        assert response.status_code == 500
        assert response.json()["ok"] is False


class TestNotFound:
    def test_unknown_route(self):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"message": "Route not found", "method": "GET", "path": "/api/nope"}

    def test_route_level_404_keeps_detail(self, monkeypatch):
        from unittest.mock import AsyncMock

        from findmysong.api.deps import get_collection_store, get_current_user

        store = AsyncMock()
        store.get_playlist.return_value = None
        app.dependency_overrides[get_collection_store] = lambda: store
        app.dependency_overrides[get_current_user] = lambda: {"id": 1, "name": "A", "email": "a@b.c"}
        try:
            response = client.get("/api/playlists/1")
        finally:
            app.dependency_overrides.pop(get_collection_store, None)
            app.dependency_overrides.pop(get_current_user, None)
        assert response.status_code == 404
        assert response.json() == {"detail": "Playlist not found"}


class TestLifespan:
    def test_startup_without_database(self, monkeypatch):
        monkeypatch.setattr("findmysong.main.settings.database_url", "")
        with TestClient(app) as lifespan_client:
            assert app.state.db is None
            assert app.state.catalog is not None
            assert lifespan_client.get("/").status_code == 200
