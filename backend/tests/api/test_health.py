"""Tests for health check endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from api.dependencies import get_database


@pytest.fixture
def database():
    db = MagicMock()
    db.ping.return_value = True
    return db


@pytest.fixture
def client(app, database) -> TestClient:
    app.dependency_overrides[get_database] = lambda: database
    return TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["version"] == "0.1.0"

    def test_health_does_not_touch_database(self, client, database):
        client.get("/api/health")
        database.ping.assert_not_called()

    def test_readiness_check(self, client):
        """Readiness endpoint should report a connected database."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {"status": "ready", "database": "connected"}

    def test_readiness_database_down(self, client, database):
        database.ping.return_value = False
        response = client.get("/api/ready")
        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Database unavailable"
        assert body["data"]["database"] == "unavailable"

    def test_ping_runs_outside_the_event_loop(self, client, database):
        loops = []

        def ping():
            try:
                loops.append(asyncio.get_running_loop())
            except RuntimeError:
                loops.append(None)
            return True

        database.ping.side_effect = ping
        assert client.get("/api/ready").status_code == 200
        assert loops == [None]


class TestEnvelopeForFrameworkErrors:
    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_wrong_method(self, client):
        response = client.delete("/api/health")
        assert response.status_code == 405
        assert response.json()["success"] is False
