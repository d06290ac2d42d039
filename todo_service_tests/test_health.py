"""Tests for health and readiness endpoints."""
from unittest.mock import patch


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_ready_when_database_connected(client):
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["database"] == "connected"


def test_not_ready_when_database_down(client):
    with patch("todo_service.routes.health.check_db_connection", return_value=False):
        r = client.get("/ready")
    assert r.status_code == 503
    assert r.json()["status"] == "not_ready"
    assert r.json()["database"] == "disconnected"
