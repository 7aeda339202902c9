"""Tests for health endpoints."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"] == "ok"


def test_live(client):
    assert client.get("/live").json()["alive"] is True


def test_root(client):
    assert client.get("/").json()["name"] == "ReadTrace"
