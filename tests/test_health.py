# tests/test_health.py
"""Tests for the health and root endpoints."""


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client, test_settings):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == test_settings.app_name
    assert body["docs"] == "/docs"


def test_unknown_route_is_404(client):
    assert client.get("/api/v1/nothing-here").status_code == 404
