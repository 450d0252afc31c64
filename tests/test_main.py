"""Tests for the HTTP extras: health, metrics and the API key guard."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app

PING = {"query": "{ earthquakes { total } }"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_count_requests_and_operations(client):
    client.post("/graphql", json=PING)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert 'earthquake_operations_total{operation="list",outcome="ok"}' in response.text


@pytest.fixture
def guarded_client(monkeypatch):
    monkeypatch.setenv("API_KEY", "secret")
    with TestClient(create_app("sqlite://")) as c:
        yield c


def test_api_key_required_when_configured(guarded_client):
    assert guarded_client.post("/graphql", json=PING).status_code == 401
    assert guarded_client.post("/graphql", json=PING, headers={"X-API-Key": "wrong"}).status_code == 401

    response = guarded_client.post("/graphql", json=PING, headers={"X-API-Key": "secret"})
    assert response.status_code == 200
    assert response.json()["data"]["earthquakes"]["total"] == 0


def test_health_and_metrics_skip_api_key(guarded_client):
    assert guarded_client.get("/health").status_code == 200
    assert guarded_client.get("/metrics").status_code == 200


def test_no_api_key_means_open_access(client):
    assert client.post("/graphql", json=PING).status_code == 200
