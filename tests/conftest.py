"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from api.db import create_db_engine, init_db, make_session_factory
from api.main import create_app
from api.services.earthquakes import EarthquakeService
from schemas.models import EarthquakeCreate


@pytest.fixture
def engine():
    """Isolated in-memory SQLite database per test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def service(session_factory):
    return EarthquakeService(session_factory)


@pytest.fixture
def add(service):
    """Create an earthquake through the service and return it."""
    def _add(location="Test Location", magnitude=5.0, date="2024-01-01"):
        return service.create(EarthquakeCreate(location=location, magnitude=magnitude, date=date))
    return _add


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    app = create_app("sqlite://")
    with TestClient(app) as c:
        yield c
