"""
Global pytest configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from tests.fakes import InMemoryStore, StaticRoutingProvider


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def routing_provider():
    return StaticRoutingProvider(enabled=False)


@pytest.fixture
def client(store, routing_provider, monkeypatch):
    """TestClient wired to the in-memory store, with startup/shutdown events run."""
    import app.services.routing.registry as routing_registry
    import app.services.store.registry as store_registry
    from app.main import app

    monkeypatch.setattr(store_registry, "_store_instance", store)
    monkeypatch.setattr(routing_registry, "_provider_instance", routing_provider)

    with TestClient(app) as test_client:
        yield test_client
