"""Shared fixtures for web tests."""

import pytest
from fastapi.testclient import TestClient

from facts.repository import FactRepository


@pytest.fixture
def client(fake_store, monkeypatch):
    """Test client whose repository talks to the in-memory store."""
    for var in ("FACTS_STORE_URL", "FACTS_STORE_KEY", "FACTS_LOG_LEVEL", "FACTS_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)

    from web.app import app
    from web.deps import get_repository

    app.dependency_overrides[get_repository] = lambda: FactRepository(fake_store)
    app.state.sessions.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()
    app.state.sessions.clear()
