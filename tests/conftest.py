# tests/conftest.py

from unittest.mock import AsyncMock

import pytest

from costgraph.storage.base_repository import GraphStore


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`), so the
    application's config is predictable and isolated from the actual
    environment.
    """
    monkeypatch.setenv("DGRAPH_URL", "http://dgraph.test:8080")
    monkeypatch.delenv("DGRAPH_ACCESS_TOKEN", raising=False)


@pytest.fixture
def fake_store():
    """A substitutable graph store whose calls can be scripted and inspected."""
    store = AsyncMock(spec=GraphStore)
    store.execute_query.return_value = {}
    store.execute_query_raw.return_value = b"{}"
    return store
