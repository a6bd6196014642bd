"""
Test configuration and fixtures
"""

import pytest
from fastapi.testclient import TestClient

from congregation_api.config import get_settings
from congregation_api.db.connection import close_db, init_db
from congregation_api.dependencies import build_storage, set_storage
from congregation_api.main import app
from congregation_api.storage import InMemoryStorage


@pytest.fixture
def storage():
    """Empty in-memory store."""
    return InMemoryStorage()


@pytest.fixture
def seeded_storage():
    """In-memory store with the sample data loaded."""
    return InMemoryStorage(seed=True)


@pytest.fixture
async def sql_database(tmp_path, monkeypatch):
    """Fresh SQLite file database for each test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("DEBUG", "false")
    get_settings.cache_clear()
    await close_db()
    await init_db()
    yield
    await close_db()
    get_settings.cache_clear()


@pytest.fixture
def api_storage():
    """Store installed behind the API for route tests."""
    return InMemoryStorage()


@pytest.fixture
def client(api_storage, monkeypatch):
    """Test client running the app on in-memory storage."""
    monkeypatch.setenv("STORAGE_TYPE", "memory")
    get_settings.cache_clear()
    set_storage(api_storage)
    with TestClient(app) as test_client:
        yield test_client
    set_storage(None)
    get_settings.cache_clear()


@pytest.fixture(params=["memory", "sql"])
async def contract_storage(request, tmp_path, monkeypatch):
    """The storage built for each backend, without sample data."""
    monkeypatch.setenv("STORAGE_TYPE", request.param)
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}")
    get_settings.cache_clear()

    if request.param == "sql":
        await close_db()
        await init_db()

    yield build_storage(get_settings())

    if request.param == "sql":
        await close_db()
    get_settings.cache_clear()
