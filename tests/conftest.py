"""
Noteful API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── database: SQLite file database, schema reset and seeded per test
    └── test_client: HTTPX AsyncClient talking to a fresh app bound to `database`
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteful.database import Database
from noteful.main import create_app
from noteful.seed import seed_database


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_folder(mock_db_session):
            mock_db_session.execute.return_value.one_or_none.return_value = row
            result = await folder_service.get_folder(mock_db_session, 100)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note():
    """A loaded Note as the service sees it: folder and tags already joined."""
    return SimpleNamespace(
        id=1000,
        title="5 life lessons learned from cats",
        content="Lorem ipsum",
        folder_id=100,
        folder=SimpleNamespace(name="Archive"),
        tags=[SimpleNamespace(id=1, name="foo"), SimpleNamespace(id=2, name="bar")],
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a seeded SQLite database.

    What:    A fresh file database per test, reset and loaded by noteful.seed.
    Why:     Every API test starts from the same ten notes, ids 1000-1009.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    await seed_database(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests straight into the app; the seeded
           database is attached to app.state the way the lifespan would.

    Usage:
        async def test_notes(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    app = create_app()
    app.state.db = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
