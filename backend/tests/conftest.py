"""
Abacus Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock async session (no real DB needed)
    ├── db_schema: Creates the tables in the temporary SQLite database
    ├── db_session: Real AsyncSession on that database
    ├── test_client: HTTPX AsyncClient talking to a fresh app
    └── sample_comment: Payload accepted by the comment store
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
# Why: app.config builds its singleton (and app.database its engine) on import
_TEST_DIR = tempfile.mkdtemp(prefix="abacus_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CALC_LEGACY_OPERAND_GRAMMAR"] = "false"
os.environ["COMMENTS_PREFIX"] = "/api/comments"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import Base, async_session_factory, create_schema, engine  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_fetch(mock_db_session):
            mock_db_session.get.return_value = None
            result = await CommentStore(mock_db_session).find_by_id(str(uuid4()))
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_schema():
    """
    Creates all tables before the test and drops them afterwards.

    The engine is disposed on teardown so no pooled connection outlives
    the event loop it was opened on.
    """
    await create_schema()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_schema):
    """A real AsyncSession bound to the temporary SQLite database."""
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_schema):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to a freshly built app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_comment():
    """A payload the comment store accepts, with one free-form extra field."""
    return {
        "body": "Nice write-up, the benchmarks section helped a lot.",
        "author": "reader-42",
        "article": "async-sqlalchemy-in-practice",
    }
