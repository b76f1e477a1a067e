"""
Blog API Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py; environment variables are set at
       the top so that blog_api.config reads them on first import.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for failure-path unit tests
    ├── db_engine: fresh in-memory SQLite engine with the schema created
    ├── session_factory / db_session: sessions bound to db_engine
    ├── test_client: HTTPX AsyncClient on the app, sessions from db_engine
    └── auth_headers: Authorization header for a freshly signed-up user
"""

import os

# Must run before any blog_api import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from blog_api.database import get_db_session, init_models


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = blog
        result = await blog_service.get_blog(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with all tables created.

    StaticPool keeps the single in-memory connection alive across sessions,
    so every session in the test sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden so each request gets its own session on the
    test engine, with the same commit/rollback/close contract.
    """
    from blog_api.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def ann():
    return {"name": "Ann", "email": "a@x.com", "password": "secret1"}


@pytest_asyncio.fixture
async def auth_headers(test_client, ann):
    """Signs Ann up and returns the header protected routes expect."""
    response = await test_client.post("/signup", json=ann)
    assert response.status_code == 200
    return {"Authorization": response.json()["token"]}
