"""
Blog API Backend - Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, declarative base, the
       per-request session dependency and the persistence time budget.
How:   One engine (and pool) per process. Every request gets its own
       AsyncSession, committed on success, rolled back on error and closed
       on every exit path.
Who:   Route handlers receive sessions through FastAPI's Depends(); services
       wrap their store calls in `bounded()`.

Connection Pooling:
    Server databases (PostgreSQL) use pool_size/max_overflow/pre_ping from
    settings. SQLite picks its own pool class, so pool options are not passed.
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Awaitable, Dict, TypeVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import settings
from blog_api.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _engine_options() -> Dict[str, Any]:
    """Keyword arguments for create_async_engine, by backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: objects stay readable after commit, which the
# routes rely on when serializing a freshly written Blog.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a scoped database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns the connection to the pool)

    Services commit their own writes so that the response is only produced
    after the data is durable; the commit here only catches stragglers.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Time Budget ───────────────────────────────────────────────────────────
async def bounded(operation: Awaitable[T], name: str) -> T:
    """
    Await a persistence operation, giving up after `db_operation_timeout`.

    Raises:
        ServiceUnavailableError: the operation did not finish in time (→ 503)
    """
    timeout = settings.db_operation_timeout
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error("Persistence operation '%s' timed out after %.1fs", name, timeout)
        raise ServiceUnavailableError(
            context={"operation": name, "timeout_seconds": timeout},
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(bind: AsyncEngine | None = None) -> None:
    """
    Create any missing tables from the ORM metadata.

    When:  Application startup (if settings.db_create_tables) and test setup.
    """
    # Register every model with Base.metadata before create_all
    from blog_api.models import blog, user  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))


async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
