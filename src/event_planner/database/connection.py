"""Database connection management.

Provides async database connections using SQLAlchemy. PostgreSQL runs on
asyncpg, SQLite on aiosqlite.

## Configuration

Database connection is configured via environment variables:
- DATABASE_URL: Full connection string
- DATABASE_POOL_SIZE: Connection pool size (default: 5, ignored for SQLite)
- DATABASE_MAX_OVERFLOW: Max overflow connections (default: 10, ignored for SQLite)

## Usage

The engine and session factory are created by the caller and handed to the
storage layer; nothing here is a module-level singleton.

```python
from event_planner.database import create_engine, create_session_factory

engine = create_engine()
sessions = create_session_factory(engine)
events = DocumentCollection(sessions, EventRecord)

# On shutdown
await engine.dispose()
```
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from event_planner.config import Settings, get_settings
from event_planner.database.models import Base

logger = logging.getLogger(__name__)


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create the async engine from settings.

    Args:
        settings: Settings to use (default: cached application settings)

    Returns:
        Configured AsyncEngine
    """
    settings = settings or get_settings()

    logger.info("Initializing database connection")

    if settings.is_sqlite:
        # SQLite uses a static or per-thread pool; sizing options don't apply
        return create_async_engine(settings.database_url, echo=settings.database_echo)

    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        echo=settings.database_echo,  # Log SQL in debug mode
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all database tables.

    For development/testing only. Use migrations in production.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables.

    For development/testing only. Use with caution!
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.warning("Database tables dropped")


@asynccontextmanager
async def open_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a database session.

    Use as an async context manager:
    ```python
    async with open_session(sessions) as session:
        # Use session
        await session.commit()
    ```

    The session is rolled back on error and always closed on exit.
    Transactions are not automatically committed - call commit() explicitly.
    """
    session = session_factory()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
