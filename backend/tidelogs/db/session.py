# tidelogs/db/session.py
"""
Database session and initialization utilities.

We use:
- SQLAlchemy async engine + AsyncSession
- SQLite via aiosqlite for local runs, PostgreSQL via asyncpg in deployments

Key points:
- `wait_for_database()` retries the first connection a fixed number of times
  with a fixed delay; running out of attempts is fatal at startup.
- `init_db()` creates tables/indexes and applies SQLite pragmas.
- `get_session()` is a FastAPI dependency that yields an AsyncSession.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tidelogs.core.config import settings
from tidelogs.core.errors import StoreError
from tidelogs.db.models import Base

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """
    Pool options for the given URL.

    SQLite engines keep SQLAlchemy's default pool; server databases get a
    bounded pool so a burst of requests waits (up to the timeout) instead of
    opening unlimited connections.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT_SECONDS,
        "pool_pre_ping": True,
    }


# Keep echo=False to avoid logging SQL in normal use; LOG_LEVEL=DEBUG surfaces
# engine logs through tidelogs.core.logging instead.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    **_engine_options(settings.DATABASE_URL),
)

# Session factory used by FastAPI dependencies and services.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,  # returned rows stay readable after commit
    class_=AsyncSession,
)


def _redacted(db_engine: AsyncEngine) -> str:
    return db_engine.url.render_as_string(hide_password=True)


async def wait_for_database(
    db_engine: AsyncEngine,
    *,
    attempts: int,
    delay_seconds: float,
) -> None:
    """
    Block until the database answers `SELECT 1`, retrying on failure.

    Raises:
        StoreError: when every attempt failed.
    """
    logger.info("Connecting to database at %s", _redacted(db_engine))

    for attempt in range(1, attempts + 1):
        try:
            async with db_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            remaining = attempts - attempt
            if remaining <= 0:
                logger.error("Failed to connect to database after %d attempts: %s", attempts, exc)
                raise StoreError("connect", "Database unreachable.") from exc
            logger.warning(
                "Failed to connect to database, retrying in %.1fs (%d attempts left)",
                delay_seconds,
                remaining,
            )
            await asyncio.sleep(delay_seconds)
        else:
            logger.info("Database connected successfully")
            return


def _ensure_sqlite_dir(db_engine: AsyncEngine) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = db_engine.url
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    parent = os.path.dirname(os.path.abspath(url.database))
    os.makedirs(parent, exist_ok=True)


async def init_db(db_engine: AsyncEngine = engine) -> None:
    """
    Initialize database schema and apply SQLite pragmas.

    Pragmas rationale:
    - journal_mode=WAL: reads don't block writes as often
    - synchronous=NORMAL: good balance for durability vs speed
    """
    _ensure_sqlite_dir(db_engine)

    await wait_for_database(
        db_engine,
        attempts=settings.DB_CONNECT_RETRIES,
        delay_seconds=settings.DB_CONNECT_RETRY_DELAY_SECONDS,
    )

    try:
        async with db_engine.begin() as conn:
            if db_engine.url.get_backend_name() == "sqlite":
                await conn.execute(text("PRAGMA journal_mode=WAL;"))
                await conn.execute(text("PRAGMA synchronous=NORMAL;"))

            # Create tables and indexes if they don't exist
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as exc:
        logger.error("Schema initialization failed: %s", exc)
        raise StoreError("init_db", "Schema initialization failed.") from exc

    logger.info("Database schema ready")


async def dispose_db(db_engine: AsyncEngine = engine) -> None:
    await db_engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a scoped AsyncSession.

    Usage:
        @router.get(...)
        async def handler(session: AsyncSession = Depends(get_session)):
            ...

    Ensures:
    - session is always closed
    - transactions are controlled explicitly in service logic
    """
    async with AsyncSessionLocal() as session:
        yield session
