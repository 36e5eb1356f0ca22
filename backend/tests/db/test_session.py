"""Tests for database startup helpers.

Retry tests use fake engines; schema creation runs against a temporary SQLite file.
"""

from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from tidelogs.core.errors import StoreError
from tidelogs.db.session import _engine_options, init_db, wait_for_database


class FakeEngine:
    """Engine whose first `failures` connections raise OperationalError."""

    def __init__(self, failures: int):
        self.failures = failures
        self.attempts = 0
        self.url = SimpleNamespace(render_as_string=lambda hide_password=True: "fake://db")

    @asynccontextmanager
    async def connect(self):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        conn = AsyncMock()
        yield conn


class TestWaitForDatabase:
    """Startup retries a fixed number of times with a fixed delay."""

    @pytest.mark.asyncio
    async def test_connects_first_time(self):
        engine = FakeEngine(failures=0)

        await wait_for_database(engine, attempts=5, delay_seconds=0)

        assert engine.attempts == 1

    @pytest.mark.asyncio
    async def test_recovers_after_failures(self):
        engine = FakeEngine(failures=3)

        with patch("tidelogs.db.session.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await wait_for_database(engine, attempts=5, delay_seconds=5)

        assert engine.attempts == 4
        assert mock_sleep.await_count == 3
        mock_sleep.assert_awaited_with(5)

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_store_error(self):
        engine = FakeEngine(failures=10)

        with patch("tidelogs.db.session.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(StoreError) as exc_info:
                await wait_for_database(engine, attempts=3, delay_seconds=1)

        assert engine.attempts == 3
        assert mock_sleep.await_count == 2
        assert exc_info.value.operation == "connect"


class TestEngineOptions:
    def test_sqlite_uses_default_pool(self):
        assert _engine_options("sqlite+aiosqlite:///./data/tidelogs.db") == {}

    def test_server_database_gets_bounded_pool(self):
        options = _engine_options("postgresql+asyncpg://user:pw@localhost:5432/tidelogs")

        assert options["pool_size"] == 5
        assert options["max_overflow"] == 10
        assert options["pool_timeout"] == 30.0
        assert options["pool_pre_ping"] is True


@pytest.mark.asyncio
async def test_init_db_creates_schema(tmp_path):
    from sqlalchemy import inspect
    from sqlalchemy.ext.asyncio import create_async_engine

    db_path = tmp_path / "nested" / "tidelogs.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    try:
        await init_db(engine)

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            indexes = await conn.run_sync(
                lambda sync_conn: {ix["name"] for ix in inspect(sync_conn).get_indexes("logs")}
            )
    finally:
        await engine.dispose()

    assert db_path.exists()
    assert tables == ["logs"]
    assert "idx_logs_service_level" in indexes
    # The GIN metadata index is PostgreSQL-only
    assert "idx_logs_metadata" not in indexes


def test_metadata_gin_index_on_postgresql():
    from sqlalchemy.dialects import postgresql
    from sqlalchemy.schema import CreateIndex

    from tidelogs.db.models import LogEntry

    index = next(ix for ix in LogEntry.__table__.indexes if ix.name == "idx_logs_metadata")
    ddl = str(CreateIndex(index).compile(dialect=postgresql.dialect()))

    assert "USING gin" in ddl
    assert "(metadata)" in ddl
