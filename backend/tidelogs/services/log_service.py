# tidelogs/services/log_service.py
"""
Submission and retrieval of log entries.

Why a service?
- Keeps the /logs routes thin
- The session is passed in explicitly, so tests can hand over an in-memory store

Flow:
- submit: validate -> insert -> commit -> return the stored row
- query_logs: pagination policy + query builder -> count + page -> response
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tidelogs.core.config import settings
from tidelogs.core.errors import StoreError
from tidelogs.db.models import LogEntry, utcnow
from tidelogs.schemas.logs import LogEntryCreate, LogFilters, LogItem, LogsResponse
from tidelogs.services.pagination import resolve_pagination
from tidelogs.services.query_builder import build_log_query
from tidelogs.utils.validators import isoformat_z, validate_entry

logger = logging.getLogger(__name__)


def to_log_item(row: LogEntry) -> LogItem:
    return LogItem(
        id=str(row.id),
        timestamp=isoformat_z(row.timestamp),
        service=row.service,
        level=row.level,
        message=row.message,
        metadata=row.metadata_ or {},
        created_at=isoformat_z(row.created_at),
    )


async def submit(
    session: AsyncSession,
    candidate: LogEntryCreate,
    *,
    case_sensitive_level: bool | None = None,
) -> LogItem:
    """
    Validate and store one entry.

    Raises:
        ValidationError: before anything is written.
        StoreError: the insert failed and was rolled back.
    """
    if case_sensitive_level is None:
        case_sensitive_level = settings.LEVEL_CASE_SENSITIVE

    entry = validate_entry(candidate, case_sensitive_level=case_sensitive_level)

    now = utcnow()
    row = LogEntry(
        timestamp=entry.timestamp or now,
        service=entry.service,
        level=entry.level,
        message=entry.message,
        metadata_=entry.metadata,
        created_at=now,
    )

    try:
        session.add(row)
        await session.commit()
        await session.refresh(row)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Failed to insert log: %s", exc.__class__.__name__)
        raise StoreError("insert_log") from exc

    logger.info("Created log entry: %s - %s", row.service, row.level)
    return to_log_item(row)


async def query_logs(session: AsyncSession, filters: LogFilters) -> LogsResponse:
    """
    Return one page of matching entries plus the total match count.

    `total` comes from a count over the same predicates as the page, so it
    ignores limit/offset.

    Raises:
        StoreError: either read failed; no partial result is returned.
    """
    limit, offset = resolve_pagination(filters.limit, filters.offset)
    builder = build_log_query(service=filters.service, level=filters.level)

    try:
        total = int((await session.execute(builder.count_statement())).scalar() or 0)
        rows = (
            await session.execute(builder.fetch_statement(limit=limit, offset=offset))
        ).scalars().all()
    except SQLAlchemyError as exc:
        logger.error("Failed to fetch logs (%d filters): %s", len(builder.predicates), exc.__class__.__name__)
        raise StoreError("query_logs") from exc

    return LogsResponse(
        logs=[to_log_item(row) for row in rows],
        total=total,
        filters_applied=builder.filters_applied,
        limit=limit,
        offset=offset,
    )
