# tidelogs/api/routes/logs.py
"""
POST /logs and GET /logs

Submit a single log entry, or browse stored entries.

Supported filters:
- service
- level
- pagination (limit + offset)

Validation and store errors are raised as ValidationError / StoreError and
turned into responses by the handlers registered in tidelogs.main.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tidelogs.db.session import get_session
from tidelogs.schemas.logs import LogEntryCreate, LogFilters, LogItem, LogsResponse
from tidelogs.services.log_service import query_logs, submit

router = APIRouter()


@router.post("/logs", response_model=LogItem)
async def create_log(
    entry: LogEntryCreate,
    session: AsyncSession = Depends(get_session),
):
    """
    Store one log entry and return it as persisted.

    Example body:
      {"service": "api", "level": "INFO", "message": "started", "metadata": {"version": "1.0.0"}}
    """
    return await submit(session, entry)


@router.get("/logs", response_model=LogsResponse)
async def get_logs(
    service: Optional[str] = Query(default=None, description="Filter by service"),
    level: Optional[str] = Query(default=None, description="Filter by level"),
    limit: Optional[int] = Query(default=None, description="Max results to return (default 100, max 1000)"),
    offset: Optional[int] = Query(default=None, description="Pagination offset"),
    session: AsyncSession = Depends(get_session),
):
    """
    Retrieve log entries with optional filters, newest first.

    Example:
      /logs?service=auth-service&level=ERROR&limit=20
    """
    filters = LogFilters(service=service, level=level, limit=limit, offset=offset)
    return await query_logs(session, filters)
