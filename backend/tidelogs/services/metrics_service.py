# tidelogs/services/metrics_service.py
"""
Aggregate counts for GET /metrics.

Three independent reads (total, per service, per level) without a wrapping
transaction: under concurrent writes the numbers may come from slightly
different moments. Filters never apply here.
"""

from __future__ import annotations

import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from tidelogs.core.errors import StoreError
from tidelogs.db.models import LogEntry
from tidelogs.schemas.metrics import MetricsResponse

logger = logging.getLogger(__name__)


async def _count_total(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(LogEntry))
    return int(result.scalar() or 0)


async def _count_by(session: AsyncSession, column: InstrumentedAttribute) -> Dict[str, int]:
    result = await session.execute(
        select(column, func.count().label("count")).group_by(column)
    )
    return {str(key): int(count) for key, count in result.all()}


async def compute_metrics(session: AsyncSession) -> MetricsResponse:
    """
    Total entry count plus counts grouped by service and by level.

    Raises:
        StoreError: any of the three reads failed.
    """
    try:
        total_logs = await _count_total(session)
        services = await _count_by(session, LogEntry.service)
        levels = await _count_by(session, LogEntry.level)
    except SQLAlchemyError as exc:
        logger.error("Failed to compute metrics: %s", exc.__class__.__name__)
        raise StoreError("compute_metrics") from exc

    return MetricsResponse(total_logs=total_logs, services=services, levels=levels)
