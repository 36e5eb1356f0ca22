# tidelogs/api/routes/metrics.py
"""
GET /metrics

Counts for the dashboard's metric cards:
- total_logs
- services: entries per service
- levels: entries per level

Always computed over every stored entry.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tidelogs.db.session import get_session
from tidelogs.schemas.metrics import MetricsResponse
from tidelogs.services.metrics_service import compute_metrics

router = APIRouter()


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(session: AsyncSession = Depends(get_session)):
    return await compute_metrics(session)
