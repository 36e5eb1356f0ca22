# tidelogs/schemas/metrics.py
"""
Schemas for GET /metrics.

These models define the contract for the dashboard's metric cards.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class MetricsResponse(BaseModel):
    """
    Aggregate counts over every stored entry (filters never apply).

    Example:
      {"total_logs": 10, "services": {"auth-service": 3}, "levels": {"INFO": 5}}
    """
    total_logs: int = Field(..., ge=0, description="Total number of stored entries")
    services: Dict[str, int] = Field(default_factory=dict, description="Entry count per service")
    levels: Dict[str, int] = Field(default_factory=dict, description="Entry count per level")
