# tidelogs/schemas/logs.py
"""
Schemas for POST /logs and GET /logs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LogEntryCreate(BaseModel):
    """
    Incoming log entry as sent by clients.

    Only the shape is checked here; emptiness and level rules are enforced by
    tidelogs.utils.validators so they produce a ValidationError (HTTP 400).
    """
    service: str = Field(..., description="Emitting service name (e.g., auth-service)")
    level: str = Field(..., description="One of ERROR, WARN, INFO, DEBUG")
    message: str = Field(..., description="Log message")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Arbitrary structured context")
    timestamp: Optional[str] = Field(
        default=None,
        description="Event time (ISO 8601). Defaults to the time the entry is stored.",
    )


class LogItem(BaseModel):
    """A single persisted log record."""
    id: str = Field(..., description="Log identifier (UUID)")
    timestamp: str = Field(..., description="ISO8601 UTC event timestamp")
    service: str = Field(..., description="Emitting service")
    level: str = Field(..., description="Severity level")
    message: str = Field(..., description="Log message")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Structured context")
    created_at: str = Field(..., description="ISO8601 UTC time the entry was stored")


class LogFilters(BaseModel):
    """
    Query-string filters for GET /logs.

    `limit` and `offset` are resolved by tidelogs.services.pagination.
    """
    service: Optional[str] = None
    level: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class LogsResponse(BaseModel):
    """
    Response for browsing logs with filters.

    Example:
    {
      "logs": [...],
      "total": 5,
      "filters_applied": {"service": "api", "level": "ERROR"},
      "limit": 100,
      "offset": 0
    }
    """
    logs: List[LogItem] = Field(default_factory=list, description="Log entries, newest first")
    total: int = Field(..., description="Total matching entries before pagination")
    filters_applied: Dict[str, str] = Field(
        default_factory=dict,
        description="Echo of applied filters (for UI clarity)",
    )
    limit: int = Field(..., description="Effective page size")
    offset: int = Field(..., description="Effective page offset")
