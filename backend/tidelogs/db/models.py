# tidelogs/db/models.py
"""
SQLAlchemy ORM models for the TideLogs backend.

Design goals:
- One flat `logs` table; rows are written once and never updated.
- Column types that work on both SQLite (local) and PostgreSQL (deployments).

Notes:
- Timestamps are stored as naive UTC datetimes (timezone-less) for SQLite simplicity.
  We convert to/from ISO 8601 with a trailing "Z" at the API boundary.
- `metadata` is a reserved attribute on declarative classes, so the Python
  attribute is `metadata_` while the column keeps the name `metadata`.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (microsecond precision)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
    pass


class LogEntry(Base):
    """
    A single submitted log entry.

    `id` and `created_at` are assigned at insert time. `timestamp` is the event
    time reported by the client, or the insert time when the client sent none.
    """

    __tablename__ = "logs"
    __table_args__ = (
        Index("idx_logs_service_level", "service", "level"),
        # GIN index for JSONB metadata lookups; PostgreSQL only
        Index("idx_logs_metadata", "metadata", postgresql_using="gin").ddl_if(dialect="postgresql"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), index=True, nullable=False, default=utcnow
    )

    service: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    level: Mapped[str] = mapped_column(String(50), index=True, nullable=False)

    # Log message content (may include long text)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    metadata_: Mapped[Dict[str, Any]] = mapped_column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), index=True, nullable=False, default=utcnow
    )
