# tidelogs/utils/validators.py
"""
Log entry validation and normalization.

Rules for a submitted entry:
- service: required, trimmed, must not be empty
- message: required, trimmed, must not be empty
- level: one of ERROR, WARN, INFO, DEBUG (checked on the raw value unless
  case-insensitive mode is on), stored upper-case
- metadata: defaults to {}
- timestamp: optional ISO 8601; normalized to naive UTC

Everything here is pure; persistence is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser as dtparser

from tidelogs.core.errors import ValidationError
from tidelogs.schemas.logs import LogEntryCreate

# Canonical levels, most severe first
CANONICAL_LEVELS = ("ERROR", "WARN", "INFO", "DEBUG")


@dataclass(frozen=True)
class NormalizedEntry:
    """A validated entry, ready to be written."""
    service: str
    level: str
    message: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[datetime] = None  # naive UTC; None -> store assigns


# ----------------------------
# Normalization helpers
# ----------------------------
def parse_timestamp_to_utc_naive(value: str) -> datetime:
    """
    Parse a timestamp string and normalize to naive UTC datetime.

    - If tz-aware -> convert to UTC and drop tzinfo.
    - If tz-naive -> treat as UTC.
    """
    dt = dtparser.isoparse(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def isoformat_z(dt: datetime) -> str:
    """Convert naive UTC datetime to ISO8601 with trailing 'Z'."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat() + "Z"


def _require_text(name: str, raw: Optional[str]) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValidationError(name, f"'{name}' must not be empty.")
    return value


def normalize_level(raw: Optional[str], *, case_sensitive: bool = True) -> str:
    """
    Return the canonical level for `raw` or raise ValidationError.

    In case-sensitive mode 'info' is rejected; otherwise it becomes 'INFO'.
    """
    value = raw or ""
    candidate = value if case_sensitive else value.strip().upper()
    if candidate not in CANONICAL_LEVELS:
        raise ValidationError(
            "level",
            f"'level' must be one of {', '.join(CANONICAL_LEVELS)} (got {value!r}).",
        )
    return candidate.upper()


def validate_entry(candidate: LogEntryCreate, *, case_sensitive_level: bool = True) -> NormalizedEntry:
    """
    Validate a submitted entry and return its normalized form.

    Raises:
        ValidationError: empty service/message, unknown level, or an
        unparseable timestamp.
    """
    service = _require_text("service", candidate.service)
    message = _require_text("message", candidate.message)
    level = normalize_level(candidate.level, case_sensitive=case_sensitive_level)

    timestamp = None
    if candidate.timestamp is not None and candidate.timestamp.strip():
        try:
            timestamp = parse_timestamp_to_utc_naive(candidate.timestamp.strip())
        except (ValueError, OverflowError) as exc:
            raise ValidationError("timestamp", "'timestamp' must be an ISO 8601 date-time.") from exc

    return NormalizedEntry(
        service=service,
        level=level,
        message=message,
        metadata=dict(candidate.metadata) if candidate.metadata is not None else {},
        timestamp=timestamp,
    )
