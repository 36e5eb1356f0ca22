# tidelogs/services/pagination.py
"""
Pagination policy for GET /logs.

- limit: defaults to DEFAULT_PAGE_LIMIT, silently capped at MAX_PAGE_LIMIT
- offset: defaults to 0

Negative values are passed through untouched; the database decides what
they mean (SQLite ignores them, PostgreSQL rejects them).
"""

from __future__ import annotations

from typing import Optional, Tuple

from tidelogs.core.config import settings


def resolve_pagination(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None,
) -> Tuple[int, int]:
    """Return the effective (limit, offset) pair."""
    default_limit = settings.DEFAULT_PAGE_LIMIT if default_limit is None else default_limit
    max_limit = settings.MAX_PAGE_LIMIT if max_limit is None else max_limit

    effective_limit = default_limit if limit is None else min(limit, max_limit)
    effective_offset = 0 if offset is None else offset
    return effective_limit, effective_offset
