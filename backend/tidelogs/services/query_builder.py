# tidelogs/services/query_builder.py
"""
Filter -> SQL construction for GET /logs.

The page query and the count query must always agree on which rows match,
otherwise `total` and the returned page drift apart. So predicates and their
bound values are collected exactly once, in a fixed order (service, then
level), and both statements are rendered from that single list:

    fetch:  SELECT ... FROM logs [WHERE ...] ORDER BY timestamp DESC, created_at DESC
            LIMIT :limit OFFSET :offset
    count:  SELECT count(*) FROM logs [WHERE ...]

Limit/offset are bound after every filter value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import ColumnElement, Select, and_, func, select

from tidelogs.db.models import LogEntry

# Filterable fields, in the order their predicates are emitted
FILTER_FIELDS: Tuple[str, ...] = ("service", "level")


@dataclass(frozen=True)
class Predicate:
    """One equality condition and the value bound to it."""
    field: str
    value: Any

    def clause(self) -> ColumnElement[bool]:
        return getattr(LogEntry, self.field) == self.value


@dataclass
class LogQueryBuilder:
    """
    Accumulates equality predicates and renders the fetch/count pair.

    Usage:
        builder = LogQueryBuilder().where("service", "api").where("level", None)
        rows_stmt = builder.fetch_statement(limit=100, offset=0)
        count_stmt = builder.count_statement()
    """

    predicates: List[Predicate] = field(default_factory=list)

    def where(self, field_name: str, value: Optional[Any]) -> "LogQueryBuilder":
        """Add `field_name = value`; a None value means the filter is absent."""
        if field_name not in FILTER_FIELDS:
            raise KeyError(f"Unsupported filter field: {field_name}")
        if value is not None:
            self.predicates.append(Predicate(field_name, value))
            # Emission order is FILTER_FIELDS order, not call order
            self.predicates.sort(key=lambda p: FILTER_FIELDS.index(p.field))
        return self

    @property
    def params(self) -> List[Any]:
        """Bound filter values, in predicate order."""
        return [p.value for p in self.predicates]

    @property
    def filters_applied(self) -> Dict[str, str]:
        return {p.field: str(p.value) for p in self.predicates}

    def _restriction(self) -> Optional[ColumnElement[bool]]:
        if not self.predicates:
            return None
        return and_(*(p.clause() for p in self.predicates))

    def _restrict(self, stmt: Select) -> Select:
        restriction = self._restriction()
        return stmt if restriction is None else stmt.where(restriction)

    def fetch_statement(self, *, limit: int, offset: int) -> Select:
        """Rows for one page, newest first."""
        stmt = self._restrict(select(LogEntry))
        return (
            stmt.order_by(LogEntry.timestamp.desc(), LogEntry.created_at.desc())
            .limit(limit)
            .offset(offset)
        )

    def count_statement(self) -> Select:
        """Total matching rows; no ordering or pagination."""
        return self._restrict(select(func.count()).select_from(LogEntry))


def build_log_query(service: Optional[str] = None, level: Optional[str] = None) -> LogQueryBuilder:
    """Builder for the standard GET /logs filters."""
    return LogQueryBuilder().where("service", service).where("level", level)
