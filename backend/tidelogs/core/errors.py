# tidelogs/core/errors.py
"""
Error taxonomy shared by services and the HTTP layer.

- ValidationError: the submitted entry is malformed; nothing reaches the store.
- StoreError: the persistence layer failed; the request is aborted with no partial effects.

The HTTP layer (tidelogs.main) maps these onto 400 / 500 responses.
"""

from __future__ import annotations


class TideLogsError(Exception):
    """Base class for all service-level errors."""


class ValidationError(TideLogsError):
    """A submitted log entry failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class StoreError(TideLogsError):
    """
    Any failure coming from the database.

    Only the operation name is kept for logging and responses; filter values
    and entry contents stay out of the message.
    """

    def __init__(self, operation: str, message: str = "Database operation failed.") -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message
