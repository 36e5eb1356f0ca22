# tidelogs/core/logging.py
"""
Application-wide logging configuration.

Purpose:
- Centralize logging setup (DRY)
- Provide consistent log output for the API and the store layer
- Make it easy to increase verbosity in dev without code changes
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the application.

    Args:
        level: Logging level as a string (e.g. "INFO", "DEBUG", "WARNING").

    Behavior:
    - Sets a single stream handler to stdout (container-friendly)
    - Applies a consistent, readable log format
    - Safe to call once during application startup
    """

    # Unknown names fall back to INFO
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Clear any existing handlers to avoid duplicate logs
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # SQLAlchemy engine logging is noisy at INFO; only surface it when debugging.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if log_level <= logging.DEBUG else logging.WARNING
    )
