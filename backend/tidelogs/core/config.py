# tidelogs/core/config.py
"""
Central configuration for the TideLogs backend.

This module defines a single `settings` object (Pydantic BaseSettings) that reads
configuration from environment variables and a local `.env` file.

Guiding principles:
- DRY: config is declared once, imported everywhere.
- KISS: sensible defaults for local dev.
- Security: secrets (database passwords) live in env vars; `.env` is never committed.
"""

from __future__ import annotations

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and optional `.env`.

    `.env` location:
      - We run uvicorn from `backend/`, so `.env` should live in `backend/.env`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # deployment environments often add extra env vars
        case_sensitive=False,
    )

    # -----------------------
    # Runtime
    # -----------------------
    ENV: str = Field(default="dev", description="Environment: dev|test|prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (e.g., INFO, DEBUG)")

    # -----------------------
    # API / CORS
    # -----------------------
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins for the dashboard frontend",
    )

    # -----------------------
    # Request limits
    # -----------------------
    MAX_REQUEST_MB: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Max request body size in megabytes",
    )

    @property
    def MAX_REQUEST_BYTES(self) -> int:
        """Derived request size limit in bytes."""
        return int(self.MAX_REQUEST_MB) * 1024 * 1024

    # -----------------------
    # Database
    # -----------------------
    # SQLite (aiosqlite) for local runs; use postgresql+asyncpg://... in deployments.
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data/tidelogs.db",
        description="SQLAlchemy async database URL",
    )
    DB_POOL_SIZE: int = Field(default=5, ge=1, description="Connection pool size (server databases only)")
    DB_MAX_OVERFLOW: int = Field(default=10, ge=0, description="Extra connections allowed above pool size")
    DB_POOL_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a pooled connection before failing",
    )
    DB_CONNECT_RETRIES: int = Field(
        default=5,
        ge=1,
        description="Attempts made to reach the database at startup",
    )
    DB_CONNECT_RETRY_DELAY_SECONDS: float = Field(
        default=5.0,
        ge=0,
        description="Fixed delay between startup connection attempts",
    )
    SEED_SAMPLE_DATA: bool = Field(
        default=False,
        description="Insert demo log entries at startup when the table is empty",
    )

    # -----------------------
    # Query / ingestion policy
    # -----------------------
    DEFAULT_PAGE_LIMIT: int = Field(default=100, ge=1, description="Page size when no limit is requested")
    MAX_PAGE_LIMIT: int = Field(default=1000, ge=1, description="Largest page size ever returned")
    LEVEL_CASE_SENSITIVE: bool = Field(
        default=True,
        description="Reject levels that are not already upper-case (e.g. 'info')",
    )

    # -----------------------
    # Validators / normalizers
    # -----------------------
    @field_validator("ENV")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        return (v or "dev").strip().lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @field_validator("CORS_ALLOW_ORIGINS")
    @classmethod
    def _clean_cors_origins(cls, v: List[str]) -> List[str]:
        # Strip whitespace and drop empty entries to avoid weird CORS behavior.
        cleaned = []
        for origin in v or []:
            o = (origin or "").strip()
            if o:
                cleaned.append(o)
        return cleaned

    @field_validator("DATABASE_URL")
    @classmethod
    def _strip_strings(cls, v: str) -> str:
        return (v or "").strip()


# Singleton instance imported across the codebase.
settings = Settings()
