"""Tests for application settings."""

from tidelogs.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("ENV", "LOG_LEVEL", "DATABASE_URL", "DEFAULT_PAGE_LIMIT", "MAX_PAGE_LIMIT", "LEVEL_CASE_SENSITIVE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.DEFAULT_PAGE_LIMIT == 100
    assert settings.MAX_PAGE_LIMIT == 1000
    assert settings.DB_CONNECT_RETRIES == 5
    assert settings.DB_CONNECT_RETRY_DELAY_SECONDS == 5.0
    assert settings.LEVEL_CASE_SENSITIVE is True
    assert settings.SEED_SAMPLE_DATA is False
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")
    assert settings.CORS_ALLOW_ORIGINS == ["http://localhost:3000"]


def test_values_normalized_from_env(monkeypatch):
    monkeypatch.setenv("ENV", "  PROD ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DATABASE_URL", " postgresql+asyncpg://u:p@db:5432/tidelogs ")
    monkeypatch.setenv("LEVEL_CASE_SENSITIVE", "false")

    settings = Settings(_env_file=None)

    assert settings.ENV == "prod"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/tidelogs"
    assert settings.LEVEL_CASE_SENSITIVE is False


def test_request_limit_in_bytes():
    assert Settings(_env_file=None, MAX_REQUEST_MB=2).MAX_REQUEST_BYTES == 2 * 1024 * 1024
