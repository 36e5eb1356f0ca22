"""Tests for log entry validation and normalization."""

from datetime import datetime

import pytest

from tidelogs.core.errors import ValidationError
from tidelogs.schemas.logs import LogEntryCreate
from tidelogs.utils.validators import (
    CANONICAL_LEVELS,
    isoformat_z,
    normalize_level,
    parse_timestamp_to_utc_naive,
    validate_entry,
)


def _candidate(**overrides) -> LogEntryCreate:
    data = {"service": "api", "level": "INFO", "message": "started"}
    data.update(overrides)
    return LogEntryCreate(**data)


class TestRequiredText:
    """service and message must contain something besides whitespace."""

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_empty_service_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_entry(_candidate(service=value))
        assert exc_info.value.field == "service"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_message_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_entry(_candidate(message=value))
        assert exc_info.value.field == "message"

    def test_values_are_trimmed(self):
        entry = validate_entry(_candidate(service="  api  ", message="\tstarted \n"))

        assert entry.service == "api"
        assert entry.message == "started"


class TestLevel:
    """Levels are checked against ERROR/WARN/INFO/DEBUG."""

    @pytest.mark.parametrize("level", CANONICAL_LEVELS)
    def test_canonical_levels_accepted(self, level):
        assert validate_entry(_candidate(level=level)).level == level

    @pytest.mark.parametrize("level", ["info", "Warn", "WARNING", "CRITICAL", "", "INFO "])
    def test_case_sensitive_mode_rejects_non_canonical(self, level):
        with pytest.raises(ValidationError) as exc_info:
            validate_entry(_candidate(level=level))
        assert exc_info.value.field == "level"

    @pytest.mark.parametrize("level,expected", [("info", "INFO"), ("Warn", "WARN"), (" debug ", "DEBUG")])
    def test_case_insensitive_mode_upper_cases(self, level, expected):
        entry = validate_entry(_candidate(level=level), case_sensitive_level=False)
        assert entry.level == expected

    def test_case_insensitive_mode_still_rejects_unknown(self):
        with pytest.raises(ValidationError):
            normalize_level("warning", case_sensitive=False)


class TestMetadataAndTimestamp:
    def test_missing_metadata_defaults_to_empty(self):
        assert validate_entry(_candidate()).metadata == {}

    def test_metadata_kept_as_is(self):
        metadata = {"version": "1.0.0", "nested": {"retries": 3}, "tags": ["a", "b"]}
        assert validate_entry(_candidate(metadata=metadata)).metadata == metadata

    def test_missing_timestamp_left_for_store(self):
        assert validate_entry(_candidate()).timestamp is None

    def test_timestamp_converted_to_naive_utc(self):
        entry = validate_entry(_candidate(timestamp="2024-01-12T16:30:00+02:00"))
        assert entry.timestamp == datetime(2024, 1, 12, 14, 30, 0)

    def test_naive_timestamp_treated_as_utc(self):
        assert parse_timestamp_to_utc_naive("2024-01-12T14:30:00.123456") == datetime(2024, 1, 12, 14, 30, 0, 123456)

    def test_bad_timestamp_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_entry(_candidate(timestamp="yesterday-ish"))
        assert exc_info.value.field == "timestamp"

    def test_isoformat_z(self):
        assert isoformat_z(datetime(2024, 1, 12, 14, 30, 5)) == "2024-01-12T14:30:05Z"
        assert isoformat_z(datetime(2024, 1, 12, 14, 30, 5, 999)) == "2024-01-12T14:30:05.000999Z"
