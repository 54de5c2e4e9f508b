"""Tests for short code generation and timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from shortlinks.core.exceptions import InvalidInput
from shortlinks.core.timestamps import to_db_timestamp
from shortlinks.utils.shortener import (
    generate_short_code,
    is_expired,
    is_reserved_code,
    parse_expiry,
    validate_short_code,
)


class TestShortCodes:
    """Tests for short code generation and validation."""

    def test_generate_short_code_default_length(self):
        assert len(generate_short_code()) == 6

    def test_generate_short_code_length(self):
        for length in [4, 6, 8, 10]:
            assert len(generate_short_code(length)) == length

    def test_generate_short_code_alphanumeric(self):
        for _ in range(100):
            assert generate_short_code().isalnum()

    def test_validate_short_code_valid(self):
        for code in ["abc", "abc123", "Abc123", "a1b2c3", "promo"]:
            assert validate_short_code(code) is True

    def test_validate_short_code_invalid(self):
        invalid_codes = [
            "",
            None,
            "ab",  # too short
            "a" * 25,  # too long
            "abc@123",
            "abc def",
            "abc-123",
        ]
        for code in invalid_codes:
            assert validate_short_code(code) is False

    def test_route_names_are_reserved(self):
        for code in ["links", "analytics", "health", "docs", "redoc", "shorten", "users"]:
            assert is_reserved_code(code) is True
            assert validate_short_code(code) is False

    def test_reserved_check_is_exact(self):
        assert is_reserved_code("Links") is False
        assert is_reserved_code("links2") is False
        assert validate_short_code("links2") is True


class TestExpiry:
    """Tests for expiry parsing and checks."""

    def test_parse_expiry_none(self):
        assert parse_expiry(None) is None
        assert parse_expiry("") is None

    def test_parse_expiry_zulu(self):
        parsed = parse_expiry("2030-01-01T12:00:00Z")
        assert parsed == datetime(2030, 1, 1, 12, tzinfo=timezone.utc)

    def test_parse_expiry_fractional_seconds_zulu(self):
        parsed = parse_expiry("2030-01-01T00:00:00.5Z")
        assert parsed == datetime(2030, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)

    def test_parse_expiry_offset_converted_to_utc(self):
        parsed = parse_expiry("2030-01-01T12:00:00+02:00")
        assert parsed == datetime(2030, 1, 1, 10, tzinfo=timezone.utc)

    def test_parse_expiry_naive_is_utc(self):
        parsed = parse_expiry(datetime(2030, 1, 1))
        assert parsed.tzinfo is not None
        assert parsed == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_parse_expiry_invalid(self):
        with pytest.raises(InvalidInput):
            parse_expiry("next tuesday")

    def test_is_expired(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        assert is_expired(None, now) is False
        assert is_expired(now + timedelta(seconds=1), now) is False
        assert is_expired(now, now) is True
        assert is_expired(now - timedelta(days=1), now) is True

    def test_db_timestamps_sort_chronologically(self):
        earlier = datetime(2030, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        later = earlier + timedelta(microseconds=500)
        assert to_db_timestamp(earlier) < to_db_timestamp(later)
        assert to_db_timestamp(earlier).endswith("+00:00")
