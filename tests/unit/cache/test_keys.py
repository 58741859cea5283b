"""Tests for cache key builders."""

from __future__ import annotations

import pytest

from catalogsync.cache.keys import CacheKeys


class TestRecordKeys:
    """Tests for record cache keys."""

    @pytest.mark.parametrize(
        "record_id,expected",
        [
            (1, "catalogsync:product:1"),
            (42, "catalogsync:product:42"),
            ("42", "catalogsync:product:42"),
        ],
    )
    def test_record_key_format(self, record_id: int | str, expected: str):
        """Record keys should have correct format."""
        assert CacheKeys.record(record_id) == expected

    def test_record_key_uniqueness(self):
        """Different IDs should produce different keys."""
        assert CacheKeys.record(1) != CacheKeys.record(2)

    def test_prefix(self):
        """All keys share the application prefix."""
        assert CacheKeys.record(7).startswith(f"{CacheKeys.PREFIX}:")

    def test_invalid_id(self):
        with pytest.raises(ValueError):
            CacheKeys.record("abc")
