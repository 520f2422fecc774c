# =============================================================================
# tests/unit/test_records.py
# Unit Tests for null-safe record accessors
# =============================================================================

import pytest

from btc_core.analytics.records import (
    as_non_negative,
    as_number,
    dig,
    parse_timestamp,
    parse_timestamps,
    round_half_up,
)


class TestDig:

    def test_nested_path(self):
        record = {"center": {"wilaya": {"name": "Oran"}}}
        assert dig(record, "center", "wilaya", "name") == "Oran"

    def test_missing_or_null_levels(self):
        assert dig({"center": None}, "center", "wilaya", "name") is None
        assert dig({}, "center", default="n/a") == "n/a"
        assert dig("not a dict", "center") is None


class TestNumbers:

    @pytest.mark.parametrize("raw, expected", [
        (12, 12),
        ("12", 12),
        ("12.5", 12.5),
        (3.0, 3),
    ])
    def test_as_number(self, raw, expected):
        assert as_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "x", True, float("nan"), float("inf")])
    def test_as_number_rejects(self, raw):
        assert as_number(raw) is None

    def test_negative_quantities_clamped(self):
        assert as_non_negative(-3) == 0
        assert as_non_negative(None) is None

    @pytest.mark.parametrize("value, digits, expected", [
        (2.5, 0, 3),
        (56.25, 0, 56),
        (12.5, 0, 13),
        (12.25, 1, 12.3),
        (33.33333, 1, 33.3),
    ])
    def test_round_half_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected


class TestTimestamps:

    def test_parse_iso(self):
        ts = parse_timestamp("2024-01-15T10:00:00Z")
        assert (ts.year, ts.month, ts.day) == (2024, 1, 15)

    @pytest.mark.parametrize("raw", [None, "", "garbage", 20240115])
    def test_unparseable(self, raw):
        assert parse_timestamp(raw) is None

    def test_vectorised_parse_marks_bad_values(self):
        parsed = parse_timestamps(["1990-05-01T00:00:00Z", None, "nope"])
        assert parsed.notna().tolist() == [True, False, False]
