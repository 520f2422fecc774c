# =============================================================================
# tests/unit/test_enums.py
# Unit Tests for coded enumerations
# =============================================================================

import pytest

from btc_core.analytics.enums import (
    Availability,
    BloodGroup,
    ContactMethod,
    DonationType,
    Priority,
    RequestStatus,
    UnknownCode,
    label_for,
    parse_code,
)


class TestEnumerationTables:
    """Closed code -> label tables"""

    @pytest.mark.parametrize("enum_cls, size", [
        (BloodGroup, 8),
        (DonationType, 3),
        (Priority, 3),
        (RequestStatus, 5),
        (ContactMethod, 3),
        (Availability, 5),
    ])
    def test_table_sizes(self, enum_cls, size):
        assert len(enum_cls) == size

    def test_blood_group_labels(self):
        assert [g.label for g in BloodGroup] == ["AB+", "AB-", "A+", "A-", "B+", "B-", "O+", "O-"]

    def test_status_starts_at_zero(self):
        assert RequestStatus(0).label == "Initiated"
        assert RequestStatus(4).label == "Canceled"


class TestParseCode:
    """Parsing raw codes"""

    @pytest.mark.parametrize("raw", [7, "7", 7.0, " 7 "])
    def test_accepts_numeric_spellings(self, raw):
        assert parse_code(BloodGroup, raw) is BloodGroup.O_POS

    def test_critical_priority(self):
        assert parse_code(Priority, 3) is Priority.CRITICAL

    def test_unknown_code_keeps_raw_value(self):
        parsed = parse_code(BloodGroup, 99)
        assert isinstance(parsed, UnknownCode)
        assert parsed.code == 99
        assert parsed.label == "Blood Group 99"


class TestLabelFor:
    """Display labels never fail"""

    def test_known(self):
        assert label_for(DonationType, 2) == "Platelet"

    def test_unknown_code_renders_category(self):
        assert label_for(RequestStatus, 9) == "Status 9"
        assert label_for(ContactMethod, 0) == "Contact Method 0"

    def test_missing_code(self):
        assert label_for(Availability, None) == "Availability unknown"

    def test_non_numeric_code(self):
        assert label_for(BloodGroup, "abc") == "Blood Group abc"
