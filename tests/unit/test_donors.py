# =============================================================================
# tests/unit/test_donors.py
# Unit Tests for donor aggregates
# =============================================================================

from datetime import date

import pytest

from btc_core.analytics.donors import (
    DonorWilayaStats,
    average_donor_age,
    donors_by_wilaya,
    filter_donors,
    summarize_donors,
)


class TestAverageDonorAge:

    def test_unparseable_dates_excluded(self, raw_snapshot, today):
        # 2024 - 1990 = 34, 2024 - 1980 = 44; "not a date" is skipped, not counted as 0
        assert average_donor_age(raw_snapshot["donors"], today) == 39

    def test_rounds_half_up(self):
        donors = [{"donorBirthDate": "1990-01-01"}, {"donorBirthDate": "1991-01-01"}]
        assert average_donor_age(donors, date(2024, 6, 1)) == 34

    @pytest.mark.parametrize("donors", [[], None, [{"donorBirthDate": None}, {"donorBirthDate": "??"}]])
    def test_no_valid_birth_dates(self, donors, today):
        assert average_donor_age(donors, today) == 0


class TestDonorsByWilaya:

    def test_counts_and_recent_donations(self, raw_snapshot, today):
        stats = donors_by_wilaya(raw_snapshot["donors"], raw_snapshot["wilayas"], today)

        assert stats == [
            DonorWilayaStats("Alger", 2, 1),
            DonorWilayaStats("Oran", 1, 0),
        ]

    def test_wilayas_without_donors_dropped(self, raw_snapshot, today):
        wilayas = [{"id": 9, "name": "Blida"}] + raw_snapshot["wilayas"]
        stats = donors_by_wilaya(raw_snapshot["donors"], wilayas, today)
        assert "Blida" not in [s.wilaya for s in stats]

    def test_ties_keep_wilaya_order(self, today):
        donors = [
            {"commune": {"wilayaId": 31}},
            {"commune": {"wilayaId": 16}},
        ]
        wilayas = [{"id": 16, "name": "Alger"}, {"id": 31, "name": "Oran"}]
        assert [s.wilaya for s in donors_by_wilaya(donors, wilayas, today)] == ["Alger", "Oran"]

    def test_empty(self, raw_snapshot, today):
        assert donors_by_wilaya([], raw_snapshot["wilayas"], today) == []
        assert donors_by_wilaya(raw_snapshot["donors"], [], today) == []


class TestDonorDirectory:

    def test_summaries(self, raw_snapshot, today):
        amina, karim, anonymous = summarize_donors(raw_snapshot["donors"], today)

        assert amina.name == "Amina"
        assert amina.age == 34
        assert amina.blood_group == "O+"
        assert amina.last_donation == "2024-02-10"
        assert karim.wilaya == "Oran"
        assert anonymous.name == "Anonymous Donor"
        assert anonymous.tel == "Hidden"
        assert anonymous.age is None
        assert anonymous.last_donation == "Never"
        assert anonymous.wilaya == "Wilaya 16"

    def test_search_is_case_insensitive(self, raw_snapshot, today):
        donors = summarize_donors(raw_snapshot["donors"], today)
        assert [d.id for d in filter_donors(donors, "AMINA")] == ["d1"]
        assert [d.id for d in filter_donors(donors, "oran")] == ["d2"]
        assert [d.id for d in filter_donors(donors, "kouba")] == ["d3"]

    def test_empty_search_matches_all(self, raw_snapshot, today):
        donors = summarize_donors(raw_snapshot["donors"], today)
        assert filter_donors(donors, "") == donors

    def test_wilaya_and_blood_group_filters(self, raw_snapshot, today):
        donors = summarize_donors(raw_snapshot["donors"], today)

        assert [d.id for d in filter_donors(donors, wilaya_id=16)] == ["d1", "d3"]
        assert [d.id for d in filter_donors(donors, blood_group="7")] == ["d1", "d3"]
        assert filter_donors(donors, wilaya_id=16, blood_group=3) == []
        assert filter_donors(donors, wilaya_id="all", blood_group="all") == donors
