# =============================================================================
# tests/unit/test_view_model.py
# Unit Tests for ViewModel assembly
# =============================================================================

import copy

import pytest

from btc_core.analytics.view_model import ViewModel, build_view_model
from btc_core.offline.connection_state import ConnectivityState


class TestBuildViewModel:

    def test_full_snapshot(self, raw_snapshot, today):
        vm = build_view_model(raw_snapshot, ConnectivityState.live(), today)

        assert vm.totals.donors == 120
        assert vm.totals.stock == 270
        assert (vm.critical_stock_count, vm.low_stock_count) == (1, 1)
        assert vm.stock_by_wilaya == {"Alger": 80}
        assert [r.region for r in vm.region_performance] == ["Alger", "Oran"]
        assert [a.id for a in vm.alerts] == ["stock-O+", "low-A+", "req-r1", "req-r3"]
        assert [r.label for r in vm.requests_by_priority] == ["Critical", "Normal", "Low"]
        assert [r.label for r in vm.requests_by_status] == ["Waiting", "Initiated", "Resolved"]
        assert [r.label for r in vm.requests_by_donation_type] == ["Whole Blood", "Platelet"]
        assert [r.label for r in vm.donors_by_blood_type] == ["O+", "A+"]
        assert vm.average_donor_age == 39
        assert len(vm.centers) == 2
        assert vm.status_message is None

    def test_stock_totals_per_center(self, raw_snapshot, today):
        raw_snapshot["stats"]["bloodStockByCenter"] = {
            "BTC Alger": {"7": {"totalAvailable": 120}, "3": {"totalAvailable": 35}},
            "BTC Oran": {"8": {"totalAvailable": None}},
        }
        vm = build_view_model(raw_snapshot, ConnectivityState.live(), today)

        assert vm.stock_by_center == {"BTC Alger": 155, "BTC Oran": 0}

    def test_stock_per_center_missing(self, raw_snapshot, today):
        assert build_view_model(raw_snapshot, today=today).stock_by_center == {}

    def test_same_snapshot_same_view_model(self, raw_snapshot, today):
        first = build_view_model(copy.deepcopy(raw_snapshot), ConnectivityState.live(), today)
        second = build_view_model(copy.deepcopy(raw_snapshot), ConnectivityState.live(), today)
        assert first == second

    def test_blood_groups_fall_back_to_stats_counts(self, raw_snapshot, today):
        raw_snapshot.pop("requests")
        vm = build_view_model(raw_snapshot, today=today)
        assert [(r.label, r.count) for r in vm.requests_by_blood_group] == [("O+", 3), ("A+", 1)]

    def test_counts_fall_back_to_collection_sizes(self, raw_snapshot, today):
        raw_snapshot["stats"] = {}
        vm = build_view_model(raw_snapshot, today=today)
        assert (vm.totals.donors, vm.totals.requests, vm.totals.centers) == (3, 4, 2)


class TestEmptySnapshot:

    @pytest.mark.parametrize("snapshot", [
        {},
        None,
        {"stats": None, "requests": None, "centers": None, "wilayas": None, "donors": None},
        {"stats": "garbage", "requests": {"not": "a list"}, "donors": 7},
    ])
    def test_everything_empty(self, snapshot, today):
        vm = build_view_model(snapshot, today=today)

        assert isinstance(vm, ViewModel)
        assert vm.stock == []
        assert vm.alerts == []
        assert vm.region_performance == []
        assert vm.top_wilayas == []
        assert vm.requests_by_blood_group == []
        assert vm.requests_by_priority == []
        assert vm.donors_by_blood_type == []
        assert vm.donors_by_wilaya == []
        assert vm.centers == []
        assert vm.average_donor_age == 0
        assert vm.totals.stock == 0
        assert vm.connectivity == ConnectivityState.initial()
