# =============================================================================
# tests/unit/test_fallback_dataset.py
# Unit Tests for the offline dataset
# =============================================================================

from datetime import date

from btc_core.analytics.enums import (
    Availability,
    BloodGroup,
    ContactMethod,
    DonationType,
    LabelledEnum,
    Priority,
    RequestStatus,
    parse_code,
)
from btc_core.analytics.view_model import build_view_model
from btc_core.api.resources import ALL_RESOURCES
from btc_core.offline import fallback_snapshot


class TestFallbackDataset:

    def test_has_every_resource(self):
        snapshot = fallback_snapshot()
        assert set(snapshot) == set(ALL_RESOURCES)
        assert all(snapshot[name] for name in ALL_RESOURCES)

    def test_returns_independent_copies(self):
        first = fallback_snapshot()
        first["centers"].clear()
        first["stats"]["totalDonors"] = -1
        second = fallback_snapshot()
        assert second["centers"]
        assert second["stats"]["totalDonors"] == 4068

    def test_references_are_consistent(self):
        snapshot = fallback_snapshot()
        wilaya_ids = {w["id"] for w in snapshot["wilayas"]}
        center_ids = {c["id"] for c in snapshot["centers"]}

        assert all(c["wilayaId"] in wilaya_ids for c in snapshot["centers"])
        assert all(r["bloodTansfusionCenterId"] in center_ids for r in snapshot["requests"])
        assert all(d["commune"]["wilayaId"] in wilaya_ids for d in snapshot["donors"])

    def test_codes_are_valid(self):
        snapshot = fallback_snapshot()
        checks = [(BloodGroup, r["bloodGroup"]) for r in snapshot["requests"]]
        checks += [(Priority, r["priority"]) for r in snapshot["requests"]]
        checks += [(RequestStatus, r["evolutionStatus"]) for r in snapshot["requests"]]
        checks += [(DonationType, r["donationType"]) for r in snapshot["requests"]]
        checks += [(BloodGroup, d["donorBloodGroup"]) for d in snapshot["donors"]]
        checks += [(ContactMethod, d["donorContactMethod"]) for d in snapshot["donors"]]
        checks += [(Availability, d["donorAvailability"]) for d in snapshot["donors"]]
        checks += [(BloodGroup, code) for code in snapshot["stats"]["globalBloodStock"]]

        assert all(isinstance(parse_code(enum_cls, code), LabelledEnum) for enum_cls, code in checks)

    def test_quantities_non_negative(self):
        snapshot = fallback_snapshot()
        for center in snapshot["centers"]:
            for inventory in center["bloodInventories"]:
                assert min(inventory["totalQty"], inventory["minQty"], inventory["maxQty"]) >= 0
        for summary in snapshot["stats"]["globalBloodStock"].values():
            assert min(summary.values()) >= 0

    def test_aggregates_to_a_populated_view_model(self):
        vm = build_view_model(fallback_snapshot(), today=date(2024, 2, 20))

        assert [a.id for a in vm.alerts] == ["low-O-", "low-B-", "low-AB-", "req-1", "req-3", "req-4"]
        assert len(vm.region_performance) == 5
        assert len(vm.centers) == 5
        assert list(vm.stock_by_center) == [c.name for c in vm.centers]
        assert all(units > 0 for units in vm.stock_by_center.values())
        assert vm.average_donor_age > 0
