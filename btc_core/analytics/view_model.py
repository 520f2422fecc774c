"""
ViewModel: everything the dashboard pages render, derived from one raw snapshot.

build_view_model() is a pure function of (snapshot, connectivity, today):
the same inputs always produce an equal ViewModel.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from btc_core.analytics.alerts import AlertEntry, build_alert_feed
from btc_core.analytics.centers import CenterSummary, summarize_centers
from btc_core.analytics.distributions import (
    DistributionRow,
    distribution_from_counts,
    distribution_from_records,
)
from btc_core.analytics.donors import (
    DonorSummary,
    DonorWilayaStats,
    average_donor_age,
    donors_by_wilaya,
    summarize_donors,
)
from btc_core.analytics.enums import BloodGroup, DonationType, Priority, RequestStatus
from btc_core.analytics.records import Number, as_dict, as_list, as_non_negative
from btc_core.analytics.regions import RegionPerformance, rank_regions, top_regions_by_requests
from btc_core.analytics.stock import StockHealth, StockRow, count_by_health, stock_rows, stock_totals_by_scope
from btc_core.api.resources import CENTERS, DONORS, REQUESTS, STATS, WILAYAS
from btc_core.offline.connection_state import ConnectivityState


@dataclass(frozen=True)
class DashboardTotals:
    donors: Number = 0
    requests: Number = 0
    centers: Number = 0
    stock: Number = 0


@dataclass(frozen=True)
class ViewModel:
    """Immutable snapshot handed to the presentation layer."""
    connectivity: ConnectivityState
    totals: DashboardTotals = field(default_factory=DashboardTotals)
    stock: List[StockRow] = field(default_factory=list)
    critical_stock_count: int = 0
    low_stock_count: int = 0
    stock_by_wilaya: Dict[str, Number] = field(default_factory=dict)
    stock_by_center: Dict[str, Number] = field(default_factory=dict)
    top_wilayas: List[DistributionRow] = field(default_factory=list)
    requests_by_blood_group: List[DistributionRow] = field(default_factory=list)
    requests_by_priority: List[DistributionRow] = field(default_factory=list)
    requests_by_status: List[DistributionRow] = field(default_factory=list)
    requests_by_donation_type: List[DistributionRow] = field(default_factory=list)
    region_performance: List[RegionPerformance] = field(default_factory=list)
    alerts: List[AlertEntry] = field(default_factory=list)
    centers: List[CenterSummary] = field(default_factory=list)
    wilayas: List[Dict[str, Any]] = field(default_factory=list)
    donors: List[DonorSummary] = field(default_factory=list)
    donors_by_blood_type: List[DistributionRow] = field(default_factory=list)
    donors_by_wilaya: List[DonorWilayaStats] = field(default_factory=list)
    average_donor_age: int = 0

    @property
    def status_message(self) -> Optional[str]:
        return self.connectivity.status_message


def _requests_by_blood_group(requests: List[Any], stats: Dict[str, Any]) -> List[DistributionRow]:
    # Request records when the cycle fetched them, the pre-counted stats map otherwise
    if requests:
        return distribution_from_records(requests, "bloodGroup", BloodGroup)
    return distribution_from_counts(stats.get("requestsByBloodGroup"), BloodGroup)


def build_view_model(
    snapshot: Any,
    connectivity: Optional[ConnectivityState] = None,
    today: Optional[date] = None,
) -> ViewModel:
    """
    Derive every dashboard metric from a RawPayloads mapping.

    Args:
        snapshot: {"stats": {...}, "requests": [...], "centers": [...],
                   "wilayas": [...], "donors": [...]}; any key may be missing
        connectivity: State published by the cycle that produced the snapshot
        today: Reference date for ages and "new this month" (defaults to today)

    Returns:
        ViewModel; empty collections for whatever the snapshot lacks
    """
    snapshot = as_dict(snapshot)
    connectivity = connectivity or ConnectivityState.initial()
    today = today or date.today()

    stats = as_dict(snapshot.get(STATS))
    requests = as_list(snapshot.get(REQUESTS))
    centers = as_list(snapshot.get(CENTERS))
    wilayas = as_list(snapshot.get(WILAYAS))
    donors = as_list(snapshot.get(DONORS))

    rows = stock_rows(stats.get("globalBloodStock"))
    health_counts = count_by_health(rows)

    return ViewModel(
        connectivity=connectivity,
        totals=DashboardTotals(
            donors=as_non_negative(stats.get("totalDonors")) or len(donors),
            requests=as_non_negative(stats.get("totalBloodRequests")) or len(requests),
            centers=as_non_negative(stats.get("totalBloodCenters")) or len(centers),
            stock=sum(row.available for row in rows),
        ),
        stock=rows,
        critical_stock_count=health_counts[StockHealth.CRITICAL],
        low_stock_count=health_counts[StockHealth.LOW],
        stock_by_wilaya=stock_totals_by_scope(stats.get("bloodStockByWilaya")),
        stock_by_center=stock_totals_by_scope(stats.get("bloodStockByCenter")),
        top_wilayas=top_regions_by_requests(stats.get("requestsByWilaya")),
        requests_by_blood_group=_requests_by_blood_group(requests, stats),
        requests_by_priority=distribution_from_records(requests, "priority", Priority),
        requests_by_status=distribution_from_records(requests, "evolutionStatus", RequestStatus),
        requests_by_donation_type=distribution_from_records(requests, "donationType", DonationType),
        region_performance=rank_regions(stats.get("requestsByWilaya"), stats.get("centersByWilaya")),
        alerts=build_alert_feed(rows, requests),
        centers=summarize_centers(centers),
        wilayas=[dict(w) for w in wilayas if isinstance(w, dict)],
        donors=summarize_donors(donors, today),
        donors_by_blood_type=distribution_from_records(donors, "donorBloodGroup", BloodGroup),
        donors_by_wilaya=donors_by_wilaya(donors, wilayas, today),
        average_donor_age=average_donor_age(donors, today),
    )
