"""
Wilaya (region) rankings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

import pandas as pd

from btc_core.analytics.distributions import DistributionRow
from btc_core.analytics.records import Number, as_dict, as_non_negative, round_half_up

TOP_REGIONS = 5
SCORE_FACTOR = 10
EFFICIENCY_FACTOR = 1.5


@dataclass(frozen=True)
class RegionPerformance:
    region: str
    request_count: Number
    center_count: Number
    score: int
    efficiency: str


def rank_regions(requests_by_region: Any, centers_by_region: Any, limit: int = TOP_REGIONS) -> List[RegionPerformance]:
    """
    Rank regions by requests per center.

    score      = round((requests / max(centers, 1)) * 10)
    efficiency = (requests / max(centers, 1)) * 1.5, one decimal

    Sorted by score descending; equal scores keep the input order.
    """
    centers_by_region = as_dict(centers_by_region)
    rows = []
    for region, requests in as_dict(requests_by_region).items():
        request_count = as_non_negative(requests) or 0
        center_count = as_non_negative(centers_by_region.get(region)) or 0
        per_center = request_count / max(center_count, 1)
        rows.append({
            "region": str(region),
            "request_count": request_count,
            "center_count": center_count,
            "score": round_half_up(per_center * SCORE_FACTOR),
            "efficiency": f"{round_half_up(per_center * EFFICIENCY_FACTOR, 1):.1f}",
        })
    if not rows:
        return []

    frame = pd.DataFrame(rows)
    ranked = frame.sort_values("score", ascending=False, kind="stable").head(limit)
    return [RegionPerformance(**record) for record in _records(ranked)]


def top_regions_by_requests(requests_by_region: Any, limit: int = TOP_REGIONS) -> List[DistributionRow]:
    """Regions with the most requests, with their share of all requests."""
    counts = pd.Series(
        {str(region): as_non_negative(count) or 0 for region, count in as_dict(requests_by_region).items()},
        dtype="float64",
    )
    counts = counts[counts > 0]
    if counts.empty:
        return []
    total = counts.sum()
    ranked = counts.sort_values(ascending=False, kind="stable").head(limit)
    return [
        DistributionRow(
            label=region,
            count=int(count) if float(count).is_integer() else float(count),
            percentage=round_half_up(float(count) / float(total) * 100, 1),
        )
        for region, count in ranked.items()
    ]


def _records(frame: pd.DataFrame) -> List[dict]:
    """DataFrame rows as plain-Python dicts (no numpy scalars)."""
    records = []
    for record in frame.to_dict(orient="records"):
        records.append({
            "region": record["region"],
            "request_count": _plain(record["request_count"]),
            "center_count": _plain(record["center_count"]),
            "score": int(record["score"]),
            "efficiency": record["efficiency"],
        })
    return records


def _plain(value: Any) -> Number:
    value = float(value)
    return int(value) if value.is_integer() else value
