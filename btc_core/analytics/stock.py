"""
Blood-stock classification and totals.

Thresholds (per blood group, against the configured minimum):
    critical   available <= min * 0.5
    low        min * 0.5 < available <= min
    healthy    available > min
A missing minimum (absent or 0) applies no threshold and reports "normal";
a missing available quantity reports "unknown".
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from btc_core.analytics.enums import BloodGroup, label_for, parse_code
from btc_core.analytics.records import Number, as_dict, as_non_negative

CRITICAL_RATIO = 0.5

# Reference minimum used for a center's whole-inventory level badge
CENTER_REFERENCE_MIN_STOCK = 100


class StockHealth(Enum):
    CRITICAL = "critical"
    LOW = "low"
    HEALTHY = "healthy"
    UNKNOWN = "unknown"
    NORMAL = "normal"


class CenterStockLevel(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NORMAL = "Normal"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class StockSummary:
    """Aggregated unit counts for one blood group within a scope."""
    available: Optional[Number] = None
    min_stock: Optional[Number] = None
    max_stock: Optional[Number] = None

    @classmethod
    def from_raw(cls, raw: Any) -> StockSummary:
        raw = as_dict(raw)
        return cls(
            available=as_non_negative(raw.get("totalAvailable")),
            min_stock=as_non_negative(raw.get("totalMinStock")),
            max_stock=as_non_negative(raw.get("totalMaxStock")),
        )

    @property
    def health(self) -> StockHealth:
        return classify_stock(self.available, self.min_stock)


@dataclass(frozen=True)
class StockRow:
    """One blood group's stock, classified, with the units split into buckets."""
    blood_group: str
    code: Any
    available: Number
    min_stock: Optional[Number]
    max_stock: Optional[Number]
    health: StockHealth
    critical_units: Number = 0
    low_units: Number = 0
    healthy_units: Number = 0


def classify_stock(available: Optional[Number], min_stock: Optional[Number]) -> StockHealth:
    """Classify a stock level against its minimum."""
    if available is None:
        return StockHealth.UNKNOWN
    if not min_stock:
        return StockHealth.NORMAL
    if available <= min_stock * CRITICAL_RATIO:
        return StockHealth.CRITICAL
    if available <= min_stock:
        return StockHealth.LOW
    return StockHealth.HEALTHY


def _add(left: Optional[Number], right: Optional[Number]) -> Optional[Number]:
    if left is None:
        return right
    if right is None:
        return left
    return left + right


def _merge(first: StockSummary, second: StockSummary) -> StockSummary:
    return StockSummary(
        available=_add(first.available, second.available),
        min_stock=_add(first.min_stock, second.min_stock),
        max_stock=_add(first.max_stock, second.max_stock),
    )


def stock_rows(stock_map: Any) -> List[StockRow]:
    """
    Build classified rows from a {blood group code: StockSummary dict} map,
    in the map's order.

    Keys naming the same blood group ("7" and "7.0") are summed into the
    row of the first one, so every label appears once.
    """
    summaries: Dict[str, StockSummary] = {}
    codes: Dict[str, Any] = {}
    for code, raw in as_dict(stock_map).items():
        label = label_for(BloodGroup, code)
        summary = StockSummary.from_raw(raw)
        if label in summaries:
            summaries[label] = _merge(summaries[label], summary)
        else:
            summaries[label] = summary
            codes[label] = getattr(parse_code(BloodGroup, code), "value", code)

    rows = []
    for label, summary in summaries.items():
        health = summary.health
        available = summary.available or 0
        rows.append(StockRow(
            blood_group=label,
            code=codes[label],
            available=available,
            min_stock=summary.min_stock,
            max_stock=summary.max_stock,
            health=health,
            critical_units=available if health is StockHealth.CRITICAL else 0,
            low_units=available if health is StockHealth.LOW else 0,
            healthy_units=available if health is StockHealth.HEALTHY else 0,
        ))
    return rows


def total_stock(stock_map: Any) -> Number:
    """Sum of available units across all blood groups of one scope."""
    return sum(
        StockSummary.from_raw(raw).available or 0
        for raw in as_dict(stock_map).values()
    )


def stock_totals_by_scope(scoped_stock: Any) -> Dict[str, Number]:
    """Total stock per region or per center: {scope: {code: summary}} -> {scope: total}."""
    return {scope: total_stock(stock_map) for scope, stock_map in as_dict(scoped_stock).items()}


def count_by_health(rows: List[StockRow]) -> Mapping[StockHealth, int]:
    counts = {health: 0 for health in StockHealth}
    for row in rows:
        counts[row.health] += 1
    return counts


def center_stock_level(total: Optional[Number], min_stock: Optional[Number] = CENTER_REFERENCE_MIN_STOCK) -> CenterStockLevel:
    """Coarse badge for a center's whole inventory."""
    if not total:
        return CenterStockLevel.UNKNOWN
    if not min_stock:
        return CenterStockLevel.NORMAL
    if total > min_stock * 2:
        return CenterStockLevel.HIGH
    if total > min_stock:
        return CenterStockLevel.MEDIUM
    return CenterStockLevel.LOW
