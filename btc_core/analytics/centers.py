"""
Blood transfusion center summaries and search.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from btc_core.analytics.enums import BloodGroup, label_for
from btc_core.analytics.records import Number, as_int, as_list, as_non_negative, dig
from btc_core.analytics.stock import CENTER_REFERENCE_MIN_STOCK, CenterStockLevel, center_stock_level

UNNAMED_CENTER = "Unnamed Center"
ALL = "all"


@dataclass(frozen=True)
class CenterSummary:
    id: Any
    name: str
    wilaya_id: Optional[int]
    wilaya: str
    address: str
    tel: str
    email: str
    contact: str
    total_stock: Number
    stock_level: CenterStockLevel
    stock_by_type: Dict[str, Number] = field(default_factory=dict)


def _stock_by_type(inventories: Any) -> Dict[str, Number]:
    """Units per blood group label; inventories sharing a label are summed."""
    stock: Dict[str, Number] = {}
    for inventory in as_list(inventories):
        label = label_for(BloodGroup, dig(inventory, "bloodGroup"))
        stock[label] = stock.get(label, 0) + (as_non_negative(dig(inventory, "totalQty")) or 0)
    return stock


def summarize_center(center: Any, min_stock: Optional[Number] = CENTER_REFERENCE_MIN_STOCK) -> CenterSummary:
    wilaya_id = as_int(dig(center, "wilayaId"))
    if wilaya_id is None:
        wilaya_id = as_int(dig(center, "wilaya", "id"))
    stock_by_type = _stock_by_type(dig(center, "bloodInventories"))
    total = sum(stock_by_type.values())
    return CenterSummary(
        id=dig(center, "id"),
        name=dig(center, "name") or UNNAMED_CENTER,
        wilaya_id=wilaya_id,
        wilaya=dig(center, "wilaya", "name") or (f"Wilaya {wilaya_id}" if wilaya_id is not None else "Unknown"),
        address=dig(center, "address") or "N/A",
        tel=dig(center, "tel") or "N/A",
        email=dig(center, "email") or "N/A",
        contact=dig(center, "contact") or "N/A",
        total_stock=total,
        stock_level=center_stock_level(total, min_stock),
        stock_by_type=stock_by_type,
    )


def summarize_centers(centers: Any) -> List[CenterSummary]:
    return [summarize_center(center) for center in as_list(centers)]


def filter_centers(centers: List[CenterSummary], search: str = "", wilaya_id: Any = ALL) -> List[CenterSummary]:
    """Case-insensitive search over name, wilaya and address; "all" disables the wilaya filter."""
    needle = (search or "").strip().lower()
    matches = []
    for center in centers:
        if needle and not any(needle in str(value).lower() for value in (center.name, center.wilaya, center.address)):
            continue
        if wilaya_id not in (ALL, None) and center.wilaya_id != as_int(wilaya_id):
            continue
        matches.append(center)
    return matches
