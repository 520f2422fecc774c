"""
Alert feed: stock alerts first, then a bounded number of critical requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

from btc_core.analytics.enums import BloodGroup, Priority, label_for, parse_code
from btc_core.analytics.records import as_list, dig, parse_timestamp
from btc_core.analytics.stock import StockHealth, StockRow

MAX_CRITICAL_REQUESTS = 3
REAL_TIME = "Real-time"
UNKNOWN_CENTER = "Unknown Center"
UNKNOWN_DATE = "Unknown date"


@dataclass(frozen=True)
class AlertEntry:
    id: str
    category: str
    message: str
    severity: str
    timestamp: str


def _stock_alerts(rows: Iterable[StockRow]) -> List[AlertEntry]:
    rows = list(rows)
    critical = [
        AlertEntry(
            id=f"stock-{row.blood_group}",
            category="Stock Critical",
            message=f"{row.blood_group} blood type below minimum threshold",
            severity="high",
            timestamp=REAL_TIME,
        )
        for row in rows
        if row.health is StockHealth.CRITICAL
    ]
    low = [
        AlertEntry(
            id=f"low-{row.blood_group}",
            category="Stock Low",
            message=f"{row.blood_group} blood type running low",
            severity="medium",
            timestamp=REAL_TIME,
        )
        for row in rows
        if row.health is StockHealth.LOW
    ]
    return critical + low


def _request_alert(request: Any, position: int) -> AlertEntry:
    request_id = dig(request, "id")
    center_name = dig(request, "bloodTansfusionCenter", "name") or UNKNOWN_CENTER
    requested_at = parse_timestamp(dig(request, "requestDate"))
    return AlertEntry(
        id=f"req-{request_id}" if request_id not in (None, "") else f"req-#{position}",
        category="Critical Request",
        message=f"Critical {label_for(BloodGroup, dig(request, 'bloodGroup'))} request from {center_name}",
        severity="high",
        timestamp=requested_at.date().isoformat() if requested_at is not None else UNKNOWN_DATE,
    )


def build_alert_feed(
    stock_rows: Iterable[StockRow],
    requests: Any,
    max_critical_requests: int = MAX_CRITICAL_REQUESTS,
) -> List[AlertEntry]:
    """
    Build the alert feed.

    Order: every critical stock alert, then every low stock alert (each in
    stock-row order), then the first `max_critical_requests` requests whose
    priority is Critical, in input order. Positions used for id fallbacks are 1-based indexes into
    `requests`, so the same input always yields the same ids.
    """
    alerts = _stock_alerts(stock_rows)

    critical = [
        (position, request)
        for position, request in enumerate(as_list(requests), start=1)
        if parse_code(Priority, dig(request, "priority")) is Priority.CRITICAL
    ]
    alerts.extend(
        _request_alert(request, position)
        for position, request in critical[:max(max_critical_requests, 0)]
    )
    return alerts
