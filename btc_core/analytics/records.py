"""
Null-safe accessors for loosely-typed API records.

Every field of a raw record may be missing or null at any nesting level.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Union

import pandas as pd

Number = Union[int, float]


def dig(record: Any, *path: str, default: Any = None) -> Any:
    """
    Follow a key path through nested dicts.

    Example:
        dig(request, "bloodTansfusionCenter", "wilaya", "name")
    """
    current = record
    for key in path:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def as_number(value: Any) -> Optional[Number]:
    """Coerce to int/float; None for missing or non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def as_int(value: Any) -> Optional[int]:
    number = as_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


def as_non_negative(value: Any) -> Optional[Number]:
    """Numeric value clamped at zero (quantities are never negative)."""
    number = as_number(value)
    if number is None:
        return None
    return max(number, 0)


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def round_half_up(value: float, digits: int = 0) -> Number:
    """Round like a calculator (2.5 -> 3), not like round() (2.5 -> 2)."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Parse an ISO-8601 string to a UTC Timestamp; None when unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    ts = pd.to_datetime(value.strip(), errors="coerce", utc=True, format="ISO8601")
    return None if pd.isna(ts) else ts


def parse_timestamps(values: List[Any]) -> pd.Series:
    """Vectorised parse_timestamp; unparseable entries become NaT."""
    cleaned = [v.strip() if isinstance(v, str) and v.strip() else None for v in values]
    return pd.to_datetime(pd.Series(cleaned, dtype="object"), errors="coerce", utc=True, format="ISO8601")
