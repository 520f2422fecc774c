"""
Integer-coded enumerations used by the BTC network API.

Raw records carry small integer codes. Each enumeration below is closed; a
code outside it parses to UnknownCode, which keeps the raw value and renders
as "<Category> <code>" instead of failing.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Type, Union

from btc_core.analytics.records import as_int


class LabelledEnum(IntEnum):
    """IntEnum whose members carry a display label."""

    def __new__(cls, code: int, label: str):
        member = int.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member


class BloodGroup(LabelledEnum):
    AB_POS = 1, "AB+"
    AB_NEG = 2, "AB-"
    A_POS = 3, "A+"
    A_NEG = 4, "A-"
    B_POS = 5, "B+"
    B_NEG = 6, "B-"
    O_POS = 7, "O+"
    O_NEG = 8, "O-"


class DonationType(LabelledEnum):
    WHOLE_BLOOD = 1, "Whole Blood"
    PLATELET = 2, "Platelet"
    PLASMA = 3, "Plasma"


class Priority(LabelledEnum):
    LOW = 1, "Low"
    NORMAL = 2, "Normal"
    CRITICAL = 3, "Critical"


class RequestStatus(LabelledEnum):
    INITIATED = 0, "Initiated"
    WAITING = 1, "Waiting"
    PARTIALLY_RESOLVED = 2, "Partially Resolved"
    RESOLVED = 3, "Resolved"
    CANCELED = 4, "Canceled"


class ContactMethod(LabelledEnum):
    CALL = 1, "Call"
    TEXT = 2, "Text"
    ALL = 3, "All"


class Availability(LabelledEnum):
    MORNING = 1, "Morning"
    AFTERNOON = 2, "Afternoon"
    DAY = 3, "Day"
    NIGHT = 4, "Night"
    ALL_TIME = 5, "All Time"


CATEGORY_NAMES: Dict[Type[LabelledEnum], str] = {
    BloodGroup: "Blood Group",
    DonationType: "Donation Type",
    Priority: "Priority",
    RequestStatus: "Status",
    ContactMethod: "Contact Method",
    Availability: "Availability",
}


@dataclass(frozen=True)
class UnknownCode:
    """A code missing from its enumeration (schema drift or bad data)."""
    category: str
    code: Any

    @property
    def label(self) -> str:
        code = "unknown" if self.code is None else self.code
        return f"{self.category} {code}"


CodeValue = Union[LabelledEnum, UnknownCode]


def parse_code(enum_cls: Type[LabelledEnum], raw: Any) -> CodeValue:
    """Parse a raw code (int, "7", 7.0) into a member or an UnknownCode."""
    code = as_int(raw)
    if code is not None and code in {member.value for member in enum_cls}:
        return enum_cls(code)
    return UnknownCode(CATEGORY_NAMES[enum_cls], code if code is not None else raw)


def label_for(enum_cls: Type[LabelledEnum], raw: Any) -> str:
    """Display label for a raw code; never raises."""
    return parse_code(enum_cls, raw).label
