"""
Donor directory aggregates: average age, donors per wilaya, search.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Union

import pandas as pd

from btc_core.analytics.enums import Availability, BloodGroup, ContactMethod, label_for, parse_code
from btc_core.analytics.records import as_int, as_list, dig, parse_timestamp, parse_timestamps, round_half_up

ANONYMOUS_DONOR = "Anonymous Donor"
NEVER_DONATED = "Never"
ALL = "all"

DateLike = Union[date, pd.Timestamp, str]


@dataclass(frozen=True)
class DonorSummary:
    id: Any
    name: str
    blood_group: str
    blood_group_code: Any
    wilaya_id: Optional[int]
    wilaya: str
    commune: str
    tel: str
    contact_method: str
    availability: str
    last_donation: str
    age: Optional[int]


@dataclass(frozen=True)
class DonorWilayaStats:
    wilaya: str
    donors: int
    new_this_month: int


def _as_utc(today: DateLike) -> pd.Timestamp:
    ts = pd.Timestamp(today)
    return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")


def _donor_wilaya_id(donor: Any) -> Optional[int]:
    wilaya_id = as_int(dig(donor, "commune", "wilayaId"))
    return wilaya_id if wilaya_id is not None else as_int(dig(donor, "commune", "wilaya", "id"))


def average_donor_age(donors: Any, today: DateLike) -> int:
    """
    Mean of (today.year - birth year) over donors with a parseable birth
    date, rounded half-up. 0 when no birth date parses.
    """
    births = parse_timestamps([dig(donor, "donorBirthDate") for donor in as_list(donors)]).dropna()
    if births.empty:
        return 0
    ages = _as_utc(today).year - births.dt.year
    return round_half_up(float(ages.mean()))


def donors_by_wilaya(donors: Any, wilayas: Any, today: DateLike) -> List[DonorWilayaStats]:
    """
    Count donors per known wilaya, plus those who donated within the last month.

    Wilayas without donors are dropped; the rest are sorted by donor count,
    descending, keeping the wilaya list order for ties.
    """
    donors = as_list(donors)
    known = [
        (as_int(dig(wilaya, "id")), dig(wilaya, "name") or f"Wilaya {dig(wilaya, 'id')}")
        for wilaya in as_list(wilayas)
    ]
    if not donors or not known:
        return []

    frame = pd.DataFrame({
        "wilaya_id": [_donor_wilaya_id(donor) for donor in donors],
        "last_donation": parse_timestamps([dig(donor, "donorLastDonationDate") for donor in donors]),
    })
    since = _as_utc(today) - pd.DateOffset(months=1)
    frame["recent"] = frame["last_donation"].notna() & (frame["last_donation"] >= since)

    rows = []
    for wilaya_id, name in known:
        matches = frame[frame["wilaya_id"] == wilaya_id]
        if matches.empty:
            continue
        rows.append({"wilaya": str(name), "donors": len(matches), "new_this_month": int(matches["recent"].sum())})
    if not rows:
        return []

    ranked = pd.DataFrame(rows).sort_values("donors", ascending=False, kind="stable")
    return [
        DonorWilayaStats(wilaya=row["wilaya"], donors=int(row["donors"]), new_this_month=int(row["new_this_month"]))
        for row in ranked.to_dict(orient="records")
    ]


def summarize_donor(donor: Any, today: DateLike) -> DonorSummary:
    anonymous = bool(dig(donor, "donorWantToStayAnonymous"))
    blood_group = parse_code(BloodGroup, dig(donor, "donorBloodGroup"))
    birth = parse_timestamp(dig(donor, "donorBirthDate"))
    last_donation = parse_timestamp(dig(donor, "donorLastDonationDate"))
    wilaya_id = _donor_wilaya_id(donor)
    return DonorSummary(
        id=dig(donor, "id"),
        name=ANONYMOUS_DONOR if anonymous else (dig(donor, "donorName") or ANONYMOUS_DONOR),
        blood_group=blood_group.label,
        blood_group_code=blood_group.value if isinstance(blood_group, BloodGroup) else blood_group.code,
        wilaya_id=wilaya_id,
        wilaya=dig(donor, "commune", "wilaya", "name") or (f"Wilaya {wilaya_id}" if wilaya_id is not None else "Unknown"),
        commune=dig(donor, "commune", "name") or "Unknown",
        tel="Hidden" if anonymous else (dig(donor, "donorTel") or "N/A"),
        contact_method=label_for(ContactMethod, dig(donor, "donorContactMethod")),
        availability=label_for(Availability, dig(donor, "donorAvailability")),
        last_donation=last_donation.date().isoformat() if last_donation is not None else NEVER_DONATED,
        age=_as_utc(today).year - birth.year if birth is not None else None,
    )


def summarize_donors(donors: Any, today: DateLike) -> List[DonorSummary]:
    return [summarize_donor(donor, today) for donor in as_list(donors)]


def filter_donors(
    donors: List[DonorSummary],
    search: str = "",
    wilaya_id: Any = ALL,
    blood_group: Any = ALL,
) -> List[DonorSummary]:
    """
    Case-insensitive search over name, commune and wilaya, then optional
    wilaya and blood group filters. "all" (or None) disables a filter; an
    empty search matches every donor.
    """
    needle = (search or "").strip().lower()
    wanted_wilaya = None if wilaya_id in (ALL, None) else as_int(wilaya_id)
    wanted_group = None if blood_group in (ALL, None) else as_int(blood_group)

    matches = []
    for donor in donors:
        if needle and not any(needle in str(field).lower() for field in (donor.name, donor.commune, donor.wilaya)):
            continue
        if wilaya_id not in (ALL, None) and donor.wilaya_id != wanted_wilaya:
            continue
        if blood_group not in (ALL, None) and donor.blood_group_code != wanted_group:
            continue
        matches.append(donor)
    return matches
