"""
Resource catalogue for the BTC network API.

Each Resource names one GET endpoint and the top-level key under which the
API wraps its collection (e.g. {"bloodDonationRequests": [...]}).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from btc_core.api.config_manager import APISettings

# Resource names (keys of a RawPayloads mapping)
STATS = "stats"
REQUESTS = "requests"
CENTERS = "centers"
WILAYAS = "wilayas"
DONORS = "donors"


@dataclass(frozen=True)
class Resource:
    """One remote collection fetched per cycle"""
    name: str
    path: str
    collection_key: str
    is_list: bool = True
    params: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)

    def empty(self) -> Any:
        """Value standing in for a missing collection"""
        return [] if self.is_list else {}

    def query_params(self) -> Optional[Dict[str, Any]]:
        return dict(self.params) or None


def build_catalogue(settings: Optional[APISettings] = None) -> Dict[str, Resource]:
    """Return every known resource keyed by name."""
    settings = settings or APISettings()
    return {
        STATS: Resource(STATS, "Dashboard/stats", "stats", is_list=False),
        REQUESTS: Resource(REQUESTS, "BloodDonationRequests", "bloodDonationRequests"),
        CENTERS: Resource(
            CENTERS,
            "BTC",
            "bloodTansfusionCenters",
            params=(
                ("wilayaId", settings.centers_wilaya_id),
                ("paginationTake", settings.centers_page_size),
                ("paginationSkip", 0),
                ("level", 0),
            ),
        ),
        WILAYAS: Resource(WILAYAS, "Wilayas", "wilayas"),
        DONORS: Resource(DONORS, "users", "users", params=(("level", 1),)),
    }


# Resources each dashboard page needs per cycle
PAGE_RESOURCES: Dict[str, Tuple[str, ...]] = {
    "overview": (STATS,),
    "analytics": (STATS, REQUESTS),
    "centers": (CENTERS, WILAYAS),
    "donors": (DONORS, WILAYAS),
}

ALL_RESOURCES: Tuple[str, ...] = (STATS, REQUESTS, CENTERS, WILAYAS, DONORS)


def resources_for(names, settings: Optional[APISettings] = None) -> List[Resource]:
    """
    Resolve resource names to Resource objects, preserving order.

    Raises:
        KeyError: If a name is not in the catalogue
    """
    catalogue = build_catalogue(settings)
    return [catalogue[name] for name in names]
