# =============================================================================
# btc_core/offline/fallback_dataset.py
# Offline Dataset used when the API is unavailable or disabled
# =============================================================================
"""
Fixed demo dataset shaped exactly like the API payloads.

Guarantees:
- every enum code is a known code
- every quantity is >= 0
- every request's center exists in CENTERS
- every center's and donor's wilaya exists in WILAYAS
"""

import copy
from typing import Any, Dict

from btc_core.api.resources import STATS, REQUESTS, CENTERS, WILAYAS, DONORS

_WILAYAS = [
    {"id": 16, "name": "Alger"},
    {"id": 31, "name": "Oran"},
    {"id": 25, "name": "Constantine"},
    {"id": 23, "name": "Annaba"},
    {"id": 9, "name": "Blida"},
]


def _wilaya(wilaya_id: int) -> Dict[str, Any]:
    return next(dict(w) for w in _WILAYAS if w["id"] == wilaya_id)


def _inventory(inv_id: str, center_id: str, blood_group: int, total: int, min_qty: int, max_qty: int) -> Dict[str, Any]:
    return {
        "id": inv_id,
        "bloodTansfusionCenterId": center_id,
        "bloodGroup": blood_group,
        "bloodDonationType": 1,
        "totalQty": total,
        "minQty": min_qty,
        "maxQty": max_qty,
    }


def _center(center_id: str, name: str, address: str, contact: str, email: str, tel: str,
            wilaya_id: int, inventories: list) -> Dict[str, Any]:
    return {
        "id": center_id,
        "name": name,
        "address": address,
        "contact": contact,
        "email": email,
        "tel": tel,
        "wilayaId": wilaya_id,
        "wilaya": _wilaya(wilaya_id),
        "bloodInventories": inventories,
    }


_CENTERS = [
    _center("1", "BTC Alger Centre", "Rue Didouche Mourad, Alger", "Dr. Ahmed Benali",
            "alger@btc.dz", "+213 21 123 456", 16, [
                _inventory("1", "1", 7, 156, 50, 300),
                _inventory("2", "1", 3, 89, 40, 200),
            ]),
    _center("2", "BTC Oran", "Boulevard de la Révolution, Oran", "Dr. Fatima Khelifi",
            "oran@btc.dz", "+213 41 234 567", 31, [
                _inventory("3", "2", 7, 98, 40, 250),
                _inventory("4", "2", 3, 67, 35, 180),
            ]),
    _center("3", "BTC Constantine", "Rue Larbi Ben M'hidi, Constantine", "Dr. Mohamed Saidi",
            "constantine@btc.dz", "+213 31 345 678", 25, [
                _inventory("5", "3", 7, 78, 30, 200),
                _inventory("6", "3", 6, 12, 20, 100),
            ]),
    _center("4", "BTC Annaba", "Cours de la Révolution, Annaba", "Dr. Samia Boudiaf",
            "annaba@btc.dz", "+213 38 456 789", 23, [
                _inventory("7", "4", 8, 9, 25, 120),
                _inventory("8", "4", 5, 54, 30, 150),
            ]),
    _center("5", "BTC Blida", "Avenue Kritli Mokhtar, Blida", "Dr. Karim Mansouri",
            "blida@btc.dz", "+213 25 567 890", 9, [
                _inventory("9", "5", 1, 31, 20, 100),
                _inventory("10", "5", 2, 14, 15, 60),
            ]),
]


def _center_ref(center_id: str) -> Dict[str, Any]:
    center = next(c for c in _CENTERS if c["id"] == center_id)
    return {
        "id": center["id"],
        "name": center["name"],
        "wilayaId": center["wilayaId"],
        "wilaya": _wilaya(center["wilayaId"]),
    }


def _request(request_id: str, status: int, donation_type: int, blood_group: int, qty: int,
             date: str, priority: int, service: str, center_id: str) -> Dict[str, Any]:
    return {
        "id": request_id,
        "evolutionStatus": status,
        "donationType": donation_type,
        "bloodGroup": blood_group,
        "requestedQty": qty,
        "requestDate": date,
        "requestDueDate": None,
        "priority": priority,
        "moreDetails": None,
        "serviceName": service,
        "bloodTansfusionCenterId": center_id,
        "bloodTansfusionCenter": _center_ref(center_id),
    }


_REQUESTS = [
    _request("1", 1, 1, 7, 5, "2024-01-15T10:00:00Z", 3, "Emergency", "1"),
    _request("2", 0, 1, 3, 3, "2024-01-16T14:30:00Z", 2, "Surgery", "2"),
    _request("3", 1, 2, 8, 4, "2024-01-17T08:15:00Z", 3, "Hematology", "3"),
    _request("4", 2, 1, 6, 2, "2024-01-18T16:45:00Z", 3, "Maternity", "4"),
    _request("5", 3, 3, 5, 6, "2024-01-19T09:00:00Z", 1, "Oncology", "5"),
    _request("6", 0, 1, 1, 2, "2024-01-20T11:20:00Z", 3, "Emergency", "1"),
]


def _donor(donor_id: str, name, birth_date: str, blood_group: int, tel: str, contact: int,
           availability: int, last_donation, commune_id: int, commune: str, wilaya_id: int,
           anonymous: bool = False) -> Dict[str, Any]:
    return {
        "id": donor_id,
        "donorWantToStayAnonymous": anonymous,
        "donorExcludeFromPublicPortal": False,
        "donorAvailability": availability,
        "donorContactMethod": contact,
        "donorName": name,
        "donorBirthDate": birth_date,
        "donorBloodGroup": blood_group,
        "donorTel": tel,
        "donorLastDonationDate": last_donation,
        "communeId": commune_id,
        "commune": {
            "id": commune_id,
            "name": commune,
            "wilayaId": wilaya_id,
            "wilaya": _wilaya(wilaya_id),
        },
    }


_DONORS = [
    _donor("1", "Ahmed Benali", "1985-03-15T00:00:00Z", 7, "+213 555 123 456", 3, 5,
           "2024-01-15T00:00:00Z", 1, "Alger Centre", 16),
    _donor("2", "Fatima Khelifi", "1990-07-22T00:00:00Z", 3, "+213 555 234 567", 1, 1,
           "2024-02-10T00:00:00Z", 2, "Oran Centre", 31),
    _donor("3", None, "1988-11-08T00:00:00Z", 5, "+213 555 345 678", 2, 3,
           None, 3, "Constantine Centre", 25, anonymous=True),
    _donor("4", "Yacine Haddad", "1995-05-30T00:00:00Z", 7, "+213 555 456 789", 1, 4,
           "2023-11-02T00:00:00Z", 4, "Bab El Oued", 16),
    _donor("5", "Nadia Cherif", "1979-12-01T00:00:00Z", 8, "+213 555 567 890", 3, 2,
           "2023-12-20T00:00:00Z", 5, "Annaba Centre", 23),
]


def _summary(available: int, min_stock: int, max_stock: int) -> Dict[str, int]:
    return {"totalAvailable": available, "totalMinStock": min_stock, "totalMaxStock": max_stock}


_STATS = {
    "totalDonors": 4068,
    "totalBloodRequests": 156,
    "totalBloodCenters": 48,
    "requestsByBloodGroup": {
        "7": 45, "3": 32, "5": 28, "1": 18, "8": 15, "4": 12, "6": 4, "2": 2,
    },
    "requestsByWilaya": {
        "Alger": 45, "Oran": 32, "Constantine": 28, "Annaba": 18, "Blida": 15,
    },
    "centersByWilaya": {
        "Alger": 8, "Oran": 6, "Constantine": 5, "Annaba": 3, "Blida": 4,
    },
    "requestsByBloodTransferCenter": {
        "BTC Alger Centre": 45, "BTC Oran": 32, "BTC Constantine": 28, "BTC Annaba": 18, "BTC Blida": 15,
    },
    "globalBloodStock": {
        "7": _summary(298, 100, 500),
        "3": _summary(245, 80, 400),
        "5": _summary(156, 60, 300),
        "8": _summary(45, 50, 200),
        "1": _summary(67, 40, 150),
        "4": _summary(89, 70, 250),
        "6": _summary(34, 40, 120),
        "2": _summary(23, 30, 100),
    },
    "bloodStockByWilaya": {
        "Alger": {"7": _summary(156, 50, 300), "3": _summary(89, 40, 200)},
        "Oran": {"7": _summary(98, 40, 250), "3": _summary(67, 35, 180)},
        "Constantine": {"7": _summary(78, 30, 200), "6": _summary(12, 20, 100)},
        "Annaba": {"8": _summary(9, 25, 120), "5": _summary(54, 30, 150)},
        "Blida": {"1": _summary(31, 20, 100), "2": _summary(14, 15, 60)},
    },
    "bloodStockByCenter": {
        c["name"]: {
            str(inv["bloodGroup"]): _summary(inv["totalQty"], inv["minQty"], inv["maxQty"])
            for inv in c["bloodInventories"]
        }
        for c in _CENTERS
    },
}

_DATASET = {
    STATS: _STATS,
    REQUESTS: _REQUESTS,
    CENTERS: _CENTERS,
    WILAYAS: _WILAYAS,
    DONORS: _DONORS,
}


def snapshot() -> Dict[str, Any]:
    """
    Return a fresh copy of the offline dataset.

    The result has the same shape as a live RawPayloads mapping, so callers
    cannot tell it apart from live data except through ConnectivityState.
    """
    return copy.deepcopy(_DATASET)
