# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import copy
from datetime import date
from typing import Dict, List, Optional

import pytest

from btc_core.api.config_manager import APISettings
from btc_core.api.resources import Resource, resources_for
from btc_core.offline.connection_state import ConnectionTracker
from btc_core.services.base_service import ServiceResult


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

TODAY = date(2024, 2, 20)


@pytest.fixture
def today():
    """Fixed reference date for ages and 'this month' counts"""
    return TODAY


@pytest.fixture
def raw_snapshot():
    """A small live-shaped RawPayloads mapping"""
    wilayas = [{"id": 16, "name": "Alger"}, {"id": 31, "name": "Oran"}]
    return {
        "stats": {
            "totalDonors": 120,
            "totalBloodRequests": 4,
            "totalBloodCenters": 2,
            "requestsByBloodGroup": {"7": 3, "3": 1},
            "requestsByWilaya": {"Alger": 45, "Oran": 32},
            "centersByWilaya": {"Alger": 8, "Oran": 6},
            "globalBloodStock": {
                "7": {"totalAvailable": 40, "totalMinStock": 100, "totalMaxStock": 300},
                "3": {"totalAvailable": 80, "totalMinStock": 100, "totalMaxStock": 300},
                "5": {"totalAvailable": 150, "totalMinStock": 100, "totalMaxStock": 300},
            },
            "bloodStockByWilaya": {
                "Alger": {"7": {"totalAvailable": 30}, "3": {"totalAvailable": 50}},
            },
        },
        "requests": [
            {"id": "r1", "priority": 3, "bloodGroup": 7, "evolutionStatus": 1, "donationType": 1,
             "requestDate": "2024-01-15T10:00:00Z", "bloodTansfusionCenter": {"name": "X"}},
            {"id": "r2", "priority": 2, "bloodGroup": 3, "evolutionStatus": 0, "donationType": 2,
             "requestDate": "2024-01-16T10:00:00Z", "bloodTansfusionCenter": {"name": "Y"}},
            {"id": "r3", "priority": 3, "bloodGroup": 7, "evolutionStatus": 3, "donationType": 1,
             "requestDate": "2024-01-17T10:00:00Z", "bloodTansfusionCenter": None},
            {"id": "r4", "priority": 1, "bloodGroup": 7, "evolutionStatus": 1, "donationType": 1,
             "requestDate": None},
        ],
        "centers": [
            {"id": "c1", "name": "BTC Alger", "wilayaId": 16, "wilaya": wilayas[0],
             "bloodInventories": [{"bloodGroup": 7, "totalQty": 150}, {"bloodGroup": 3, "totalQty": 90}]},
            {"id": "c2", "name": None, "wilayaId": 31,
             "bloodInventories": [{"bloodGroup": 99, "totalQty": 20}]},
        ],
        "wilayas": wilayas,
        "donors": [
            {"id": "d1", "donorName": "Amina", "donorBirthDate": "1990-05-01T00:00:00Z", "donorBloodGroup": 7,
             "donorLastDonationDate": "2024-02-10T00:00:00Z",
             "commune": {"name": "Bab El Oued", "wilayaId": 16, "wilaya": wilayas[0]}},
            {"id": "d2", "donorName": "Karim", "donorBirthDate": "1980-01-01T00:00:00Z", "donorBloodGroup": 3,
             "donorLastDonationDate": "2023-06-01T00:00:00Z",
             "commune": {"name": "Oran Centre", "wilayaId": 31, "wilaya": wilayas[1]}},
            {"id": "d3", "donorName": None, "donorWantToStayAnonymous": True, "donorBirthDate": "not a date",
             "donorBloodGroup": 7, "commune": {"name": "Kouba", "wilayaId": 16}},
        ],
    }


@pytest.fixture
def empty_snapshot():
    """Every resource empty"""
    return {}


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Settings pointing at a fake host"""
    return APISettings(base_url="https://btc.test", timeout_ms=500)


@pytest.fixture
def tracker():
    """A fresh tracker (never the process-wide singleton)"""
    return ConnectionTracker()


class RecordingSleep:
    """Async sleep replacement that records requested delays"""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


class StubSource:
    """
    ResourceFetcher stub.

    `failures` is the number of whole batches that fail before every fetch
    succeeds (None = always fail). Payloads are wrapped under each resource's
    collection key, like the real API.
    """

    def __init__(self, payloads: Dict[str, object], failures: Optional[int] = 0, failing: str = "stats"):
        self.payloads = payloads
        self.failures = failures
        self.failing = failing
        self.calls: List[str] = []
        self.closed = False

    @property
    def batches(self) -> int:
        return self.calls.count(self.failing)

    async def fetch(self, resource: Resource, timeout_ms=None) -> ServiceResult:
        self.calls.append(resource.name)
        if resource.name == self.failing and (self.failures is None or self.batches <= self.failures):
            return ServiceResult.fail(f"Failed to fetch {resource.name}: 503", error_code="FETCH_002")
        return ServiceResult.ok({resource.collection_key: copy.deepcopy(self.payloads.get(resource.name))})

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


@pytest.fixture
def stub_source_factory(raw_snapshot):
    """Build a StubSource over the sample snapshot"""
    def factory(failures: Optional[int] = 0, failing: str = "stats", payloads: Optional[Dict] = None) -> StubSource:
        return StubSource(raw_snapshot if payloads is None else payloads, failures=failures, failing=failing)
    return factory


@pytest.fixture
def stats_and_requests(settings):
    return resources_for(["stats", "requests"], settings)
