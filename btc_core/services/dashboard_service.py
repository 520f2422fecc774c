# =============================================================================
# btc_core/services/dashboard_service.py
# Dashboard Service - one fetch-and-aggregate cycle per page render
# =============================================================================
"""
DashboardService - the single controller every page goes through.

A cycle:
1. clears the previous cycle's error on the connection tracker
2. fetches the page's resources (or skips the network in forced offline mode)
3. substitutes the offline dataset when the orchestrator reports exhaustion
4. aggregates the snapshot into a ViewModel and swaps it in whole

Usage:
------
import asyncio
from btc_core.services.dashboard_service import get_dashboard_service

service = get_dashboard_service()
view_model = asyncio.run(service.run_cycle("centers"))
"""

from __future__ import annotations
import asyncio
import threading
from datetime import date
from typing import Awaitable, Callable, Iterable, Optional, Union

from btc_core.analytics.view_model import ViewModel, build_view_model
from btc_core.api.config_manager import APISettings, load_settings
from btc_core.api.remote_source import RemoteDataSource
from btc_core.api.resources import ALL_RESOURCES, PAGE_RESOURCES, Resource, resources_for
from btc_core.offline.connection_state import ConnectionTracker, ConnectivityState, get_connection_tracker
from btc_core.offline.fallback_dataset import snapshot as fallback_snapshot
from btc_core.services.base_service import BaseService
from btc_core.services.fetch_orchestrator import FetchOrchestrator

SourceFactory = Callable[[APISettings], RemoteDataSource]


class DashboardService(BaseService):
    """
    Runs fetch cycles and holds the latest ViewModel.

    The view model and the connectivity state are the only shared mutable
    cells; both are replaced as whole values. Overlapping cycles (e.g. a
    manual retry while a slow cycle is still retrying) are not sequenced:
    the last one to finish wins.
    """

    _instance: Optional[DashboardService] = None
    _lock = threading.Lock()

    def __init__(
        self,
        settings: Optional[APISettings] = None,
        tracker: Optional[ConnectionTracker] = None,
        source_factory: Optional[SourceFactory] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__()
        self.settings = settings or load_settings()
        self.tracker = tracker or get_connection_tracker()
        self._source_factory = source_factory or RemoteDataSource
        self._sleep = sleep
        self._today = today or date.today
        self._view_model: Optional[ViewModel] = None

    @classmethod
    def get_instance(cls) -> DashboardService:
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = DashboardService()
        return cls._instance

    @property
    def current_view_model(self) -> Optional[ViewModel]:
        """ViewModel of the last completed cycle (None before the first one)."""
        return self._view_model

    def _resolve(self, page_or_resources: Union[str, Iterable[str], Iterable[Resource]]) -> list:
        if isinstance(page_or_resources, str):
            names = PAGE_RESOURCES.get(page_or_resources)
            if names is None:
                raise KeyError(f"Unknown dashboard page: {page_or_resources}")
            return resources_for(names, self.settings)
        items = list(page_or_resources)
        if all(isinstance(item, Resource) for item in items):
            return items
        return resources_for(items, self.settings)

    async def run_cycle(
        self,
        page_or_resources: Union[str, Iterable[str], Iterable[Resource]] = ALL_RESOURCES,
    ) -> ViewModel:
        """
        Run one full cycle and publish its ViewModel.

        Args:
            page_or_resources: A PAGE_RESOURCES key ("overview", "analytics",
                "centers", "donors"), resource names, or Resource objects

        Returns:
            The new ViewModel. Never raises for fetch failures: the offline
            dataset is used instead and the banner explains why.
        """
        resources = self._resolve(page_or_resources)
        self.tracker.begin_cycle()

        with self.log_operation(f"Fetch cycle ({', '.join(r.name for r in resources)})"):
            if self.settings.force_offline:
                self.logger.info("Offline mode forced by configuration; using demo data")
                snapshot = fallback_snapshot()
                connectivity = self.tracker.mark_forced_offline()
            else:
                async with self._source_factory(self.settings) as source:
                    orchestrator = FetchOrchestrator(
                        source,
                        tracker=self.tracker,
                        timeout_ms=self.settings.timeout_ms,
                        sleep=self._sleep,
                    )
                    result = await orchestrator.run(resources)

                if result:
                    snapshot = result.data
                    connectivity = ConnectivityState.live()
                else:
                    snapshot = fallback_snapshot()
                    connectivity = self.tracker.mark_fallback(result.error)

        view_model = build_view_model(snapshot, connectivity, self._today())
        self._view_model = view_model
        return view_model


def get_dashboard_service() -> DashboardService:
    """
    Get the global DashboardService instance.

    Returns:
        DashboardService singleton
    """
    return DashboardService.get_instance()
