# =============================================================================
# btc_core/services/__init__.py
# Service Layer for the BTC Network Dashboard
# Separates the fetch/aggregate pipeline from UI presentation
# =============================================================================
"""
Service Layer for the BTC Network Dashboard

Usage Example:
-------------
    import asyncio
    from btc_core.services.dashboard_service import DashboardService

    service = DashboardService()
    view_model = asyncio.run(service.run_cycle("analytics"))

    print(view_model.connectivity.badge_label)   # "Live Data" / "Demo Mode"
    for alert in view_model.alerts:
        print(alert.severity, alert.message)

The orchestrator can also be driven directly:

    from btc_core.api import RemoteDataSource, load_settings, resources_for
    from btc_core.services.fetch_orchestrator import FetchOrchestrator

    async with RemoteDataSource(load_settings()) as source:
        result = await FetchOrchestrator(source).run(resources_for(["stats"]))

Submodules are imported explicitly (not re-exported here) because the API
adapter itself depends on ServiceResult.
"""

from .base_service import BaseService, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
]
