# =============================================================================
# btc_core/offline/__init__.py
# Offline Support: Connectivity State + Fallback Dataset
# =============================================================================
"""
Offline Support Module

The dashboard keeps working when the API is unreachable: after the fetch
orchestrator exhausts its retries, the fallback dataset is substituted and the
connectivity state records that demo data is on screen.

Usage:
------
from btc_core.offline import get_connection_tracker, fallback_snapshot

tracker = get_connection_tracker()
payloads = fallback_snapshot()
tracker.mark_fallback("Failed to fetch stats: 503")
print(tracker.state.status_message)  # "API Error: Failed to fetch stats: 503"
"""

from btc_core.offline.connection_state import (
    ConnectionTracker,
    ConnectivityState,
    DataSource,
    get_connection_tracker,
)
from btc_core.offline.fallback_dataset import snapshot as fallback_snapshot

__all__ = [
    "ConnectionTracker",
    "ConnectivityState",
    "DataSource",
    "get_connection_tracker",
    "fallback_snapshot",
]
