# =============================================================================
# btc_core/offline/connection_state.py
# Connectivity State Tracking
# =============================================================================
"""
ConnectionTracker - process-wide record of where the last cycle's data came from.

Features:
- Immutable ConnectivityState values, swapped whole (no torn reads)
- Written only by the fetch orchestrator / fallback pairing
- Thread-safe singleton accessor
"""

from __future__ import annotations
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
import logging

logger = logging.getLogger(__name__)

DEMO_DATA_MESSAGE = "Using demo data. API connection unavailable."


class DataSource(Enum):
    """Where the current view model's data came from."""
    LIVE = "live"               # Fetched from the API this cycle
    FALLBACK = "fallback"       # Retries exhausted, offline dataset in use
    DEMO = "demo"               # Offline mode forced by configuration


@dataclass(frozen=True)
class ConnectivityState:
    """Connection state published at the end of each fetch cycle."""
    is_online: bool = True
    using_fallback: bool = False
    last_error: Optional[str] = None

    @classmethod
    def initial(cls) -> ConnectivityState:
        return cls()

    @classmethod
    def live(cls) -> ConnectivityState:
        return cls(is_online=True, using_fallback=False, last_error=None)

    @classmethod
    def fallback(cls, error: str) -> ConnectivityState:
        return cls(is_online=False, using_fallback=True, last_error=error)

    @classmethod
    def forced_offline(cls) -> ConnectivityState:
        # The network was never tried, so it is not known to be down
        return cls(is_online=True, using_fallback=True, last_error=None)

    @property
    def source(self) -> DataSource:
        if not self.using_fallback:
            return DataSource.LIVE
        return DataSource.FALLBACK if self.last_error else DataSource.DEMO

    @property
    def badge_label(self) -> str:
        return "Demo Mode" if self.using_fallback else "Live Data"

    @property
    def status_message(self) -> Optional[str]:
        """Banner text, or None when live data is shown."""
        if self.last_error:
            return f"API Error: {self.last_error}"
        if self.using_fallback:
            return DEMO_DATA_MESSAGE
        return None

    def to_dict(self) -> dict:
        return {
            "is_online": self.is_online,
            "using_fallback": self.using_fallback,
            "last_error": self.last_error,
            "source": self.source.value,
        }


class ConnectionTracker:
    """
    Single mutable cell holding the current ConnectivityState.

    Usage:
        tracker = get_connection_tracker()
        tracker.begin_cycle()
        ...
        tracker.mark_live()            # or mark_fallback(error) / mark_forced_offline()
        banner = tracker.state.status_message
    """

    _instance: Optional[ConnectionTracker] = None
    _lock = threading.Lock()

    def __init__(self, initial: Optional[ConnectivityState] = None):
        """Create a tracker (use get_instance() for the process-wide one)."""
        self._state = initial or ConnectivityState.initial()
        self._write_lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ConnectionTracker:
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = ConnectionTracker()
        return cls._instance

    @property
    def state(self) -> ConnectivityState:
        return self._state

    @property
    def is_online(self) -> bool:
        return self._state.is_online

    @property
    def using_fallback(self) -> bool:
        return self._state.using_fallback

    def publish(self, state: ConnectivityState) -> ConnectivityState:
        """Replace the current state as a whole."""
        with self._write_lock:
            old = self._state
            self._state = state
        if old.source != state.source:
            logger.info(f"Data source changed: {old.source.value} -> {state.source.value}")
        return state

    def begin_cycle(self) -> ConnectivityState:
        """Clear the previous cycle's error before a new fetch starts."""
        return self.publish(replace(self._state, last_error=None))

    def mark_live(self) -> ConnectivityState:
        return self.publish(ConnectivityState.live())

    def mark_fallback(self, error: str) -> ConnectivityState:
        logger.warning(f"Falling back to offline dataset: {error}")
        return self.publish(ConnectivityState.fallback(error))

    def mark_forced_offline(self) -> ConnectivityState:
        return self.publish(ConnectivityState.forced_offline())

    def reset(self) -> ConnectivityState:
        """Return to the process-start state."""
        return self.publish(ConnectivityState.initial())


def get_connection_tracker() -> ConnectionTracker:
    """
    Get the global ConnectionTracker instance.

    Returns:
        ConnectionTracker singleton
    """
    return ConnectionTracker.get_instance()
