# =============================================================================
# btc_core/errors/__init__.py
# Centralized Error Handling for the BTC Network Dashboard
# =============================================================================

from .exceptions import (
    DashboardError,
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    TransportError,
    DecodeError,
    ExhaustedError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    ErrorContext,
)

__all__ = [
    # Exceptions
    "DashboardError",
    "FetchError",
    "FetchTimeoutError",
    "HttpStatusError",
    "TransportError",
    "DecodeError",
    "ExhaustedError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "ErrorContext",
]
