# =============================================================================
# btc_core/errors/exceptions.py
# Custom Exception Hierarchy for the BTC Network Dashboard
# =============================================================================

from typing import Optional, Dict, Any


class DashboardError(Exception):
    """
    Base exception for all dashboard errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "FETCH_001")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "BTC_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# REMOTE FETCH EXCEPTIONS
# =============================================================================

class FetchError(DashboardError):
    """Raised when a single remote resource cannot be fetched"""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        url: Optional[str] = None,
        code: str = "FETCH_000",
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        if resource:
            details["resource"] = resource
        if url:
            details["url"] = url

        super().__init__(
            message=message,
            code=code,
            details=details,
            **kwargs,
        )
        self.resource = resource


class FetchTimeoutError(FetchError):
    """Raised when a call exceeds its deadline"""

    def __init__(self, message: str, timeout_ms: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if timeout_ms is not None:
            details["timeout_ms"] = timeout_ms
        super().__init__(message, code="FETCH_001", details=details, **kwargs)


class HttpStatusError(FetchError):
    """Raised when the API answers with a non-2xx status"""

    def __init__(self, message: str, status_code: int, **kwargs):
        details = kwargs.pop("details", None) or {}
        details["status_code"] = status_code
        super().__init__(message, code="FETCH_002", details=details, **kwargs)
        self.status_code = status_code


class TransportError(FetchError):
    """Raised when the connection itself fails (DNS, refused, reset, TLS)"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="FETCH_003", **kwargs)


class DecodeError(FetchError):
    """Raised when the payload is not valid structured data"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="FETCH_004", **kwargs)


class ExhaustedError(DashboardError):
    """Raised when every retry of a fetch batch has failed"""

    def __init__(
        self,
        message: str,
        attempts: Optional[int] = None,
        last_error: Optional[FetchError] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        if attempts is not None:
            details["attempts"] = attempts
        if last_error is not None:
            details["last_error"] = last_error.code

        super().__init__(
            message=message,
            code="FETCH_EXHAUSTED",
            details=details,
            **kwargs,
        )
        self.attempts = attempts
        self.last_error = last_error


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(DashboardError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
