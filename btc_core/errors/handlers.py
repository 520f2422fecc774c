# =============================================================================
# btc_core/errors/handlers.py
# Error Handling Utilities for the BTC Network Dashboard
# =============================================================================

from __future__ import annotations
import traceback
from typing import Optional
import streamlit as st

from btc_core.logging import get_logger
from .exceptions import DashboardError

logger = get_logger(__name__)


def handle_error(
    error: Exception,
    show_user_message: bool = True,
    log_error: bool = True,
    user_message: Optional[str] = None,
) -> None:
    """
    Centralized error handling function.

    Args:
        error: The exception to handle
        show_user_message: Whether to display error to user via st.error
        log_error: Whether to log the error
        user_message: Custom message to show user (uses error message if None)
    """
    if isinstance(error, DashboardError):
        message = user_message or error.message
        code = error.code
        details = error.details
        recoverable = error.recoverable
    else:
        message = user_message or str(error)
        code = "UNKNOWN"
        details = {"traceback": traceback.format_exc()}
        recoverable = True

    if log_error:
        logger.error(
            f"[{code}] {message}",
            extra={"details": details},
            exc_info=error,
        )

    if show_user_message:
        if recoverable:
            st.error(f"Error: {message}")
        else:
            st.error(f"Critical Error: {message}. Please contact support.")

        if details and st.session_state.get("debug_mode", False):
            with st.expander("Error Details", expanded=False):
                st.json(details)


class ErrorContext:
    """
    Context manager for error handling with automatic logging and user feedback.

    Usage:
        with ErrorContext("Rendering analytics page"):
            render_alerts(view_model.alerts)

        # On error, logs and shows: "Error during: Rendering analytics page"
    """

    def __init__(
        self,
        operation: str,
        recoverable: bool = True,
        show_user_message: bool = True,
    ):
        self.operation = operation
        self.recoverable = recoverable
        self.show_user_message = show_user_message

    def __enter__(self) -> ErrorContext:
        logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            logger.debug(f"Completed: {self.operation}")
            return False

        if isinstance(exc_val, DashboardError):
            handle_error(exc_val, show_user_message=self.show_user_message)
        else:
            handle_error(
                exc_val,
                show_user_message=self.show_user_message,
                user_message=f"Error during: {self.operation}",
            )

        # Suppress exception if recoverable
        return self.recoverable
