# =============================================================================
# btc_core/logging/config.py
# Logging Configuration for the BTC Network Dashboard
# =============================================================================
"""
All dashboard loggers live under the "btc_core" namespace. setup_logging()
attaches handlers to that namespace only, leaving Streamlit's own loggers
alone, and is safe to call from every page script: Streamlit re-executes the
script on each interaction, so repeat calls keep the first configuration.

Level comes from the argument, else BTC_LOG_LEVEL, else INFO.
"""

import logging
import os
import sys
import time
from datetime import date
from pathlib import Path
from typing import Optional, TextIO, Union

ROOT_LOGGER = "btc_core"
LOG_LEVEL_ENV = "BTC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_DIR = Path("logs")

# One line per HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[int, str, None] = None,
    log_dir: Optional[Path] = LOG_DIR,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the dashboard's logger tree.

    Args:
        level: Level name or number (default: BTC_LOG_LEVEL, then INFO)
        log_dir: Directory for the daily dashboard_YYYY-MM-DD.log file;
            None logs to the stream only
        stream: Console stream (default: stdout)
        force: Replace an existing configuration

    Returns:
        The "btc_core" logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers and not force:
        return root

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(Path(log_dir) / f"dashboard_{date.today():%Y-%m-%d}.log"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(_resolve_level(level))
    root.propagate = False
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug("Logging initialized")
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the "btc_core" namespace.

    Module names (btc_core.api.remote_source) are used as-is; bare names such
    as a service class name become btc_core.<name>.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LogContext:
    """
    Times one operation, typically a fetch cycle.

        with LogContext(logger, "Fetch cycle (stats, requests)"):
            ...
        # Fetch cycle (stats, requests)... started
        # Fetch cycle (stats, requests)... completed (0.42s)
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time = None

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time if self.start_time is not None else 0.0

    def __enter__(self):
        self.start_time = time.monotonic()
        self.logger.info(f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"{self.operation}... completed ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}", exc_info=True)
        return False
