"""
API Configuration Manager
Loads the dashboard's connection settings once, at process start.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import streamlit as st
from dotenv import load_dotenv

from btc_core.errors import ConfigurationError
from btc_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://192.168.1.213:57699"
DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_CENTERS_PAGE_SIZE = 50

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class APISettings:
    """Connection settings for the BTC network API"""
    base_url: str = DEFAULT_API_URL
    force_offline: bool = False
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verify_tls: bool = True
    centers_wilaya_id: int = 0  # 0 = all wilayas
    centers_page_size: int = DEFAULT_CENTERS_PAGE_SIZE


def _load_secrets() -> Dict[str, Any]:
    """
    Read the optional [api] table from Streamlit secrets.

    Expected secrets.toml format:
        [api]
        base_url = "https://btc.example.dz"
        force_offline = false
        timeout_ms = 10000
    """
    try:
        if hasattr(st, "secrets") and "api" in st.secrets:
            return {k.lower(): v for k, v in dict(st.secrets["api"]).items()}
    except Exception as e:
        # No secrets.toml is the normal case outside Streamlit Cloud
        logger.debug(f"Streamlit secrets unavailable: {e}")
    return {}


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Expected a boolean for {key}, got {value!r}", config_key=key)


def _parse_int(key: str, value: Any, minimum: int = 0) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigurationError(f"Expected an integer for {key}, got {value!r}", config_key=key)
    if parsed < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {parsed}", config_key=key)
    return parsed


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    secrets: Optional[Mapping[str, Any]] = None,
    use_dotenv: bool = True,
) -> APISettings:
    """
    Build APISettings from the environment.

    Priority: environment variables (including a local .env file), then the
    [api] table of Streamlit secrets, then defaults.

    Args:
        environ: Mapping to read instead of os.environ (tests)
        secrets: Mapping to use instead of st.secrets["api"] (tests)
        use_dotenv: Whether to load a .env file into os.environ first

    Raises:
        ConfigurationError: If a value cannot be parsed
    """
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = os.environ
    if secrets is None:
        secrets = _load_secrets() if environ is os.environ else {}

    def pick(env_key: str, secret_key: str, default: Any) -> Any:
        if environ.get(env_key) not in (None, ""):
            return environ[env_key]
        if secrets.get(secret_key) not in (None, ""):
            return secrets[secret_key]
        return default

    base_url = str(pick("BTC_API_URL", "base_url", DEFAULT_API_URL)).strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"BTC_API_URL must be an http(s) URL, got {base_url!r}", config_key="BTC_API_URL")

    settings = APISettings(
        base_url=base_url,
        force_offline=_parse_bool("BTC_FORCE_OFFLINE", pick("BTC_FORCE_OFFLINE", "force_offline", False)),
        timeout_ms=_parse_int("BTC_API_TIMEOUT_MS", pick("BTC_API_TIMEOUT_MS", "timeout_ms", DEFAULT_TIMEOUT_MS), minimum=1),
        verify_tls=_parse_bool("BTC_VERIFY_TLS", pick("BTC_VERIFY_TLS", "verify_tls", True)),
        centers_wilaya_id=_parse_int("BTC_CENTERS_WILAYA_ID", pick("BTC_CENTERS_WILAYA_ID", "centers_wilaya_id", 0)),
        centers_page_size=_parse_int(
            "BTC_CENTERS_PAGE_SIZE",
            pick("BTC_CENTERS_PAGE_SIZE", "centers_page_size", DEFAULT_CENTERS_PAGE_SIZE),
            minimum=1,
        ),
    )
    logger.info(
        f"API settings loaded: base_url={settings.base_url}, "
        f"force_offline={settings.force_offline}, timeout_ms={settings.timeout_ms}"
    )
    return settings
