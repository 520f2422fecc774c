"""
BTC Network API Access
Settings, resource catalogue and the async remote data source adapter
"""

from .config_manager import APISettings, load_settings
from .resources import (
    Resource,
    build_catalogue,
    resources_for,
    PAGE_RESOURCES,
    ALL_RESOURCES,
    STATS,
    REQUESTS,
    CENTERS,
    WILAYAS,
    DONORS,
)
from .remote_source import RemoteDataSource

__all__ = [
    "APISettings",
    "load_settings",
    "Resource",
    "build_catalogue",
    "resources_for",
    "PAGE_RESOURCES",
    "ALL_RESOURCES",
    "STATS",
    "REQUESTS",
    "CENTERS",
    "WILAYAS",
    "DONORS",
    "RemoteDataSource",
]
