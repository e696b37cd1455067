"""Module de configuration."""

from waybar_lan.config.settings import (
    DEFAULT_SERVICE_TYPES,
    AppSettings,
    DiscoverySettings,
    LoggingSettings,
    PathSettings,
    RetrySettings,
)
from waybar_lan.config.loader import (
    ConfigLoader,
    FileConfigLoader,
    load_settings,
)

__all__ = [
    "DEFAULT_SERVICE_TYPES",
    "AppSettings",
    "DiscoverySettings",
    "LoggingSettings",
    "PathSettings",
    "RetrySettings",
    "ConfigLoader",
    "FileConfigLoader",
    "load_settings",
]
