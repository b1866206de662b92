"""Configuration module for beacon.

Usage:
    from beacon.core.config import settings, LogSystemType

    if settings.CONSOLE_LOG_SYSTEM == LogSystemType.STDOUT:
        ...
"""

from beacon.core.config.enums import Environment, LogSystemType
from beacon.core.config.settings import Settings

__all__ = [
    "Environment",
    "LogSystemType",
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
