"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Per data-source Redis settings
- Cached settings access via get_settings()
"""

from .settings import (
    DEFAULT_DATA_SOURCE,
    DEFAULT_TTL_SECONDS,
    Environment,
    LogFormat,
    LogLevel,
    RedisPoolSettings,
    RedisSettings,
    Settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Constants
    "DEFAULT_DATA_SOURCE",
    "DEFAULT_TTL_SECONDS",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Component settings
    "RedisSettings",
    "RedisPoolSettings",
]
