"""Process configuration management.

This module provides:
- Environment-based process settings with validation
- Cached settings access via get_settings()
"""

from .settings import (
    Environment,
    LogFormat,
    LogLevel,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
]
