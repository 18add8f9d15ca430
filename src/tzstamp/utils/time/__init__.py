"""
Time utilities for tzstamp.

This package provides consistent access to the system timezone and to
zoneinfo lookups across the application.
"""

from .timezone import (
    get_system_timezone,
    get_system_timezone_name,
    get_utc_now,
    ensure_timezone_aware,
    resolve_timezone,
    is_known_timezone,
)

__all__ = [
    "get_system_timezone",
    "get_system_timezone_name",
    "get_utc_now",
    "ensure_timezone_aware",
    "resolve_timezone",
    "is_known_timezone",
]
