"""
System timezone helpers for tzstamp.

This module provides consistent access to the host's local timezone and to
zoneinfo lookups, so the rest of the package never touches zoneinfo errors
directly.
"""

from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import UnknownTimezoneError


LOCALTIME_LINK = Path("/etc/localtime")


def get_system_timezone() -> ZoneInfo:
    """
    Get the system's local timezone.

    This function provides a consistent way to get the system timezone
    across different platforms (Linux/WSL, macOS, Windows).

    Returns:
        ZoneInfo object representing the local timezone

    Examples:
        >>> tz = get_system_timezone()
        >>> isinstance(tz, ZoneInfo)
        True
    """
    # Use the system's local timezone - cross-platform approach
    try:
        # Try "localtime" first (works on Linux/WSL)
        return ZoneInfo("localtime")
    except (ZoneInfoNotFoundError, ValueError):
        # Fall back to getting the key from datetime for macOS/Windows
        local_tz = datetime.now().astimezone().tzinfo
        if hasattr(local_tz, "key"):
            key = getattr(local_tz, "key")  # pyright: ignore[reportAny] # timezone key from system
            if isinstance(key, str):
                return ZoneInfo(key)
        # Final fallback: use UTC
        return ZoneInfo("UTC")


def get_system_timezone_name() -> str:
    """
    Get the IANA identifier of the system timezone.

    ``ZoneInfo("localtime")`` carries the key ``"localtime"``, which is not an
    IANA identifier, so the target of the ``/etc/localtime`` link is used in
    that case. Falls back to "UTC" when no identifier can be found.

    Examples:
        >>> is_known_timezone(get_system_timezone_name())
        True
    """
    tz = get_system_timezone()
    if tz.key and tz.key != "localtime":
        return tz.key

    try:
        target = LOCALTIME_LINK.resolve(strict=True)
    except OSError:
        return "UTC"

    if "zoneinfo" in target.parts:
        zoneinfo_index = len(target.parts) - 1 - target.parts[::-1].index("zoneinfo")
        key = "/".join(target.parts[zoneinfo_index + 1 :])
        if key and is_known_timezone(key):
            return key
    return "UTC"


def get_utc_now() -> datetime:
    """
    Get the current instant as a timezone-aware UTC datetime.

    Examples:
        >>> get_utc_now().utcoffset().total_seconds()
        0.0
    """
    return datetime.now(UTC)


def ensure_timezone_aware(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware.

    If the datetime is naive (no timezone info), it will be assumed to be
    in the system's local timezone. If it's already timezone-aware, it
    will be returned unchanged.

    Args:
        dt: Datetime object that may be naive or timezone-aware

    Returns:
        Timezone-aware datetime object

    Examples:
        >>> naive_dt = datetime(2025, 7, 25, 14, 30, 0)
        >>> aware_dt = ensure_timezone_aware(naive_dt)
        >>> aware_dt.tzinfo is not None
        True
    """
    if dt.tzinfo is None:
        # If naive, assume it's in local timezone
        return dt.replace(tzinfo=get_system_timezone())
    return dt


def resolve_timezone(identifier: str) -> ZoneInfo:
    """
    Resolve an IANA identifier into a ZoneInfo.

    Args:
        identifier: IANA timezone identifier such as "Asia/Taipei"

    Returns:
        The matching ZoneInfo

    Raises:
        UnknownTimezoneError: If zoneinfo cannot load the identifier

    Examples:
        >>> resolve_timezone("UTC").key
        'UTC'
    """
    try:
        return ZoneInfo(identifier)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        # ValueError covers malformed keys such as absolute paths, OSError
        # directory keys such as "America"
        raise UnknownTimezoneError(identifier) from e


def is_known_timezone(identifier: str) -> bool:
    """
    Check whether zoneinfo can resolve an identifier.

    Examples:
        >>> is_known_timezone("Europe/Paris")
        True
        >>> is_known_timezone("Nowhere/Fake")
        False
    """
    try:
        _ = resolve_timezone(identifier)
    except UnknownTimezoneError:
        return False
    return True
