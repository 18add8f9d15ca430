"""
Timezone catalog construction.

The catalog enumerates every identifier a provider reports, evaluates each
zone's UTC offset at a single instant and groups the resulting entries by
region and by offset bucket. A catalog is a snapshot: offsets drift with
daylight-saving transitions, so callers rebuild it whenever they need fresh
values.
"""

import logging
import zoneinfo
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Protocol, override

from .models import TimezoneCatalog, TimezoneEntry
from ..utils.core.exceptions import UnknownTimezoneError
from ..utils.time.timezone import ensure_timezone_aware, get_utc_now, resolve_timezone


logger = logging.getLogger(__name__)


class TimezoneProvider(Protocol):
    """Read-only source of supported timezone identifiers."""

    def list_supported_timezones(self) -> Sequence[str]:
        """Return identifiers in the order they should be presented."""
        ...


class SystemTimezoneProvider:
    """
    Identifiers known to the platform's zoneinfo database.

    ``zoneinfo.available_timezones`` returns an unordered set; it is sorted so
    that enumeration order is stable across calls and platforms.
    """

    def list_supported_timezones(self) -> Sequence[str]:
        return sorted(zoneinfo.available_timezones())

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StaticTimezoneProvider:
    """A fixed list of identifiers, served in the given order."""

    def __init__(self, identifiers: Sequence[str]) -> None:
        self._identifiers: tuple[str, ...] = tuple(identifiers)

    def list_supported_timezones(self) -> Sequence[str]:
        return self._identifiers

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._identifiers)} identifiers)"


def compute_offset_minutes(identifier: str, now: datetime) -> int:
    """
    Compute a zone's offset from UTC at the given instant, in minutes.

    Args:
        identifier: IANA timezone identifier
        now: Timezone-aware instant to evaluate the offset at

    Returns:
        Signed offset in whole minutes (east of UTC is positive)

    Raises:
        UnknownTimezoneError: If the identifier cannot be resolved
    """
    zone_time = now.astimezone(resolve_timezone(identifier))
    offset = zone_time.utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds() // 60)


def build_catalog(
    provider: TimezoneProvider | None = None, now: datetime | None = None
) -> TimezoneCatalog:
    """
    Build a timezone catalog in a single pass over the provider's identifiers.

    Args:
        provider: Source of identifiers (defaults to the system database)
        now: Instant at which offsets are evaluated (defaults to the current time)

    Returns:
        TimezoneCatalog with region and offset groupings. Buckets appear in
        first-seen order and entries keep provider order within each bucket.
        An empty provider yields empty groupings.
    """
    if provider is None:
        provider = SystemTimezoneProvider()
    moment = get_utc_now() if now is None else ensure_timezone_aware(now).astimezone(UTC)

    entries: list[TimezoneEntry] = []
    by_region: dict[str, list[TimezoneEntry]] = {}
    by_offset: dict[str, list[TimezoneEntry]] = {}
    seen: set[str] = set()

    for identifier in provider.list_supported_timezones():
        if identifier in seen:
            logger.debug(f"Skipping duplicate timezone identifier: {identifier}")
            continue
        seen.add(identifier)

        try:
            offset_minutes = compute_offset_minutes(identifier, moment)
        except UnknownTimezoneError:
            logger.warning(f"Skipping timezone the platform cannot load: {identifier}")
            continue

        entry = TimezoneEntry.from_identifier(identifier, offset_minutes)
        entries.append(entry)
        by_region.setdefault(entry.region, []).append(entry)
        by_offset.setdefault(entry.offset_label, []).append(entry)

    logger.debug(
        f"Built timezone catalog with {len(entries)} entries, "
        f"{len(by_region)} regions and {len(by_offset)} offset buckets at {moment.isoformat()}"
    )

    return TimezoneCatalog(
        entries=entries,
        by_region=by_region,
        by_offset=by_offset,
        built_at=moment,
    )
