"""
Timestamp to wall-clock conversion.

A millisecond Unix timestamp names a single instant; rendering it in a zone
applies that zone's rules (daylight saving included) in effect at the instant.
"""

import logging
from datetime import UTC, datetime, timedelta, tzinfo

from .models import ConversionRequest, ConversionResult
from ..i18n import translate
from ..utils.core.exceptions import (
    InvalidTimestampError,
    MissingTimezoneError,
    UnknownTimezoneError,
)
from ..utils.time.timezone import (
    get_system_timezone,
    get_system_timezone_name,
    resolve_timezone,
)


logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _out_of_range(timestamp_millis: int) -> InvalidTimestampError:
    return InvalidTimestampError(
        f"Timestamp {timestamp_millis} is outside the supported date range",
        user_message=translate("Timestamp is outside the supported date range"),
        context=timestamp_millis,
    )


def to_local_datetime(timestamp_millis: int, zone: tzinfo) -> datetime:
    """
    Express a millisecond timestamp in the given zone.

    Raises:
        InvalidTimestampError: If the instant is outside the representable range
    """
    try:
        return (EPOCH + timedelta(milliseconds=timestamp_millis)).astimezone(zone)
    except OverflowError as e:
        raise _out_of_range(timestamp_millis) from e


def _format_date(moment: datetime) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def convert(request: ConversionRequest) -> ConversionResult:
    """
    Render a timestamp as the date and time shown on a clock in a timezone.

    Args:
        request: Validated conversion request

    Returns:
        ConversionResult with ``YYYY-MM-DD`` date and 24-hour ``HH:MM:SS`` time

    Raises:
        MissingTimezoneError: If the timezone is blank
        UnknownTimezoneError: If the timezone cannot be resolved
        InvalidTimestampError: If the instant is outside the representable range

    Examples:
        >>> str(convert(ConversionRequest(timestamp_millis=0, timezone="UTC")))
        '1970-01-01 00:00:00'
    """
    if not request.timezone.strip():
        raise MissingTimezoneError(
            "Conversion requested without a timezone",
            user_message=translate("This field is required"),
            context=request.timezone,
        )

    try:
        zone = resolve_timezone(request.timezone)
    except UnknownTimezoneError as e:
        logger.info(f"Conversion rejected, unknown timezone: {request.timezone!r}")
        raise UnknownTimezoneError(
            request.timezone,
            user_message=translate("Unknown timezone: {timezone}", timezone=request.timezone),
        ) from e

    local = to_local_datetime(request.timestamp_millis, zone)
    result = ConversionResult(date=_format_date(local), time=local.strftime("%H:%M:%S"))
    logger.debug(f"Converted {request.timestamp_millis} in {request.timezone} to {result}")
    return result


def describe_local_time(timestamp_millis: int) -> str:
    """
    Describe a timestamp in the system's local timezone.

    Returns:
        Text of the form ``"2023-11-14 22:13:20 ( UTC )"``

    Raises:
        InvalidTimestampError: If the instant is outside the representable range
    """
    local = to_local_datetime(timestamp_millis, get_system_timezone())
    return f"{_format_date(local)} {local.strftime('%H:%M:%S')} ( {get_system_timezone_name()} )"


def now_millis() -> int:
    """Current time as a millisecond Unix timestamp."""
    return int(datetime.now(UTC).timestamp() * 1000)
