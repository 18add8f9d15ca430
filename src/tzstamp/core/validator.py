"""
Input validation for conversion requests.

Both rules are checked independently and every violation is reported, so a
caller can show the status of each field at once. Whether a timezone is
actually recognized is left to the converter.
"""

from collections.abc import Mapping

from .models import ConversionRequest, FieldError
from ..i18n import translate
from ..utils.core.exceptions import ErrorCode


TIMESTAMP_FIELD = "timestamp"
TIMEZONE_FIELD = "timezone"
FIELDS = (TIMESTAMP_FIELD, TIMEZONE_FIELD)

MIN_TIMESTAMP_DIGITS = 13


def parse_timestamp(value: object) -> int | None:
    """
    Interpret a raw field value as an integer timestamp.

    Accepts ints, integral floats and strings of digits with an optional
    leading minus sign. Booleans are not numbers here.

    Returns:
        The integer value, or None if the value is not an integer

    Examples:
        >>> parse_timestamp(" 1700000000000 ")
        1700000000000
        >>> parse_timestamp(1.5) is None
        True
    """
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str():
            text = value.strip()
            digits = text[1:] if text.startswith("-") else text
            if digits.isascii() and digits.isdigit():
                return int(text)
            return None
        case _:
            return None


def check_timestamp(value: object) -> FieldError | None:
    """Check the timestamp rule: an integer with at least 13 digits."""
    timestamp = parse_timestamp(value)
    if timestamp is None or len(str(abs(timestamp))) < MIN_TIMESTAMP_DIGITS:
        return FieldError(
            field=TIMESTAMP_FIELD,
            code=ErrorCode.INVALID_TIMESTAMP,
            message=translate("Please enter a valid timestamp of 13 digits"),
        )
    return None


def check_timezone(value: object) -> FieldError | None:
    """Check the timezone rule: a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        return FieldError(
            field=TIMEZONE_FIELD,
            code=ErrorCode.MISSING_TIMEZONE,
            message=translate("This field is required"),
        )
    return None


def check_fields(raw: Mapping[str, object]) -> list[FieldError]:
    """
    Run every rule over the raw field values.

    Args:
        raw: Mapping with ``timestamp`` and ``timezone`` keys; missing keys
            count as empty

    Returns:
        Field errors in field order, empty if everything is valid
    """
    errors: list[FieldError] = []
    for error in (
        check_timestamp(raw.get(TIMESTAMP_FIELD)),
        check_timezone(raw.get(TIMEZONE_FIELD)),
    ):
        if error is not None:
            errors.append(error)
    return errors


def validate(raw: Mapping[str, object]) -> ConversionRequest | list[FieldError]:
    """
    Validate raw field values into a conversion request.

    Args:
        raw: Mapping with ``timestamp`` and ``timezone`` keys

    Returns:
        A ConversionRequest when both fields pass, otherwise the list of
        field errors

    Examples:
        >>> validate({"timestamp": 1700000000000, "timezone": "UTC"})
        ConversionRequest(timestamp_millis=1700000000000, timezone='UTC')
        >>> [error.code.value for error in validate({"timestamp": 123, "timezone": ""})]
        ['InvalidTimestamp', 'MissingTimezone']
    """
    errors = check_fields(raw)
    if errors:
        return errors

    return ConversionRequest(
        timestamp_millis=parse_timestamp(raw[TIMESTAMP_FIELD]),  # pyright: ignore[reportArgumentType] # checked above
        timezone=str(raw[TIMEZONE_FIELD]).strip(),
    )
