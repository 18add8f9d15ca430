"""
Conversion form state.

The form keeps the raw value of each input field and re-runs the validator
on every mutation, so per-field status is always current. Submitting converts
the validated request; a failed conversion leaves the previous result in
place.
"""

import logging

from .catalog import TimezoneProvider, build_catalog
from .converter import convert, describe_local_time, now_millis
from .models import ConversionResult, FieldError, GroupBy, TimezoneCatalog, TimezoneEntry
from .validator import FIELDS, TIMESTAMP_FIELD, TIMEZONE_FIELD, check_fields, parse_timestamp, validate
from ..utils.core.exceptions import FormValidationError, InvalidTimestampError, UnknownTimezoneError
from ..utils.time.timezone import get_system_timezone_name


logger = logging.getLogger(__name__)


class ConversionForm:
    """
    State of the timestamp conversion form.

    Attributes:
        result: The last successful conversion, or None before the first one
        group_by: How timezone options are grouped for display
    """

    def __init__(
        self,
        timestamp: object | None = None,
        timezone: str | None = None,
        group_by: GroupBy = GroupBy.LOCATION,
        provider: TimezoneProvider | None = None,
    ) -> None:
        self._values: dict[str, object] = {
            TIMESTAMP_FIELD: now_millis() if timestamp is None else timestamp,
            TIMEZONE_FIELD: get_system_timezone_name() if timezone is None else timezone,
        }
        self._errors: list[FieldError] = check_fields(self._values)
        self._provider: TimezoneProvider | None = provider
        self._catalog: TimezoneCatalog | None = None
        self.group_by: GroupBy = group_by
        self.result: ConversionResult | None = None

    @property
    def values(self) -> dict[str, object]:
        """Copy of the current raw field values."""
        return dict(self._values)

    @property
    def errors(self) -> list[FieldError]:
        """Field errors from the most recent validation run."""
        return list(self._errors)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def set_field(self, name: str, value: object) -> list[FieldError]:
        """
        Update a field and re-validate the whole form.

        Args:
            name: ``"timestamp"`` or ``"timezone"``
            value: Raw value as entered

        Returns:
            The field errors after the change

        Raises:
            KeyError: If the field name is unknown
        """
        if name not in FIELDS:
            raise KeyError(f"Unknown form field: {name!r}")

        self._values[name] = value
        self._errors = check_fields(self._values)
        logger.debug(f"Field {name} changed, {len(self._errors)} error(s)")
        return self.errors

    def error_for(self, name: str) -> FieldError | None:
        """Return the error for one field, if any."""
        for error in self._errors:
            if error.field == name:
                return error
        return None

    def helper_text(self) -> str | None:
        """Local rendering of the entered timestamp, None while it is not a number."""
        timestamp = parse_timestamp(self._values[TIMESTAMP_FIELD])
        if timestamp is None:
            return None
        try:
            return describe_local_time(timestamp)
        except InvalidTimestampError:
            return None

    @property
    def catalog(self) -> TimezoneCatalog:
        """Timezone catalog, built on first use."""
        if self._catalog is None:
            self._catalog = build_catalog(self._provider)
        return self._catalog

    def refresh_catalog(self) -> TimezoneCatalog:
        """Rebuild the catalog so offsets reflect the current moment."""
        self._catalog = build_catalog(self._provider)
        return self._catalog

    def options(self) -> dict[str, list[TimezoneEntry]]:
        """Timezone options grouped according to ``group_by``."""
        return self.catalog.groups(self.group_by)

    def submit(self) -> ConversionResult:
        """
        Convert the current field values.

        Returns:
            The new conversion result, which also becomes ``result``

        Raises:
            FormValidationError: If any field is invalid
            UnknownTimezoneError: If the timezone cannot be resolved
            InvalidTimestampError: If the timestamp is outside the supported range
        """
        outcome = validate(self._values)
        if isinstance(outcome, list):
            raise FormValidationError(outcome)

        try:
            result = convert(outcome)
        except (UnknownTimezoneError, InvalidTimestampError) as e:
            logger.info(f"Conversion failed, keeping previous result: {e}")
            raise

        self.result = result
        return result
