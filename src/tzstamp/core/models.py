"""Data models shared by the catalog, converter and validator."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..utils.core.exceptions import ErrorCode

if TYPE_CHECKING:
    from .catalog import TimezoneProvider


class GroupBy(str, Enum):
    """How timezone options are grouped for display."""

    LOCATION = "location"
    UTC = "utc"


def format_offset_label(offset_minutes: int) -> str:
    """
    Format a UTC offset in minutes as an offset bucket label.

    Hours are truncated toward zero and the minute remainder is taken from
    the absolute offset, so the sign only ever appears once.

    Examples:
        >>> format_offset_label(330)
        'UTC+5:30'
        >>> format_offset_label(-270)
        'UTC-4:30'
        >>> format_offset_label(0)
        'UTC+0:00'
    """
    hours = int(offset_minutes / 60)
    minutes = abs(offset_minutes) % 60
    sign = "+" if offset_minutes >= 0 else "-"
    return f"UTC{sign}{abs(hours)}:{minutes:02d}"


def parse_offset_label(label: str) -> int:
    """
    Parse an offset bucket label back into signed minutes.

    Raises:
        ValueError: If the label is not of the form ``UTC±H:MM``

    Examples:
        >>> parse_offset_label("UTC+5:45")
        345
        >>> parse_offset_label("UTC-2:30")
        -150
    """
    if not label.startswith("UTC") or len(label) < 8 or label[3] not in "+-":
        raise ValueError(f"Not an offset label: {label!r}")

    hours_text, sep, minutes_text = label[4:].partition(":")
    if not sep or not hours_text.isdigit() or not minutes_text.isdigit():
        raise ValueError(f"Not an offset label: {label!r}")
    if len(minutes_text) != 2 or int(minutes_text) >= 60:
        raise ValueError(f"Offset label minutes out of range: {label!r}")

    magnitude = int(hours_text) * 60 + int(minutes_text)
    return -magnitude if label[3] == "-" else magnitude


def split_identifier(identifier: str) -> tuple[str, str]:
    """
    Split an identifier into region and locality.

    Only the first two ``/`` segments are used. An identifier without a
    separator is its own region with an empty locality.

    Examples:
        >>> split_identifier("Asia/Taipei")
        ('Asia', 'Taipei')
        >>> split_identifier("America/Argentina/Buenos_Aires")
        ('America', 'Argentina')
        >>> split_identifier("UTC")
        ('UTC', '')
    """
    segments = identifier.split("/")
    region = segments[0]
    locality = segments[1] if len(segments) > 1 else ""
    return region, locality


class TimezoneEntry(BaseModel):
    """One selectable timezone and its offset at catalog-build time."""

    identifier: str = Field(..., min_length=1)
    region: str
    locality: str = ""
    utc_offset_minutes: int = Field(..., ge=-24 * 60, le=24 * 60)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def from_identifier(cls, identifier: str, utc_offset_minutes: int) -> "TimezoneEntry":
        """Create an entry, deriving region and locality from the identifier."""
        region, locality = split_identifier(identifier)
        return cls(
            identifier=identifier,
            region=region,
            locality=locality,
            utc_offset_minutes=utc_offset_minutes,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def offset_label(self) -> str:
        """Offset bucket this entry belongs to."""
        return format_offset_label(self.utc_offset_minutes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        """Display text for a selectable option."""
        return f"{self.identifier} ({self.offset_label})"


class TimezoneCatalog(BaseModel):
    """
    Two groupings of the same set of timezone entries.

    ``by_region`` keys are identifier regions and ``by_offset`` keys are offset
    bucket labels. Within every bucket entries keep the provider's order, and
    every entry appears in exactly one bucket of each grouping.
    """

    entries: list[TimezoneEntry] = Field(default_factory=list)
    by_region: dict[str, list[TimezoneEntry]] = Field(default_factory=dict)
    by_offset: dict[str, list[TimezoneEntry]] = Field(default_factory=dict)
    built_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def build(
        cls, provider: "TimezoneProvider | None" = None, now: datetime | None = None
    ) -> "TimezoneCatalog":
        """Build a catalog snapshot. See :func:`tzstamp.core.catalog.build_catalog`."""
        from .catalog import build_catalog

        return build_catalog(provider, now=now)

    def __len__(self) -> int:
        return len(self.entries)

    def groups(self, group_by: GroupBy = GroupBy.LOCATION) -> dict[str, list[TimezoneEntry]]:
        """Return the grouping shown for the given option layout."""
        match group_by:
            case GroupBy.UTC:
                return self.by_offset
            case _:
                return self.by_region

    def find(self, identifier: str) -> TimezoneEntry | None:
        """Look up an entry by identifier."""
        region, _ = split_identifier(identifier)
        for entry in self.by_region.get(region, []):
            if entry.identifier == identifier:
                return entry
        return None


class ConversionRequest(BaseModel):
    """A validated request to render a timestamp in a timezone."""

    timestamp_millis: int
    timezone: str = Field(..., min_length=1)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, strict=True)


class ConversionResult(BaseModel):
    """Wall-clock date and time of an instant in a timezone."""

    date: str = Field(..., pattern=r"^\d{4,}-\d{2}-\d{2}$")
    time: str = Field(..., pattern=r"^\d{2}:\d{2}:\d{2}$")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.date} {self.time}"


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str
    code: ErrorCode
    message: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)
