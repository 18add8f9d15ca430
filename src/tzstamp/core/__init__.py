"""
Core of tzstamp: timezone catalog, timestamp conversion and input validation.
"""

from .catalog import (
    StaticTimezoneProvider,
    SystemTimezoneProvider,
    TimezoneProvider,
    build_catalog,
)
from .converter import convert, describe_local_time, now_millis
from .form import ConversionForm
from .models import (
    ConversionRequest,
    ConversionResult,
    FieldError,
    GroupBy,
    TimezoneCatalog,
    TimezoneEntry,
    format_offset_label,
    parse_offset_label,
    split_identifier,
)
from .validator import check_fields, validate

__all__ = [
    "StaticTimezoneProvider",
    "SystemTimezoneProvider",
    "TimezoneProvider",
    "build_catalog",
    "convert",
    "describe_local_time",
    "now_millis",
    "ConversionForm",
    "ConversionRequest",
    "ConversionResult",
    "FieldError",
    "GroupBy",
    "TimezoneCatalog",
    "TimezoneEntry",
    "format_offset_label",
    "parse_offset_label",
    "split_identifier",
    "check_fields",
    "validate",
]
