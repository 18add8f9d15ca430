"""
Test utilities package for tzstamp tests.

## Available Modules

### test_helpers.py
Core test utilities for configuration, locale and timezone fixtures:
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `copy_locale_dir()`: Copy the packaged translations somewhere writable
- `SAMPLE_IDENTIFIERS`: Fixed identifier list covering the grouping edge cases
- `SUMMER_INSTANT` / `WINTER_INSTANT`: Fixed instants for offset arithmetic
"""

from .test_helpers import (
    SAMPLE_IDENTIFIERS,
    SUMMER_INSTANT,
    WINTER_INSTANT,
    copy_locale_dir,
    create_temp_config_file,
)

__all__ = [
    "SAMPLE_IDENTIFIERS",
    "SUMMER_INSTANT",
    "WINTER_INSTANT",
    "copy_locale_dir",
    "create_temp_config_file",
]
