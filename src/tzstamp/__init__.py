"""
tzstamp - render Unix millisecond timestamps in any IANA timezone.
"""

import sys

from .core import (
    ConversionForm,
    ConversionRequest,
    ConversionResult,
    TimezoneCatalog,
    build_catalog,
    convert,
    validate,
)
from .main import main as cli_main


def main() -> None:
    """Console script entry point."""
    try:
        exit_code = run()
    except KeyboardInterrupt:
        exit_code = 130
    sys.exit(exit_code)


def run(argv: list[str] | None = None) -> int:
    """Run the command line and return its exit code."""
    return cli_main(argv)


__all__ = [
    "main",
    "run",
    "ConversionForm",
    "ConversionRequest",
    "ConversionResult",
    "TimezoneCatalog",
    "build_catalog",
    "convert",
    "validate",
]
