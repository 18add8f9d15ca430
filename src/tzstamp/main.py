"""
Main entry point for tzstamp.

This module sets up logging, loads configuration and translations, and
dispatches the command-line subcommands to the conversion core.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from .config.manager import ConfigManager
from .config.schema import LocalizationConfig, TzStampConfig
from .core.catalog import TimezoneProvider, build_catalog
from .core.form import ConversionForm
from .core.models import GroupBy, TimezoneEntry
from .i18n import setup_i18n, translate
from .utils.cli.args import ParsedArgs, PathValidationError, parse_arguments
from .utils.core.exceptions import (
    ConfigurationError,
    FormValidationError,
    TzStampError,
)


LOG_FILE = "tzstamp.log"
ERROR_LOG_FILE = "tzstamp-errors.log"

logger = logging.getLogger(__name__)


def setup_logging(logs_dir: Path, level: str = "INFO") -> None:
    """
    Configure logging with rotating file handlers and a console handler.

    The log file receives records at ``level`` and above, the error log only
    errors, and the console only warnings so command output stays clean.

    Args:
        logs_dir: Directory for log files (created if missing)
        level: Minimum level for the main log file
    """
    _ = logs_dir.mkdir(exist_ok=True, parents=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(levelname)s: %(message)s")

    # File handler with rotation (5MB max, keep 5 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / LOG_FILE,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.getLevelName(level))
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(simple_formatter)

    error_handler = logging.handlers.RotatingFileHandler(
        logs_dir / ERROR_LOG_FILE,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(error_handler)


def format_groups(groups: dict[str, list[TimezoneEntry]], filter_text: str | None = None) -> list[str]:
    """
    Render grouped timezone options as indented text lines.

    Groups left empty by the filter are omitted.
    """
    needle = filter_text.lower() if filter_text else None
    lines: list[str] = []
    for group_name, entries in groups.items():
        matching = [
            entry for entry in entries if needle is None or needle in entry.identifier.lower()
        ]
        if not matching:
            continue
        lines.append(group_name)
        lines.extend(f"  {entry.label}" for entry in matching)
    return lines


def run_convert(
    args: ParsedArgs, config: TzStampConfig, out: TextIO, err: TextIO
) -> int:
    """Handle ``tzstamp convert``."""
    form = ConversionForm(
        timestamp=args.timestamp,
        timezone=args.timezone if args.timezone is not None else config.conversion.default_timezone,
        group_by=config.catalog.group_by,
    )

    try:
        result = form.submit()
    except FormValidationError as e:
        for error in e.errors:
            print(f"{error.field}: {error.message}", file=err)
        return 1
    except TzStampError as e:
        print(e.user_message, file=err)
        return 1

    helper = form.helper_text()
    print(str(result), file=out)
    if helper is not None:
        print(translate("Local time: {local}", local=helper), file=err)
    return 0


def run_zones(
    args: ParsedArgs,
    config: TzStampConfig,
    out: TextIO,
    err: TextIO,
    provider: TimezoneProvider | None = None,
) -> int:
    """Handle ``tzstamp zones``."""
    group_by = GroupBy(args.group_by) if args.group_by else config.catalog.group_by
    catalog = build_catalog(provider)
    lines = format_groups(catalog.groups(group_by), args.filter_text)

    if not lines and args.filter_text:
        print(translate("No timezones match {text!r}", text=args.filter_text), file=err)
        return 1

    for line in lines:
        print(line, file=out)
    return 0


def run_init_config(args: ParsedArgs, out: TextIO, err: TextIO) -> int:
    """Handle ``tzstamp init-config``."""
    if args.config_file.exists() and not args.force:
        print(f"Configuration file already exists: {args.config_file} (use --force to overwrite)", file=err)
        return 1

    ConfigManager.create_sample_config(args.config_file)
    logger.info(f"Wrote sample configuration to {args.config_file}")
    print(str(args.config_file), file=out)
    return 0


def main(argv: list[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """
    Run the tzstamp command line.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])
        out: Stream for command output (defaults to stdout)
        err: Stream for diagnostics (defaults to stderr)

    Returns:
        Process exit code
    """
    out = out or sys.stdout
    err = err or sys.stderr

    try:
        args = parse_arguments(argv)
    except PathValidationError as e:
        print(f"Error: {e}", file=err)
        return 1

    config_manager = ConfigManager()
    try:
        config = config_manager.load_or_default(args.config_file)
    except ConfigurationError as e:
        if args.command != "init-config":
            print(f"Error: {e}", file=err)
            return 1
        config = config_manager.get_default_config()

    language = config.system.localization.language
    if args.language:
        try:
            language = LocalizationConfig(language=args.language).language
        except ValidationError as e:
            print(f"Error: invalid language {args.language!r}: {e.errors()[0]['msg']}", file=err)
            return 1

    setup_logging(args.log_folder, config.system.logging.level)
    setup_i18n(language)
    logger.debug(f"Running command {args.command!r}")

    match args.command:
        case "convert":
            return run_convert(args, config, out, err)
        case "zones":
            return run_zones(args, config, out, err)
        case "init-config":
            return run_init_config(args, out, err)
        case _:
            print(f"Unknown command: {args.command}", file=err)
            return 2
