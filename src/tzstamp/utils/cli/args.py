"""
Command-line argument parsing for tzstamp.

This module provides the argument parser for the ``tzstamp`` command: the
global path and language options plus the ``convert``, ``zones`` and
``init-config`` subcommands.
"""

import argparse
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    command: str
    config_file: Path
    log_folder: Path
    language: str | None
    timestamp: str | None
    timezone: str | None
    group_by: str | None
    filter_text: str | None
    force: bool


class DefaultPaths:
    """Default paths for tzstamp."""

    CONFIG_FILE: Path = Path("config.yml")
    LOG_FOLDER: Path = Path("logs")


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        # Expand tilde if present, then resolve
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    if not config_file.parent.exists():
        raise PathValidationError(
            f"Parent directory for config file does not exist: {config_file.parent}"
        )

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for tzstamp.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="tzstamp",
        description="tzstamp - render Unix millisecond timestamps in any IANA timezone",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tzstamp convert 1700000000000 --timezone Asia/Taipei
    Show the date and time in Taipei

  tzstamp convert
    Show the current time in the configured or system timezone

  tzstamp zones --group-by utc --filter Asia
    List Asian timezones grouped by their current UTC offset

  tzstamp --config-file ~/.config/tzstamp.yml init-config
    Write a documented sample configuration file
""",
    )

    defaults = DefaultPaths()

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=str(defaults.CONFIG_FILE),
        help=(
            "Path to the configuration file (default: %(default)s). "
            "Defaults are used when the file does not exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=str(defaults.LOG_FOLDER),
        help=(
            "Path to the log folder (default: %(default)s). "
            "The directory will be created if it doesn't exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--language",
        type=str,
        default=None,
        help="Language for messages, overriding the configuration (e.g. en, zh_TW)",
        metavar="CODE",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Render a millisecond timestamp in a timezone",
        description="Render a millisecond timestamp as date and time in a timezone.",
    )
    _ = convert_parser.add_argument(
        "timestamp",
        nargs="?",
        default=None,
        help="Unix timestamp in milliseconds (default: now)",
    )
    _ = convert_parser.add_argument(
        "--timezone",
        "-z",
        default=None,
        help="IANA timezone identifier (default: configured or system timezone)",
        metavar="ZONE",
    )

    zones_parser = subparsers.add_parser(
        "zones",
        help="List supported timezones grouped by region or UTC offset",
        description="List supported timezones with their current UTC offset.",
    )
    _ = zones_parser.add_argument(
        "--group-by",
        choices=["location", "utc"],
        default=None,
        help="Group by region ('location') or current offset ('utc') (default: configured)",
    )
    _ = zones_parser.add_argument(
        "--filter",
        dest="filter_text",
        default=None,
        help="Only list timezones whose identifier contains TEXT (case-insensitive)",
        metavar="TEXT",
    )

    init_parser = subparsers.add_parser(
        "init-config",
        help="Write a documented sample configuration file",
        description="Write a documented sample configuration file to --config-file.",
    )
    _ = init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing configuration file",
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing fails or --help is requested
        PathValidationError: If path validation fails
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    command: str | None = getattr(parsed, "command", None)
    if command is None:
        parser.print_help()
        parser.exit(2)

    config_file = validate_config_file_path(getattr(parsed, "config_file"))
    log_folder = validate_folder_path(getattr(parsed, "log_folder"), "log folder")

    return ParsedArgs(
        command=command,
        config_file=config_file,
        log_folder=log_folder,
        language=getattr(parsed, "language", None),
        timestamp=getattr(parsed, "timestamp", None),
        timezone=getattr(parsed, "timezone", None),
        group_by=getattr(parsed, "group_by", None),
        filter_text=getattr(parsed, "filter_text", None),
        force=bool(getattr(parsed, "force", False)),
    )
