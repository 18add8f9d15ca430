"""Configuration manager for tzstamp.

This module provides functionality for loading, validating, and saving
YAML configuration files with Pydantic model validation.
"""

import logging
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from .schema import TzStampConfig
from ..utils.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    Provides methods for loading, saving, and validating configuration files
    while ensuring atomic writes.
    """

    def __init__(self) -> None:
        """Initialize the configuration manager."""
        self._current_config: TzStampConfig | None = None
        self._config_file_path: Path | None = None

    @staticmethod
    def load_config(config_path: Path) -> TzStampConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            TzStampConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the file does not contain a mapping
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        return TzStampConfig.model_validate(config_data)

    @staticmethod
    def save_config(config: TzStampConfig, config_path: Path) -> None:
        """
        Save configuration to a YAML file with atomic operation.

        Args:
            config: Configuration object to save
            config_path: Path where to save the configuration

        Raises:
            OSError: If file operations fail
        """
        content_to_write = yaml.safe_dump(
            config.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )

        # Atomic save operation using temporary file
        temp_file = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=config_path.parent,
                prefix=f".{config_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                _ = temp_file.write(content_to_write)
                temp_file.flush()
                temp_path = Path(temp_file.name)

            # Atomic move
            _ = temp_path.replace(config_path)

        except OSError as e:
            # Clean up temporary file if it exists
            if temp_file and Path(temp_file.name).exists():
                Path(temp_file.name).unlink(missing_ok=True)
            raise OSError(f"Failed to save configuration to {config_path}: {e}") from e

    @staticmethod
    def get_default_config() -> TzStampConfig:
        """
        Get a configuration object with default values.

        Returns:
            TzStampConfig: Configuration with default values
        """
        return TzStampConfig()

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(ConfigManager._generate_sample_content(), encoding="utf-8")

    @staticmethod
    def _generate_sample_content() -> str:
        """
        Generate sample configuration file content with documentation.

        Returns:
            str: Sample configuration file content
        """
        return """# tzstamp Configuration File
# Every option is optional; remove a line to use its default.

conversion:
  # IANA timezone preselected for conversions (e.g. "Asia/Taipei").
  # null uses the system timezone.
  default_timezone: null

catalog:
  # How timezone options are grouped: "location" (by region) or "utc" (by offset)
  group_by: location

system:
  localization:
    # Language for messages: "en" or "zh_TW"
    language: en
  logging:
    # Minimum level written to the log file (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    level: INFO
"""

    def load_or_default(self, config_path: Path) -> TzStampConfig:
        """
        Load a configuration file, falling back to defaults when it is absent.

        The loaded configuration becomes the current one.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            TzStampConfig: The current configuration

        Raises:
            ConfigurationError: If the file exists but cannot be parsed or validated
        """
        try:
            config = self.load_config(config_path)
            logger.info(f"Loaded configuration from {config_path}")
        except FileNotFoundError:
            logger.info(f"No configuration file at {config_path}, using defaults")
            config = self.get_default_config()
        except (yaml.YAMLError, ValueError, ValidationError) as e:
            # pydantic's ValidationError subclasses ValueError
            raise ConfigurationError(
                f"Invalid configuration in {config_path}: {e}",
                context=config_path,
            ) from e

        self._current_config = config
        self._config_file_path = config_path
        return config

    def get_current_config(self) -> TzStampConfig:
        """
        Get the current configuration.

        Returns:
            TzStampConfig: Current configuration

        Raises:
            RuntimeError: If no configuration has been loaded
        """
        if self._current_config is None:
            raise RuntimeError("No configuration loaded")
        return self._current_config

    @property
    def config_file_path(self) -> Path | None:
        """Path the current configuration was loaded from."""
        return self._config_file_path
