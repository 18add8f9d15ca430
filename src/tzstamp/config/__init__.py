"""Configuration loading and validation for tzstamp."""

from .manager import ConfigManager
from .schema import (
    CatalogConfig,
    ConversionConfig,
    LocalizationConfig,
    LoggingConfig,
    SystemConfig,
    TzStampConfig,
)

__all__ = [
    "ConfigManager",
    "CatalogConfig",
    "ConversionConfig",
    "LocalizationConfig",
    "LoggingConfig",
    "SystemConfig",
    "TzStampConfig",
]
