"""Configuration schema for tzstamp using nested Pydantic models."""

from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models import GroupBy
from ..utils.time.timezone import is_known_timezone


class ConversionConfig(BaseModel):
    """Defaults for the conversion form."""

    default_timezone: str | None = Field(
        default=None,
        description="IANA timezone preselected for conversions, or null to use the system timezone",
    )

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, v: str | None) -> str | None:
        """Reject identifiers zoneinfo cannot load."""
        if v is None or v == "":
            return None
        if not is_known_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v


class CatalogConfig(BaseModel):
    """Timezone option grouping configuration."""

    group_by: GroupBy = Field(
        default=GroupBy.LOCATION,
        description="How timezone options are grouped: 'location' or 'utc'",
    )


class LocalizationConfig(BaseModel):
    """Localization configuration."""

    language: str = Field(
        default="en",
        description="Language code for internationalization (e.g. 'en', 'zh_TW')",
        pattern=r"^[A-Za-z]{2}([_-][A-Za-z]{2})?$",
    )

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Normalize language codes to the ``ll_CC`` form gettext expects."""
        language, _, country = v.replace("-", "_").partition("_")
        if country:
            return f"{language.lower()}_{country.upper()}"
        return language.lower()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum level written to the log file",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class SystemConfig(BaseModel):
    """System configuration."""

    localization: LocalizationConfig = Field(default_factory=LocalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class TzStampConfig(BaseModel):
    """
    Configuration model for tzstamp with nested structure.

    Every section has defaults, so an empty file is a valid configuration.
    """

    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
