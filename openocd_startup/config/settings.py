from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


__all__ = ["Settings", "LoggingSettings", "ConfigurationError", "get_settings"]


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class LoggingSettings(BaseModel):
    """Logging configuration applied before the command line is parsed."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: Literal["console", "json"] = Field(
        default="console",
        description="Log line rendering: 'console' for humans, 'json' for machines",
    )

    file: str | None = Field(
        default=None,
        description="Append log output to this file instead of stderr",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return upper


class Settings(BaseSettings):
    """
    Installation constants and runtime options for the startup processor.

    Values come from ``OPENOCD_*`` environment variables, falling back to the
    defaults of a standard ``/usr/local`` installation. Nested fields use a
    double underscore, e.g. ``OPENOCD_LOGGING__LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENOCD_",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    tool_name: str = Field(
        default="openocd",
        description="Lower-case tool name used for the home config dir and log file",
    )

    app_name: str = Field(
        default="OpenOCD",
        description="Display name, also the application-data directory name",
    )

    bindir: str = Field(
        default="/usr/local/bin",
        description="Installation binary directory",
    )

    pkgdatadir: str = Field(
        default="/usr/local/share/openocd",
        description="Installation data directory holding site/ and scripts/",
    )

    scripts_env_var: str = Field(
        default="OPENOCD_SCRIPTS",
        description="Environment variable naming an extra script directory",
    )

    default_debug_level: int = Field(
        default=3,
        ge=0,
        le=4,
        description="Debug level applied by a bare -d/--debug",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("bindir", "pkgdatadir")
    @classmethod
    def normalize_separators(cls, v: str) -> str:
        """Install paths are compared against '/'-separated executable paths."""
        return v.replace("\\", "/")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        ConfigurationError: If an environment override fails validation
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
