"""Configuration for the startup option processor."""

from .settings import ConfigurationError, LoggingSettings, Settings, get_settings


__all__ = ["ConfigurationError", "LoggingSettings", "Settings", "get_settings"]
