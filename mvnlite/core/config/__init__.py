"""Configuration management for mvnlite."""

from mvnlite.core.config.loader import ConfigLoader
from mvnlite.core.config.settings import (
    ArchiveSettings,
    CompilerSettings,
    LoggingSettings,
    RepositorySettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "Settings",
    "RepositorySettings",
    "CompilerSettings",
    "ArchiveSettings",
    "LoggingSettings",
    "get_settings",
]
