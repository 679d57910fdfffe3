"""Exception definitions module."""

from mvnlite.core.exceptions.errors import (
    BuildIOError,
    CompileError,
    ConfigurationError,
    InstallError,
    MvnLiteError,
    ParseError,
    ResolutionError,
)

__all__ = [
    "MvnLiteError",
    "ParseError",
    "ResolutionError",
    "CompileError",
    "BuildIOError",
    "InstallError",
    "ConfigurationError",
]
