"""Custom exception definitions for mvnlite."""

from pathlib import Path
from typing import Any


class MvnLiteError(Exception):
    """Base exception for all mvnlite errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ParseError(MvnLiteError):
    """Exception raised when a descriptor is missing or malformed."""

    def __init__(
        self,
        message: str,
        descriptor: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Error message.
            descriptor: Path of the descriptor that failed.
            details: Additional error details.
        """
        details = details or {}
        if descriptor:
            details["descriptor"] = str(descriptor)
        super().__init__(message, details)


class ResolutionError(MvnLiteError):
    """Exception raised when dependencies cannot be resolved."""

    def __init__(
        self,
        message: str,
        dependency: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize resolution error.

        Args:
            message: Error message.
            dependency: Dependency that could not be resolved.
            details: Additional error details.
        """
        details = details or {}
        if dependency:
            details["dependency"] = dependency
        super().__init__(message, details)


class CompileError(MvnLiteError):
    """Exception raised when the compiler reports a failure."""

    def __init__(
        self,
        message: str,
        return_code: int | None = None,
        output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize compile error.

        Args:
            message: Error message.
            return_code: Compiler exit code.
            output: Compiler diagnostics, verbatim.
            details: Additional error details.
        """
        details = details or {}
        if return_code is not None:
            details["return_code"] = return_code
        if output:
            details["output"] = output
        super().__init__(message, details)


class BuildIOError(MvnLiteError):
    """Exception raised for filesystem failures during a build."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize build I/O error.

        Args:
            message: Error message.
            path: Path involved in the failure.
            details: Additional error details.
        """
        details = details or {}
        if path:
            details["path"] = str(path)
        super().__init__(message, details)


class InstallError(MvnLiteError):
    """Exception raised when publishing an artifact fails."""

    def __init__(
        self,
        message: str,
        coordinate: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize install error.

        Args:
            message: Error message.
            coordinate: Coordinate of the artifact being installed.
            details: Additional error details.
        """
        details = details or {}
        if coordinate:
            details["coordinate"] = coordinate
        super().__init__(message, details)


class ConfigurationError(MvnLiteError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
