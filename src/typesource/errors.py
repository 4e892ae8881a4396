"""Error hierarchy for typesource."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "TypesourceError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "EnumerationError",
    "TypeResolutionError",
    "NothingDiscoveredError",
    "ErrorCodes",
]


class TypesourceError(Exception):
    """Base error for all typesource errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(TypesourceError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(TypesourceError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(TypesourceError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class EnumerationError(TypesourceError):
    """Raised when the symbol inventory cannot be enumerated."""

    def __init__(self, package: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="ENUMERATION_ERROR",
            message=f"Failed to enumerate classes in '{package}': {reason}",
            details={"package": package, "reason": reason},
            **kwargs,
        )

    @property
    def package(self) -> str:
        """The package or module whose scan failed."""
        return self.details["package"]


class TypeResolutionError(TypesourceError):
    """Raised when a class name cannot be loaded."""

    def __init__(self, class_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="TYPE_RESOLUTION_ERROR",
            message=f"Cannot load class '{class_name}': {reason}",
            details={"class_name": class_name, "reason": reason},
            **kwargs,
        )

    @property
    def class_name(self) -> str:
        """The class name that could not be loaded."""
        return self.details["class_name"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


class NothingDiscoveredError(TypesourceError):
    """Raised when no enabled discovery strategy produced a class."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(code="NOTHING_DISCOVERED", message="No input classes found.", **kwargs)


class ErrorCodes:
    """All typesource error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.TYPE_RESOLUTION_ERROR:
            report(error.class_name)
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    ENUMERATION_ERROR = "ENUMERATION_ERROR"
    TYPE_RESOLUTION_ERROR = "TYPE_RESOLUTION_ERROR"
    NOTHING_DISCOVERED = "NOTHING_DISCOVERED"
