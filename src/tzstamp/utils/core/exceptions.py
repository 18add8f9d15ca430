"""
Basic exception classes for tzstamp.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.models import FieldError


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorCode(str, Enum):
    """Field-scoped error codes reported to the caller."""

    INVALID_TIMESTAMP = "InvalidTimestamp"
    MISSING_TIMEZONE = "MissingTimezone"
    UNKNOWN_TIMEZONE = "UnknownTimezone"


class TzStampError(Exception):
    """Base exception class for tzstamp specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ValidationError(TzStampError):
    """Input validation errors the user can fix by correcting a field."""

    code: ErrorCode

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            recoverable=True,
            user_message=user_message,
            context=context,
        )


class InvalidTimestampError(ValidationError):
    """Timestamp is malformed, too short or outside the representable range."""

    code = ErrorCode.INVALID_TIMESTAMP


class MissingTimezoneError(ValidationError):
    """No timezone was selected."""

    code = ErrorCode.MISSING_TIMEZONE


class UnknownTimezoneError(ValidationError):
    """The selected timezone cannot be resolved by zoneinfo."""

    code = ErrorCode.UNKNOWN_TIMEZONE

    def __init__(
        self,
        timezone: str,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            f"Unknown timezone: {timezone!r}",
            user_message=user_message,
            context=timezone,
        )
        self.timezone: str = timezone


class FormValidationError(TzStampError):
    """Raised when a conversion is submitted while fields are invalid."""

    def __init__(self, errors: list[FieldError]) -> None:
        summary = ", ".join(f"{error.field}: {error.code.value}" for error in errors)
        super().__init__(
            f"Form has invalid fields ({summary})",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            user_message="\n".join(error.message for error in errors),
            context=errors,
        )
        self.errors: list[FieldError] = errors


class ConfigurationError(TzStampError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )
