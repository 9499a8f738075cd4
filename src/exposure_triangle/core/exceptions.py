"""
Exceptions for the exposure engine.

Only hard failures are exceptions. Recoverable conditions (limits, over and
under exposure) are reported as diagnostics on the result instead.
"""

from typing import Any, Optional


class ExposureError(Exception):
    """Base exception for all exposure engine errors."""

    error_code: str = "EXPOSURE_ERROR"
    default_message: str = "Exposure calculation error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidFormatError(ExposureError, ValueError):
    """Raised when a notation cannot be parsed or a value is not positive."""

    error_code = "INVALID_FORMAT"
    default_message = "Invalid exposure value"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]
        super().__init__(message, details=details)
        self.field = field
        self.value = value

    def for_field(self, field: str) -> "InvalidFormatError":
        """Return a copy of this error attributed to a named input field."""
        return InvalidFormatError(
            f"{field}: {self.message}",
            field=field,
            value=self.value,
        )


class ScaleError(ExposureError):
    """Raised when a scale table is missing, empty or not strictly ordered."""

    error_code = "SCALE_ERROR"
    default_message = "Invalid exposure scale"
