"""
Service base for the exposure engine.

A service validates a pydantic request, processes it, and hands back a
ServiceResult instead of raising. Domain errors (ExposureError) become failed
results carrying the error's class name and details; validation warnings ride
along on successful results.

Usage:
    class MeterService(BaseService[MeterRequest, ExposureReport]):
        config_key = "meter"

        def validate_input(self, data: MeterRequest) -> ValidationResult:
            errors = [] if data.lux > 0 else ["Illuminance must be positive"]
            return ValidationResult.from_messages(errors)

        def process(self, data: MeterRequest) -> ExposureReport:
            ...
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from exposure_triangle.config import get_settings
from exposure_triangle.core.exceptions import ExposureError
from exposure_triangle.core.logging import LogContext, get_logger

TInput = TypeVar("TInput", bound=BaseModel)
TOutput = TypeVar("TOutput")

VALIDATION_ERROR = "ValidationError"


@dataclass
class ValidationResult:
    """Outcome of checking a request before it is processed.

    Attributes:
        is_valid: False when any error was found.
        errors: Messages that block processing.
        warnings: Messages reported but not blocking.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_messages(
        cls, errors: Iterable[str] = (), warnings: Iterable[str] = ()
    ) -> "ValidationResult":
        errors = list(errors)
        return cls(is_valid=not errors, errors=errors, warnings=list(warnings))

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass
class ServiceResult(Generic[TOutput]):
    """Value or error from a service call.

    Attributes:
        success: Whether the call produced data.
        data: The output when successful.
        error: Human-readable error when failed.
        error_type: ``"ValidationError"`` or the raised exception's class name.
        warnings: Non-blocking validation messages.
        duration_seconds: Wall time spent in the call.
        metadata: Extra detail, e.g. the offending ``field`` of a format error.
    """

    success: bool
    data: TOutput | None = None
    error: str | None = None
    error_type: str | None = None
    warnings: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: TOutput, duration: float = 0.0, **metadata: Any) -> "ServiceResult[TOutput]":
        return cls(success=True, data=data, duration_seconds=duration, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        error_type: str | None = None,
        duration: float = 0.0,
        **metadata: Any,
    ) -> "ServiceResult[TOutput]":
        return cls(
            success=False,
            error=error,
            error_type=error_type,
            duration_seconds=duration,
            metadata=metadata,
        )

    @classmethod
    def from_error(cls, error: ExposureError, duration: float = 0.0) -> "ServiceResult[TOutput]":
        """Failed result describing a domain error."""
        return cls.fail(
            error.message,
            error_type=type(error).__name__,
            duration=duration,
            error_code=error.error_code,
            **error.details,
        )

    def unwrap(self) -> TOutput:
        """Return the data.

        Raises:
            RuntimeError: If the call failed.
        """
        if not self.success or self.data is None:
            raise RuntimeError(f"Operation failed: {self.error}")
        return self.data

    def unwrap_or(self, default: TOutput) -> TOutput:
        return self.data if self.success and self.data is not None else default


class BaseService(ABC, Generic[TInput, TOutput]):
    """Validate, process and time a request.

    Subclasses implement validate_input() and process(), and may set
    ``config_key`` to the name of a Settings section (``"solver"``,
    ``"meter"``) exposed as ``self.config``.
    """

    config_key: str | None = None

    def __init__(self, config_key: str | None = None):
        key = config_key or self.config_key
        self._settings = get_settings()
        self._config = getattr(self._settings, key) if key else self._settings
        self._logger = get_logger(type(self).__module__)

    @property
    def settings(self) -> Any:
        return self._settings

    @property
    def config(self) -> Any:
        return self._config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @abstractmethod
    def validate_input(self, data: TInput) -> ValidationResult:
        """Check a request before processing."""

    @abstractmethod
    def process(self, data: TInput) -> TOutput:
        """Handle a request that passed validation."""

    def execute(self, data: TInput, **context: Any) -> ServiceResult[TOutput]:
        """Run validation and processing, returning a ServiceResult.

        ExposureError is logged as a warning and returned as a failed
        result; any other exception is logged with its traceback and also
        returned as a failed result.

        Args:
            data: The request.
            **context: Extra LogContext values for the duration of the call.
        """
        service = type(self).__name__
        start = time.perf_counter()

        with LogContext(service=service, **context):
            validation = self.validate_input(data)
            for warning in validation.warnings:
                self.logger.warning(warning)

            if not validation:
                message = "; ".join(validation.errors)
                self.logger.error(f"Rejected {type(data).__name__}: {message}")
                result = ServiceResult.fail(
                    message,
                    error_type=VALIDATION_ERROR,
                    duration=time.perf_counter() - start,
                    validation_errors=validation.errors,
                )
                result.warnings = validation.warnings
                return result

            try:
                output = self.process(data)
            except ExposureError as e:
                duration = time.perf_counter() - start
                self.logger.warning(
                    f"{e.error_code}: {e.message}",
                    extra={"error_type": type(e).__name__, "duration_seconds": duration},
                )
                result = ServiceResult.from_error(e, duration)
            except Exception as e:
                duration = time.perf_counter() - start
                self.logger.exception(
                    f"{service} failed: {e}",
                    extra={"error_type": type(e).__name__, "duration_seconds": duration},
                )
                result = ServiceResult.fail(str(e), error_type=type(e).__name__, duration=duration)
            else:
                duration = time.perf_counter() - start
                self.logger.debug(
                    f"{service} finished in {duration * 1000:.1f} ms",
                    extra={"duration_seconds": duration},
                )
                result = ServiceResult.ok(output, duration)

            result.warnings = validation.warnings
            return result

    def __call__(self, data: TInput) -> TOutput:
        """Execute and return the output, raising on failure.

        Raises:
            ValueError: If validation failed.
            RuntimeError: If processing failed.
        """
        result = self.execute(data)
        if result.success:
            return result.unwrap()
        if result.error_type == VALIDATION_ERROR:
            raise ValueError(result.error)
        raise RuntimeError(result.error)
