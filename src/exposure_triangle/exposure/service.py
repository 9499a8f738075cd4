"""
Exposure calculator service.

Wraps the solver in the service lifecycle: request validation, logging
context and a ServiceResult instead of exceptions.
"""

import math
from typing import Optional

from pydantic import BaseModel, Field

from exposure_triangle.core.base_service import BaseService, ServiceResult, ValidationResult
from exposure_triangle.core.exceptions import ExposureError
from exposure_triangle.core.types import Axis, Granularity
from exposure_triangle.exposure.models import ExposureReport, ExposureSetting
from exposure_triangle.exposure.solver import ExposureSolver


class CalculationRequest(BaseModel):
    """A request to solve one side of the exposure triangle."""

    reference: ExposureSetting
    solve_for: Axis
    target_shutter_speed: Optional[str] = Field(default=None)
    target_aperture: Optional[str] = Field(default=None)
    target_iso: Optional[str] = Field(default=None)
    granularity: Optional[Granularity] = Field(default=None)
    ev_compensation: float = Field(default=0.0)

    def target_for(self, axis: Axis) -> Optional[str]:
        return getattr(self, f"target_{axis.value}")

    @property
    def known_axes(self) -> list[Axis]:
        return [a for a in Axis if a is not self.solve_for]


class ExposureCalculatorService(BaseService[CalculationRequest, ExposureReport]):
    """Service entry point for exposure calculations.

    Example:
        >>> service = ExposureCalculatorService()
        >>> result = service.execute(CalculationRequest(
        ...     reference=ExposureSetting(shutter_speed="1/60", aperture="f/5.6", iso="400"),
        ...     solve_for=Axis.ISO,
        ...     target_shutter_speed="1/250",
        ...     target_aperture="f/5.6",
        ...     granularity=Granularity.FULL,
        ... ))
        >>> result.unwrap().value
        '1600'
    """

    config_key = "solver"

    def __init__(self, solver: Optional[ExposureSolver] = None):
        super().__init__()
        self.solver = solver or ExposureSolver(settings=self.config)

    def validate_input(self, data: CalculationRequest) -> ValidationResult:
        errors = []
        warnings = []

        for axis in Axis:
            if not data.reference.notation_for(axis).strip():
                errors.append(f"Base {axis.label} is required")

        for axis in data.known_axes:
            if not (data.target_for(axis) or "").strip():
                errors.append(f"Target {axis.label} is required")

        limit = self.config.max_ev_compensation
        if not math.isfinite(data.ev_compensation) or abs(data.ev_compensation) > limit:
            errors.append(f"EV compensation must be between -{limit:g} and +{limit:g} stops")

        if data.target_for(data.solve_for):
            warnings.append(f"Ignoring target {data.solve_for.label}; it is being solved for")

        return ValidationResult.from_messages(errors, warnings)

    def process(self, data: CalculationRequest) -> ExposureReport:
        first, second = (data.target_for(axis) for axis in data.known_axes)
        return self.solver.solve(
            data.solve_for,
            data.reference,
            first,
            second,
            data.granularity,
            data.ev_compensation,
        )

    def get_shutter_speeds(self, granularity: Granularity) -> ServiceResult[tuple[str, ...]]:
        """Available shutter speeds at a granularity."""
        return self._get_scale(Axis.SHUTTER_SPEED, granularity)

    def get_apertures(self, granularity: Granularity) -> ServiceResult[tuple[str, ...]]:
        """Available apertures at a granularity."""
        return self._get_scale(Axis.APERTURE, granularity)

    def get_isos(self, granularity: Granularity) -> ServiceResult[tuple[str, ...]]:
        """Available ISOs at a granularity."""
        return self._get_scale(Axis.ISO, granularity)

    def _get_scale(self, axis: Axis, granularity: Granularity) -> ServiceResult[tuple[str, ...]]:
        try:
            entries = self.solver.get_scale(axis, granularity)
        except ExposureError as e:
            self.logger.warning(f"No {axis.label} scale: {e.message}")
            return ServiceResult.from_error(e)
        except ValueError as e:
            self.logger.warning(f"Unknown granularity {granularity!r} for {axis.label} scale")
            return ServiceResult.fail(str(e), error_type=type(e).__name__)
        return ServiceResult.ok(entries)
