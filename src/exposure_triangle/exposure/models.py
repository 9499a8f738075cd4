"""
Data models for exposure calculations.

All models use Pydantic for validation and serialization.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from exposure_triangle.core.types import Axis, DiagnosticKind, Granularity
from exposure_triangle.exposure import notation
from exposure_triangle.exposure.stops import exposure_value


class ExposureSetting(BaseModel):
    """A shutter speed / aperture / ISO triple in camera notation.

    Notations are kept as given and parsed on access, so a malformed value
    surfaces as InvalidFormatError from whichever operation reads it.
    """

    model_config = ConfigDict(frozen=True)

    shutter_speed: str = Field(..., description='Shutter notation, e.g. "1/125" or \'30"\'')
    aperture: str = Field(..., description='Aperture notation, e.g. "f/2.8"')
    iso: str = Field(..., description='ISO notation, e.g. "400"')

    @classmethod
    def from_values(cls, seconds: float, f_number: float, iso: float) -> "ExposureSetting":
        """Build a setting from numeric values, formatted in camera notation."""
        return cls(
            shutter_speed=notation.format_shutter_speed(seconds),
            aperture=notation.format_aperture(f_number),
            iso=notation.format_iso(iso),
        )

    @property
    def shutter_seconds(self) -> float:
        """Shutter speed in seconds.

        Raises:
            InvalidFormatError: If the shutter notation is malformed
        """
        return notation.parse_shutter_speed(self.shutter_speed)

    @property
    def f_number(self) -> float:
        """Aperture as an f-number (8.0 for "f/8")."""
        return notation.parse_aperture(self.aperture)

    @property
    def iso_value(self) -> float:
        """ISO as a number."""
        return notation.parse_iso(self.iso)

    @property
    def ev(self) -> float:
        """ISO-adjusted exposure value of this triple."""
        return exposure_value(self.shutter_seconds, self.f_number, self.iso_value)

    def notation_for(self, axis: Axis) -> str:
        """Notation stored for an axis, exactly as given."""
        return getattr(self, Axis(axis).value)

    def value_for(self, axis: Axis) -> float:
        """Parse the notation for an axis into its numeric value.

        Args:
            axis: Axis or axis name ("shutter_speed", "aperture", "iso")

        Returns:
            Seconds, f-number or ISO number

        Raises:
            InvalidFormatError: If the stored notation is malformed
        """
        return notation.parse(Axis(axis), self.notation_for(axis))

    def __str__(self) -> str:
        return f"{self.shutter_speed} @ {self.aperture}, ISO {self.iso}"


class Diagnostic(BaseModel):
    """A non-fatal condition attached to a solved exposure."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    stops: float = Field(default=0.0, ge=0.0, description="Magnitude in stops")
    axis: Optional[Axis] = Field(default=None)
    requested: Optional[str] = Field(default=None, description="Ideal, unsnapped value")
    nearest: Optional[str] = Field(default=None, description="Nearest achievable setting")

    @classmethod
    def parameter_limit_exceeded(
        cls,
        axis: Axis,
        requested: str,
        nearest: str,
        stops: float,
    ) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.PARAMETER_LIMIT_EXCEEDED,
            axis=axis,
            requested=requested,
            nearest=nearest,
            stops=abs(stops),
        )

    @classmethod
    def overexposed(cls, stops: float) -> "Diagnostic":
        return cls(kind=DiagnosticKind.OVEREXPOSED, stops=abs(stops))

    @classmethod
    def underexposed(cls, stops: float) -> "Diagnostic":
        return cls(kind=DiagnosticKind.UNDEREXPOSED, stops=abs(stops))

    @property
    def message(self) -> str:
        if self.kind is DiagnosticKind.PARAMETER_LIMIT_EXCEEDED:
            label = self.axis.label if self.axis else "value"
            return (
                f"Required {label} {self.requested} is beyond camera limits; "
                f"using {self.nearest} ({self.stops:.1f} stops off)"
            )
        if self.kind is DiagnosticKind.OVEREXPOSED:
            return f"Image will be overexposed by {self.stops:.1f} stops"
        return f"Image will be underexposed by {self.stops:.1f} stops"


class ExposureReport(BaseModel):
    """Result of solving one side of the exposure triangle."""

    setting: ExposureSetting
    solved_axis: Axis
    ideal_value: float = Field(..., gt=0.0, description="Unsnapped computed value")
    ev: float = Field(..., description="EV of the returned setting")
    reference_ev: float = Field(..., description="EV of the reference setting")
    ev_compensation: float = Field(default=0.0)
    granularity: Granularity
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def value(self) -> str:
        """The solved setting in camera notation."""
        return self.setting.notation_for(self.solved_axis)

    @property
    def ideal_notation(self) -> str:
        """The unsnapped computed value in camera notation."""
        return notation.format_value(self.solved_axis, self.ideal_value)

    @property
    def has_warnings(self) -> bool:
        return bool(self.diagnostics)

    @property
    def limit_exceeded(self) -> bool:
        return bool(self.diagnostics_of(DiagnosticKind.PARAMETER_LIMIT_EXCEEDED))

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "shutter_speed": self.setting.shutter_speed,
            "aperture": self.setting.aperture,
            "iso": self.setting.iso,
            "solved": {
                "axis": self.solved_axis.value,
                "value": self.value,
                "ideal": self.ideal_notation,
            },
            "ev": round(self.ev, 2),
            "reference_ev": round(self.reference_ev, 2),
            "ev_compensation": self.ev_compensation,
            "granularity": self.granularity.value,
            "diagnostics": [
                {
                    "kind": d.kind.value,
                    "message": d.message,
                    "stops": round(d.stops, 2),
                    "axis": d.axis.value if d.axis else None,
                    "requested": d.requested,
                    "nearest": d.nearest,
                }
                for d in self.diagnostics
            ],
        }
