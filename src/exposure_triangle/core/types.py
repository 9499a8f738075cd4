"""
Domain-specific types and enumerations for exposure calculations.
"""

from enum import Enum


class Axis(str, Enum):
    """The three sides of the exposure triangle."""

    SHUTTER_SPEED = "shutter_speed"
    APERTURE = "aperture"
    ISO = "iso"

    @property
    def label(self) -> str:
        """Human-readable axis name."""
        return {
            Axis.SHUTTER_SPEED: "shutter speed",
            Axis.APERTURE: "aperture",
            Axis.ISO: "ISO",
        }[self]


class Granularity(str, Enum):
    """How finely a camera subdivides each whole stop."""

    FULL = "full"
    HALF = "half"
    THIRD = "third"

    @property
    def step(self) -> float:
        """Spacing between adjacent settings, in stops."""
        return {
            Granularity.FULL: 1.0,
            Granularity.HALF: 0.5,
            Granularity.THIRD: 1.0 / 3.0,
        }[self]


class DiagnosticKind(str, Enum):
    """Non-fatal conditions reported alongside a solved exposure."""

    PARAMETER_LIMIT_EXCEEDED = "parameter_limit_exceeded"
    OVEREXPOSED = "overexposed"
    UNDEREXPOSED = "underexposed"
