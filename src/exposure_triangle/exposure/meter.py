"""
Light meter helpers.

Turn a light reading into an exposure value and solve settings from it:

- Incident meters read illuminance (lux): EV100 = log2(E * 100 / C)
- Reflected meters read luminance (cd/m^2): EV100 = log2(L * 100 / K)

EV100 is the exposure value at ISO 100; the solver handles other ISOs.
"""

import math
from typing import Optional

from exposure_triangle.config import get_settings
from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.core.types import Axis, Granularity
from exposure_triangle.exposure.models import ExposureReport
from exposure_triangle.exposure.solver import ExposureSolver, GranularityLike, parse_field
from exposure_triangle.exposure.stops import BASE_ISO


def ev_from_lux(lux: float, calibration: Optional[float] = None) -> float:
    """EV at ISO 100 for an incident reading in lux.

    Args:
        lux: Illuminance at the subject
        calibration: Incident meter constant C; defaults to the configured one

    Returns:
        EV100
    """
    if lux is None or lux <= 0:
        raise InvalidFormatError(f"Illuminance must be positive, got {lux!r}", field="lux", value=lux)
    constant = calibration or get_settings().meter.incident_calibration
    return math.log2(lux * BASE_ISO / constant)


def ev_from_luminance(luminance: float, calibration: Optional[float] = None) -> float:
    """EV at ISO 100 for a reflected reading in cd/m^2."""
    if luminance is None or luminance <= 0:
        raise InvalidFormatError(
            f"Luminance must be positive, got {luminance!r}", field="luminance", value=luminance
        )
    constant = calibration or get_settings().meter.reflected_calibration
    return math.log2(luminance * BASE_ISO / constant)


def round_ev(ev: float, granularity: Granularity) -> float:
    """Round an EV to the nearest step the camera can dial in."""
    step = Granularity(granularity).step
    return round(ev / step) * step


class LightMeter:
    """Solve camera settings from a metered EV.

    A metered EV100 is equivalent to a reference exposure of f/1 at ISO 100
    with a shutter time of 2^-EV seconds, which the solver then trades
    against the chosen settings.

    Example:
        >>> meter = LightMeter()
        >>> meter.shutter_for_ev(15, "f/16", "100", Granularity.FULL).value
        '1/125'
    """

    def __init__(self, solver: Optional[ExposureSolver] = None):
        self.solver = solver or ExposureSolver()

    @staticmethod
    def reference_for_ev(ev100: float) -> dict[Axis, float]:
        """Numeric reference triple with the given EV100."""
        return {
            Axis.SHUTTER_SPEED: 2.0 ** (-ev100),
            Axis.APERTURE: 1.0,
            Axis.ISO: BASE_ISO,
        }

    def shutter_for_ev(
        self,
        ev100: float,
        aperture: str,
        iso: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Shutter speed for a metered EV at a chosen aperture and ISO."""
        known = {
            Axis.APERTURE: parse_field(Axis.APERTURE, aperture, "aperture"),
            Axis.ISO: parse_field(Axis.ISO, iso, "iso"),
        }
        return self.solver.solve_values(
            Axis.SHUTTER_SPEED,
            self.reference_for_ev(ev100),
            known,
            granularity,
            ev_compensation,
            known_text={Axis.APERTURE: aperture, Axis.ISO: iso},
        )

    def aperture_for_ev(
        self,
        ev100: float,
        shutter_speed: str,
        iso: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Aperture for a metered EV at a chosen shutter speed and ISO."""
        known = {
            Axis.SHUTTER_SPEED: parse_field(Axis.SHUTTER_SPEED, shutter_speed, "shutter_speed"),
            Axis.ISO: parse_field(Axis.ISO, iso, "iso"),
        }
        return self.solver.solve_values(
            Axis.APERTURE,
            self.reference_for_ev(ev100),
            known,
            granularity,
            ev_compensation,
            known_text={Axis.SHUTTER_SPEED: shutter_speed, Axis.ISO: iso},
        )
