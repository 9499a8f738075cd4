"""
Stop arithmetic for the exposure triangle.

One stop is a factor of 2 in the light reaching the sensor, whichever axis
carries it. Deltas here are "light stops": positive means more light.

- Shutter speed: doubling the time adds one stop
- ISO: doubling the sensitivity adds one stop
- Aperture: light scales with aperture area (~ 1/N^2), so the f-number
  changes by sqrt(2) per stop and a higher f-number removes light
"""

import math

from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.core.types import Axis

SQRT2 = math.sqrt(2.0)

# Reference sensitivity for EV figures
BASE_ISO = 100.0

# Computed values are clamped to the normal float range, 2^-1022 .. 2^1023
MIN_LOG2 = -1022.0
MAX_LOG2 = 1023.0


def _check_positive(*values: float) -> None:
    for value in values:
        if value is None or value <= 0 or not math.isfinite(value):
            raise InvalidFormatError(f"Exposure values must be positive, got {value!r}", value=value)


def _log2_ratio(numerator: float, denominator: float) -> float:
    ratio = numerator / denominator
    if ratio == 0 or not math.isfinite(ratio):
        # Values at opposite ends of the float range
        return math.log2(numerator) - math.log2(denominator)
    return math.log2(ratio)


def shutter_stops(base: float, target: float) -> float:
    """Stops of light gained by moving from base to target seconds."""
    _check_positive(base, target)
    return _log2_ratio(target, base)


def aperture_stops(base: float, target: float) -> float:
    """Stops of light gained by moving from base to target f-number."""
    _check_positive(base, target)
    return 2.0 * _log2_ratio(base, target)


def iso_stops(base: float, target: float) -> float:
    """Stops of brightness gained by moving from base to target ISO."""
    _check_positive(base, target)
    return _log2_ratio(target, base)


_STOP_FUNCTIONS = {
    Axis.SHUTTER_SPEED: shutter_stops,
    Axis.APERTURE: aperture_stops,
    Axis.ISO: iso_stops,
}


def stops_between(axis: Axis, base: float, target: float) -> float:
    """Signed stop delta from base to target on an axis."""
    return _STOP_FUNCTIONS[axis](base, target)


def apply_stops(axis: Axis, base: float, stops: float) -> float:
    """Move a base value by a number of light stops.

    Inverse of stops_between: apply_stops(a, b, stops_between(a, b, t)) == t.
    The result is computed in log space and clamped to the normal float
    range, so an extreme shift yields a tiny or huge value instead of 0 or
    an OverflowError.

    Raises:
        InvalidFormatError: If base is not positive or stops is not finite
    """
    _check_positive(base)
    if stops is None or not math.isfinite(stops):
        raise InvalidFormatError(f"Stop shift must be finite, got {stops!r}", field="stops", value=stops)

    # One light stop moves the f-number by half a power of two
    exponent = math.log2(base) + (-stops / 2.0 if axis is Axis.APERTURE else stops)
    return 2.0 ** min(max(exponent, MIN_LOG2), MAX_LOG2)


def exposure_value(seconds: float, f_number: float, iso: float) -> float:
    """ISO-adjusted exposure value of a setting triple.

    EV = log2(N^2 / t) - log2(S / 100). Higher EV admits less light.
    """
    _check_positive(seconds, f_number, iso)
    return 2.0 * math.log2(f_number) - math.log2(seconds) - (math.log2(iso) - math.log2(BASE_ISO))
