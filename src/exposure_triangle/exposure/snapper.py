"""
Snap continuous values onto camera scales.

Distances are measured in log space, |log2(entry / target)|, because
optical steps are multiplicative. Ties go to the entry that comes first in
scale order.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.exposure import notation
from exposure_triangle.exposure.models import Diagnostic
from exposure_triangle.exposure.scales import Scale
from exposure_triangle.exposure.stops import stops_between


@dataclass(frozen=True)
class SnapResult:
    """Outcome of snapping one value onto a scale."""

    entry: str
    value: float
    target: float
    error_stops: float
    limit: Optional[Diagnostic] = None

    @property
    def substituted(self) -> bool:
        """True when the target lay outside the scale and a limit was used."""
        return self.limit is not None


def nearest_index(scale: Scale, target: float) -> int:
    """Index of the scale entry closest to target in log space."""
    if not target > 0 or not np.isfinite(target):
        raise InvalidFormatError(f"Cannot snap non-positive value {target!r}", value=target)
    with np.errstate(over="ignore", under="ignore", divide="ignore"):
        distances = np.abs(np.log2(scale.values / target))
    if not np.all(np.isfinite(distances)):
        # Ratio left the float range; compare logs instead
        distances = np.abs(np.log2(scale.values) - np.log2(target))
    # argmin returns the first minimum, which gives the scale-order tie break
    return int(np.argmin(distances))


def nearest(scale: Scale, target: float) -> str:
    """Scale entry closest to target."""
    return scale.entries[nearest_index(scale, target)]


def is_beyond_limits(scale: Scale, target: float, tolerance: float = 1.0) -> bool:
    """Whether target lies outside the scale range by more than tolerance."""
    return target > scale.maximum * tolerance or target < scale.minimum / tolerance


def snap(scale: Scale, target: float, tolerance: float = 1.0) -> SnapResult:
    """Snap target to the nearest entry and check the scale limits.

    Args:
        scale: Scale to snap onto
        target: Continuous value in the scale's axis units
        tolerance: Ratio by which target may pass an extreme before a
            limit diagnostic is attached

    Returns:
        SnapResult, carrying a PARAMETER_LIMIT_EXCEEDED diagnostic when
        target is out of range
    """
    index = nearest_index(scale, target)
    entry = scale.entries[index]
    value = scale.value_of(index)
    error = stops_between(scale.axis, target, value)

    limit = None
    if is_beyond_limits(scale, target, tolerance):
        limit = Diagnostic.parameter_limit_exceeded(
            axis=scale.axis,
            requested=notation.format_value(scale.axis, target),
            nearest=entry,
            stops=error,
        )

    return SnapResult(
        entry=entry,
        value=value,
        target=target,
        error_stops=abs(error),
        limit=limit,
    )
