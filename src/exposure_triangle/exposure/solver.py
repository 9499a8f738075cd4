"""
Reciprocity solver for the exposure triangle.

Given a reference exposure known to be correct and two of the three target
settings, compute the third so the exposure value is unchanged, optionally
shifted by an EV compensation.

Sign convention:
    Stops are light stops (positive = more light). The unknown axis must
    deliver ``ev_compensation - (known shift)`` light stops, so a positive
    compensation brightens the image whichever axis is solved. In f-number
    terms that means a wider aperture, i.e. aperture moves against the
    compensation while shutter and ISO move with it.
"""

import math
from collections.abc import Mapping
from typing import Optional, Union

from exposure_triangle.config import SolverSettings, get_settings
from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.core.logging import LogContext, get_logger
from exposure_triangle.core.types import Axis, Granularity
from exposure_triangle.exposure import notation
from exposure_triangle.exposure.models import Diagnostic, ExposureReport, ExposureSetting
from exposure_triangle.exposure.scales import ScaleSet, default_scales
from exposure_triangle.exposure.snapper import snap
from exposure_triangle.exposure.stops import apply_stops, exposure_value, stops_between

logger = get_logger(__name__)

# Slack for floating point noise in EV comparisons
EV_EPSILON = 1e-9

GranularityLike = Union[Granularity, str, None]


def parse_field(axis: Axis, text: str, field: str) -> float:
    """Parse a notation, attributing any format error to a named field."""
    try:
        return notation.parse(axis, text)
    except InvalidFormatError as e:
        raise e.for_field(field) from e


def _known_notation(axis: Axis, value: float, text: Optional[str]) -> str:
    # Canonical notation unless it would denote a different value; then the
    # caller's own text, or the exact decimal when there is none
    canonical = notation.format_value(axis, value)
    if math.isclose(notation.parse(axis, canonical), value, rel_tol=1e-9):
        return canonical
    if text is not None:
        return text.strip()
    return f"f/{value!r}" if axis is Axis.APERTURE else repr(value)


def _coerce_reference(reference: Union[ExposureSetting, Mapping]) -> ExposureSetting:
    if isinstance(reference, ExposureSetting):
        return reference
    if isinstance(reference, Mapping):
        try:
            return ExposureSetting(**reference)
        except (TypeError, ValueError) as e:
            raise InvalidFormatError(f"Invalid reference exposure: {e}", field="reference") from e
    raise InvalidFormatError("Reference exposure must be an ExposureSetting", field="reference", value=reference)


class ExposureSolver:
    """Solve shutter speed, aperture or ISO by reciprocity.

    Scales are injected rather than read from module state, so a solver can
    run against camera-specific or test tables.

    Example:
        >>> solver = ExposureSolver()
        >>> reference = ExposureSetting(shutter_speed="1/125", aperture="f/8", iso="100")
        >>> solver.solve_aperture(reference, "1/500", "100", Granularity.THIRD).value
        'f/4'
    """

    def __init__(
        self,
        scales: Optional[ScaleSet] = None,
        settings: Optional[SolverSettings] = None,
    ):
        self.scales = scales if scales is not None else default_scales()
        self.settings = settings or get_settings().solver

    def get_scale(self, axis: Axis, granularity: GranularityLike = None) -> tuple[str, ...]:
        """Get the notated settings available on an axis."""
        return self.scales.get_scale(Axis(axis), self._granularity(granularity)).entries

    def ev_envelope(self, granularity: GranularityLike = None) -> tuple[float, float]:
        """Lowest and highest EV the scales can express at a granularity.

        The lowest EV combines the slowest shutter, widest aperture and
        highest ISO; the highest EV the fastest shutter, narrowest aperture
        and lowest ISO.
        """
        granularity = self._granularity(granularity)
        shutter = self.scales.get_scale(Axis.SHUTTER_SPEED, granularity)
        aperture = self.scales.get_scale(Axis.APERTURE, granularity)
        iso = self.scales.get_scale(Axis.ISO, granularity)

        min_ev = exposure_value(shutter.maximum, aperture.minimum, iso.maximum)
        max_ev = exposure_value(shutter.minimum, aperture.maximum, iso.minimum)
        return min_ev, max_ev

    def solve_shutter_speed(
        self,
        reference: ExposureSetting,
        target_aperture: str,
        target_iso: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Solve for shutter speed given a target aperture and ISO."""
        return self.solve(
            Axis.SHUTTER_SPEED, reference, target_aperture, target_iso, granularity, ev_compensation
        )

    def solve_aperture(
        self,
        reference: ExposureSetting,
        target_shutter_speed: str,
        target_iso: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Solve for aperture given a target shutter speed and ISO."""
        return self.solve(
            Axis.APERTURE, reference, target_shutter_speed, target_iso, granularity, ev_compensation
        )

    def solve_iso(
        self,
        reference: ExposureSetting,
        target_shutter_speed: str,
        target_aperture: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Solve for ISO given a target shutter speed and aperture."""
        return self.solve(
            Axis.ISO, reference, target_shutter_speed, target_aperture, granularity, ev_compensation
        )

    def solve(
        self,
        axis: Axis,
        reference: ExposureSetting,
        first: str,
        second: str,
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
    ) -> ExposureReport:
        """Solve any axis from notated inputs.

        Args:
            axis: The axis to solve for
            reference: Exposure known to be correct
            first: Target value of the first remaining axis, in the order
                shutter speed, aperture, ISO
            second: Target value of the second remaining axis
            granularity: Scale granularity; defaults to the configured one
            ev_compensation: Stops to brighten (+) or darken (-) the result

        Returns:
            ExposureReport with the solved setting and any diagnostics

        Raises:
            InvalidFormatError: If any input cannot be parsed
        """
        axis = Axis(axis)
        reference = _coerce_reference(reference)

        reference_values = {
            a: parse_field(a, reference.notation_for(a), f"reference.{a.value}") for a in Axis
        }
        known_axes = [a for a in Axis if a is not axis]
        known_text = dict(zip(known_axes, (first, second)))
        known_values = {a: parse_field(a, text, f"target_{a.value}") for a, text in known_text.items()}

        return self.solve_values(
            axis, reference_values, known_values, granularity, ev_compensation, known_text
        )

    def solve_values(
        self,
        axis: Axis,
        reference: Mapping[Axis, float],
        known: Mapping[Axis, float],
        granularity: GranularityLike = None,
        ev_compensation: float = 0.0,
        known_text: Optional[Mapping[Axis, str]] = None,
    ) -> ExposureReport:
        """Solve an axis from numeric values.

        Known values are reported in canonical notation when that notation
        denotes the same value, and otherwise as given in ``known_text``, so
        the returned setting always reproduces the reported EV.

        Args:
            axis: The axis to solve for
            reference: Numeric reference value for every axis
            known: Numeric target values for the two other axes
            known_text: Notation the known values were parsed from

        Returns:
            ExposureReport with the solved setting and any diagnostics

        Raises:
            InvalidFormatError: If ev_compensation is not a finite number
        """
        axis = Axis(axis)
        if ev_compensation is None or not math.isfinite(ev_compensation):
            raise InvalidFormatError(
                f"EV compensation must be a finite number of stops, got {ev_compensation!r}",
                field="ev_compensation",
                value=ev_compensation,
            )
        known_text = known_text or {}
        granularity = self._granularity(granularity)

        with LogContext(operation=f"solve_{axis.value}", granularity=granularity.value):
            shift = sum(stops_between(a, reference[a], known[a]) for a in Axis if a is not axis)
            required = ev_compensation - shift
            ideal = apply_stops(axis, reference[axis], required)

            scale = self.scales.get_scale(axis, granularity)
            snapped = snap(scale, ideal, self.settings.tolerance_for(axis))

            diagnostics: list[Diagnostic] = []
            if snapped.limit is not None:
                diagnostics.append(snapped.limit)

            final = {a: known[a] for a in Axis if a is not axis}
            final[axis] = snapped.value

            ev = exposure_value(final[Axis.SHUTTER_SPEED], final[Axis.APERTURE], final[Axis.ISO])
            reference_ev = exposure_value(
                reference[Axis.SHUTTER_SPEED], reference[Axis.APERTURE], reference[Axis.ISO]
            )

            min_ev, max_ev = self.ev_envelope(granularity)
            if ev < min_ev - EV_EPSILON:
                diagnostics.append(Diagnostic.overexposed(min_ev - ev))
            elif ev > max_ev + EV_EPSILON:
                diagnostics.append(Diagnostic.underexposed(ev - max_ev))

            logger.debug(
                f"Solved {axis.label}: ideal={notation.format_value(axis, ideal)} "
                f"snapped={snapped.entry} shift={required:+.2f} stops"
            )
            for diagnostic in diagnostics:
                logger.warning(diagnostic.message, extra={"axis": axis.value})

            setting = ExposureSetting(
                **{
                    a.value: snapped.entry
                    if a is axis
                    else _known_notation(a, final[a], known_text.get(a))
                    for a in Axis
                }
            )

            return ExposureReport(
                setting=setting,
                solved_axis=axis,
                ideal_value=ideal,
                ev=ev,
                reference_ev=reference_ev,
                ev_compensation=ev_compensation,
                granularity=granularity,
                diagnostics=diagnostics,
            )

    def _granularity(self, granularity: GranularityLike) -> Granularity:
        if granularity is None:
            return self.settings.default_granularity
        return Granularity(granularity)


def solve_shutter_speed(
    reference: ExposureSetting,
    target_aperture: str,
    target_iso: str,
    granularity: GranularityLike = None,
    ev_compensation: float = 0.0,
) -> ExposureReport:
    """Solve shutter speed with the default scales."""
    return ExposureSolver().solve_shutter_speed(
        reference, target_aperture, target_iso, granularity, ev_compensation
    )


def solve_aperture(
    reference: ExposureSetting,
    target_shutter_speed: str,
    target_iso: str,
    granularity: GranularityLike = None,
    ev_compensation: float = 0.0,
) -> ExposureReport:
    """Solve aperture with the default scales."""
    return ExposureSolver().solve_aperture(
        reference, target_shutter_speed, target_iso, granularity, ev_compensation
    )


def solve_iso(
    reference: ExposureSetting,
    target_shutter_speed: str,
    target_aperture: str,
    granularity: GranularityLike = None,
    ev_compensation: float = 0.0,
) -> ExposureReport:
    """Solve ISO with the default scales."""
    return ExposureSolver().solve_iso(
        reference, target_shutter_speed, target_aperture, granularity, ev_compensation
    )


def get_scale(axis: Axis, granularity: GranularityLike = None) -> tuple[str, ...]:
    """Get a default scale as notated entries."""
    return ExposureSolver().get_scale(axis, granularity)
