"""
Exposure triangle engine.

Solve shutter speed, aperture or ISO by reciprocity against a reference
exposure, snap the result to real camera scales, and report limits:
- Notation codec for "1/125", '30"', "f/2.8" and "400"
- Stop arithmetic per axis
- Scale tables at full, half and third stops
- Reciprocity solver and service wrapper
- Light meter helpers
"""

from exposure_triangle.exposure.notation import (
    format_aperture,
    format_iso,
    format_shutter_speed,
    format_value,
    parse,
    parse_aperture,
    parse_iso,
    parse_shutter_speed,
)
from exposure_triangle.exposure.stops import (
    apply_stops,
    exposure_value,
    stops_between,
)
from exposure_triangle.exposure.scales import (
    DEFAULT_TABLES,
    Scale,
    ScaleSet,
    default_scales,
)
from exposure_triangle.exposure.models import (
    Diagnostic,
    ExposureReport,
    ExposureSetting,
)
from exposure_triangle.exposure.snapper import (
    SnapResult,
    nearest,
    snap,
)
from exposure_triangle.exposure.solver import (
    ExposureSolver,
    get_scale,
    solve_aperture,
    solve_iso,
    solve_shutter_speed,
)
from exposure_triangle.exposure.service import (
    CalculationRequest,
    ExposureCalculatorService,
)
from exposure_triangle.exposure.meter import (
    LightMeter,
    ev_from_lux,
    ev_from_luminance,
    round_ev,
)

__all__ = [
    # Notation
    "parse",
    "parse_shutter_speed",
    "parse_aperture",
    "parse_iso",
    "format_value",
    "format_shutter_speed",
    "format_aperture",
    "format_iso",
    # Stops
    "stops_between",
    "apply_stops",
    "exposure_value",
    # Scales
    "Scale",
    "ScaleSet",
    "DEFAULT_TABLES",
    "default_scales",
    "SnapResult",
    "nearest",
    "snap",
    # Models
    "ExposureSetting",
    "ExposureReport",
    "Diagnostic",
    # Solver
    "ExposureSolver",
    "solve_shutter_speed",
    "solve_aperture",
    "solve_iso",
    "get_scale",
    # Service
    "CalculationRequest",
    "ExposureCalculatorService",
    # Meter
    "LightMeter",
    "ev_from_lux",
    "ev_from_luminance",
    "round_ev",
]
