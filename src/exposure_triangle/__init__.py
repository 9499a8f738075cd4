"""
Exposure Triangle - reciprocity-based exposure calculator.

Given a reference exposure known to be correct and two of shutter speed,
aperture and ISO, compute the third so the image brightness is preserved
(optionally shifted by EV compensation), snapped to the settings a real
camera offers.
"""

__version__ = "1.0.0"

from exposure_triangle.core.types import (
    Axis,
    DiagnosticKind,
    Granularity,
)
from exposure_triangle.core.exceptions import (
    ExposureError,
    InvalidFormatError,
    ScaleError,
)

# Configuration
from exposure_triangle.config import (
    Settings,
    configure,
    get_settings,
)

# Exposure engine
from exposure_triangle.exposure import (
    CalculationRequest,
    Diagnostic,
    ExposureCalculatorService,
    ExposureReport,
    ExposureSetting,
    ExposureSolver,
    LightMeter,
    ScaleSet,
    get_scale,
    solve_aperture,
    solve_iso,
    solve_shutter_speed,
)

__all__ = [
    "__version__",
    # Types
    "Axis",
    "DiagnosticKind",
    "Granularity",
    # Exceptions
    "ExposureError",
    "InvalidFormatError",
    "ScaleError",
    # Configuration
    "Settings",
    "configure",
    "get_settings",
    # Engine
    "CalculationRequest",
    "Diagnostic",
    "ExposureCalculatorService",
    "ExposureReport",
    "ExposureSetting",
    "ExposureSolver",
    "LightMeter",
    "ScaleSet",
    "get_scale",
    "solve_aperture",
    "solve_iso",
    "solve_shutter_speed",
]
