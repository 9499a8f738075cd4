"""
Core types, exceptions and infrastructure for the exposure engine.
"""

from exposure_triangle.core.exceptions import (
    ExposureError,
    InvalidFormatError,
    ScaleError,
)
from exposure_triangle.core.types import (
    Axis,
    DiagnosticKind,
    Granularity,
)

__all__ = [
    # Exceptions
    "ExposureError",
    "InvalidFormatError",
    "ScaleError",
    # Types
    "Axis",
    "DiagnosticKind",
    "Granularity",
]
