"""
Shared fixtures for exposure triangle tests.
"""

import pytest

from exposure_triangle.config import configure
from exposure_triangle.core.types import Axis, Granularity
from exposure_triangle.exposure.models import ExposureSetting
from exposure_triangle.exposure.scales import DEFAULT_TABLES, ScaleSet
from exposure_triangle.exposure.solver import ExposureSolver


@pytest.fixture(autouse=True)
def reset_settings():
    """Give every test fresh global settings."""
    configure()
    yield
    configure()


@pytest.fixture
def solver():
    """Solver over the default camera scales."""
    return ExposureSolver()


@pytest.fixture
def sunny_reference():
    """Typical daylight exposure: 1/125 at f/8, ISO 100."""
    return ExposureSetting(shutter_speed="1/125", aperture="f/8", iso="100")


@pytest.fixture
def indoor_reference():
    """Typical indoor exposure: 1/60 at f/5.6, ISO 400."""
    return ExposureSetting(shutter_speed="1/60", aperture="f/5.6", iso="400")


@pytest.fixture
def night_reference():
    """Long exposure at the slow end of the shutter scale."""
    return ExposureSetting(shutter_speed='30"', aperture="f/8", iso="100")


@pytest.fixture
def short_shutter_scales():
    """Default scales with the full-stop shutter range cut to 1/4000 - 1/30."""
    tables = dict(DEFAULT_TABLES)
    tables[(Axis.SHUTTER_SPEED, Granularity.FULL)] = (
        "1/4000", "1/2000", "1/1000", "1/500", "1/250", "1/125", "1/60", "1/30",
    )
    return ScaleSet.from_tables(tables)
