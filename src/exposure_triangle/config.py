"""
Configuration management for the exposure engine.

Uses pydantic-settings for environment-based configuration with validation.
All settings can be overridden via environment variables with EXPOSURE_ prefix.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from exposure_triangle.core.types import Axis, Granularity

load_dotenv()


class SolverSettings(BaseSettings):
    """Settings for the reciprocity solver and scale snapping."""

    model_config = SettingsConfigDict(env_prefix="EXPOSURE_SOLVER_")

    default_granularity: Granularity = Field(default=Granularity.THIRD)

    # Ratio by which an ideal value may overshoot a scale extreme before
    # it is reported as a limit breach
    shutter_limit_tolerance: float = Field(default=1.5, ge=1.0, le=4.0)
    aperture_limit_tolerance: float = Field(default=1.2, ge=1.0, le=4.0)
    iso_limit_tolerance: float = Field(default=1.5, ge=1.0, le=4.0)

    max_ev_compensation: float = Field(
        default=5.0,
        ge=0.0,
        le=10.0,
        description="Largest accepted EV compensation, in stops either way",
    )

    def tolerance_for(self, axis: Axis) -> float:
        """Get the limit tolerance factor for an axis."""
        return {
            Axis.SHUTTER_SPEED: self.shutter_limit_tolerance,
            Axis.APERTURE: self.aperture_limit_tolerance,
            Axis.ISO: self.iso_limit_tolerance,
        }[axis]


class MeterSettings(BaseSettings):
    """Settings for light meter calibration constants."""

    model_config = SettingsConfigDict(env_prefix="EXPOSURE_METER_")

    # Incident meter constant C (lux based)
    incident_calibration: float = Field(default=250.0, gt=0.0)
    # Reflected meter constant K (cd/m^2 based)
    reflected_calibration: float = Field(default=12.5, gt=0.0)


class Settings(BaseSettings):
    """Top-level settings: logging plus the solver and meter sections."""

    model_config = SettingsConfigDict(
        env_prefix="EXPOSURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Exposure Triangle")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    solver: SolverSettings = Field(default_factory=SolverSettings)
    meter: MeterSettings = Field(default_factory=MeterSettings)


# Built from the environment on first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Settings shared by the solver, services and logging."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Optional[Settings] = None, **overrides) -> Settings:
    """Replace the shared settings.

    Pass a ready Settings instance, or keyword overrides on top of the
    environment (``configure(log_level="DEBUG")``). With neither, the
    settings are re-read from the environment. Solvers and services built
    earlier keep the settings they were created with.
    """
    global _settings
    _settings = settings if settings is not None else Settings(**overrides)
    return _settings
