"""
Camera setting scales.

Each scale is the ordered list of settings a camera offers on one axis at one
granularity (full, half or third stops). All scales run from the smallest to
the largest numeric value: fastest shutter to slowest, widest aperture to
narrowest, lowest ISO to highest.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from exposure_triangle.core.exceptions import InvalidFormatError, ScaleError
from exposure_triangle.core.types import Axis, Granularity
from exposure_triangle.exposure import notation

SHUTTER_SPEEDS_FULL = (
    "1/8000", "1/4000", "1/2000", "1/1000", "1/500", "1/250", "1/125", "1/60",
    "1/30", "1/15", "1/8", "1/4", "1/2", '1"', '2"', '4"', '8"', '15"', '30"',
)

SHUTTER_SPEEDS_HALF = (
    "1/8000", "1/6000", "1/4000", "1/3000", "1/2000", "1/1500", "1/1000",
    "1/750", "1/500", "1/350", "1/250", "1/180", "1/125", "1/90", "1/60",
    "1/45", "1/30", "1/20", "1/15", "1/10", "1/8", "1/6", "1/4", "1/3", "1/2",
    "1/1.5", '1"', '1.5"', '2"', '3"', '4"', '6"', '8"', '10"', '15"', '20"',
    '30"',
)

SHUTTER_SPEEDS_THIRD = (
    "1/8000", "1/6400", "1/5000", "1/4000", "1/3200", "1/2500", "1/2000",
    "1/1600", "1/1250", "1/1000", "1/800", "1/640", "1/500", "1/400", "1/320",
    "1/250", "1/200", "1/160", "1/125", "1/100", "1/80", "1/60", "1/50",
    "1/40", "1/30", "1/25", "1/20", "1/15", "1/13", "1/10", "1/8", "1/6",
    "1/5", "1/4", "1/3", "1/2.5", "1/2", "1/1.6", "1/1.3", '1"', '1.3"',
    '1.6"', '2"', '2.5"', '3.2"', '4"', '5"', '6"', '8"', '10"', '13"', '15"',
    '20"', '25"', '30"',
)

APERTURES_FULL = (
    "f/1", "f/1.4", "f/2", "f/2.8", "f/4", "f/5.6", "f/8", "f/11", "f/16",
    "f/22", "f/32", "f/45", "f/64",
)

APERTURES_HALF = (
    "f/1", "f/1.2", "f/1.4", "f/1.7", "f/2", "f/2.4", "f/2.8", "f/3.3", "f/4",
    "f/4.8", "f/5.6", "f/6.7", "f/8", "f/9.5", "f/11", "f/13", "f/16", "f/19",
    "f/22", "f/27", "f/32", "f/38", "f/45", "f/54", "f/64",
)

APERTURES_THIRD = (
    "f/1", "f/1.1", "f/1.2", "f/1.4", "f/1.6", "f/1.8", "f/2", "f/2.2",
    "f/2.5", "f/2.8", "f/3.2", "f/3.5", "f/4", "f/4.5", "f/5", "f/5.6",
    "f/6.3", "f/7.1", "f/8", "f/9", "f/10", "f/11", "f/13", "f/14", "f/16",
    "f/18", "f/20", "f/22", "f/25", "f/29", "f/32", "f/36", "f/40", "f/45",
    "f/51", "f/57", "f/64",
)

ISOS_FULL = (
    "50", "100", "200", "400", "800", "1600", "3200", "6400", "12800",
    "25600", "51200", "102400",
)

ISOS_HALF = (
    "50", "70", "100", "140", "200", "280", "400", "560", "800", "1100",
    "1600", "2200", "3200", "4500", "6400", "9000", "12800", "18000", "25600",
    "36000", "51200", "72000", "102400",
)

ISOS_THIRD = (
    "50", "64", "80", "100", "125", "160", "200", "250", "320", "400", "500",
    "640", "800", "1000", "1250", "1600", "2000", "2500", "3200", "4000",
    "5000", "6400", "8000", "10000", "12800", "16000", "20000", "25600",
    "32000", "40000", "51200", "64000", "80000", "102400",
)


@dataclass(frozen=True)
class Scale:
    """Immutable, strictly increasing list of settings for one axis."""

    axis: Axis
    granularity: Granularity
    entries: tuple[str, ...]
    _values: NDArray[np.float64] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        if not entries:
            raise ScaleError(
                f"Empty {self.axis.label} scale for {self.granularity.value} stops",
                details={"axis": self.axis.value, "granularity": self.granularity.value},
            )

        try:
            parsed = [notation.parse(self.axis, entry) for entry in entries]
        except InvalidFormatError as e:
            raise ScaleError(f"Unparseable {self.axis.label} scale entry: {e.message}") from e

        values = np.asarray(parsed, dtype=np.float64)
        if np.any(np.diff(values) <= 0):
            raise ScaleError(
                f"{self.axis.label[0].upper()}{self.axis.label[1:]} scale must be strictly increasing",
                details={"axis": self.axis.value, "granularity": self.granularity.value},
            )
        values.setflags(write=False)

        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_values", values)

    @property
    def values(self) -> NDArray[np.float64]:
        """Numeric values of the entries (read-only array)."""
        return self._values

    @property
    def minimum(self) -> float:
        """Smallest value on the scale (fastest shutter, widest aperture, lowest ISO)."""
        return float(self._values[0])

    @property
    def maximum(self) -> float:
        """Largest value on the scale (slowest shutter, narrowest aperture, highest ISO)."""
        return float(self._values[-1])

    def value_of(self, index: int) -> float:
        """Numeric value of the entry at a position.

        Args:
            index: Position in the scale; negative indexes count from the end

        Returns:
            The parsed value of ``entries[index]``

        Raises:
            IndexError: If the index is out of range
        """
        return float(self._values[index])

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self.entries


class ScaleSet(Mapping):
    """Read-only lookup of scales by (axis, granularity)."""

    def __init__(self, scales: Mapping[tuple[Axis, Granularity], Scale]):
        self._scales = MappingProxyType(dict(scales))

    @classmethod
    def from_tables(cls, tables: Mapping[tuple[Axis, Granularity], tuple[str, ...]]) -> "ScaleSet":
        """Build a scale set from raw notation tables."""
        return cls(
            {
                (axis, granularity): Scale(axis, granularity, tuple(entries))
                for (axis, granularity), entries in tables.items()
            }
        )

    def get_scale(self, axis: Axis, granularity: Granularity) -> Scale:
        """Get the scale for an axis at a granularity.

        Raises:
            ScaleError: If no scale was supplied for that combination
        """
        try:
            return self._scales[(Axis(axis), Granularity(granularity))]
        except (KeyError, ValueError):
            raise ScaleError(
                f"No {getattr(axis, 'value', axis)} scale for {getattr(granularity, 'value', granularity)} stops"
            ) from None

    def __getitem__(self, key: tuple[Axis, Granularity]) -> Scale:
        return self._scales[key]

    def __iter__(self) -> Iterator[tuple[Axis, Granularity]]:
        return iter(self._scales)

    def __len__(self) -> int:
        return len(self._scales)


DEFAULT_TABLES: Mapping[tuple[Axis, Granularity], tuple[str, ...]] = MappingProxyType(
    {
        (Axis.SHUTTER_SPEED, Granularity.FULL): SHUTTER_SPEEDS_FULL,
        (Axis.SHUTTER_SPEED, Granularity.HALF): SHUTTER_SPEEDS_HALF,
        (Axis.SHUTTER_SPEED, Granularity.THIRD): SHUTTER_SPEEDS_THIRD,
        (Axis.APERTURE, Granularity.FULL): APERTURES_FULL,
        (Axis.APERTURE, Granularity.HALF): APERTURES_HALF,
        (Axis.APERTURE, Granularity.THIRD): APERTURES_THIRD,
        (Axis.ISO, Granularity.FULL): ISOS_FULL,
        (Axis.ISO, Granularity.HALF): ISOS_HALF,
        (Axis.ISO, Granularity.THIRD): ISOS_THIRD,
    }
)

_default_scales: Optional[ScaleSet] = None


def default_scales() -> ScaleSet:
    """Get the shared default scale set, building it on first use."""
    global _default_scales
    if _default_scales is None:
        _default_scales = ScaleSet.from_tables(DEFAULT_TABLES)
    return _default_scales
