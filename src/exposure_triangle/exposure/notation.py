"""
Notation codec for exposure settings.

Translates between the notation photographers read on a camera and the
numeric values the engine computes with:

- Shutter speed: "1/125" (fraction of a second), '30"' (whole or decimal
  seconds), or a bare decimal such as "0.5" -> seconds
- Aperture: "f/2.8" or a bare decimal -> f-number
- ISO: "400" -> ISO number
"""

import math
from typing import Callable

from exposure_triangle.core.exceptions import InvalidFormatError
from exposure_triangle.core.types import Axis

SECONDS_MARK = '"'
APERTURE_PREFIXES = ("f/", "F/")
ISO_PREFIXES = ("ISO", "iso")

# Magnitude past which formatters switch to significant digits
LARGE_VALUE = 1e15


def _to_float(text: str, what: str, original: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise InvalidFormatError(f"Invalid {what} format: {original!r}", value=original) from None
    if not math.isfinite(value):
        raise InvalidFormatError(f"Invalid {what} format: {original!r}", value=original)
    return value


def _require_text(text: object, what: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise InvalidFormatError(f"Missing {what}", value=text)
    return text.strip()


def _require_positive(value: float, what: str, original: object) -> float:
    if not value > 0 or not math.isfinite(value):
        raise InvalidFormatError(f"{what[0].upper()}{what[1:]} must be positive, got {original!r}", value=original)
    return value


def parse_shutter_speed(text: str) -> float:
    """Parse a shutter speed notation into seconds.

    Args:
        text: "1/125", '30"', '1.3"' or a bare decimal like "0.5"

    Returns:
        Exposure time in seconds

    Raises:
        InvalidFormatError: If the notation is malformed or not positive
    """
    raw = _require_text(text, "shutter speed")

    if "/" in raw:
        parts = raw.split("/")
        if len(parts) != 2:
            raise InvalidFormatError(f"Invalid shutter speed format: {raw!r}", value=raw)
        numerator = _to_float(parts[0], "shutter speed", raw)
        denominator = _to_float(parts[1], "shutter speed", raw)
        if denominator == 0:
            raise InvalidFormatError(f"Invalid shutter speed format: {raw!r}", value=raw)
        seconds = numerator / denominator
    elif raw.endswith(SECONDS_MARK):
        seconds = _to_float(raw.rstrip(SECONDS_MARK), "shutter speed", raw)
    else:
        seconds = _to_float(raw, "shutter speed", raw)

    return _require_positive(seconds, "shutter speed", raw)


def parse_aperture(text: str) -> float:
    """Parse an aperture notation ("f/2.8" or "2.8") into an f-number."""
    raw = _require_text(text, "aperture")
    number = raw
    for prefix in APERTURE_PREFIXES:
        if raw.startswith(prefix):
            number = raw[len(prefix):]
            break
    return _require_positive(_to_float(number, "aperture", raw), "aperture", raw)


def parse_iso(text: str) -> float:
    """Parse an ISO notation ("400", "ISO 400") into the ISO number."""
    raw = _require_text(text, "ISO")
    number = raw
    for prefix in ISO_PREFIXES:
        if raw.startswith(prefix):
            number = raw[len(prefix):]
            break
    return _require_positive(_to_float(number, "ISO", raw), "ISO", raw)


def _trim(value: float) -> str:
    # One decimal place, trailing ".0" dropped
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def _significant(value: float) -> str:
    # Three significant digits, for values the fixed-point forms would
    # round to zero or spell out with hundreds of digits
    return f"{value:.3g}"


def format_shutter_speed(seconds: float) -> str:
    """Render seconds in conventional shutter notation.

    10s and longer render as whole seconds ('30"'), 1-10s keep one decimal
    ('1.3"', '2"'), and anything shorter renders as a fraction "1/D".
    Denominators below 10 keep one decimal so that "1/2.5" and "1/1.3"
    survive a parse/format cycle. Values beyond LARGE_VALUE in either
    direction fall back to significant digits ('1e+20"', "1/1e+20").
    """
    _require_positive(seconds, "shutter speed", seconds)

    if seconds >= LARGE_VALUE:
        return f"{_significant(seconds)}{SECONDS_MARK}"
    if seconds >= 10:
        return f"{round(seconds)}{SECONDS_MARK}"
    if seconds >= 1:
        return f"{_trim(round(seconds, 1))}{SECONDS_MARK}"

    reciprocal = 1 / seconds
    if reciprocal >= LARGE_VALUE:
        return f"1/{_significant(reciprocal)}"
    denominator = round(reciprocal, 1) if reciprocal < 10 else round(reciprocal)
    if denominator <= 1:
        return f"1{SECONDS_MARK}"
    return f"1/{_trim(denominator)}"


def format_aperture(f_number: float) -> str:
    """Render an f-number as "f/N".

    N keeps one decimal place. f-numbers that would round to "f/0" or run
    past LARGE_VALUE use significant digits instead, so the text always
    parses back to a positive value.
    """
    _require_positive(f_number, "aperture", f_number)
    rounded = round(f_number, 1)
    if rounded <= 0 or f_number >= LARGE_VALUE:
        return f"f/{_significant(f_number)}"
    return f"f/{_trim(rounded)}"


def format_iso(iso: float) -> str:
    """Render an ISO number as an integer string ("0.3" below ISO 0.5)."""
    _require_positive(iso, "ISO", iso)
    rounded = round(iso)
    if rounded <= 0 or iso >= LARGE_VALUE:
        return _significant(iso)
    return str(int(rounded))


_PARSERS: dict[Axis, Callable[[str], float]] = {
    Axis.SHUTTER_SPEED: parse_shutter_speed,
    Axis.APERTURE: parse_aperture,
    Axis.ISO: parse_iso,
}

_FORMATTERS: dict[Axis, Callable[[float], str]] = {
    Axis.SHUTTER_SPEED: format_shutter_speed,
    Axis.APERTURE: format_aperture,
    Axis.ISO: format_iso,
}


def parse(axis: Axis, text: str) -> float:
    """Parse a notation for the given axis."""
    return _PARSERS[axis](text)


def format_value(axis: Axis, value: float) -> str:
    """Format a numeric value in the given axis' notation."""
    return _FORMATTERS[axis](value)
