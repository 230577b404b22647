"""
Parameter clamps shared by all effects.

Every function here is total for numeric input and clamps silently, except
:func:`rotate` and :func:`direction` which reject values that have no
meaningful interpretation. Infinite values clamp to the nearest bound; NaN,
and positive infinity for the clamps without an upper bound
(:func:`blur`, :func:`pixelate`), raise a ``ValueError``.
"""

from __future__ import annotations

import math

from .exceptions import InvalidAngle, InvalidDirection

DIRECTIONS = ("x", "y", "xy", "yx")
"Valid flip directions"


def round_half_up(value: float) -> int:
    """Round half away from zero, the rounding mode used throughout rasterfx."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def _to_number(value) -> float:
    number = float(value)
    if math.isnan(number):
        raise ValueError(f"Expected a number, got {value!r}")
    return number


def _range(value, minimum: float, maximum: float | None = None) -> float:
    number = max(minimum, _to_number(value))
    if maximum is not None:
        number = min(maximum, number)
    elif math.isinf(number):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return number


def _to_int(value, minimum: int, maximum: int | None = None) -> int:
    # Clamp first so infinities never reach int()
    return int(_range(value, minimum, maximum))


def blur(passes) -> int:
    """Number of blur passes, at least 1."""
    return _to_int(passes, 1)


def brightness(level) -> int:
    """Brightness level, -255 (darkest) to 255 (lightest)."""
    return _to_int(level, -255, 255)


def contrast(level) -> int:
    """Contrast level, -100 to 100."""
    return _to_int(level, -100, 100)


def smooth(passes) -> int:
    """Smoothing level, 1 to 2048."""
    return _to_int(passes, 1, 2048)


def percent(value) -> int:
    """Percentage, 0 to 100."""
    return _to_int(value, 0, 100)


def opacity_percent(value) -> float:
    """Percentage 0.0 to 100.0 keeping its fraction, used by the compositor."""
    return _range(value, 0.0, 100.0)


def color_level(value) -> int:
    """Colorize channel offset, -255 to 255."""
    return _to_int(value, -255, 255)


def pixelate(block_size) -> int:
    """Pixelate block size, never negative."""
    return _to_int(block_size, 0)


def opacity(value) -> int:
    """
    Normalizes an opacity to a percentage.

    Values up to 1 are treated as fractions (0.5 -> 50), larger values as
    percentages. The result is rounded and clamped to 0-100.
    """
    value = _to_number(value)
    if value <= 1:
        value *= 100
    return round_half_up(_range(value, 0, 100))


def opacity_to_alpha(value) -> int:
    """Converts an opacity (see :func:`opacity`) to an alpha value 0 (opaque) - 127."""
    return round_half_up((100 - opacity(value)) / 100 * 127)


def rotate(angle) -> float:
    """
    Validates a rotation angle.

    :param angle: Angle in degrees, -360 < angle < 360
    :return: The angle as float
    :raises InvalidAngle: If the angle is out of range or not a number
    """
    try:
        angle = float(angle)
    except (TypeError, ValueError):
        raise InvalidAngle(f"Rotation angle must be a number, got {angle!r}") from None
    if not -360 < angle < 360:
        raise InvalidAngle(f"Rotation angle must be within -360 < x < 360, got {angle}")
    return angle


def direction(value) -> str:
    """
    Validates a flip direction.

    :param value: One of x, y, xy, yx (case insensitive)
    :return: The lower case direction
    :raises InvalidDirection: For any other value
    """
    normalized = str(value).strip().lower() if isinstance(value, str) else None
    if normalized not in DIRECTIONS:
        raise InvalidDirection(f"Unsupported flip direction: {value!r}")
    return normalized


__all__ = [
    "DIRECTIONS",
    "round_half_up",
    "blur",
    "brightness",
    "contrast",
    "smooth",
    "percent",
    "opacity_percent",
    "color_level",
    "pixelate",
    "opacity",
    "opacity_to_alpha",
    "rotate",
    "direction",
]
