"""
Color normalization.

Colors are passed around as hex strings (``#RRGGBB``) or as sequences of
3 ``(r, g, b)`` or 4 ``(r, g, b, a)`` integers. :func:`normalize_color`
validates them and returns a :class:`ColorSpec`.

The alpha component follows the bitmap convention: 0 is fully opaque,
127 is fully transparent.
"""

from __future__ import annotations

import numbers
import re
from typing import NamedTuple, Sequence, Union

from .exceptions import InvalidColorComponent, InvalidColorFormat

MAX_COLOR = 255
"Maximum value of the red, green and blue components"

MAX_ALPHA = 127
"Maximum (fully transparent) alpha value"

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")


class ColorSpec(NamedTuple):
    """Canonical, validated RGBA color."""

    r: int
    g: int
    b: int
    a: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        """Hex representation of the color channels, alpha is dropped."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """The color with its alpha converted to 8 bit (0 = transparent, 255 = opaque)."""
        from .bitmap import alpha_to_alpha8

        return (self.r, self.g, self.b, int(alpha_to_alpha8(self.a)))


ColorTypes = Union[str, Sequence[int], ColorSpec]
"The color representations accepted by :func:`normalize_color`"


def _parse_hex(value: str) -> ColorSpec:
    color = value.strip()
    if color.startswith("#"):
        color = color[1:]
    if len(color) != 6 or not _HEX_RE.match(color):
        raise InvalidColorFormat(f"Undefined color format (string): {value!r}")
    return ColorSpec(int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16), 0)


def _component(value) -> int:
    if isinstance(value, bool):
        raise InvalidColorFormat(f"Color components must be integers, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise InvalidColorFormat(f"Color components must be integers, got {value!r}")


def _parse_sequence(value: Sequence) -> ColorSpec:
    if len(value) not in (3, 4):
        raise InvalidColorFormat(
            f"Color sequences need 3 or 4 components, got {len(value)}"
        )
    components = [_component(item) for item in value]
    if len(components) == 3:
        components.append(0)
    for name, component, limit in zip(
        "rgba", components, (MAX_COLOR, MAX_COLOR, MAX_COLOR, MAX_ALPHA)
    ):
        if not 0 <= component <= limit:
            raise InvalidColorComponent(
                f"Color component {name}={component} is out of range 0-{limit}"
            )
    return ColorSpec(*components)


def normalize_color(value: ColorTypes) -> ColorSpec:
    """
    Converts a color definition into a :class:`ColorSpec`.

    :param value: A hex string (``#RRGGBB`` or ``RRGGBB``), a sequence of
        3 or 4 integers or a ColorSpec.
    :return: The validated color. Alpha defaults to 0 (opaque).
    :raises InvalidColorFormat: If the string or sequence is malformed
    :raises InvalidColorComponent: If a component is outside 0-255 (r, g, b)
        or 0-127 (a)
    """
    if isinstance(value, ColorSpec):
        return value
    if isinstance(value, str):
        return _parse_hex(value)
    if isinstance(value, (bytes, bytearray)):
        raise InvalidColorFormat(f"Undefined color format: {value!r}")
    if not isinstance(value, Sequence):
        try:
            value = list(value)
        except TypeError:
            raise InvalidColorFormat(f"Undefined color format: {value!r}") from None
    return _parse_sequence(value)


__all__ = ["ColorSpec", "ColorTypes", "normalize_color", "MAX_COLOR", "MAX_ALPHA"]
