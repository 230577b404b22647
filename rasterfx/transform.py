"""Geometric transforms: flip and rotate.

Both operations leave the source bitmap untouched and return a newly
allocated one with its alpha channel enabled.

## Flip Directions

- ``x``: mirror left-right, column x -> W - 1 - x
- ``y``: mirror top-bottom, row y -> H - 1 - y
- ``xy`` / ``yx``: both, the order does not matter

## Rotation Direction

A positive angle rotates the content clockwise on screen. The result canvas
grows to bound the rotated content, exposed areas take the background color.

Usage:
    from rasterfx.transform import flip, rotate

    mirrored = flip(bitmap, "x")
    rotated = rotate(bitmap, 30, "#ffffff")
"""
from __future__ import annotations

import logging

import numpy as np
import PIL.Image

from . import params
from .bitmap import Bitmap
from .color import ColorTypes, normalize_color
from .compositor import blend_pixels
from .config import settings

logger = logging.getLogger(__name__)

RESAMPLE_METHODS = {
    "nearest": PIL.Image.Resampling.NEAREST,
    "bilinear": PIL.Image.Resampling.BILINEAR,
    "bicubic": PIL.Image.Resampling.BICUBIC,
}


def flip(image: Bitmap, direction: str) -> Bitmap:
    """Flip a bitmap horizontally, vertically or both.

    Args:
        image: Source bitmap, not modified
        direction: x, y, xy or yx (case insensitive)

    Returns:
        New bitmap of the same size

    Raises:
        InvalidDirection: For any other direction
    """
    direction = params.direction(direction)
    if direction in ("xy", "yx"):
        return flip(flip(image, "x"), "y")

    # Start from a transparent canvas, pixels are copied raw
    result = Bitmap.transparent(image.width, image.height)
    if direction == "y":
        result.pixels[:, :] = image.pixels[::-1, :]
    else:
        result.pixels[:, :] = image.pixels[:, ::-1]
    logger.debug("Flipped %r along %s", image, direction)
    return result


def rotate(image: Bitmap, angle: float, bg_color: ColorTypes | None = None) -> Bitmap:
    """Rotate a bitmap by an arbitrary angle.

    Args:
        image: Source bitmap, not modified
        angle: Degrees, -360 < angle < 360. Positive values rotate clockwise.
        bg_color: Color of the exposed area, alpha included. Defaults to
            ``settings.DEFAULT_BG_COLOR``.

    Returns:
        New bitmap sized to bound the rotated content. Multiples of 90 degrees
        are exact.

    Raises:
        InvalidAngle: If the angle is out of range
        InvalidColorFormat: If the background color is malformed
        InvalidColorComponent: If a background color component is out of range
    """
    angle = params.rotate(angle)
    rgba = normalize_color(bg_color if bg_color is not None else settings.DEFAULT_BG_COLOR)
    resample = RESAMPLE_METHODS.get(settings.ROTATE_RESAMPLE.lower(), PIL.Image.Resampling.BILINEAR)

    # PIL rotates counter-clockwise
    pil_angle = -angle % 360.0
    source = PIL.Image.fromarray(image.to_rgba())
    # Resampling RGBA premultiplies, which would distort a translucent
    # fillcolor, so the content is rotated onto a transparent canvas and a
    # coverage mask marks where the background shows through
    rotated = source.rotate(pil_angle, resample=resample, expand=True, fillcolor=(0, 0, 0, 0))
    coverage = PIL.Image.new("L", source.size, 255).rotate(
        pil_angle, resample=resample, expand=True, fillcolor=0
    )
    result = Bitmap.from_rgba(np.asarray(rotated, dtype=np.uint8))

    exposed = np.asarray(coverage) < 255
    if exposed.any():
        background = np.empty_like(result.pixels)
        background[:, :] = rgba.as_tuple()
        merged = blend_pixels(background, result.pixels, 100)
        result.pixels[exposed] = merged[exposed]
    logger.debug("Rotated %r by %s degrees to %r", image, angle, result)
    return result


__all__ = ["flip", "rotate", "RESAMPLE_METHODS"]
