"""Alpha-aware compositing of one bitmap onto another.

Both opacity and desaturation rely on :func:`merge_alpha`, so its arithmetic
is pinned down exactly:

- alpha 0 (opaque) - 127 (transparent) is converted to an opacity
  ``o = (127 - a) / 127``
- the effective source opacity is ``o_eff = o_src * percent / 100``
- color channels: ``src * o_eff + dst * (1 - o_eff)``
- alpha: ``127 * (1 - (o_eff + o_dst * (1 - o_eff)))``

All results are rounded half away from zero and clamped to their range.

Usage:
    from rasterfx.compositor import merge_alpha

    # Blend the whole overlay at 40% onto the base bitmap
    merge_alpha(base, overlay, (0, 0), (0, 0), overlay.size, 40)
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from . import params
from .color import MAX_ALPHA, MAX_COLOR
from .exceptions import RegionOutOfBounds

if TYPE_CHECKING:
    from .bitmap import Bitmap


def _round(values: np.ndarray) -> np.ndarray:
    # Round half away from zero, all inputs are non-negative here
    return np.floor(values + 0.5)


def blend_pixels(dst: np.ndarray, src: np.ndarray, opacity_percent: float) -> np.ndarray:
    """Blend two equally sized pixel arrays.

    Args:
        dst: uint8 array (H, W, 4), alpha 0-127
        src: uint8 array (H, W, 4), alpha 0-127
        opacity_percent: Global source opacity 0-100

    Returns:
        New blended uint8 array (H, W, 4)
    """
    if dst.shape != src.shape:
        raise ValueError(f"Shape mismatch: {dst.shape} vs {src.shape}")

    dst_f = dst.astype(np.float64)
    src_f = src.astype(np.float64)

    src_opacity = (MAX_ALPHA - src_f[:, :, 3:4]) / MAX_ALPHA
    dst_opacity = (MAX_ALPHA - dst_f[:, :, 3:4]) / MAX_ALPHA
    eff = src_opacity * (opacity_percent / 100.0)

    result = np.empty(dst.shape, dtype=np.uint8)
    color = src_f[:, :, :3] * eff + dst_f[:, :, :3] * (1.0 - eff)
    result[:, :, :3] = np.clip(_round(color), 0, MAX_COLOR)

    alpha = MAX_ALPHA * (1.0 - (eff + dst_opacity * (1.0 - eff)))
    result[:, :, 3:4] = np.clip(_round(alpha), 0, MAX_ALPHA)
    return result


def _check_region(bitmap: Bitmap, offset: tuple[int, int], size: tuple[int, int], name: str):
    x, y = offset
    width, height = size
    if x < 0 or y < 0 or width < 0 or height < 0:
        raise RegionOutOfBounds(
            f"Negative {name} region: offset={offset}, size={size}"
        )
    if x + width > bitmap.width or y + height > bitmap.height:
        raise RegionOutOfBounds(
            f"{name} region offset={offset}, size={size} exceeds "
            f"{bitmap.width}x{bitmap.height}"
        )


def merge_alpha(
    dst: Bitmap,
    src: Bitmap,
    dst_offset: tuple[int, int],
    src_offset: tuple[int, int],
    size: tuple[int, int],
    opacity_percent: float,
) -> None:
    """Merge a region of ``src`` onto ``dst`` with alpha awareness.

    Args:
        dst: Bitmap to draw onto, modified in place
        src: Bitmap to read from
        dst_offset: (x, y) of the region in dst
        src_offset: (x, y) of the region in src
        size: (width, height) of the region
        opacity_percent: Global source opacity, clamped to 0-100. Fractions
            are kept.

    Raises:
        RegionOutOfBounds: If the region exceeds either bitmap. Nothing is
            written in that case.
    """
    dst_offset = (int(dst_offset[0]), int(dst_offset[1]))
    src_offset = (int(src_offset[0]), int(src_offset[1]))
    size = (int(size[0]), int(size[1]))
    _check_region(dst, dst_offset, size, "destination")
    _check_region(src, src_offset, size, "source")
    width, height = size
    if width == 0 or height == 0:
        return

    opacity_percent = params.opacity_percent(opacity_percent)
    dx, dy = dst_offset
    sx, sy = src_offset
    dst_region = dst.pixels[dy : dy + height, dx : dx + width]
    src_region = src.pixels[sy : sy + height, sx : sx + width]
    dst_region[:, :] = blend_pixels(dst_region, src_region, opacity_percent)


__all__ = ["merge_alpha", "blend_pixels"]
