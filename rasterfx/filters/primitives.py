# rasterfx Filters - Primitive implementations
"""
Default implementations of the primitive filters.

Each function receives the bitmap's pixel array (H, W, 4) with alpha in the
0 (opaque) - 127 convention and modifies it in place. Alpha is left
untouched unless stated otherwise. Results are truncated toward zero after
clamping, matching the integer pixel model of the bitmap primitive.

The 3x3 convolutions run through OpenCV with replicated borders:

| Filter | Kernel | Divisor | Offset |
|--------|--------|---------|--------|
| edgedetect | [[-1,0,-1],[0,4,0],[-1,0,-1]] | 1 | 127 |
| emboss | [[1.5,0,0],[0,0,0],[0,0,-1.5]] | 1 | 127 |
| mean_removal | [[-1,-1,-1],[-1,9,-1],[-1,-1,-1]] | 1 | 0 |
| gaussian_blur | [[1,2,1],[2,4,2],[1,2,1]] | 16 | 0 |
| smooth | [[1,1,1],[1,w,1],[1,1,1]] | w + 8 | 0 |
"""

from __future__ import annotations

import cv2
import numpy as np

from rasterfx.color import MAX_ALPHA, MAX_COLOR

from .base import FilterKind, register_primitive

EDGEDETECT_KERNEL = np.array([[-1, 0, -1], [0, 4, 0], [-1, 0, -1]], dtype=np.float64)
EMBOSS_KERNEL = np.array([[1.5, 0, 0], [0, 0, 0], [0, 0, -1.5]], dtype=np.float64)
MEAN_REMOVAL_KERNEL = np.array([[-1, -1, -1], [-1, 9, -1], [-1, -1, -1]], dtype=np.float64)
GAUSSIAN_KERNEL = np.array([[1, 2, 1], [2, 4, 2], [1, 2, 1]], dtype=np.float64)

# Offsets of the 3x3 neighbourhood as (dy, dx)
_NEIGHBOURS = [(dy, dx) for dy in range(3) for dx in range(3)]


def _store_rgb(pixels: np.ndarray, rgb: np.ndarray) -> None:
    pixels[:, :, :3] = np.clip(rgb, 0, MAX_COLOR).astype(np.uint8)


def _convolve(pixels: np.ndarray, kernel: np.ndarray, divisor: float, offset: float) -> None:
    rgb = np.ascontiguousarray(pixels[:, :, :3], dtype=np.float64)
    result = cv2.filter2D(rgb, cv2.CV_64F, kernel, borderType=cv2.BORDER_REPLICATE)
    _store_rgb(pixels, result / divisor + offset)


@register_primitive(FilterKind.GRAYSCALE)
def grayscale(pixels: np.ndarray) -> None:
    """Luminosity grayscale: 0.299 R + 0.587 G + 0.114 B."""
    rgb = pixels[:, :, :3].astype(np.int32)
    # Integer weights keep white at exactly 255
    gray = ((299 * rgb[:, :, 0] + 587 * rgb[:, :, 1] + 114 * rgb[:, :, 2]) // 1000).astype(np.uint8)
    pixels[:, :, 0] = gray
    pixels[:, :, 1] = gray
    pixels[:, :, 2] = gray


@register_primitive(FilterKind.NEGATE)
def negate(pixels: np.ndarray) -> None:
    pixels[:, :, :3] = MAX_COLOR - pixels[:, :, :3]


@register_primitive(FilterKind.BRIGHTNESS)
def brightness(pixels: np.ndarray, level: int) -> None:
    _store_rgb(pixels, pixels[:, :, :3].astype(np.int16) + int(level))


@register_primitive(FilterKind.CONTRAST)
def contrast(pixels: np.ndarray, level: int) -> None:
    """Contrast, -100 (max contrast) to 100 (flat gray)."""
    factor = ((100.0 - level) / 100.0) ** 2
    rgb = pixels[:, :, :3].astype(np.float64) / 255.0
    _store_rgb(pixels, ((rgb - 0.5) * factor + 0.5) * 255.0)


@register_primitive(FilterKind.COLORIZE)
def colorize(pixels: np.ndarray, red: int, green: int, blue: int, alpha: int = 0) -> None:
    """Adds a constant to every channel, alpha included."""
    values = pixels.astype(np.int16)
    values[:, :, 0] += int(red)
    values[:, :, 1] += int(green)
    values[:, :, 2] += int(blue)
    values[:, :, 3] += int(alpha)
    pixels[:, :, :3] = np.clip(values[:, :, :3], 0, MAX_COLOR).astype(np.uint8)
    pixels[:, :, 3] = np.clip(values[:, :, 3], 0, MAX_ALPHA).astype(np.uint8)


@register_primitive(FilterKind.EDGEDETECT)
def edgedetect(pixels: np.ndarray) -> None:
    _convolve(pixels, EDGEDETECT_KERNEL, 1.0, 127.0)


@register_primitive(FilterKind.EMBOSS)
def emboss(pixels: np.ndarray) -> None:
    _convolve(pixels, EMBOSS_KERNEL, 1.0, 127.0)


@register_primitive(FilterKind.MEAN_REMOVAL)
def mean_removal(pixels: np.ndarray) -> None:
    _convolve(pixels, MEAN_REMOVAL_KERNEL, 1.0, 0.0)


@register_primitive(FilterKind.GAUSSIAN_BLUR)
def gaussian_blur(pixels: np.ndarray) -> None:
    _convolve(pixels, GAUSSIAN_KERNEL, 16.0, 0.0)


@register_primitive(FilterKind.SMOOTH)
def smooth(pixels: np.ndarray, weight: float) -> None:
    """Weighted 3x3 box blur, the larger the weight the weaker the effect."""
    kernel = np.ones((3, 3), dtype=np.float64)
    kernel[1, 1] = float(weight)
    _convolve(pixels, kernel, float(weight) + 8.0, 0.0)


@register_primitive(FilterKind.SELECTIVE_BLUR)
def selective_blur(pixels: np.ndarray) -> None:
    """Edge preserving 3x3 blur.

    Every neighbour is weighted per channel by the inverse of its distance
    to the center value (weight 1 for equal values), so similar pixels are
    averaged while strong edges survive.
    """
    height, width = pixels.shape[:2]
    rgb = pixels[:, :, :3].astype(np.float64)
    padded = np.pad(rgb, ((1, 1), (1, 1), (0, 0)), mode="edge")

    weight_sum = np.zeros_like(rgb)
    value_sum = np.zeros_like(rgb)
    for dy, dx in _NEIGHBOURS:
        neighbour = padded[dy : dy + height, dx : dx + width]
        diff = np.abs(rgb - neighbour)
        # Values are integral, so max(diff, 1) only replaces exact matches
        weights = 1.0 / np.maximum(diff, 1.0)
        weight_sum += weights
        value_sum += weights * neighbour
    _store_rgb(pixels, value_sum / weight_sum)


@register_primitive(FilterKind.PIXELATE)
def pixelate(pixels: np.ndarray, block_size: int, advanced: bool = True) -> None:
    """Pixelate in blocks of ``block_size`` pixels.

    With ``advanced`` every block takes its average color (alpha included),
    otherwise the color of its top-left pixel. Block sizes below 2 leave
    the image unchanged.
    """
    block_size = int(block_size)
    if block_size < 2:
        return
    height, width = pixels.shape[:2]
    for y in range(0, height, block_size):
        for x in range(0, width, block_size):
            block = pixels[y : y + block_size, x : x + block_size]
            if advanced:
                count = block.shape[0] * block.shape[1]
                color = block.reshape(-1, 4).astype(np.int64).sum(axis=0) // count
            else:
                color = block[0, 0].copy()
            block[:, :] = color.astype(np.uint8)


__all__ = [
    "grayscale",
    "negate",
    "brightness",
    "contrast",
    "colorize",
    "edgedetect",
    "emboss",
    "mean_removal",
    "gaussian_blur",
    "smooth",
    "selective_blur",
    "pixelate",
]
