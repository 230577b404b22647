"""
The public effect surface of rasterfx.

Every effect takes the bitmap to work on as first argument. Effects either
modify the bitmap in place and return ``None``, or allocate a new bitmap and
return it:

| Effect | Result |
|--------|--------|
| sepia, grayscale, pixelate, edges, emboss, invert, blur, brightness, contrast, colorize, mean_remove, smooth, fill | in place, ``None`` |
| desaturate | same bitmap at 100%, a new one otherwise |
| opacity, rotate, flip | new bitmap |
| text | in place, returns the bitmap |

A replaced bitmap is not disposed of; it is up to the caller whether the
old handle is still of use.

Usage:
    from rasterfx import Bitmap, effects

    bitmap = Bitmap.create(64, 64, "#336699")
    effects.blur(bitmap, passes=2, kind="gaussian")
    bitmap = effects.rotate(bitmap, 15, "#ffffff")
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

from . import params
from . import transform
from .bitmap import Bitmap
from .color import ColorTypes, normalize_color
from .compositor import merge_alpha
from .config import settings
from .filters import FilterKind, apply_filter
from .text import TextParams, render_text

logger = logging.getLogger(__name__)


class BlurKind(Enum):
    """Blur primitive used by :func:`blur`."""

    SELECTIVE = 0
    GAUSSIAN = 1

    @classmethod
    def parse(cls, kind: BlurKind | int | str) -> BlurKind:
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls[kind.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown blur kind: {kind!r}") from None
        return cls(kind)


def grayscale(image: Bitmap) -> None:
    """Converts the bitmap to grayscale."""
    apply_filter(image, FilterKind.GRAYSCALE)


def sepia(image: Bitmap) -> None:
    """Sepia emulation: grayscale tinted with ``settings.SEPIA_TINT``."""
    red, green, blue = settings.SEPIA_TINT
    grayscale(image)
    apply_filter(image, FilterKind.COLORIZE, red, green, blue, 0)


def pixelate(image: Bitmap, block_size: int | None = None) -> None:
    """
    Pixelates the bitmap, every block gets its average color.

    :param image: The bitmap
    :param block_size: Size in pixels of each block. Defaults to
        ``settings.PIXELATE_BLOCK_SIZE``.
    """
    if block_size is None:
        block_size = settings.PIXELATE_BLOCK_SIZE
    apply_filter(image, FilterKind.PIXELATE, params.pixelate(block_size), True)


def edges(image: Bitmap) -> None:
    """Edge detection."""
    apply_filter(image, FilterKind.EDGEDETECT)


def emboss(image: Bitmap) -> None:
    apply_filter(image, FilterKind.EMBOSS)


def invert(image: Bitmap) -> None:
    """Negative of the color channels."""
    apply_filter(image, FilterKind.NEGATE)


def blur(image: Bitmap, passes: int = 1, kind: BlurKind | int | str = BlurKind.SELECTIVE) -> None:
    """
    Blurs the bitmap.

    :param image: The bitmap
    :param passes: Number of times the blur is applied, at least 1. Every
        pass is an independent full image convolution.
    :param kind: ``BlurKind.SELECTIVE`` (edge preserving) or
        ``BlurKind.GAUSSIAN``, also accepted as 0/1 or by name
    """
    passes = params.blur(passes)
    kind = BlurKind.parse(kind)
    primitive = FilterKind.GAUSSIAN_BLUR if kind is BlurKind.GAUSSIAN else FilterKind.SELECTIVE_BLUR
    for _ in range(passes):
        apply_filter(image, primitive)


def brightness(image: Bitmap, level: int) -> None:
    """
    Changes the brightness.

    :param image: The bitmap
    :param level: -255 (darkest) to 255 (lightest)
    """
    apply_filter(image, FilterKind.BRIGHTNESS, params.brightness(level))


def contrast(image: Bitmap, level: int) -> None:
    """
    Changes the contrast.

    :param image: The bitmap
    :param level: -100 (more contrast) to 100 (less contrast)
    """
    apply_filter(image, FilterKind.CONTRAST, params.contrast(level))


def colorize(image: Bitmap, color: ColorTypes, opacity: float = 100) -> None:
    """
    Tints the bitmap with a color.

    :param image: The bitmap
    :param color: Hex string, (r, g, b) or (r, g, b, a)
    :param opacity: 0-1 or 0-100, converted to the primitive's alpha 0-127
    """
    rgba = normalize_color(color)
    alpha = params.opacity_to_alpha(opacity)
    apply_filter(
        image,
        FilterKind.COLORIZE,
        params.color_level(rgba.r),
        params.color_level(rgba.g),
        params.color_level(rgba.b),
        alpha,
    )


def mean_remove(image: Bitmap) -> None:
    """Mean removal, a sketchy sharpening effect."""
    apply_filter(image, FilterKind.MEAN_REMOVAL)


def smooth(image: Bitmap, passes: int = 1) -> None:
    """
    Smooths the bitmap.

    :param image: The bitmap
    :param passes: Smoothing level 1-2048, passed to the primitive as its
        center weight. Higher values smooth less.
    """
    apply_filter(image, FilterKind.SMOOTH, params.smooth(passes))


def desaturate(image: Bitmap, percent: int = 100) -> Bitmap:
    """
    Desaturates the bitmap.

    The returned handle differs between the two cases and callers have to
    use it as the new current bitmap:

    - ``percent == 100``: ``image`` is converted to grayscale in place and
      returned itself.
    - otherwise a grayscale copy is created and merged onto ``image`` with
      ``percent`` opacity. The grayscale copy, a new bitmap, is returned.

    :param image: The bitmap
    :param percent: Level of desaturation 0-100
    :return: ``image`` or the new grayscale copy, see above
    """
    percent = params.percent(percent)
    if percent == 100:
        grayscale(image)
        return image

    # Raw copy, no blending
    gray = image.copy(blending=False)
    grayscale(gray)
    merge_alpha(image, gray, (0, 0), (0, 0), image.size, percent)
    logger.debug("Desaturated %r by %s%%", image, percent)
    return gray


def opacity(image: Bitmap, value: float) -> Bitmap:
    """
    Changes the opacity of the bitmap.

    :param image: The bitmap, not modified
    :param value: 0-1 or 0-100
    :return: A new bitmap with the merged pixels
    """
    percent = params.opacity(value)
    result = Bitmap.transparent(image.width, image.height)
    merge_alpha(result, image, (0, 0), (0, 0), image.size, percent)
    logger.debug("Applied %s%% opacity to %r", percent, image)
    return result


def rotate(image: Bitmap, angle: float, bg_color: ColorTypes | None = None) -> Bitmap:
    """Rotates clockwise, see :func:`rasterfx.transform.rotate`."""
    return transform.rotate(image, angle, bg_color)


def flip(image: Bitmap, direction: str) -> Bitmap:
    """Flips along x, y, xy or yx, see :func:`rasterfx.transform.flip`."""
    return transform.flip(image, direction)


def fill(image: Bitmap, color: ColorTypes | None = None) -> None:
    """
    Fills the whole bitmap with a color.

    The alpha channel is enabled without blending, so every pixel ends up
    exactly equal to the normalized color.

    :param image: The bitmap
    :param color: Hex string, (r, g, b) or (r, g, b, a). Defaults to
        ``settings.DEFAULT_BG_COLOR``.
    """
    rgba = normalize_color(color if color is not None else settings.DEFAULT_BG_COLOR)
    image.enable_alpha(blending=False)
    image.fill_rect(0, 0, image.width, image.height, rgba)


def text(
    image: Bitmap,
    text: str,
    font_file: str,
    params: TextParams | dict[str, Any] | None = None,
) -> Bitmap:
    """Renders text onto the bitmap, see :func:`rasterfx.text.render_text`."""
    return render_text(image, text, font_file, params)


EFFECTS: dict[str, Callable[..., Bitmap | None]] = {
    "sepia": sepia,
    "grayscale": grayscale,
    "pixelate": pixelate,
    "edges": edges,
    "emboss": emboss,
    "invert": invert,
    "blur": blur,
    "brightness": brightness,
    "contrast": contrast,
    "colorize": colorize,
    "mean_remove": mean_remove,
    "meanremove": mean_remove,
    "smooth": smooth,
    "desaturate": desaturate,
    "opacity": opacity,
    "rotate": rotate,
    "flip": flip,
    "fill": fill,
    "text": text,
}
"All public effects by name"


__all__ = [
    "BlurKind", "EFFECTS",
    "sepia", "grayscale", "pixelate", "edges", "emboss", "invert", "blur",
    "brightness", "contrast", "colorize", "mean_remove", "smooth",
    "desaturate", "opacity", "rotate", "flip", "fill", "text",
]
