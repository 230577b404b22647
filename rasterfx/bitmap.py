"""
Implements the class :class:`.Bitmap`, the in-memory pixel canvas all rasterfx
operations work on.

Pixels are stored as a numpy ``uint8`` array of shape ``(height, width, 4)``.
The first three channels are red, green and blue (0-255), the fourth one is
the alpha channel in the inverted 7 bit convention: 0 is fully opaque,
127 fully transparent. Conversion to the common 8 bit alpha (0 transparent,
255 opaque) only happens at the Pillow / RGBA boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import PIL.Image

from .color import MAX_ALPHA, ColorTypes, normalize_color

if TYPE_CHECKING:
    from .color import ColorSpec


def alpha_to_alpha8(alpha: np.ndarray | int) -> np.ndarray:
    """Converts alpha 0 (opaque) - 127 to 8 bit alpha 0 (transparent) - 255."""
    alpha = np.asarray(alpha, dtype=np.float64)
    return np.floor((MAX_ALPHA - alpha) * 255.0 / MAX_ALPHA + 0.5).astype(np.uint8)


def alpha8_to_alpha(alpha8: np.ndarray | int) -> np.ndarray:
    """Converts 8 bit alpha 0 (transparent) - 255 to alpha 0 (opaque) - 127."""
    alpha8 = np.asarray(alpha8, dtype=np.float64)
    return (MAX_ALPHA - np.floor(alpha8 * MAX_ALPHA / 255.0 + 0.5)).astype(np.uint8)


class Bitmap:
    """
    A truecolor RGBA canvas with an explicit width and height.

    Besides the pixels a bitmap carries two flags of the underlying primitive
    model:

    - ``alpha_blending``: if set, shapes drawn with :meth:`fill_rect` are
      blended over the existing pixels, otherwise they overwrite them.
    - ``save_alpha``: whether the alpha channel is kept on export. If not
      set, :meth:`to_pil` exports an opaque RGB image.
    """

    def __init__(
        self,
        pixels: np.ndarray,
        alpha_blending: bool = True,
        save_alpha: bool = False,
    ):
        """
        :param pixels: uint8 array (H, W, 4) with alpha in 0-127. The array is
            referenced, not copied.
        :param alpha_blending: Blend drawn shapes over existing pixels
        :param save_alpha: Keep the alpha channel on export

        Raises a ValueError if the array does not describe a valid canvas
        """
        if not isinstance(pixels, np.ndarray):
            raise ValueError(f"Expected numpy array, got {type(pixels).__name__}")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected RGBA array (H, W, 4), got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError(f"Width and height must be positive, got shape {pixels.shape}")
        if pixels[:, :, 3].max() > MAX_ALPHA:
            raise ValueError(f"Alpha values must be within 0-{MAX_ALPHA}")
        self._pixels = pixels
        self.alpha_blending = alpha_blending
        "Blend shapes over existing pixels when drawing"
        self.save_alpha = save_alpha
        "Keep the alpha channel on export"

    @classmethod
    def create(cls, width: int, height: int, color: ColorTypes | None = None) -> Bitmap:
        """
        Allocates a new canvas.

        :param width: The width in pixels
        :param height: The height in pixels
        :param color: The initial color. Opaque black by default.
        :return: The new bitmap
        """
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"Width and height must be positive, got {width}x{height}")
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        if color is not None:
            pixels[:, :] = normalize_color(color).as_tuple()
        return cls(pixels)

    @classmethod
    def transparent(cls, width: int, height: int) -> Bitmap:
        """Allocates a fully transparent black canvas with its alpha channel enabled."""
        bitmap = cls.create(width, height, (0, 0, 0, MAX_ALPHA))
        bitmap.enable_alpha()
        return bitmap

    @classmethod
    def from_rgba(cls, rgba: np.ndarray) -> Bitmap:
        """
        Creates a bitmap from a common RGBA uint8 array (alpha 255 = opaque).

        :param rgba: uint8 array (H, W, 4) or (H, W, 3)
        :return: The bitmap, alpha channel enabled
        """
        if rgba.ndim != 3 or rgba.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3|4) array, got shape {rgba.shape}")
        if rgba.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {rgba.dtype}")
        pixels = np.zeros((rgba.shape[0], rgba.shape[1], 4), dtype=np.uint8)
        pixels[:, :, :3] = rgba[:, :, :3]
        if rgba.shape[2] == 4:
            pixels[:, :, 3] = alpha8_to_alpha(rgba[:, :, 3])
        bitmap = cls(pixels)
        bitmap.enable_alpha()
        return bitmap

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> Bitmap:
        """Creates a bitmap from a PIL image of any mode."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls.from_rgba(np.asarray(image, dtype=np.uint8))

    @property
    def width(self) -> int:
        """The width in pixels"""
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        """The height in pixels"""
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """The size as (width, height) tuple"""
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """The pixel array (H, W, 4). Modifications affect the bitmap."""
        return self._pixels

    def enable_alpha(self, blending: bool = True) -> None:
        """
        Enables the alpha channel.

        :param blending: If False, drawing overwrites pixels including their
            alpha instead of blending over them.
        """
        self.save_alpha = True
        self.alpha_blending = blending

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Returns the (r, g, b, a) tuple at given position."""
        return tuple(int(v) for v in self._pixels[y, x])

    def set_pixel(self, x: int, y: int, color: ColorTypes) -> None:
        """Writes a color to a single pixel without blending."""
        self._pixels[y, x] = normalize_color(color).as_tuple()

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: ColorTypes) -> None:
        """
        Fills the rectangle between two inclusive corners.

        The rectangle is clipped to the canvas. If :attr:`alpha_blending` is
        set the color is blended over the existing pixels, otherwise written
        as is.
        """
        from .compositor import blend_pixels

        rgba: ColorSpec = normalize_color(color)
        x0, x1 = sorted((int(x0), int(x1)))
        y0, y1 = sorted((int(y0), int(y1)))
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, self.width - 1), min(y1, self.height - 1)
        if x0 > x1 or y0 > y1:
            return
        region = self._pixels[y0 : y1 + 1, x0 : x1 + 1]
        if self.alpha_blending:
            src = np.empty_like(region)
            src[:, :] = rgba.as_tuple()
            region[:, :] = blend_pixels(region, src, 100)
        else:
            region[:, :] = rgba.as_tuple()

    def copy(self, blending: bool | None = None) -> Bitmap:
        """
        Creates a raw copy of this bitmap.

        :param blending: The copy's alpha blending flag. Same as this
            bitmap's if not specified.
        """
        return Bitmap(
            self._pixels.copy(),
            alpha_blending=self.alpha_blending if blending is None else blending,
            save_alpha=self.save_alpha,
        )

    def to_rgba(self) -> np.ndarray:
        """Returns a common RGBA uint8 array (alpha 255 = opaque)."""
        rgba = self._pixels.copy()
        rgba[:, :, 3] = alpha_to_alpha8(self._pixels[:, :, 3])
        return rgba

    def to_pil(self) -> PIL.Image.Image:
        """
        Converts the bitmap to a PIL image.

        :return: An RGBA image if the alpha channel is saved, otherwise RGB
        """
        if self.save_alpha:
            return PIL.Image.fromarray(self.to_rgba())
        return PIL.Image.fromarray(np.ascontiguousarray(self._pixels[:, :, :3]))

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height})"


__all__ = ["Bitmap", "alpha_to_alpha8", "alpha8_to_alpha"]
