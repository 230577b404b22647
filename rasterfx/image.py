"""
Implements the class :class:`.Image`, a fluent wrapper around a :class:`.Bitmap`.

Several effects replace the bitmap they work on (rotate, flip, opacity and
partial desaturation). :class:`Image` owns the current bitmap and takes over
the handle replacement, so effects can simply be chained::

    Image("photo.png").add_filter("sepia").add_filter("rotate", 90).save("out.png")
"""

from __future__ import annotations

import logging
import os
from typing import Any, Union

import numpy as np
import PIL.Image

from .bitmap import Bitmap
from .color import ColorTypes
from .effects import EFFECTS

logger = logging.getLogger(__name__)

ImageSourceTypes = Union[str, os.PathLike, np.ndarray, PIL.Image.Image, Bitmap]
"The valid source types for creating an image"


class Image:
    """
    An image wrapping the current bitmap.

    The bitmap is accessible through :attr:`bitmap`. After an effect that
    allocates a new bitmap the previous one is dropped by the image; other
    references to it stay valid but are no longer updated.
    """

    def __init__(
        self,
        source: ImageSourceTypes | None = None,
        size: tuple[int, int] | None = None,
        bg_color: ColorTypes | None = None,
    ):
        """
        :param source: A file name, a Bitmap (referenced, not copied), a PIL
            image or a numpy RGBA/RGB uint8 array with common 8 bit alpha
        :param size: The (width, height) of a new, empty image if no source
            is passed
        :param bg_color: The background color of a new image. Fully
            transparent if not specified.

        Raises a ValueError if neither source nor size is passed
        """
        if source is not None and size is not None:
            raise ValueError("Source and size may not be specified at the same time")
        if source is None:
            if size is None:
                raise ValueError("Either a source or a size has to be passed")
            if bg_color is None:
                bitmap = Bitmap.transparent(*size)
            else:
                bitmap = Bitmap.create(*size, bg_color)
                bitmap.enable_alpha()
        elif isinstance(source, Bitmap):
            bitmap = source
        elif isinstance(source, PIL.Image.Image):
            bitmap = Bitmap.from_pil(source)
        elif isinstance(source, np.ndarray):
            bitmap = Bitmap.from_rgba(source)
        elif isinstance(source, (str, os.PathLike)):
            with PIL.Image.open(source) as pil_image:
                bitmap = Bitmap.from_pil(pil_image)
        else:
            raise ValueError(f"Unsupported image source: {type(source).__name__}")
        self._bitmap = bitmap

    @classmethod
    def open(cls, filename: str | os.PathLike) -> Image:
        """Loads an image from disk."""
        return cls(filename)

    @property
    def bitmap(self) -> Bitmap:
        """The current bitmap"""
        return self._bitmap

    @property
    def width(self) -> int:
        return self._bitmap.width

    @property
    def height(self) -> int:
        return self._bitmap.height

    def add_filter(self, name: str, *args: Any, **kwargs: Any) -> Image:
        """
        Applies a named effect from :data:`rasterfx.effects.EFFECTS`.

        :param name: The effect name, e.g. "blur" or "rotate"
        :param args: Positional effect parameters
        :param kwargs: Keyword effect parameters
        :return: This image, for chaining
        :raises ValueError: For unknown effect names
        """
        effect = EFFECTS.get(name.lower())
        if effect is None:
            raise ValueError(f"Unknown effect: {name!r}")
        result = effect(self._bitmap, *args, **kwargs)
        if isinstance(result, Bitmap) and result is not self._bitmap:
            logger.debug("Effect %s replaced %r with %r", name, self._bitmap, result)
            self._bitmap = result
        return self

    def to_pil(self) -> PIL.Image.Image:
        """Converts the current bitmap to a PIL image."""
        return self._bitmap.to_pil()

    def save(self, filename: str | os.PathLike, **params: Any) -> Image:
        """
        Saves the image, the format is derived from the file extension.

        :param filename: The target file
        :param params: Additional PIL save parameters
        :return: This image
        """
        pil_image = self.to_pil()
        if pil_image.mode == "RGBA" and str(filename).lower().endswith((".jpg", ".jpeg")):
            pil_image = pil_image.convert("RGB")
        pil_image.save(filename, **params)
        return self

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"


__all__ = ["Image", "ImageSourceTypes"]
