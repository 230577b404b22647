"""
Text overlay using TrueType fonts.

The text is drawn with Pillow onto an RGBA copy of the bitmap and the result
is written back into the bitmap's pixel array, so the bitmap object stays
the same.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal

import numpy as np
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .bitmap import Bitmap, alpha8_to_alpha
from .color import ColorSpec, normalize_color
from .config import settings

logger = logging.getLogger(__name__)

TextPosition = Literal["tl", "t", "tr", "l", "center", "r", "bl", "b", "br"]
"Anchor of the text block on the canvas"


class TextParams(BaseModel):
    """Placement and styling of a text overlay."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    position: TextPosition = "b"
    font_size: int = Field(default_factory=lambda: settings.TEXT_FONT_SIZE, gt=0)
    color: ColorSpec = ColorSpec(255, 255, 255, 0)
    offset_x: int = 0
    offset_y: int = 0
    stroke_width: int = Field(default=0, ge=0)
    stroke_color: ColorSpec = ColorSpec(0, 0, 0, 0)

    @field_validator("color", "stroke_color", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> ColorSpec:
        return normalize_color(value)


def _anchor_origin(
    position: str, canvas: tuple[int, int], box: tuple[int, int, int, int]
) -> tuple[int, int]:
    """Top-left drawing origin placing the text box at given position."""
    width, height = canvas
    left, top, right, bottom = box
    text_w, text_h = right - left, bottom - top

    if position in ("tl", "l", "bl"):
        x = 0
    elif position in ("tr", "r", "br"):
        x = width - text_w
    else:
        x = (width - text_w) // 2

    if position in ("tl", "t", "tr"):
        y = 0
    elif position in ("bl", "b", "br"):
        y = height - text_h
    else:
        y = (height - text_h) // 2

    # The bounding box may not start at the drawing origin
    return x - left, y - top


def render_text(
    image: Bitmap,
    text: str,
    font_file: str | os.PathLike,
    params: TextParams | dict[str, Any] | None = None,
) -> Bitmap:
    """
    Renders text onto the bitmap in place.

    :param image: The bitmap to draw onto
    :param text: The text, may contain line breaks
    :param font_file: Path of a TrueType font file
    :param params: TextParams or a dict of its fields
    :return: The same bitmap
    :raises FileNotFoundError: If the font file does not exist
    """
    if params is None:
        params = TextParams()
    elif not isinstance(params, TextParams):
        params = TextParams(**params)
    if not os.path.isfile(font_file):
        raise FileNotFoundError(f"Font file not found: {font_file}")

    font = PIL.ImageFont.truetype(os.fspath(font_file), params.font_size)
    canvas = PIL.Image.fromarray(image.to_rgba())
    draw = PIL.ImageDraw.Draw(canvas)
    box = draw.multiline_textbbox((0, 0), text, font=font, stroke_width=params.stroke_width)
    x, y = _anchor_origin(params.position, canvas.size, box)
    x += params.offset_x
    y += params.offset_y

    draw.multiline_text(
        (x, y),
        text,
        font=font,
        fill=params.color.to_rgba8(),
        stroke_width=params.stroke_width,
        stroke_fill=params.stroke_color.to_rgba8(),
    )
    rgba = np.asarray(canvas, dtype=np.uint8)
    image.pixels[:, :, :3] = rgba[:, :, :3]
    image.pixels[:, :, 3] = alpha8_to_alpha(rgba[:, :, 3])
    logger.debug("Rendered %d characters at %s onto %r", len(text), (x, y), image)
    return image


__all__ = ["TextParams", "TextPosition", "render_text"]
