"""
rasterfx - Raster image effects with alpha-aware compositing for Python
"""

from .exceptions import (
    RasterFxError,
    InvalidColorFormat,
    InvalidColorComponent,
    InvalidAngle,
    InvalidDirection,
    RegionOutOfBounds,
    UnsupportedFilterKind,
)
from .color import ColorSpec, ColorTypes, normalize_color
from .bitmap import Bitmap
from .compositor import merge_alpha
from .filters import FilterKind, apply_filter, set_filter_applier, use_filter_applier
from .transform import flip, rotate
from .text import TextParams, render_text
from .image import Image
from .config import settings
from . import effects, params

__all__ = [
    # Errors
    "RasterFxError",
    "InvalidColorFormat",
    "InvalidColorComponent",
    "InvalidAngle",
    "InvalidDirection",
    "RegionOutOfBounds",
    "UnsupportedFilterKind",
    # Colors
    "ColorSpec",
    "ColorTypes",
    "normalize_color",
    # Core
    "Bitmap",
    "Image",
    "merge_alpha",
    "flip",
    "rotate",
    "TextParams",
    "render_text",
    # Filters
    "FilterKind",
    "apply_filter",
    "set_filter_applier",
    "use_filter_applier",
    # Modules
    "effects",
    "params",
    "settings",
]

__version__ = "0.1.0"
