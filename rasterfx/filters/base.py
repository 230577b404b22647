# rasterfx Filters - Dispatcher
"""
Dispatcher for primitive filters.

A primitive filter is a named single pass effect (grayscale, a blur kernel,
...) applied to a bitmap in place. The effects in :mod:`rasterfx.effects`
never touch pixels for these themselves; they call :func:`apply_filter`
which hands the work to a *filter applier*.

The applier is injectable. By default :func:`apply_primitive_filter` runs
the implementations registered with :func:`register_primitive`; tests or
alternative backends can replace it:

    with use_filter_applier(recorder):
        effects.blur(bitmap, 3)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, TYPE_CHECKING

from rasterfx.exceptions import UnsupportedFilterKind

if TYPE_CHECKING:
    from rasterfx.bitmap import Bitmap

logger = logging.getLogger(__name__)


class FilterKind(str, Enum):
    """The primitive filters a filter applier has to provide."""

    GRAYSCALE = "grayscale"
    NEGATE = "negate"
    BRIGHTNESS = "brightness"  # level
    CONTRAST = "contrast"  # level
    COLORIZE = "colorize"  # red, green, blue, alpha
    EDGEDETECT = "edgedetect"
    EMBOSS = "emboss"
    GAUSSIAN_BLUR = "gaussian_blur"
    SELECTIVE_BLUR = "selective_blur"
    MEAN_REMOVAL = "mean_removal"
    SMOOTH = "smooth"  # weight
    PIXELATE = "pixelate"  # block_size, advanced

    @classmethod
    def parse(cls, kind: FilterKind | str) -> FilterKind:
        """Resolve a kind from its enum value or case-insensitive name.

        Raises:
            UnsupportedFilterKind: If the name is unknown
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            name = kind.strip().lower()
            try:
                return cls(name)
            except ValueError:
                pass
        raise UnsupportedFilterKind(f"Unsupported filter kind: {kind!r}")


FilterApplier = Callable[..., None]
"Callable ``(bitmap, kind, *params) -> None`` applying a primitive in place"

PrimitiveFunc = Callable[..., None]
"Callable ``(pixels, *params) -> None`` transforming a pixel array in place"

# Global registry
PRIMITIVE_REGISTRY: dict[FilterKind, PrimitiveFunc] = {}


def register_primitive(kind: FilterKind | str) -> Callable[[PrimitiveFunc], PrimitiveFunc]:
    """Decorator to register the default implementation of a primitive filter."""
    kind = FilterKind.parse(kind)

    def decorator(func: PrimitiveFunc) -> PrimitiveFunc:
        PRIMITIVE_REGISTRY[kind] = func
        return func

    return decorator


def apply_primitive_filter(bitmap: 'Bitmap', kind: FilterKind | str, *params: Any) -> None:
    """Default filter applier running the registered numpy implementations.

    The bitmap's pixel array object is modified in place, never replaced.
    """
    kind = FilterKind.parse(kind)
    func = PRIMITIVE_REGISTRY.get(kind)
    if func is None:
        raise UnsupportedFilterKind(f"No primitive registered for {kind.value!r}")
    func(bitmap.pixels, *params)


_default_applier: FilterApplier = apply_primitive_filter


def get_filter_applier() -> FilterApplier:
    """Returns the process-wide default filter applier."""
    return _default_applier


def set_filter_applier(applier: FilterApplier | None) -> FilterApplier:
    """Replace the default filter applier.

    Args:
        applier: New applier, None restores :func:`apply_primitive_filter`

    Returns:
        The previous applier
    """
    global _default_applier
    previous = _default_applier
    _default_applier = applier if applier is not None else apply_primitive_filter
    logger.debug("Filter applier set to %r", _default_applier)
    return previous


@contextmanager
def use_filter_applier(applier: FilterApplier) -> Iterator[FilterApplier]:
    """Temporarily install a filter applier."""
    previous = set_filter_applier(applier)
    try:
        yield applier
    finally:
        set_filter_applier(previous)


def apply_filter(
    bitmap: 'Bitmap',
    kind: FilterKind | str,
    *params: Any,
    applier: FilterApplier | None = None,
) -> None:
    """Apply a primitive filter to a bitmap in place.

    Args:
        bitmap: The bitmap to modify
        kind: The primitive, as FilterKind or name
        *params: Primitive parameters, already clamped by the caller
        applier: Applier to use instead of the default one

    Raises:
        UnsupportedFilterKind: For unknown kinds, before anything is applied
    """
    kind = FilterKind.parse(kind)
    applier = applier if applier is not None else _default_applier
    logger.debug("Applying %s%r to %r", kind.value, params, bitmap)
    applier(bitmap, kind, *params)
