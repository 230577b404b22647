# rasterfx Filters
"""
Primitive filter dispatch.

Importing this package registers the default numpy/OpenCV primitives.
"""

from .base import (
    FilterKind,
    FilterApplier,
    PRIMITIVE_REGISTRY,
    register_primitive,
    apply_filter,
    apply_primitive_filter,
    get_filter_applier,
    set_filter_applier,
    use_filter_applier,
)
from . import primitives

__all__ = [
    "FilterKind",
    "FilterApplier",
    "PRIMITIVE_REGISTRY",
    "register_primitive",
    "apply_filter",
    "apply_primitive_filter",
    "get_filter_applier",
    "set_filter_applier",
    "use_filter_applier",
    "primitives",
]
