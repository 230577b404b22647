"""Exception classes for rasterfx."""


class RasterFxError(Exception):
    """Base exception for rasterfx errors."""

    pass


class InvalidColorFormat(RasterFxError, ValueError):
    """Raised when a color is neither a 6-digit hex string nor a 3/4 element sequence."""

    pass


class InvalidColorComponent(RasterFxError, ValueError):
    """Raised when a color component lies outside its legal range."""

    pass


class InvalidAngle(RasterFxError, ValueError):
    """Raised when a rotation angle is not within -360 < angle < 360."""

    pass


class InvalidDirection(RasterFxError, ValueError):
    """Raised for flip directions other than x, y, xy or yx."""

    pass


class RegionOutOfBounds(RasterFxError, ValueError):
    """Raised when a merge rectangle extends past one of the bitmaps."""

    pass


class UnsupportedFilterKind(RasterFxError, ValueError):
    """Raised when the filter dispatcher is asked for an unknown primitive."""

    pass
