from __future__ import annotations


class SphericalMercatorError(Exception):
    """Base error for spherical mercator conversions."""


class ZoomLevelError(SphericalMercatorError, ValueError):
    """Raised when a zoom level is not an integer inside the scale table."""


class TileSizeError(SphericalMercatorError, ValueError):
    """Raised when a tile size is not a positive integer."""


class CoordinateError(SphericalMercatorError, ValueError):
    """Raised when a coordinate or bounding box has the wrong shape."""


class UnsupportedProjectionError(SphericalMercatorError, ValueError):
    """Raised when a projection name is not WGS84 or EPSG:900913."""


class ConfigError(SphericalMercatorError, ValueError):
    """Raised when the projection config file cannot be used."""
