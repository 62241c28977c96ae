from .bounds import BoundsConverter
from .config import (
    LoggingSettings,
    ProjectionConfig,
    ProjectionSettings,
    get_projection_config,
    load_projection_config,
)
from .errors import (
    ConfigError,
    CoordinateError,
    SphericalMercatorError,
    TileSizeError,
    UnsupportedProjectionError,
    ZoomLevelError,
)
from .geometry import BoundingBox, LonLat, MercatorPoint, PixelPoint, TileBounds
from .mercator import EARTH_RADIUS, MAX_EXTENT, convert, forward, inverse
from .observability import configure_logging
from .pixels import PixelProjector
from .projection import Projection
from .projector import (
    ProjectorFactory,
    SphericalMercator,
    create_projector,
    get_default_factory,
)
from .scale import (
    DEFAULT_TILE_SIZE,
    ZOOM_LEVELS,
    ScaleTable,
    ScaleTableCache,
    ZoomScale,
    build_scale_table,
)

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "BoundsConverter",
    "ConfigError",
    "CoordinateError",
    "DEFAULT_TILE_SIZE",
    "EARTH_RADIUS",
    "LoggingSettings",
    "LonLat",
    "MAX_EXTENT",
    "MercatorPoint",
    "PixelPoint",
    "PixelProjector",
    "Projection",
    "ProjectionConfig",
    "ProjectionSettings",
    "ProjectorFactory",
    "ScaleTable",
    "ScaleTableCache",
    "SphericalMercator",
    "SphericalMercatorError",
    "TileBounds",
    "TileSizeError",
    "UnsupportedProjectionError",
    "ZOOM_LEVELS",
    "ZoomLevelError",
    "ZoomScale",
    "build_scale_table",
    "configure_logging",
    "convert",
    "create_projector",
    "forward",
    "get_default_factory",
    "get_projection_config",
    "inverse",
    "load_projection_config",
]
