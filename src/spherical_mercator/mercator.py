from __future__ import annotations

import math
from typing import Final

from .geometry import (
    D2R,
    R2D,
    BBoxLike,
    BoundingBox,
    LonLat,
    MercatorPoint,
    PointLike,
    as_bbox,
    as_lonlat,
    as_mercator,
    saturating_exp,
)
from .projection import Projection, ProjectionLike

# EPSG:900913 sphere radius in meters.
EARTH_RADIUS: Final[float] = 6378137.0
MAX_EXTENT: Final[float] = 20037508.342789244


def _clamp_extent(value: float) -> float:
    return max(-MAX_EXTENT, min(MAX_EXTENT, value))


def forward(point: PointLike) -> MercatorPoint:
    """Convert WGS84 ``[lon, lat]`` to EPSG:900913 ``[x, y]``.

    Values beyond the max extent (e.g. the poles) are clamped to it.
    """

    lon, lat = as_lonlat(point)
    x = EARTH_RADIUS * lon * D2R
    tangent = math.tan(math.pi * 0.25 + 0.5 * lat * D2R)
    if tangent <= 0.0:
        # Only reachable for |lat| >= 90, where the log has no real value.
        y = MAX_EXTENT if lat > 0.0 else -MAX_EXTENT
    else:
        y = EARTH_RADIUS * math.log(tangent)
    return MercatorPoint(_clamp_extent(x), _clamp_extent(y))


def inverse(point: PointLike) -> LonLat:
    """Convert EPSG:900913 ``[x, y]`` to WGS84 ``[lon, lat]``."""

    x, y = as_mercator(point)
    lon = x * R2D / EARTH_RADIUS
    lat = (math.pi * 0.5 - 2.0 * math.atan(saturating_exp(-y / EARTH_RADIUS))) * R2D
    return LonLat(lon, lat)


def convert(bbox: BBoxLike, to: ProjectionLike = Projection.WGS84) -> BoundingBox:
    """Reproject ``[w, s, e, n]`` into ``to``.

    The input is assumed to be in the other supported projection.
    """

    box = as_bbox(bbox)
    target = Projection.parse(to)
    transform = forward if target is Projection.WEB_MERCATOR else inverse
    west, south = transform(box.lower_left)
    east, north = transform(box.upper_right)
    return BoundingBox(west, south, east, north)
