from __future__ import annotations

import math
from typing import Final

from .geometry import (
    D2R,
    R2D,
    LonLat,
    PixelPoint,
    PointLike,
    as_lonlat,
    as_pixel,
    saturating_exp,
)
from .scale import ScaleTable

# sin(lat) is kept inside this bound so the log-tangent stays finite at the poles.
MAX_SIN_LAT: Final[float] = 0.9999


class PixelProjector:
    """Projects geographic coordinates to world pixels at a zoom level and back."""

    def __init__(self, scales: ScaleTable) -> None:
        self.scales = scales

    @property
    def tile_size(self) -> int:
        return self.scales.tile_size

    def to_pixel(self, coordinate: PointLike, zoom: int) -> PixelPoint:
        """Convert ``[lon, lat]`` to screen pixels ``[x, y]``.

        Pixels are rounded half to even and capped at the world extent of the
        zoom level. There is no lower cap: longitudes below -180 give negative x.
        """

        lon, lat = as_lonlat(coordinate)
        scale = self.scales.level(zoom)
        f = min(max(math.sin(D2R * lat), -MAX_SIN_LAT), MAX_SIN_LAT)
        x = float(round(scale.zc + lon * scale.bc))
        y = float(round(scale.zc + 0.5 * math.log((1.0 + f) / (1.0 - f)) * -scale.cc))
        return PixelPoint(min(x, scale.ac), min(y, scale.ac))

    def to_geographic(self, pixel: PointLike, zoom: int) -> LonLat:
        """Convert screen pixels ``[x, y]`` to ``[lon, lat]``."""

        x, y = as_pixel(pixel)
        scale = self.scales.level(zoom)
        g = (y - scale.zc) / -scale.cc
        lon = (x - scale.zc) / scale.bc
        lat = R2D * (2.0 * math.atan(saturating_exp(g)) - 0.5 * math.pi)
        return LonLat(lon, lat)
