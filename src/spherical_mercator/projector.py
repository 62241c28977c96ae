from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from . import mercator
from .bounds import BoundsConverter
from .config import ProjectionConfig
from .geometry import (
    BBoxLike,
    BoundingBox,
    LonLat,
    MercatorPoint,
    PixelPoint,
    PointLike,
    TileBounds,
)
from .pixels import PixelProjector
from .projection import Projection, ProjectionLike
from .scale import DEFAULT_TILE_SIZE, ScaleTable, ScaleTableCache

logger = logging.getLogger(__name__)


class SphericalMercator:
    """Converts between lon/lat, world pixels, tile indices and EPSG:900913.

    Scale tables come from ``cache`` (the default factory's cache when
    omitted), so projectors with the same tile size share one table.
    ``tms_style`` and ``srs`` are the defaults used by the tile operations
    when a call leaves them out.
    """

    def __init__(
        self,
        tile_size: int = DEFAULT_TILE_SIZE,
        *,
        cache: Optional[ScaleTableCache] = None,
        tms_style: bool = False,
        srs: ProjectionLike = Projection.WGS84,
    ) -> None:
        if cache is None:
            cache = get_default_factory().cache
        self.scales: ScaleTable = cache.get(tile_size)
        self.tms_style = bool(tms_style)
        self.srs = Projection.parse(srs)
        self._pixels = PixelProjector(self.scales)
        self._bounds = BoundsConverter(self._pixels)

    def __repr__(self) -> str:
        return (
            f"SphericalMercator(tile_size={self.size}, "
            f"tms_style={self.tms_style}, srs={self.srs.value!r})"
        )

    @classmethod
    def from_config(
        cls,
        config: ProjectionConfig,
        *,
        cache: Optional[ScaleTableCache] = None,
    ) -> "SphericalMercator":
        settings = config.projection
        projector = cls(
            settings.tile_size,
            cache=cache,
            tms_style=settings.tms_style,
            srs=settings.srs,
        )
        logger.debug(
            "projector.configured",
            extra={
                "tile_size": settings.tile_size,
                "tms_style": settings.tms_style,
                "srs": settings.srs.value,
            },
        )
        return projector

    @property
    def size(self) -> int:
        return self.scales.tile_size

    def to_pixel(self, coordinate: PointLike, zoom: int) -> PixelPoint:
        return self._pixels.to_pixel(coordinate, zoom)

    def to_geographic(self, pixel: PointLike, zoom: int) -> LonLat:
        return self._pixels.to_geographic(pixel, zoom)

    def tile_to_bounding_box(
        self,
        x: float,
        y: float,
        zoom: int,
        tms_style: Optional[bool] = None,
        srs: Optional[ProjectionLike] = None,
    ) -> BoundingBox:
        return self._bounds.tile_to_bounding_box(
            x,
            y,
            zoom,
            tms_style=self.tms_style if tms_style is None else tms_style,
            srs=self.srs if srs is None else srs,
        )

    def bounding_box_to_tile_range(
        self,
        bbox: BBoxLike,
        zoom: int,
        tms_style: Optional[bool] = None,
        srs: Optional[ProjectionLike] = None,
    ) -> TileBounds:
        return self._bounds.bounding_box_to_tile_range(
            bbox,
            zoom,
            tms_style=self.tms_style if tms_style is None else tms_style,
            srs=self.srs if srs is None else srs,
        )

    def convert(
        self, bbox: BBoxLike, to: ProjectionLike = Projection.WGS84
    ) -> BoundingBox:
        return mercator.convert(bbox, to)

    def forward(self, point: PointLike) -> MercatorPoint:
        return mercator.forward(point)

    def inverse(self, point: PointLike) -> LonLat:
        return mercator.inverse(point)

    px = to_pixel
    ll = to_geographic
    bbox = tile_to_bounding_box
    xyz = bounding_box_to_tile_range


class ProjectorFactory:
    """Builds projectors that share the scale tables of one cache."""

    def __init__(self, cache: Optional[ScaleTableCache] = None) -> None:
        self.cache = cache if cache is not None else ScaleTableCache()

    def create(
        self,
        tile_size: int = DEFAULT_TILE_SIZE,
        *,
        tms_style: bool = False,
        srs: ProjectionLike = Projection.WGS84,
    ) -> SphericalMercator:
        return SphericalMercator(
            tile_size, cache=self.cache, tms_style=tms_style, srs=srs
        )

    def from_config(self, config: ProjectionConfig) -> SphericalMercator:
        return SphericalMercator.from_config(config, cache=self.cache)


@lru_cache(maxsize=1)
def get_default_factory() -> ProjectorFactory:
    return ProjectorFactory()


def create_projector(tile_size: int = DEFAULT_TILE_SIZE) -> SphericalMercator:
    return get_default_factory().create(tile_size)
