from __future__ import annotations

import math

from . import mercator
from .geometry import BBoxLike, BoundingBox, TileBounds, as_bbox
from .pixels import PixelProjector
from .projection import Projection, ProjectionLike


def _flip_row(row: float, zoom: int) -> float:
    return (2.0**zoom - 1.0) - row


class BoundsConverter:
    """Converts between tile indices and bounding boxes at a zoom level."""

    def __init__(self, pixels: PixelProjector) -> None:
        self.pixels = pixels

    @property
    def tile_size(self) -> int:
        return self.pixels.tile_size

    def tile_to_bounding_box(
        self,
        x: float,
        y: float,
        zoom: int,
        tms_style: bool = False,
        srs: ProjectionLike = Projection.WGS84,
    ) -> BoundingBox:
        """Return the ``[w, s, e, n]`` box of tile x/y at ``zoom``.

        With ``tms_style`` the row is counted from the south. The box is in
        WGS84 degrees unless ``srs`` asks for EPSG:900913.
        """

        target = Projection.parse(srs)
        self.pixels.scales.level(zoom)
        x = float(x)
        row = _flip_row(float(y), zoom) if tms_style else float(y)
        size = self.tile_size

        # Pixel row 0 is at the top, so the lower-left corner sits one row down.
        lower_left = (x * size, (row + 1.0) * size)
        upper_right = ((x + 1.0) * size, row * size)
        west, south = self.pixels.to_geographic(lower_left, zoom)
        east, north = self.pixels.to_geographic(upper_right, zoom)
        bbox = BoundingBox(west, south, east, north)

        if target is Projection.WEB_MERCATOR:
            return mercator.convert(bbox, Projection.WEB_MERCATOR)
        return bbox

    def bounding_box_to_tile_range(
        self,
        bbox: BBoxLike,
        zoom: int,
        tms_style: bool = False,
        srs: ProjectionLike = Projection.WGS84,
    ) -> TileBounds:
        """Return the tile index range covering ``[w, s, e, n]`` at ``zoom``.

        Only the lower bounds are clamped to 0; upper bounds can run past the
        tile grid for boxes outside the world. Inverted boxes are returned as
        computed.
        """

        source = Projection.parse(srs)
        box = as_bbox(bbox)
        if source is Projection.WEB_MERCATOR:
            box = mercator.convert(box, Projection.WGS84)

        size = self.tile_size
        px_ll = self.pixels.to_pixel(box.lower_left, zoom)
        px_ur = self.pixels.to_pixel(box.upper_right, zoom)

        # Y = 0 is the top row, so the upper-right corner gives the smaller row.
        xs = (
            float(math.floor(px_ll.x / size)),
            float(math.floor((px_ur.x - 1.0) / size)),
        )
        ys = (
            float(math.floor(px_ur.y / size)),
            float(math.floor((px_ll.y - 1.0) / size)),
        )

        min_x = max(0.0, min(xs))
        min_y = max(0.0, min(ys))
        max_x = max(xs)
        max_y = max(ys)

        if tms_style:
            min_y, max_y = _flip_row(max_y, zoom), _flip_row(min_y, zoom)

        return TileBounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
