from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, NamedTuple, Sequence, Union

from .errors import CoordinateError

D2R: Final[float] = math.pi / 180.0
R2D: Final[float] = 180.0 / math.pi


def saturating_exp(value: float) -> float:
    """``math.exp`` that returns inf instead of raising on overflow."""

    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


class LonLat(NamedTuple):
    """Geographic coordinate in degrees, ordered as [longitude, latitude]."""

    lon: float
    lat: float


class PixelPoint(NamedTuple):
    x: float
    y: float


class MercatorPoint(NamedTuple):
    """EPSG:900913 coordinate in meters, ordered as [x, y]."""

    x: float
    y: float


class BoundingBox(NamedTuple):
    """Bounding box ordered as [west, south, east, north].

    Units follow the projection the box is expressed in: degrees for WGS84,
    meters for EPSG:900913.
    """

    west: float
    south: float
    east: float
    north: float

    @property
    def lower_left(self) -> tuple[float, float]:
        return (self.west, self.south)

    @property
    def upper_right(self) -> tuple[float, float]:
        return (self.east, self.north)


@dataclass(frozen=True)
class TileBounds:
    """Inclusive tile index range at one zoom level."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def tile_count(self) -> int:
        width = int(self.max_x - self.min_x) + 1
        height = int(self.max_y - self.min_y) + 1
        if width <= 0 or height <= 0:
            return 0
        return width * height

    def to_dict(self) -> dict[str, float]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
        }


PointLike = Union[LonLat, PixelPoint, MercatorPoint, Sequence[float]]
BBoxLike = Union[BoundingBox, Sequence[float]]


def _floats(values: Sequence[float], *, expected: int, kind: str) -> tuple[float, ...]:
    try:
        count = len(values)
    except TypeError as exc:
        raise CoordinateError(f"{kind} must be a sequence, got {values!r}") from exc
    if count != expected:
        raise CoordinateError(
            f"{kind} must have {expected} values, got {count}: {values!r}"
        )
    try:
        return tuple(float(value) for value in values)
    except (TypeError, ValueError) as exc:
        raise CoordinateError(f"{kind} must be numeric: {values!r}") from exc


def as_lonlat(value: PointLike) -> LonLat:
    if isinstance(value, LonLat):
        return value
    return LonLat(*_floats(value, expected=2, kind="coordinate"))


def as_pixel(value: PointLike) -> PixelPoint:
    if isinstance(value, PixelPoint):
        return value
    return PixelPoint(*_floats(value, expected=2, kind="pixel"))


def as_mercator(value: PointLike) -> MercatorPoint:
    if isinstance(value, MercatorPoint):
        return value
    return MercatorPoint(*_floats(value, expected=2, kind="mercator point"))


def as_bbox(value: BBoxLike) -> BoundingBox:
    if isinstance(value, BoundingBox):
        return value
    return BoundingBox(*_floats(value, expected=4, kind="bounding box"))
