from __future__ import annotations

import logging
import math
import operator
import threading
from dataclasses import dataclass
from typing import Final

from .errors import TileSizeError, ZoomLevelError

logger = logging.getLogger(__name__)

DEFAULT_TILE_SIZE: Final[int] = 256
ZOOM_LEVELS: Final[int] = 30


@dataclass(frozen=True)
class ZoomScale:
    """Scale constants for one zoom level.

    ``bc`` is pixels per degree of longitude, ``cc`` pixels per radian of
    mercator latitude, ``zc`` the pixel offset of the world center and ``ac``
    the full pixel extent of the world.
    """

    bc: float
    cc: float
    zc: float
    ac: float


def _check_tile_size(tile_size: object) -> int:
    if isinstance(tile_size, bool):
        raise TileSizeError(f"tile size must be an integer, got {tile_size!r}")
    try:
        size = operator.index(tile_size)
    except TypeError as exc:
        raise TileSizeError(
            f"tile size must be an integer, got {tile_size!r}"
        ) from exc
    if size <= 0:
        raise TileSizeError(f"tile size must be > 0, got {size}")
    return size


class ScaleTable:
    """Per-zoom scale constants for one tile size, levels 0..29."""

    def __init__(self, tile_size: int, levels: tuple[ZoomScale, ...]) -> None:
        self.tile_size = tile_size
        self._levels = levels

    def __len__(self) -> int:
        return len(self._levels)

    def __repr__(self) -> str:
        return f"ScaleTable(tile_size={self.tile_size}, levels={len(self._levels)})"

    def level(self, zoom: int) -> ZoomScale:
        if isinstance(zoom, bool):
            raise ZoomLevelError(f"zoom must be an integer, got {zoom!r}")
        try:
            index = operator.index(zoom)
        except TypeError as exc:
            raise ZoomLevelError(f"zoom must be an integer, got {zoom!r}") from exc
        if not (0 <= index < len(self._levels)):
            raise ZoomLevelError(
                f"zoom out of range: {index} (expected 0..{len(self._levels) - 1})"
            )
        return self._levels[index]

    @property
    def bc(self) -> tuple[float, ...]:
        return tuple(scale.bc for scale in self._levels)

    @property
    def cc(self) -> tuple[float, ...]:
        return tuple(scale.cc for scale in self._levels)

    @property
    def zc(self) -> tuple[float, ...]:
        return tuple(scale.zc for scale in self._levels)

    @property
    def ac(self) -> tuple[float, ...]:
        return tuple(scale.ac for scale in self._levels)


def build_scale_table(tile_size: int = DEFAULT_TILE_SIZE) -> ScaleTable:
    size = _check_tile_size(tile_size)
    levels: list[ZoomScale] = []
    pixels = float(size)
    for _ in range(ZOOM_LEVELS):
        levels.append(
            ZoomScale(
                bc=pixels / 360.0,
                cc=pixels / (2.0 * math.pi),
                zc=pixels / 2.0,
                ac=pixels,
            )
        )
        pixels *= 2.0
    return ScaleTable(size, tuple(levels))


class ScaleTableCache:
    """Compute-if-absent map of scale tables keyed by tile size."""

    def __init__(self) -> None:
        self._tables: dict[int, ScaleTable] = {}
        self._lock = threading.Lock()

    def __contains__(self, tile_size: object) -> bool:
        return tile_size in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def get(self, tile_size: int = DEFAULT_TILE_SIZE) -> ScaleTable:
        size = _check_tile_size(tile_size)
        table = self._tables.get(size)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(size)
            if table is None:
                table = build_scale_table(size)
                self._tables[size] = table
                logger.debug(
                    "scale_table.built",
                    extra={"tile_size": size, "levels": len(table)},
                )
        return table

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
