from __future__ import annotations

from enum import Enum
from typing import Final, Union

from .errors import UnsupportedProjectionError

_ALIASES: Final[dict[str, str]] = {
    "wgs84": "wgs84",
    "epsg:4326": "wgs84",
    "4326": "wgs84",
    "900913": "900913",
    "epsg:900913": "900913",
    "epsg:3857": "900913",
    "3857": "900913",
    "web_mercator": "900913",
    "webmercator": "900913",
}


class Projection(str, Enum):
    WGS84 = "wgs84"
    WEB_MERCATOR = "900913"

    @classmethod
    def parse(cls, value: Union["Projection", str]) -> "Projection":
        """Resolve a projection member from a member, its value or a CRS alias."""

        if isinstance(value, Projection):
            return value
        if not isinstance(value, str):
            raise UnsupportedProjectionError(f"Unsupported projection: {value!r}")

        normalized = _ALIASES.get(value.strip().lower())
        if normalized is None:
            raise UnsupportedProjectionError(
                f"Unsupported projection={value!r}; supported: "
                f"{sorted(member.value for member in cls)}"
            )
        return cls(normalized)


ProjectionLike = Union[Projection, str]
