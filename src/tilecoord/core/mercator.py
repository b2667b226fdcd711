"""Spherical Web Mercator (EPSG:3857) math on a 256 px tile raster."""

from __future__ import annotations

import math
from typing import Final, Tuple

TILE_SIZE: Final[int] = 256
TILE_SHIFT: Final[int] = 8

MIN_LATITUDE: Final[float] = -85.05112878
MAX_LATITUDE: Final[float] = 85.05112878
MIN_LONGITUDE: Final[float] = -180.0
MAX_LONGITUDE: Final[float] = 180.0


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def map_size(z: int) -> int:
    """Width (and height) of the global raster at zoom ``z``, in pixels."""
    return TILE_SIZE << z


def lat_lon_to_pixel(lat: float, lon: float, z: int) -> Tuple[int, int]:
    """Project a WGS84 position to global pixel coordinates at zoom ``z``.

    Out of range input is clamped to the projection bounds. Pixels are
    quantized by flooring, so a position exactly on a pixel edge belongs to
    the pixel south/east of it.
    """
    lat = clamp(lat, MIN_LATITUDE, MAX_LATITUDE)
    lon = clamp(lon, MIN_LONGITUDE, MAX_LONGITUDE)

    x_frac = (lon + 180) / 360
    sin_lat = math.sin(lat * math.pi / 180)
    y_frac = 0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)

    size = map_size(z)
    px = int(clamp(math.floor(x_frac * size), 0, size - 1))
    py = int(clamp(math.floor(y_frac * size), 0, size - 1))
    return px, py


def pixel_to_lat_lon(px: float, py: float, z: int) -> Tuple[float, float]:
    """Inverse of :func:`lat_lon_to_pixel`, without clamping."""
    size = map_size(z)
    x_frac = px / size
    y_frac = py / size

    lat = 90 - 360 * math.atan(math.exp(-(0.5 - y_frac) * 2 * math.pi)) / math.pi
    lon = 360 * (x_frac - 0.5)
    return lat, lon


def pixel_resolution_deg(z: int) -> float:
    """Longitude span of a single pixel at zoom ``z``."""
    return 360.0 / map_size(z)
