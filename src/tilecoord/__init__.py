"""Tile coordinates for tiled web maps: URLs, QuadKeys, pixels and lat/lon."""

__version__ = "0.1.0"

from tilecoord.core.errors import InvalidTilePath, InvalidUrl, InvalidZoom, TileCoordinateError
from tilecoord.core.profile import DEFAULT_PROFILE, AxisConvention, Profile
from tilecoord.core.profiles import BUILTIN_PROFILES, get_profile
from tilecoord.core.tile import TileCoordinate, flip_y

__all__ = [
    "TileCoordinate",
    "flip_y",
    "Profile",
    "AxisConvention",
    "DEFAULT_PROFILE",
    "BUILTIN_PROFILES",
    "get_profile",
    "TileCoordinateError",
    "InvalidUrl",
    "InvalidTilePath",
    "InvalidZoom",
]
