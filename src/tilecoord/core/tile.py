"""Tile identity (x, y, z) and its conversions.

Tiles are always stored in the canonical WMTS/Google axis convention: the
origin is the north-west corner and y grows southward. Other conventions are
translated when a tile is built from input and when a URL is rendered.

Quadrants are numbered as in Bing QuadKeys::

     -------
    | 0 | 1 |
    |---+---|
    | 2 | 3 |
     -------
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from tilecoord.core import mercator
from tilecoord.core.errors import InvalidTilePath, InvalidZoom
from tilecoord.core.profile import DEFAULT_PROFILE, AxisConvention, Profile, parse_convention
from tilecoord.core.url import parse_tile_url, render_template

QUADKEY_DIGITS = frozenset("0123")

# tile-relative pixel offsets of the corners 0..3 and the centre (4)
_CORNER_OFFSETS = (
    (0, 0),
    (mercator.TILE_SIZE, 0),
    (0, mercator.TILE_SIZE),
    (mercator.TILE_SIZE, mercator.TILE_SIZE),
    (mercator.TILE_SIZE // 2, mercator.TILE_SIZE // 2),
)

ConventionLike = Union[AxisConvention, str]


def flip_y(y: int, z: int) -> int:
    """Convert a row index between the canonical and TMS conventions."""
    return ((1 << z) - 1) - y


def _check_path(path: object) -> str:
    if not isinstance(path, str):
        raise InvalidTilePath(f"Invalid tile path: {path!r}")
    for char in path:
        if char not in QUADKEY_DIGITS:
            raise InvalidTilePath(f"Invalid tile path: {path!r}")
    return path


@dataclass(frozen=True)
class TileCoordinate:
    x: int = 0
    y: int = 0
    z: int = 0

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    # -- construction --------------------------------------------------------

    @classmethod
    def create(
        cls,
        x: int,
        y: int,
        z: int,
        convention: Optional[ConventionLike] = None,
        profile: Profile = DEFAULT_PROFILE,
    ) -> TileCoordinate:
        """Build a tile, normalizing the y axis and the zoom level.

        ``convention`` overrides the profile's axis convention. Zoom bounds
        replace ``z`` without rescaling ``x`` and ``y``; the TMS flip is then
        applied at the resulting zoom.
        """
        axis = profile.axis_convention if convention is None else parse_convention(convention)
        z = profile.clamp_zoom(int(z))
        x = int(x)
        y = int(y)
        if axis is AxisConvention.TMS:
            y = flip_y(y, z)
        return cls(x, y, z)

    @classmethod
    def from_url(
        cls,
        url: str,
        profile: Profile = DEFAULT_PROFILE,
        convention: Optional[ConventionLike] = None,
    ) -> TileCoordinate:
        """Build a tile from the coordinates embedded in a tile URL.

        Raises:
            InvalidUrl: If the URL carries no recognizable tile coordinates.
        """
        z, x, y = parse_tile_url(url)
        return cls.create(x, y, z, convention=convention, profile=profile)

    @classmethod
    def from_quadkey(cls, quadkey: str, profile: Profile = DEFAULT_PROFILE) -> TileCoordinate:
        """Build a tile from a Bing QuadKey.

        Zoom bounds act on the path: a key deeper than ``max_zoom`` is cut
        short and a key shallower than ``min_zoom`` continues into quadrant 0.
        Unlike ``create``, which swaps z and keeps x and y, this keeps the
        result inside the area the key points at.

        Raises:
            InvalidTilePath: If the key holds characters other than 0-3.
        """
        path = _check_path(quadkey)
        z = profile.clamp_zoom(len(path))
        path = path[:z].ljust(z, "0")
        return cls().descendant(path)

    @classmethod
    def from_lat_lon(
        cls,
        lat: float,
        lon: float,
        z: int,
        profile: Profile = DEFAULT_PROFILE,
    ) -> TileCoordinate:
        """Return the tile containing a WGS84 position; input is clamped."""
        z = profile.clamp_zoom(int(z))
        px, py = mercator.lat_lon_to_pixel(lat, lon, z)
        return cls(px >> mercator.TILE_SHIFT, py >> mercator.TILE_SHIFT, z)

    @classmethod
    def from_pixel(
        cls,
        px: float,
        py: float,
        z: int,
        profile: Profile = DEFAULT_PROFILE,
    ) -> TileCoordinate:
        """Return the tile containing a global pixel; input is clamped."""
        z = profile.clamp_zoom(int(z))
        last = mercator.map_size(z) - 1
        px = int(mercator.clamp(px, 0, last))
        py = int(mercator.clamp(py, 0, last))
        return cls(px >> mercator.TILE_SHIFT, py >> mercator.TILE_SHIFT, z)

    # -- quadtree navigation -------------------------------------------------

    def ancestor(self, levels: int = 1) -> TileCoordinate:
        """Return the tile ``levels`` zoom levels up that contains this one.

        Raises:
            InvalidZoom: If ``levels`` is negative or larger than ``z``.
        """
        if levels < 0:
            raise InvalidZoom(f"Cannot go up a negative number of levels: {levels}")
        if self.z - levels < 0:
            raise InvalidZoom(f"Tile {self} has no ancestor {levels} levels up")
        return TileCoordinate(self.x >> levels, self.y >> levels, self.z - levels)

    def descendant(self, path: str = "0") -> TileCoordinate:
        """Follow a QuadKey path down from this tile.

        An empty path returns this tile.

        Raises:
            InvalidTilePath: If the path holds characters other than 0-3.
        """
        x, y, z = self.x, self.y, self.z
        for digit in _check_path(path):
            quadrant = int(digit)
            x = (x << 1) | (quadrant & 1)
            y = (y << 1) | (quadrant >> 1)
            z += 1
        return TileCoordinate(x, y, z)

    def children(self) -> Tuple[TileCoordinate, ...]:
        return tuple(self.descendant(digit) for digit in "0123")

    @property
    def quadrant(self) -> int:
        """Quadrant digit of this tile inside its parent."""
        return (self.x & 1) | ((self.y & 1) << 1)

    def to_quadkey(self) -> str:
        digits = []
        for level in range(self.z, 0, -1):
            mask = 1 << (level - 1)
            digit = 0
            if self.x & mask:
                digit += 1
            if self.y & mask:
                digit += 2
            digits.append(str(digit))
        return "".join(digits)

    # -- serialization -------------------------------------------------------

    @property
    def is_valid(self) -> bool:
        limit = 1 << self.z if self.z >= 0 else 0
        return 0 <= self.x < limit and 0 <= self.y < limit

    def y_in(self, convention: ConventionLike) -> int:
        """Row index of this tile expressed in another axis convention."""
        if parse_convention(convention) is AxisConvention.TMS:
            return flip_y(self.y, self.z)
        return self.y

    def to_url(
        self,
        pattern: Optional[str] = None,
        prefixes: Optional[Sequence[str]] = None,
        profile: Profile = DEFAULT_PROFILE,
        rng: Optional[random.Random] = None,
    ) -> str:
        """Render a tile URL from a template such as ``http://{{p}}host/{{z}}/{{x}}/{{y}}.png``.

        ``pattern`` and ``prefixes`` default to the profile's template and
        prefix list. The y value is written in the profile's axis convention.
        """
        template = profile.url_template if pattern is None else pattern
        values = {"x": self.x, "y": self.y_in(profile.axis_convention), "z": self.z}
        return render_template(
            template,
            values,
            prefixes=profile.url_prefixes if prefixes is None else prefixes,
            open_token=profile.placeholder_open,
            close_token=profile.placeholder_close,
            rng=rng,
        )

    def to_pixel(self, local_x: int = 0, local_y: int = 0) -> Tuple[int, int]:
        """Global pixel of a tile-relative offset; offsets are not clamped."""
        return (
            (self.x << mercator.TILE_SHIFT) + local_x,
            (self.y << mercator.TILE_SHIFT) + local_y,
        )

    def to_lat_lon(self, local_x: float = 0, local_y: float = 0) -> Tuple[float, float]:
        """Latitude and longitude of a tile-relative pixel offset."""
        px, py = self.to_pixel(local_x, local_y)
        return mercator.pixel_to_lat_lon(px, py, self.z)

    def corner(self, n: int = 4) -> Tuple[float, float]:
        """Latitude and longitude of a corner.

        ``0`` north-west, ``1`` north-east, ``2`` south-west, ``3`` south-east
        and ``4`` the centre of the tile.
        """
        if not 0 <= n < len(_CORNER_OFFSETS):
            raise ValueError(f"Corner must be between 0 and 4, got {n}")
        return self.to_lat_lon(*_CORNER_OFFSETS[n])
