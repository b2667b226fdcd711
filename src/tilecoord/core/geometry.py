from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shapely import wkt
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from tilecoord.core.tile import TileCoordinate


@dataclass(frozen=True)
class TileBounds:
    west: float
    south: float
    east: float
    north: float


def polygon_from_wkt(wkt_str: str) -> BaseGeometry:
    """Parse a lon/lat query area; only non-empty (multi)polygons qualify."""
    area = wkt.loads(wkt_str)
    if not isinstance(area, (Polygon, MultiPolygon)):
        raise ValueError(f"Query area must be a Polygon or MultiPolygon, got {area.geom_type}")
    if area.is_empty:
        raise ValueError("Query area is empty")
    return area


def bbox_to_wkt(minx: float, miny: float, maxx: float, maxy: float) -> str:
    return bbox_polygon(minx, miny, maxx, maxy).wkt


def bbox_polygon(minx: float, miny: float, maxx: float, maxy: float) -> Polygon:
    coords = [(minx, miny), (maxx, miny), (maxx, maxy), (minx, maxy), (minx, miny)]
    return Polygon(coords)


def tile_bounds(tile: TileCoordinate) -> TileBounds:
    """Geodetic extent of a tile, from its north-west and south-east corners."""
    north, west = tile.corner(0)
    south, east = tile.corner(3)
    return TileBounds(west=west, south=south, east=east, north=north)


def tile_polygon(tile: TileCoordinate) -> Polygon:
    """Tile footprint as a lon/lat polygon."""
    bounds = tile_bounds(tile)
    return bbox_polygon(bounds.west, bounds.south, bounds.east, bounds.north)


def filter_tiles_by_query(
    tiles: Iterable[TileCoordinate],
    query_wkt: str,
    mode: str = "intersects",
) -> list[TileCoordinate]:
    """Keep the tiles whose footprint intersects (or lies within) a lon/lat polygon."""
    query_geom = polygon_from_wkt(query_wkt)
    filtered: list[TileCoordinate] = []
    for tile in tiles:
        geom = tile_polygon(tile)
        if mode == "within":
            if geom.within(query_geom):
                filtered.append(tile)
        else:
            if geom.intersects(query_geom):
                filtered.append(tile)
    return filtered
