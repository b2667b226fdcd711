import pytest

from tilecoord.core.errors import InvalidTilePath, InvalidZoom
from tilecoord.core.profile import Profile
from tilecoord.core.profiles import TMS
from tilecoord.core.tile import TileCoordinate, flip_y


def test_default_tile_is_root() -> None:
    tile = TileCoordinate()
    assert (tile.x, tile.y, tile.z) == (0, 0, 0)


def test_create_keeps_canonical_coordinates() -> None:
    tile = TileCoordinate.create(5, 6, 7)
    assert (tile.x, tile.y, tile.z) == (5, 6, 7)
    assert TileCoordinate.create(5, 6, 7, "wmts") == tile
    assert TileCoordinate.create(5, 6, 7, "google") == tile


def test_create_tms_flips_y() -> None:
    tile = TileCoordinate.create(5, 6, 7, "tms")
    assert tile == TileCoordinate(5, (1 << 7) - 6 - 1, 7)
    assert TileCoordinate.create(5, 6, 7, profile=TMS) == tile


def test_tms_flip_is_involutive() -> None:
    for z in range(6):
        for y in range(1 << z):
            assert flip_y(flip_y(y, z), z) == y
    tile = TileCoordinate.create(3, 2, 4, "tms")
    assert tile.y_in("tms") == 2


def test_convention_argument_overrides_profile() -> None:
    tile = TileCoordinate.create(5, 6, 7, convention="canonical", profile=TMS)
    assert tile == TileCoordinate(5, 6, 7)


def test_unknown_convention_rejected() -> None:
    with pytest.raises(ValueError):
        TileCoordinate.create(0, 0, 1, "mercator")


def test_zoom_bounds_replace_z_without_rescaling() -> None:
    profile = Profile(min_zoom=5, max_zoom=10)
    assert TileCoordinate.create(0, 0, 4, profile=profile) == TileCoordinate(0, 0, 5)
    assert TileCoordinate.create(0, 0, 11, profile=profile) == TileCoordinate(0, 0, 10)
    assert TileCoordinate.create(7, 3, 4, profile=profile) == TileCoordinate(7, 3, 5)
    assert TileCoordinate.create(7, 3, 8, profile=profile) == TileCoordinate(7, 3, 8)


def test_ancestor_shifts_coordinates() -> None:
    tile = TileCoordinate(327, 791, 11)
    assert tile.ancestor() == TileCoordinate(163, 395, 10)
    assert tile.ancestor(3) == TileCoordinate(40, 98, 8)
    assert tile.ancestor(0) == tile
    assert tile.ancestor(11) == TileCoordinate(0, 0, 0)


def test_ancestor_keeps_siblings_together() -> None:
    parent = TileCoordinate(4, 12, 5)
    for child in parent.children():
        assert child.ancestor() == parent


def test_ancestor_rejects_negative_zoom() -> None:
    with pytest.raises(InvalidZoom):
        TileCoordinate(1, 1, 2).ancestor(3)
    with pytest.raises(InvalidZoom):
        TileCoordinate(1, 1, 2).ancestor(-1)


def test_descendant_follows_quadrants() -> None:
    tile = TileCoordinate(2, 6, 4)
    assert tile.descendant() == TileCoordinate(4, 12, 5)
    assert tile.descendant("1") == TileCoordinate(5, 12, 5)
    assert tile.descendant("2") == TileCoordinate(4, 13, 5)
    assert tile.descendant("3") == TileCoordinate(5, 13, 5)
    assert tile.descendant("33") == TileCoordinate(11, 27, 6)
    assert tile.descendant("") == tile


def test_descendant_rejects_bad_path() -> None:
    for path in ("4", "01a", "@", "0 1"):
        with pytest.raises(InvalidTilePath):
            TileCoordinate(0, 0, 0).descendant(path)


def test_ancestor_then_descendant_restores_tile() -> None:
    for z in range(1, 6):
        for x in range(1 << z):
            for y in range(1 << z):
                tile = TileCoordinate(x, y, z)
                digit = str((x % 2) + 2 * (y % 2))
                assert tile.ancestor(1).descendant(digit) == tile
                assert tile.quadrant == int(digit)


def test_to_pixel_offsets_from_tile_origin() -> None:
    tile = TileCoordinate(3, 5, 4)
    assert tile.to_pixel() == (768, 1280)
    assert tile.to_pixel(10, 255) == (778, 1535)
    assert tile.to_pixel(300, -1) == (1068, 1279)


def test_from_pixel() -> None:
    assert TileCoordinate.from_pixel(778, 1535, 4) == TileCoordinate(3, 5, 4)
    assert TileCoordinate.from_pixel(-5, 10_000, 4) == TileCoordinate(0, 15, 4)
    assert TileCoordinate.from_pixel(255.9, 256.0, 1) == TileCoordinate(0, 1, 1)


def test_is_valid() -> None:
    assert TileCoordinate(3, 3, 2).is_valid
    assert not TileCoordinate(4, 0, 2).is_valid
    assert not TileCoordinate(0, -1, 2).is_valid


def test_str_is_z_x_y() -> None:
    assert str(TileCoordinate(321, 121, 9)) == "9/321/121"


def test_tiles_are_hashable_values() -> None:
    tiles = {TileCoordinate(1, 2, 3), TileCoordinate(1, 2, 3), TileCoordinate(2, 1, 3)}
    assert len(tiles) == 2
