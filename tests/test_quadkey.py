import pytest

from tilecoord.core.errors import InvalidTilePath
from tilecoord.core.profile import Profile
from tilecoord.core.tile import TileCoordinate


def test_from_quadkey() -> None:
    assert TileCoordinate.from_quadkey("02301020333") == TileCoordinate.create(327, 791, 11)
    assert TileCoordinate.from_quadkey("3") == TileCoordinate(1, 1, 1)


def test_empty_quadkey_is_root() -> None:
    assert TileCoordinate.from_quadkey("") == TileCoordinate(0, 0, 0)
    assert TileCoordinate().to_quadkey() == ""


@pytest.mark.parametrize("quadkey", ["2131234", "213123a", "213123@", None])
def test_invalid_quadkey(quadkey) -> None:
    with pytest.raises(InvalidTilePath):
        TileCoordinate.from_quadkey(quadkey)


def test_to_quadkey_inverts_from_quadkey() -> None:
    assert TileCoordinate(327, 791, 11).to_quadkey() == "02301020333"
    for quadkey in ("0", "1", "2", "3", "0123", "3210", "1202102332221212"):
        assert TileCoordinate.from_quadkey(quadkey).to_quadkey() == quadkey


def test_quadkey_zoom_bounds_act_on_path() -> None:
    profile = Profile(min_zoom=5, max_zoom=10)
    assert TileCoordinate.from_quadkey("02301020333", profile=profile) == TileCoordinate.from_quadkey("0230102033")
    assert TileCoordinate.from_quadkey("0230", profile=profile) == TileCoordinate.from_quadkey("02300")
    assert TileCoordinate.from_quadkey("023010", profile=profile) == TileCoordinate.from_quadkey("023010")
