"""Test: collision, jump and terrain grids built from resolved properties."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pytest

from collision.grid import EMPTY, CollisionMap, sheet_layout
from config_io.config import CollisionConfig, LoaderConfig
from config_io.schema import JUMP_CODES, JumpDirection
from tileset.errors import InvalidTileId
from tileset.loader import parse_tileset
from tileset.resolver import TilePropertyResolver

from conftest import make_tsx

GRID = [
    [0, 1, 2, -1],
    [3, 4, 5, 6],
    [7, 0, -1, 2],
]


def test_blocked_mask(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    expected = np.array([
        [True, False, False, False],
        [False, False, False, False],
        [False, True, False, False],
    ])
    np.testing.assert_array_equal(cmap.blocked, expected)
    assert cmap.shape == (3, 4)


def test_jump_codes(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    assert cmap.jump[0, 1] == JUMP_CODES[JumpDirection.DOWN]
    assert cmap.jump_at(1, 1) is JumpDirection.RIGHT
    assert cmap.jump_at(2, 1) is JumpDirection.LEFT
    assert cmap.jump_at(0, 0) is None
    assert int((cmap.jump != 0).sum()) == 3


def test_terrain_masks(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    assert set(cmap.terrain) == {"water", "grass"}
    assert cmap.terrain_at(2, 0) == ["water"]
    assert cmap.terrain_at(3, 1) == ["grass"]
    assert cmap.terrain_at(3, 2) == ["water"]
    assert cmap.terrain_at(0, 1) == []


def test_empty_cells(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    assert not cmap.is_blocked(3, 0)
    assert cmap.jump_at(3, 0) is None
    assert cmap.terrain_at(2, 2) == []


def test_out_of_bounds_is_blocked(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    assert cmap.is_blocked(-1, 0)
    assert cmap.is_blocked(4, 0)
    assert cmap.terrain_at(0, 9) == []


def test_configured_blocked_property(resolver):
    # the tileset-wide "Blocked" default marks every occupied cell
    cmap = CollisionMap.build(resolver, GRID, CollisionConfig(blocked_property="Blocked"))
    np.testing.assert_array_equal(cmap.blocked, np.array(GRID) != EMPTY)


def test_unknown_tile_id(resolver):
    with pytest.raises(InvalidTileId):
        CollisionMap.build(resolver, [[0, 8]])
    with pytest.raises(InvalidTileId):
        CollisionMap.build(resolver, [[-2]])


def test_grid_must_be_2d(resolver):
    with pytest.raises(ValueError):
        CollisionMap.build(resolver, [0, 1, 2])


def test_unknown_jump_direction_is_ignored(caplog):
    ts = parse_tileset(
        make_tsx('<tile id="0"><properties><property name="jump" value="sideways"/></properties></tile>'),
        config=LoaderConfig(check_assets=False),
    )
    with caplog.at_level(logging.WARNING):
        cmap = CollisionMap.build(TilePropertyResolver(ts), [[0, 1]])
    assert cmap.jump_at(0, 0) is None
    assert "sideways" in caplog.text


def test_summary(resolver):
    s = CollisionMap.build(resolver, GRID).summary()
    assert s["occupied_cells"] == 10
    assert s["blocked_cells"] == 2
    assert s["jump_cells"] == 3
    assert s["terrain_cells"] == {"water": 2, "grass": 1}


def test_sheet_layout(resolver):
    layout = sheet_layout(resolver.tileset)
    np.testing.assert_array_equal(layout, np.arange(8).reshape(2, 4))


def test_sheet_layout_pads_last_row():
    ts = parse_tileset(make_tsx(tilecount=3), config=LoaderConfig(check_assets=False))
    np.testing.assert_array_equal(sheet_layout(ts), np.array([[0, 1], [2, EMPTY]]))


def test_passable_mask_is_inverse_of_blocked(resolver):
    cmap = CollisionMap.build(resolver, GRID)
    np.testing.assert_array_equal(cmap.passable_mask(), ~cmap.blocked)
    assert cmap.passable_mask().sum() == 10
