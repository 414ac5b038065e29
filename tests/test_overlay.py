"""Test: headless overlay raster."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pytest

from collision.grid import CollisionMap, sheet_layout
from config_io.schema import JumpDirection
from render.overlay import build_overlay
from render.palettes import (
    BLOCKED_COLOR, EMPTY_COLOR, FLOOR_COLOR, JUMP_COLORS, TERRAIN_COLORS,
)


@pytest.fixture
def sheet(resolver):
    return CollisionMap.build(resolver, sheet_layout(resolver.tileset))


def test_overlay_colors(sheet):
    img = build_overlay(sheet)
    assert img.shape == (2, 4, 3)
    assert img.dtype == np.uint8
    assert tuple(img[0, 0]) == BLOCKED_COLOR
    assert tuple(img[0, 1]) == JUMP_COLORS[JumpDirection.DOWN]
    assert tuple(img[0, 2]) == TERRAIN_COLORS["water"]
    assert tuple(img[0, 3]) == FLOOR_COLOR
    assert tuple(img[1, 0]) == JUMP_COLORS[JumpDirection.RIGHT]
    assert tuple(img[1, 1]) == JUMP_COLORS[JumpDirection.LEFT]
    assert tuple(img[1, 2]) == TERRAIN_COLORS["grass"]


def test_overlay_cell_size(sheet):
    img = build_overlay(sheet, cell_size=8)
    assert img.shape == (16, 32, 3)
    assert (img[:8, :8] == np.array(BLOCKED_COLOR, dtype=np.uint8)).all()


def test_overlay_alpha_zero_is_floor(sheet):
    img = build_overlay(sheet, alpha=0)
    assert (img == np.array(FLOOR_COLOR, dtype=np.uint8)).all()


def test_overlay_empty_cells(resolver):
    cmap = CollisionMap.build(resolver, [[0, -1]])
    img = build_overlay(cmap)
    assert tuple(img[0, 1]) == EMPTY_COLOR


def test_overlay_rejects_bad_cell_size(sheet):
    with pytest.raises(ValueError):
        build_overlay(sheet, cell_size=0)
