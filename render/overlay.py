"""Headless RGB raster of a collision map."""

from __future__ import annotations

import numpy as np

from collision.grid import EMPTY, CollisionMap
from config_io.schema import JUMP_CODES
from config_io.utils import clamp
from render.palettes import (
    BLOCKED_COLOR, EMPTY_COLOR, FLOOR_COLOR, JUMP_COLORS, terrain_color,
)


def build_overlay(cmap: CollisionMap, cell_size: int = 1, alpha: int = 255) -> np.ndarray:
    """Return an (H*cell, W*cell, 3) uint8 image.

    Layer order: floor, terrain tags, jump directions, blocked. ``alpha`` is
    the opacity (0-255) of every layer above the floor.
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be >= 1, got {cell_size}")
    a = clamp(alpha, 0, 255) / 255.0

    img = np.empty(cmap.shape + (3,), dtype=np.float64)
    img[:] = FLOOR_COLOR

    def paint(mask: np.ndarray, color: tuple[int, int, int]) -> None:
        img[mask] = img[mask] * (1.0 - a) + np.asarray(color, dtype=np.float64) * a

    for tag, mask in cmap.terrain.items():
        paint(mask, terrain_color(tag))
    for direction, code in JUMP_CODES.items():
        paint(cmap.jump == code, JUMP_COLORS[direction])
    paint(cmap.blocked, BLOCKED_COLOR)

    img[cmap.tile_ids == EMPTY] = EMPTY_COLOR
    out = np.rint(img).astype(np.uint8)
    if cell_size > 1:
        out = np.repeat(np.repeat(out, cell_size, axis=0), cell_size, axis=1)
    return out
