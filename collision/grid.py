"""Collision, jump and terrain grids for a map of tile ids."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from config_io.config import CollisionConfig
from config_io.schema import JUMP_CODES, JUMP_DIRECTION_BY_CODE, JumpDirection, Tileset
from tileset.errors import InvalidTileId
from tileset.resolver import TilePropertyResolver

logger = logging.getLogger(__name__)

EMPTY = -1


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


class CollisionMap:
    """Per-cell arrays derived from resolved tile properties.

    ``tile_ids`` holds local tile ids (``-1`` for empty cells). All arrays are
    indexed ``[y, x]``.
    """

    def __init__(self, tile_ids: np.ndarray, blocked: np.ndarray, jump: np.ndarray,
                 terrain: dict[str, np.ndarray]):
        self.tile_ids = tile_ids
        self.blocked = blocked
        self.jump = jump
        self.terrain = terrain

    @property
    def shape(self) -> tuple[int, int]:
        return self.tile_ids.shape

    @property
    def height(self) -> int:
        return self.tile_ids.shape[0]

    @property
    def width(self) -> int:
        return self.tile_ids.shape[1]

    # ── Construction ───────────────────────────────────────────────────

    @classmethod
    def build(
        cls,
        resolver: TilePropertyResolver,
        tile_grid: Any,
        config: CollisionConfig | None = None,
    ) -> "CollisionMap":
        config = config or CollisionConfig()
        grid = np.asarray(tile_grid, dtype=np.int64)
        if grid.ndim != 2:
            raise ValueError(f"tile grid must be 2-D, got shape {grid.shape}")

        n = resolver.tile_count
        bad = (grid < EMPTY) | (grid >= n)
        if bad.any():
            y, x = np.argwhere(bad)[0]
            raise InvalidTileId(int(grid[y, x]), n)

        # Lookup tables with one extra slot at the end for empty cells
        blocked_lut = np.zeros(n + 1, dtype=bool)
        jump_lut = np.zeros(n + 1, dtype=np.int8)
        terrain_lut = {tag: np.zeros(n + 1, dtype=bool) for tag in config.terrain_tags}

        for tile_id in np.unique(grid[grid != EMPTY]):
            props = resolver.resolve(int(tile_id))
            blocked_lut[tile_id] = _truthy(props.get(config.blocked_property, False))
            jump_lut[tile_id] = _jump_code(props.get(config.jump_property), int(tile_id))
            for tag, lut in terrain_lut.items():
                lut[tile_id] = _truthy(props.get(tag, False))

        idx = np.where(grid == EMPTY, n, grid)
        return cls(
            tile_ids=grid,
            blocked=blocked_lut[idx],
            jump=jump_lut[idx],
            terrain={tag: lut[idx] for tag, lut in terrain_lut.items()},
        )

    # ── Queries ────────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, x: int, y: int) -> bool:
        """Out-of-bounds cells count as blocked."""
        if not self.in_bounds(x, y):
            return True
        return bool(self.blocked[y, x])

    def jump_at(self, x: int, y: int) -> JumpDirection | None:
        if not self.in_bounds(x, y):
            return None
        return JUMP_DIRECTION_BY_CODE.get(int(self.jump[y, x]))

    def terrain_at(self, x: int, y: int) -> list[str]:
        if not self.in_bounds(x, y):
            return []
        return [tag for tag, mask in self.terrain.items() if mask[y, x]]

    def passable_mask(self) -> np.ndarray:
        return ~self.blocked

    def summary(self) -> dict[str, Any]:
        occupied = int((self.tile_ids != EMPTY).sum())
        return {
            "width": self.width,
            "height": self.height,
            "occupied_cells": occupied,
            "blocked_cells": int(self.blocked.sum()),
            "jump_cells": int((self.jump != 0).sum()),
            "terrain_cells": {tag: int(m.sum()) for tag, m in self.terrain.items()},
        }


def sheet_layout(tileset: Tileset) -> np.ndarray:
    """Tile ids laid out as on the tileset image; trailing cells are EMPTY."""
    rows = -(-tileset.tile_count // tileset.columns)
    grid = np.full(rows * tileset.columns, EMPTY, dtype=np.int64)
    grid[:tileset.tile_count] = np.arange(tileset.tile_count)
    return grid.reshape(rows, tileset.columns)


def _jump_code(value: Any, tile_id: int) -> int:
    if value is None or value == "":
        return 0
    try:
        return JUMP_CODES[JumpDirection(str(value).strip().lower())]
    except ValueError:
        logger.warning(f"Tile {tile_id}: unknown jump direction {value!r}, ignored")
        return 0
