"""Color palettes for collision, jump and terrain overlays."""

from __future__ import annotations

from config_io.schema import JumpDirection

BLOCKED_COLOR = (220, 50, 50)
EMPTY_COLOR = (24, 24, 30)
FLOOR_COLOR = (70, 70, 80)

JUMP_COLORS: dict[JumpDirection, tuple[int, int, int]] = {
    JumpDirection.UP:    (255, 200, 40),
    JumpDirection.DOWN:  (255, 140, 0),
    JumpDirection.LEFT:  (170, 90, 255),
    JumpDirection.RIGHT: (60, 200, 255),
}

# Terrain tags without an entry fall back to TERRAIN_DEFAULT_COLOR
TERRAIN_COLORS: dict[str, tuple[int, int, int]] = {
    "water": (65, 105, 225),
    "grass": (56, 160, 60),
}
TERRAIN_DEFAULT_COLOR = (200, 200, 120)


def terrain_color(tag: str) -> tuple[int, int, int]:
    return TERRAIN_COLORS.get(tag.lower(), TERRAIN_DEFAULT_COLOR)


# Preview window
HUD_BG = (30, 30, 40)
HUD_TEXT = (220, 220, 220)
HUD_DIM_TEXT = (150, 150, 160)
SELECT_COLOR = (255, 255, 0)
GRID_ALPHA = 40
