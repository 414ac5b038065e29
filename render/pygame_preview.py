"""Pygame preview: tile sheet, property overlay, per-tile HUD."""

from __future__ import annotations

import logging

import numpy as np

from collision.grid import EMPTY, CollisionMap, sheet_layout
from config_io.config import Config
from render.overlay import build_overlay
from render.palettes import (
    EMPTY_COLOR, GRID_ALPHA, HUD_BG, HUD_DIM_TEXT, HUD_TEXT, SELECT_COLOR,
)
from tileset.resolver import TilePropertyResolver

logger = logging.getLogger(__name__)

# Lazy import pygame so headless works
_pygame = None


def _pg():
    global _pygame
    if _pygame is None:
        import pygame
        _pygame = pygame
    return _pygame


class TilesetPreview:
    """Shows the tile sheet scaled up with a collision/jump/terrain overlay.

    Keys: ``O`` toggles the overlay, ``G`` the grid, arrows move the
    selection, ``ESC`` quits. Clicking a tile selects it.
    """

    HUD_WIDTH = 260

    def __init__(self, config: Config, resolver: TilePropertyResolver):
        pg = _pg()
        pg.init()

        self.config = config
        self.resolver = resolver
        self.tileset = resolver.tileset
        self.scale = config.render.scale
        self.fps = config.render.fps
        self.show_labels = config.render.show_labels

        self.layout = sheet_layout(self.tileset)
        self.cmap = CollisionMap.build(resolver, self.layout, config.collision)
        rows, cols = self.layout.shape
        self.cell_w = self.tileset.tile_width * self.scale
        self.cell_h = self.tileset.tile_height * self.scale
        self.sheet_w = cols * self.cell_w
        self.sheet_h = max(rows * self.cell_h, 1)

        self.screen = pg.display.set_mode((self.sheet_w + self.HUD_WIDTH, max(self.sheet_h, 240)))
        pg.display.set_caption(f"Tileset: {self.tileset.name}")
        self.clock = pg.time.Clock()
        self.font = pg.font.SysFont("monospace", 14)
        self.font_small = pg.font.SysFont("monospace", 11)

        self.show_overlay = True
        self.show_grid = True
        self.selected = 0 if self.tileset.tile_count else None

        self._tiles_surface = self._load_tiles()
        self._overlay_surface = self._make_overlay()
        self._grid_surface = self._make_grid()

    # ── Pre-rendered surfaces ──────────────────────────────────────────

    def _load_tiles(self):
        pg = _pg()
        surf = pg.Surface((self.sheet_w, self.sheet_h))
        surf.fill(EMPTY_COLOR)
        path = self.tileset.image_path()
        try:
            image = pg.image.load(str(path))
        except (pg.error, FileNotFoundError) as e:
            logger.warning(f"Cannot load tileset image {path}: {e}")
            return surf
        for tile_id in self.resolver.tile_ids():
            rect = pg.Rect(self.tileset.tile_rect(tile_id))
            if not image.get_rect().contains(rect):
                logger.warning(f"Tile {tile_id} lies outside the {path.name} image")
                continue
            tile = image.subsurface(rect)
            tile = pg.transform.scale(tile, (self.cell_w, self.cell_h))
            row, col = divmod(tile_id, self.tileset.columns)
            surf.blit(tile, (col * self.cell_w, row * self.cell_h))
        return surf

    def _make_overlay(self):
        pg = _pg()
        rgb = build_overlay(self.cmap, cell_size=1)
        # one pixel per tile, scaled up; surfarray wants (x, y, rgb)
        small = pg.surfarray.make_surface(np.transpose(rgb, (1, 0, 2)))
        surf = pg.transform.scale(small, (self.sheet_w, self.sheet_h))
        surf.set_alpha(self.config.render.overlay_alpha)
        return surf

    def _make_grid(self):
        pg = _pg()
        surf = pg.Surface((self.sheet_w, self.sheet_h), pg.SRCALPHA)
        color = (255, 255, 255, GRID_ALPHA)
        for x in range(0, self.sheet_w + 1, self.cell_w):
            pg.draw.line(surf, color, (x, 0), (x, self.sheet_h))
        for y in range(0, self.sheet_h + 1, self.cell_h):
            pg.draw.line(surf, color, (0, y), (self.sheet_w, y))
        return surf

    # ── Events ─────────────────────────────────────────────────────────

    def tile_at_pixel(self, px: int, py: int) -> int | None:
        col, row = px // self.cell_w, py // self.cell_h
        rows, cols = self.layout.shape
        if not (0 <= row < rows and 0 <= col < cols):
            return None
        tile_id = int(self.layout[row, col])
        return None if tile_id == EMPTY else tile_id

    def _move_selection(self, delta: int) -> None:
        if self.selected is None:
            return
        self.selected = (self.selected + delta) % self.tileset.tile_count

    def handle_events(self) -> bool:
        """Process pygame events. Returns False if quit requested."""
        pg = _pg()
        for event in pg.event.get():
            if event.type == pg.QUIT:
                return False
            if event.type == pg.MOUSEBUTTONDOWN and event.button == 1:
                hit = self.tile_at_pixel(*event.pos)
                if hit is not None:
                    self.selected = hit
            if event.type == pg.KEYDOWN:
                if event.key == pg.K_ESCAPE:
                    return False
                if event.key == pg.K_o:
                    self.show_overlay = not self.show_overlay
                elif event.key == pg.K_g:
                    self.show_grid = not self.show_grid
                elif event.key == pg.K_RIGHT:
                    self._move_selection(1)
                elif event.key == pg.K_LEFT:
                    self._move_selection(-1)
                elif event.key == pg.K_DOWN:
                    self._move_selection(self.tileset.columns)
                elif event.key == pg.K_UP:
                    self._move_selection(-self.tileset.columns)
        return True

    # ── Drawing ────────────────────────────────────────────────────────

    def render(self) -> None:
        pg = _pg()
        self.screen.fill(HUD_BG)
        self.screen.blit(self._tiles_surface, (0, 0))
        if self.show_overlay:
            self.screen.blit(self._overlay_surface, (0, 0))
        if self.show_grid:
            self.screen.blit(self._grid_surface, (0, 0))
        if self.selected is not None:
            row, col = divmod(self.selected, self.tileset.columns)
            rect = pg.Rect(col * self.cell_w, row * self.cell_h, self.cell_w, self.cell_h)
            pg.draw.rect(self.screen, SELECT_COLOR, rect, 2)
        self._draw_hud()
        pg.display.flip()
        self.clock.tick(self.fps)

    def _draw_hud(self) -> None:
        x0 = self.sheet_w + 10
        y = 10

        def text(txt: str, color: tuple = HUD_TEXT, small: bool = False) -> None:
            nonlocal y
            f = self.font_small if small else self.font
            self.screen.blit(f.render(txt, True, color), (x0, y))
            y += 14 if small else 18

        ts = self.tileset
        text(f"{ts.name}  {ts.tile_width}x{ts.tile_height}")
        text(f"{ts.tile_count} tiles, {ts.columns} columns", HUD_DIM_TEXT, small=True)
        y += 6
        if self.selected is None:
            return
        text(f"Tile {self.selected}")
        if not self.resolver.has_override(self.selected):
            text("(defaults only)", HUD_DIM_TEXT, small=True)
        if self.show_labels:
            for name, value in self.resolver.resolve(self.selected).items():
                text(f"  {name} = {value!r}", small=True)
        for default_name, tile_name in self.resolver.case_collisions(self.selected):
            text(f"  ! {tile_name} vs {default_name}", SELECT_COLOR, small=True)

    def run(self) -> None:
        try:
            while self.handle_events():
                self.render()
        finally:
            self.close()

    def close(self) -> None:
        _pg().quit()
