"""Pydantic models for the tileset data model."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ── Enums ──────────────────────────────────────────────────────────────────

class PropertyType(str, enum.Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    COLOR = "color"
    FILE = "file"
    OBJECT = "object"


class JumpDirection(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


PropertyValue = Union[bool, int, float, str]


# ── Properties ─────────────────────────────────────────────────────────────

class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: PropertyType = PropertyType.STRING
    value: PropertyValue = ""


class PropertySet(BaseModel):
    """Ordered property list; names are unique (case-sensitive)."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Property, ...] = ()

    @model_validator(mode="after")
    def _unique_names(self) -> "PropertySet":
        seen: set[str] = set()
        for p in self.items:
            if p.name in seen:
                raise ValueError(f"duplicate property name {p.name!r}")
            seen.add(p.name)
        return self

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, name: object) -> bool:
        return any(p.name == name for p in self.items)

    def names(self) -> list[str]:
        return [p.name for p in self.items]

    def get(self, name: str, default: Any = None) -> Any:
        for p in self.items:
            if p.name == name:
                return p.value
        return default

    def as_dict(self) -> dict[str, PropertyValue]:
        return {p.name: p.value for p in self.items}


# ── Tileset ────────────────────────────────────────────────────────────────

class ImageRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = Field(min_length=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class TileOverride(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    type: str = ""
    properties: PropertySet = Field(default_factory=PropertySet)


class Tileset(BaseModel):
    """A loaded tileset: header, image reference, defaults and sparse overrides."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = ""
    tiled_version: str = ""
    tile_width: int = Field(gt=0)
    tile_height: int = Field(gt=0)
    tile_count: int = Field(ge=0)
    columns: int = Field(gt=0)
    spacing: int = Field(default=0, ge=0)
    margin: int = Field(default=0, ge=0)
    image: ImageRef
    properties: PropertySet = Field(default_factory=PropertySet)
    tiles: tuple[TileOverride, ...] = ()
    source_path: Optional[Path] = None

    @model_validator(mode="after")
    def _check_layout(self) -> "Tileset":
        if self.tile_count > self.capacity:
            raise ValueError(
                f"tilecount {self.tile_count} exceeds image capacity {self.capacity} "
                f"({self.grid_columns}x{self.rows} tiles of "
                f"{self.tile_width}x{self.tile_height})"
            )
        if self.columns > self.grid_columns:
            raise ValueError(
                f"columns {self.columns} exceeds the {self.grid_columns} "
                f"columns that fit in an image {self.image.width}px wide"
            )
        if self.tile_count > self.columns * self.rows:
            raise ValueError(
                f"tilecount {self.tile_count} exceeds {self.columns} columns x "
                f"{self.rows} rows ({self.columns * self.rows} tiles)"
            )
        seen: set[int] = set()
        for t in self.tiles:
            if t.id >= self.tile_count:
                raise ValueError(
                    f"tile id {t.id} out of range [0, {self.tile_count})"
                )
            if t.id in seen:
                raise ValueError(f"duplicate tile id {t.id}")
            seen.add(t.id)
        return self

    # ── Derived layout ────────────────────────────────────────────────────

    @staticmethod
    def _fit(extent: int, tile: int, spacing: int, margin: int) -> int:
        usable = extent - 2 * margin + spacing
        return max(0, usable // (tile + spacing))

    @property
    def grid_columns(self) -> int:
        return self._fit(self.image.width, self.tile_width, self.spacing, self.margin)

    @property
    def rows(self) -> int:
        return self._fit(self.image.height, self.tile_height, self.spacing, self.margin)

    @property
    def capacity(self) -> int:
        return self.grid_columns * self.rows

    def tile_rect(self, tile_id: int) -> tuple[int, int, int, int]:
        """Pixel rectangle (x, y, w, h) of a tile inside the image."""
        col = tile_id % self.columns
        row = tile_id // self.columns
        x = self.margin + col * (self.tile_width + self.spacing)
        y = self.margin + row * (self.tile_height + self.spacing)
        return (x, y, self.tile_width, self.tile_height)

    def override(self, tile_id: int) -> TileOverride | None:
        for t in self.tiles:
            if t.id == tile_id:
                return t
        return None

    def image_path(self) -> Path:
        """Image path resolved against the tileset file's directory."""
        src = Path(self.image.source)
        if self.source_path is None or src.is_absolute():
            return src
        return self.source_path.parent / src


# ── Jump direction codes (for numpy grids) ─────────────────────────────────

JUMP_CODES: dict[JumpDirection, int] = {
    JumpDirection.UP: 1,
    JumpDirection.DOWN: 2,
    JumpDirection.LEFT: 3,
    JumpDirection.RIGHT: 4,
}

JUMP_DIRECTION_BY_CODE: dict[int, JumpDirection] = {v: k for k, v in JUMP_CODES.items()}
