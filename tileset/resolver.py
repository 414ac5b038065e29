"""Effective per-tile properties: tileset defaults overlaid with tile overrides."""

from __future__ import annotations

import numbers
from pathlib import Path
from typing import Any

from config_io.config import LoaderConfig
from config_io.schema import PropertySet, PropertyValue, Tileset
from tileset.errors import InvalidTileId
from tileset.loader import case_collisions, load_tileset

_EMPTY = PropertySet()


class TilePropertyResolver:
    """Read-only property lookup for the tiles of one tileset.

    An override wins over a default of exactly the same name. Names that only
    differ by letter case (``Blocked`` vs ``blocked``) are distinct keys; use
    :meth:`case_collisions` to find them.
    """

    def __init__(self, tileset: Tileset):
        self.tileset = tileset
        self._overrides: dict[int, PropertySet] = {
            t.id: t.properties for t in tileset.tiles
        }

    @classmethod
    def from_file(cls, path: str | Path, config: LoaderConfig | None = None) -> "TilePropertyResolver":
        return cls(load_tileset(path, config))

    @property
    def tile_count(self) -> int:
        return self.tileset.tile_count

    def tile_ids(self) -> range:
        return range(self.tileset.tile_count)

    def _check(self, tile_id: Any) -> int:
        # bool is an int subclass but never a tile id
        if isinstance(tile_id, bool) or not isinstance(tile_id, numbers.Integral):
            raise InvalidTileId(tile_id, self.tile_count)
        if not 0 <= tile_id < self.tile_count:
            raise InvalidTileId(tile_id, self.tile_count)
        return int(tile_id)

    def defaults(self) -> dict[str, PropertyValue]:
        return self.tileset.properties.as_dict()

    def has_override(self, tile_id: int) -> bool:
        return self._check(tile_id) in self._overrides

    def overrides(self, tile_id: int) -> dict[str, PropertyValue]:
        return self._overrides.get(self._check(tile_id), _EMPTY).as_dict()

    def resolve(self, tile_id: int) -> dict[str, PropertyValue]:
        """Defaults first (document order), then override-only names."""
        resolved = self.defaults()
        resolved.update(self.overrides(tile_id))
        return resolved

    def resolve_all(self) -> dict[int, dict[str, PropertyValue]]:
        return {i: self.resolve(i) for i in self.tile_ids()}

    def lookup(self, tile_id: int, name: str, default: Any = None) -> Any:
        return self.resolve(tile_id).get(name, default)

    def case_collisions(self, tile_id: int) -> list[tuple[str, str]]:
        override = self._overrides.get(self._check(tile_id), _EMPTY)
        return case_collisions(self.tileset.properties, override)
