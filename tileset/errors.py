"""Exceptions raised while loading or querying a tileset."""

from __future__ import annotations

from pathlib import Path


class TilesetError(Exception):
    """Base class for tileset errors. ``path`` is the offending file, if known."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class ParseError(TilesetError):
    """The document is not well-formed XML or could not be read."""

    def __init__(self, message: str, path: str | Path | None = None,
                 line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, path)


class SchemaViolation(TilesetError, ValueError):
    """Well-formed XML that breaks the tileset schema or its invariants."""


class MissingAsset(TilesetError, FileNotFoundError):
    """A file referenced by the tileset does not exist."""

    def __init__(self, message: str, path: str | Path | None = None,
                 asset: str | Path | None = None):
        self.asset = Path(asset) if asset is not None else None
        super().__init__(message, path)


class InvalidTileId(TilesetError, LookupError):
    """A tile id outside ``[0, tile_count)`` was queried."""

    def __init__(self, tile_id: object, tile_count: int):
        self.tile_id = tile_id
        self.tile_count = tile_count
        super().__init__(f"tile id {tile_id!r} out of range [0, {tile_count})")
