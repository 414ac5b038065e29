"""Tileset (TSX) loading and validation."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from pydantic import ValidationError

from config_io.config import LoaderConfig
from config_io.schema import ImageRef, PropertySet, TileOverride, Tileset
from config_io.utils import read_png_size
from tileset.errors import MissingAsset, ParseError, SchemaViolation
from tileset.properties import parse_properties

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"-?[0-9]+")


def load_tileset(path: str | Path, config: LoaderConfig | None = None) -> Tileset:
    """Read, parse and validate a tileset file."""
    p = Path(path)
    try:
        with open(p, "rb") as f:
            data = f.read()
    except FileNotFoundError:
        raise MissingAsset("tileset file not found", path=p, asset=p) from None
    except OSError as e:
        raise ParseError(f"cannot read tileset: {e}", path=p) from e

    tileset = parse_tileset(data, base_dir=p.parent, config=config, source_path=p)
    logger.info(
        f"Loaded tileset {tileset.name!r} from {p}: {tileset.tile_count} tiles, "
        f"{len(tileset.properties)} default properties, {len(tileset.tiles)} overrides"
    )
    return tileset


def parse_tileset(
    data: str | bytes,
    base_dir: str | Path | None = None,
    config: LoaderConfig | None = None,
    source_path: str | Path | None = None,
) -> Tileset:
    """Parse tileset XML. Asset checks resolve paths against ``base_dir``."""
    config = config or LoaderConfig()
    path = Path(source_path) if source_path is not None else None

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        line, column = e.position
        raise ParseError(f"malformed XML: {e.msg}",
                         path=path, line=line, column=column) from e

    try:
        tileset = _build(root, path)
    except SchemaViolation as e:
        if e.path is None and path is not None:
            raise SchemaViolation(str(e), path=path) from None
        raise

    if config.warn_case_collisions:
        _warn_case_collisions(tileset)

    if config.check_assets:
        directory = Path(base_dir) if base_dir is not None else (
            path.parent if path is not None else Path.cwd())
        _check_image(tileset, directory, config, path)

    return tileset


# ── Element helpers ────────────────────────────────────────────────────────

def _int_attr(elem: ET.Element, name: str, default: int | None = None) -> int:
    raw = elem.get(name)
    if raw is None:
        if default is None:
            raise SchemaViolation(f"<{elem.tag}> is missing required attribute {name!r}")
        return default
    if not _INT_RE.fullmatch(raw):
        raise SchemaViolation(
            f"<{elem.tag}> attribute {name!r} must be an integer, got {raw!r}"
        )
    return int(raw)


def _properties_block(elem: ET.Element, owner: str) -> PropertySet:
    blocks = elem.findall("properties")
    if len(blocks) > 1:
        raise SchemaViolation(f"more than one <properties> block on {owner}")
    return parse_properties(blocks[0] if blocks else None, owner=owner)


def _parse_image(root: ET.Element) -> ImageRef:
    images = root.findall("image")
    if len(images) != 1:
        raise SchemaViolation(f"expected exactly one <image>, found {len(images)}")
    img = images[0]
    source = img.get("source")
    if not source:
        raise SchemaViolation("<image> is missing required attribute 'source'")
    try:
        return ImageRef(
            source=source,
            width=_int_attr(img, "width"),
            height=_int_attr(img, "height"),
        )
    except ValidationError as e:
        raise SchemaViolation(f"<image> {_describe(e)}") from e


def _parse_tiles(root: ET.Element, tile_count: int) -> tuple[TileOverride, ...]:
    tiles: dict[int, TileOverride] = {}
    for elem in root.findall("tile"):
        tile_id = _int_attr(elem, "id")
        if not 0 <= tile_id < tile_count:
            raise SchemaViolation(f"tile id {tile_id} out of range [0, {tile_count})")
        if tile_id in tiles:
            raise SchemaViolation(f"duplicate tile id {tile_id}")
        props = _properties_block(elem, f"tile {tile_id}")
        # Tiled >= 1.9 writes the tile class as "type"; older files used "class"
        tile_type = elem.get("type", elem.get("class", ""))
        tiles[tile_id] = TileOverride(id=tile_id, type=tile_type, properties=props)
    return tuple(tiles[i] for i in sorted(tiles))


def _build(root: ET.Element, path: Path | None) -> Tileset:
    if root.tag != "tileset":
        raise SchemaViolation(f"root element must be <tileset>, got <{root.tag}>")
    if root.get("source") is not None:
        raise SchemaViolation("external tileset references are not supported")

    tile_count = _int_attr(root, "tilecount")
    if tile_count < 0:
        raise SchemaViolation(f"tilecount must be >= 0, got {tile_count}")

    properties = _properties_block(root, "tileset")

    fields = dict(
        name=root.get("name", ""),
        version=root.get("version", ""),
        tiled_version=root.get("tiledversion", ""),
        tile_width=_int_attr(root, "tilewidth"),
        tile_height=_int_attr(root, "tileheight"),
        tile_count=tile_count,
        columns=_int_attr(root, "columns"),
        spacing=_int_attr(root, "spacing", 0),
        margin=_int_attr(root, "margin", 0),
        image=_parse_image(root),
        properties=properties,
        tiles=_parse_tiles(root, tile_count),
        source_path=path,
    )
    try:
        return Tileset(**fields)
    except ValidationError as e:
        raise SchemaViolation(_describe(e)) from e


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(x) for x in item["loc"])
        msg = item["msg"].removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


# ── Post-parse checks ──────────────────────────────────────────────────────

def case_collisions(defaults: PropertySet, override: PropertySet) -> list[tuple[str, str]]:
    """(default_name, override_name) pairs equal only when case is ignored."""
    by_fold: dict[str, list[str]] = {}
    for n in defaults.names():
        by_fold.setdefault(n.casefold(), []).append(n)
    pairs = []
    for name in override.names():
        for other in by_fold.get(name.casefold(), []):
            if other != name:
                pairs.append((other, name))
    return pairs


def _warn_case_collisions(tileset: Tileset) -> None:
    for tile in tileset.tiles:
        for default_name, tile_name in case_collisions(tileset.properties, tile.properties):
            logger.warning(
                f"Tileset {tileset.name!r}: tile {tile.id} property {tile_name!r} differs "
                f"from default {default_name!r} only by case; both keys are kept"
            )


def _check_image(tileset: Tileset, directory: Path, config: LoaderConfig,
                 path: Path | None) -> None:
    src = Path(tileset.image.source)
    image = src if src.is_absolute() else directory / src
    if not image.is_file():
        raise MissingAsset(f"image {tileset.image.source!r} not found at {image}",
                           path=path, asset=image)
    if not config.check_image_size:
        return
    size = read_png_size(image)
    if size is None:
        logger.debug(f"Skipping size check for non-PNG image {image}")
        return
    declared = (tileset.image.width, tileset.image.height)
    if size != declared:
        msg = (f"image {tileset.image.source!r} is {size[0]}x{size[1]}, "
               f"declared {declared[0]}x{declared[1]}")
        if config.strict_image_size:
            raise SchemaViolation(msg, path=path)
        logger.warning(msg)
