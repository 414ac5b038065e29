"""Write a loaded tileset back out as Tiled JSON or TSX."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from config_io.schema import Tileset
from config_io.utils import save_json
from tileset.properties import properties_to_xml, property_to_dict

JSON_FORMAT_VERSION = "1.10"


def to_dict(tileset: Tileset) -> dict[str, Any]:
    """Tiled JSON tileset layout."""
    data: dict[str, Any] = {
        "type": "tileset",
        "version": tileset.version or JSON_FORMAT_VERSION,
        "tiledversion": tileset.tiled_version,
        "name": tileset.name,
        "tilewidth": tileset.tile_width,
        "tileheight": tileset.tile_height,
        "tilecount": tileset.tile_count,
        "columns": tileset.columns,
        "spacing": tileset.spacing,
        "margin": tileset.margin,
        "image": tileset.image.source,
        "imagewidth": tileset.image.width,
        "imageheight": tileset.image.height,
    }
    if len(tileset.properties):
        data["properties"] = [property_to_dict(p) for p in tileset.properties.items]
    if tileset.tiles:
        tiles = []
        for t in tileset.tiles:
            entry: dict[str, Any] = {"id": t.id}
            if t.type:
                entry["type"] = t.type
            if len(t.properties):
                entry["properties"] = [property_to_dict(p) for p in t.properties.items]
            tiles.append(entry)
        data["tiles"] = tiles
    return data


def save_json_tileset(tileset: Tileset, path: str | Path) -> None:
    save_json(to_dict(tileset), path)


def to_xml(tileset: Tileset) -> str:
    root = ET.Element("tileset")
    if tileset.version:
        root.set("version", tileset.version)
    if tileset.tiled_version:
        root.set("tiledversion", tileset.tiled_version)
    root.set("name", tileset.name)
    root.set("tilewidth", str(tileset.tile_width))
    root.set("tileheight", str(tileset.tile_height))
    if tileset.spacing:
        root.set("spacing", str(tileset.spacing))
    if tileset.margin:
        root.set("margin", str(tileset.margin))
    root.set("tilecount", str(tileset.tile_count))
    root.set("columns", str(tileset.columns))

    if len(tileset.properties):
        root.append(properties_to_xml(tileset.properties))
    ET.SubElement(root, "image", source=tileset.image.source,
                  width=str(tileset.image.width), height=str(tileset.image.height))
    for t in tileset.tiles:
        tile = ET.SubElement(root, "tile", id=str(t.id))
        if t.type:
            tile.set("type", t.type)
        if len(t.properties):
            tile.append(properties_to_xml(t.properties))

    ET.indent(root, space=" ")
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def save_tsx(tileset: Tileset, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        f.write(to_xml(tileset))
