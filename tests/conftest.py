"""Shared fixtures: the shipped tileset copied next to a generated PNG."""

import shutil
import struct
import sys
import zlib
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from tileset.resolver import TilePropertyResolver

DATA_TSX = Path(__file__).resolve().parent.parent / "data" / "tiled" / "collision.tsx"
IMAGE_SOURCE = "sprites/collisino.png"


def write_png(path: Path, width: int, height: int) -> Path:
    """Write a blank RGBA PNG of the given size."""
    def chunk(tag: bytes, body: bytes) -> bytes:
        crc = zlib.crc32(tag + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + tag + body + struct.pack(">I", crc)

    raw = b"".join(b"\x00" + b"\x00" * (4 * width) for _ in range(height))
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    data = (b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr)
            + chunk(b"IDAT", zlib.compress(raw)) + chunk(b"IEND", b""))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def tileset_path(tmp_path: Path) -> Path:
    """Copy of the shipped tileset with its referenced image present."""
    dst = tmp_path / "collision.tsx"
    shutil.copy(DATA_TSX, dst)
    write_png(tmp_path / IMAGE_SOURCE, 32, 16)
    return dst


@pytest.fixture
def resolver(tileset_path: Path) -> TilePropertyResolver:
    return TilePropertyResolver.from_file(tileset_path)


def make_tsx(body: str = "", *, tilecount: int = 4, columns: int = 2,
             defaults: str = "", image: str = '<image source="t.png" width="16" height="16"/>',
             extra_attrs: str = "") -> str:
    """Build a small tileset document (8x8 tiles) for error-path tests."""
    props = f"<properties>{defaults}</properties>" if defaults else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<tileset version="1.10" tiledversion="1.11.2" name="t" tilewidth="8" tileheight="8" '
        f'tilecount="{tilecount}" columns="{columns}"{extra_attrs}>'
        f"{props}{image}{body}</tileset>"
    )
