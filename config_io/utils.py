"""Shared file helpers: JSON and PNG headers."""

from __future__ import annotations

import json
import struct
from pathlib import Path
from typing import Any

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def save_json(data: Any, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as f:
        json.dump(data, f, indent=2, default=str)
        f.write("\n")


def load_json(path: str | Path) -> Any:
    with open(path) as f:
        return json.load(f)


def read_png_size(path: str | Path) -> tuple[int, int] | None:
    """Return (width, height) from a PNG's IHDR chunk, or None if not a PNG."""
    with open(path, "rb") as f:
        head = f.read(24)
    # signature(8) + chunk length(4) + b"IHDR"(4) + width(4) + height(4)
    if len(head) < 24 or head[:8] != PNG_SIGNATURE or head[12:16] != b"IHDR":
        return None
    width, height = struct.unpack(">II", head[16:24])
    return width, height


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
