"""CLI command: print a tileset's header, defaults and overrides."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cli.common import add_common_args, load_from_args, setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect a Tiled tileset")
    add_common_args(parser)
    args = parser.parse_args(argv)

    setup_logging(args)
    loaded = load_from_args(args)
    if loaded is None:
        return 1
    _, resolver = loaded
    ts = resolver.tileset

    print(f"=== Tileset {ts.name!r} ===")
    print(f"  Format: {ts.version or '?'} (Tiled {ts.tiled_version or '?'})")
    print(f"  Tiles: {ts.tile_count} of {ts.tile_width}x{ts.tile_height}px, "
          f"{ts.columns} columns")
    print(f"  Image: {ts.image.source} ({ts.image.width}x{ts.image.height}, "
          f"capacity {ts.capacity})")

    print("\n  Defaults:")
    for p in ts.properties.items:
        print(f"    {p.name} ({p.type.value}) = {p.value!r}")

    print("\n  Overrides:")
    for tile_id in resolver.tile_ids():
        if not resolver.has_override(tile_id):
            print(f"    [{tile_id}] (defaults only)")
            continue
        props = ", ".join(f"{k}={v!r}" for k, v in resolver.overrides(tile_id).items())
        print(f"    [{tile_id}] {props}")
        for default_name, tile_name in resolver.case_collisions(tile_id):
            print(f"        ! {tile_name!r} differs from default {default_name!r} only by case")
    return 0


if __name__ == "__main__":
    sys.exit(main())
