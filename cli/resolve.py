"""CLI command: print the effective properties of one or all tiles."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cli.common import add_common_args, load_from_args, setup_logging
from tileset.errors import InvalidTileId


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve effective tile properties")
    add_common_args(parser)
    parser.add_argument("--tile", type=int, default=None, help="Tile id (default: all tiles)")
    parser.add_argument("--json", action="store_true", help="Print JSON")
    args = parser.parse_args(argv)

    setup_logging(args)
    loaded = load_from_args(args)
    if loaded is None:
        return 1
    _, resolver = loaded

    try:
        if args.tile is None:
            resolved = resolver.resolve_all()
        else:
            resolved = {args.tile: resolver.resolve(args.tile)}
    except InvalidTileId as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({str(k): v for k, v in resolved.items()}, indent=2))
        return 0
    for tile_id, props in resolved.items():
        body = ", ".join(f"{k}={v!r}" for k, v in props.items())
        print(f"{tile_id}: {body}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
