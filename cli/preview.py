"""CLI command: open the pygame tileset preview."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cli.common import add_common_args, load_from_args, setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Preview a tileset with its property overlay")
    add_common_args(parser)
    parser.add_argument("--scale", type=int, default=None, help="Pixel scale (overrides config)")
    args = parser.parse_args(argv)

    setup_logging(args)
    loaded = load_from_args(args)
    if loaded is None:
        return 1
    config, resolver = loaded
    if args.scale is not None:
        config.render.scale = max(1, args.scale)

    from render.pygame_preview import TilesetPreview

    logging.info(f"Previewing {resolver.tileset.name!r} (O: overlay, G: grid, ESC: quit)")
    TilesetPreview(config, resolver).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
