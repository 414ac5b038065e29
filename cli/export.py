"""CLI command: export a tileset as Tiled JSON or TSX."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cli.common import add_common_args, load_from_args, setup_logging
from tileset.export import save_json_tileset, save_tsx


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export a tileset to JSON or TSX")
    add_common_args(parser)
    parser.add_argument("--out", type=str, required=True,
                        help="Output path; format chosen by extension (.json or .tsx)")
    args = parser.parse_args(argv)

    setup_logging(args)
    out = Path(args.out)
    suffix = out.suffix.lower()
    if suffix not in (".json", ".tsx"):
        print(f"ERROR: unsupported output format {out.suffix!r} (use .json or .tsx)",
              file=sys.stderr)
        return 1

    loaded = load_from_args(args)
    if loaded is None:
        return 1
    _, resolver = loaded

    if suffix == ".json":
        save_json_tileset(resolver.tileset, out)
    else:
        save_tsx(resolver.tileset, out)
    logging.info(f"Wrote {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
