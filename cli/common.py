"""Arguments and loading shared by the CLI commands."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config_io.config import Config, load_config
from tileset.errors import TilesetError
from tileset.resolver import TilePropertyResolver


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("tileset", type=str, help="Path to a .tsx tileset file")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--no-check-assets", action="store_true",
                        help="Do not require the referenced image to exist")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def setup_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def load_from_args(args: argparse.Namespace) -> tuple[Config, TilePropertyResolver] | None:
    """Load config and tileset; prints the error and returns None on failure."""
    overrides = {}
    if args.no_check_assets:
        overrides["loader"] = {"check_assets": False}
    try:
        config = load_config(args.config, overrides)
    except (yaml.YAMLError, ValidationError) as e:
        print(f"ERROR: invalid config {args.config}: {e}", file=sys.stderr)
        return None
    try:
        resolver = TilePropertyResolver.from_file(args.tileset, config.loader)
    except TilesetError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return None
    return config, resolver
