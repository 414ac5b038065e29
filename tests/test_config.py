"""Test: YAML config loading and overrides."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from pydantic import ValidationError

from config_io.config import load_config


def test_defaults():
    config = load_config()
    assert config.loader.check_assets is True
    assert config.loader.strict_image_size is False
    assert config.collision.blocked_property == "blocked"
    assert config.collision.terrain_tags == ["water", "grass"]
    assert config.render.scale == 8


def test_yaml_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("loader:\n  check_assets: false\ncollision:\n  terrain_tags: [water]\n")
    config = load_config(p)
    assert config.loader.check_assets is False
    assert config.loader.check_image_size is True
    assert config.collision.terrain_tags == ["water"]


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yaml") == load_config()


def test_overrides_deep_merge(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("render:\n  scale: 4\n  fps: 60\n")
    config = load_config(p, {"render": {"scale": 2}})
    assert config.render.scale == 2
    assert config.render.fps == 60


def test_invalid_value():
    with pytest.raises(ValidationError):
        load_config(overrides={"render": {"overlay_alpha": 300}})
