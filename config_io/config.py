"""Configuration loading and defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


# ── Sub-configs ────────────────────────────────────────────────────────────

class LoaderConfig(BaseModel):
    check_assets: bool = True
    check_image_size: bool = True
    strict_image_size: bool = False  # raise instead of warn on size mismatch
    warn_case_collisions: bool = True


class CollisionConfig(BaseModel):
    """Property names read when building collision grids."""
    blocked_property: str = "blocked"
    jump_property: str = "jump"
    terrain_tags: list[str] = Field(default_factory=lambda: ["water", "grass"])


class RenderConfig(BaseModel):
    scale: int = Field(default=8, ge=1)
    fps: int = 30
    show_labels: bool = True
    overlay_alpha: int = Field(default=110, ge=0, le=255)


# ── Top-level config ───────────────────────────────────────────────────

class Config(BaseModel):
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    collision: CollisionConfig = Field(default_factory=CollisionConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def load_config(path: str | Path | None = None, overrides: dict[str, Any] | None = None) -> Config:
    """Load config from YAML file, applying optional overrides."""
    data: dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}
    if overrides:
        _deep_merge(data, overrides)
    return Config(**data)


def _deep_merge(base: dict, overlay: dict) -> None:
    for k, v in overlay.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
