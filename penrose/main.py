"""Logging setup and settings-driven tiling generation."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from penrose.config import settings
from penrose.engine.bounds import Bounds
from penrose.engine.config import TilingConfig
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset
from penrose.engine.tiling import MatchResult, Tiling

load_dotenv()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def generate(
    preset: Preset | str | None = None,
    bounds: Bounds | None = None,
    config: TilingConfig | None = None,
) -> MatchResult:
    """Tile ``bounds`` starting from ``preset``; unspecified arguments come from settings."""
    name = Preset.parse(preset or settings.default_preset)
    region = bounds or Bounds.from_extent(settings.default_half_width, settings.default_half_height)
    cfg = config or TilingConfig(max_iterations=settings.max_iterations)

    plane = build_plane(name, cfg)
    return Tiling(plane, region).compute()
