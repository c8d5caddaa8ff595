"""Tests for settings and the settings-driven entry point."""

from __future__ import annotations

import logging

from penrose.config import Settings
from penrose.engine.bounds import Bounds
from penrose.engine.config import TilingConfig
from penrose.main import configure_logging, generate


def test_settings_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "DEFAULT_PRESET", "MAX_ITERATIONS"):
        monkeypatch.delenv(f"PENROSE_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "info"
    assert settings.default_preset == "king"
    assert settings.max_iterations == 10_000


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PENROSE_DEFAULT_PRESET", "sun")
    monkeypatch.setenv("PENROSE_MAX_ITERATIONS", "42")
    monkeypatch.setenv("PENROSE_DEFAULT_HALF_WIDTH", "3.5")
    settings = Settings(_env_file=None)
    assert settings.default_preset == "sun"
    assert settings.max_iterations == 42
    assert settings.default_half_width == 3.5


def test_configure_logging_accepts_level_names():
    configure_logging("debug")
    configure_logging("not-a-level")
    assert logging.getLogger("penrose").getEffectiveLevel() <= logging.WARNING


def test_generate():
    result = generate("sun", Bounds(-4.0, -4.0, 4.0, 4.0), TilingConfig(max_iterations=500))
    assert result.context.converged
    assert len(result.kites) >= 5
