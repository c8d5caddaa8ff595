"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from penrose.engine.bounds import Bounds
from penrose.engine.config import TilingConfig
from penrose.engine.plane import PentagridPlane
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset
from penrose.engine.tiling import MatchResult, compute_area


# Small enough to converge quickly, large enough to hold a few dozen tiles
SMALL_BOUNDS = Bounds(-8.0, -6.0, 8.0, 6.0)

# Every iteration forces at least one bar; a few hundred is far above what
# the small bounds need.
TEST_CONFIG = TilingConfig(max_iterations=500)


@pytest.fixture
def small_bounds() -> Bounds:
    return SMALL_BOUNDS


@pytest.fixture
def tiling_config() -> TilingConfig:
    return TilingConfig(max_iterations=TEST_CONFIG.max_iterations)


@pytest.fixture
def plane() -> PentagridPlane:
    """Fresh plane with every bar 0 through the origin."""
    return PentagridPlane()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20211010)


@pytest.fixture(scope="session")
def king_tiling() -> tuple[PentagridPlane, MatchResult]:
    """Converged king plane over the small bounds; shared because it is slow."""
    plane = build_plane("king", TEST_CONFIG)
    return plane, compute_area(plane, SMALL_BOUNDS, TEST_CONFIG)


@pytest.fixture(scope="session", params=list(Preset), ids=lambda p: p.value)
def preset_tiling(request) -> tuple[Preset, PentagridPlane, MatchResult]:
    """Every preset converged over the small bounds."""
    plane = build_plane(request.param, TEST_CONFIG)
    return request.param, plane, compute_area(plane, SMALL_BOUNDS, TEST_CONFIG)
