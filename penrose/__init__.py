"""Penrose kite-and-dart tilings from Ammann bar pentagrids."""

from penrose.engine import (
    Bounds,
    MatchResult,
    PentagridPlane,
    Preset,
    Tiling,
    TilingConfig,
    build_plane,
    compute_area,
)

__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "MatchResult",
    "PentagridPlane",
    "Preset",
    "Tiling",
    "TilingConfig",
    "build_plane",
    "compute_area",
]
