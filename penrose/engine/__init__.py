"""Pentagrid tiling engine."""

from penrose.engine.bar_sequence import BarBound, BarSequence
from penrose.engine.bounds import Bounds
from penrose.engine.config import TilingConfig
from penrose.engine.context import TilingContext, TilingState
from penrose.engine.dart import Dart
from penrose.engine.double_kite import DoubleKite
from penrose.engine.intersection import IntersectionPoint, PointSet
from penrose.engine.kite import Kite
from penrose.engine.plane import PentagridPlane
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset, get_registry
from penrose.engine.tiling import MatchResult, Tiling, compute_area

__all__ = [
    "BarBound",
    "BarSequence",
    "Bounds",
    "TilingConfig",
    "TilingContext",
    "TilingState",
    "Dart",
    "DoubleKite",
    "IntersectionPoint",
    "PointSet",
    "Kite",
    "PentagridPlane",
    "build_plane",
    "Preset",
    "get_registry",
    "MatchResult",
    "Tiling",
    "compute_area",
]
