"""Leaf-node helpers over tile paths (open vertex rings). No engine imports."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

Path = Union[Sequence[tuple[float, float]], NDArray[np.float64]]


def as_array(path: Path) -> NDArray[np.float64]:
    """Nx2 float array of an open ring; a repeated closing vertex is dropped."""
    points = np.asarray(path, dtype=np.float64).reshape(-1, 2)
    if len(points) > 1 and np.array_equal(points[0], points[-1]):
        return points[:-1]
    return points


def signed_area(path: Path) -> float:
    """Shoelace area. Positive = CCW, Negative = CW."""
    points = as_array(path)
    if len(points) < 3:
        return 0.0
    x, y = points[:, 0], points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def bbox(path: Path) -> tuple[float, float, float, float]:
    """(xmin, ymin, xmax, ymax), all zero for an empty path."""
    points = as_array(path)
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return (float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def centroid(path: Path) -> tuple[float, float]:
    """Mean of the vertices."""
    points = as_array(path)
    if len(points) == 0:
        return (0.0, 0.0)
    cx, cy = points.mean(axis=0)
    return (float(cx), float(cy))


def point_in_polygon(point: tuple[float, float], path: Path) -> bool:
    """Even-odd ray cast along +x, vectorized over the edges."""
    points = as_array(path)
    if len(points) < 3:
        return False
    px, py = point
    x0, y0 = points[:, 0], points[:, 1]
    x1, y1 = np.roll(x0, -1), np.roll(y0, -1)

    straddles = (y0 > py) != (y1 > py)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = x0 + (py - y0) * (x1 - x0) / (y1 - y0)
    hits = straddles & (px < x_cross)
    return bool(np.count_nonzero(hits) % 2)
