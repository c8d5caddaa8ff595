"""Shape capability shared by darts, kites and the triangle helper.

Tiles are described in their template frame as two triangles mirrored about
the x axis, sharing the edge from the origin to the tile's top vertex.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Protocol

from shapely.geometry import Polygon

from penrose.engine.bounds import Bounds, Point
from penrose.engine.constants import MINNICK_B, MINNICK_E, MINNICK_X, MINNICK_Y
from penrose.engine.transform import RigidTransform


class Shape(Protocol):
    def contains(self, point: Point) -> bool: ...

    def path(self) -> list[Point]: ...


@dataclass(frozen=True)
class Triangle:
    a: Point
    b: Point
    c: Point

    def contains(self, point: Point) -> bool:
        """Barycentric sign test; edges through ``a`` count as inside."""
        (ax, ay), (bx, by), (cx, cy) = self.a, self.b, self.c
        px, py = point

        area = (-by * cx + ay * (-bx + cx) + ax * (by - cy) + bx * cy) / 2
        sign = -1.0 if area < 0 else 1.0

        s = (ay * cx - ax * cy + (cy - ay) * px + (ax - cx) * py) * sign
        t = (ax * by - ay * bx + (ay - by) * px + (bx - ax) * py) * sign

        return s >= 0 and t >= 0 and (s + t) < 2 * area * sign

    def path(self) -> list[Point]:
        return [self.a, self.b, self.c]


@dataclass(frozen=True)
class TileOutline:
    """Template-frame outline: upper and lower triangles plus a bounding box."""

    upper: Triangle
    lower: Triangle
    box: Bounds

    @classmethod
    def from_top(cls, top_x: float) -> TileOutline:
        corner_x = math.cos(math.pi / 5) * (MINNICK_X + MINNICK_Y)
        corner_y = math.sin(math.pi / 5) * (MINNICK_X + MINNICK_Y)
        upper = Triangle((0.0, 0.0), (top_x, 0.0), (corner_x, corner_y))
        lower = Triangle((0.0, 0.0), (top_x, 0.0), (corner_x, -corner_y))
        # Right edge reaches the top vertex for a kite, the corners for a dart.
        box = Bounds(0.0, -corner_y, max(top_x, corner_x), corner_y)
        return cls(upper, lower, box)

    def contains(self, point: Point) -> bool:
        if not self.box.contains(point):
            return False
        if point[1] >= 0:
            return self.upper.contains(point)
        return self.lower.contains(point)

    def path(self) -> list[Point]:
        return [self.upper.a, self.upper.c, self.upper.b, self.lower.c]


DART_OUTLINE = TileOutline.from_top(
    math.cos(math.pi / 5) * (MINNICK_X + MINNICK_Y) - math.cos(math.tau / 5)
)
KITE_OUTLINE = TileOutline.from_top(MINNICK_B + MINNICK_E)


class PlacedTile:
    """A tile outline placed in the plane by ``transform``."""

    outline: TileOutline
    transform: RigidTransform

    @cached_property
    def _inverse(self) -> RigidTransform:
        return self.transform.inverse()

    def contains(self, point: Point) -> bool:
        return self.outline.contains(self._inverse.apply(point))

    def path(self) -> list[Point]:
        return [self.transform.apply(p) for p in self.outline.path()]

    def polygon(self) -> Polygon:
        return Polygon(self.path())
