"""Dart constellation.

Three crossings of the ace configuration identify a dart. Its two side
corners are optional: a dart is only accepted once at least one of them lies
on a forced bar, and a corner crossed by a single forced bar forces the
companion sequence's bar there.
"""

from __future__ import annotations

import functools

from penrose.engine.constants import EPSILON
from penrose.engine.constellation import (
    Constellation,
    OptionalPoint,
    Pair,
    Template,
    force_partial,
    map_optional,
    match_required,
)
from penrose.engine.intersection import IntersectionPoint, PartialCrossing, PointSet
from penrose.engine.plane import PentagridPlane
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset
from penrose.engine.shapes import DART_OUTLINE, PlacedTile
from penrose.engine.transform import RigidTransform

Corner = IntersectionPoint | PartialCrossing | None


@functools.cache
def dart_template() -> tuple[Template, OptionalPoint, OptionalPoint]:
    """Template plus (left, right) optional corners."""
    plane = build_plane(Preset.ACE)
    pattern = (
        plane.intersection(0, 0, 2, 0),
        plane.intersection(0, 0, 3, 0),
        plane.intersection(2, 0, 3, 0),
    )
    left = OptionalPoint(plane.intersection(0, 0, 4, 0), offset=4)
    right = OptionalPoint(plane.intersection(0, 0, 1, 0), offset=1)
    return Template(pattern, (pattern[0], pattern[2])), left, right


class Dart(Constellation, PlacedTile):
    name = "dart"
    outline = DART_OUTLINE

    def __init__(
        self,
        transform: RigidTransform,
        crossings: tuple[IntersectionPoint, ...],
        left: Corner = None,
        right: Corner = None,
    ) -> None:
        super().__init__(transform, crossings)
        self.left = left
        self.right = right

    @classmethod
    def template(cls) -> Template:
        return dart_template()[0]

    @classmethod
    def match_pair(
        cls,
        points: PointSet,
        plane: PentagridPlane,
        pair: Pair,
        epsilon: float = EPSILON,
    ) -> Dart | None:
        template, left_corner, right_corner = dart_template()
        found = match_required(points, plane, pair, template, epsilon)
        if found is None:
            return None

        transform, crossings = found
        left = map_optional(left_corner, transform, plane)
        right = map_optional(right_corner, transform, plane)
        if left is None and right is None:
            return None
        return cls(transform, crossings, left, right)

    def force_bars(self, plane: PentagridPlane) -> bool:
        return force_partial(self.left, plane) or force_partial(self.right, plane)
