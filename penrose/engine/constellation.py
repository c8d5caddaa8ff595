"""Constellations — rigid point patterns searched for in the crossing cloud.

Each constellation type supplies a template: a few crossings in a canonical
frame, two of which form the *key pair*. Matching works in three steps:

1. Collect point pairs whose distance equals the key-pair distance. Pairs are
   only looked for within classification bands (runs of points sharing a
   ring key), which keeps the scan local. Boundary replication makes every
   pair closer than the cell overlap share at least one band.
2. For each pair, and each assignment of the pair to the key points, build
   the rotation + translation taking the key pair onto it.
3. Accept if every template crossing maps onto a crossing of the cloud with
   the same (or full-turn complementary) rotation difference.

A constellation may then ask the plane to force a bar it found undetermined.
"""

from __future__ import annotations

import abc
import logging
import math
from dataclasses import dataclass
from itertools import pairwise
from typing import TYPE_CHECKING, ClassVar, TypeVar

import numpy as np
from scipy.spatial import cKDTree

from penrose.engine.constants import EPSILON, SEQUENCE_COUNT
from penrose.engine.intersection import IntersectionPoint, PartialCrossing, PointSet
from penrose.engine.transform import RigidTransform

if TYPE_CHECKING:
    from penrose.engine.plane import PentagridPlane

logger = logging.getLogger(__name__)

Pair = tuple[IntersectionPoint, IntersectionPoint]
C = TypeVar("C", bound="Constellation")


@dataclass(frozen=True)
class OptionalPoint:
    """Template crossing checked after a match; ``offset`` picks the companion sequence."""

    point: IntersectionPoint
    offset: int


@dataclass(frozen=True)
class Template:
    pattern: tuple[IntersectionPoint, ...]
    key_pair: Pair

    @property
    def delta(self) -> float:
        (x0, y0), (x1, y1) = self.key_pair[0].point, self.key_pair[1].point
        return math.hypot(x1 - x0, y1 - y0)


def pair_scan(points: list[IntersectionPoint], delta: float, epsilon: float = EPSILON) -> set[Pair]:
    """All pairs (lower, higher in canonical order) at distance ``delta``."""
    if len(points) < 2:
        return set()

    coords = np.array([p.point for p in points])
    tree = cKDTree(coords)
    candidates = tree.query_pairs(delta + epsilon, output_type="ndarray")
    if len(candidates) == 0:
        return set()

    diffs = coords[candidates[:, 0]] - coords[candidates[:, 1]]
    distances = np.sqrt(np.sum(diffs**2, axis=1))
    hits = candidates[np.abs(distances - delta) < epsilon]

    pairs = set()
    for i, j in hits:
        first, second = points[i], points[j]
        pairs.add((first, second) if first < second else (second, first))
    return pairs


def candidate_pairs(
    points: PointSet,
    delta: float,
    boundaries: list[IntersectionPoint] | None = None,
    banded: bool = True,
    epsilon: float = EPSILON,
) -> list[Pair]:
    """Key-pair candidates, scanned band by band when boundaries are given."""
    if banded and boundaries is not None and len(boundaries) >= 2:
        pairs: set[Pair] = set()
        for old, current in pairwise(boundaries):
            pairs |= pair_scan(points.band(old, current), delta, epsilon)
        pairs |= pair_scan(points.band(boundaries[-1]), delta, epsilon)
    else:
        pairs = pair_scan(list(points), delta, epsilon)
    return sorted(pairs)


def match_required(
    points: PointSet,
    plane: PentagridPlane,
    pair: Pair,
    template: Template,
    epsilon: float = EPSILON,
) -> tuple[RigidTransform, tuple[IntersectionPoint, ...]] | None:
    """Transform and matched crossings if the whole template is supported by ``points``."""
    transform = RigidTransform.between(
        (template.key_pair[0].point, template.key_pair[1].point),
        (pair[0].point, pair[1].point),
    )

    matched = []
    for unmapped in template.pattern:
        mapped = plane.crossing_at(transform.apply(unmapped.point))
        if mapped is None or mapped not in points:
            return None

        expected = unmapped.rotation_delta
        actual = mapped.rotation_delta
        if abs(expected - actual) > epsilon and abs(expected + actual - math.tau) > epsilon:
            return None
        matched.append(mapped)

    return transform, tuple(matched)


def map_optional(
    optional: OptionalPoint,
    transform: RigidTransform,
    plane: PentagridPlane,
) -> IntersectionPoint | PartialCrossing | None:
    """Locate an optional template crossing.

    A full crossing if two forced bars meet there, a partial crossing naming
    the companion sequence if only one does, None otherwise.
    """
    location = transform.apply(optional.point.point)
    forced = plane.forced_sequences_at(location)
    if len(forced) >= 2:
        return plane.crossing_at(location)
    if forced:
        companion = (forced[0] + optional.offset) % SEQUENCE_COUNT
        return PartialCrossing(location[0], location[1], companion)
    return None


def force_partial(
    crossing: IntersectionPoint | PartialCrossing | None,
    plane: PentagridPlane,
) -> bool:
    if isinstance(crossing, PartialCrossing):
        return plane.force_near(crossing.point, crossing.companion)
    return False


class Constellation(abc.ABC):
    """Base for the closed set of constellation types."""

    name: ClassVar[str] = ""

    def __init__(self, transform: RigidTransform, crossings: tuple[IntersectionPoint, ...]) -> None:
        self.transform = transform
        self.crossings = crossings

    @classmethod
    @abc.abstractmethod
    def template(cls) -> Template:
        """Canonical crossings of this type, with its key pair."""

    @classmethod
    def match_pair(
        cls: type[C],
        points: PointSet,
        plane: PentagridPlane,
        pair: Pair,
        epsilon: float = EPSILON,
    ) -> C | None:
        found = match_required(points, plane, pair, cls.template(), epsilon)
        if found is None:
            return None
        transform, crossings = found
        return cls(transform, crossings)

    @property
    def identity(self) -> frozenset[tuple[tuple[int, int], tuple[int, int]]]:
        """Bars of the matched crossings; equal for the same placement found twice."""
        return frozenset(c.identity for c in self.crossings)

    def force_bars(self, plane: PentagridPlane) -> bool:
        """Force one undetermined bar next to this match. True if a bar was forced."""
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.transform!r})"


def find_constellations(
    kind: type[C],
    points: PointSet,
    plane: PentagridPlane,
    boundaries: list[IntersectionPoint] | None = None,
    banded: bool = True,
    epsilon: float = EPSILON,
) -> list[C]:
    """Every placement of ``kind`` supported by ``points``, in canonical pair order."""
    template = kind.template()
    pairs = candidate_pairs(points, template.delta, boundaries, banded, epsilon)

    found: dict[frozenset, C] = {}
    for primary, secondary in pairs:
        match = kind.match_pair(points, plane, (primary, secondary), epsilon)
        if match is None:
            match = kind.match_pair(points, plane, (secondary, primary), epsilon)
        if match is not None and match.identity not in found:
            found[match.identity] = match

    logger.debug(
        "%s: %d candidate pairs, %d matches", kind.name, len(pairs), len(found)
    )
    return list(found.values())
