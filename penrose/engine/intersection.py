"""Intersection points — crossings of two forced bars, keyed for ordering.

A point is filed under a cell of a square grid centered on the origin. The
cell gives the point's *ring layer* (Chebyshev ring index) and *ring angle*
(polar angle of the cell center). Equality and ordering use only
(ring layer, ring angle, sequences, bars), never raw coordinates, so two
derivations of the same crossing compare equal despite round-off.

Points near a cell's far edges are replicated into the neighboring cells so
that scans restricted to one cell still see crossings just across the edge.
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from penrose.engine.bounds import Point
from penrose.engine.constants import BOX_DIM, BOX_OVERLAP, SEQUENCE_ROTATION

RingKey = tuple[int, float]


def ring_key(cell_x: int, cell_y: int) -> RingKey:
    """(ring layer, ring angle) of a grid cell."""
    layer = max(abs(cell_x), abs(cell_y))
    angle = math.atan2(cell_y, cell_x) % math.tau
    return layer, angle


def locate_cell(point: Point, box_dim: float = BOX_DIM) -> tuple[int, int, float, float]:
    """Cell indices of ``point`` and its offset within that cell (in cell units)."""
    origin = -box_dim / 2
    x_boxes = (point[0] - origin) / box_dim
    y_boxes = (point[1] - origin) / box_dim
    cell_x = math.floor(x_boxes)
    cell_y = math.floor(y_boxes)
    return cell_x, cell_y, x_boxes - cell_x, y_boxes - cell_y


def classify(point: Point, box_dim: float = BOX_DIM) -> RingKey:
    cell_x, cell_y, _, _ = locate_cell(point, box_dim)
    return ring_key(cell_x, cell_y)


def neighbor_cells(
    point: Point,
    box_dim: float = BOX_DIM,
    box_overlap: float = BOX_OVERLAP,
) -> list[tuple[int, int]]:
    """Neighbor cells (right, bottom, diagonal) that ``point`` overlaps."""
    cell_x, cell_y, rem_x, rem_y = locate_cell(point, box_dim)
    over_x = rem_x * box_dim + box_overlap > box_dim
    over_y = rem_y * box_dim + box_overlap > box_dim

    cells = []
    if over_x:
        cells.append((cell_x + 1, cell_y))
    if over_y:
        cells.append((cell_x, cell_y + 1))
    if over_x and over_y:
        cells.append((cell_x + 1, cell_y + 1))
    return cells


@dataclass(frozen=True, order=True)
class IntersectionPoint:
    """Crossing of bar ``bar_a`` of ``seq_a`` with bar ``bar_b`` of ``seq_b``.

    ``seq_a`` always has the smaller rotation of the two.
    """

    ring_layer: int
    ring_angle: float
    seq_a: int
    seq_b: int
    bar_a: int
    bar_b: int
    x: float = field(compare=False)
    y: float = field(compare=False)
    duplicates: tuple[IntersectionPoint, ...] = field(default=(), compare=False, repr=False)

    @classmethod
    def build(
        cls,
        seq_a: int,
        bar_a: int,
        seq_b: int,
        bar_b: int,
        point: Point,
        box_dim: float = BOX_DIM,
        box_overlap: float = BOX_OVERLAP,
    ) -> IntersectionPoint:
        if seq_b < seq_a:
            seq_a, bar_a, seq_b, bar_b = seq_b, bar_b, seq_a, bar_a

        layer, angle = classify(point, box_dim)
        base = cls(layer, angle, seq_a, seq_b, bar_a, bar_b, point[0], point[1])

        copies = []
        for cell in neighbor_cells(point, box_dim, box_overlap):
            copy_layer, copy_angle = ring_key(*cell)
            copies.append(replace(base, ring_layer=copy_layer, ring_angle=copy_angle))
        if copies:
            base = replace(base, duplicates=tuple(copies))
        return base

    @property
    def point(self) -> Point:
        return (self.x, self.y)

    @property
    def ring(self) -> RingKey:
        return (self.ring_layer, self.ring_angle)

    @property
    def identity(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """Which bars cross here, independent of the cell the record is filed under."""
        return ((self.seq_a, self.bar_a), (self.seq_b, self.bar_b))

    @property
    def rotation_delta(self) -> float:
        return (self.seq_b - self.seq_a) * SEQUENCE_ROTATION

    def expand(self) -> Iterator[IntersectionPoint]:
        yield self
        yield from self.duplicates

    def add_to(self, store: set[IntersectionPoint]) -> bool:
        """Insert this point and all its duplicates. True if every record was new."""
        added = True
        for record in self.expand():
            if record in store:
                added = False
            store.add(record)
        return added

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class PartialCrossing:
    """A location crossed by one forced bar whose companion bar is still unforced."""

    x: float
    y: float
    companion: int

    @property
    def point(self) -> Point:
        return (self.x, self.y)


class PointSet:
    """Deduplicated intersection points in canonical order."""

    def __init__(self, points: Iterable[IntersectionPoint] = ()) -> None:
        store: set[IntersectionPoint] = set()
        for point in points:
            point.add_to(store)
        self._members = store
        self._ordered = sorted(store)

    def __contains__(self, point: object) -> bool:
        return point in self._members

    def __iter__(self) -> Iterator[IntersectionPoint]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __getitem__(self, index: int) -> IntersectionPoint:
        return self._ordered[index]

    def boundaries(self) -> list[IntersectionPoint]:
        """First point of every run sharing a (ring layer, ring angle) key."""
        markers = []
        ring = None
        for point in self._ordered:
            if point.ring != ring:
                ring = point.ring
                markers.append(point)
        return markers

    def band(
        self,
        start: IntersectionPoint,
        end: IntersectionPoint | None = None,
    ) -> list[IntersectionPoint]:
        """Points from ``start`` up to and including ``end`` (or to the end)."""
        lo = bisect.bisect_left(self._ordered, start)
        if end is None:
            return self._ordered[lo:]
        hi = bisect.bisect_right(self._ordered, end)
        return self._ordered[lo:hi]
