"""Pentagrid plane — five bar sequences and their cached crossings.

The cache maps (sequence, bar, sequence, bar) to the crossing of those two
bars. Forcing never moves an already-forced bar, so entries stay valid for
the plane's lifetime and a refresh only adds what newly forced bars create.
"""

from __future__ import annotations

import itertools
import logging
import math

from penrose.engine.bar_sequence import BarSequence
from penrose.engine.bounds import Bounds, Point
from penrose.engine.config import TilingConfig
from penrose.engine.constants import SEQUENCE_COUNT, SEQUENCE_ROTATION
from penrose.engine.intersection import IntersectionPoint, PointSet
from penrose.engine.phase import solve_phases
from penrose.exceptions import PendingForcingError

logger = logging.getLogger(__name__)

CacheKey = tuple[int, int, int, int]


def intersect(
    a: BarSequence,
    a_bar: int,
    b: BarSequence,
    b_bar: int,
    epsilon: float,
) -> Point | None:
    """Crossing of two bars, or None if they are parallel.

    Each bar is the line ``p · u = c · u + d`` where ``u`` is the sequence
    direction, ``c`` its center and ``d`` the bar's axis distance. Solving the
    2x2 system directly avoids slopes, so vertical bars need no special case.
    """
    ax, ay = a.direction
    bx, by = b.direction
    det = ax * by - ay * bx
    if abs(det) <= epsilon:
        return None

    ka = a.center[0] * ax + a.center[1] * ay + a.index_to_distance(a_bar)
    kb = b.center[0] * bx + b.center[1] * by + b.index_to_distance(b_bar)

    x = (ka * by - ay * kb) / det
    y = (ax * kb - ka * bx) / det
    return (x, y)


class PentagridPlane:
    """Owns the five bar sequences at rotations i·72° and the crossing cache."""

    def __init__(
        self,
        sequences: list[BarSequence] | None = None,
        config: TilingConfig | None = None,
    ) -> None:
        self.config = config or TilingConfig()
        if sequences is None:
            sequences = [
                BarSequence(index=i, rotation=i * SEQUENCE_ROTATION)
                for i in range(SEQUENCE_COUNT)
            ]
        if len(sequences) != SEQUENCE_COUNT:
            raise ValueError(f"Expected {SEQUENCE_COUNT} sequences, got {len(sequences)}")
        self.sequences = sequences

        self._cache: dict[CacheKey, IntersectionPoint] = {}
        self._pending: int | None = None
        self._refreshed: Bounds | None = None

    @property
    def pending_forcing(self) -> int | None:
        """Sequence forced since the last refresh, if any."""
        return self._pending

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def intersection(self, a: int, a_bar: int, b: int, b_bar: int) -> IntersectionPoint | None:
        """Crossing of bar ``a_bar`` of sequence ``a`` with bar ``b_bar`` of sequence ``b``."""
        seq_a = self.sequences[a]
        seq_b = self.sequences[b]
        point = intersect(seq_a, a_bar, seq_b, b_bar, self.config.epsilon)
        if point is None:
            return None
        return IntersectionPoint.build(
            a, a_bar, b, b_bar, point, self.config.box_dim, self.config.box_overlap
        )

    # --- Cache ---------------------------------------------------------

    def refresh(self, bounds: Bounds) -> int:
        """Compute missing crossings of forced bars inside ``bounds``.

        After a forcing only pairs involving the forced sequence can gain
        crossings, so the scan is restricted to them. Returns the number of
        new cache entries.
        """
        pending = self._pending
        self._pending = None
        if bounds != self._refreshed:
            pending = None
            self._refreshed = bounds

        forced = [seq.bars_within(bounds, forced=True) for seq in self.sequences]

        added = 0
        for a, b in itertools.combinations(range(SEQUENCE_COUNT), 2):
            if pending is not None and pending not in (a, b):
                continue
            for a_bar, b_bar in itertools.product(forced[a], forced[b]):
                key = (a, a_bar, b, b_bar)
                if key in self._cache:
                    continue
                point = self.intersection(a, a_bar, b, b_bar)
                if point is not None:
                    self._cache[key] = point
                    added += 1

        logger.debug(
            "Refresh (%s): %d new crossings, %d cached",
            "full" if pending is None else f"sequence {pending}",
            added,
            len(self._cache),
        )
        return added

    def points_within(self, bounds: Bounds) -> PointSet:
        """Cached crossings inside ``bounds`` with their boundary duplicates, in canonical order."""
        return PointSet(p for p in self._cache.values() if bounds.contains(p.point))

    # --- Point queries -------------------------------------------------

    def is_forced_at(self, point: Point, sequence: int) -> bool:
        return self.sequences[sequence].is_forced_at(point, self.config.epsilon)

    def forced_sequences_at(self, point: Point) -> list[int]:
        """Sequences with a forced bar passing through ``point``, by rotation."""
        return [
            seq.index
            for seq in self.sequences
            if seq.is_forced_at(point, self.config.epsilon)
        ]

    def crossing_at(self, point: Point) -> IntersectionPoint | None:
        """The crossing of forced bars at ``point``, if two forced bars meet there."""
        forced = self.forced_sequences_at(point)
        if len(forced) < 2:
            return None
        a, b = forced[0], forced[1]
        return IntersectionPoint.build(
            a,
            self.sequences[a].bar_at(point),
            b,
            self.sequences[b].bar_at(point),
            point,
            self.config.box_dim,
            self.config.box_overlap,
        )

    # --- Forcing -------------------------------------------------------

    def force_near(self, point: Point, sequence: int) -> bool:
        """Force the bar of ``sequence`` nearest ``point``.

        Returns True if a new constraint was introduced. Only one forcing may
        be outstanding between refreshes.
        """
        if self._pending is not None:
            raise PendingForcingError(self._pending, sequence)

        seq = self.sequences[sequence]
        if not seq.force_nearest_to_distance(seq.project(point)):
            return False

        self._pending = sequence
        logger.debug(
            "Forced sequence %d near (%.4f, %.4f)", sequence, point[0], point[1]
        )
        return True

    def settle(self, bounds: Bounds) -> int:
        """Force every unforced bar meeting ``bounds`` to one consistent tiling.

        Used once local forcing has stalled. Returns the number of bars forced;
        the next refresh rescans every sequence.
        """
        unforced = [seq.bars_within(bounds, forced=False) for seq in self.sequences]
        if not any(unforced):
            return 0

        phases = solve_phases(self.sequences, self.config.epsilon)
        settled = sum(
            seq.settle(phase, bars)
            for seq, phase, bars in zip(self.sequences, phases, unforced)
        )
        if settled:
            self._refreshed = None
            logger.debug("Settled %d bars at phases %s", settled, [round(p, 6) for p in phases])
        return settled

    def __repr__(self) -> str:
        rotations = ", ".join(f"{math.degrees(s.rotation):.0f}°" for s in self.sequences)
        return f"PentagridPlane([{rotations}], cached={len(self._cache)})"
