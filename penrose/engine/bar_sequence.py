"""Bar sequence — one direction's family of parallel Ammann bars.

Bar positions along the sequence axis follow a musical sequence of SHORT and
LONG gaps. Which gap comes next is undetermined until the bar is *forced*.
The sequence keeps two bounding lines of slope φ in (bar, count) space; bar
``b`` is forced once both lines truncate to the same count at ``b``. Forcing
narrows one of the lines, so the set of forced bars only ever grows.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from penrose.engine.bounds import Bounds, Point
from penrose.engine.constants import EPSILON, GOLDEN_RATIO, LONG, SCALE, SHORT
from penrose.engine.surd import Surd

logger = logging.getLogger(__name__)


class BarBound(enum.Enum):
    LONGER = "longer"
    SHORTER = "shorter"


def _truncate_open(value: float) -> int:
    nearest = round(value)
    if abs(value - nearest) <= EPSILON:
        return int(nearest)
    return math.floor(value)


def _truncate_closed(value: float) -> int:
    """Floor, except that an integer value maps to the integer below it."""
    nearest = round(value)
    if abs(value - nearest) <= EPSILON:
        return int(nearest) - 1
    return math.floor(value)


def _count_distance(bar: int, count: int) -> float:
    """Axis distance of ``bar`` when the bounding lines put it at ``count``."""
    shorts = 2 * bar - count
    longs = count - bar
    return SCALE * (shorts + GOLDEN_RATIO * longs)


@dataclass
class BarSequence:
    """Bars perpendicular to ``rotation``; bar 0 passes through ``center``."""

    index: int = 0
    rotation: float = 0.0
    center: Point = (0.0, 0.0)
    # Exact distance of bar 0 from the origin; the phase solver needs its conjugate
    anchor: Surd = Surd()
    # Bounding lines as (bar, count) anchors
    upper: tuple[int, int] = (0, 1)
    lower: tuple[int, int] = (0, 0)

    @property
    def direction(self) -> Point:
        return (math.cos(self.rotation), math.sin(self.rotation))

    def set_anchor_distance(self, distance: float | Surd) -> None:
        """Move bar 0 to ``distance`` along the sequence axis from the origin.

        A plain float is taken as rational.
        """
        self.anchor = distance if isinstance(distance, Surd) else Surd(float(distance))
        ux, uy = self.direction
        value = self.anchor.value
        self.center = (value * ux, value * uy)

    # --- Forcing -------------------------------------------------------

    def _bound_value(self, bar: int, anchor: tuple[int, int]) -> float:
        ax, ay = anchor
        return (bar - ax) * GOLDEN_RATIO + ay

    def upper_point(self, bar: int) -> int:
        return _truncate_closed(self._bound_value(bar, self.upper))

    def lower_point(self, bar: int) -> int:
        return _truncate_open(self._bound_value(bar, self.lower))

    def is_forced(self, bar: int) -> bool:
        return self.upper_point(bar) == self.lower_point(bar)

    def force(self, bar: int, bound: BarBound) -> None:
        """Narrow whichever bounding line disagrees at ``bar``. No-op if already forced."""
        longer = self.upper_point(bar)
        shorter = self.lower_point(bar)
        if longer == shorter:
            return

        if (bound is BarBound.LONGER and bar >= 0) or (bound is BarBound.SHORTER and bar < 0):
            self.lower = (bar, longer)
        else:
            self.upper = (bar, longer)
        logger.debug("Sequence %d: forced bar %d %s", self.index, bar, bound.value)

    def force_nearest_to_distance(self, distance: float) -> bool:
        """Force the bar nearest ``distance``. True if a new constraint was introduced.

        Each bar near ``distance`` may sit at one position (forced) or two
        (its lower and upper count). The closest of those positions wins; if
        it belongs to an unforced bar, that bar is pinned to the matching count.
        """
        center = self.distance_to_index(distance)
        options = []
        for bar in range(center - 1, center + 2):
            for count in sorted({self.lower_point(bar), self.upper_point(bar)}):
                options.append((abs(distance - _count_distance(bar, count)), bar, count))
        _, bar, count = min(options)

        if self.is_forced(bar):
            return False
        self.force_count(bar, count)
        return True

    def force_count(self, bar: int, count: int) -> bool:
        """Pin an unforced ``bar`` to one of its two possible counts."""
        longer = self.upper_point(bar)
        shorter = self.lower_point(bar)
        if longer == shorter:
            return False
        if count == longer:
            self.lower = (bar, longer)
        elif count == shorter:
            self.upper = (bar, longer)
        else:
            raise ValueError(f"Bar {bar} can only take count {shorter} or {longer}, not {count}")
        logger.debug("Sequence %d: pinned bar %d to count %d", self.index, bar, count)
        return True

    # --- Phase ---------------------------------------------------------

    @property
    def phase_interval(self) -> tuple[float, float]:
        """Open interval of intercepts ``c`` with count(b) = ceil(b·φ + c) - 1 for every forced b."""
        return (
            self.lower[1] - self.lower[0] * GOLDEN_RATIO,
            self.upper[1] - self.upper[0] * GOLDEN_RATIO,
        )

    def settle(self, phase: float, bars: Iterable[int]) -> int:
        """Force every unforced bar in ``bars`` to its count at ``phase``. Returns how many."""
        settled = 0
        for bar in bars:
            if self.force_count(bar, _truncate_closed(bar * GOLDEN_RATIO + phase)):
                settled += 1
        return settled

    def forced_bars(self, bars: Iterable[int]) -> list[int]:
        return [bar for bar in bars if self.is_forced(bar)]

    def unforced_bars(self, bars: Iterable[int]) -> list[int]:
        return [bar for bar in bars if not self.is_forced(bar)]

    def bar_forcings(self, bars: Iterable[int]) -> list[bool]:
        return [self.is_forced(bar) for bar in bars]

    def guess_bars(self, bars: Iterable[int]) -> list[BarBound]:
        """Guess the gap following each bar from the lower bounding line.

        A step of one count is a SHORTER gap; anything else is LONGER.
        """
        guesses = []
        for bar in bars:
            step = self.lower_point(bar + 1) - self.lower_point(bar)
            guesses.append(BarBound.SHORTER if step == 1 else BarBound.LONGER)
        return guesses

    # --- Index <-> distance --------------------------------------------

    def index_to_distance(self, bar: int) -> float:
        """Signed distance of ``bar`` from bar 0 along the axis."""
        return _count_distance(bar, self.upper_point(bar))

    def distance_to_index(self, distance: float) -> int:
        """Nearest bar index for a signed axis distance (rounding halves up)."""
        shorts = distance / (SHORT + GOLDEN_RATIO * LONG)
        longs = shorts * GOLDEN_RATIO
        total = shorts + longs
        floor = math.floor(total)
        return floor + 1 if total - floor >= 0.5 else floor

    # --- Geometry ------------------------------------------------------

    def project(self, point: Point) -> float:
        """Signed distance of ``point``'s projection from bar 0 along the axis."""
        ux, uy = self.direction
        return (point[0] - self.center[0]) * ux + (point[1] - self.center[1]) * uy

    def point_at_distance(self, distance: float) -> Point:
        ux, uy = self.direction
        return (self.center[0] + distance * ux, self.center[1] + distance * uy)

    def bar_point(self, bar: int) -> Point:
        """Point where ``bar`` crosses the sequence axis."""
        return self.point_at_distance(self.index_to_distance(bar))

    def bar_at(self, point: Point) -> int:
        return self.distance_to_index(self.project(point))

    def is_forced_at(self, point: Point, epsilon: float = EPSILON) -> bool:
        """True if a forced bar of this sequence passes through ``point``."""
        distance = self.project(point)
        bar = self.distance_to_index(distance)
        if abs(distance - self.index_to_distance(bar)) > epsilon:
            return False
        return self.is_forced(bar)

    def bars_within(self, bounds: Bounds, forced: bool = True) -> list[int]:
        """Forced (or unforced) bars whose index range covers ``bounds``."""
        distances = [self.project(corner) for corner in bounds.corners()]
        first = self.distance_to_index(min(distances))
        last = self.distance_to_index(max(distances))
        # Index mapping is approximate near the ends; widen by one bar each side.
        bars = range(first - 1, last + 2)
        return self.forced_bars(bars) if forced else self.unforced_bars(bars)
