"""Tiling driver — iterates forcing until the bar configuration is stable.

Each iteration refreshes the crossing cache, partitions the canonical point
set at its ring-key boundaries and searches for darts and double kites. The
first match that forces a bar ends the iteration: geometry derived before a
forcing may be stale, so all matches are discarded and the loop repeats.

Local forcing alone stalls well inside the bounds for most presets. When no
match forces anything, the plane settles every remaining bar inside the
bounds to one tiling consistent with the forced bars and the loop resumes.
Once neither step changes the plane it has converged and kites are
collected. Forcing is monotonic and only finitely many bars meet the
bounds, so the loop terminates.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from penrose.engine.bounds import Bounds
from penrose.engine.config import TilingConfig
from penrose.engine.constellation import Constellation, find_constellations
from penrose.engine.context import TilingContext, TilingState
from penrose.engine.dart import Dart
from penrose.engine.double_kite import DoubleKite
from penrose.engine.kite import Kite
from penrose.engine.plane import PentagridPlane
from penrose.engine.shapes import PlacedTile
from penrose.exceptions import ConvergenceError
from penrose.models.tiling import MatchResultModel, ShapeModel

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Darts and kites covering the bounds once the plane has converged."""

    darts: list[Dart] = field(default_factory=list)
    kites: list[Kite] = field(default_factory=list)
    context: TilingContext | None = None

    def shapes(self) -> list[PlacedTile]:
        return [*self.darts, *self.kites]

    def __len__(self) -> int:
        return len(self.darts) + len(self.kites)

    def to_model(self, preset: str | None = None) -> MatchResultModel:
        ctx = self.context
        return MatchResultModel(
            preset=preset,
            bounds=ctx.bounds.as_tuple() if ctx else None,
            darts=[ShapeModel.from_path("dart", d.path()) for d in self.darts],
            kites=[ShapeModel.from_path("kite", k.path()) for k in self.kites],
            iterations=ctx.iterations if ctx else 0,
            forcings=len(ctx.forcings) if ctx else 0,
            settled_bars=ctx.settled_bars if ctx else 0,
        )


def _force_new(plane: PentagridPlane, constellations: Sequence[Constellation]) -> bool:
    return any(c.force_bars(plane) for c in constellations)


class Tiling:
    """Drives one plane to its fixed point within ``bounds``.

    The plane owns the configuration. A ``config`` argument is only accepted
    when it equals the plane's.
    """

    def __init__(
        self,
        plane: PentagridPlane,
        bounds: Bounds,
        config: TilingConfig | None = None,
    ) -> None:
        if config is not None and config != plane.config:
            raise ValueError("config differs from the plane's; build the plane with it instead")
        self.plane = plane
        self.bounds = bounds

    @property
    def config(self) -> TilingConfig:
        return self.plane.config

    def compute(self) -> MatchResult:
        """Run the fixed-point loop and return the matched tiles."""
        start = time.perf_counter()
        cfg = self.config
        ctx = TilingContext(bounds=self.bounds)

        logger.info(
            "Tiling: bounds (%.1f, %.1f)-(%.1f, %.1f), banded=%s, settle=%s",
            *self.bounds.as_tuple(),
            cfg.banded_pairing,
            cfg.settle_phases,
        )

        while True:
            if ctx.iterations >= cfg.max_iterations:
                raise ConvergenceError(ctx.iterations)
            ctx.iterations += 1

            self.plane.refresh(self.bounds)
            points = self.plane.points_within(self.bounds)
            boundaries = points.boundaries()
            ctx.point_count = len(points)
            ctx.boundary_count = len(boundaries)

            darts = find_constellations(
                Dart, points, self.plane, boundaries, cfg.banded_pairing, cfg.epsilon
            )
            double_kites = find_constellations(
                DoubleKite, points, self.plane, boundaries, cfg.banded_pairing, cfg.epsilon
            )

            if _force_new(self.plane, darts) or _force_new(self.plane, double_kites):
                ctx.forcings.append(self.plane.pending_forcing)
                logger.debug(
                    "  iteration %d: forced sequence %d (%d points, %d darts, %d double kites)",
                    ctx.iterations,
                    self.plane.pending_forcing,
                    len(points),
                    len(darts),
                    len(double_kites),
                )
                continue

            settled = self.plane.settle(self.bounds) if cfg.settle_phases else 0
            if not settled:
                break
            ctx.settlements += 1
            ctx.settled_bars += settled
            logger.debug("  iteration %d: settled %d bars", ctx.iterations, settled)

        ctx.state = TilingState.CONVERGED
        kites = find_constellations(
            Kite, points, self.plane, boundaries, cfg.banded_pairing, cfg.epsilon
        )

        ctx.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Tiling converged: %d darts, %d kites after %d iterations "
            "(%d forcings, %d bars settled) in %.0fms",
            len(darts),
            len(kites),
            ctx.iterations,
            len(ctx.forcings),
            ctx.settled_bars,
            ctx.elapsed_ms,
        )
        return MatchResult(darts=darts, kites=kites, context=ctx)


def compute_area(
    plane: PentagridPlane,
    bounds: Bounds,
    config: TilingConfig | None = None,
) -> MatchResult:
    """Drive ``plane`` to its fixed point within ``bounds``."""
    return Tiling(plane, bounds, config).compute()
