"""TilingContext — mutable bookkeeping for one run of the fixed-point loop."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from penrose.engine.bounds import Bounds


class TilingState(enum.Enum):
    UNSTABLE = "unstable"
    CONVERGED = "converged"


@dataclass
class TilingContext:
    """State of a tiling run, updated by the driver after every iteration."""

    bounds: Bounds
    state: TilingState = TilingState.UNSTABLE
    # Loop bodies executed, including the final, non-forcing one
    iterations: int = 0
    # Sequence index of each bar forced, in order
    forcings: list[int] = field(default_factory=list)
    # Phase settlements and the bars they forced
    settlements: int = 0
    settled_bars: int = 0
    # Size of the canonical point set seen by the last iteration
    point_count: int = 0
    boundary_count: int = 0
    elapsed_ms: float = 0.0

    @property
    def converged(self) -> bool:
        return self.state is TilingState.CONVERGED
