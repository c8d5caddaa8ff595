"""Tolerances, loop cap and scan strategy for one tiling run."""

from __future__ import annotations

from dataclasses import dataclass

from penrose.engine.constants import BOX_DIM, BOX_OVERLAP, EPSILON


@dataclass
class TilingConfig:
    """Controls the fixed-point loop and the pattern scan."""

    # Shared float tolerance
    epsilon: float = EPSILON

    # Fixed-point loop: every iteration but the last forces at least one bar,
    # so the cap only has to exceed the number of bars inside the bounds.
    max_iterations: int = 10_000

    # Pair candidates only inside classification bands (cells); False scans
    # every pair of the whole cloud.
    banded_pairing: bool = True

    # Once local forcing stalls, force the remaining bars inside the bounds to
    # one tiling consistent with everything forced so far.
    settle_phases: bool = True

    # Classification grid
    box_dim: float = BOX_DIM
    box_overlap: float = BOX_OVERLAP
