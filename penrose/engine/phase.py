"""Phase solver — picks one Penrose tiling consistent with the forced bars.

Bar ``b`` of a sequence has count ``ceil(b·φ + c) - 1`` for an intercept
``c`` inside the sequence's ``phase_interval``. Conjugating bar positions in
Q(√5) turns the five sequences into windows of width √5/2 centered at

    ω_j = d_j* - (√5/2)·(c_j - 1/2)

where ``d_j*`` is the conjugate of the anchor distance. Five sequences are the
Ammann bars of one Penrose tiling exactly when ω_j = Re(z·e^{2iθ_j}) for some
complex ``z``, θ_j being the sequence rotation. The forced bars bound each c_j
to an open interval, so the admissible ``z`` form a convex polygon; the solver
takes its Chebyshev center, the point farthest from every edge.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import linprog

from penrose.engine.bar_sequence import BarSequence
from penrose.engine.constants import EPSILON
from penrose.engine.surd import SQRT5
from penrose.exceptions import PhaseError

logger = logging.getLogger(__name__)

WINDOW_SCALE = SQRT5 / 2


def window_normal(seq: BarSequence) -> tuple[float, float]:
    """Unit vector n with ω = n · (Re z, Im z) for this sequence."""
    angle = 2 * seq.rotation
    return (math.cos(angle), -math.sin(angle))


def window_bounds(seq: BarSequence) -> tuple[float, float]:
    """Open range of the window center ω allowed by the forced bars."""
    low, high = seq.phase_interval
    conjugate = seq.anchor.conjugate
    return (
        conjugate - WINDOW_SCALE * (high - 0.5),
        conjugate - WINDOW_SCALE * (low - 0.5),
    )


def phase_for(seq: BarSequence, center: float) -> float:
    """Intercept c whose window is centered at ``center``."""
    return 0.5 + (seq.anchor.conjugate - center) / WINDOW_SCALE


def solve_phases(sequences: Sequence[BarSequence], epsilon: float = EPSILON) -> list[float]:
    """One intercept per sequence, all belonging to the same tiling.

    Raises PhaseError when the forced bars admit no tiling.
    """
    rows = []
    limits = []
    for seq in sequences:
        nx, ny = window_normal(seq)
        low, high = window_bounds(seq)
        rows.append((nx, ny, 1.0))
        limits.append(high)
        rows.append((-nx, -ny, 1.0))
        limits.append(-low)

    # Maximize the radius r of a disc inside every strip low < n·z < high
    result = linprog(
        c=[0.0, 0.0, -1.0],
        A_ub=np.array(rows),
        b_ub=np.array(limits),
        bounds=[(None, None), (None, None), (0.0, None)],
    )
    if result.status != 0 or result.x[2] <= epsilon:
        raise PhaseError(result.message if result.status != 0 else "window is empty")

    x, y, radius = (float(v) for v in result.x)
    logger.debug("Phase: z = (%.6f, %.6f), margin %.6f", x, y, radius)

    phases = []
    for seq in sequences:
        nx, ny = window_normal(seq)
        phases.append(phase_for(seq, nx * x + ny * y))
    return phases
