"""Surd — exact a + b·√5 values for anchor distances.

Every Minnick length lies in Q(√5). Bars are placed with the float value, but
the phase solver also needs the Galois conjugate a − b·√5, which a float
cannot recover. Anchors therefore carry both parts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

SQRT5 = math.sqrt(5)


@dataclass(frozen=True)
class Surd:
    rational: float = 0.0
    radical: float = 0.0

    @property
    def value(self) -> float:
        return self.rational + self.radical * SQRT5

    @property
    def conjugate(self) -> float:
        return self.rational - self.radical * SQRT5

    def __neg__(self) -> Surd:
        return Surd(-self.rational, -self.radical)

    def __float__(self) -> float:
        return self.value
