"""Exception types for contract violations inside the tiling engine.

Missing crossings, failed pattern matches and unforced bars are ordinary
results (``None`` or empty collections). The classes below signal defects in
the caller or in template data and are not meant to be recovered from.
"""

from __future__ import annotations


class PenroseError(Exception):
    """Base class for engine errors."""


class PendingForcingError(PenroseError):
    """A bar was forced while an earlier forcing had not been consumed by a refresh."""

    def __init__(self, pending: int, requested: int) -> None:
        super().__init__(
            f"Sequence {pending} was forced and not yet refreshed; "
            f"cannot force sequence {requested}"
        )
        self.pending = pending
        self.requested = requested


class DegenerateTransformError(PenroseError):
    """A rigid transform could not be inverted."""


class ConvergenceError(PenroseError):
    """The fixed-point loop exceeded its iteration cap."""

    def __init__(self, iterations: int) -> None:
        super().__init__(f"Tiling did not converge within {iterations} iterations")
        self.iterations = iterations


class UnknownPresetError(PenroseError, KeyError):
    """No preset is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown preset: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class PhaseError(PenroseError):
    """The forced bars admit no Penrose tiling."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"No tiling fits the forced bars: {reason}")
        self.reason = reason
