"""Double-kite constellation.

Five crossings of the deuce configuration. A match also determines bar -1
of the sequence at 144° next to it; if only one forced bar crosses there,
the companion bar is forced.
"""

from __future__ import annotations

import functools

from penrose.engine.bar_sequence import BarBound
from penrose.engine.constellation import (
    Constellation,
    OptionalPoint,
    Template,
    force_partial,
    map_optional,
)
from penrose.engine.plane import PentagridPlane
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset


@functools.cache
def double_kite_template() -> tuple[Template, OptionalPoint]:
    """Template plus the crossing whose bar the double kite forces."""
    plane = build_plane(Preset.DEUCE)
    pattern = (
        plane.intersection(0, 0, 1, 0),
        plane.intersection(0, 0, 2, 0),
        plane.intersection(0, 0, 4, 0),
        plane.intersection(2, 0, 4, 0),
        plane.intersection(3, 0, 4, 0),
    )

    forcing_plane = build_plane(Preset.DEUCE)
    forcing_plane.sequences[2].force(-1, BarBound.SHORTER)
    forcing = OptionalPoint(forcing_plane.intersection(2, -1, 1, 0), offset=1)

    return Template(pattern, (pattern[1], pattern[3])), forcing


class DoubleKite(Constellation):
    name = "double_kite"

    @classmethod
    def template(cls) -> Template:
        return double_kite_template()[0]

    def force_bars(self, plane: PentagridPlane) -> bool:
        _, forcing = double_kite_template()
        return force_partial(map_optional(forcing, self.transform, plane), plane)
