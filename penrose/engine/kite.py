"""Kite constellation — three crossings of the sun configuration. Never forces."""

from __future__ import annotations

import functools

from penrose.engine.constellation import Constellation, Template
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset
from penrose.engine.shapes import KITE_OUTLINE, PlacedTile


@functools.cache
def kite_template() -> Template:
    plane = build_plane(Preset.SUN)
    pattern = (
        plane.intersection(0, 0, 1, 0),
        plane.intersection(0, 0, 4, 0),
        plane.intersection(1, 0, 4, 0),
    )
    return Template(pattern, (pattern[0], pattern[1]))


class Kite(Constellation, PlacedTile):
    name = "kite"
    outline = KITE_OUTLINE

    @classmethod
    def template(cls) -> Template:
        return kite_template()
