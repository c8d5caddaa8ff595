"""Preset registry — every named plane configuration is a function registered via decorator.

Usage:
    @preset(name=Preset.SUN, description="Sun vertex: five kites")
    def sun(plane: PentagridPlane) -> None:
        for seq in plane.sequences:
            seq.set_anchor_distance(ANCHOR_B)

Adding a new configuration = adding one decorated function. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from penrose.exceptions import UnknownPresetError

if TYPE_CHECKING:
    from penrose.engine.plane import PentagridPlane

logger = logging.getLogger(__name__)


class Preset(str, enum.Enum):
    ACE = "ace"
    DEUCE = "deuce"
    SUN = "sun"
    STAR = "star"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"

    @classmethod
    def parse(cls, name: Preset | str) -> Preset:
        if isinstance(name, Preset):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownPresetError(name) from None


@dataclass
class PresetSpec:
    preset: Preset
    fn: Callable[["PentagridPlane"], None]
    description: str = ""


class PresetRegistry:
    """Registry of plane configurations keyed by preset."""

    def __init__(self) -> None:
        self._presets: dict[Preset, PresetSpec] = {}

    def register(self, spec: PresetSpec) -> None:
        if spec.preset in self._presets:
            raise ValueError(f"Duplicate preset: {spec.preset.value}")
        self._presets[spec.preset] = spec
        logger.debug("Registered preset %s", spec.preset.value)

    def get(self, name: Preset | str) -> PresetSpec:
        key = Preset.parse(name)
        if key not in self._presets:
            raise UnknownPresetError(key.value)
        return self._presets[key]

    def all(self) -> list[PresetSpec]:
        order = list(Preset)
        return sorted(self._presets.values(), key=lambda s: order.index(s.preset))

    def names(self) -> list[str]:
        return [s.preset.value for s in self.all()]

    @property
    def count(self) -> int:
        return len(self._presets)


# Module-level singleton
_registry = PresetRegistry()


def get_registry() -> PresetRegistry:
    return _registry


def preset(*, name: Preset, description: str = ""):
    """Decorator to register a plane configuration."""

    def decorator(fn: Callable[["PentagridPlane"], None]):
        _registry.register(PresetSpec(preset=name, fn=fn, description=description))
        return fn

    return decorator
