"""Serializable tiling output — the handoff consumed by renderers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from penrose.utils.geometry import bbox, centroid, signed_area


class ShapeModel(BaseModel):
    kind: Literal["dart", "kite"]
    vertices: list[tuple[float, float]]
    area: float = 0.0
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    centroid: tuple[float, float] = (0.0, 0.0)

    @classmethod
    def from_path(cls, kind: str, path: list[tuple[float, float]]) -> ShapeModel:
        return cls(
            kind=kind,
            vertices=[(float(x), float(y)) for x, y in path],
            area=abs(signed_area(path)),
            bbox=bbox(path),
            centroid=centroid(path),
        )


class MatchResultModel(BaseModel):
    preset: str | None = None
    bounds: tuple[float, float, float, float] | None = None
    darts: list[ShapeModel] = Field(default_factory=list)
    kites: list[ShapeModel] = Field(default_factory=list)
    iterations: int = 0
    forcings: int = 0
    settled_bars: int = 0

    @property
    def tile_count(self) -> int:
        return len(self.darts) + len(self.kites)
