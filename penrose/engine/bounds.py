"""Axis-aligned bounding region supplied by callers."""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    """Rectangle [min_x, max_x) × [min_y, max_y)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_extent(cls, half_width: float, half_height: float) -> Bounds:
        """Box centered on the origin."""
        return cls(-half_width, -half_height, half_width, half_height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def corners(self) -> list[Point]:
        return [
            (self.min_x, self.min_y),
            (self.min_x, self.max_y),
            (self.max_x, self.min_y),
            (self.max_x, self.max_y),
        ]

    def shrink(self, margin: float) -> Bounds:
        """Inset every edge by ``margin``; collapses to the center if too small."""
        cx = (self.min_x + self.max_x) / 2
        cy = (self.min_y + self.max_y) / 2
        return Bounds(
            min(self.min_x + margin, cx),
            min(self.min_y + margin, cy),
            max(self.max_x - margin, cx),
            max(self.max_y - margin, cy),
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)
