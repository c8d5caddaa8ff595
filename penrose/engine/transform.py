"""Rigid (rotation + translation) transforms in homogeneous coordinates."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from penrose.engine.bounds import Point
from penrose.engine.constants import EPSILON
from penrose.exceptions import DegenerateTransformError


def _direction(pair: Sequence[Point]) -> float:
    (x0, y0), (x1, y1) = pair
    return math.atan2(y1 - y0, x1 - x0) % math.tau


@dataclass(frozen=True, eq=False)
class RigidTransform:
    matrix: NDArray[np.float64]

    @classmethod
    def identity(cls) -> RigidTransform:
        return cls(np.eye(3))

    @classmethod
    def from_rotation(cls, theta: float, offset: Point = (0.0, 0.0)) -> RigidTransform:
        """Rotate by ``theta`` about the origin, then translate by ``offset``."""
        c, s = math.cos(theta), math.sin(theta)
        return cls(np.array([
            [c, -s, offset[0]],
            [s, c, offset[1]],
            [0.0, 0.0, 1.0],
        ]))

    @classmethod
    def between(cls, template: Sequence[Point], observed: Sequence[Point]) -> RigidTransform:
        """Map ``template[0]`` onto ``observed[0]`` and align the pair directions.

        Never mirrors: the template pair's orientation must match the observed one.
        """
        (tx, ty), (tx1, ty1) = template
        if math.hypot(tx1 - tx, ty1 - ty) <= EPSILON:
            raise DegenerateTransformError(f"Template key pair collapses to a point at ({tx}, {ty})")

        theta = _direction(observed) - _direction(template)
        c, s = math.cos(theta), math.sin(theta)
        ox, oy = observed[0]
        return cls.from_rotation(theta, (ox - (c * tx - s * ty), oy - (s * tx + c * ty)))

    @property
    def rotation(self) -> float:
        return math.atan2(self.matrix[1, 0], self.matrix[0, 0])

    @property
    def translation(self) -> Point:
        return (float(self.matrix[0, 2]), float(self.matrix[1, 2]))

    def apply(self, point: Point) -> Point:
        m = self.matrix
        x, y = point
        return (
            float(m[0, 0] * x + m[0, 1] * y + m[0, 2]),
            float(m[1, 0] * x + m[1, 1] * y + m[1, 2]),
        )

    def apply_many(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform an Nx2 array of points."""
        return points @ self.matrix[:2, :2].T + self.matrix[:2, 2]

    def inverse(self) -> RigidTransform:
        det = float(np.linalg.det(self.matrix[:2, :2]))
        if abs(det) <= EPSILON:
            raise DegenerateTransformError(f"Transform is not invertible (det={det})")
        return RigidTransform(np.linalg.inv(self.matrix))

    def __repr__(self) -> str:
        tx, ty = self.translation
        return f"RigidTransform(theta={math.degrees(self.rotation):.3f}°, offset=({tx:.4f}, {ty:.4f}))"
