"""Tests for rigid transforms."""

from __future__ import annotations

import math

import numpy as np
import pytest

from penrose.engine.transform import RigidTransform
from penrose.exceptions import DegenerateTransformError, PenroseError


def test_identity():
    t = RigidTransform.identity()
    assert t.apply((1.5, -2.0)) == (1.5, -2.0)
    assert t.rotation == 0.0
    assert t.translation == (0.0, 0.0)


def test_from_rotation():
    t = RigidTransform.from_rotation(math.pi / 2, (1.0, 0.0))
    x, y = t.apply((1.0, 0.0))
    assert x == pytest.approx(1.0)
    assert y == pytest.approx(1.0)
    assert t.rotation == pytest.approx(math.pi / 2)
    assert t.translation == (1.0, 0.0)


def test_between_maps_key_pair():
    template = ((0.0, 0.0), (1.0, 0.0))
    observed = ((2.0, 3.0), (2.0, 4.0))
    t = RigidTransform.between(template, observed)
    for src, dst in zip(template, observed):
        assert t.apply(src) == pytest.approx(dst)
    assert t.rotation == pytest.approx(math.pi / 2)


def test_between_preserves_distances(rng):
    template = ((0.3, -1.2), (1.9, 0.4))
    theta = rng.uniform(0, math.tau)
    offset = tuple(rng.uniform(-10, 10, size=2))
    expected = RigidTransform.from_rotation(theta, offset)
    observed = tuple(expected.apply(p) for p in template)

    t = RigidTransform.between(template, observed)
    sample = (rng.uniform(-5, 5), rng.uniform(-5, 5))
    assert t.apply(sample) == pytest.approx(expected.apply(sample))


def test_between_never_mirrors():
    template = ((0.0, 0.0), (1.0, 0.0))
    t = RigidTransform.between(template, ((0.0, 0.0), (0.0, 1.0)))
    # Points left of the template pair stay left of the observed pair
    x, y = t.apply((0.5, 1.0))
    assert x < 0


def test_between_degenerate_template():
    with pytest.raises(DegenerateTransformError):
        RigidTransform.between(((1.0, 1.0), (1.0, 1.0)), ((0.0, 0.0), (1.0, 0.0)))


def test_inverse_round_trip(rng):
    t = RigidTransform.from_rotation(1.1, (4.0, -7.5))
    inv = t.inverse()
    for point in rng.uniform(-20, 20, size=(10, 2)):
        assert inv.apply(t.apply(tuple(point))) == pytest.approx(tuple(point))


def test_inverse_singular():
    with pytest.raises(PenroseError):
        RigidTransform(np.zeros((3, 3))).inverse()


def test_apply_many_matches_apply(rng):
    t = RigidTransform.from_rotation(-0.7, (1.0, 2.0))
    points = rng.uniform(-3, 3, size=(6, 2))
    mapped = t.apply_many(points)
    for point, row in zip(points, mapped):
        assert tuple(row) == pytest.approx(t.apply(tuple(point)))


def test_repr():
    assert "90.000°" in repr(RigidTransform.from_rotation(math.pi / 2))
