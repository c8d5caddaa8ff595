"""Tests for template matching: pair scans, transforms and the three constellations."""

from __future__ import annotations

import math

import pytest

from penrose.engine.bounds import Bounds
from penrose.engine.constants import BOX_OVERLAP
from penrose.engine.constellation import (
    Constellation,
    candidate_pairs,
    find_constellations,
    match_required,
    pair_scan,
)
from penrose.engine.dart import Dart, dart_template
from penrose.engine.double_kite import DoubleKite, double_kite_template
from penrose.engine.intersection import IntersectionPoint, PartialCrossing, PointSet
from penrose.engine.kite import Kite
from penrose.engine.presets import build_plane

AROUND_ORIGIN = Bounds(-3.0, -3.0, 3.0, 3.0)


def _refreshed(name):
    plane = build_plane(name)
    plane.refresh(AROUND_ORIGIN)
    return plane, plane.points_within(AROUND_ORIGIN)


def test_pair_scan():
    a = IntersectionPoint.build(0, 0, 1, 0, (0.0, 0.0))
    b = IntersectionPoint.build(0, 0, 2, 0, (1.0, 0.0))
    c = IntersectionPoint.build(0, 0, 3, 0, (0.0, 1.0))
    d = IntersectionPoint.build(0, 0, 4, 0, (3.0, 3.0))

    pairs = pair_scan([d, c, b, a], 1.0)
    assert pairs == {(a, b), (a, c)}
    assert pair_scan([a], 1.0) == set()
    assert pair_scan([a, d], 1.0) == set()


@pytest.mark.parametrize("kind", [Dart, Kite, DoubleKite])
def test_key_pairs_fit_in_cell_overlap(kind):
    template = kind.template()
    # The dart key pair spans the full overlap
    assert 0 < template.delta < BOX_OVERLAP + 1e-6
    assert template.key_pair[0] in template.pattern
    assert template.key_pair[1] in template.pattern


def test_template_shapes():
    assert len(Dart.template().pattern) == 3
    assert len(Kite.template().pattern) == 3
    assert len(DoubleKite.template().pattern) == 5

    _, left, right = dart_template()
    assert left.point.identity == ((0, 0), (4, 0))
    assert right.point.identity == ((0, 0), (1, 0))

    _, forcing = double_kite_template()
    assert forcing.point.identity == ((1, 0), (2, -1))
    assert forcing.offset == 1


def test_template_matches_own_plane():
    plane, points = _refreshed("ace")
    template = Dart.template()
    found = match_required(points, plane, template.key_pair, template)
    assert found is not None
    transform, crossings = found
    assert transform.rotation == pytest.approx(0.0, abs=1e-9)
    assert transform.translation == pytest.approx((0.0, 0.0), abs=1e-9)
    assert crossings == template.pattern


def test_swapped_key_pair_does_not_match():
    plane, points = _refreshed("ace")
    template = Dart.template()
    first, second = template.key_pair
    assert match_required(points, plane, (second, first), template) is None


def test_sun_has_five_kites():
    plane, points = _refreshed("sun")
    kites = find_constellations(Kite, points, plane, points.boundaries())
    assert len(kites) == 5

    rotations = sorted(round(math.degrees(k.transform.rotation)) % 360 for k in kites)
    assert rotations == [0, 72, 144, 216, 288]
    for kite in kites:
        assert kite.path()[0] == pytest.approx((0.0, 0.0), abs=1e-9)


def test_ace_dart_at_origin():
    plane, points = _refreshed("ace")
    darts = find_constellations(Dart, points, plane, points.boundaries())
    at_origin = [d for d in darts if math.dist(d.path()[0], (0.0, 0.0)) < 1e-9]
    assert len(at_origin) == 1
    dart = at_origin[0]
    assert dart.path()[2] == pytest.approx((1.0, 0.0), abs=1e-9)
    assert isinstance(dart.left, IntersectionPoint)
    assert isinstance(dart.right, IntersectionPoint)
    # Both corners are full crossings, nothing to force
    assert not dart.force_bars(plane)


def test_matches_are_unique():
    plane, points = _refreshed("sun")
    kites = find_constellations(Kite, points, plane, points.boundaries())
    identities = [k.identity for k in kites]
    assert len(identities) == len(set(identities))


def test_candidate_pairs_banded_matches_full_scan(king_tiling, small_bounds):
    plane, _ = king_tiling
    points = plane.points_within(small_bounds)
    boundaries = points.boundaries()
    assert len(boundaries) > 1

    for kind in (Dart, Kite, DoubleKite):
        delta = kind.template().delta
        banded = {
            frozenset((a.identity, b.identity))
            for a, b in candidate_pairs(points, delta, boundaries, True)
        }
        full = {
            frozenset((a.identity, b.identity))
            for a, b in candidate_pairs(points, delta, boundaries, False)
        }
        assert banded == full


def test_no_match_in_empty_cloud(plane):
    points = PointSet()
    assert find_constellations(Dart, points, plane, points.boundaries()) == []


def test_partial_corner_forces_companion():
    plane, points = _refreshed("ace")
    dart = find_constellations(Dart, points, plane, points.boundaries())[0]

    companion = plane.sequences[1]
    assert not companion.is_forced(1)
    dart.left = PartialCrossing(*companion.bar_point(1), companion=1)

    assert dart.force_bars(plane)
    assert plane.pending_forcing == 1
    assert companion.is_forced(1)


def test_base_constellation_is_abstract():
    with pytest.raises(TypeError):
        Constellation(None, ())

    class Partial(Constellation):
        pass

    with pytest.raises(TypeError):
        Partial(None, ())
