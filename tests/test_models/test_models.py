"""Tests for the serializable tiling models and polygon helpers."""

from __future__ import annotations

import numpy as np
import pytest

from penrose.models.tiling import MatchResultModel, ShapeModel
from penrose.utils.geometry import as_array, bbox, centroid, point_in_polygon, signed_area

SQUARE = [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
NOTCHED = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (2.0, 1.0), (0.0, 4.0)]


def test_as_array_drops_closing_vertex():
    assert as_array(SQUARE).shape == (4, 2)
    assert as_array(SQUARE + SQUARE[:1]).shape == (4, 2)
    assert as_array([]).shape == (0, 2)


def test_signed_area_orientation():
    assert signed_area(SQUARE) == pytest.approx(4.0)
    assert signed_area(SQUARE[::-1]) == pytest.approx(-4.0)
    assert signed_area(SQUARE + SQUARE[:1]) == pytest.approx(4.0)
    assert signed_area(SQUARE[:2]) == 0.0


def test_bbox_and_centroid():
    assert bbox(SQUARE) == (0.0, 0.0, 2.0, 2.0)
    assert centroid(np.array(SQUARE)) == (1.0, 1.0)
    assert bbox([]) == (0.0, 0.0, 0.0, 0.0)
    assert centroid([]) == (0.0, 0.0)


def test_point_in_polygon():
    assert point_in_polygon((1.0, 1.0), SQUARE)
    assert point_in_polygon((1.0, 1.0), SQUARE[::-1])
    assert not point_in_polygon((3.0, 1.0), SQUARE)
    assert not point_in_polygon((-1.0, 1.0), SQUARE)


def test_point_in_concave_polygon():
    assert point_in_polygon((1.0, 0.5), NOTCHED)
    assert point_in_polygon((3.5, 3.0), NOTCHED)
    # Inside the notch
    assert not point_in_polygon((2.0, 3.0), NOTCHED)


def test_shape_model_from_path():
    shape = ShapeModel.from_path("kite", SQUARE)
    assert shape.kind == "kite"
    assert shape.vertices == SQUARE
    assert shape.area == pytest.approx(4.0)
    assert shape.bbox == (0.0, 0.0, 2.0, 2.0)
    assert shape.centroid == (1.0, 1.0)


def test_shape_model_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ShapeModel(kind="rhombus", vertices=SQUARE)


def test_match_result_model_json():
    model = MatchResultModel(
        preset="sun",
        bounds=(-1.0, -1.0, 1.0, 1.0),
        darts=[ShapeModel.from_path("dart", SQUARE)],
        kites=[ShapeModel.from_path("kite", SQUARE), ShapeModel.from_path("kite", SQUARE)],
        iterations=3,
        forcings=2,
    )
    assert model.tile_count == 3

    restored = MatchResultModel.model_validate_json(model.model_dump_json())
    assert restored == model


def test_match_result_model_defaults():
    model = MatchResultModel()
    assert model.tile_count == 0
    assert model.bounds is None
