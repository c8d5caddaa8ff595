"""Tests for the preset registry and preset planes."""

from __future__ import annotations

import pytest

from penrose.engine.bar_sequence import BarBound
from penrose.engine.constants import MINNICK_B, MINNICK_XYZ
from penrose.engine.presets import build_plane
from penrose.engine.registry import Preset, PresetRegistry, PresetSpec, get_registry
from penrose.exceptions import UnknownPresetError


def _noop(plane) -> None:
    pass


def test_register_and_get():
    reg = PresetRegistry()
    spec = PresetSpec(preset=Preset.ACE, fn=_noop)
    reg.register(spec)
    assert reg.get(Preset.ACE) is spec
    assert reg.get("ace") is spec
    assert reg.count == 1


def test_duplicate_registration():
    reg = PresetRegistry()
    reg.register(PresetSpec(preset=Preset.SUN, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(PresetSpec(preset=Preset.SUN, fn=_noop))


def test_all_in_enum_order():
    reg = PresetRegistry()
    reg.register(PresetSpec(preset=Preset.KING, fn=_noop))
    reg.register(PresetSpec(preset=Preset.ACE, fn=_noop))
    assert reg.names() == ["ace", "king"]


def test_global_registry_has_all_presets():
    reg = get_registry()
    assert reg.count == 7
    assert reg.names() == [p.value for p in Preset]
    assert all(spec.description for spec in reg.all())


def test_parse():
    assert Preset.parse("KING") is Preset.KING
    assert Preset.parse("  Queen ") is Preset.QUEEN
    assert Preset.parse(Preset.STAR) is Preset.STAR
    with pytest.raises(UnknownPresetError):
        Preset.parse("joker")


def test_unknown_preset_is_key_error():
    with pytest.raises(KeyError) as exc:
        build_plane("joker")
    assert exc.value.name == "joker"
    assert "joker" in str(exc.value)


def test_sun_anchors():
    plane = build_plane(Preset.SUN)
    for seq in plane.sequences:
        assert seq.project((0.0, 0.0)) == pytest.approx(-MINNICK_B)
        assert seq.upper == (0, 1)
        assert seq.lower == (0, 0)


def test_star_preforces_bar_one():
    plane = build_plane("star")
    for seq in plane.sequences:
        assert seq.project((0.0, 0.0)) == pytest.approx(MINNICK_XYZ)
        assert seq.is_forced(1)
        assert seq.guess_bars([0]) == [BarBound.LONGER]


def test_king_preforces():
    plane = build_plane(Preset.KING)
    assert plane.sequences[0].guess_bars([0]) == [BarBound.SHORTER]
    for seq in plane.sequences[1:]:
        assert seq.guess_bars([0]) == [BarBound.LONGER]
    assert all(seq.is_forced(1) for seq in plane.sequences)


@pytest.mark.parametrize("name", list(Preset))
def test_build_plane_gives_fresh_planes(name):
    a = build_plane(name)
    b = build_plane(name)
    assert a is not b
    assert a.sequences[0] is not b.sequences[0]
    assert a.cache_size == 0
    assert a.pending_forcing is None
