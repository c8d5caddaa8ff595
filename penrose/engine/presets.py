"""The seven named plane configurations.

Each places bar 0 of every sequence at an exact Minnick distance from the
origin and optionally pre-forces one bar, seeding a different vertex
neighborhood at the center of the tiling.
"""

from __future__ import annotations

from penrose.engine.bar_sequence import BarBound
from penrose.engine.config import TilingConfig
from penrose.engine.constants import (
    ANCHOR_A,
    ANCHOR_B,
    ANCHOR_E,
    ANCHOR_W,
    ANCHOR_XYZ,
    ANCHOR_Z,
)
from penrose.engine.plane import PentagridPlane
from penrose.engine.registry import Preset, get_registry, preset


@preset(name=Preset.ACE, description="Ace vertex: two kites and a dart")
def ace(plane: PentagridPlane) -> None:
    anchors = [ANCHOR_A, ANCHOR_A, -ANCHOR_XYZ, -ANCHOR_XYZ, ANCHOR_A]
    for seq, distance in zip(plane.sequences, anchors):
        seq.set_anchor_distance(distance)


@preset(name=Preset.DEUCE, description="Deuce vertex")
def deuce(plane: PentagridPlane) -> None:
    anchors = [ANCHOR_A, -ANCHOR_XYZ, -ANCHOR_XYZ, -ANCHOR_XYZ, ANCHOR_A]
    for seq, distance in zip(plane.sequences, anchors):
        seq.set_anchor_distance(distance)


@preset(name=Preset.SUN, description="Sun vertex: five kites")
def sun(plane: PentagridPlane) -> None:
    for seq in plane.sequences:
        seq.set_anchor_distance(ANCHOR_B)


@preset(name=Preset.STAR, description="Star vertex: five darts")
def star(plane: PentagridPlane) -> None:
    for seq in plane.sequences:
        seq.set_anchor_distance(-ANCHOR_XYZ)
        seq.force(1, BarBound.LONGER)


@preset(name=Preset.JACK, description="Jack vertex")
def jack(plane: PentagridPlane) -> None:
    seqs = plane.sequences
    seqs[0].set_anchor_distance(ANCHOR_E)
    seqs[0].force(-1, BarBound.LONGER)
    seqs[1].set_anchor_distance(ANCHOR_Z)
    seqs[1].force(-1, BarBound.LONGER)
    seqs[2].set_anchor_distance(ANCHOR_B)
    seqs[3].set_anchor_distance(ANCHOR_B)
    seqs[4].set_anchor_distance(ANCHOR_Z)
    seqs[4].force(-1, BarBound.LONGER)


@preset(name=Preset.QUEEN, description="Queen vertex")
def queen(plane: PentagridPlane) -> None:
    seqs = plane.sequences
    seqs[0].set_anchor_distance(ANCHOR_A)
    seqs[1].set_anchor_distance(-ANCHOR_W)
    seqs[1].force(1, BarBound.SHORTER)
    seqs[2].set_anchor_distance(-ANCHOR_XYZ)
    seqs[2].force(1, BarBound.LONGER)
    seqs[3].set_anchor_distance(-ANCHOR_XYZ)
    seqs[3].force(1, BarBound.LONGER)
    seqs[4].set_anchor_distance(-ANCHOR_W)
    seqs[4].force(1, BarBound.SHORTER)


@preset(name=Preset.KING, description="King vertex")
def king(plane: PentagridPlane) -> None:
    seqs = plane.sequences
    seqs[0].set_anchor_distance(-ANCHOR_W)
    seqs[0].force(1, BarBound.SHORTER)
    for seq in seqs[1:]:
        seq.set_anchor_distance(-ANCHOR_XYZ)
        seq.force(1, BarBound.LONGER)


def build_plane(name: Preset | str, config: TilingConfig | None = None) -> PentagridPlane:
    """Fresh plane configured by the named preset."""
    spec = get_registry().get(name)
    plane = PentagridPlane(config=config)
    spec.fn(plane)
    return plane
