"""Shared numeric constants for the pentagrid engine.

Lengths follow Minnick's construction of Ammann bars on the kite and dart:
every anchor distance used by the presets is a sum of these values. The
bar spacing itself alternates between SHORT and LONG = φ·SHORT.
"""

import math

from penrose.engine.surd import Surd

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2

# Single tolerance for every float comparison in the engine: point distances,
# rotation differences, bar positions and bound truncation.
EPSILON = 1e-10

SEQUENCE_COUNT = 5
SEQUENCE_ROTATION = math.tau / SEQUENCE_COUNT

MINNICK_A = math.sin(math.radians(54)) * (1 + math.cos(math.radians(72)))
MINNICK_B = 1 / 4
MINNICK_C = math.cos(math.radians(36)) - 3 / 4
MINNICK_D = MINNICK_A - 1
MINNICK_E = GOLDEN_RATIO - MINNICK_B
MINNICK_V = (1 / 4) * (3 - (math.tan(36) / math.tan(18)))
MINNICK_W = 3 / 4
MINNICK_X = 1 + math.cos(math.radians(72))
MINNICK_Y = math.cos(math.radians(72))
MINNICK_Z = 1 / 4

# Distance from a kite's tip to the far edge bar; most presets anchor here.
MINNICK_XYZ = MINNICK_X + MINNICK_Y + MINNICK_Z

SCALE = MINNICK_A + MINNICK_W
SHORT = SCALE
LONG = GOLDEN_RATIO * SCALE

# Square cell grid used to classify intersection points. Cells are centered
# on the origin; points within BOX_OVERLAP of a cell's far edges are also
# filed under the neighboring cells.
BOX_DIM = 10.0
BOX_ORIGIN = -BOX_DIM / 2
BOX_OVERLAP = 2.126627021

# Exact a + b·√5 forms of the anchor lengths used by the presets.
ANCHOR_A = Surd(1 / 2, 1 / 4)
ANCHOR_B = Surd(1 / 4)
ANCHOR_E = Surd(1 / 4, 1 / 2)
ANCHOR_W = Surd(3 / 4)
ANCHOR_XYZ = Surd(3 / 4, 1 / 2)
ANCHOR_Z = Surd(1 / 4)
