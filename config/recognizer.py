"""Recognition engine constants (canonical space, search window, sentinels)."""

from __future__ import annotations
from math import pi, sqrt
from typing import Final, Tuple

# --- Canonical space ---
NUM_POINTS: Final[int] = 64
SQUARE_SIZE: Final[float] = 250.0
ORIGIN: Final[Tuple[float, float]] = (0.0, 0.0)
DIAGONAL: Final[float] = sqrt(SQUARE_SIZE * SQUARE_SIZE + SQUARE_SIZE * SQUARE_SIZE)
HALF_DIAGONAL: Final[float] = 0.5 * DIAGONAL

# An axis whose extent is below this fraction of the other axis is treated as flat
DEGENERATE_EXTENT_RATIO: Final[float] = 1e-9

# --- Golden-section search (radians) ---
ANGLE_RANGE: Final[float] = 45.0 * pi / 180.0
ANGLE_PRECISION: Final[float] = 2.0 * pi / 180.0
PHI: Final[float] = 0.5 * (-1.0 + sqrt(5.0))

# --- Recognition ---
MIN_STROKE_POINTS: Final[int] = 2
NO_MATCH: Final[str] = "No match"
