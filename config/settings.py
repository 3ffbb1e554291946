"""User-facing defaults for capture, recognition and persistence."""

from __future__ import annotations
from pathlib import Path
from typing import Final, Dict

# --- Paths (project-relative) ---
PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[1]
SETTINGS_PATH: Final[Path] = PROJECT_ROOT / "data" / "settings.json"

# --- Capture ---
MODIFIER_KEYS: Final[Dict[str, bool]] = {
    "alt": True,
    "shift": False,
    "ctrl": False,
    "meta": False,
}
MIN_STROKE_LENGTH: Final[float] = 50.0  # px
MAX_STROKE_TIME: Final[float] = 3000.0  # ms
CAPTURE_NOISE_DISTANCE: Final[float] = 2.0  # px between kept points
ENABLE_VISUAL_FEEDBACK: Final[bool] = True

# --- Recognition ---
RECOGNITION_THRESHOLD: Final[float] = 0.60
USE_PROTRACTOR: Final[bool] = False

# --- Gesture authoring ---
MIN_AUTHORED_POINTS: Final[int] = 5
AUTHORED_MIN_SCORE: Final[float] = 0.55

# --- Command search ---
SUGGESTION_LIMIT: Final[int] = 50
SUGGESTION_EMPTY_QUERY_LIMIT: Final[int] = 100

# --- Export ---
EXPORT_VERSION: Final[str] = "1.0.0"
