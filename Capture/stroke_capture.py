"""Headless stroke capture: turns modifier/move events into finished strokes."""

from __future__ import annotations
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from config.recognizer import MIN_STROKE_POINTS
from config.settings import (
    CAPTURE_NOISE_DISTANCE,
    ENABLE_VISUAL_FEEDBACK,
    MAX_STROKE_TIME,
    MIN_STROKE_LENGTH,
    MODIFIER_KEYS,
)
from Recognition.geometry import distance, path_length
from Recognition.Types import Point


@dataclass(frozen=True)
class ModifierKeys:
    alt: bool = MODIFIER_KEYS["alt"]
    shift: bool = MODIFIER_KEYS["shift"]
    ctrl: bool = MODIFIER_KEYS["ctrl"]
    meta: bool = MODIFIER_KEYS["meta"]

    def satisfied_by(self, pressed: "ModifierKeys") -> bool:
        """Every required key is held. Extra keys do not matter."""
        return all(
            getattr(pressed, key) for key in ("alt", "shift", "ctrl", "meta") if getattr(self, key)
        )

    def to_dict(self) -> Dict[str, bool]:
        return {"alt": self.alt, "shift": self.shift, "ctrl": self.ctrl, "meta": self.meta}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModifierKeys":
        defaults = cls()
        return cls(**{key: bool(data.get(key, getattr(defaults, key))) for key in defaults.to_dict()})


@dataclass(frozen=True)
class CaptureSettings:
    modifier_keys: ModifierKeys = field(default_factory=ModifierKeys)
    min_stroke_length: float = MIN_STROKE_LENGTH
    max_stroke_time: float = MAX_STROKE_TIME  # ms
    enable_visual_feedback: bool = ENABLE_VISUAL_FEEDBACK


@dataclass(frozen=True)
class GestureStroke:
    points: List[Point]
    start_time: float  # ms
    end_time: float  # ms
    modifiers: ModifierKeys


class StrokeCapture:
    """
    Collects pointer positions while the configured modifier keys are held.

    A stroke starts on the first move with the modifiers down and is handed to
    `on_complete` when they are released, provided it moved, has at least two
    points and is at least `min_stroke_length` long. Strokes running longer
    than `max_stroke_time` are dropped.
    """

    def __init__(
        self,
        settings: CaptureSettings,
        on_complete: Callable[[GestureStroke], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings
        self.on_complete = on_complete
        self._clock = clock

        self.is_capturing: bool = False
        self.modifier_pressed: bool = False
        self.has_moved: bool = False
        self.current_stroke: List[Point] = []
        self.start_time: float = 0.0
        self.last_point: Optional[Point] = None

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def update_settings(self, **changes: Any) -> None:
        self.settings = replace(self.settings, **changes)

    # --- Events ---

    def press_modifiers(self, pressed: ModifierKeys) -> None:
        if self.settings.modifier_keys.satisfied_by(pressed) and not self.modifier_pressed:
            self.modifier_pressed = True
            self.has_moved = False

    def move(self, x: float, y: float) -> None:
        if not self.modifier_pressed:
            return

        point = Point(float(x), float(y))
        if not self.is_capturing:
            self._start(point)
            return

        if self.last_point is None or distance(point, self.last_point) > CAPTURE_NOISE_DISTANCE:
            self.current_stroke.append(point)
            self.last_point = point
            self.has_moved = True

        if self._now_ms() - self.start_time > self.settings.max_stroke_time:
            self.stop()

    def release_modifiers(self, pressed: ModifierKeys) -> Optional[GestureStroke]:
        """Returns the completed stroke, if any, after notifying `on_complete`."""
        if self.settings.modifier_keys.satisfied_by(pressed):
            return None

        self.modifier_pressed = False
        if self.is_capturing and self.has_moved:
            return self._complete()
        self.stop()
        return None

    # --- State transitions ---

    def _start(self, point: Point) -> None:
        self.is_capturing = True
        self.start_time = self._now_ms()
        self.current_stroke = [point]
        self.last_point = point

    def _complete(self) -> Optional[GestureStroke]:
        points = list(self.current_stroke)
        if len(points) < MIN_STROKE_POINTS or path_length(points) < self.settings.min_stroke_length:
            self.stop()
            return None

        stroke = GestureStroke(
            points=points,
            start_time=self.start_time,
            end_time=self._now_ms(),
            modifiers=self.settings.modifier_keys,
        )
        self.stop()
        self.on_complete(stroke)
        return stroke

    def stop(self) -> None:
        self.is_capturing = False
        self.current_stroke = []
        self.last_point = None
