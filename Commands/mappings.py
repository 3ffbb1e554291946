"""Gesture-to-command mappings and the settings that hold them."""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from config.settings import (
    ENABLE_VISUAL_FEEDBACK,
    MAX_STROKE_TIME,
    MIN_STROKE_LENGTH,
    RECOGNITION_THRESHOLD,
    USE_PROTRACTOR,
)
from Capture.stroke_capture import CaptureSettings, ModifierKeys
from Recognition.geometry import as_point_array
from Recognition.Types import MatcherKind, Point


@dataclass
class GestureMapping:
    """
    Binds a gesture name to a host command. `original_points` keeps the raw
    stroke so templates can be rebuilt on startup.
    """
    gesture_name: str
    command_id: str
    command_name: str = ""
    enabled: bool = True
    min_score: float = RECOGNITION_THRESHOLD
    original_points: List[Point] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "gestureName": self.gesture_name,
            "commandId": self.command_id,
            "commandName": self.command_name or self.command_id,
            "enabled": self.enabled,
            "minScore": self.min_score,
            "originalPoints": [{"x": p.x, "y": p.y} for p in self.original_points],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GestureMapping":
        """Raises KeyError/TypeError/ValueError on malformed input."""
        raw_points = data.get("originalPoints") or []
        points = [Point(float(x), float(y)) for x, y in as_point_array(raw_points)]
        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            gesture_name=str(data["gestureName"]),
            command_id=str(data["commandId"]),
            command_name=str(data.get("commandName") or data["commandId"]),
            enabled=bool(data.get("enabled", True)),
            min_score=float(data.get("minScore", RECOGNITION_THRESHOLD)),
            original_points=points,
        )


@dataclass
class GestureSettings:
    modifier_keys: ModifierKeys = field(default_factory=ModifierKeys)
    min_stroke_length: float = MIN_STROKE_LENGTH
    max_stroke_time: float = MAX_STROKE_TIME
    enable_visual_feedback: bool = ENABLE_VISUAL_FEEDBACK
    gesture_mappings: List[GestureMapping] = field(default_factory=list)
    recognition_threshold: float = RECOGNITION_THRESHOLD
    use_protractor: bool = USE_PROTRACTOR

    @property
    def matcher(self) -> MatcherKind:
        return MatcherKind.from_flag(self.use_protractor)

    def capture_settings(self) -> CaptureSettings:
        return CaptureSettings(
            modifier_keys=self.modifier_keys,
            min_stroke_length=self.min_stroke_length,
            max_stroke_time=self.max_stroke_time,
            enable_visual_feedback=self.enable_visual_feedback,
        )

    def find_mapping(self, mapping_id: str) -> Optional[GestureMapping]:
        return next((m for m in self.gesture_mappings if m.id == mapping_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modifierKeys": self.modifier_keys.to_dict(),
            "minStrokeLength": self.min_stroke_length,
            "maxStrokeTime": self.max_stroke_time,
            "enableVisualFeedback": self.enable_visual_feedback,
            "gestureMappings": [m.to_dict() for m in self.gesture_mappings],
            "recognitionThreshold": self.recognition_threshold,
            "useProtractor": self.use_protractor,
        }
