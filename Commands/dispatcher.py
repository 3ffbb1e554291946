"""Maps recognition results to host commands."""

from __future__ import annotations
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from config.settings import AUTHORED_MIN_SCORE, MIN_AUTHORED_POINTS
from Capture.stroke_capture import GestureStroke, StrokeCapture
from Recognition.dollarRecognizer import DollarRecognizer
from Recognition.geometry import PointsLike, as_point_array
from Recognition.Types import Point, RecognitionResult

from .mappings import GestureMapping, GestureSettings


@dataclass(frozen=True)
class Command:
    id: str
    name: str
    callback: Callable[[], None]


class CommandRegistry:
    """Commands the host exposes, keyed by id."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}

    def register(self, command_id: str, callback: Callable[[], None], name: Optional[str] = None) -> Command:
        command = Command(id=command_id, name=name or command_id, callback=callback)
        self._commands[command_id] = command
        return command

    def get(self, command_id: str) -> Optional[Command]:
        return self._commands.get(command_id)

    def execute(self, command_id: str) -> bool:
        command = self.get(command_id)
        if command is None:
            return False
        command.callback()
        return True

    def all(self) -> List[Command]:
        return list(self._commands.values())


class DispatchStatus(Enum):
    EXECUTED = auto()
    UNMAPPED = auto()
    NOT_RECOGNIZED = auto()
    COMMAND_NOT_FOUND = auto()


@dataclass(frozen=True)
class DispatchOutcome:
    status: DispatchStatus
    result: RecognitionResult
    message: str
    mapping: Optional[GestureMapping] = None


def _percent(score: float) -> str:
    return f"{score * 100:.1f}%"


class CommandDispatcher:
    """Recognizes finished strokes and runs the command mapped to the winning gesture."""

    def __init__(self, recognizer: DollarRecognizer, registry: CommandRegistry, settings: GestureSettings) -> None:
        self.recognizer = recognizer
        self.registry = registry
        self.settings = settings

    def find_mapping(self, result: RecognitionResult) -> Optional[GestureMapping]:
        """First enabled mapping for the recognized name whose own minimum score is met."""
        return next(
            (
                m for m in self.settings.gesture_mappings
                if m.enabled and m.gesture_name == result.name and result.score >= m.min_score
            ),
            None,
        )

    def handle_stroke(self, points: PointsLike) -> DispatchOutcome:
        result = self.recognizer.recognize(points, self.settings.matcher)
        return self.handle_result(result)

    def handle_result(self, result: RecognitionResult) -> DispatchOutcome:
        if not result.is_match(self.settings.recognition_threshold):
            return DispatchOutcome(
                DispatchStatus.NOT_RECOGNIZED,
                result,
                f"Gesture not recognized (best match: {_percent(result.score)})",
            )

        mapping = self.find_mapping(result)
        if mapping is None:
            return DispatchOutcome(
                DispatchStatus.UNMAPPED,
                result,
                f'Gesture recognized as "{result.name}" but no command mapped ({_percent(result.score)})',
            )

        if not self.registry.execute(mapping.command_id):
            return DispatchOutcome(
                DispatchStatus.COMMAND_NOT_FOUND,
                result,
                f'Command "{mapping.command_id}" not found',
                mapping,
            )

        return DispatchOutcome(
            DispatchStatus.EXECUTED,
            result,
            f"Command executed: {mapping.command_name} ({_percent(result.score)})",
            mapping,
        )

    def handle_gesture(self, stroke: GestureStroke) -> DispatchOutcome:
        """Completion callback for a StrokeCapture. Prints the outcome."""
        outcome = self.handle_stroke(stroke.points)
        print(outcome.message)
        return outcome

    # --- Capture wiring ---

    def create_capture(self, clock: Callable[[], float] = time.monotonic) -> StrokeCapture:
        return StrokeCapture(self.settings.capture_settings(), self.handle_gesture, clock=clock)

    def update_capture(self, capture: StrokeCapture) -> None:
        """Pushes the current settings into a running capture."""
        capture.settings = self.settings.capture_settings()


def reload_gestures(recognizer: DollarRecognizer, mappings: Iterable[GestureMapping]) -> int:
    """Rebuilds the template store from the raw strokes kept in `mappings`. Returns the template count."""
    recognizer.clear_all()
    for mapping in mappings:
        if mapping.original_points:
            recognizer.add_gesture(mapping.gesture_name, mapping.original_points)
    return recognizer.template_count()


# --- Gesture authoring ---

def gesture_name_for(command: Command) -> str:
    """Gestures are named after their command; unnamed commands get a generated name."""
    if command.id:
        return command.id
    return f"gesture-{int(time.time() * 1000)}-{uuid.uuid4().hex[:3]}"


def save_gesture(
    settings: GestureSettings,
    recognizer: DollarRecognizer,
    command: Optional[Command],
    points: PointsLike,
    existing: Optional[GestureMapping] = None,
) -> Optional[GestureMapping]:
    """
    Stores a drawn stroke as the template for `command` and maps it.

    With `existing`, its templates are replaced and the mapping keeps its id
    and position in `settings.gesture_mappings`. Returns None when nothing
    was saved.
    """
    if command is None:
        print("Please select a command")
        return None

    raw = as_point_array(points)
    if raw.shape[0] < MIN_AUTHORED_POINTS:
        print(f"Please draw a gesture of at least {MIN_AUTHORED_POINTS} points")
        return None

    name = gesture_name_for(command)
    if existing is not None:
        recognizer.remove_templates_by_name(existing.gesture_name)
    recognizer.add_gesture(name, raw)

    mapping = GestureMapping(
        gesture_name=name,
        command_id=command.id,
        command_name=command.name or command.id,
        enabled=True,
        min_score=AUTHORED_MIN_SCORE,
        original_points=[Point(float(x), float(y)) for x, y in raw],
    )
    if existing is not None:
        mapping.id = existing.id

    mappings = settings.gesture_mappings
    index = next((i for i, m in enumerate(mappings) if m.id == mapping.id), None)
    if index is None:
        mappings.append(mapping)
    else:
        mappings[index] = mapping

    print(f"Gesture {'updated' if existing is not None else 'created'} successfully")
    return mapping


def delete_mapping(settings: GestureSettings, recognizer: DollarRecognizer, mapping_id: str) -> bool:
    """Removes a mapping and every template stored under its gesture name."""
    mapping = settings.find_mapping(mapping_id)
    if mapping is None:
        return False

    recognizer.remove_templates_by_name(mapping.gesture_name)
    settings.gesture_mappings = [m for m in settings.gesture_mappings if m is not mapping]
    print("Gesture mapping deleted")
    return True
