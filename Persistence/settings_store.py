"""Settings and backup bundle persistence (JSON)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from config.settings import EXPORT_VERSION, SETTINGS_PATH
from Capture.stroke_capture import ModifierKeys
from Commands.mappings import GestureMapping, GestureSettings
from Recognition.dollarRecognizer import DollarRecognizer

PathLike = Union[str, Path]


def _strict_bool(value: Any) -> bool:
    """JSON booleans only. Strings such as "false" are rejected."""
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


# (json key, attribute, converter) for scalar settings
_SCALAR_FIELDS = (
    ("minStrokeLength", "min_stroke_length", float),
    ("maxStrokeTime", "max_stroke_time", float),
    ("enableVisualFeedback", "enable_visual_feedback", _strict_bool),
    ("recognitionThreshold", "recognition_threshold", float),
    ("useProtractor", "use_protractor", _strict_bool),
)


# --- JSON I/O ---

def _read_json(path: PathLike) -> Any:
    """Returns the parsed file, or None when it is missing, empty or not valid JSON."""
    target = Path(path)
    if not target.exists():
        return None
    try:
        content = target.read_text(encoding="utf-8").strip()
    except OSError as e:
        print(f"Error: Could not read '{target}': {e}")
        return None
    if not content:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        print(f"Warning: '{target}' is not valid JSON, falling back to defaults.")
        return None


def _write_json(path: PathLike, data: Any) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


# --- Settings ---

def parse_mappings(entries: Any) -> List[GestureMapping]:
    """Best-effort: malformed mappings are skipped."""
    if not isinstance(entries, list):
        return []

    mappings: List[GestureMapping] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            print(f"Warning: Skipping mapping {i}: not an object")
            continue
        try:
            mappings.append(GestureMapping.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            print(f"Warning: Skipping mapping {i}: {e!r}")
            continue
    return mappings


def settings_from_dict(data: Mapping[str, Any]) -> GestureSettings:
    """Defaults overlaid with whatever `data` provides."""
    settings = GestureSettings()

    keys = data.get("modifierKeys")
    if isinstance(keys, Mapping):
        settings.modifier_keys = ModifierKeys.from_dict(keys)

    for key, attr, convert in _SCALAR_FIELDS:
        if key not in data:
            continue
        try:
            setattr(settings, attr, convert(data[key]))
        except (TypeError, ValueError):
            print(f"Warning: Ignoring invalid value for '{key}': {data[key]!r}")

    settings.gesture_mappings = parse_mappings(data.get("gestureMappings", []))
    return settings


def load_settings(path: PathLike = SETTINGS_PATH) -> GestureSettings:
    data = _read_json(path)
    if not isinstance(data, Mapping):
        return GestureSettings()
    return settings_from_dict(data)


def save_settings(settings: GestureSettings, path: PathLike = SETTINGS_PATH) -> None:
    _write_json(path, settings.to_dict())


# --- Backup bundles ---

def export_bundle(settings: GestureSettings, recognizer: DollarRecognizer) -> Dict[str, Any]:
    return {
        "version": EXPORT_VERSION,
        "gestureMappings": [m.to_dict() for m in settings.gesture_mappings],
        "gestureTemplates": recognizer.export_templates(),
    }


def write_bundle(path: PathLike, bundle: Mapping[str, Any]) -> None:
    _write_json(path, dict(bundle))
    print(f"Exported {len(bundle.get('gestureTemplates', []))} templates to '{path}'")


def read_bundle(path: PathLike) -> Dict[str, Any]:
    data = _read_json(path)
    if not isinstance(data, dict):
        print(f"Error: No valid bundle found in '{path}'")
        return {}
    return data


def import_bundle(data: Mapping[str, Any], settings: GestureSettings, recognizer: DollarRecognizer) -> None:
    """Replaces mappings and/or templates with those present in `data`."""
    if data.get("gestureMappings"):
        settings.gesture_mappings = parse_mappings(data["gestureMappings"])

    templates = data.get("gestureTemplates")
    if isinstance(templates, list) and templates:
        recognizer.import_templates(templates)

    print(
        f"Imported {len(settings.gesture_mappings)} mappings | "
        f"{recognizer.template_count()} templates"
    )
