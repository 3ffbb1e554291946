"""Ordered store of canonical gesture templates."""

from __future__ import annotations
import threading
from collections.abc import Iterable, Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .geometry import PointsLike, as_point_array
from .normalization import create_template
from .Types import Template

# Keys that may carry the pre-normalization stroke of an imported entry
ORIGINAL_POINTS_KEYS: Tuple[str, ...] = ("original_points", "originalPoints")


class TemplateStore:
    """
    Insertion-ordered collection of templates. Names are not unique: several
    examples of one gesture compete independently during matching.

    Mutations are serialized by an internal lock; readers work on snapshots.
    """

    def __init__(self) -> None:
        self._templates: List[Template] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self.snapshot())

    def snapshot(self) -> Tuple[Template, ...]:
        with self._lock:
            return tuple(self._templates)

    def add(self, name: str, raw_points: PointsLike) -> int:
        """Normalizes `raw_points` into a template and returns how many templates now share `name`."""
        template = create_template(name, raw_points)
        with self._lock:
            self._templates.append(template)
            return sum(1 for t in self._templates if t.name == name)

    def remove_by_name(self, name: str) -> None:
        with self._lock:
            self._templates = [t for t in self._templates if t.name != name]

    def clear_all(self) -> None:
        with self._lock:
            self._templates = []

    def names_distinct(self) -> List[str]:
        """Unique names in first-seen order."""
        return list(dict.fromkeys(t.name for t in self.snapshot()))

    def templates_by_name(self, name: str) -> List[Template]:
        return [t for t in self.snapshot() if t.name == name]

    def export_all(self) -> List[Dict[str, Any]]:
        """Plain-data copy of every template; independent of the live store."""
        return [t.to_dict() for t in self.snapshot()]

    def import_all(self, entries: Iterable[Any]) -> None:
        """
        Replaces the store content with `entries`.

        Entries are Templates or mappings shaped like {"name", "points": [{"x", "y"}, ...]}.
        The original stroke is preferred when present; `vector` is always recomputed.
        Entries without a name or usable points are skipped.
        """
        with self._lock:
            self._templates = []
            for entry in entries:
                parsed = _parse_entry(entry)
                if parsed is None:
                    continue
                self.add(*parsed)


def _parse_entry(entry: Any) -> Optional[Tuple[str, Any]]:
    if isinstance(entry, Template):
        if not entry.name:
            return None
        return entry.name, entry.source if entry.source is not None else entry.points

    if not isinstance(entry, Mapping):
        return None

    try:
        name = entry["name"]
        points = next(
            (entry[key] for key in ORIGINAL_POINTS_KEYS if _has_points(entry.get(key))),
            entry.get("points"),
        )
        if not isinstance(name, str) or not name or not _has_points(points):
            return None
        array = as_point_array(points)
    except (KeyError, TypeError, ValueError):
        return None

    if not np.all(np.isfinite(array)):
        return None
    return name, array


def _has_points(value: Any) -> bool:
    if value is None or isinstance(value, (str, bytes)):
        return False
    return len(value) > 0
