"""Value types shared by the recognition engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, NamedTuple, Optional, Protocol

import numpy as np


class HasXY(Protocol):
    """Protocol for objects with x and y coordinates (e.g., pointer events)."""
    x: float
    y: float


class Point(NamedTuple):
    x: float
    y: float


class Rectangle(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class MatcherKind(Enum):
    """Scoring algorithm used for a whole recognition call."""
    ANGULAR_SEARCH = auto()
    FAST_COSINE = auto()

    @classmethod
    def from_flag(cls, use_protractor: bool) -> "MatcherKind":
        return cls.FAST_COSINE if use_protractor else cls.ANGULAR_SEARCH


def _frozen(array: np.ndarray) -> np.ndarray:
    frozen = np.array(array, dtype=float, copy=True)
    frozen.setflags(write=False)
    return frozen


@dataclass(frozen=True, eq=False)
class Template:
    """
    Canonical form of a stroke.

    `points` is an (N, 2) array after resampling, rotation, scaling and
    translation; `vector` is the unit-length interleaved x,y form of those
    points used by the cosine matcher; `source` is the raw stroke the
    template was built from, kept so it can be rebuilt exactly on import.
    All arrays are read-only.
    """
    name: str
    points: np.ndarray
    vector: np.ndarray = field(repr=False)
    source: Optional[np.ndarray] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _frozen(self.points))
        object.__setattr__(self, "vector", _frozen(self.vector))
        if self.source is not None:
            object.__setattr__(self, "source", _frozen(self.source))

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def point_list(self) -> List[Point]:
        return [Point(float(x), float(y)) for x, y in self.points]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data copy, safe to serialize or mutate."""
        data: Dict[str, Any] = {
            "name": self.name,
            "points": [{"x": p.x, "y": p.y} for p in self.point_list()],
            "vector": [float(v) for v in self.vector],
        }
        if self.source is not None:
            data["originalPoints"] = [{"x": float(x), "y": float(y)} for x, y in self.source]
        return data


@dataclass(frozen=True)
class RecognitionResult:
    name: str
    score: float
    time: float  # elapsed milliseconds

    def is_match(self, threshold: float) -> bool:
        return self.score >= threshold
