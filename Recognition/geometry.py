"""Geometric primitives over 2D point sequences."""

from __future__ import annotations
from collections.abc import Mapping, Sequence
from math import cos, pi, sin, sqrt
from typing import Any, Union

import numpy as np

from .Types import HasXY, Point, Rectangle

PointLike = Union[HasXY, Mapping[str, float], Sequence[float]]
PointsLike = Union[np.ndarray, Sequence[PointLike]]


def _coerce_point(point: PointLike) -> tuple[float, float]:
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


def as_point_array(points: PointsLike) -> np.ndarray:
    """
    Converts a point sequence to an (n, 2) float array.
    Accepts Points, objects exposing `.x`/`.y`, {"x", "y"} mappings or (x, y) pairs.
    """
    if isinstance(points, np.ndarray):
        array = np.asarray(points, dtype=float)
        if array.ndim != 2 or array.shape[1] != 2:
            raise ValueError(f"Point array shape mismatch: {array.shape} (expected (n, 2))")
        return array

    if len(points) == 0:
        return np.empty((0, 2), dtype=float)

    return np.array([_coerce_point(p) for p in points], dtype=float)


def _non_empty(points: PointsLike) -> np.ndarray:
    array = as_point_array(points)
    if array.shape[0] == 0:
        raise ValueError("Point sequence must not be empty")
    return array


def distance(p1: Any, p2: Any) -> float:
    """Computes Euclidean distance between two 2D points."""
    x1, y1 = _coerce_point(p1)
    x2, y2 = _coerce_point(p2)
    return sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def path_length(points: PointsLike) -> float:
    """Sum of the distances between consecutive points."""
    array = _non_empty(points)
    return float(np.sum(np.hypot(*np.diff(array, axis=0).T)))


def centroid(points: PointsLike) -> Point:
    array = _non_empty(points)
    cx, cy = array.mean(axis=0)
    return Point(float(cx), float(cy))


def bounding_box(points: PointsLike) -> Rectangle:
    array = _non_empty(points)
    min_x, min_y = array.min(axis=0)
    max_x, max_y = array.max(axis=0)
    return Rectangle(float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y))


def path_distance(pts1: PointsLike, pts2: PointsLike) -> float:
    """Mean distance between points sharing the same index in both sequences."""
    a = _non_empty(pts1)
    b = _non_empty(pts2)
    if a.shape != b.shape:
        raise ValueError(f"Point count mismatch: {a.shape[0]} vs {b.shape[0]}")
    return float(np.mean(np.hypot(*(a - b).T)))


def rotate_by(points: PointsLike, radians: float) -> np.ndarray:
    """Rotates every point about the centroid of the sequence."""
    array = _non_empty(points)
    c = array.mean(axis=0)
    cos_a, sin_a = cos(radians), sin(radians)
    rotation = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
    return (array - c) @ rotation.T + c


def deg_to_rad(degrees: float) -> float:
    return degrees * pi / 180.0


__all__ = [
    "as_point_array",
    "distance",
    "path_length",
    "centroid",
    "bounding_box",
    "path_distance",
    "rotate_by",
    "deg_to_rad",
]
