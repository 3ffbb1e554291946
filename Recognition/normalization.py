"""
Normalization pipeline: maps a raw stroke to the canonical space.

    resample -> rotate to indicative angle -> scale to square -> translate to origin
    (-> vectorize, for the cosine matcher)
"""

from __future__ import annotations
from math import atan2
from typing import List, Tuple

import numpy as np

from config.recognizer import DEGENERATE_EXTENT_RATIO, NUM_POINTS, ORIGIN, SQUARE_SIZE

from .geometry import PointsLike, as_point_array, bounding_box, centroid, distance, path_length, rotate_by
from .Types import Point, Template


def resample(points: PointsLike, n: int = NUM_POINTS) -> np.ndarray:
    """
    Resamples a stroke to exactly `n` points equally spaced along its path.

    Each interpolated point is inserted into a working copy of the stroke so the
    remainder of the current segment is measured from it. The caller's sequence
    is left untouched.
    """
    if n < 2:
        raise ValueError(f"Cannot resample to fewer than 2 points (got {n})")

    work: List[Point] = [Point(float(x), float(y)) for x, y in as_point_array(points)]
    if not work:
        raise ValueError("Point sequence must not be empty")

    interval = path_length(work) / (n - 1)
    if interval == 0.0:
        return np.tile(np.array(work[0], dtype=float), (n, 1))

    accumulated = 0.0
    resampled: List[Point] = [work[0]]

    i = 1
    while i < len(work):
        prev, curr = work[i - 1], work[i]
        d = distance(prev, curr)
        if accumulated + d >= interval:
            ratio = (interval - accumulated) / d
            q = Point(prev.x + ratio * (curr.x - prev.x), prev.y + ratio * (curr.y - prev.y))
            resampled.append(q)
            work.insert(i, q)
            accumulated = 0.0
        else:
            accumulated += d
        i += 1

    # Floating-point shortfall at the tail
    while len(resampled) < n:
        resampled.append(work[-1])

    return np.array(resampled[:n], dtype=float)


def indicative_angle(points: PointsLike) -> float:
    """Angle from the first point to the centroid."""
    array = as_point_array(points)
    c = centroid(array)
    return atan2(c.y - array[0, 1], c.x - array[0, 0])


def rotate_to_zero(points: PointsLike) -> np.ndarray:
    return rotate_by(points, -indicative_angle(points))


def _axis_factor(extent: float, other: float, size: float) -> float:
    # Flat axes (straight strokes) keep their coordinates
    if extent <= DEGENERATE_EXTENT_RATIO * max(extent, other):
        return 1.0
    return size / extent


def scale_to(points: PointsLike, size: float = SQUARE_SIZE) -> np.ndarray:
    """Non-uniformly scales the points so their bounding box becomes `size` x `size`."""
    array = as_point_array(points)
    box = bounding_box(array)
    factors = np.array([
        _axis_factor(box.width, box.height, size),
        _axis_factor(box.height, box.width, size),
    ])
    return array * factors


def translate_to(points: PointsLike, origin: Tuple[float, float] = ORIGIN) -> np.ndarray:
    """Moves the points so their centroid lands on `origin`."""
    array = as_point_array(points)
    c = centroid(array)
    return array + (np.asarray(origin, dtype=float) - np.array(c))


def vectorize(points: PointsLike) -> np.ndarray:
    """Flattens points into an interleaved x,y vector of unit length."""
    vector = as_point_array(points).reshape(-1)
    magnitude = float(np.linalg.norm(vector))
    if magnitude == 0.0:
        return vector.copy()
    return vector / magnitude


def normalize(points: PointsLike) -> np.ndarray:
    """Runs resample, rotation, scaling and translation in order."""
    canonical = resample(points, NUM_POINTS)
    canonical = rotate_to_zero(canonical)
    canonical = scale_to(canonical, SQUARE_SIZE)
    return translate_to(canonical, ORIGIN)


def create_template(name: str, points: PointsLike) -> Template:
    raw = as_point_array(points)
    canonical = normalize(raw)
    return Template(name=name, points=canonical, vector=vectorize(canonical), source=raw)


__all__ = [
    "resample",
    "indicative_angle",
    "rotate_to_zero",
    "scale_to",
    "translate_to",
    "vectorize",
    "normalize",
    "create_template",
]
