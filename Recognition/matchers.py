"""Distance functions comparing a canonical query against a stored template."""

from __future__ import annotations
from math import acos, atan, cos, pi, sin

import numpy as np

from config.recognizer import ANGLE_PRECISION, ANGLE_RANGE, HALF_DIAGONAL, PHI

from .geometry import PointsLike, path_distance, rotate_by
from .Types import MatcherKind, Template


def distance_at_angle(points: PointsLike, template: Template, radians: float) -> float:
    """Mean point-to-point distance after rotating `points` about their centroid."""
    return path_distance(rotate_by(points, radians), template.points)


def distance_at_best_angle(
    points: PointsLike,
    template: Template,
    a: float = -ANGLE_RANGE,
    b: float = ANGLE_RANGE,
    threshold: float = ANGLE_PRECISION,
) -> float:
    """Golden-section search for the rotation in [a, b] minimizing `distance_at_angle`."""
    x1 = PHI * a + (1.0 - PHI) * b
    f1 = distance_at_angle(points, template, x1)
    x2 = (1.0 - PHI) * a + PHI * b
    f2 = distance_at_angle(points, template, x2)

    while abs(b - a) > threshold:
        if f1 < f2:
            b = x2
            x2, f2 = x1, f1
            x1 = PHI * a + (1.0 - PHI) * b
            f1 = distance_at_angle(points, template, x1)
        else:
            a = x1
            x1, f1 = x2, f2
            x2 = (1.0 - PHI) * a + PHI * b
            f2 = distance_at_angle(points, template, x2)

    return min(f1, f2)


def optimal_cosine_distance(v1: np.ndarray, v2: np.ndarray) -> float:
    """
    Protractor distance: the angle between two unit vectors after the rotation
    that best aligns them, found in closed form.
    """
    x1, y1 = v1[0::2], v1[1::2]
    x2, y2 = v2[0::2], v2[1::2]
    a = float(np.dot(x1, x2) + np.dot(y1, y2))
    b = float(np.dot(x1, y2) - np.dot(y1, x2))

    if a == 0.0:
        angle = pi / 2 if b > 0 else -pi / 2
    else:
        angle = atan(b / a)

    similarity = a * cos(angle) + b * sin(angle)
    return acos(max(-1.0, min(1.0, similarity)))


def template_distance(query: Template, template: Template, kind: MatcherKind) -> float:
    if kind is MatcherKind.FAST_COSINE:
        return optimal_cosine_distance(template.vector, query.vector)
    return distance_at_best_angle(query.points, template)


def distance_to_score(distance: float, kind: MatcherKind) -> float:
    """Maps a matcher distance to a score clamped to [0, 1]."""
    if kind is MatcherKind.FAST_COSINE:
        score = 1.0 - distance
    else:
        score = 1.0 - distance / HALF_DIAGONAL
    return max(0.0, min(1.0, score))
