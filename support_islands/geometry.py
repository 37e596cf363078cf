from __future__ import annotations

import numpy as np

Point = tuple[float, float]


def _as_array(point: Point | np.ndarray) -> np.ndarray:
    return np.asarray(point, dtype=np.float64)


def to_point(value: Point | np.ndarray) -> Point:
    """Return a plain ``(x, y)`` tuple of floats."""

    array = _as_array(value)
    return float(array[0]), float(array[1])


def euclidean(a: Point, b: Point) -> float:
    return float(np.linalg.norm(_as_array(b) - _as_array(a)))


def point_segment_distance(point: Point, start: Point, end: Point) -> float:
    """Distance from ``point`` to the closed segment ``start``-``end``."""

    p = _as_array(point)
    a = _as_array(start)
    b = _as_array(end)
    direction = b - a
    squared = float(direction @ direction)
    if squared == 0.0:
        return float(np.linalg.norm(p - a))
    t = float(np.clip((p - a) @ direction / squared, 0.0, 1.0))
    return float(np.linalg.norm(p - (a + t * direction)))


def interpolate(start: Point, end: Point, ratio: float) -> Point:
    a = _as_array(start)
    b = _as_array(end)
    return to_point(a + (b - a) * ratio)


def move_towards(start: Point, end: Point, distance: float) -> Point:
    """Point ``distance`` units from ``start`` in the direction of ``end``."""

    a = _as_array(start)
    direction = _as_array(end) - a
    norm = float(np.linalg.norm(direction))
    if norm == 0.0:
        return to_point(a)
    return to_point(a + direction * (distance / norm))


__all__ = [
    "Point",
    "to_point",
    "euclidean",
    "point_segment_distance",
    "interpolate",
    "move_towards",
]
