"""
2D vector algebra used by the layout engine and the edge geometry.

Vectors are immutable ``Vector2`` named tuples; every function returns a new
value. Near-zero inputs fall back to the zero vector (``normalize``,
``set_length``) or to ``(0, 0)`` (``decompose``) instead of dividing by ~0.
"""

import math
from typing import NamedTuple, Tuple, Union

from .constants import MIN_THR


class Vector2(NamedTuple):
    """A point or direction on the canvas."""

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


ZERO = Vector2(0.0, 0.0)


def add(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def sub(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x - b.x, a.y - b.y)


def scale(v: Vector2, factor: Union[float, Vector2]) -> Vector2:
    """Scale by a scalar, or component-wise by another vector."""
    if isinstance(factor, tuple):
        return Vector2(v.x * factor[0], v.y * factor[1])
    return Vector2(v.x * factor, v.y * factor)


def dot(a: Vector2, b: Vector2) -> float:
    return a.x * b.x + a.y * b.y


def outer(a: Vector2, b: Vector2) -> float:
    """2D cross product (twice the signed area of the triangle a, b)."""
    return a.x * b.y - a.y * b.x


def length(v: Vector2) -> float:
    return math.sqrt(dot(v, v))


def distance(a: Vector2, b: Vector2) -> float:
    return length(sub(a, b))


def unit(angle: float) -> Vector2:
    """Unit vector pointing at ``angle`` radians."""
    return Vector2(math.cos(angle), math.sin(angle))


def normalize(v: Vector2) -> Vector2:
    size = length(v)
    if size < MIN_THR:
        return ZERO
    return scale(v, 1 / size)


def set_length(v: Vector2, new_length: float) -> Vector2:
    size = length(v)
    if size < MIN_THR:
        return ZERO
    return scale(v, new_length / size)


def rotate(v: Vector2, angle: float) -> Vector2:
    c = math.cos(angle)
    s = math.sin(angle)
    return Vector2(c * v.x - s * v.y, s * v.x + c * v.y)


def lerp(u: Vector2, v: Vector2, t: float) -> Vector2:
    return add(scale(u, 1 - t), scale(v, t))


def floor(v: Vector2) -> Vector2:
    return Vector2(float(math.floor(v.x)), float(math.floor(v.y)))


def projection_ratio(target: Vector2, base: Vector2) -> float:
    return dot(base, target) / dot(base, base)


def projection(target: Vector2, base: Vector2) -> Vector2:
    return scale(base, projection_ratio(target, base))


def decompose(target: Vector2, base: Vector2) -> Tuple[float, float]:
    """
    Express ``target`` in the orthonormal frame defined by ``base``.

    Args:
        target: Vector to decompose.
        base: Direction of the first axis. The second axis is ``base``
            rotated by 90 degrees.

    Returns:
        ``(parallel, perpendicular)`` where ``parallel`` is the coordinate
        along the normalized base and ``perpendicular`` is the signed
        distance from the base line (positive on the counter-clockwise side).
        ``(0, 0)`` when ``base`` has near-zero length.
    """
    if length(base) < MIN_THR:
        return 0.0, 0.0

    base = normalize(base)
    remainder = sub(target, projection(target, base))
    cross = outer(base, remainder)
    sign = (cross > 0) - (cross < 0)
    return projection_ratio(target, base), sign * length(remainder)
