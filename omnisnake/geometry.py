"""Two-dimensional vector maths for the snake arena."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


ORIGIN = Vec2(0.0, 0.0)


def bound_angle(angle: float) -> float:
    """Wrap an angle that is at most one turn out of range into [0, 2*pi)."""
    if angle >= math.tau:
        return angle - math.tau
    if angle < 0:
        return math.tau + angle
    return angle


def angle_between(point1: Vec2, point2: Vec2) -> float:
    """Heading from ``point1`` towards ``point2``, in [0, 2*pi)."""
    direction = point2 - point1
    return bound_angle(math.atan2(direction.y, direction.x))


def distance(point1: Vec2, point2: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(point2.x - point1.x, point2.y - point1.y)


def length(vector: Vec2) -> float:
    """Length of a vector."""
    return distance(ORIGIN, vector)


def normalize(vector: Vec2) -> Vec2:
    """Unit vector with the same direction as ``vector``."""
    size = length(vector)
    if size == 0:
        raise ValueError("cannot normalize a zero-length vector")
    return vector / size


def rotate(vector: Vec2, angle: float) -> Vec2:
    """Rotate ``vector`` by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return Vec2(c * vector.x - s * vector.y, s * vector.x + c * vector.y)


def segment_intersection(p1: Vec2, p2: Vec2, p3: Vec2, p4: Vec2) -> Vec2 | None:
    """Point where segments p1-p2 and p3-p4 cross strictly inside both, or None."""
    den = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if den == 0:
        return None

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / den
    u = -((p1.x - p2.x) * (p1.y - p3.y) - (p1.y - p2.y) * (p1.x - p3.x)) / den

    if 0 < t < 1 and 0 < u < 1:
        return Vec2(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))
    return None