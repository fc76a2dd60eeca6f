"""Vector and triangle helpers used by the polygon and level code.

Points are plain tuples of floats; most helpers accept 2D or 3D points.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = Sequence[float]

# Relative-free tolerance used by the point-in-triangle test.
INSIDE_TOLERANCE = 0.00001


def map_range(x: float, a: float, b: float, c: float, d: float) -> float:
    """Map ``x`` linearly from the range [a, b] onto [c, d]."""
    t = (x - a) / (b - a)
    return (1 - t) * c + t * d


def tri_area(a: Vector, b: Vector, c: Vector) -> float:
    """Return twice the unsigned area of the 2D triangle ``abc``."""
    return abs(
        a[0] * (b[1] - c[1])
        + b[0] * (c[1] - a[1])
        + c[0] * (a[1] - b[1])
    )


def pt_inside_tri(pt: Vector, a: Vector, b: Vector, c: Vector) -> bool:
    """Return True if ``pt`` lies inside or on the border of triangle ``abc``."""
    whole = tri_area(a, b, c)
    parts = tri_area(a, b, pt) + tri_area(b, c, pt) + tri_area(a, c, pt)
    return abs(whole - parts) < INSIDE_TOLERANCE


def distance(a: Vector, b: Vector) -> float:
    """Euclidean distance between two points of equal dimension."""
    return math.dist(a, b)


def normalize(v: Vector) -> tuple[float, ...]:
    """Return ``v`` scaled to unit length; a zero vector gives NaN components."""
    length = math.hypot(*v)
    if length == 0:
        return tuple(math.nan for _ in v)
    return tuple(c / length for c in v)


def closest_point_on_line(point: Vector, a: Vector, b: Vector) -> tuple[float, ...]:
    """Return the point of segment ``ab`` closest to ``point``."""
    direction = tuple(bc - ac for ac, bc in zip(a, b))
    length = math.hypot(*direction)
    if length == 0:
        return tuple(a)
    unit = tuple(c / length for c in direction)
    t = sum((pc - ac) * uc for pc, ac, uc in zip(point, a, unit))
    if t <= 0:
        return tuple(a)
    if t >= length:
        return tuple(b)
    return tuple(ac + uc * t for ac, uc in zip(a, unit))