"""
Geometry helpers for range and hit testing on the network plane.
"""

import math


def distance(a, b) -> float:
    """Euclidean distance between two positioned entities"""
    return math.hypot(a.x - b.x, a.y - b.y)


def in_range(a, b) -> bool:
    """
    Whether ``a``'s influence reaches ``b``.

    Only the propagating node's range is used, so the relation is asymmetric.
    A negative range is treated as zero.
    """
    return distance(a, b) <= max(a.range, 0.0)


def contains_point(entity, x: float, y: float, radius: float) -> bool:
    """Whether the point (x, y) falls within ``radius`` of the entity's centre"""
    return math.hypot(entity.x - x, entity.y - y) <= radius
