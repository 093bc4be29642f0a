"""Geometric primitives shared by the polygonization pipeline.

This module provides small mathematical utilities for:
- Signed area calculation (shoelace formula)
- Turn direction via the 2D cross product
- Polar angle of a directed edge

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from facetizer.domain import Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction in a y-up frame:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def turn_cross(a: Point, b: Point, c: Point) -> float:
    """Cross product of the edge vectors a→b and b→c.

    Zero when the three points are collinear, positive for a left turn in a
    y-up frame.

    Examples:
        >>> turn_cross(Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0))
        0.0
        >>> turn_cross(Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0))
        1.0
    """
    abx, aby = b.x - a.x, b.y - a.y
    bcx, bcy = c.x - b.x, c.y - b.y
    return abx * bcy - aby * bcx


def polar_angle(origin: Point, target: Point) -> float:
    """Angle of the direction origin→target, in radians within (-pi, pi]."""
    return math.atan2(target.y - origin.y, target.x - origin.x)
