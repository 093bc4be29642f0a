"""Cleanup and classification of traced faces.

Raw face walks can repeat nearly coincident vertices and carry vertices that
sit in the middle of a straight run (where a segment was split but nothing
turns). This module removes both, filters out degenerate faces, and drops the
outer face of the arrangement.
"""

import logging

from facetizer.config import ToleranceConfig
from facetizer.core.geometry import signed_area, turn_cross
from facetizer.domain import Point, Polygon

logger = logging.getLogger(__name__)

_DEFAULTS = ToleranceConfig()


def dedupe_close(
    points: list[Point], epsilon: float = _DEFAULTS.dedupe_epsilon
) -> list[Point]:
    """Merge consecutive vertices that are closer than ``epsilon``.

    The polygon is treated cyclically: a last vertex that duplicates the
    first one is dropped as well.

    Examples:
        >>> dedupe_close([Point(0, 0), Point(0, 0.00001), Point(1, 0), Point(1, 1)])
        [Point(x=0, y=0), Point(x=1, y=0), Point(x=1, y=1)]
    """
    kept: list[Point] = []
    for point in points:
        if kept and kept[-1].is_close(point, epsilon):
            continue
        kept.append(point)

    while len(kept) > 1 and kept[-1].is_close(kept[0], epsilon):
        kept.pop()

    return kept


def compress_collinear(
    points: list[Point], epsilon: float = _DEFAULTS.collinear_epsilon
) -> list[Point]:
    """Remove vertices lying on a straight line between their neighbours.

    A vertex is collinear when the cross product of its incoming and outgoing
    edge vectors is below ``epsilon`` in magnitude. If removing every
    collinear vertex would leave fewer than three, the input is returned
    unchanged.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> len(compress_collinear(square))
        4
    """
    n = len(points)
    if n < 3:
        return list(points)

    kept = [
        points[i]
        for i in range(n)
        if abs(turn_cross(points[i - 1], points[i], points[(i + 1) % n])) > epsilon
    ]
    return kept if len(kept) >= 3 else list(points)


def clean_face(points: list[Point], tolerances: ToleranceConfig) -> list[Point]:
    """Apply de-duplication then collinearity compression to one face.

    Both steps are repeated until the face stops shrinking: removing the tip
    of a dangling spur leaves its base vertex duplicated, which only a second
    de-duplication pass can merge.
    """
    current = list(points)
    while True:
        deduped = dedupe_close(current, tolerances.dedupe_epsilon)
        compressed = compress_collinear(deduped, tolerances.collinear_epsilon)
        if len(compressed) == len(current):
            return compressed
        current = compressed


def normalize_faces(
    faces: list[list[Point]],
    tolerances: ToleranceConfig | None = None,
) -> list[Polygon]:
    """Turn raw traced faces into the bounded output polygons.

    Args:
        faces: Raw faces from ``trace_faces``
        tolerances: Cleanup thresholds (defaults if None)

    Returns:
        Bounded faces, in trace order. Empty when nothing encloses a region.
    """
    if tolerances is None:
        tolerances = ToleranceConfig()

    cleaned: list[tuple[list[Point], float]] = []
    for face in faces:
        points = clean_face(face, tolerances)
        if len(points) < 3:
            continue
        area = abs(signed_area(points))
        if area < tolerances.area_epsilon:
            continue
        cleaned.append((points, area))

    if not cleaned:
        logger.debug("No faces survived cleanup (%d raw)", len(faces))
        return []

    # First maximum wins on ties
    outer_idx = max(range(len(cleaned)), key=lambda i: cleaned[i][1])

    bounded = [Polygon(vertices=points) for i, (points, _) in enumerate(cleaned) if i != outer_idx]
    logger.debug(
        "Normalized faces: %d raw, %d cleaned, %d bounded (outer area %.3f)",
        len(faces),
        len(cleaned),
        len(bounded),
        cleaned[outer_idx][1],
    )
    return bounded
