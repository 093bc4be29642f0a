"""Face tracing over a half-edge arrangement.

Each walk starts from an unconsumed half-edge and repeatedly turns to the
outgoing half-edge just before the current one's twin in the destination's
angular order. With outgoing lists sorted counter-clockwise this keeps the
face on the left of every step, so each closed walk is the boundary of one
face of the planar subdivision (the outer face included).
"""

import logging

from facetizer.core.arrangement import Arrangement, HalfEdge
from facetizer.domain import Point

logger = logging.getLogger(__name__)


def next_half_edge(arrangement: Arrangement, half_edge: HalfEdge) -> HalfEdge:
    """Half-edge that follows ``half_edge`` around the same face."""
    return arrangement.previous_around(half_edge.twin)


def trace_face(
    arrangement: Arrangement,
    start: HalfEdge,
    max_steps: int | None = None,
) -> list[Point] | None:
    """Walk one face boundary starting at ``start``.

    Every visited half-edge is marked consumed, whether or not the walk
    closes.

    Args:
        arrangement: Graph being traced
        start: Unconsumed half-edge to start from
        max_steps: Abandon the walk after this many half-edges

    Returns:
        Vertex positions of the closed circuit, or None if the walk ran into
        an already consumed half-edge or exceeded ``max_steps``
    """
    polygon: list[Point] = []
    current = start

    while True:
        current.consumed = True
        polygon.append(current.origin.point)

        if max_steps is not None and len(polygon) >= max_steps:
            following = next_half_edge(arrangement, current)
            if following is start:
                return polygon
            logger.warning(
                "Face walk exceeded step limit, abandoning: start vertex %d, %d steps",
                start.origin.index,
                len(polygon),
            )
            return None

        current = next_half_edge(arrangement, current)
        if current is start:
            return polygon
        if current.consumed:
            logger.warning(
                "Face walk hit a consumed half-edge, abandoning: start vertex %d, %d steps",
                start.origin.index,
                len(polygon),
            )
            return None


def trace_faces(arrangement: Arrangement, max_steps: int | None = None) -> list[list[Point]]:
    """Enumerate every face boundary of the arrangement.

    Consumes each half-edge exactly once. Closed circuits with fewer than
    three vertices (the two-sided walk along a dangling edge, for instance)
    are dropped.

    Args:
        arrangement: Graph built by ``build_arrangement``; consumed flags must be clear
        max_steps: Optional per-walk step limit

    Returns:
        Raw faces as lists of vertex positions, in discovery order
    """
    faces: list[list[Point]] = []
    abandoned = 0

    for half_edge in arrangement.half_edges:
        if half_edge.consumed:
            continue
        polygon = trace_face(arrangement, half_edge, max_steps=max_steps)
        if polygon is None:
            abandoned += 1
            continue
        if len(polygon) >= 3:
            faces.append(polygon)

    logger.debug("Traced %d raw faces (%d walks abandoned)", len(faces), abandoned)
    return faces
