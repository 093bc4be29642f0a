"""Pairwise segment intersection.

Every pair of input segments is tested with the standard parametric
(Cramer's rule) formulation. Crossings found this way become split points on
both segments; the arrangement builder slices segments at those points.

The pass is O(n^2) in the number of segments, which is fine for the edge sets
of simple polyhedra.
"""

import logging
from dataclasses import dataclass

from facetizer.config import ToleranceConfig
from facetizer.domain import Point, Segment, SplitPoint

logger = logging.getLogger(__name__)

_DEFAULTS = ToleranceConfig()
DEFAULT_PARALLEL_EPSILON = _DEFAULTS.parallel_epsilon
DEFAULT_PARAM_TOLERANCE = _DEFAULTS.param_tolerance
DEFAULT_MERGE_EPSILON = _DEFAULTS.merge_epsilon


@dataclass(frozen=True, slots=True)
class Intersection:
    """Crossing point of two bounded segments.

    Attributes:
        point: Location of the crossing
        t: Parameter along the first segment
        u: Parameter along the second segment
    """

    point: Point
    t: float
    u: float


def segment_intersection(
    a: Segment,
    b: Segment,
    parallel_epsilon: float = DEFAULT_PARALLEL_EPSILON,
    param_tolerance: float = DEFAULT_PARAM_TOLERANCE,
) -> Intersection | None:
    """Find where two bounded segments cross.

    Returns None for parallel (or nearly parallel) segments, including
    collinear overlapping runs, and for crossings of the infinite lines that
    fall outside either segment.

    Args:
        a: First segment (a1 → a2)
        b: Second segment (b1 → b2)
        parallel_epsilon: Determinant magnitude below which the pair is parallel
        param_tolerance: Slack admitted around [0, 1] for both parameters

    Returns:
        Intersection with its parameters along both segments, or None

    Examples:
        >>> hit = segment_intersection(
        ...     Segment.from_coords(0, 0, 2, 2), Segment.from_coords(0, 2, 2, 0)
        ... )
        >>> hit.point, hit.t, hit.u
        (Point(x=1.0, y=1.0), 0.5, 0.5)
    """
    x1, y1 = a.start.x, a.start.y
    x2, y2 = a.end.x, a.end.y
    x3, y3 = b.start.x, b.start.y
    x4, y4 = b.end.x, b.end.y

    den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(den) < parallel_epsilon:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / den
    u = ((x1 - x3) * (y1 - y2) - (y1 - y3) * (x1 - x2)) / den

    low = -param_tolerance
    high = 1.0 + param_tolerance
    if not (low <= t <= high and low <= u <= high):
        return None

    return Intersection(point=Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1)), t=t, u=u)


def _add_split_point(
    split_points: list[SplitPoint], candidate: SplitPoint, merge_epsilon: float
) -> bool:
    """Record a split point unless one already sits within ``merge_epsilon``."""
    for existing in split_points:
        if existing.point.is_close(candidate.point, merge_epsilon):
            return False
    split_points.append(candidate)
    return True


def find_intersections(
    segments: list[Segment],
    parallel_epsilon: float = DEFAULT_PARALLEL_EPSILON,
    param_tolerance: float = DEFAULT_PARAM_TOLERANCE,
    merge_epsilon: float = DEFAULT_MERGE_EPSILON,
) -> list[list[SplitPoint]]:
    """Collect the split points of every segment.

    Each segment starts with its own endpoints (t = 0 and t = 1) and gains one
    split point per crossing with any other segment. Points within
    ``merge_epsilon`` of a point already recorded on the same segment are
    dropped, so shared endpoints do not produce duplicates.

    Args:
        segments: Input segments
        parallel_epsilon: See ``segment_intersection``
        param_tolerance: See ``segment_intersection``
        merge_epsilon: Per-segment de-duplication distance

    Returns:
        One unsorted list of split points per input segment, in input order
    """
    per_segment: list[list[SplitPoint]] = [
        [SplitPoint(seg.start, 0.0), SplitPoint(seg.end, 1.0)] for seg in segments
    ]

    crossings = 0
    for i, seg_a in enumerate(segments):
        for j in range(i + 1, len(segments)):
            hit = segment_intersection(
                seg_a,
                segments[j],
                parallel_epsilon=parallel_epsilon,
                param_tolerance=param_tolerance,
            )
            if hit is None:
                continue
            crossings += 1
            _add_split_point(per_segment[i], SplitPoint(hit.point, hit.t), merge_epsilon)
            _add_split_point(per_segment[j], SplitPoint(hit.point, hit.u), merge_epsilon)

    logger.debug(
        "Intersection pass complete: %d segments, %d crossings", len(segments), crossings
    )
    return per_segment
