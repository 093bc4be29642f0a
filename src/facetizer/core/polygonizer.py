"""Planar polygonization of a segment set.

Ties the pipeline together:

    segments -> find_intersections -> build_arrangement -> trace_faces
             -> normalize_faces -> bounded polygons

Each call builds its own graph and keeps no state between calls, so the
same ``Polygonizer`` may be reused freely and separate calls may run in
separate threads or processes.
"""

import logging
from dataclasses import dataclass

from facetizer.config import ToleranceConfig
from facetizer.core.arrangement import Arrangement, build_arrangement
from facetizer.core.intersection import find_intersections
from facetizer.core.normalizer import normalize_faces
from facetizer.core.tracer import trace_faces
from facetizer.domain import Point, Polygon, Segment

logger = logging.getLogger(__name__)


@dataclass
class PolygonizationResult:
    """Output of a polygonization run plus the intermediate structures.

    Attributes:
        polygons: Bounded faces
        arrangement: Half-edge graph the faces were traced from
        raw_faces: Face walks before cleanup (outer face included)
        crossing_count: Number of split points added beyond segment endpoints
    """

    polygons: list[Polygon]
    arrangement: Arrangement
    raw_faces: list[list[Point]]
    crossing_count: int


class Polygonizer:
    """Extracts bounded faces from a set of segments.

    Example:
        polygonizer = Polygonizer()
        faces = polygonizer.polygonize([
            Segment.from_coords(0, 0, 100, 0),
            Segment.from_coords(100, 0, 100, 100),
            Segment.from_coords(100, 100, 0, 100),
            Segment.from_coords(0, 100, 0, 0),
        ])
    """

    def __init__(
        self,
        tolerances: ToleranceConfig | None = None,
        max_trace_steps: int | None = None,
    ) -> None:
        """Initialize the polygonizer.

        Args:
            tolerances: Numeric thresholds (defaults if None)
            max_trace_steps: Optional per-walk step limit for face tracing
        """
        self.tolerances = tolerances or ToleranceConfig()
        self.max_trace_steps = max_trace_steps

    def run(self, segments: list[Segment]) -> PolygonizationResult:
        """Run the full pipeline and keep every intermediate stage."""
        tol = self.tolerances

        split_points = find_intersections(
            segments,
            parallel_epsilon=tol.parallel_epsilon,
            param_tolerance=tol.param_tolerance,
            merge_epsilon=tol.merge_epsilon,
        )
        crossing_count = sum(len(points) - 2 for points in split_points)

        arrangement = build_arrangement(split_points, merge_epsilon=tol.merge_epsilon)
        raw_faces = trace_faces(arrangement, max_steps=self.max_trace_steps)
        polygons = normalize_faces(raw_faces, tol)

        logger.debug(
            "Polygonized %d segments into %d bounded faces",
            len(segments),
            len(polygons),
        )
        return PolygonizationResult(
            polygons=polygons,
            arrangement=arrangement,
            raw_faces=raw_faces,
            crossing_count=crossing_count,
        )

    def polygonize(self, segments: list[Segment]) -> list[Polygon]:
        """Return the bounded faces of the arrangement of ``segments``."""
        return self.run(segments).polygons

    def count_crossings(self, segments: list[Segment]) -> int:
        """Count interior split points without building the graph."""
        tol = self.tolerances
        split_points = find_intersections(
            segments,
            parallel_epsilon=tol.parallel_epsilon,
            param_tolerance=tol.param_tolerance,
            merge_epsilon=tol.merge_epsilon,
        )
        return sum(len(points) - 2 for points in split_points)


def polygonize(
    segments: list[Segment],
    tolerances: ToleranceConfig | None = None,
    max_trace_steps: int | None = None,
) -> list[Polygon]:
    """Compute the bounded faces of the planar arrangement of ``segments``.

    Args:
        segments: Input segments in one coordinate space
        tolerances: Numeric thresholds (defaults if None)
        max_trace_steps: Optional per-walk step limit for face tracing

    Returns:
        Bounded polygons, each with at least three vertices. Empty when the
        segments enclose no region.
    """
    return Polygonizer(tolerances, max_trace_steps).polygonize(segments)
