"""Core processing algorithms for facetizer.

This module contains the core algorithms for:

- Segment intersection (pairwise parametric crossings)
- Arrangement construction (atomic edges, merged vertices, half-edges)
- Face tracing (angular half-edge walks)
- Face normalization (cleanup, degenerate and outer face removal)

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects beyond their own freshly built graph)

Key functions:
- polygonize: Bounded faces of a segment arrangement
- segment_intersection: Crossing of two bounded segments
- find_intersections: Split points of every segment
- build_arrangement: Half-edge graph from split points
- trace_faces: Raw face boundaries of a half-edge graph
- normalize_faces: Clean bounded faces from raw boundaries

Key classes:
- Polygonizer: Runs the pipeline with a fixed set of tolerances
- SceneProcessor: Polygonizes every scene of a scene file in parallel
"""

from facetizer.core.arrangement import (
    Arrangement,
    HalfEdge,
    PointIndex,
    Vertex,
    build_arrangement,
)
from facetizer.core.geometry import polar_angle, signed_area, turn_cross
from facetizer.core.intersection import (
    Intersection,
    find_intersections,
    segment_intersection,
)
from facetizer.core.normalizer import compress_collinear, dedupe_close, normalize_faces
from facetizer.core.polygonizer import PolygonizationResult, Polygonizer, polygonize
from facetizer.core.processor import SceneProcessor, process_scene
from facetizer.core.tracer import trace_faces

__all__ = [
    # Arrangement classes
    "Arrangement",
    "HalfEdge",
    "Intersection",
    "PointIndex",
    "PolygonizationResult",
    # Pipeline classes
    "Polygonizer",
    "SceneProcessor",
    "Vertex",
    # Functions
    "build_arrangement",
    "compress_collinear",
    "dedupe_close",
    "find_intersections",
    "normalize_faces",
    "polar_angle",
    "polygonize",
    "process_scene",
    "segment_intersection",
    "signed_area",
    "trace_faces",
    "turn_cross",
]
