"""Domain models for facetizer.

This module contains the core domain models representing input segments,
arrangement split points and output faces. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)

Key classes:
- Point: A 2D point
- Segment: An input line segment
- SplitPoint: A parametric location along a segment
- Polygon: A closed polygonal face
- Scene: A named set of segments
"""

from facetizer.domain.geometry import Point, Polygon, Segment, SplitPoint
from facetizer.domain.scene import Scene

__all__: list[str] = [
    "Point",
    "Polygon",
    "Scene",
    "Segment",
    "SplitPoint",
]
