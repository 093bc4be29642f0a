"""Core geometric types for planar arrangements.

This module defines the fundamental geometric types used throughout facetizer:
- Point: A 2D point
- Segment: An input line segment between two points
- SplitPoint: A point located along its owning segment by a parameter
- Polygon: A closed polygonal face
"""

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Bitwise equality is only used for identity;
    arrangement vertices are merged by proximity (see ``is_close``).

    Attributes:
        x: X coordinate in input units
        y: Y coordinate in input units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: "Point", tolerance: float) -> bool:
        """Check whether another point lies strictly within ``tolerance``."""
        return self.distance_to(other) < tolerance

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """An input line segment.

    Attributes:
        start: First endpoint (parameter t = 0)
        end: Second endpoint (parameter t = 1)
    """

    start: Point
    end: Point

    @property
    def length(self) -> float:
        """Length of the segment."""
        return self.start.distance_to(self.end)

    def point_at(self, t: float) -> Point:
        """Interpolate the point at parameter ``t`` along the segment."""
        return Point(
            self.start.x + t * (self.end.x - self.start.x),
            self.start.y + t * (self.end.y - self.start.y),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Deserialize from dictionary."""
        return cls(start=Point.from_dict(data["start"]), end=Point.from_dict(data["end"]))

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        """Build a segment from raw endpoint coordinates."""
        return cls(Point(float(x1), float(y1)), Point(float(x2), float(y2)))


@dataclass(frozen=True, slots=True)
class SplitPoint:
    """A point on a segment, ordered by its parameter along that segment.

    Attributes:
        point: Location of the split
        t: Parameter along the owning segment, nominally in [0, 1]
    """

    point: Point
    t: float


@dataclass
class Polygon:
    """A closed polygonal face of an arrangement.

    The closing edge from the last vertex back to the first is implicit.

    Attributes:
        vertices: Ordered vertex positions
    """

    vertices: list[Point]
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)

    def __len__(self) -> int:
        return len(self.vertices)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Positive for counter-clockwise winding in a y-up frame, negative for
        clockwise. Result is cached.

        Returns:
            Signed area of the polygon
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.vertices)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.vertices[i].x * self.vertices[j].y
            area -= self.vertices[j].x * self.vertices[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    @property
    def area(self) -> float:
        """Absolute area of the polygon."""
        return abs(self.signed_area())

    def centroid(self) -> Point:
        """Area-weighted centroid of the polygon.

        Falls back to the mean of the vertices when the polygon is flat.

        Returns:
            Centroid point
        """
        n = len(self.vertices)
        if n == 0:
            return Point(0.0, 0.0)

        twice_area = 0.0
        cx = 0.0
        cy = 0.0
        for i in range(n):
            p, q = self.vertices[i], self.vertices[(i + 1) % n]
            w = p.x * q.y - q.x * p.y
            twice_area += w
            cx += (p.x + q.x) * w
            cy += (p.y + q.y) * w

        if abs(twice_area) < 1e-12:
            return Point(
                sum(p.x for p in self.vertices) / n,
                sum(p.y for p in self.vertices) / n,
            )
        return Point(cx / (3.0 * twice_area), cy / (3.0 * twice_area))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the polygon.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.vertices:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def is_equivalent(
        self,
        other: "Polygon",
        tolerance: float = 1e-6,
        allow_reversed: bool = True,
    ) -> bool:
        """Compare two polygons up to cyclic rotation of their vertices.

        Args:
            other: Polygon to compare against
            tolerance: Maximum distance between matching vertices
            allow_reversed: Also accept the opposite winding

        Returns:
            True if both polygons visit the same vertices in the same cyclic order
        """
        n = len(self.vertices)
        if n != len(other.vertices):
            return False
        if n == 0:
            return True

        candidates = [other.vertices]
        if allow_reversed:
            candidates.append(other.vertices[::-1])

        for seq in candidates:
            for offset in range(n):
                if all(
                    self.vertices[i].distance_to(seq[(i + offset) % n]) <= tolerance
                    for i in range(n)
                ):
                    return True
        return False

    def to_coords(self) -> list[list[float]]:
        """Convert to a list of [x, y] pairs."""
        return [[p.x, p.y] for p in self.vertices]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"vertices": [p.to_dict() for p in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(vertices=[Point.from_dict(p) for p in data["vertices"]])
