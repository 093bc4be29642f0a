"""Half-edge graph construction from split segments.

This module slices every segment at its split points into atomic edges and
assembles them into a half-edge structure:
- Endpoints are merged into vertices through a grid-bucketed proximity index
- Every atomic edge yields two mutually twinned half-edges
- Each vertex's outgoing half-edges are sorted by polar angle, and every
  half-edge remembers its slot in that order so angular neighbours are O(1)

The resulting graph is built fresh for each request and is never shared
between concurrent traces.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Iterator
from dataclasses import dataclass, field

from facetizer.core.geometry import polar_angle
from facetizer.core.intersection import DEFAULT_MERGE_EPSILON
from facetizer.domain import Point, SplitPoint

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Vertex:
    """A merged arrangement vertex.

    Attributes:
        index: Creation order, stable for a given input
        point: Position of the first point merged into this vertex
        outgoing: Half-edges leaving this vertex, sorted by angle once built
    """

    index: int
    point: Point
    outgoing: list["HalfEdge"] = field(default_factory=list, repr=False)

    @property
    def degree(self) -> int:
        """Number of edges incident to the vertex."""
        return len(self.outgoing)


@dataclass(eq=False)
class HalfEdge:
    """One direction of an atomic edge.

    Attributes:
        origin: Vertex the half-edge leaves from
        twin: Reverse-direction partner (origin and destination swapped)
        angle: Polar angle of the half-edge at its origin
        slot: Position in ``origin.outgoing`` after angular sorting
        consumed: Set once a face trace has walked this half-edge
    """

    origin: Vertex
    angle: float
    twin: "HalfEdge" = field(init=False, repr=False)
    slot: int = -1
    consumed: bool = False

    @classmethod
    def pair(cls, a: Vertex, b: Vertex) -> tuple["HalfEdge", "HalfEdge"]:
        """Create the two twinned half-edges of the edge a-b (a to b first)."""
        forward = cls(origin=a, angle=polar_angle(a.point, b.point))
        backward = cls(origin=b, angle=polar_angle(b.point, a.point))
        forward.twin = backward
        backward.twin = forward
        return forward, backward

    @property
    def destination(self) -> Vertex:
        """Vertex the half-edge points to."""
        return self.twin.origin


@dataclass(frozen=True, slots=True)
class AtomicEdge:
    """A segment fragment between two consecutive split points."""

    start: Point
    end: Point


class PointIndex:
    """Proximity lookup of vertices on a uniform grid.

    Points are bucketed into square cells of side ``epsilon``; any point
    within ``epsilon`` of a query therefore lives in the query's cell or one
    of its eight neighbours. This avoids the seams that rounding coordinates
    to a fixed number of decimals produces at cell boundaries.
    """

    def __init__(self, epsilon: float = DEFAULT_MERGE_EPSILON) -> None:
        self.epsilon = epsilon
        self._cells: dict[tuple[int, int], list[Vertex]] = defaultdict(list)
        self._vertices: list[Vertex] = []

    def _cell(self, point: Point) -> tuple[int, int]:
        return (math.floor(point.x / self.epsilon), math.floor(point.y / self.epsilon))

    def find(self, point: Point) -> Vertex | None:
        """Return the nearest vertex within ``epsilon`` of ``point``, if any."""
        cx, cy = self._cell(point)
        best: Vertex | None = None
        best_dist = self.epsilon
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for vertex in self._cells.get((cx + dx, cy + dy), ()):
                    dist = vertex.point.distance_to(point)
                    if dist < best_dist:
                        best = vertex
                        best_dist = dist
        return best

    def get_or_create(self, point: Point) -> Vertex:
        """Return the vertex merged with ``point``, creating it if needed."""
        vertex = self.find(point)
        if vertex is None:
            vertex = Vertex(index=len(self._vertices), point=point)
            self._vertices.append(vertex)
            self._cells[self._cell(point)].append(vertex)
        return vertex

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)


@dataclass
class Arrangement:
    """Half-edge graph of a planar segment arrangement.

    Attributes:
        vertices: Merged vertices in creation order
        half_edges: All half-edges, twins adjacent (2k, 2k + 1)
    """

    vertices: list[Vertex]
    half_edges: list[HalfEdge]

    @property
    def edge_count(self) -> int:
        """Number of atomic (undirected) edges."""
        return len(self.half_edges) // 2

    def reset(self) -> None:
        """Clear consumed flags so the graph can be traced again."""
        for half_edge in self.half_edges:
            half_edge.consumed = False

    def previous_around(self, half_edge: HalfEdge) -> HalfEdge:
        """Half-edge just before ``half_edge`` in its origin's angular order.

        Wraps from the first slot to the last.
        """
        outgoing = half_edge.origin.outgoing
        return outgoing[(half_edge.slot - 1) % len(outgoing)]


def split_into_atomic_edges(
    split_points: list[SplitPoint], merge_epsilon: float = DEFAULT_MERGE_EPSILON
) -> list[AtomicEdge]:
    """Slice one segment at its split points.

    Args:
        split_points: Split points of a single segment, in any order
        merge_epsilon: Consecutive points closer than this yield no edge

    Returns:
        Atomic edges ordered from t = 0 to t = 1
    """
    ordered = sorted(split_points, key=lambda sp: sp.t)
    edges: list[AtomicEdge] = []
    for current, following in zip(ordered, ordered[1:]):
        if current.point.distance_to(following.point) < merge_epsilon:
            continue
        edges.append(AtomicEdge(current.point, following.point))
    return edges


def build_arrangement(
    split_points: list[list[SplitPoint]],
    merge_epsilon: float = DEFAULT_MERGE_EPSILON,
) -> Arrangement:
    """Build the half-edge graph of an arrangement.

    Args:
        split_points: Split points per segment (see ``find_intersections``)
        merge_epsilon: Distance under which points become the same vertex

    Returns:
        Arrangement with angularly sorted, slot-indexed outgoing lists
    """
    index = PointIndex(merge_epsilon)
    half_edges: list[HalfEdge] = []

    for per_segment in split_points:
        for edge in split_into_atomic_edges(per_segment, merge_epsilon):
            a = index.get_or_create(edge.start)
            b = index.get_or_create(edge.end)
            if a is b:
                continue

            forward, backward = HalfEdge.pair(a, b)

            half_edges.append(forward)
            half_edges.append(backward)
            a.outgoing.append(forward)
            b.outgoing.append(backward)

    vertices = list(index)
    for vertex in vertices:
        vertex.outgoing.sort(key=lambda h: h.angle)
        for slot, half_edge in enumerate(vertex.outgoing):
            half_edge.slot = slot

    logger.debug(
        "Arrangement built: %d vertices, %d half-edges", len(vertices), len(half_edges)
    )
    return Arrangement(vertices=vertices, half_edges=half_edges)
