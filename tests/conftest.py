"""Shared fixtures for facetizer tests."""

import math
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from facetizer.domain import Point, Polygon, Segment

CUBE_VERTICES = [
    (-1, -1, -1),
    (1, -1, -1),
    (1, 1, -1),
    (-1, 1, -1),
    (-1, -1, 1),
    (1, -1, 1),
    (1, 1, 1),
    (-1, 1, 1),
]

CUBE_EDGES = [
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
]


def _rotate_y(v: tuple[float, float, float], a: float) -> tuple[float, float, float]:
    x, y, z = v
    c, s = math.cos(a), math.sin(a)
    return (c * x + s * z, y, -s * x + c * z)


def _rotate_x(v: tuple[float, float, float], a: float) -> tuple[float, float, float]:
    x, y, z = v
    c, s = math.cos(a), math.sin(a)
    return (x, c * y - s * z, s * y + c * z)


def _project(
    v: tuple[float, float, float],
    width: float,
    height: float,
    fov: float = 500.0,
    dist: float = 3.0,
) -> Point:
    x, y, z = v
    s = fov / (fov + (z + dist) * 100)
    return Point(width * 0.5 + x * 100 * s, height * 0.5 - y * 100 * s)


def project_cube_edges(
    rot_y: float = 0.0,
    rot_x: float = 0.0,
    width: float = 560.0,
    height: float = 560.0,
) -> list[Segment]:
    """Perspective-project the 12 edges of a rotated unit cube to screen space."""
    projected = [
        _project(_rotate_x(_rotate_y(v, rot_y), rot_x), width, height) for v in CUBE_VERTICES
    ]
    return [Segment(projected[a], projected[b]) for a, b in CUBE_EDGES]


def segments_from_loop(coords: list[tuple[float, float]]) -> list[Segment]:
    """Segments joining consecutive coordinates, closing back to the first."""
    n = len(coords)
    return [
        Segment.from_coords(*coords[i], *coords[(i + 1) % n])
        for i in range(n)
    ]


@pytest.fixture
def square_segments() -> list[Segment]:
    """A closed 100x100 square made of four segments."""
    return segments_from_loop([(0, 0), (100, 0), (100, 100), (0, 100)])


@pytest.fixture
def square_polygon() -> Polygon:
    """The corners of the 100x100 square."""
    return Polygon(vertices=[Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)])


@pytest.fixture
def cube_front_segments() -> list[Segment]:
    """Cube edges projected while looking straight at one face."""
    return project_cube_edges(0.0, 0.0)


@pytest.fixture
def mock_logging():
    """Replace processor logging setup with a mock (no log files on disk)."""
    with patch("facetizer.core.processor.configure_logging") as mocked:
        mocked.return_value = Mock()
        yield mocked


@pytest.fixture
def scene_file(tmp_path: Path) -> Path:
    """A scene file with a square, a split square and a too-small scene."""
    path = tmp_path / "scenes.json"
    path.write_text(
        """{
  "scenes": {
    "square": [[[0, 0], [100, 0]], [[100, 0], [100, 100]],
               [[100, 100], [0, 100]], [[0, 100], [0, 0]]],
    "split_square": {"segments": [
        [[0, 0], [100, 0]], [[100, 0], [100, 100]],
        [[100, 100], [0, 100]], [[0, 100], [0, 0]],
        [[0, 0], [100, 100]]
    ]},
    "lonely": [[[0, 0], [10, 10]]]
  }
}
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cube_projector():
    """Factory projecting cube edges for a given (rot_y, rot_x)."""
    return project_cube_edges


@pytest.fixture
def loop_segments():
    """Factory building a closed loop of segments from coordinates."""
    return segments_from_loop
