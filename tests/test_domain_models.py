"""Tests for domain models to verify they work correctly."""

import pytest

from facetizer.domain import Point, Polygon, Scene, Segment, SplitPoint


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_distance_and_closeness(self) -> None:
        """Test Euclidean distance and proximity check."""
        a = Point(0.0, 0.0)
        b = Point(3.0, 4.0)
        assert a.distance_to(b) == pytest.approx(5.0)
        assert a.is_close(Point(0.0, 1e-6), 1e-5)
        assert not a.is_close(b, 5.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.5, -2.25)
        assert Point.from_dict(p1.to_dict()) == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestSegment:
    """Tests for Segment class."""

    def test_length(self) -> None:
        """Test segment length."""
        assert Segment.from_coords(0, 0, 3, 4).length == pytest.approx(5.0)

    def test_point_at(self) -> None:
        """Test parametric interpolation."""
        seg = Segment.from_coords(0, 0, 10, 20)
        assert seg.point_at(0.0) == Point(0.0, 0.0)
        assert seg.point_at(1.0) == Point(10.0, 20.0)
        assert seg.point_at(0.25) == Point(2.5, 5.0)

    def test_segment_serialization(self) -> None:
        """Test segment serialization and deserialization."""
        seg = Segment.from_coords(1, 2, 3, 4)
        assert Segment.from_dict(seg.to_dict()) == seg

    def test_split_point(self) -> None:
        """Test split point holds its parameter."""
        sp = SplitPoint(Point(1.0, 1.0), 0.5)
        assert sp.t == 0.5
        assert sp.point == Point(1.0, 1.0)


class TestPolygon:
    """Tests for Polygon class."""

    def test_signed_area_counterclockwise(self, square_polygon: Polygon) -> None:
        """Test signed area for counter-clockwise square."""
        assert square_polygon.signed_area() == pytest.approx(10000.0)
        assert square_polygon.area == pytest.approx(10000.0)

    def test_signed_area_clockwise(self) -> None:
        """Test signed area for clockwise square."""
        polygon = Polygon([Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0)])
        assert polygon.signed_area() == pytest.approx(-10000.0)
        assert polygon.area == pytest.approx(10000.0)

    def test_signed_area_degenerate(self) -> None:
        """Test that fewer than three vertices give zero area."""
        assert Polygon([Point(0, 0), Point(1, 1)]).signed_area() == 0.0

    def test_centroid(self, square_polygon: Polygon) -> None:
        """Test area-weighted centroid of a square."""
        c = square_polygon.centroid()
        assert c.x == pytest.approx(50.0)
        assert c.y == pytest.approx(50.0)

    def test_centroid_of_flat_polygon(self) -> None:
        """Test centroid falls back to the vertex mean for a flat polygon."""
        c = Polygon([Point(0, 0), Point(2, 0), Point(4, 0)]).centroid()
        assert c == Point(2.0, 0.0)

    def test_bounding_box(self, square_polygon: Polygon) -> None:
        """Test bounding box."""
        assert square_polygon.bounding_box() == (0, 0, 100, 100)

    def test_is_equivalent_rotation(self, square_polygon: Polygon) -> None:
        """Test equivalence under cyclic rotation."""
        rotated = Polygon(square_polygon.vertices[2:] + square_polygon.vertices[:2])
        assert square_polygon.is_equivalent(rotated)

    def test_is_equivalent_reversed(self, square_polygon: Polygon) -> None:
        """Test equivalence under reversal, unless disallowed."""
        reversed_polygon = Polygon(square_polygon.vertices[::-1])
        assert square_polygon.is_equivalent(reversed_polygon)
        assert not square_polygon.is_equivalent(reversed_polygon, allow_reversed=False)

    def test_is_equivalent_tolerance(self, square_polygon: Polygon) -> None:
        """Test equivalence respects the distance tolerance."""
        nudged = Polygon([Point(1e-7, 0)] + square_polygon.vertices[1:])
        assert square_polygon.is_equivalent(nudged, tolerance=1e-6)
        moved = Polygon([Point(1, 0)] + square_polygon.vertices[1:])
        assert not square_polygon.is_equivalent(moved, tolerance=1e-6)

    def test_polygon_serialization(self, square_polygon: Polygon) -> None:
        """Test polygon serialization and deserialization."""
        restored = Polygon.from_dict(square_polygon.to_dict())
        assert restored.vertices == square_polygon.vertices
        assert restored.to_coords() == [[0, 0], [100, 0], [100, 100], [0, 100]]


class TestScene:
    """Tests for Scene class."""

    def test_scene_empty(self) -> None:
        """Test that scenes with fewer than three segments are empty."""
        assert Scene("a", [Segment.from_coords(0, 0, 1, 1)]).is_empty()
        assert Scene("b").segment_count == 0

    def test_scene_serialization(self, square_segments: list[Segment]) -> None:
        """Test scene serialization and deserialization."""
        scene = Scene(name="square", segments=square_segments)
        restored = Scene.from_dict(scene.to_dict())
        assert restored.name == "square"
        assert restored.segments == square_segments
        assert not restored.is_empty()
