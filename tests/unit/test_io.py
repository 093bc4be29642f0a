"""Unit tests for the scene I/O layer.

Tests for SceneReader, FacesWriter, and segment parsing.
"""

import json
from pathlib import Path

import pytest

from facetizer.config import OutputConfig, OutputFormat
from facetizer.domain import Point, Polygon, Segment
from facetizer.exceptions import SceneFormatError, SceneSaveError
from facetizer.io.reader import SceneReader, parse_segment
from facetizer.io.writer import FacesWriter


class TestParseSegment:
    """Tests for parse_segment."""

    def test_coordinate_pairs(self):
        """A pair of [x, y] lists is a segment."""
        assert parse_segment([[0, 1], [2, 3]]) == Segment.from_coords(0, 1, 2, 3)

    def test_object_form(self):
        """start/end objects with x/y keys are a segment."""
        raw = {"start": {"x": 0, "y": 1}, "end": {"x": 2, "y": 3}}
        assert parse_segment(raw) == Segment.from_coords(0, 1, 2, 3)

    def test_invalid(self):
        """Anything else is rejected."""
        with pytest.raises(ValueError):
            parse_segment([1, 2, 3])
        with pytest.raises(ValueError):
            parse_segment([[0, 1, 2], [2, 3]])

    def test_non_finite_point(self):
        """Infinite or NaN coordinates are not a segment."""
        with pytest.raises(ValueError, match="finite"):
            parse_segment([[0, 0], [float("inf"), 1]])
        with pytest.raises(ValueError, match="finite"):
            parse_segment({"start": {"x": float("nan"), "y": 0}, "end": {"x": 1, "y": 1}})


class TestSceneReader:
    """Tests for SceneReader class."""

    def test_init(self):
        """Test SceneReader initialization."""
        path = Path("scene.json")
        reader = SceneReader(path)
        assert reader._scene_path == path
        assert reader._scenes is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = SceneReader(Path("nonexistent.json"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_access_before_load(self):
        """Test accessing data before loading raises RuntimeError."""
        reader = SceneReader(Path("scene.json"))
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = reader.scene_count
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = reader.segment_count
        with pytest.raises(RuntimeError, match="not loaded"):
            list(reader.iter_scenes())

    def test_load_named_scenes(self, scene_file: Path):
        """Named scenes keep file order and accept both body layouts."""
        reader = SceneReader(scene_file)
        reader.load()
        assert reader.scene_count == 3
        assert reader.segment_count == 10
        assert [s.name for s in reader.iter_scenes()] == ["square", "split_square", "lonely"]
        assert reader.get_scene("split_square").segment_count == 5
        assert reader.get_scene("missing") is None

    def test_load_bare_list(self, tmp_path: Path):
        """A bare list becomes a single default scene."""
        path = tmp_path / "bare.json"
        path.write_text(json.dumps([[[0, 0], [1, 1]], [[1, 1], [2, 0]]]), encoding="utf-8")
        reader = SceneReader(path)
        reader.load()
        scenes = list(reader.iter_scenes())
        assert len(scenes) == 1
        assert scenes[0].name == "scene"
        assert scenes[0].segments[1] == Segment(Point(1, 1), Point(2, 0))

    def test_load_single_scene_object(self, tmp_path: Path):
        """An object with 'segments' becomes one scene, named if given."""
        path = tmp_path / "single.json"
        path.write_text(
            json.dumps({"name": "cube", "segments": [[[0, 0], [1, 1]]]}), encoding="utf-8"
        )
        reader = SceneReader(path)
        reader.load()
        assert [s.name for s in reader.iter_scenes()] == ["cube"]

    def test_invalid_json(self, tmp_path: Path):
        """Malformed JSON raises SceneFormatError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SceneFormatError, match="invalid JSON"):
            SceneReader(path).load()

    def test_non_utf8_content(self, tmp_path: Path):
        """Bytes that are not UTF-8 raise SceneFormatError."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"[[[0, 0], [1, 1]]] \xff\xfe")
        with pytest.raises(SceneFormatError, match="UTF-8"):
            SceneReader(path).load()

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_coordinates(self, tmp_path: Path, value: str):
        """NaN and infinite coordinates are rejected at load time."""
        path = tmp_path / "nonfinite.json"
        path.write_text(
            f"[[[0, 0], [1, 1]], [[0, 0], [{value}, 1]], [[1, 1], [2, 0]]]",
            encoding="utf-8",
        )
        with pytest.raises(SceneFormatError, match="segment 1.*finite"):
            SceneReader(path).load()

    def test_unknown_layout(self, tmp_path: Path):
        """Objects without segments or scenes are rejected."""
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"lines": []}), encoding="utf-8")
        with pytest.raises(SceneFormatError):
            SceneReader(path).load()

    def test_bad_segment_reports_position(self, tmp_path: Path):
        """A malformed segment names its scene and index."""
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"scenes": {"a": [[[0, 0], [1, 1]], [[0, 0]]]}}), encoding="utf-8"
        )
        with pytest.raises(SceneFormatError, match="scene 'a', segment 1"):
            SceneReader(path).load()


class TestFacesWriter:
    """Tests for FacesWriter class."""

    @pytest.fixture
    def triangle(self) -> Polygon:
        return Polygon([Point(0.0, 0.0), Point(10.0, 0.0), Point(0.0, 10.1234567)])

    def test_get_output_path(self):
        """Test output path generation."""
        assert FacesWriter.get_output_path(Path("/data/cube.json")) == Path(
            "/data/cube-faces.json"
        )
        assert FacesWriter.get_output_path(Path("cube.json"), OutputFormat.SVG) == Path(
            "cube-faces.svg"
        )

    def test_save_json(self, tmp_path: Path, triangle: Polygon):
        """JSON output lists faces per scene with rounded coordinates."""
        output = tmp_path / "out.json"
        writer = FacesWriter(output, OutputConfig(precision=3))
        writer.add("tri", [triangle])
        writer.add("none", [])
        writer.save()

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["scenes"]["tri"]["count"] == 1
        assert data["scenes"]["tri"]["faces"] == [[[0, 0], [10, 0], [0, 10.123]]]
        assert data["scenes"]["none"] == {"count": 0, "faces": []}
        assert writer.scene_names == ["tri", "none"]

    def test_save_svg(self, tmp_path: Path, triangle: Polygon):
        """SVG output has one group per scene and one polygon per face."""
        output = tmp_path / "out.svg"
        writer = FacesWriter(output, OutputConfig(format=OutputFormat.SVG, svg_padding=5))
        writer.add("tri", [triangle, triangle])
        writer.save()

        svg = output.read_text(encoding="utf-8")
        assert svg.startswith("<svg")
        assert 'id="tri"' in svg
        assert svg.count("<polygon") == 2
        assert 'viewBox="-5.0 -5.0 20.0 20.12' in svg

    def test_svg_without_faces(self):
        """An empty SVG still has a valid root element."""
        writer = FacesWriter(Path("unused.svg"), OutputConfig(format=OutputFormat.SVG))
        svg = writer.to_svg()
        assert svg.startswith("<svg") and svg.rstrip().endswith("</svg>")

    def test_save_creates_parent_directory(self, tmp_path: Path, triangle: Polygon):
        """Missing parent directories are created."""
        output = tmp_path / "nested" / "dir" / "out.json"
        writer = FacesWriter(output)
        writer.add("tri", [triangle])
        writer.save()
        assert output.exists()

    def test_save_failure(self, tmp_path: Path):
        """Write failures surface as SceneSaveError."""
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        writer = FacesWriter(blocker / "out.json")
        with pytest.raises(SceneSaveError):
            writer.save()
