"""Scene reader for loading segment sets from JSON.

This module provides the SceneReader class for loading scene files and
converting their content into domain models.

Accepted layouts:
- A bare list of segments: ``[[[x1, y1], [x2, y2]], ...]``
- A single scene object: ``{"segments": [...]}``
- Named scenes: ``{"scenes": {"front": [...], "tilted": {"segments": [...]}}}``

A segment is either a pair of ``[x, y]`` coordinates or an object
``{"start": {"x": .., "y": ..}, "end": {"x": .., "y": ..}}``.
"""

import json
import math
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from facetizer.domain import Point, Scene, Segment
from facetizer.exceptions import SceneFormatError

DEFAULT_SCENE_NAME = "scene"


def _parse_point(raw: Any) -> Point:
    if isinstance(raw, dict):
        x, y = float(raw["x"]), float(raw["y"])
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        x, y = float(raw[0]), float(raw[1])
    else:
        raise ValueError(f"expected [x, y] or {{'x', 'y'}}, got {raw!r}")
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"coordinates must be finite, got ({x}, {y})")
    return Point(x, y)


def parse_segment(raw: Any) -> Segment:
    """Parse one segment from its JSON representation.

    Raises:
        ValueError: If the value is not a recognised segment layout
    """
    if isinstance(raw, dict):
        return Segment(_parse_point(raw["start"]), _parse_point(raw["end"]))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Segment(_parse_point(raw[0]), _parse_point(raw[1]))
    raise ValueError(f"expected a pair of points, got {raw!r}")


class SceneReader:
    """Loads scene files and extracts segment sets.

    Example:
        reader = SceneReader(Path("wireframe.json"))
        reader.load()
        for scene in reader.iter_scenes():
            print(scene.name, scene.segment_count)
    """

    def __init__(self, scene_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the JSON scene file
        """
        self._scene_path = scene_path
        self._scenes: list[Scene] | None = None

    def load(self) -> None:
        """Load and parse the scene file.

        Raises:
            FileNotFoundError: If scene file does not exist
            SceneFormatError: If the content is not valid scene JSON
        """
        if not self._scene_path.exists():
            raise FileNotFoundError(f"Scene file not found: {self._scene_path}")

        try:
            data = json.loads(self._scene_path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise SceneFormatError(str(self._scene_path), f"not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise SceneFormatError(str(self._scene_path), f"invalid JSON: {e}") from e

        self._scenes = self._parse(data)

    def _parse(self, data: Any) -> list[Scene]:
        if isinstance(data, list):
            return [self._parse_scene(DEFAULT_SCENE_NAME, data)]

        if not isinstance(data, dict):
            raise SceneFormatError(
                str(self._scene_path), f"expected a list or object, got {type(data).__name__}"
            )

        if "scenes" in data:
            scenes = data["scenes"]
            if not isinstance(scenes, dict):
                raise SceneFormatError(str(self._scene_path), "'scenes' must be an object")
            return [self._parse_scene(str(name), body) for name, body in scenes.items()]

        if "segments" in data:
            return [self._parse_scene(str(data.get("name", DEFAULT_SCENE_NAME)), data)]

        raise SceneFormatError(
            str(self._scene_path), "expected a 'segments' or 'scenes' key"
        )

    def _parse_scene(self, name: str, body: Any) -> Scene:
        raw_segments = body.get("segments") if isinstance(body, dict) else body
        if not isinstance(raw_segments, list):
            raise SceneFormatError(
                str(self._scene_path), f"scene '{name}' has no segment list"
            )

        segments: list[Segment] = []
        for idx, raw in enumerate(raw_segments):
            try:
                segments.append(parse_segment(raw))
            except (KeyError, TypeError, ValueError) as e:
                raise SceneFormatError(
                    str(self._scene_path), f"scene '{name}', segment {idx}: {e}"
                ) from e
        return Scene(name=name, segments=segments)

    def _require_loaded(self) -> list[Scene]:
        if self._scenes is None:
            raise RuntimeError("Scene file not loaded. Call load() first.")
        return self._scenes

    @property
    def scene_count(self) -> int:
        """Return number of scenes in the file.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        return len(self._require_loaded())

    @property
    def segment_count(self) -> int:
        """Return total number of segments across all scenes.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        return sum(scene.segment_count for scene in self._require_loaded())

    def iter_scenes(self) -> Iterator[Scene]:
        """Iterate over scenes in file order.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        yield from self._require_loaded()

    def get_scene(self, name: str) -> Scene | None:
        """Return the scene with the given name, or None."""
        for scene in self._require_loaded():
            if scene.name == name:
                return scene
        return None
