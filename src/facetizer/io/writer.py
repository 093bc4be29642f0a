"""Faces writer for saving extracted polygons.

This module provides the FacesWriter class for writing the bounded faces of
one or more scenes as JSON or SVG.
"""

import json
from pathlib import Path
from xml.sax.saxutils import quoteattr

from facetizer.config import OutputConfig, OutputFormat
from facetizer.domain import Polygon
from facetizer.exceptions import SceneSaveError

OUTPUT_SUFFIX = "-faces"


class FacesWriter:
    """Collects per-scene faces and writes them to a single file.

    Example:
        writer = FacesWriter(Path("wireframe-faces.json"))
        writer.add("front", polygons)
        writer.save()
    """

    def __init__(self, output_path: Path, config: OutputConfig | None = None) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file
            config: Output settings (defaults if None)
        """
        self._output_path = output_path
        self._config = config or OutputConfig()
        self._scenes: dict[str, list[Polygon]] = {}

    @staticmethod
    def get_output_path(input_path: Path, output_format: OutputFormat = OutputFormat.JSON) -> Path:
        """Generate the default output path for an input scene file.

        Args:
            input_path: Path to the scene file

        Returns:
            Path with '-faces' suffix and the format's extension

        Example:
            >>> FacesWriter.get_output_path(Path("cube.json"))
            PosixPath('cube-faces.json')
        """
        return input_path.parent / f"{input_path.stem}{OUTPUT_SUFFIX}.{output_format.value}"

    @property
    def scene_names(self) -> list[str]:
        """Names of the scenes added so far, in insertion order."""
        return list(self._scenes)

    def add(self, scene_name: str, polygons: list[Polygon]) -> None:
        """Add (or replace) the faces of a scene."""
        self._scenes[scene_name] = list(polygons)

    def _round(self, value: float) -> float:
        return round(value, self._config.precision)

    def to_json_data(self) -> dict:
        """Build the JSON document for all added scenes."""
        return {
            "scenes": {
                name: {
                    "count": len(polygons),
                    "faces": [
                        [[self._round(p.x), self._round(p.y)] for p in polygon.vertices]
                        for polygon in polygons
                    ],
                }
                for name, polygons in self._scenes.items()
            }
        }

    def to_svg(self) -> str:
        """Render all added scenes as an SVG document.

        Each scene becomes a ``<g>`` element holding one ``<polygon>`` per face.
        The viewBox spans every face plus the configured padding.
        """
        cfg = self._config
        all_points = [p for polys in self._scenes.values() for poly in polys for p in poly.vertices]
        if all_points:
            min_x = min(p.x for p in all_points) - cfg.svg_padding
            min_y = min(p.y for p in all_points) - cfg.svg_padding
            width = max(p.x for p in all_points) + cfg.svg_padding - min_x
            height = max(p.y for p in all_points) + cfg.svg_padding - min_y
        else:
            min_x = min_y = 0.0
            width = height = 2 * cfg.svg_padding or 1.0

        lines = [
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'viewBox="{self._round(min_x)} {self._round(min_y)} '
            f'{self._round(width)} {self._round(height)}">'
        ]
        for name, polygons in self._scenes.items():
            lines.append(
                f"  <g id={quoteattr(name)} fill={quoteattr(cfg.svg_fill)} "
                f'fill-opacity="{cfg.svg_fill_opacity}" stroke={quoteattr(cfg.svg_stroke)}>'
            )
            for polygon in polygons:
                points = " ".join(
                    f"{self._round(p.x)},{self._round(p.y)}" for p in polygon.vertices
                )
                lines.append(f'    <polygon points="{points}"/>')
            lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def save(self) -> None:
        """Write the collected faces in the configured format.

        Raises:
            SceneSaveError: If the file cannot be written
        """
        if self._config.format == OutputFormat.SVG:
            content = self.to_svg()
        else:
            content = json.dumps(self.to_json_data(), indent=2) + "\n"

        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SceneSaveError(str(self._output_path), str(e)) from e
