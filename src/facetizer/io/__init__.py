"""Scene I/O layer for facetizer.

This module handles reading segment sets from scene files and writing the
extracted faces. It provides a clean abstraction layer between file formats
and the domain models.

Key classes:
- SceneReader: Load scene files and extract segment sets
- FacesWriter: Save extracted faces as JSON or SVG
"""

from facetizer.io.reader import SceneReader, parse_segment
from facetizer.io.writer import FacesWriter

__all__ = [
    "FacesWriter",
    "SceneReader",
    "parse_segment",
]
