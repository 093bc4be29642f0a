"""Facetizer - Extract bounded faces from planar line-segment arrangements.

Facetizer takes an arbitrary set of 2D line segments (for example the projected
edges of a wireframe), computes the planar arrangement they induce, and returns
every bounded polygonal face of that arrangement.

Example:
    $ facetizer wireframe.json

This will create wireframe-faces.json with the bounded faces of every scene
in the input file.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
