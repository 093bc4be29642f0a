"""Command-line interface for facetizer.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for scene processing
- Verbose/quiet output modes
- Dry-run mode for inspecting crossings
- JSON or SVG output
"""

from facetizer.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
