"""CLI application entry point for facetizer.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from facetizer import __version__
from facetizer.cli.output import (
    SYM_DOT,
    SYM_OK,
    console,
    create_progress,
    print_cancellation_summary,
    print_dry_run_table,
    print_error,
    print_header,
    print_processing_info,
    print_scene_file_info,
    print_step,
    print_success,
)
from facetizer.config import (
    FacetizerSettings,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    ProcessingConfig,
    ToleranceConfig,
    TraceConfig,
)
from facetizer.core import Polygonizer, SceneProcessor
from facetizer.exceptions import (
    FacetizerError,
    ProcessingCancelledError,
    SceneFormatError,
    SceneLoadError,
    SceneSaveError,
)
from facetizer.io import FacesWriter, SceneReader

app = typer.Typer(
    name="facetizer",
    help="Extract the bounded faces of a planar line-segment arrangement.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Facetizer[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def facetize(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input JSON scene file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-faces.{format})",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format (json|svg)",
        ),
    ] = "json",
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    area_epsilon: Annotated[
        float,
        typer.Option(
            "--area-epsilon",
            help="Minimum absolute face area kept in the output",
            min=0.0,
        ),
    ] = 1.0,
    merge_epsilon: Annotated[
        float,
        typer.Option(
            "--merge-epsilon",
            help="Distance under which points become the same vertex",
        ),
    ] = 1e-5,
    max_trace_steps: Annotated[
        int | None,
        typer.Option(
            "--max-trace-steps",
            help="Abandon a face walk after this many steps",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Report segment and crossing counts without writing output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compute the bounded faces formed by the segments of each scene.

    The input is a JSON scene file holding one or more segment sets, for
    example the projected edges of a wireframe. Every region enclosed by the
    segments is written out as a polygon.

    Example:
        facetizer cube.json

    This will create cube-faces.json with the bounded faces of every scene.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a JSON scene file.",
        )
        raise typer.Exit(code=1)

    try:
        fmt = OutputFormat(output_format.lower())
    except ValueError:
        print_error(
            f"Invalid format: {output_format}",
            details="Valid values: json, svg",
        )
        raise typer.Exit(code=1)

    try:
        settings = FacetizerSettings(
            tolerance=ToleranceConfig(
                area_epsilon=area_epsilon,
                merge_epsilon=merge_epsilon,
            ),
            trace=TraceConfig(max_trace_steps=max_trace_steps),
            processing=ProcessingConfig(max_workers=workers),
            output=OutputConfig(format=fmt),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )
    except ValidationError as e:
        print_error("Invalid settings", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading scenes")

        reader = SceneReader(input_file)
        try:
            reader.load()
        except OSError as e:
            raise SceneLoadError(str(input_file), str(e)) from e

        if not quiet:
            print_scene_file_info(
                path=str(input_file),
                scene_count=reader.scene_count,
                segment_count=reader.segment_count,
            )
            if verbose:
                names = ", ".join(scene.name for scene in reader.iter_scenes())
                console.print(f"  {names}")

        if dry_run:
            _handle_dry_run(reader, settings, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Polygonizing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        actual_output_path = output or FacesWriter.get_output_path(input_file, fmt)
        processor = SceneProcessor(settings)

        if not quiet:
            with create_progress() as progress:
                scene_total = _count_scenes_to_process(reader, settings)
                task_id = progress.add_task(
                    f"Processing {scene_total} scenes",
                    total=scene_total,
                )

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = processor.process(
                    input_path=input_file,
                    output_path=actual_output_path,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            stats = processor.process(
                input_path=input_file,
                output_path=actual_output_path,
                max_workers=workers,
            )

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                faces=stats.faces_found,
                errors=stats.error_count,
                avg_time_ms=stats.avg_scene_time_ms,
                min_time_ms=stats.min_scene_time_ms,
                max_time_ms=stats.max_scene_time_ms,
            )

        if stats.error_count > 0:
            raise typer.Exit(code=1)

    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_summary(
                processed=e.processed_count,
                cancelled=e.pending_count,
            )
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except SceneLoadError as e:
        print_error(f"Could not load scenes: {e.reason}")
        raise typer.Exit(code=1)
    except SceneFormatError as e:
        print_error(f"Invalid scene file: {e.details}")
        raise typer.Exit(code=1)
    except SceneSaveError as e:
        print_error(f"Could not save faces: {e.reason}")
        raise typer.Exit(code=1)
    except FacetizerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _count_scenes_to_process(reader: SceneReader, settings: FacetizerSettings) -> int:
    """Number of scenes that will reach a worker (skipped scenes excluded)."""
    if not settings.processing.skip_empty:
        return reader.scene_count
    return sum(1 for scene in reader.iter_scenes() if not scene.is_empty())


def _handle_dry_run(reader: SceneReader, settings: FacetizerSettings, quiet: bool) -> None:
    """Handle --dry-run mode.

    Args:
        reader: Loaded scene reader
        settings: Facetizer settings
        quiet: Suppress output
    """
    polygonizer = Polygonizer(settings.tolerance)
    rows = [
        (scene.name, scene.segment_count, polygonizer.count_crossings(scene.segments))
        for scene in reader.iter_scenes()
    ]

    if quiet:
        return

    print_step("Analyzing (dry run)")
    console.print()
    print_dry_run_table(rows)
    total_crossings = sum(crossings for _, _, crossings in rows)
    console.print(f"\n  {len(rows)} scenes {SYM_DOT} {total_crossings} crossings")
    console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] – no output written")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
