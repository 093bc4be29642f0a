"""Parallel processing orchestration for scene files.

This module runs the polygonization pipeline over every scene of a scene file,
one scene per worker task, using ProcessPoolExecutor. Each worker builds its
own arrangement; nothing is shared between tasks.

Key components:
- process_scene: Top-level picklable function for parallel execution
- SceneProcessor: Main orchestrator class for scene files
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from facetizer.config import FacetizerSettings, ToleranceConfig
from facetizer.core.polygonizer import Polygonizer
from facetizer.domain import Polygon, Scene
from facetizer.exceptions import ProcessingCancelledError, SceneLoadError
from facetizer.io import FacesWriter, SceneReader
from facetizer.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_scene(
    scene_dict: dict[str, Any],
    tolerance_dict: dict[str, Any],
    max_trace_steps: int | None = None,
) -> dict[str, Any]:
    """Polygonize a single scene.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the scene, runs the pipeline, and returns the result.

    Args:
        scene_dict: Serialized scene (from Scene.to_dict())
        tolerance_dict: Serialized tolerance configuration
        max_trace_steps: Optional per-walk step limit for face tracing

    Returns:
        Dictionary containing either:
        - Success: {"name", "faces", "vertices", "half_edges", "duration_ms"}
        - Error: {"error": str, "scene_name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        scene = Scene.from_dict(scene_dict)
        polygonizer = Polygonizer(
            tolerances=ToleranceConfig(**tolerance_dict),
            max_trace_steps=max_trace_steps,
        )
        result = polygonizer.run(scene.segments)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "name": scene.name,
            "faces": [polygon.to_dict() for polygon in result.polygons],
            "vertices": len(result.arrangement.vertices),
            "half_edges": len(result.arrangement.half_edges),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "scene_name": scene_dict.get("name", "unknown"),
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class SceneProcessor:
    """Orchestrates parallel polygonization of a scene file.

    Manages the complete workflow:
    1. Load scene file
    2. Filter scenes that can enclose a region
    3. Polygonize scenes in parallel using worker processes
    4. Collect results and update statistics
    5. Save extracted faces

    Example:
        settings = FacetizerSettings()
        processor = SceneProcessor(settings)
        stats = processor.process(
            input_path=Path("wireframe.json"),
            output_path=Path("wireframe-faces.json"),
            max_workers=4
        )
    """

    def __init__(self, config: FacetizerSettings) -> None:
        """Initialize scene processor with configuration.

        Args:
            config: Facetizer settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process a scene file with parallel scene polygonization.

        Args:
            input_path: Path to the JSON scene file
            output_path: Path for the faces file (auto-generated if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, scene_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the scene file does not exist
            SceneLoadError: If the scene file cannot be read
            SceneFormatError: If the scene file content is invalid
            ProcessingCancelledError: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = FacesWriter.get_output_path(input_path, self.config.output.format)

        self.logger.info(
            "Starting scene processing",
            input=str(input_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        reader = SceneReader(input_path)
        try:
            reader.load()
        except FileNotFoundError:
            raise
        except OSError as e:
            raise SceneLoadError(str(input_path), str(e)) from e

        self.logger.info(
            "Scene file loaded",
            scenes=reader.scene_count,
            segments=reader.segment_count,
        )

        writer = FacesWriter(output_path, self.config.output)
        scenes_to_process: list[Scene] = []

        for scene in reader.iter_scenes():
            if self.config.processing.skip_empty and scene.is_empty():
                self.processing_logger.log_scene_skipped(scene.name, "fewer than 3 segments")
                writer.add(scene.name, [])
                continue
            scenes_to_process.append(scene)

        self.logger.info(
            "Filtered scenes",
            total=reader.scene_count,
            to_process=len(scenes_to_process),
            skipped=stats.skipped_count,
        )

        if scenes_to_process:
            faces = self._process_scenes_parallel(
                scenes=scenes_to_process,
                max_workers=max_workers,
                stats=stats,
                progress_callback=progress_callback,
            )
            for scene in scenes_to_process:
                if scene.name in faces:
                    writer.add(scene.name, faces[scene.name])
        else:
            self.logger.info("No scenes to process")

        writer.save()
        self.logger.info(
            "Faces saved",
            output=str(output_path),
            scenes=len(writer.scene_names),
        )

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            faces_found=stats.faces_found,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _process_scenes_parallel(
        self,
        scenes: list[Scene],
        max_workers: int | None,
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, list[Polygon]]:
        """Polygonize scenes in parallel using ProcessPoolExecutor.

        Args:
            scenes: Scenes to process
            max_workers: Maximum worker processes
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total, scene_name, success)

        Returns:
            Dictionary mapping scene names to their bounded faces

        Raises:
            ProcessingCancelledError: On KeyboardInterrupt, after cancelling pending tasks
        """
        results: dict[str, list[Polygon]] = {}

        tolerance_dict = self.config.tolerance.model_dump()
        max_trace_steps = self.config.trace.max_trace_steps

        self.logger.info(
            "Starting parallel processing",
            scene_count=len(scenes),
            max_workers=max_workers,
        )

        total = len(scenes)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for scene in scenes:
                self.processing_logger.log_scene_start(scene.name, scene.segment_count)
                future = executor.submit(
                    process_scene,
                    scene.to_dict(),
                    tolerance_dict,
                    max_trace_steps,
                )
                pending_futures[future] = scene.name

            try:
                for future in as_completed(pending_futures):
                    scene_name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_scene_error(
                                scene_name=result["scene_name"],
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            polygons = [Polygon.from_dict(f) for f in result["faces"]]
                            results[scene_name] = polygons

                            self.processing_logger.log_arrangement(
                                scene_name=scene_name,
                                vertex_count=result["vertices"],
                                half_edge_count=result["half_edges"],
                            )
                            duration_ms = result.get("duration_ms", 0.0)
                            self.processing_logger.log_scene_complete(
                                scene_name=scene_name,
                                faces_found=len(polygons),
                                duration_ms=duration_ms,
                            )
                            stats.scene_timings_ms.append(duration_ms)

                    except Exception as e:
                        # Executor-level error (worker crashed, pickling failed)
                        tb = traceback.format_exc()
                        self.processing_logger.log_scene_error(
                            scene_name=scene_name,
                            error=e,
                            traceback=tb,
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, scene_name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    processed_count=stats.processed_count,
                    pending_count=stats.cancelled_count,
                ) from None

        return results
