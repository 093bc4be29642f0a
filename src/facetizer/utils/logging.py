"""Logging utilities for Facetizer."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

# Handlers attached to the root logger by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    faces_found: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    scene_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_scene_time_ms(self) -> float | None:
        """Average per-scene processing time."""
        if not self.scene_timings_ms:
            return None
        return sum(self.scene_timings_ms) / len(self.scene_timings_ms)

    @property
    def min_scene_time_ms(self) -> float | None:
        """Fastest per-scene processing time."""
        return min(self.scene_timings_ms) if self.scene_timings_ms else None

    @property
    def max_scene_time_ms(self) -> float | None:
        """Slowest per-scene processing time."""
        return max(self.scene_timings_ms) if self.scene_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"facetizer_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.extend([file_handler, console_handler])

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("facetizer")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_scene_start(self, scene_name: str, segment_count: int) -> None:
        """Log start of scene processing."""
        self._logger.debug("Processing scene", scene=scene_name, segments=segment_count)

    def log_scene_complete(
        self,
        scene_name: str,
        faces_found: int,
        duration_ms: float,
    ) -> None:
        """Log successful scene processing."""
        self._logger.info(
            "Scene processed",
            scene=scene_name,
            faces=faces_found,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.faces_found += faces_found

    def log_scene_skipped(self, scene_name: str, reason: str) -> None:
        """Log skipped scene."""
        self._logger.debug("Scene skipped", scene=scene_name, reason=reason)
        self._stats.skipped_count += 1

    def log_scene_error(
        self,
        scene_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log scene processing error."""
        self._logger.error(
            "Scene processing failed",
            scene=scene_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((scene_name, str(error)))

    def log_arrangement(
        self,
        scene_name: str,
        vertex_count: int,
        half_edge_count: int,
    ) -> None:
        """Log arrangement size for a scene."""
        self._logger.debug(
            "Arrangement built",
            scene=scene_name,
            vertices=vertex_count,
            half_edges=half_edge_count,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
