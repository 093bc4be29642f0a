"""Configuration settings for Facetizer."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Output file format for extracted faces."""

    JSON = "json"
    SVG = "svg"


class ToleranceConfig(BaseModel):
    """Numeric tolerances used by the polygonization pipeline.

    All distances and areas are expressed in the units of the input
    coordinates (screen pixels for projected wireframes).
    """

    merge_epsilon: float = Field(
        default=1e-5,
        gt=0.0,
        le=1.0,
        description="Distance under which two points are the same arrangement vertex",
    )
    parallel_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        le=1e-2,
        description="Determinant magnitude under which two segments count as parallel",
    )
    param_tolerance: float = Field(
        default=1e-6,
        ge=0.0,
        le=1e-2,
        description="Slack around [0, 1] when accepting intersection parameters",
    )
    dedupe_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        le=1.0,
        description="Distance under which consecutive face vertices are merged",
    )
    collinear_epsilon: float = Field(
        default=1e-6,
        ge=0.0,
        le=1.0,
        description="Cross product magnitude under which a face vertex is collinear",
    )
    area_epsilon: float = Field(
        default=1.0,
        ge=0.0,
        description="Minimum absolute area of a face kept in the output",
    )


class TraceConfig(BaseModel):
    """Configuration for half-edge face tracing."""

    max_trace_steps: int | None = Field(
        default=None,
        ge=1,
        description="Abandon a single face walk after this many steps (None = unbounded)",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch scene processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    skip_empty: bool = Field(
        default=True,
        description="Skip scenes with fewer than three segments",
    )


class OutputConfig(BaseModel):
    """Configuration for face output files."""

    format: OutputFormat = Field(
        default=OutputFormat.JSON,
        description="Output file format",
    )
    precision: int = Field(
        default=6,
        ge=0,
        le=12,
        description="Decimal places written for coordinates",
    )
    svg_padding: float = Field(
        default=10.0,
        ge=0.0,
        description="Padding around the faces in SVG output",
    )
    svg_stroke: str = Field(
        default="#60a5fa",
        description="Stroke color for SVG faces",
    )
    svg_fill: str = Field(
        default="#93c5fd",
        description="Fill color for SVG faces",
    )
    svg_fill_opacity: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Fill opacity for SVG faces",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FacetizerSettings(BaseModel):
    """Main application settings."""

    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FacetizerSettings:
    """Get default application settings."""
    return FacetizerSettings()
