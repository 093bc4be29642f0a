"""Configuration management for facetizer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ToleranceConfig: Numeric tolerances for the polygonization pipeline
- TraceConfig: Face tracing limits
- ProcessingConfig: Batch processing settings
- OutputConfig: Output file settings
- LoggingConfig: Logging settings
- FacetizerSettings: Main application settings
"""

from facetizer.config.settings import (
    FacetizerSettings,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    ProcessingConfig,
    ToleranceConfig,
    TraceConfig,
    get_default_settings,
)

__all__ = [
    "FacetizerSettings",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "ProcessingConfig",
    "ToleranceConfig",
    "TraceConfig",
    "get_default_settings",
]
