"""Utility functions for facetizer.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics tracking
"""

from facetizer.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
