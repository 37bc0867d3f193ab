"""Utility functions for sdfatlas.

This module provides utility functions including:

- Logging setup and configuration
- Progress statistics
- Number rounding and formatting shared by the shape builder and writers
"""

from sdfatlas.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)
from sdfatlas.utils.numbers import (
    format_number,
    js_round,
    round_all_values,
    round_number,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
    "format_number",
    "js_round",
    "round_all_values",
    "round_number",
]
