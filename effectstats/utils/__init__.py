"""
Utility functions for the effectstats package.
"""

from .helpers import (
    closest_match,
    configure_logging,
    format_pvalue,
    format_value,
)

__all__ = [
    "closest_match",
    "configure_logging",
    "format_pvalue",
    "format_value",
]
