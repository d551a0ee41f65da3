"""
Exception types raised by the effectstats hypothesis tests.

Input problems derive from ``ValueError`` so that callers catching the
built-in error keep working.
"""

from __future__ import annotations

from typing import Optional


class EffectStatsError(Exception):
    """Base class for all effectstats errors."""


class ValidationError(EffectStatsError, ValueError):
    """Malformed test request: missing, contradictory or unknown arguments."""


class TooManyGroupsError(EffectStatsError, ValueError):
    """Grouping variable has more levels than the test supports."""

    def __init__(self, message: str, n_groups: int, alternative: Optional[str] = None):
        super().__init__(message)
        self.n_groups = n_groups
        self.alternative = alternative


class UnsupportedAlternativeError(EffectStatsError, ValueError):
    """Requested alternative hypothesis is not available for this test."""


class InsufficientDataError(EffectStatsError, ValueError):
    """Too few observations to compute the requested statistic."""


class NumericDegeneracyError(EffectStatsError, ArithmeticError):
    """Invalid effect size or degrees of freedom passed to a numeric routine."""
