"""
Interpretation of effect sizes using Cohen's (1988) conventions.
"""

from __future__ import annotations

from config.settings import get_config

from .statistics import COHENS_D, HEDGES_G, RANK_BISERIAL_R


def interpret_cohens_d(d: float) -> str:
    """
    Interpret Cohen's d (or Hedges' g) using standard conventions.

    Parameters
    ----------
    d : float
        Cohen's d value

    Returns
    -------
    str
        Interpretation string
    """
    thresholds = get_config().statistics
    abs_d = abs(d)

    if abs_d < thresholds.small_effect_d:
        return "very small"
    elif abs_d < thresholds.medium_effect_d:
        return "small"
    elif abs_d < thresholds.large_effect_d:
        return "medium"
    else:
        return "large"


interpret_hedges_g = interpret_cohens_d


def interpret_r(r: float) -> str:
    """
    Interpret the rank-based effect size r.

    Parameters
    ----------
    r : float
        Effect size r = |Z| / sqrt(N)

    Returns
    -------
    str
        Interpretation string
    """
    thresholds = get_config().statistics
    abs_r = abs(r)

    if abs_r < thresholds.small_effect_r:
        return "very small"
    elif abs_r < thresholds.medium_effect_r:
        return "small"
    elif abs_r < thresholds.large_effect_r:
        return "medium"
    else:
        return "large"


def interpret_effect_size(value: float, name: str) -> str:
    """Interpret an effect size given its display name."""
    if name in (COHENS_D, HEDGES_G):
        return interpret_cohens_d(value)
    if name == RANK_BISERIAL_R:
        return interpret_r(value)
    raise ValueError(f"Unknown effect size: {name}")
