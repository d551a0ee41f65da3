"""
Utility helper functions for the effectstats package.
"""

from __future__ import annotations

import difflib
import logging
from typing import Iterable, Optional

import numpy as np

from config.settings import get_config

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for scripts and notebooks using effectstats.

    Parameters
    ----------
    level : Optional[str]
        Log level name. Uses the configured level if None.
    """
    log_config = get_config().logging
    logging.basicConfig(
        level=(level or log_config.level).upper(),
        format=log_config.format,
    )


def closest_match(candidates: Iterable[str], name: str) -> Optional[str]:
    """
    Find the candidate string most similar to ``name``.

    Parameters
    ----------
    candidates : Iterable[str]
        Strings to choose from (e.g. column names)
    name : str
        The misspelled string

    Returns
    -------
    Optional[str]
        Closest candidate, or None if there are no candidates
    """
    matches = difflib.get_close_matches(
        str(name), [str(c) for c in candidates], n=1, cutoff=0.0
    )
    return matches[0] if matches else None


def format_pvalue(p: float) -> str:
    """
    Format p-value according to APA guidelines.

    Parameters
    ----------
    p : float
        P-value

    Returns
    -------
    str
        Formatted p-value string
    """
    if np.isnan(p):
        return "p = NA"
    if p < 0.001:
        return "p < .001"
    elif p < 0.01:
        return f"p = {p:.3f}"
    else:
        return f"p = {p:.2f}"


def format_value(value: float, digits: int = 2) -> str:
    """
    Format a number for printing, keeping whole numbers without decimals.

    Parameters
    ----------
    value : float
        Number to format
    digits : int
        Decimal places for non-integer values

    Returns
    -------
    str
        Formatted number
    """
    if value is None or np.isnan(value):
        return "NA"
    if np.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:.{digits}f}"
