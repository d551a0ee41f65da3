"""
Effect size statistics and power for ANOVA tables.

Returns (partial) eta-squared, (partial) omega-squared, epsilon-squared
and Cohen's f for all terms of an ANOVA, plus the power of the F-test of
each term.

References
----------
Levine TR, Hullett CR (2002): Eta Squared, Partial Eta Squared, and
Misreporting of Effect Size in Communication Research.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.stats.anova import anova_lm

from config.settings import get_config
from effectstats.exceptions import NumericDegeneracyError, ValidationError

logger = logging.getLogger(__name__)

_INTERCEPT_NAMES = {
    "(intercept)",
    "intercept",
    "(intercept)_zi",
    "intercept (zero-inflated)",
    "zi_intercept",
    "b_intercept",
    "b_zi_intercept",
}

_COLUMN_NAMES = {
    "sum_sq": "sumsq",
    "mean_sq": "meansq",
    "F": "statistic",
    "PR(>F)": "p_value",
}

STATISTICS = ("eta", "peta", "omega", "pomega", "epsilon", "cohens_f")


def aov_stat_summary(model: Any) -> pd.DataFrame:
    """
    Build a tidy ANOVA table from a fitted model or an ANOVA data frame.

    Parameters
    ----------
    model : Any
        A fitted statsmodels OLS result, or an ANOVA table with at least
        ``df`` and ``sum_sq`` columns whose last row holds the residuals

    Returns
    -------
    pd.DataFrame
        Columns term, df, sumsq, meansq (and statistic, p_value when
        available), intercept rows removed
    """
    if isinstance(model, pd.DataFrame):
        table = model.copy()
    else:
        table = anova_lm(model)

    table = table.rename(columns=_COLUMN_NAMES)
    if "term" not in table.columns:
        table = table.rename_axis("term").reset_index()
    table["term"] = table["term"].astype(str)

    if "sumsq" not in table.columns:
        raise ValidationError(
            "Model object has no sums of squares. Cannot compute effect size statistic."
        )
    if "meansq" not in table.columns:
        table.insert(table.columns.get_loc("sumsq") + 1, "meansq", table["sumsq"] / table["df"])

    intercept = table["term"].str.lower().isin(_INTERCEPT_NAMES)
    return table[~intercept].reset_index(drop=True)


def aov_stat_core(summary: pd.DataFrame, statistic: str) -> pd.Series:
    """
    Compute one effect size statistic for every model term.

    Parameters
    ----------
    summary : pd.DataFrame
        Output of aov_stat_summary()
    statistic : str
        One of 'eta', 'peta', 'omega', 'pomega', 'epsilon', 'cohens_f'

    Returns
    -------
    pd.Series
        Statistic per term (residual row excluded)
    """
    if statistic not in STATISTICS:
        raise ValidationError(
            f"Unknown statistic {statistic!r}, must be one of {', '.join(STATISTICS)}."
        )

    terms = summary.iloc[:-1]
    ss_term = terms["sumsq"].to_numpy(dtype=float)
    df_term = terms["df"].to_numpy(dtype=float)
    ms_term = terms["meansq"].to_numpy(dtype=float)

    ms_resid = float(summary["meansq"].iloc[-1])
    ss_resid = float(summary["sumsq"].iloc[-1])
    ss_total = float(summary["sumsq"].sum())
    n_obs = float(summary["df"].sum()) + 1

    if statistic == "eta":
        values = ss_term / ss_total
    elif statistic == "omega":
        values = (ss_term - df_term * ms_resid) / (ss_total + ms_resid)
    elif statistic == "pomega":
        values = (df_term * (ms_term - ms_resid)) / (
            df_term * ms_term + (n_obs - df_term) * ms_resid
        )
    elif statistic == "epsilon":
        values = (ss_term - df_term * ms_resid) / ss_total
    else:
        values = ss_term / (ss_term + ss_resid)
        if statistic == "cohens_f":
            values = np.sqrt(values / (1 - values))

    return pd.Series(values, index=terms["term"].to_list(), name=statistic)


def calculate_power(
    df1: float,
    df2: float,
    effect_size: float,
    alpha: Optional[float] = None,
) -> float:
    """
    Power of an F-test given Cohen's f-squared.

    Parameters
    ----------
    df1 : float
        Numerator degrees of freedom
    df2 : float
        Denominator degrees of freedom
    effect_size : float
        Cohen's f squared
    alpha : Optional[float]
        Significance level. Uses the configured level if None.

    Returns
    -------
    float
        Power (probability of rejecting H0)

    Raises
    ------
    NumericDegeneracyError
        If the effect size is negative or a df is below 1
    """
    if alpha is None:
        alpha = get_config().statistics.power_alpha
    if not effect_size >= 0:
        raise NumericDegeneracyError(f"Effect size must be non-negative, got {effect_size}.")
    if not (df1 >= 1 and df2 >= 1):
        raise NumericDegeneracyError(
            f"Degrees of freedom must be at least 1, got df1 = {df1}, df2 = {df2}."
        )

    noncentrality = effect_size * (df1 + df2 + 1)
    critical = stats.f.isf(alpha, df1, df2)
    return float(stats.ncf.sf(critical, df1, df2, noncentrality))


def anova_stat(model: Any, statistic: str = "eta") -> pd.Series:
    """
    Compute a single effect size statistic for all terms of an ANOVA.

    Parameters
    ----------
    model : Any
        Fitted statsmodels OLS result or ANOVA table
    statistic : str, default="eta"
        One of 'eta', 'peta', 'omega', 'pomega', 'epsilon', 'cohens_f'

    Returns
    -------
    pd.Series
        Statistic per term
    """
    return aov_stat_core(aov_stat_summary(model), statistic)


def anova_stats(model: Any, digits: Optional[int] = None) -> pd.DataFrame:
    """
    Tidy summary of effect sizes and power for all terms of an ANOVA.

    Parameters
    ----------
    model : Any
        Fitted statsmodels OLS result or ANOVA table
    digits : Optional[int]
        Decimal places of the returned values. Uses the configured
        value if None.

    Returns
    -------
    pd.DataFrame
        One row per term plus the residual row, with columns etasq,
        partial_etasq, omegasq, partial_omegasq, epsilonsq, cohens_f,
        the ANOVA table columns and power

    Notes
    -----
    Power that cannot be computed for a term (negative effect size or
    degrees of freedom below 1) is reported as NaN for that term only.
    """
    if digits is None:
        digits = get_config().statistics.anova_digits

    summary = aov_stat_summary(model)
    columns = {
        "etasq": "eta",
        "partial_etasq": "peta",
        "omegasq": "omega",
        "partial_omegasq": "pomega",
        "epsilonsq": "epsilon",
        "cohens_f": "cohens_f",
    }
    effect_sizes = pd.DataFrame(
        {name: aov_stat_core(summary, statistic).to_numpy() for name, statistic in columns.items()}
    )
    # residual row has no effect size
    effect_sizes.loc[len(effect_sizes)] = np.nan

    out = pd.concat([summary[["term"]], effect_sizes, summary.drop(columns="term")], axis=1)

    df_resid = float(summary["df"].iloc[-1])
    power = []
    for term, df1, cohens_f in zip(out["term"].iloc[:-1], out["df"].iloc[:-1], out["cohens_f"].iloc[:-1]):
        try:
            power.append(calculate_power(df1, df_resid, cohens_f ** 2))
        except NumericDegeneracyError as e:
            logger.warning(f"Power for term '{term}' not available: {e}")
            power.append(np.nan)
    power.append(np.nan)
    out["power"] = power

    numeric = out.select_dtypes(include="number").columns
    out[numeric] = out[numeric].round(digits)
    return out
