"""
Core statistical building blocks for the effectstats hypothesis tests.

This module provides the numeric routines shared by the t-test and
Mann-Whitney engines:
- Weighted means and weighted standard deviations
- Cohen's d and Hedges' g, and the sample-size rule choosing between them
- Student-t p-values for a given alternative
- Permutation moments of the Wilcoxon linear rank statistic
- A design-based (survey-weighted) Wilcoxon rank test
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import statsmodels.api as sm
from scipy import stats
from scipy.special import gammaln

from config.settings import get_config
from effectstats.exceptions import InsufficientDataError

logger = logging.getLogger(__name__)

COHENS_D = "Cohen's d"
HEDGES_G = "Hedges' g"
RANK_BISERIAL_R = "rank-biserial r"


def weighted_mean(values: np.ndarray, weights: np.ndarray) -> float:
    """
    Compute the weighted arithmetic mean.

    Parameters
    ----------
    values : np.ndarray
        Observations
    weights : np.ndarray
        Non-negative weights, same length as ``values``

    Returns
    -------
    float
        Weighted mean
    """
    values = np.asarray(values, dtype=float)
    weights = np.asarray(weights, dtype=float)
    if weights.sum() <= 0:
        raise InsufficientDataError("Weights must not sum to zero.")
    return float(np.average(values, weights=weights))


def weighted_sd(values: np.ndarray, weights: np.ndarray) -> float:
    """
    Compute the unbiased weighted standard deviation.

    Weights are normalized to sum to one and the variance is corrected
    by ``1 - sum(w^2)``, so equal weights give the ordinary sample SD.

    Parameters
    ----------
    values : np.ndarray
        Observations
    weights : np.ndarray
        Non-negative weights, same length as ``values``

    Returns
    -------
    float
        Weighted standard deviation
    """
    values = np.asarray(values, dtype=float)
    weights = np.asarray(weights, dtype=float)
    if weights.sum() <= 0:
        raise InsufficientDataError("Weights must not sum to zero.")

    normalized = weights / weights.sum()
    center = np.sum(normalized * values)
    correction = 1 - np.sum(normalized ** 2)
    if correction <= 0:
        raise InsufficientDataError(
            "Weighted standard deviation needs at least two observations with positive weight."
        )
    variance = np.sum(normalized * (values - center) ** 2) / correction
    return float(np.sqrt(variance))


def compute_cohens_d(
    group1: np.ndarray,
    group2: Optional[np.ndarray] = None,
    mu: float = 0.0,
) -> float:
    """
    Compute Cohen's d for one sample or two independent samples.

    Parameters
    ----------
    group1 : np.ndarray
        First sample
    group2 : Optional[np.ndarray]
        Second sample. If None, a one-sample d against ``mu`` is returned.
    mu : float, default=0.0
        Null value (mean for one sample, difference in means for two)

    Returns
    -------
    float
        Cohen's d effect size

    Notes
    -----
    Two-sample d uses the pooled standard deviation
    sqrt(((n1 - 1) * s1^2 + (n2 - 1) * s2^2) / (n1 + n2 - 2)).
    """
    group1 = np.asarray(group1, dtype=float)
    mean1 = float(np.mean(group1))

    if group2 is None:
        difference = mean1 - mu
        std = float(np.std(group1, ddof=1))
    else:
        group2 = np.asarray(group2, dtype=float)
        n1, n2 = len(group1), len(group2)
        difference = mean1 - float(np.mean(group2)) - mu
        var1 = float(np.var(group1, ddof=1))
        var2 = float(np.var(group2, ddof=1))
        std = np.sqrt(((n1 - 1) * var1 + (n2 - 1) * var2) / (n1 + n2 - 2))

    if std == 0:
        return 0.0 if difference == 0 else np.inf * np.sign(difference)
    return difference / std


def hedges_correction(df: float) -> float:
    """Exact small-sample bias correction factor J(df) for Cohen's d."""
    return float(np.exp(gammaln(df / 2) - np.log(np.sqrt(df / 2)) - gammaln((df - 1) / 2)))


def compute_hedges_g(
    group1: np.ndarray,
    group2: Optional[np.ndarray] = None,
    mu: float = 0.0,
) -> float:
    """
    Compute Hedges' g (bias-corrected Cohen's d).

    Parameters
    ----------
    group1 : np.ndarray
        First sample
    group2 : Optional[np.ndarray]
        Second sample. If None, a one-sample g against ``mu`` is returned.
    mu : float, default=0.0
        Null value

    Returns
    -------
    float
        Hedges' g effect size
    """
    if group2 is None:
        df = len(group1) - 1
    else:
        df = len(group1) + len(group2) - 2
    return compute_cohens_d(group1, group2, mu=mu) * hedges_correction(df)


def select_effect_size(
    group1: np.ndarray,
    group2: Optional[np.ndarray] = None,
    mu: float = 0.0,
) -> Tuple[str, float]:
    """
    Compute Cohen's d for large samples and Hedges' g for small ones.

    Parameters
    ----------
    group1 : np.ndarray
        First sample
    group2 : Optional[np.ndarray]
        Second sample, or None for a one-sample effect size
    mu : float, default=0.0
        Null value

    Returns
    -------
    Tuple[str, float]
        (effect_size_name, effect_size)
    """
    threshold = get_config().statistics.large_sample_threshold
    total_n = len(group1) + (0 if group2 is None else len(group2))

    if total_n > threshold:
        logger.debug(f"n = {total_n} > {threshold}, using Cohen's d")
        return COHENS_D, float(compute_cohens_d(group1, group2, mu=mu))

    logger.debug(f"n = {total_n} <= {threshold}, using Hedges' g")
    return HEDGES_G, float(compute_hedges_g(group1, group2, mu=mu))


def t_pvalue(statistic: float, df: float, alternative: str = "two-sided") -> float:
    """
    P-value of a t statistic.

    Parameters
    ----------
    statistic : float
        Observed t statistic
    df : float
        Degrees of freedom (may be fractional)
    alternative : str
        'two-sided', 'less' or 'greater'

    Returns
    -------
    float
        P-value
    """
    if alternative == "less":
        return float(stats.t.cdf(statistic, df))
    elif alternative == "greater":
        return float(stats.t.sf(statistic, df))
    return float(2 * stats.t.cdf(-abs(statistic), df))


def linear_rank_statistic(group1: np.ndarray, group2: np.ndarray) -> Tuple[float, float]:
    """
    Wilcoxon linear rank statistic and its standardized form.

    The statistic is the sum of the pooled mid-ranks of ``group1``. It is
    standardized with its exact permutation mean and variance, which
    account for ties.

    Parameters
    ----------
    group1 : np.ndarray
        First sample
    group2 : np.ndarray
        Second sample

    Returns
    -------
    Tuple[float, float]
        (linear_statistic, z)
    """
    group1 = np.asarray(group1, dtype=float)
    group2 = np.asarray(group2, dtype=float)
    n1, n2 = len(group1), len(group2)
    n = n1 + n2

    ranks = stats.rankdata(np.concatenate([group1, group2]))
    linear = float(np.sum(ranks[:n1]))

    expected = n1 * (n + 1) / 2
    variance = n1 * n2 / (n * (n - 1)) * np.sum((ranks - (n + 1) / 2) ** 2)
    if variance == 0:
        return linear, np.nan
    return linear, float((linear - expected) / np.sqrt(variance))


def survey_rank_test(
    values: np.ndarray,
    in_group2: np.ndarray,
    weights: np.ndarray,
) -> Tuple[float, float, float, float]:
    """
    Design-based Wilcoxon rank test for weighted data.

    Ranks are estimated population mid-rank proportions: the cumulative
    weight up to each observation minus half its own weight, averaged
    within ties and divided by the total weight. The difference in mean
    rank between groups is estimated by weighted least squares, and its
    standard error comes from the linearized influence functions under
    a single-stage, with-replacement design (each row is its own PSU).

    Parameters
    ----------
    values : np.ndarray
        Pooled observations of both groups
    in_group2 : np.ndarray
        Boolean indicator, True for rows of the second group
    weights : np.ndarray
        Sampling weights

    Returns
    -------
    Tuple[float, float, float, float]
        (estimate, z, p_value, df), where ``estimate`` is the mean rank
        proportion of group 2 minus that of group 1
    """
    values = np.asarray(values, dtype=float)
    weights = np.asarray(weights, dtype=float)
    indicator = np.asarray(in_group2, dtype=float)
    n = len(values)
    if n < 3:
        raise InsufficientDataError(
            f"Weighted rank test needs at least 3 observations, got {n}."
        )

    order = np.argsort(values, kind="mergesort")
    sorted_weights = weights[order]
    midpoints = np.cumsum(sorted_weights) - sorted_weights / 2
    _, tie_index = np.unique(values[order], return_inverse=True)
    tie_means = np.bincount(tie_index, weights=midpoints) / np.bincount(tie_index)

    rankhat = np.empty(n)
    rankhat[order] = tie_means[tie_index]
    rankscore = rankhat / weights.sum()

    design = np.column_stack([np.ones(n), indicator])
    fit = sm.WLS(rankscore, design, weights=weights).fit()
    estimate = float(fit.params[1])

    influence = (design * fit.resid[:, None]) @ fit.normalized_cov_params
    totals = influence * weights[:, None]
    centered = totals - totals.mean(axis=0)
    vcov = n / (n - 1) * centered.T @ centered
    se = float(np.sqrt(vcov[1, 1]))

    z = estimate / se if se > 0 else np.nan
    df = n - 2
    p_value = float(2 * stats.t.cdf(-abs(z), df))
    return estimate, float(z), p_value, float(df)
