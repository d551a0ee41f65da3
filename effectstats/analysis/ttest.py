"""
Student's t-test for one sample, paired samples or two independent samples.

Unlike ``scipy.stats.ttest_*``, ``t_test()`` works directly on a data
frame, supports observation weights and automatically computes an
effect size: Cohen's d for larger samples (n > 20) and Hedges' g for
smaller ones.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd
from scipy import stats

from effectstats.analysis.reshape import NormalizedData, SampleGroup, normalize_shape, resolve_groups
from effectstats.analysis.results import TTestResult, build_result
from effectstats.analysis.statistics import (
    select_effect_size,
    t_pvalue,
    weighted_mean,
    weighted_sd,
)
from effectstats.analysis.validation import (
    as_column_list,
    as_data_frame,
    match_alternative,
    sanitize_test_input,
)
from effectstats.exceptions import InsufficientDataError, ValidationError

logger = logging.getLogger(__name__)


def t_test(
    data: Union[pd.DataFrame, Mapping[str, Any]],
    select: Union[str, Sequence[str]],
    by: Optional[str] = None,
    weights: Optional[str] = None,
    paired: bool = False,
    mu: float = 0,
    alternative: str = "two-sided",
) -> TTestResult:
    """
    Perform a Student's t-test.

    Parameters
    ----------
    data : Union[pd.DataFrame, Mapping[str, Any]]
        The data set
    select : Union[str, Sequence[str]]
        Name(s) of the continuous variable(s):
        - one name and ``by=None``: one-sample test against ``mu``
        - one name and ``by``: two-sample test between the groups of ``by``
        - two names: two-sample test between the columns, or a paired test
          on their difference if ``paired=True``
    by : Optional[str]
        Name of the grouping variable (two levels)
    weights : Optional[str]
        Name of an optional weighting variable
    paired : bool, default=False
        Whether the two ``select`` variables are dependent samples
    mu : float, default=0
        Hypothesized mean (one sample), mean difference (paired) or
        difference in means (two samples)
    alternative : str, default="two-sided"
        'two-sided', 'less' or 'greater'

    Returns
    -------
    TTestResult
        Test results including t, df, p-value and effect size

    Examples
    --------
    >>> t_test(sleep, "extra")                         # one sample
    >>> t_test(mtcars, "mpg", by="am")                 # two samples
    >>> t_test(mtcars, ["mpg", "hp"], paired=True)     # paired
    """
    alternative = match_alternative(alternative)
    data = as_data_frame(data)
    sanitize_test_input(data, select, by, weights, test="t_test")
    select = as_column_list(select)

    if paired and len(select) != 2:
        raise ValidationError("Paired t-test requires two variables in `select`.")

    normalized = normalize_shape(data, select, by=by, weights=weights, paired=paired)
    groups = resolve_groups(
        normalized,
        alternative_test="means_by_group()",
        test_name="Student's t test",
    )
    for group in groups:
        if group.n < 2:
            raise InsufficientDataError(
                f"Not enough observations in group '{group.label}' (n = {group.n}) "
                "to compute a standard error."
            )

    if weights is None:
        return _calculate_ttest(groups, normalized, mu, alternative)
    return _calculate_weighted_ttest(groups, normalized, mu, alternative)


def _method_label(groups: List[SampleGroup], paired: bool, weighted: bool = False) -> str:
    if paired:
        return "Paired t-test"
    if len(groups) == 1:
        return "One Sample t-test"
    return "Two-Sample t-test" if weighted else "Welch Two Sample t-test"


def _calculate_ttest(
    groups: List[SampleGroup],
    normalized: NormalizedData,
    mu: float,
    alternative: str,
) -> TTestResult:
    """Unweighted t-test using scipy."""
    x = groups[0].values
    if len(groups) == 1:
        htest = stats.ttest_1samp(x, popmean=mu, alternative=alternative)
        y = None
        means = [np.mean(x)]
    else:
        y = groups[1].values
        # shifting x by mu tests mean(x) - mean(y) against mu
        htest = stats.ttest_ind(x - mu, y, equal_var=False, alternative=alternative)
        means = [np.mean(x), np.mean(y)]

    effect_size_name, effect_size = select_effect_size(x, y, mu=mu)

    return build_result(
        TTestResult,
        data_name=normalized.data_name,
        statistic_name="t",
        statistic=htest.statistic,
        effect_size_name=effect_size_name,
        effect_size=effect_size,
        p_value=htest.pvalue,
        df=htest.df,
        method=_method_label(groups, normalized.paired),
        alternative=alternative,
        mu=mu,
        group_labels=[g.label for g in groups],
        n_groups=[g.n for g in groups],
        means=means,
        weighted=False,
        paired=normalized.paired,
        one_sample=len(groups) == 1 and not normalized.paired,
    )


def _calculate_weighted_ttest(
    groups: List[SampleGroup],
    normalized: NormalizedData,
    mu: float,
    alternative: str,
) -> TTestResult:
    """Weighted t-test from weighted moments, Welch-Satterthwaite df for two samples."""
    first = groups[0]
    mean_x = weighted_mean(first.values, first.weights)
    se_x = np.sqrt(weighted_sd(first.values, first.weights) ** 2 / first.n)

    if len(groups) == 1:
        se = se_x
        dof = first.n - 1
        statistic = (mean_x - mu) / se
        means = [mean_x]
    else:
        second = groups[1]
        mean_y = weighted_mean(second.values, second.weights)
        se_y = np.sqrt(weighted_sd(second.values, second.weights) ** 2 / second.n)
        se = np.sqrt(se_x ** 2 + se_y ** 2)
        dof = se ** 4 / (se_x ** 4 / (first.n - 1) + se_y ** 4 / (second.n - 1))
        statistic = (mean_x - mean_y - mu) / se
        means = [mean_x, mean_y]

    p_value = t_pvalue(statistic, dof, alternative)

    # effect size on weight-scaled values (approximation, not a weighted estimator)
    scaled = [g.values * g.weights for g in groups]
    effect_size_name, effect_size = select_effect_size(
        scaled[0], scaled[1] if len(scaled) > 1 else None, mu=mu
    )

    return build_result(
        TTestResult,
        data_name=normalized.data_name,
        statistic_name="t",
        statistic=statistic,
        effect_size_name=effect_size_name,
        effect_size=effect_size,
        p_value=p_value,
        df=dof,
        method=_method_label(groups, normalized.paired, weighted=True),
        alternative=alternative,
        mu=mu,
        group_labels=[g.label for g in groups],
        n_groups=[round(g.weight_sum) for g in groups],
        means=means,
        weighted=True,
        paired=normalized.paired,
        one_sample=len(groups) == 1 and not normalized.paired,
    )
