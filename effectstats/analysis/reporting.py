"""
Human-readable summaries of test results.

Formatting is kept apart from the calculators: ``format_result()``
dispatches on the ``kind`` tag of a result record.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from config.settings import get_config
from effectstats.utils.helpers import format_pvalue, format_value

from .effect_sizes import interpret_effect_size
from .results import RankSumResult, ResultKind, TestResult, TTestResult

_ALTERNATIVE_PHRASES = {
    "two-sided": "not equal to",
    "less": "less than",
    "greater": "greater than",
}


def format_result(result: TestResult) -> str:
    """
    Format a test result as a text block.

    Parameters
    ----------
    result : TestResult
        Result of t_test() or mann_whitney_test()

    Returns
    -------
    str
        Multi-line summary
    """
    if result.kind is ResultKind.TTEST:
        return _format_ttest(result)
    elif result.kind is ResultKind.RANK_SUM:
        return _format_rank_sum(result)
    raise ValueError(f"Unknown result kind: {result.kind}")


def print_result(result: TestResult) -> None:
    """Print a formatted test result."""
    print(format_result(result))


def _weight_string(result: TestResult) -> str:
    return " (weighted)" if result.weighted else ""


def _format_ttest(result: TTestResult) -> str:
    digits = get_config().reporting.digits
    lines: List[str] = [f"# {result.method}{_weight_string(result)}", ""]

    if result.paired:
        lines.append(
            f"  Data: {result.data_name} (mean difference = {format_value(result.means[0], digits)})"
        )
    else:
        lines.append(f"  Data: {result.data_name}")
        for i, (label, n, mean) in enumerate(
            zip(result.group_labels, result.n_groups, result.means), start=1
        ):
            lines.append(f"  Group {i}: {label} (n = {n}, mean = {format_value(mean, digits)})")

    phrase = _ALTERNATIVE_PHRASES[result.alternative]
    if result.one_sample:
        target = "true mean"
    elif result.paired:
        target = "true mean difference"
    else:
        target = "true difference in means"
    lines.append(f"  Alternative hypothesis: {target} is {phrase} {format_value(result.mu, digits)}")

    interpretation = interpret_effect_size(result.effect_size, result.effect_size_name)
    lines.append("")
    lines.append(
        f"  t = {result.statistic:.{digits}f}, "
        f"{result.effect_size_name} = {result.effect_size:.{digits}f} ({interpretation} effect), "
        f"df = {format_value(result.df, 1)}, {format_pvalue(result.p_value)}"
    )
    return "\n".join(lines)


def _format_rank_sum(result: RankSumResult) -> str:
    digits = get_config().reporting.digits
    lines: List[str] = [f"# Mann-Whitney test{_weight_string(result)}", ""]

    for i, (label, n, rank_mean) in enumerate(
        zip(result.group_labels, result.n_groups, result.rank_means), start=1
    ):
        lines.append(
            f"  Group {i}: {label} (n = {n}, rank mean = {format_value(rank_mean, digits)})"
        )

    phrase = _ALTERNATIVE_PHRASES[result.alternative]
    lines.append(
        f"  Alternative hypothesis: true location shift is {phrase} {format_value(result.mu, digits)}"
    )

    w_stat = "" if result.w is None else f"W = {format_value(result.w, digits)}, "
    lines.append("")
    lines.append(
        f"  {w_stat}r = {result.effect_size:.{digits}f}, Z = {result.z:.{digits}f}, "
        f"{format_pvalue(result.p_value)}"
    )
    return "\n".join(lines)


def format_anova_stats(table: pd.DataFrame) -> str:
    """
    Format the output of anova_stats() as a text table.

    Parameters
    ----------
    table : pd.DataFrame
        Output of anova_stats()

    Returns
    -------
    str
        Text table, missing values shown as empty cells
    """
    return table.to_string(index=False, na_rep="")
