"""
Analysis module of the effectstats package.

Key components:
    - ttest: Student's t-test (one-sample, paired, two-sample; weighted)
    - rank_tests: Mann-Whitney test (unweighted and design-based weighted)
    - statistics: Weighted moments, Cohen's d / Hedges' g, rank statistics
    - effect_sizes: Interpretation of effect sizes
    - anova: Effect size statistics and power for ANOVA tables
    - reporting: Text summaries of test results
"""

from .ttest import t_test
from .rank_tests import mann_whitney_test
from .results import RankSumResult, ResultKind, TestResult, TTestResult
from .statistics import (
    compute_cohens_d,
    compute_hedges_g,
    weighted_mean,
    weighted_sd,
)
from .effect_sizes import interpret_cohens_d, interpret_hedges_g, interpret_r
from .anova import anova_stat, anova_stats
from .reporting import format_anova_stats, format_result, print_result

__all__ = [
    "t_test",
    "mann_whitney_test",
    "TestResult",
    "TTestResult",
    "RankSumResult",
    "ResultKind",
    "compute_cohens_d",
    "compute_hedges_g",
    "weighted_mean",
    "weighted_sd",
    "interpret_cohens_d",
    "interpret_hedges_g",
    "interpret_r",
    "anova_stat",
    "anova_stats",
    "format_anova_stats",
    "format_result",
    "print_result",
]
