"""
effectstats

Shortcut functions for significance tests and effect sizes that are not
directly built into scipy or statsmodels:

    - t_test: one-sample, paired and two-sample t-tests with optional
      weights and automatic Cohen's d / Hedges' g
    - mann_whitney_test: Mann-Whitney test with optional weights,
      effect size r and group rank means
    - anova_stats: eta-squared, omega-squared, epsilon-squared, Cohen's f
      and power for ANOVA terms

Modules:
    - analysis: Hypothesis tests, effect sizes and reporting
    - utils: Utility functions
"""

__version__ = "1.0.0"

from config.settings import get_config, config

from .analysis import (
    RankSumResult,
    ResultKind,
    TestResult,
    TTestResult,
    anova_stat,
    anova_stats,
    format_result,
    mann_whitney_test,
    print_result,
    t_test,
)
from .exceptions import (
    EffectStatsError,
    InsufficientDataError,
    NumericDegeneracyError,
    TooManyGroupsError,
    UnsupportedAlternativeError,
    ValidationError,
)

__all__ = [
    "__version__",
    "get_config",
    "config",
    "t_test",
    "mann_whitney_test",
    "anova_stat",
    "anova_stats",
    "format_result",
    "print_result",
    "TestResult",
    "TTestResult",
    "RankSumResult",
    "ResultKind",
    "EffectStatsError",
    "ValidationError",
    "TooManyGroupsError",
    "UnsupportedAlternativeError",
    "InsufficientDataError",
    "NumericDegeneracyError",
]
