"""
Result records returned by the hypothesis tests.

Every test returns an immutable record carrying the numeric outputs and
the descriptive metadata (group labels, sample sizes, means) needed for
reporting. The ``kind`` field tags the variant so that formatting code
can dispatch on it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np
import pandas as pd


class ResultKind(Enum):
    """Variant tag of a test result."""

    TTEST = "t-test"
    RANK_SUM = "rank-sum"


@dataclass(frozen=True)
class TestResult:
    """Fields shared by all test results."""

    __test__ = False  # not a pytest test class

    kind: ResultKind
    data_name: str
    statistic_name: str
    statistic: float
    effect_size_name: str
    effect_size: float
    p_value: float
    df: float
    method: str
    alternative: str
    mu: float
    group_labels: Tuple[str, ...]
    n_groups: Tuple[int, ...]
    means: Tuple[float, ...]
    weighted: bool
    paired: bool
    one_sample: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = asdict(self)
        result["kind"] = self.kind.value
        return result

    def to_frame(self) -> pd.DataFrame:
        """One-row data frame with the numeric test outputs."""
        row = {
            key: value
            for key, value in self.to_dict().items()
            if not isinstance(value, tuple)
        }
        return pd.DataFrame([row])


@dataclass(frozen=True)
class TTestResult(TestResult):
    """Result of a one-sample, paired or two-sample t-test."""


@dataclass(frozen=True)
class RankSumResult(TestResult):
    """Result of a Mann-Whitney (Wilcoxon rank sum) test.

    ``means`` holds the per-group rank means. ``u`` and ``w`` are only
    available for unweighted tests.
    """

    estimate: float = np.nan
    z: float = np.nan
    u: Optional[float] = None
    w: Optional[float] = None

    @property
    def rank_means(self) -> Tuple[float, ...]:
        return self.means


R = TypeVar("R", bound=TestResult)


def format_labels(labels: Sequence[str]) -> Tuple[str, ...]:
    """Pad labels to the same display width."""
    width = max((len(str(label)) for label in labels), default=0)
    return tuple(str(label).ljust(width) for label in labels)


def build_result(
    result_type: Type[R],
    *,
    group_labels: Sequence[str],
    n_groups: Sequence[float],
    means: Sequence[float],
    **fields: Any,
) -> R:
    """
    Assemble a test result from computed values.

    Parameters
    ----------
    result_type : Type[R]
        TTestResult or RankSumResult
    group_labels : Sequence[str]
        Display labels, Group 1 first
    n_groups : Sequence[float]
        Per-group sample sizes (counts, or rounded weight sums)
    means : Sequence[float]
        Per-group means or rank means
    **fields
        Remaining result fields

    Returns
    -------
    R
        The immutable result record
    """
    kind = ResultKind.RANK_SUM if issubclass(result_type, RankSumResult) else ResultKind.TTEST
    numeric = {
        key: float(value) if isinstance(value, (int, float, np.number)) and not isinstance(value, bool) else value
        for key, value in fields.items()
    }
    return result_type(
        kind=kind,
        group_labels=format_labels(group_labels),
        n_groups=tuple(int(n) for n in n_groups),
        means=tuple(float(m) for m in means),
        **numeric,
    )
