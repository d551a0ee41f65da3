"""
Bring test data into one canonical shape and split it into samples.

Wide selections (two value columns) are reshaped into long form with a
single "scale" column and a categorical "group" column, or differenced
for paired tests. The grouping variable is then resolved into at most
two SampleGroup objects in level order: the first level (or the first
column in ``select``) is always Group 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from effectstats.exceptions import InsufficientDataError, TooManyGroupsError

logger = logging.getLogger(__name__)

GROUP_COLUMN = "group"
SCALE_COLUMN = "scale"


@dataclass(frozen=True)
class NormalizedData:
    """Long-form test data with one value column and an optional group column."""

    data: pd.DataFrame
    select: str
    by: Optional[str]
    weights: Optional[str]
    data_name: str
    paired: bool = False
    value_labels: Optional[Dict[Any, str]] = None


@dataclass(frozen=True)
class SampleGroup:
    """One sample of a test, with optional observation weights."""

    label: str
    values: np.ndarray
    weights: Optional[np.ndarray] = None

    @property
    def n(self) -> int:
        return len(self.values)

    @property
    def weight_sum(self) -> float:
        if self.weights is None:
            return float(self.n)
        return float(np.sum(self.weights))


def normalize_shape(
    data: pd.DataFrame,
    select: Sequence[str],
    by: Optional[str] = None,
    weights: Optional[str] = None,
    paired: bool = False,
) -> NormalizedData:
    """
    Convert the selected columns into canonical long form.

    Rows with a missing value in any referenced column are dropped.

    Parameters
    ----------
    data : pd.DataFrame
        The data set (not modified)
    select : Sequence[str]
        One or two value columns
    by : Optional[str]
        Grouping column (only with a single ``select`` column)
    weights : Optional[str]
        Weighting column
    paired : bool
        Whether two ``select`` columns are paired measurements

    Returns
    -------
    NormalizedData
        Data with a single value column and, where applicable, a group column
    """
    referenced = list(dict.fromkeys([*select, *[c for c in (by, weights) if c is not None]]))
    frame = data[referenced].dropna()
    dropped = len(data) - len(frame)
    if dropped:
        logger.debug(f"Dropped {dropped} rows with missing values")

    value_labels = None
    if by is not None:
        value_labels = data.attrs.get("value_labels", {}).get(by)

    if len(select) == 1:
        data_name = select[0] if by is None else f"{select[0]} by {by}"
        return NormalizedData(
            data=frame,
            select=select[0],
            by=by,
            weights=weights,
            data_name=data_name,
            value_labels=value_labels,
        )

    first, second = select[0], select[1]
    data_name = f"{first} and {second}"

    if paired:
        frame = frame.copy()
        frame[first] = frame[first] - frame[second]
        return NormalizedData(
            data=frame[[first] + ([weights] if weights is not None else [])],
            select=first,
            by=None,
            weights=weights,
            data_name=data_name,
            paired=True,
        )

    logger.debug(f"Reshaping {first}, {second} to long format")
    long_frame = frame.melt(
        id_vars=[weights] if weights is not None else None,
        value_vars=[first, second],
        var_name=GROUP_COLUMN,
        value_name=SCALE_COLUMN,
    )
    long_frame[GROUP_COLUMN] = pd.Categorical(long_frame[GROUP_COLUMN], categories=[first, second])
    return NormalizedData(
        data=long_frame,
        select=SCALE_COLUMN,
        by=GROUP_COLUMN,
        weights=weights,
        data_name=data_name,
    )


def _as_factor(values: pd.Series) -> pd.Series:
    """Coerce a grouping column to categorical, dropping unused levels."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return values.cat.remove_unused_categories()
    return values.astype("category")


def resolve_groups(
    normalized: NormalizedData,
    max_groups: int = 2,
    alternative_test: Optional[str] = None,
    test_name: str = "this test",
) -> List[SampleGroup]:
    """
    Split normalized data into samples, one per group level.

    Parameters
    ----------
    normalized : NormalizedData
        Output of normalize_shape
    max_groups : int
        Maximum number of groups allowed
    alternative_test : Optional[str]
        Function to suggest when there are too many groups
    test_name : str
        Test name used in error messages

    Returns
    -------
    List[SampleGroup]
        One group for one-sample and paired data, otherwise one per level
    """
    frame = normalized.data
    values = frame[normalized.select].to_numpy(dtype=float)
    weights = None
    if normalized.weights is not None:
        weights = frame[normalized.weights].to_numpy(dtype=float)

    if normalized.by is None:
        return [SampleGroup(label=normalized.select, values=values, weights=weights)]

    groups = _as_factor(frame[normalized.by])
    levels = list(groups.cat.categories)

    if len(levels) > max_groups:
        message = f"Only two groups are allowed for {test_name}."
        if alternative_test is not None:
            message += f" Please use `{alternative_test}` for more than two groups."
        raise TooManyGroupsError(message, n_groups=len(levels), alternative=alternative_test)
    if len(levels) < max_groups:
        raise InsufficientDataError(
            f"Grouping variable '{normalized.by}' must have {max_groups} levels, "
            f"found {len(levels)}."
        )

    labels = normalized.value_labels or {}
    codes = groups.cat.codes.to_numpy()
    samples = []
    for code, level in enumerate(levels):
        mask = codes == code
        samples.append(
            SampleGroup(
                label=str(labels.get(level, level)),
                values=values[mask],
                weights=None if weights is None else weights[mask],
            )
        )
    return samples
