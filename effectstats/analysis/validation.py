"""
Input validation for the hypothesis-test entry points.

All checks run before any data is touched, so malformed requests fail
fast with a ValidationError.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from effectstats.exceptions import ValidationError
from effectstats.utils.helpers import closest_match

logger = logging.getLogger(__name__)

VALID_ALTERNATIVES = ("two-sided", "less", "greater")
_ALTERNATIVE_ALIASES = {"two.sided": "two-sided", "two_sided": "two-sided"}

# Maximum number of variables in `select`, per test
MAX_SELECT = {
    "t_test": 2,
    "mann_whitney_test": 2,
}

_TEST_NAMES = {
    "t_test": "Student's t test",
    "mann_whitney_test": "Mann-Whitney test",
}


def match_alternative(alternative: str) -> str:
    """
    Normalize the ``alternative`` argument.

    Parameters
    ----------
    alternative : str
        'two-sided' (or the alias 'two.sided'), 'less' or 'greater'

    Returns
    -------
    str
        Canonical alternative
    """
    if not isinstance(alternative, str):
        raise ValidationError("Argument `alternative` must be a character string.")
    alternative = _ALTERNATIVE_ALIASES.get(alternative, alternative)
    if alternative not in VALID_ALTERNATIVES:
        raise ValidationError(
            f"Argument `alternative` must be one of {', '.join(repr(a) for a in VALID_ALTERNATIVES)}, "
            f"not {alternative!r}."
        )
    return alternative


def as_data_frame(data: Union[pd.DataFrame, Mapping[str, Any]]) -> pd.DataFrame:
    """Accept a DataFrame or a mapping of column name to values."""
    if isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, Mapping):
        return pd.DataFrame(data)
    raise ValidationError(
        f"Argument `data` must be a data frame, not {type(data).__name__}."
    )


def as_column_list(select: Union[str, Sequence[str]]) -> List[str]:
    """Turn a single column name into a one-element list."""
    if isinstance(select, str):
        return [select]
    return list(select)


def _not_found_message(data: pd.DataFrame, name: str, what: str = "Variable") -> str:
    suggestion = closest_match(data.columns, name)
    message = f"{what} '{name}' not found in data frame."
    if suggestion is not None:
        message += f" Maybe misspelled? Did you mean '{suggestion}'?"
    return message


def sanitize_test_input(
    data: pd.DataFrame,
    select: Optional[Union[str, Sequence[str]]],
    by: Optional[str] = None,
    weights: Optional[str] = None,
    test: Optional[str] = None,
) -> None:
    """
    Check the arguments of a hypothesis-test call.

    Parameters
    ----------
    data : pd.DataFrame
        The data set
    select : Optional[Union[str, Sequence[str]]]
        Name(s) of the continuous variable(s)
    by : Optional[str]
        Name of the grouping variable
    weights : Optional[str]
        Name of the weighting variable
    test : Optional[str]
        Test kind, 't_test' or 'mann_whitney_test'

    Raises
    ------
    ValidationError
        If the request is malformed or references unknown columns
    """
    if select is None:
        raise ValidationError("Argument `select` is missing.")

    if isinstance(select, str):
        columns = [select]
    elif isinstance(select, (list, tuple, pd.Index)):
        columns = list(select)
    else:
        raise ValidationError(
            "Argument `select` must be a character string with the name(s) of the variable(s)."
        )
    if not columns:
        raise ValidationError("Argument `select` is missing.")

    test_name = _TEST_NAMES.get(test, test)
    if test in MAX_SELECT and len(columns) > MAX_SELECT[test]:
        raise ValidationError(
            f"You may only specify {MAX_SELECT[test]} variables for {test_name}."
        )
    if test == "mann_whitney_test" and len(columns) == 1 and by is None:
        raise ValidationError(
            "Only one variable provided in `select`, but none in `by`. You need to "
            "specify a second continuous variable in `select`, or a grouping variable "
            "in `by` for Mann-Whitney test."
        )
    if test in MAX_SELECT and len(columns) > 1 and by is not None:
        raise ValidationError("If `select` specifies more than one variable, `by` must be `None`.")

    if not all(isinstance(column, str) for column in columns):
        raise ValidationError(
            "Argument `select` must be a character string with the name(s) of the variable(s)."
        )
    if len(set(columns)) < len(columns):
        raise ValidationError("Variables in `select` must be different from each other.")
    if by is not None and not isinstance(by, str):
        raise ValidationError(
            "Argument `by` must be a character string with the name of a single variable."
        )
    if weights is not None and not isinstance(weights, str):
        raise ValidationError(
            "Argument `weights` must be a character string with the name of a single variable."
        )

    for column in columns:
        if column not in data.columns:
            raise ValidationError(_not_found_message(data, column))
    if by is not None and by not in data.columns:
        raise ValidationError(_not_found_message(data, by))
    if weights is not None and weights not in data.columns:
        raise ValidationError(_not_found_message(data, weights, what="Weighting variable"))

    if test == "t_test":
        for column in columns:
            if not is_numeric_dtype(data[column]) or is_bool_dtype(data[column]):
                raise ValidationError(
                    "Variable provided in `select` must be numeric for Student's t test."
                )

    if weights is not None:
        weight_values = data[weights]
        if not is_numeric_dtype(weight_values) or is_bool_dtype(weight_values):
            raise ValidationError(f"Weighting variable '{weights}' must be numeric.")
        if (weight_values.dropna() < 0).any():
            raise ValidationError(f"Weighting variable '{weights}' must not contain negative values.")

    logger.debug(f"Validated {test_name} request: select={columns}, by={by}, weights={weights}")
