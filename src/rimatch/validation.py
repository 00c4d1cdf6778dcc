"""Input checks shared by the data and domain layers."""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable

import pandas as pd

from rimatch.errors import InvalidArgumentError, SchemaError


def require_columns(table: pd.DataFrame, columns: Iterable[str], table_name: str) -> None:
    """Raise SchemaError unless ``table`` carries every column in ``columns``.

    Parameters
    ----------
    table : pd.DataFrame
        Table to check.
    columns : iterable of str
        Required column names.
    table_name : str
        Name used in the error message, e.g. "measured data".
    """
    if not isinstance(table, pd.DataFrame):
        raise SchemaError(f"{table_name} must be a pandas DataFrame, got {type(table).__name__}")

    missing = [column for column in columns if column not in table.columns]
    if missing:
        raise SchemaError(
            f"{table_name} is missing required column(s) {missing}, "
            f"found {list(table.columns)}",
            missing=missing,
        )


def validate_threshold(threshold) -> float:
    """Return ``threshold`` as a float, or raise if it is not a finite number >= 0."""
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise InvalidArgumentError(f"threshold must be a number, got {threshold!r}")

    value = float(threshold)
    if not math.isfinite(value) or value < 0:
        raise InvalidArgumentError(f"threshold must be finite and non-negative, got {threshold!r}")
    return value


def validate_choice(value: str, choices: Iterable[str], option: str) -> str:
    """Raise InvalidArgumentError unless ``value`` is one of ``choices``."""
    choices = tuple(choices)
    if value not in choices:
        raise InvalidArgumentError(f"Unsupported {option}: {value!r}. Expected one of {choices}")
    return value


def normalize_cas(values: pd.Series) -> pd.Series:
    """Convert CAS numbers to trimmed strings, with blanks turned into <NA>."""
    cas = values.astype("string").str.strip()
    return cas.mask(cas == "")
