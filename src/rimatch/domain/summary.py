"""Aggregation of raw reference RI records into per-compound statistics.

A NIST WebBook search returns one record per literature entry, so a compound
usually appears many times. :func:`summarize_reference_data` reduces those
records to one row per CAS number with the mean, sample standard deviation and
number of entries.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np
import pandas as pd

from rimatch.config import (
    CAS_COLUMN,
    COUNT_COLUMN,
    MEAN_COLUMN,
    RECORD_COLUMNS,
    RI_COLUMN,
    STD_COLUMN,
    SUMMARY_COLUMNS,
)
from rimatch.validation import normalize_cas, require_columns

logger = logging.getLogger(__name__)


def empty_summary() -> pd.DataFrame:
    """Return a summary table with the summary columns and no rows."""
    return pd.DataFrame(
        {
            CAS_COLUMN: pd.Series(dtype="string"),
            MEAN_COLUMN: pd.Series(dtype=float),
            STD_COLUMN: pd.Series(dtype=float),
            COUNT_COLUMN: pd.Series(dtype=int),
        }
    )


def summarize_reference_data(records: pd.DataFrame) -> pd.DataFrame:
    """Summarize reference RI records per compound.

    Parameters
    ----------
    records : pd.DataFrame
        Raw reference records with at least the columns CAS and RI, e.g. the
        output of :func:`rimatch.fetch_reference_ri`. Duplicate rows are
        allowed and each one counts toward the sample size.

    Returns
    -------
    pd.DataFrame
        One row per distinct CAS number, sorted by CAS, with columns
        CAS, RI_mean, RI_std and RI_n. RI_mean is rounded half-to-even to an
        integer value (numpy's rule, identical to R's ``round``). RI_std is
        the sample standard deviation (ddof=1) and is NaN when RI_n is 1.

    Raises
    ------
    SchemaError
        If CAS or RI is missing from ``records``.
    """
    require_columns(records, RECORD_COLUMNS, "reference records")

    records = records.reset_index(drop=True)
    data = pd.DataFrame(
        {
            CAS_COLUMN: normalize_cas(records[CAS_COLUMN]),
            RI_COLUMN: pd.to_numeric(records[RI_COLUMN], errors="coerce"),
        }
    )

    valid = data[CAS_COLUMN].notna() & data[RI_COLUMN].notna()
    n_dropped = int((~valid).sum())
    if n_dropped:
        warnings.warn(
            f"Dropped {n_dropped} reference record(s) with a missing CAS number or RI value.",
            stacklevel=2,
        )
    data = data.loc[valid]

    if data.empty:
        logger.debug("No usable reference records; returning an empty summary")
        return empty_summary()

    summary = data.groupby(CAS_COLUMN, sort=True)[RI_COLUMN].agg(["mean", "std", "count"])
    summary = summary.reset_index()
    summary.columns = list(SUMMARY_COLUMNS)

    summary[MEAN_COLUMN] = np.round(summary[MEAN_COLUMN].to_numpy(dtype=float))
    summary[COUNT_COLUMN] = summary[COUNT_COLUMN].astype(int)

    logger.debug("Summarized %d reference records into %d compounds", len(data), len(summary))
    return summary
