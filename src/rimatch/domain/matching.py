"""Joining measured RI values to reference statistics and classifying matches.

The measured table is joined once against the reference summary
(:func:`join_with_reference`); every classification view is then a boolean
mask over that one joined table, so the views can never disagree with each
other.

A compound is *matched* when ``|RI_mean - RI| < threshold`` and *poorly
matched* when the difference is greater than the threshold. Both comparisons
are strict, so a difference exactly equal to the threshold is in neither set.
"""

from __future__ import annotations

import logging

import pandas as pd

from rimatch.config import (
    CAS_COLUMN,
    COUNT_COLUMN,
    DEFAULT_THRESHOLD,
    DIFFERENCE_COLUMN,
    MEAN_COLUMN,
    MEASURED_COLUMNS,
    RI_COLUMN,
    STATUS_BOUNDARY,
    STATUS_COLUMN,
    STATUS_MATCHED,
    STATUS_POOR,
    STATUS_UNMATCHED,
    STD_COLUMN,
    SUMMARY_COLUMNS,
)
from rimatch.domain.summary import summarize_reference_data
from rimatch.errors import SchemaError
from rimatch.validation import normalize_cas, require_columns, validate_threshold

logger = logging.getLogger(__name__)

_JOIN_KEY = "__rimatch_cas__"
_REFERENCE_COLUMNS = (MEAN_COLUMN, STD_COLUMN, COUNT_COLUMN, DIFFERENCE_COLUMN)


def join_with_reference(measured: pd.DataFrame, summaries: pd.DataFrame) -> pd.DataFrame:
    """Left-join measured data with reference summaries on CAS number.

    Parameters
    ----------
    measured : pd.DataFrame
        Measured data with at least the columns CAS, RI, Name and File. Any
        other columns are carried through unchanged.
    summaries : pd.DataFrame
        Output of :func:`summarize_reference_data` (one row per CAS).

    Returns
    -------
    pd.DataFrame
        The measured rows in their original order, extended with RI_mean,
        RI_std, RI_n and Difference (``|RI_mean - RI|``). Reference columns
        are NaN for compounds without reference data.

    Raises
    ------
    SchemaError
        If a required column is missing, if ``measured`` already carries
        reference columns, or if ``summaries`` repeats a CAS number.
    """
    require_columns(measured, MEASURED_COLUMNS, "measured data")
    require_columns(summaries, SUMMARY_COLUMNS, "reference summaries")

    clashing = [column for column in _REFERENCE_COLUMNS if column in measured.columns]
    if clashing:
        raise SchemaError(
            f"measured data already contains reference column(s) {clashing}; "
            "pass the original measured table instead"
        )

    summaries = summaries.reset_index(drop=True)
    reference = pd.DataFrame(
        {
            _JOIN_KEY: normalize_cas(summaries[CAS_COLUMN]),
            MEAN_COLUMN: pd.to_numeric(summaries[MEAN_COLUMN], errors="coerce"),
            STD_COLUMN: pd.to_numeric(summaries[STD_COLUMN], errors="coerce"),
            COUNT_COLUMN: pd.to_numeric(summaries[COUNT_COLUMN], errors="coerce"),
        }
    ).dropna(subset=[_JOIN_KEY])

    duplicated = reference[_JOIN_KEY].duplicated()
    if duplicated.any():
        repeats = sorted(reference.loc[duplicated, _JOIN_KEY].unique())
        raise SchemaError(f"reference summaries contain duplicate CAS numbers: {repeats}")

    left = measured.assign(**{_JOIN_KEY: normalize_cas(measured[CAS_COLUMN]).array})
    joined = left.merge(reference, on=_JOIN_KEY, how="left", sort=False)
    joined = joined.drop(columns=_JOIN_KEY).reset_index(drop=True)

    measured_ri = pd.to_numeric(joined[RI_COLUMN], errors="coerce")
    joined[DIFFERENCE_COLUMN] = (joined[MEAN_COLUMN] - measured_ri).abs()

    logger.debug(
        "Joined %d measured rows; %d without reference data",
        len(joined),
        int(joined[MEAN_COLUMN].isna().sum()),
    )
    return joined


# Row masks over a joined table


def matched_mask(joined: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD) -> pd.Series:
    """Rows whose difference is strictly below ``threshold``."""
    threshold = validate_threshold(threshold)
    difference = joined[DIFFERENCE_COLUMN]
    return difference.notna() & (difference < threshold)


def poorly_matched_mask(joined: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD) -> pd.Series:
    """Rows whose difference is strictly above ``threshold``."""
    threshold = validate_threshold(threshold)
    difference = joined[DIFFERENCE_COLUMN]
    return difference.notna() & (difference > threshold)


def no_match_mask(joined: pd.DataFrame) -> pd.Series:
    """Rows without any reference entry."""
    return joined[MEAN_COLUMN].isna()


def poor_or_no_match_mask(joined: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD) -> pd.Series:
    """Rows without a reference entry or with a difference above ``threshold``."""
    return no_match_mask(joined) | poorly_matched_mask(joined, threshold)


def only_matches_mask(joined: pd.DataFrame) -> pd.Series:
    """Rows with a reference entry, whatever the quality of the match."""
    return joined[MEAN_COLUMN].notna()


def _select(joined: pd.DataFrame, mask: pd.Series) -> pd.DataFrame:
    return joined.loc[mask].reset_index(drop=True)


class RIMatcher:
    """Measured RI data joined once against reference summaries.

    All views are filters over the same joined table, so for any threshold
    ``matched`` and ``poorly_matched`` are disjoint and ``only_matches`` plus
    ``no_match`` cover every measured row exactly once.

    Attributes
    ----------
    summaries : pd.DataFrame
        Per-compound reference statistics.
    joined : pd.DataFrame
        Measured data with reference columns and Difference added.
    """

    def __init__(self, measured: pd.DataFrame, summaries: pd.DataFrame):
        """Join measured data with precomputed reference summaries.

        Parameters
        ----------
        measured : pd.DataFrame
            Measured data with columns CAS, RI, Name and File.
        summaries : pd.DataFrame
            Output of :func:`summarize_reference_data`.
        """
        self.summaries = summaries
        self.joined = join_with_reference(measured, summaries)

    @classmethod
    def from_records(cls, measured: pd.DataFrame, records: pd.DataFrame) -> RIMatcher:
        """Summarize raw reference records, then join them with ``measured``.

        The measured table is validated before any reference record is
        touched.
        """
        require_columns(measured, MEASURED_COLUMNS, "measured data")
        return cls(measured, summarize_reference_data(records))

    def __len__(self) -> int:
        """Number of measured rows."""
        return len(self.joined)

    def add_reference_data(self) -> pd.DataFrame:
        """Return the full joined table, unfiltered."""
        return self.joined.copy()

    def matched(self, threshold: float = DEFAULT_THRESHOLD) -> pd.DataFrame:
        """Rows whose difference is strictly below ``threshold``."""
        return _select(self.joined, matched_mask(self.joined, threshold))

    def poorly_matched(self, threshold: float = DEFAULT_THRESHOLD) -> pd.DataFrame:
        """Rows whose difference is strictly above ``threshold``."""
        return _select(self.joined, poorly_matched_mask(self.joined, threshold))

    def no_match(self) -> pd.DataFrame:
        """Rows without any reference entry."""
        return _select(self.joined, no_match_mask(self.joined))

    def poor_or_no_match(self, threshold: float = DEFAULT_THRESHOLD) -> pd.DataFrame:
        """Rows that are unmatched or poorly matched."""
        return _select(self.joined, poor_or_no_match_mask(self.joined, threshold))

    def only_matches(self) -> pd.DataFrame:
        """Rows with a reference entry, whatever the quality of the match."""
        return _select(self.joined, only_matches_mask(self.joined))

    def classify(self, threshold: float = DEFAULT_THRESHOLD) -> pd.DataFrame:
        """Return the joined table with a Match_status column.

        Statuses are "matched", "poor", "unmatched" (no reference data) and
        "boundary" (difference exactly equal to ``threshold``). The status is
        None when reference data exists but the measured RI is missing.
        """
        threshold = validate_threshold(threshold)
        joined = self.joined

        status = pd.Series(None, index=joined.index, dtype=object)
        status.loc[no_match_mask(joined)] = STATUS_UNMATCHED
        status.loc[matched_mask(joined, threshold)] = STATUS_MATCHED
        status.loc[poorly_matched_mask(joined, threshold)] = STATUS_POOR
        status.loc[joined[DIFFERENCE_COLUMN] == threshold] = STATUS_BOUNDARY

        classified = joined.copy()
        classified[STATUS_COLUMN] = status
        return classified

    def counts(self, threshold: float = DEFAULT_THRESHOLD) -> dict[str, int]:
        """Number of measured rows per match status."""
        statuses = self.classify(threshold)[STATUS_COLUMN]
        return {
            status: int((statuses == status).sum())
            for status in (STATUS_MATCHED, STATUS_POOR, STATUS_UNMATCHED, STATUS_BOUNDARY)
        }


# One-shot entry points taking raw reference records


def add_reference_data(measured: pd.DataFrame, records: pd.DataFrame) -> pd.DataFrame:
    """Add reference RI statistics and the difference to every measured row.

    Parameters
    ----------
    measured : pd.DataFrame
        Measured data with columns CAS, RI, Name and File.
    records : pd.DataFrame
        Raw reference records (CAS, RI), e.g. from :func:`fetch_reference_ri`.

    Returns
    -------
    pd.DataFrame
        All measured rows with RI_mean, RI_std, RI_n and Difference added.
    """
    return RIMatcher.from_records(measured, records).add_reference_data()


def matched(
    measured: pd.DataFrame, records: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD
) -> pd.DataFrame:
    """Measured compounds within ``threshold`` of their reference mean RI."""
    threshold = validate_threshold(threshold)
    return RIMatcher.from_records(measured, records).matched(threshold)


def poorly_matched(
    measured: pd.DataFrame, records: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD
) -> pd.DataFrame:
    """Measured compounds whose reference mean RI differs by more than ``threshold``."""
    threshold = validate_threshold(threshold)
    return RIMatcher.from_records(measured, records).poorly_matched(threshold)


def no_match(measured: pd.DataFrame, records: pd.DataFrame) -> pd.DataFrame:
    """Measured compounds with no reference entry."""
    return RIMatcher.from_records(measured, records).no_match()


def poor_or_no_match(
    measured: pd.DataFrame, records: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD
) -> pd.DataFrame:
    """Measured compounds that are either unmatched or poorly matched."""
    threshold = validate_threshold(threshold)
    return RIMatcher.from_records(measured, records).poor_or_no_match(threshold)


def only_matches(measured: pd.DataFrame, records: pd.DataFrame) -> pd.DataFrame:
    """Measured compounds with at least one reference entry."""
    return RIMatcher.from_records(measured, records).only_matches()
