"""Providers of raw reference retention-index records.

This module implements the Strategy pattern for reference data access:
- AbstractRIProvider: Interface defining the contract
- DataFrameProvider: Records held in memory
- CSVProvider: Records exported from earlier NIST WebBook searches

The NIST WebBook scraper itself is not part of this package; wrap whichever
client you use in an :class:`AbstractRIProvider` subclass.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from rimatch.config import (
    CAS_COLUMN,
    DEFAULT_POLARITY,
    DEFAULT_RI_TYPE,
    POLARITY_COLUMN,
    RECORD_COLUMNS,
    TEMP_PROG_COLUMN,
    TEMP_PROGRAMS,
    TYPE_COLUMN,
)
from rimatch.validation import normalize_cas, require_columns

logger = logging.getLogger(__name__)


class AbstractRIProvider(ABC):
    """Abstract base class for reference RI providers.

    Subclasses return every literature record for the requested compounds
    measured under one temperature-program mode.
    """

    @abstractmethod
    def get_ri(
        self,
        cas_ids: Sequence[str],
        *,
        ri_type: str = DEFAULT_RI_TYPE,
        polarity: str = DEFAULT_POLARITY,
        temp_prog: str = "ramp",
        timeout: float | None = None,
    ) -> pd.DataFrame | None:
        """Retrieve reference RI records.

        Parameters
        ----------
        cas_ids : sequence of str
            Unique CAS numbers to look up.
        ri_type : str, optional
            Retention index type: "kovats", "linear", "alkane" or "lee".
        polarity : str, optional
            Column polarity: "non-polar" or "polar".
        temp_prog : str, optional
            Temperature-program mode: "ramp", "isothermal" or "custom".
        timeout : float, optional
            Request timeout in seconds, for providers that do network I/O.

        Returns
        -------
        pd.DataFrame or None
            One row per record with at least the columns CAS and RI.
            Returns None if no compound was found.
        """
        pass


class DataFrameProvider(AbstractRIProvider):
    """Provider serving reference records from an in-memory table.

    The optional columns ``type`` and ``polarity`` are used to filter records
    when present. A table with a ``temp_prog`` column answers each mode with
    its own records; a table without one answers only the first mode, so
    :func:`rimatch.fetch_reference_ri` sees every record exactly once.

    Attributes
    ----------
    records : pd.DataFrame
        Reference records with normalized CAS numbers.
    """

    # Query option -> column it filters on
    FILTER_COLUMNS: dict[str, str] = {
        "ri_type": TYPE_COLUMN,
        "polarity": POLARITY_COLUMN,
        "temp_prog": TEMP_PROG_COLUMN,
    }

    def __init__(self, records: pd.DataFrame):
        """Initialize the provider.

        Parameters
        ----------
        records : pd.DataFrame
            Reference records with at least the columns CAS and RI.
        """
        require_columns(records, RECORD_COLUMNS, "provider records")
        records = records.reset_index(drop=True)
        self.records = records.assign(**{CAS_COLUMN: normalize_cas(records[CAS_COLUMN]).array})

    def has_compound(self, cas: str) -> bool:
        """Check if any record exists for a CAS number."""
        return bool((self.records[CAS_COLUMN] == str(cas).strip()).any())

    def get_ri(
        self,
        cas_ids: Sequence[str],
        *,
        ri_type: str = DEFAULT_RI_TYPE,
        polarity: str = DEFAULT_POLARITY,
        temp_prog: str = "ramp",
        timeout: float | None = None,
    ) -> pd.DataFrame | None:
        """Return stored records matching the compounds and query options.

        Records without a temp_prog column cannot be attributed to a mode, so
        they are returned once, for the first mode in ``TEMP_PROGRAMS``, with
        temp_prog set to None. Any other mode gets None.
        """
        untagged = TEMP_PROG_COLUMN not in self.records.columns
        if untagged and temp_prog != TEMP_PROGRAMS[0]:
            return None

        options = {"ri_type": ri_type, "polarity": polarity, "temp_prog": temp_prog}

        mask = self.records[CAS_COLUMN].isin(list(cas_ids)).fillna(False).astype(bool)
        for option, column in self.FILTER_COLUMNS.items():
            if column in self.records.columns:
                mask &= self.records[column].eq(options[option]).fillna(False).astype(bool)

        subset = self.records.loc[mask].reset_index(drop=True)
        if subset.empty:
            return None
        if untagged:
            subset = subset.assign(**{TEMP_PROG_COLUMN: None})
        return subset


class CSVProvider(DataFrameProvider):
    """Provider reading reference records from a CSV file.

    Useful for re-running a comparison against a saved WebBook export
    without hitting the network again.

    Attributes
    ----------
    csv_path : Path
        Path to the CSV file.
    """

    def __init__(self, csv_path: Path | str):
        """Load the CSV file.

        Parameters
        ----------
        csv_path : Path or str
            CSV file with at least the columns CAS and RI.
        """
        self.csv_path = Path(csv_path)
        if not self.csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")

        # CAS as string so values like "0050-00-0" keep their formatting
        records = pd.read_csv(self.csv_path, dtype={CAS_COLUMN: str})
        super().__init__(records)
        logger.info("Loaded %d reference records from %s", len(self.records), self.csv_path)
