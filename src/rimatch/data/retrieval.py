"""Retrieval of reference RI records across temperature-program modes.

The NIST WebBook stores retention indices separately for ramp, isothermal and
custom temperature programs, and its query interface accepts a single mode at
a time. :func:`fetch_reference_ri` queries a provider once per mode and unions
the results.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

import pandas as pd
from tqdm import tqdm

from rimatch.config import (
    CAS_COLUMN,
    DEFAULT_POLARITY,
    DEFAULT_RI_TYPE,
    DEFAULT_TIMEOUT,
    POLARITIES,
    RECORD_COLUMNS,
    RI_TYPES,
    TEMP_PROG_COLUMN,
    TEMP_PROGRAMS,
)
from rimatch.data.providers import AbstractRIProvider
from rimatch.errors import InvalidArgumentError, RetrievalError
from rimatch.validation import normalize_cas, require_columns, validate_choice

logger = logging.getLogger(__name__)


def unique_cas_numbers(cas_ids: pd.DataFrame | Iterable[str] | str) -> list[str]:
    """Return the distinct, non-blank CAS numbers in first-seen order.

    Parameters
    ----------
    cas_ids : pd.DataFrame, iterable of str, or str
        CAS numbers, or a measured-data table with a CAS column.
    """
    if isinstance(cas_ids, pd.DataFrame):
        require_columns(cas_ids, [CAS_COLUMN], "measured data")
        values = cas_ids[CAS_COLUMN]
    elif isinstance(cas_ids, str):
        values = pd.Series([cas_ids])
    else:
        values = pd.Series(list(cas_ids), dtype=object)

    cas = normalize_cas(values).dropna().drop_duplicates()
    return [str(value) for value in cas]


def _check_timeout(timeout: float | None) -> None:
    """Raise InvalidArgumentError unless timeout is None or a positive finite number."""
    if timeout is None:
        return
    if (
        isinstance(timeout, bool)
        or not isinstance(timeout, numbers.Real)
        or not math.isfinite(timeout)
        or timeout <= 0
    ):
        raise InvalidArgumentError(f"timeout must be a positive number of seconds, got {timeout!r}")


def _query_mode(
    provider: AbstractRIProvider,
    cas_ids: list[str],
    *,
    ri_type: str,
    polarity: str,
    temp_prog: str,
    timeout: float | None,
) -> pd.DataFrame | None:
    """Query one temperature-program mode and tag untagged records with it."""
    logger.debug("Querying %d compounds (temp_prog=%s)", len(cas_ids), temp_prog)
    try:
        result = provider.get_ri(
            cas_ids,
            ri_type=ri_type,
            polarity=polarity,
            temp_prog=temp_prog,
            timeout=timeout,
        )
    except RetrievalError:
        raise
    except Exception as e:
        raise RetrievalError(
            f"Reference query failed for temp_prog={temp_prog!r}: {type(e).__name__}: {e}",
            temp_prog=temp_prog,
        ) from e

    if result is None:
        return None
    if not isinstance(result, pd.DataFrame):
        raise RetrievalError(
            f"Provider returned {type(result).__name__} instead of a DataFrame "
            f"for temp_prog={temp_prog!r}",
            temp_prog=temp_prog,
        )
    if result.empty:
        return None

    missing = [column for column in RECORD_COLUMNS if column not in result.columns]
    if missing:
        raise RetrievalError(
            f"Malformed provider response for temp_prog={temp_prog!r}: missing column(s) {missing}",
            temp_prog=temp_prog,
        )

    # A provider that reports its own mode attribution keeps it
    if TEMP_PROG_COLUMN in result.columns:
        return result
    return result.assign(**{TEMP_PROG_COLUMN: temp_prog})


def fetch_reference_ri(
    cas_ids: pd.DataFrame | Iterable[str] | str,
    ri_type: str = DEFAULT_RI_TYPE,
    polarity: str = DEFAULT_POLARITY,
    *,
    provider: AbstractRIProvider,
    timeout: float | None = DEFAULT_TIMEOUT,
    max_workers: int = 1,
    show_progress: bool = False,
) -> pd.DataFrame:
    """Collect reference RI records for a set of compounds.

    Parameters
    ----------
    cas_ids : pd.DataFrame, iterable of str, or str
        CAS numbers to look up, or a measured-data table with a CAS column.
        Duplicates are removed before querying.
    ri_type : str, optional
        "kovats" (default), "linear", "alkane" or "lee".
    polarity : str, optional
        "non-polar" (default) or "polar".
    provider : AbstractRIProvider
        Source of the records.
    timeout : float or None, optional
        Request timeout in seconds passed to the provider. Default is 30.
    max_workers : int, optional
        Number of modes queried concurrently. Default is 1 (sequential).
    show_progress : bool, optional
        Show a progress bar over the modes. Default is False.

    Returns
    -------
    pd.DataFrame
        Union of the records from every temperature-program mode, with a
        temp_prog column (None for records the provider could not attribute
        to a mode). Only columns present in every non-empty mode result
        are kept, and exact duplicate rows are dropped.

    Raises
    ------
    InvalidArgumentError
        For an unsupported option or an empty set of CAS numbers.
    RetrievalError
        If the provider fails, returns malformed data, or finds no record
        for any of the compounds.
    """
    validate_choice(ri_type, RI_TYPES, "RI type")
    validate_choice(polarity, POLARITIES, "polarity")
    _check_timeout(timeout)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise InvalidArgumentError(f"max_workers must be a positive integer, got {max_workers!r}")

    unique_ids = unique_cas_numbers(cas_ids)
    if not unique_ids:
        raise InvalidArgumentError("No CAS numbers to look up")

    logger.info(
        "Fetching %s RIs (%s) for %d compounds across %d temperature programs",
        ri_type,
        polarity,
        len(unique_ids),
        len(TEMP_PROGRAMS),
    )

    def query(temp_prog: str) -> pd.DataFrame | None:
        return _query_mode(
            provider,
            unique_ids,
            ri_type=ri_type,
            polarity=polarity,
            temp_prog=temp_prog,
            timeout=timeout,
        )

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(TEMP_PROGRAMS))) as pool:
            # map() yields in submission order, so the union is deterministic
            results = pool.map(query, TEMP_PROGRAMS)
            if show_progress:
                results = tqdm(results, total=len(TEMP_PROGRAMS), desc="Temperature programs")
            frames = list(results)
    else:
        modes = tqdm(TEMP_PROGRAMS, desc="Temperature programs") if show_progress else TEMP_PROGRAMS
        frames = [query(temp_prog) for temp_prog in modes]

    for temp_prog, frame in zip(TEMP_PROGRAMS, frames):
        logger.info("temp_prog=%s: %d records", temp_prog, 0 if frame is None else len(frame))

    frames = [frame for frame in frames if frame is not None and not frame.empty]
    if not frames:
        raise RetrievalError(f"No reference RI data found for any of {len(unique_ids)} compounds")

    shared = [column for column in frames[0].columns if all(column in f.columns for f in frames[1:])]
    records = pd.concat([frame[shared] for frame in frames], ignore_index=True)
    records = records.drop_duplicates(ignore_index=True)

    logger.info(
        "Retrieved %d reference records for %d of %d compounds",
        len(records),
        records[CAS_COLUMN].nunique(),
        len(unique_ids),
    )
    return records
