"""rimatch: Retention-index matching against NIST WebBook reference data.

Retrieves Kovats retention indices for a set of CAS numbers, summarizes the
repeated literature entries per compound, and compares them with measured
retention indices to separate good, poor and missing database matches.
"""

import logging

__version__ = "0.1.0"

from rimatch.data import (
    AbstractRIProvider,
    CSVProvider,
    DataFrameProvider,
    fetch_reference_ri,
)
from rimatch.domain import (
    RIMatcher,
    add_reference_data,
    join_with_reference,
    matched,
    no_match,
    only_matches,
    poor_or_no_match,
    poorly_matched,
    summarize_reference_data,
)
from rimatch.errors import InvalidArgumentError, RetrievalError, RIMatchError, SchemaError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AbstractRIProvider",
    "CSVProvider",
    "DataFrameProvider",
    "fetch_reference_ri",
    "RIMatcher",
    "summarize_reference_data",
    "join_with_reference",
    "add_reference_data",
    "matched",
    "poorly_matched",
    "no_match",
    "poor_or_no_match",
    "only_matches",
    "RIMatchError",
    "SchemaError",
    "InvalidArgumentError",
    "RetrievalError",
]
