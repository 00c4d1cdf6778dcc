"""Data layer for retrieving reference retention indices."""

from rimatch.data.providers import AbstractRIProvider, CSVProvider, DataFrameProvider
from rimatch.data.retrieval import fetch_reference_ri

__all__ = [
    "AbstractRIProvider",
    "DataFrameProvider",
    "CSVProvider",
    "fetch_reference_ri",
]
