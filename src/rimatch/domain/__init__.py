"""Domain logic: reference summaries, joining and match classification."""

from rimatch.domain.matching import (
    RIMatcher,
    add_reference_data,
    join_with_reference,
    matched,
    no_match,
    only_matches,
    poor_or_no_match,
    poorly_matched,
)
from rimatch.domain.summary import summarize_reference_data

__all__ = [
    "RIMatcher",
    "summarize_reference_data",
    "join_with_reference",
    "add_reference_data",
    "matched",
    "poorly_matched",
    "no_match",
    "poor_or_no_match",
    "only_matches",
]
