"""Shared constants for column names, query options and defaults."""

from __future__ import annotations

# Column names
CAS_COLUMN = "CAS"
RI_COLUMN = "RI"
NAME_COLUMN = "Name"
FILE_COLUMN = "File"
MEAN_COLUMN = "RI_mean"
STD_COLUMN = "RI_std"
COUNT_COLUMN = "RI_n"
DIFFERENCE_COLUMN = "Difference"
STATUS_COLUMN = "Match_status"
TEMP_PROG_COLUMN = "temp_prog"
TYPE_COLUMN = "type"
POLARITY_COLUMN = "polarity"

RECORD_COLUMNS: tuple[str, ...] = (CAS_COLUMN, RI_COLUMN)
MEASURED_COLUMNS: tuple[str, ...] = (CAS_COLUMN, RI_COLUMN, NAME_COLUMN, FILE_COLUMN)
SUMMARY_COLUMNS: tuple[str, ...] = (CAS_COLUMN, MEAN_COLUMN, STD_COLUMN, COUNT_COLUMN)

# NIST WebBook query options
RI_TYPES: tuple[str, ...] = ("kovats", "linear", "alkane", "lee")
POLARITIES: tuple[str, ...] = ("non-polar", "polar")
# Fixed order; the union of per-mode results is concatenated in this order
TEMP_PROGRAMS: tuple[str, ...] = ("ramp", "isothermal", "custom")

# Defaults
DEFAULT_RI_TYPE = "kovats"
DEFAULT_POLARITY = "non-polar"
DEFAULT_THRESHOLD = 50
DEFAULT_TIMEOUT = 30.0

# Match status labels
STATUS_MATCHED = "matched"
STATUS_POOR = "poor"
STATUS_UNMATCHED = "unmatched"
STATUS_BOUNDARY = "boundary"
