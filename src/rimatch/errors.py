"""Exception hierarchy for rimatch.

Every error raised on purpose by the library derives from :class:`RIMatchError`
so callers can catch them in one place.
"""

from __future__ import annotations

from collections.abc import Iterable


class RIMatchError(Exception):
    """Base class for all rimatch errors.

    Attributes
    ----------
    message : str
        Human-readable error description.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SchemaError(RIMatchError):
    """Raised when an input table lacks required columns or violates its shape.

    Attributes
    ----------
    missing : list of str
        Required columns that were not found (empty for non-column violations).
    """

    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing = list(missing)
        super().__init__(message)


class InvalidArgumentError(RIMatchError, ValueError):
    """Raised for a malformed threshold or an unsupported query option."""


class RetrievalError(RIMatchError):
    """Raised when reference RI data could not be retrieved.

    Attributes
    ----------
    temp_prog : str or None
        Temperature-program mode whose query failed, when known.
    """

    def __init__(self, message: str, temp_prog: str | None = None):
        self.temp_prog = temp_prog
        super().__init__(message)
