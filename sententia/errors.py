"""
Exceptions raised by the sententia package.

Heuristic passes never raise: a pass that finds nothing to do simply returns.
These exceptions are for callers that hand the engine malformed data or
address words that do not exist.
"""


class SententiaError(Exception):
    """Base class for all sententia errors."""


class LookupDataError(SententiaError):
    """Lookup results could not be turned into candidate parses."""


class PersistenceError(SententiaError):
    """Saved analysis state is missing, malformed, or of an unknown version."""
