"""Exception types raised by the analysis pipeline.

Both concrete errors subclass ``ValueError`` so callers that already guard
against bad input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class StationNetError(Exception):
    """Base class for stationnet errors."""


class DataIntegrityError(StationNetError, ValueError):
    """Input tables are malformed or inconsistent.

    Raised for duplicate or negative station indices, routes that reference an
    unknown station, weights outside the allowed set and missing columns.
    """


class EmptyGraphError(StationNetError, ValueError):
    """A distance metric was requested on a graph without vertices."""
