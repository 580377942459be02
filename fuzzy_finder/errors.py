"""Exception hierarchy for fuzzy_finder.

Everything raised on purpose derives from ``FuzzyFinderError`` so embedding
applications can catch the whole family at their boundary.
"""

from __future__ import annotations


class FuzzyFinderError(Exception):
    """Base exception for all fuzzy_finder errors."""


class EmptyInputError(FuzzyFinderError):
    """No candidate rows were supplied.

    Raised before any terminal setup or rendering happens, since a session
    with nothing to select cannot start.
    """


class TerminalError(FuzzyFinderError):
    """Terminal I/O failed (raw-mode entry, read, or write).

    The session cannot continue without a terminal. Raw mode is restored
    before this propagates out of the event loop.
    """
