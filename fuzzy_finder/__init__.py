"""Public package surface for fuzzy_finder.

Exports the embedding API (``find``, ``find_items``, result types) and
``main`` for programmatic CLI invocation.
"""

from __future__ import annotations

import logging

from .candidates import Candidate, CandidateStore
from .config import FinderConfig
from .errors import EmptyInputError, FuzzyFinderError, TerminalError
from .finder import find, find_items
from .fuzzy import fuzzy_score_positions
from .session import Cancelled, Confirmed, SessionResult

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Candidate",
    "CandidateStore",
    "Cancelled",
    "Confirmed",
    "EmptyInputError",
    "FinderConfig",
    "FuzzyFinderError",
    "SessionResult",
    "TerminalError",
    "find",
    "find_items",
    "fuzzy_score_positions",
    "main",
]
