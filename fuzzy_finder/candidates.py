"""Immutable candidate storage for one selection session."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import EmptyInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One selectable row.

    ``id`` is the row's position in the original input and never changes.
    ``payload`` carries whatever object the caller associated with the row.
    """

    id: int
    text: str
    payload: Any = None


class CandidateStore:
    """Read-only, id-indexed list of candidates."""

    def __init__(self, candidates: Sequence[Candidate]) -> None:
        if not candidates:
            raise EmptyInputError("no candidates to select from")
        self._candidates: tuple[Candidate, ...] = tuple(candidates)
        logger.info("Loaded %d candidate(s)", len(self._candidates))

    @classmethod
    def load(cls, rows: Iterable[str]) -> CandidateStore:
        """Build a store from plain text rows; the payload is the row itself."""
        return cls([Candidate(id=idx, text=str(row), payload=row) for idx, row in enumerate(rows)])

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, Any]]) -> CandidateStore:
        """Build a store from ``(display_text, payload)`` pairs."""
        return cls([Candidate(id=idx, text=str(text), payload=payload) for idx, (text, payload) in enumerate(items)])

    def get(self, candidate_id: int) -> Candidate:
        return self._candidates[candidate_id]

    def texts(self, candidate_ids: Iterable[int]) -> list[str]:
        return [self._candidates[idx].text for idx in candidate_ids]

    def payloads(self, candidate_ids: Iterable[int]) -> list[Any]:
        return [self._candidates[idx].payload for idx in candidate_ids]

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)
