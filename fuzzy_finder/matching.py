"""Ranking adapter between the candidate store and a scoring function.

The scorer is a single swappable callable fixed at session construction.
Ranking is recomputed from scratch on every query change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .candidates import CandidateStore

logger = logging.getLogger(__name__)

Scorer = Callable[[str, str], tuple[float, Sequence[int]] | None]


@dataclass(frozen=True)
class ScoredCandidate:
    candidate_id: int
    score: float
    match_positions: tuple[int, ...] = ()


RankedResults = tuple[ScoredCandidate, ...]


def _safe_score(scorer: Scorer, query: str, candidate_id: int, text: str) -> ScoredCandidate | None:
    """Score one candidate; failures and malformed results count as no match."""
    try:
        result = scorer(query, text)
    except Exception:
        logger.debug("Scorer failed for candidate %d; treating as no match", candidate_id, exc_info=True)
        return None
    if result is None:
        return None
    try:
        score, positions = result
        return ScoredCandidate(
            candidate_id=candidate_id,
            score=float(score),
            match_positions=tuple(sorted({int(position) for position in positions})),
        )
    except (TypeError, ValueError):
        logger.debug("Scorer returned %r for candidate %d; treating as no match", result, candidate_id)
        return None


def rank(query: str, store: CandidateStore, scorer: Scorer) -> RankedResults:
    """Return candidates matching ``query`` sorted by descending score.

    An empty query keeps every candidate in input order with a zero score.
    Candidates the scorer rejects (``None``, an exception, or a result that is
    not a ``(score, positions)`` pair) are left out.
    Equal scores keep input order.
    """
    if not query:
        return tuple(ScoredCandidate(candidate_id=candidate.id, score=0) for candidate in store)

    scored: list[ScoredCandidate] = []
    for candidate in store:
        scored_candidate = _safe_score(scorer, query, candidate.id, candidate.text)
        if scored_candidate is not None:
            scored.append(scored_candidate)
    # list.sort is stable, and stays stable with reverse=True
    scored.sort(key=lambda item: item.score, reverse=True)
    logger.debug("Ranked %d/%d candidate(s) for query %r", len(scored), len(store), query)
    return tuple(scored)
