"""Default subsequence scorer.

Any callable with the ``Scorer`` signature can replace this; the session only
relies on ``None`` meaning "no match".
"""

from __future__ import annotations

WORD_BOUNDARY_CHARS = "/_- .:"


def fuzzy_score_positions(query: str, candidate: str) -> tuple[int, list[int]] | None:
    """Score ``candidate`` against ``query`` as a case-insensitive subsequence.

    Returns ``(score, positions)`` where ``positions`` are the character
    offsets in ``candidate`` that matched, or ``None`` when some query
    character cannot be found in order. Contiguous runs and matches at word
    boundaries score higher; gaps and long candidates score lower.
    """
    if not query:
        return 0, []
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    # casefold can change length (e.g. "ß" -> "ss"); offsets must index the original text
    if len(candidate_folded) != len(candidate):
        candidate_folded = candidate.lower()
        if len(candidate_folded) != len(candidate):
            candidate_folded = candidate

    score = 0
    prev_idx = -1
    run = 0
    positions: list[int] = []
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARY_CHARS:
            score += 35
        positions.append(idx)
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score, positions
