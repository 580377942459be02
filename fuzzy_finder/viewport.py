"""Highlight, scroll, and multi-select state over the ranked results."""

from __future__ import annotations

from dataclasses import dataclass, field

from .matching import RankedResults


@dataclass
class ViewportState:
    """Scrollable window over ranked results.

    Invariants after every operation:
    ``0 <= highlighted_index < result_count`` (0 when empty) and
    ``scroll_offset <= highlighted_index < scroll_offset + visible_rows``.
    """

    visible_rows: int
    result_count: int = 0
    highlighted_index: int = 0
    scroll_offset: int = 0

    def __post_init__(self) -> None:
        self.visible_rows = max(1, self.visible_rows)
        self._clamp()

    def _clamp(self) -> None:
        if self.result_count <= 0:
            self.result_count = 0
            self.highlighted_index = 0
            self.scroll_offset = 0
            return
        self.highlighted_index = max(0, min(self.highlighted_index, self.result_count - 1))
        if self.highlighted_index < self.scroll_offset:
            self.scroll_offset = self.highlighted_index
        elif self.highlighted_index >= self.scroll_offset + self.visible_rows:
            self.scroll_offset = self.highlighted_index - self.visible_rows + 1
        max_offset = max(0, self.result_count - self.visible_rows)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset, self.highlighted_index))

    def reset(self, result_count: int) -> None:
        """Point at the top match of a freshly ranked result set."""
        self.result_count = max(0, result_count)
        self.highlighted_index = 0
        self.scroll_offset = 0
        self._clamp()

    def move_highlight(self, delta: int) -> bool:
        """Move the highlight, scrolling by the minimum needed. Returns whether it moved."""
        if self.result_count == 0:
            return False
        previous = (self.highlighted_index, self.scroll_offset)
        self.highlighted_index += delta
        self._clamp()
        return (self.highlighted_index, self.scroll_offset) != previous

    def page(self, direction: int) -> bool:
        return self.move_highlight(direction * self.visible_rows)

    def resize(self, visible_rows: int) -> None:
        """Change the window height without touching the highlight."""
        self.visible_rows = max(1, visible_rows)
        self._clamp()

    def visible_range(self) -> range:
        return range(self.scroll_offset, min(self.result_count, self.scroll_offset + self.visible_rows))


@dataclass
class SelectionSet:
    """Candidate ids confirmed in multi-select mode; survives query changes."""

    ids: set[int] = field(default_factory=set)

    def toggle(self, candidate_id: int) -> bool:
        """Flip membership and return whether the id is now selected."""
        if candidate_id in self.ids:
            self.ids.discard(candidate_id)
            return False
        self.ids.add(candidate_id)
        return True

    def __contains__(self, candidate_id: object) -> bool:
        return candidate_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def ordered(self) -> tuple[int, ...]:
        """Selected ids in original input order."""
        return tuple(sorted(self.ids))


def toggle_highlighted(viewport: ViewportState, results: RankedResults, selection: SelectionSet) -> bool:
    """Toggle the candidate under the highlight. No-op on empty results."""
    if not results or viewport.result_count == 0:
        return False
    selection.toggle(results[viewport.highlighted_index].candidate_id)
    return True
