"""Editable query line with a cursor."""

from __future__ import annotations

from dataclasses import dataclass

WORD_SEPARATORS = " /_-.:"


@dataclass
class QueryState:
    """Query text plus cursor offset, kept within ``[0, len(text)]``.

    Every edit returns whether the text changed so the caller knows when a
    re-rank is due. Pure cursor moves return ``False``.
    """

    text: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def insert(self, chars: str) -> bool:
        if not chars:
            return False
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)
        return True

    def delete_backward(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete_forward(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def delete_word_backward(self) -> bool:
        """Delete back to the previous word start, like readline's Ctrl-W."""
        if self.cursor == 0:
            return False
        start = self.cursor
        while start > 0 and self.text[start - 1] in WORD_SEPARATORS:
            start -= 1
        while start > 0 and self.text[start - 1] not in WORD_SEPARATORS:
            start -= 1
        self.text = self.text[:start] + self.text[self.cursor :]
        self.cursor = start
        return True

    def move_cursor(self, delta: int) -> bool:
        self.cursor = max(0, min(len(self.text), self.cursor + delta))
        return False

    def move_to_start(self) -> bool:
        self.cursor = 0
        return False

    def move_to_end(self) -> bool:
        self.cursor = len(self.text)
        return False

    def clear(self) -> bool:
        changed = bool(self.text)
        self.text = ""
        self.cursor = 0
        return changed
