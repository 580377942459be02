"""Selection session state machine and its blocking event loop.

``FinderSession`` owns every piece of mutable session state and applies one
key token at a time. ``run_session`` wires it to a terminal and a renderer:
render, block for a key, apply it, and repeat until the session ends.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from .candidates import CandidateStore
from .config import FinderConfig
from .errors import TerminalError
from .fuzzy import fuzzy_score_positions
from .input import RESIZE_KEY
from .matching import RankedResults, Scorer, rank
from .query import QueryState
from .render import Renderer
from .viewport import SelectionSet, ViewportState, toggle_highlighted

logger = logging.getLogger(__name__)

DEFAULT_VISIBLE_ROWS = 20


class SessionState(enum.Enum):
    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Confirmed:
    """Session ended with a commit; ids are in original input order."""

    candidate_ids: tuple[int, ...]


@dataclass(frozen=True)
class Cancelled:
    """Session ended without a selection (escape or ctrl-c)."""


SessionResult = Confirmed | Cancelled


class Terminal(Protocol):
    def raw_mode(self): ...

    def read_key(self) -> str: ...

    def write(self, data: str | bytes) -> None: ...

    def get_size(self) -> tuple[int, int]: ...


class FinderSession:
    """Query, ranking, viewport, and selection state for one session.

    Construction ranks the empty query, so the browse-all list is ready
    before the first frame. Raises ``EmptyInputError`` through
    ``CandidateStore`` when there is nothing to select.
    """

    def __init__(
        self,
        store: CandidateStore,
        scorer: Scorer = fuzzy_score_positions,
        config: FinderConfig | None = None,
        visible_rows: int = DEFAULT_VISIBLE_ROWS,
    ) -> None:
        self.store = store
        self.scorer = scorer
        self.config = config or FinderConfig()
        self.query = QueryState()
        self.selection = SelectionSet()
        self.state = SessionState.RUNNING
        self.result: SessionResult | None = None
        self.results: RankedResults = rank("", store, scorer)
        self.viewport = ViewportState(visible_rows=visible_rows, result_count=len(self.results))

    @property
    def multi_select(self) -> bool:
        return self.config.multi_select

    @property
    def finished(self) -> bool:
        return self.state is not SessionState.RUNNING

    def highlighted_candidate_id(self) -> int | None:
        if not self.results:
            return None
        return self.results[self.viewport.highlighted_index].candidate_id

    def _requery(self, changed: bool) -> None:
        if not changed:
            return
        self.results = rank(self.query.text, self.store, self.scorer)
        self.viewport.reset(len(self.results))

    def resize(self, visible_rows: int) -> None:
        self.viewport.resize(visible_rows)

    def toggle_selection(self) -> bool:
        if not self.multi_select:
            return False
        return toggle_highlighted(self.viewport, self.results, self.selection)

    def confirm(self) -> SessionResult:
        if self.multi_select:
            ids = self.selection.ordered()
        else:
            highlighted = self.highlighted_candidate_id()
            ids = () if highlighted is None else (highlighted,)
        return self._finish(SessionState.CONFIRMED, Confirmed(candidate_ids=ids))

    def cancel(self) -> SessionResult:
        return self._finish(SessionState.CANCELLED, Cancelled())

    def _finish(self, state: SessionState, result: SessionResult) -> SessionResult:
        if self.result is not None:
            return self.result
        self.state = state
        self.result = result
        logger.info("Session %s: %r", state.value, result)
        return result

    def handle_key(self, key: str) -> bool:
        """Apply one key token. Returns ``True`` once the session has ended."""
        if self.finished:
            return True

        if key in {"ESC", "CTRL_C"}:
            self.cancel()
            return True
        if key == "ENTER":
            self.confirm()
            return True

        if key in {"UP", "CTRL_P"}:
            self.viewport.move_highlight(-1)
        elif key in {"DOWN", "CTRL_N"}:
            self.viewport.move_highlight(1)
        elif key == "PAGE_UP":
            self.viewport.page(-1)
        elif key == "PAGE_DOWN":
            self.viewport.page(1)
        elif key == "TAB":
            self.toggle_selection()
        elif key == "SHIFT_TAB":
            if self.toggle_selection():
                self.viewport.move_highlight(-1)
        elif key == "LEFT":
            self.query.move_cursor(-1)
        elif key == "RIGHT":
            self.query.move_cursor(1)
        elif key in {"HOME", "CTRL_A"}:
            self.query.move_to_start()
        elif key in {"END", "CTRL_E"}:
            self.query.move_to_end()
        elif key == "BACKSPACE":
            self._requery(self.query.delete_backward())
        elif key == "DELETE":
            self._requery(self.query.delete_forward())
        elif key == "CTRL_W":
            self._requery(self.query.delete_word_backward())
        elif key == "CTRL_U":
            self._requery(self.query.clear())
        elif len(key) == 1 and key.isprintable():
            self._requery(self.query.insert(key))
        return False


def _apply_terminal_size(session: FinderSession, terminal: Terminal, renderer: Renderer) -> None:
    rows, columns = terminal.get_size()
    session.resize(session.config.visible_rows(rows))
    renderer.set_width(columns)


def run_session(session: FinderSession, terminal: Terminal, renderer: Renderer) -> SessionResult:
    """Drive ``session`` until it is confirmed or cancelled.

    Raw mode is held for the whole loop and released on every exit path,
    including exceptions raised by the terminal or renderer.
    """
    with terminal.raw_mode():
        _apply_terminal_size(session, terminal, renderer)
        while not session.finished:
            renderer.render(session.query, session.viewport, session.results, session.selection)
            key = terminal.read_key()
            if key == RESIZE_KEY:
                _apply_terminal_size(session, terminal, renderer)
                renderer.invalidate()
                continue
            if not key:
                raise TerminalError("terminal input closed")
            session.handle_key(key)
    assert session.result is not None
    return session.result
