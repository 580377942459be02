"""Embedding entry points.

``find`` runs one interactive session over plain rows; ``find_items`` does
the same for ``(text, payload)`` pairs and hands back the payloads.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .candidates import CandidateStore
from .config import FinderConfig
from .fuzzy import fuzzy_score_positions
from .matching import Scorer
from .render import Renderer, RenderOptions
from .session import Confirmed, FinderSession, SessionResult, Terminal, run_session
from .terminal import TerminalController
from .ui_theme import resolve_theme


def run_store(
    store: CandidateStore,
    config: FinderConfig | None = None,
    *,
    scorer: Scorer = fuzzy_score_positions,
    terminal: Terminal | None = None,
) -> SessionResult:
    """Run a session over an already built store.

    When ``terminal`` is omitted the controlling tty is opened, used, and
    closed again.
    """
    config = config or FinderConfig()
    session = FinderSession(store, scorer=scorer, config=config)
    owned = terminal is None
    active = TerminalController.open_tty() if terminal is None else terminal
    try:
        renderer = Renderer(
            active.write,
            store,
            RenderOptions(
                prompt=config.prompt,
                multi_select=config.multi_select,
                theme=resolve_theme(config.theme, style=config.style, no_color=config.no_color),
            ),
        )
        return run_session(session, active, renderer)
    finally:
        if owned:
            active.close()


def find(
    rows: Iterable[str],
    *,
    multi_select: bool = False,
    visible_rows: int | None = None,
    scorer: Scorer = fuzzy_score_positions,
    config: FinderConfig | None = None,
    terminal: Terminal | None = None,
) -> SessionResult:
    """Let the user pick from ``rows``; returns ``Confirmed`` ids or ``Cancelled``.

    Raises ``EmptyInputError`` before touching the terminal if ``rows`` is empty.
    """
    store = CandidateStore.load(rows)
    if config is None:
        config = FinderConfig(multi_select=multi_select, visible_rows_override=visible_rows)
    return run_store(store, config, scorer=scorer, terminal=terminal)


def find_items(
    items: Iterable[tuple[str, Any]],
    *,
    multi_select: bool = False,
    visible_rows: int | None = None,
    scorer: Scorer = fuzzy_score_positions,
    config: FinderConfig | None = None,
    terminal: Terminal | None = None,
) -> list[Any] | None:
    """Pick among ``(text, payload)`` pairs.

    Returns the chosen payloads (possibly empty), or ``None`` when cancelled.
    """
    store = CandidateStore.from_items(items)
    if config is None:
        config = FinderConfig(multi_select=multi_select, visible_rows_override=visible_rows)
    result = run_store(store, config, scorer=scorer, terminal=terminal)
    if not isinstance(result, Confirmed):
        return None
    return store.payloads(result.candidate_ids)
