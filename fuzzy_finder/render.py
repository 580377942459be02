"""Frame rendering for the finder UI.

A frame is the prompt row followed by the visible result rows, each a fully
styled ANSI string already clipped to the terminal width. ``Renderer`` keeps
the last frame it emitted and rewrites only rows whose content changed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .ansi import char_display_width, clip_ansi_line, display_width, sanitize_row
from .candidates import CandidateStore
from .matching import RankedResults
from .query import QueryState
from .ui_theme import DEFAULT_THEME, UITheme
from .viewport import SelectionSet, ViewportState

Frame = tuple[str, ...]

DEFAULT_PROMPT = "> "
POINTER = ">"
SELECTED_MARKER = "*"
NO_MATCHES_TEXT = "(no matches)"


@dataclass
class RenderOptions:
    prompt: str = DEFAULT_PROMPT
    multi_select: bool = False
    theme: UITheme = DEFAULT_THEME


def _styled(text: str, sgr: str, reset: str) -> str:
    if not sgr or not text:
        return text
    return f"{sgr}{text}{reset}"


def _query_window(text: str, cursor: int, max_cols: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of ``text`` that fits ``max_cols`` with the cursor cell visible."""
    used = char_display_width(text[cursor], 0) if cursor < len(text) else 1
    start = cursor
    while start > 0 and used + char_display_width(text[start - 1], 0) <= max_cols:
        start -= 1
        used += char_display_width(text[start], 0)
    end = min(cursor + 1, len(text))
    while end < len(text) and used + char_display_width(text[end], 0) <= max_cols:
        used += char_display_width(text[end], 0)
        end += 1
    return start, end


def render_prompt_line(
    query: QueryState,
    match_count: int,
    total: int,
    selected_count: int,
    width: int,
    options: RenderOptions,
) -> str:
    """Prompt, query with a reverse-video cursor cell, and a right-aligned counter.

    A query wider than the line scrolls so the cursor cell stays on screen.
    """
    theme = options.theme
    text = query.text
    cursor = query.cursor
    prompt_width = display_width(options.prompt)
    if prompt_width + display_width(text) + (1 if cursor >= len(text) else 0) > width:
        start, end = _query_window(text, cursor, max(1, width - prompt_width))
        text = text[start:end]
        cursor -= start
    under_cursor = text[cursor] if cursor < len(text) else " "
    query_part = (
        _styled(text[:cursor], theme.query, theme.reset)
        + _styled(under_cursor, theme.cursor, theme.reset)
        + _styled(text[cursor + 1 :], theme.query, theme.reset)
    )
    left = _styled(options.prompt, theme.prompt, theme.reset) + query_part
    left_width = prompt_width + display_width(text) + (1 if cursor >= len(text) else 0)

    info = f"{match_count}/{total}"
    if options.multi_select:
        info += f" ({selected_count} selected)"
    gap = width - left_width - len(info)
    if gap >= 1:
        return left + " " * gap + _styled(info, theme.info, theme.reset)
    return clip_ansi_line(left, width)


def render_result_line(
    text: str,
    match_positions: tuple[int, ...],
    *,
    highlighted: bool,
    selected: bool,
    width: int,
    options: RenderOptions,
) -> str:
    """One candidate row with pointer, optional selection marker, and match styling."""
    theme = options.theme
    base = theme.highlight if highlighted else ""
    parts: list[str] = [base]
    parts.append(_styled(POINTER, theme.pointer, theme.reset + base) if highlighted else " ")
    if options.multi_select:
        parts.append(_styled(SELECTED_MARKER, theme.marker, theme.reset + base) if selected else " ")
    parts.append(" ")

    positions = set(match_positions)
    for idx, ch in enumerate(sanitize_row(text)):
        if idx in positions:
            parts.append(f"{theme.match}{ch}{theme.reset}{base}")
        else:
            parts.append(ch)

    line = clip_ansi_line("".join(parts), width)
    if highlighted:
        line += " " * max(0, width - display_width(line))
    return line + theme.reset if theme.reset else line


def build_frame(
    store: CandidateStore,
    query: QueryState,
    viewport: ViewportState,
    results: RankedResults,
    selection: SelectionSet,
    width: int,
    options: RenderOptions,
) -> Frame:
    """Compose the full frame for one snapshot without writing anything."""
    lines = [
        render_prompt_line(query, len(results), len(store), len(selection), width, options),
    ]
    if not results:
        theme = options.theme
        lines.append(clip_ansi_line(_styled(f"  {NO_MATCHES_TEXT}", theme.no_matches, theme.reset), width))
        return tuple(lines)

    for index in viewport.visible_range():
        scored = results[index]
        candidate = store.get(scored.candidate_id)
        lines.append(
            render_result_line(
                candidate.text,
                scored.match_positions,
                highlighted=index == viewport.highlighted_index,
                selected=scored.candidate_id in selection,
                width=width,
                options=options,
            )
        )
    return tuple(lines)


class Renderer:
    """Sole writer to the terminal during a session.

    ``write`` receives one string per paint containing cursor moves and the
    changed rows only. ``invalidate`` forces the next paint to clear the
    screen and redraw every row.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        store: CandidateStore,
        options: RenderOptions | None = None,
        width: int = 80,
    ) -> None:
        self._write = write
        self.store = store
        self.options = options or RenderOptions()
        self.width = max(1, width)
        self._last_frame: Frame | None = None

    @property
    def last_frame(self) -> Frame | None:
        return self._last_frame

    def invalidate(self) -> None:
        self._last_frame = None

    def set_width(self, width: int) -> None:
        width = max(1, width)
        if width != self.width:
            self.width = width
            self.invalidate()

    def render(
        self,
        query: QueryState,
        viewport: ViewportState,
        results: RankedResults,
        selection: SelectionSet,
    ) -> Frame:
        frame = build_frame(self.store, query, viewport, results, selection, self.width, self.options)
        self.paint(frame)
        return frame

    def paint(self, frame: Frame) -> None:
        """Emit the rows of ``frame`` that differ from the previous frame."""
        out: list[str] = []
        previous = self._last_frame
        if previous is None:
            out.append("\033[H\033[2J")
            previous = ()
        for row, line in enumerate(frame):
            if row < len(previous) and previous[row] == line:
                continue
            out.append(f"\033[{row + 1};1H{line}\033[K")
        for row in range(len(frame), len(previous)):
            out.append(f"\033[{row + 1};1H\033[K")
        self._last_frame = frame
        if out:
            self._write("".join(out))
