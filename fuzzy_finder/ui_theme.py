"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the prompt, result rows, and match highlights.
A theme can also be derived from any installed Pygments style.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    prompt: str
    query: str
    cursor: str
    info: str
    pointer: str
    highlight: str
    match: str
    marker: str
    no_matches: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    prompt="\033[1;38;5;81m",
    query="\033[38;5;252m",
    cursor="\033[7m",
    info="\033[2;38;5;250m",
    pointer="\033[1;38;5;161m",
    highlight="\033[48;5;236m",
    match="\033[1;38;5;108m",
    marker="\033[38;5;168m",
    no_matches="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    prompt="\033[1;38;5;45m",
    query="\033[38;5;153m",
    cursor="\033[7m",
    info="\033[2;38;5;110m",
    pointer="\033[1;38;5;39m",
    highlight="\033[48;5;24m",
    match="\033[1;38;5;117m",
    marker="\033[38;5;84m",
    no_matches="\033[2;38;5;110m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="\033[0m",
    prompt="\033[1m",
    query="",
    cursor="\033[7m",
    info="",
    pointer="\033[1m",
    highlight="\033[7m",
    match="\033[1;4m",
    marker="\033[1m",
    no_matches="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def _hex_to_sgr(color: str | None, *, background: bool = False) -> str:
    if not color:
        return ""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return ""
    try:
        r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return ""
    layer = 48 if background else 38
    return f"\033[{layer};2;{r};{g};{b}m"


def theme_from_pygments_style(style_name: str) -> UITheme:
    """Build a truecolor theme from a Pygments style's token colors.

    Matches take the Keyword color, the prompt takes the Function color, and
    the highlighted row uses the style's ``highlight_color`` as background.
    Unknown styles fall back to :data:`DEFAULT_THEME`.
    """
    from pygments.styles import get_style_by_name
    from pygments.token import Token
    from pygments.util import ClassNotFound

    try:
        style = get_style_by_name(style_name)
    except ClassNotFound:
        logger.warning("Unknown Pygments style %r; using default theme", style_name)
        return DEFAULT_THEME

    def fg(token, fallback: str) -> str:
        token_style = style.style_for_token(token)
        sgr = _hex_to_sgr(token_style.get("color"))
        if not sgr:
            return fallback
        return sgr.replace("\033[", "\033[1;", 1) if token_style.get("bold") else sgr

    highlight = _hex_to_sgr(getattr(style, "highlight_color", None), background=True)
    return UITheme(
        name=f"pygments:{style_name}",
        reset="\033[0m",
        prompt=fg(Token.Name.Function, DEFAULT_THEME.prompt),
        query=fg(Token.Text, DEFAULT_THEME.query),
        cursor="\033[7m",
        info=fg(Token.Comment, DEFAULT_THEME.info),
        pointer=fg(Token.Operator, DEFAULT_THEME.pointer),
        highlight=highlight or DEFAULT_THEME.highlight,
        match=fg(Token.Keyword, DEFAULT_THEME.match),
        marker=fg(Token.String, DEFAULT_THEME.marker),
        no_matches=fg(Token.Comment, DEFAULT_THEME.no_matches),
    )


def resolve_theme(name: str | None, *, style: str | None = None, no_color: bool = False) -> UITheme:
    """Return the concrete theme for the requested name, style, and color mode.

    ``no_color`` wins, then an explicit built-in theme name, then a Pygments
    style, then the default theme.
    """
    if no_color:
        return MONO_THEME
    if name and str(name).strip().lower() in _THEMES:
        return _THEMES[normalize_theme_name(name)]
    if style:
        return theme_from_pygments_style(style)
    return DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "MONO_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "theme_from_pygments_style",
]
