"""Session options and persisted defaults.

``FinderConfig`` carries the options one session runs with. Defaults can be
kept in a JSON file under the platform config directory; the finder only ever
reads that file. All access is defensive: malformed or missing config falls
back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .render import DEFAULT_PROMPT

logger = logging.getLogger(__name__)

APP_NAME = "fuzzy_finder"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

# Rows kept for the prompt line above the results.
RESERVED_ROWS = 1


@dataclass(frozen=True)
class FinderConfig:
    """Options for one selection session.

    ``visible_rows_override`` caps the number of result rows; the terminal
    height still bounds it.
    """

    multi_select: bool = False
    visible_rows_override: int | None = None
    prompt: str = DEFAULT_PROMPT
    theme: str | None = None
    style: str | None = None
    no_color: bool = False

    def visible_rows(self, terminal_rows: int) -> int:
        available = max(1, terminal_rows - RESERVED_ROWS)
        if self.visible_rows_override is None:
            return available
        return max(1, min(self.visible_rows_override, available))


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object) -> int | None:
    """Booleans and non-integers are invalid; so are values below one."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def _coerce_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value if value.strip() else None


def load_finder_config() -> FinderConfig:
    """Build a ``FinderConfig`` from persisted defaults, ignoring bad values."""
    data = load_config()
    multi_select = data.get("multi_select")
    return FinderConfig(
        multi_select=multi_select if isinstance(multi_select, bool) else False,
        visible_rows_override=_coerce_positive_int(data.get("height")),
        prompt=_coerce_str(data.get("prompt")) or DEFAULT_PROMPT,
        theme=_coerce_str(data.get("theme")),
        style=_coerce_str(data.get("style")),
        no_color=data.get("no_color") is True,
    )
