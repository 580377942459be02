"""Module entrypoint for ``python -m fuzzy_finder``.

Argument parsing and session setup happen in ``fuzzy_finder.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
