from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fuzzy_finder import config
from fuzzy_finder.config import FinderConfig
from fuzzy_finder.render import DEFAULT_PROMPT


class ConfigBehaviorTests(unittest.TestCase):
    def _load_with(self, content: str | None) -> FinderConfig:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if content is not None:
                config_path.write_text(content, encoding="utf-8")
            with mock.patch("fuzzy_finder.config.CONFIG_PATH", config_path):
                return config.load_finder_config()

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(self._load_with(None), FinderConfig())

    def test_values_are_read_from_json(self) -> None:
        loaded = self._load_with(
            json.dumps({"prompt": "? ", "theme": "ocean", "height": 12, "multi_select": True, "style": "monokai"})
        )

        self.assertEqual(
            loaded,
            FinderConfig(multi_select=True, visible_rows_override=12, prompt="? ", theme="ocean", style="monokai"),
        )

    def test_malformed_json_falls_back_to_defaults(self) -> None:
        self.assertEqual(self._load_with("{not json"), FinderConfig())
        self.assertEqual(self._load_with("[1, 2]"), FinderConfig())

    def test_wrongly_typed_values_are_ignored(self) -> None:
        loaded = self._load_with(json.dumps({"height": True, "multi_select": "yes", "prompt": "   ", "theme": 3}))

        self.assertEqual(loaded.visible_rows_override, None)
        self.assertFalse(loaded.multi_select)
        self.assertEqual(loaded.prompt, DEFAULT_PROMPT)
        self.assertIsNone(loaded.theme)

    def test_non_positive_height_is_ignored(self) -> None:
        self.assertIsNone(self._load_with(json.dumps({"height": 0})).visible_rows_override)


class VisibleRowsTests(unittest.TestCase):
    def test_terminal_height_minus_prompt_row(self) -> None:
        self.assertEqual(FinderConfig().visible_rows(24), 23)

    def test_override_caps_rows(self) -> None:
        self.assertEqual(FinderConfig(visible_rows_override=8).visible_rows(24), 8)

    def test_terminal_height_bounds_override(self) -> None:
        self.assertEqual(FinderConfig(visible_rows_override=80).visible_rows(10), 9)

    def test_always_at_least_one_row(self) -> None:
        self.assertEqual(FinderConfig().visible_rows(1), 1)


if __name__ == "__main__":
    unittest.main()
