from __future__ import annotations

import unittest

from fuzzy_finder.query import QueryState


class QueryStateTests(unittest.TestCase):
    def test_insert_at_cursor_advances_cursor(self) -> None:
        query = QueryState()
        query.insert("a")
        query.insert("c")
        query.move_cursor(-1)

        self.assertTrue(query.insert("b"))
        self.assertEqual((query.text, query.cursor), ("abc", 2))

    def test_delete_backward_is_noop_at_start(self) -> None:
        query = QueryState(text="ab", cursor=0)

        self.assertFalse(query.delete_backward())
        self.assertEqual((query.text, query.cursor), ("ab", 0))

    def test_delete_backward_removes_char_before_cursor(self) -> None:
        query = QueryState(text="abc", cursor=2)

        self.assertTrue(query.delete_backward())
        self.assertEqual((query.text, query.cursor), ("ac", 1))

    def test_delete_forward(self) -> None:
        query = QueryState(text="abc", cursor=1)

        self.assertTrue(query.delete_forward())
        self.assertEqual((query.text, query.cursor), ("ac", 1))
        query.move_to_end()
        self.assertFalse(query.delete_forward())

    def test_move_cursor_clamps_into_text_bounds(self) -> None:
        query = QueryState(text="abc", cursor=1)

        query.move_cursor(-10)
        self.assertEqual(query.cursor, 0)
        query.move_cursor(10)
        self.assertEqual(query.cursor, 3)

    def test_cursor_moves_never_report_text_change(self) -> None:
        query = QueryState(text="abc", cursor=1)

        self.assertFalse(query.move_cursor(1))
        self.assertFalse(query.move_to_start())
        self.assertFalse(query.move_to_end())

    def test_clear_resets_text_and_cursor(self) -> None:
        query = QueryState(text="abc", cursor=2)

        self.assertTrue(query.clear())
        self.assertEqual((query.text, query.cursor), ("", 0))
        self.assertFalse(query.clear())

    def test_delete_word_backward_stops_at_separator(self) -> None:
        query = QueryState(text="src/main.py", cursor=8)

        self.assertTrue(query.delete_word_backward())
        self.assertEqual((query.text, query.cursor), ("src/.py", 4))

    def test_constructor_clamps_cursor(self) -> None:
        self.assertEqual(QueryState(text="ab", cursor=9).cursor, 2)


if __name__ == "__main__":
    unittest.main()
