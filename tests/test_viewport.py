from __future__ import annotations

import random
import unittest

from fuzzy_finder.matching import ScoredCandidate
from fuzzy_finder.viewport import SelectionSet, ViewportState, toggle_highlighted


def _assert_invariants(case: unittest.TestCase, viewport: ViewportState) -> None:
    if viewport.result_count == 0:
        case.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (0, 0))
        return
    case.assertGreaterEqual(viewport.highlighted_index, 0)
    case.assertLess(viewport.highlighted_index, viewport.result_count)
    case.assertLessEqual(viewport.scroll_offset, viewport.highlighted_index)
    case.assertLess(viewport.highlighted_index, viewport.scroll_offset + viewport.visible_rows)


class ViewportStateTests(unittest.TestCase):
    def test_move_highlight_clamps_to_result_bounds(self) -> None:
        viewport = ViewportState(visible_rows=5, result_count=3)

        self.assertFalse(viewport.move_highlight(-1))
        viewport.move_highlight(10)

        self.assertEqual(viewport.highlighted_index, 2)
        self.assertEqual(viewport.scroll_offset, 0)

    def test_scrolls_by_minimum_amount_when_leaving_window(self) -> None:
        viewport = ViewportState(visible_rows=3, result_count=10)

        for _ in range(3):
            viewport.move_highlight(1)
        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (3, 1))

        viewport.move_highlight(1)
        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (4, 2))

        viewport.move_highlight(-1)
        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (3, 2))
        viewport.move_highlight(-2)
        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (1, 1))

    def test_resize_below_fold_scrolls_without_moving_highlight(self) -> None:
        viewport = ViewportState(visible_rows=20, result_count=50)
        viewport.move_highlight(10)
        self.assertEqual(viewport.scroll_offset, 0)

        viewport.resize(5)

        self.assertEqual(viewport.highlighted_index, 10)
        self.assertEqual(viewport.scroll_offset, 6)
        _assert_invariants(self, viewport)

    def test_resize_larger_keeps_highlight_visible(self) -> None:
        viewport = ViewportState(visible_rows=3, result_count=5)
        viewport.move_highlight(4)

        viewport.resize(10)

        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset), (4, 0))

    def test_reset_returns_to_top(self) -> None:
        viewport = ViewportState(visible_rows=3, result_count=10)
        viewport.move_highlight(7)

        viewport.reset(2)

        self.assertEqual((viewport.highlighted_index, viewport.scroll_offset, viewport.result_count), (0, 0, 2))

    def test_empty_results_pin_highlight_to_zero(self) -> None:
        viewport = ViewportState(visible_rows=3, result_count=0)

        self.assertFalse(viewport.move_highlight(1))
        self.assertEqual(list(viewport.visible_range()), [])
        _assert_invariants(self, viewport)

    def test_page_moves_by_visible_rows(self) -> None:
        viewport = ViewportState(visible_rows=4, result_count=20)

        viewport.page(1)
        self.assertEqual(viewport.highlighted_index, 4)
        viewport.page(-1)
        self.assertEqual(viewport.highlighted_index, 0)

    def test_visible_range_is_window_into_results(self) -> None:
        viewport = ViewportState(visible_rows=3, result_count=10)
        viewport.move_highlight(9)

        self.assertEqual(list(viewport.visible_range()), [7, 8, 9])

    def test_invariants_hold_over_random_operations(self) -> None:
        rng = random.Random(1234)
        viewport = ViewportState(visible_rows=4, result_count=30)
        for _ in range(500):
            op = rng.choice(["move", "resize", "reset", "page"])
            if op == "move":
                viewport.move_highlight(rng.randint(-7, 7))
            elif op == "resize":
                viewport.resize(rng.randint(0, 12))
            elif op == "reset":
                viewport.reset(rng.randint(0, 40))
            else:
                viewport.page(rng.choice([-1, 1]))
            _assert_invariants(self, viewport)


class SelectionSetTests(unittest.TestCase):
    def test_double_toggle_restores_previous_state(self) -> None:
        selection = SelectionSet({3})
        before = set(selection.ids)

        self.assertTrue(selection.toggle(5))
        self.assertFalse(selection.toggle(5))

        self.assertEqual(selection.ids, before)

    def test_ordered_returns_input_order(self) -> None:
        selection = SelectionSet()
        for candidate_id in (9, 2, 5):
            selection.toggle(candidate_id)

        self.assertEqual(selection.ordered(), (2, 5, 9))

    def test_toggle_highlighted_uses_candidate_id_not_index(self) -> None:
        results = (ScoredCandidate(candidate_id=7, score=3), ScoredCandidate(candidate_id=2, score=1))
        viewport = ViewportState(visible_rows=5, result_count=2)
        viewport.move_highlight(1)
        selection = SelectionSet()

        self.assertTrue(toggle_highlighted(viewport, results, selection))
        self.assertIn(2, selection)
        self.assertNotIn(1, selection)

    def test_toggle_highlighted_is_noop_without_results(self) -> None:
        selection = SelectionSet()

        self.assertFalse(toggle_highlighted(ViewportState(visible_rows=5), (), selection))
        self.assertEqual(len(selection), 0)


if __name__ == "__main__":
    unittest.main()
