from __future__ import annotations

import unittest

from fuzzy_finder.fuzzy import fuzzy_score_positions


def _score(query: str, candidate: str):
    scored = fuzzy_score_positions(query, candidate)
    return None if scored is None else scored[0]


class FuzzyScoreTests(unittest.TestCase):
    def test_prefers_contiguous_matches_and_rejects_missing(self) -> None:
        contiguous = _score("abc", "abc.py")
        gapped = _score("abc", "a_x_b_x_c.py")

        self.assertIsNotNone(contiguous)
        self.assertIsNotNone(gapped)
        self.assertGreater(contiguous, gapped)
        self.assertIsNone(_score("zzz", "abc.py"))

    def test_positions_are_leftmost_subsequence_offsets(self) -> None:
        scored = fuzzy_score_positions("ap", "apple")

        self.assertIsNotNone(scored)
        self.assertEqual(scored[1], [0, 1])
        self.assertEqual(fuzzy_score_positions("gpe", "grape")[1], [0, 3, 4])

    def test_matching_is_case_insensitive(self) -> None:
        self.assertEqual(fuzzy_score_positions("AP", "apple")[1], [0, 1])
        self.assertEqual(fuzzy_score_positions("ap", "APPLE")[1], [0, 1])

    def test_empty_query_matches_with_zero_score(self) -> None:
        self.assertEqual(fuzzy_score_positions("", "anything"), (0, []))

    def test_word_boundary_matches_score_higher(self) -> None:
        boundary = _score("b", "foo_bar")
        inner = _score("b", "fooxbar")

        self.assertGreater(boundary, inner)

    def test_order_matters(self) -> None:
        self.assertIsNone(fuzzy_score_positions("pa", "ap"))


if __name__ == "__main__":
    unittest.main()
