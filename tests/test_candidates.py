from __future__ import annotations

import unittest

from fuzzy_finder.candidates import Candidate, CandidateStore
from fuzzy_finder.errors import EmptyInputError, FuzzyFinderError


class CandidateStoreTests(unittest.TestCase):
    def test_load_assigns_stable_ids_in_input_order(self) -> None:
        store = CandidateStore.load(["apple", "banana", "grape"])

        self.assertEqual(len(store), 3)
        self.assertEqual(store.get(1), Candidate(id=1, text="banana", payload="banana"))
        self.assertEqual([candidate.id for candidate in store], [0, 1, 2])

    def test_empty_rows_raise_empty_input_error(self) -> None:
        with self.assertRaises(EmptyInputError):
            CandidateStore.load([])
        self.assertTrue(issubclass(EmptyInputError, FuzzyFinderError))

    def test_from_items_keeps_payloads(self) -> None:
        gandalf = {"name": "Gandalf", "bio": "A wizard"}
        frodo = {"name": "Frodo", "bio": "A hobbit"}
        store = CandidateStore.from_items([("Gandalf", gandalf), ("Frodo", frodo)])

        self.assertEqual(store.texts([1, 0]), ["Frodo", "Gandalf"])
        self.assertIs(store.payloads([0])[0], gandalf)

    def test_candidates_are_immutable(self) -> None:
        store = CandidateStore.load(["x"])

        with self.assertRaises(AttributeError):
            store.get(0).text = "y"  # type: ignore[misc]

    def test_load_accepts_generators(self) -> None:
        store = CandidateStore.load(line for line in ("a", "b"))

        self.assertEqual(store.texts(range(len(store))), ["a", "b"])


if __name__ == "__main__":
    unittest.main()
