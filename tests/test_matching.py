from __future__ import annotations

import unittest

from linepick.line_store import LineStore
from linepick.matching import Matcher, contains, contains_ignore_case, match_indices


class MatchingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = LineStore.load(["Alpha", "beta", "gamma", "ALPHABET", ""])

    def test_empty_query_matches_every_line_in_order(self) -> None:
        self.assertEqual(match_indices(self.store, ""), [0, 1, 2, 3, 4])

    def test_case_sensitive_containment(self) -> None:
        self.assertEqual(match_indices(self.store, "a"), [0, 1, 2])
        self.assertEqual(match_indices(self.store, "ALPHA"), [3])

    def test_case_insensitive_containment(self) -> None:
        self.assertEqual(match_indices(self.store, "alpha", contains_ignore_case), [0, 3])

    def test_predicates_treat_empty_needle_as_match(self) -> None:
        self.assertTrue(contains("", ""))
        self.assertTrue(contains_ignore_case("x", ""))

    def test_matcher_reports_count_changes_only(self) -> None:
        matcher = Matcher(self.store)
        self.assertTrue(matcher.refresh(""))
        self.assertFalse(matcher.refresh(""))
        self.assertTrue(matcher.refresh("beta"))
        self.assertEqual(matcher.matches, [1])
        # Same size, different member: reported as unchanged.
        self.assertFalse(matcher.refresh("gamma"))
        self.assertEqual(matcher.matches, [2])

    def test_matches_reference_store_lines(self) -> None:
        matcher = Matcher(self.store)
        matcher.refresh("beta")
        self.store[matcher.matches[0]].selected = True
        self.assertEqual(self.store.selected_lines(), ["beta"])


if __name__ == "__main__":
    unittest.main()
