"""Selection prompt state-machine tests.

Drives ``SelectionPrompt`` with scripted key sequences and checks cursor
bounds, filter-triggered resets, and selection-mode semantics.
"""

from __future__ import annotations

import io
import unittest

from linepick.config import SelectorOptions
from linepick.line_store import LineStore
from linepick.prompt import MAX_QUERY_LENGTH, SelectionPrompt
from linepick.render import Screen
from linepick.state import CANCELLED, CONFIRMED, RUNNING


def _scripted(keys: list[str]):
    pending = list(keys)

    def read_key() -> str:
        return pending.pop(0)

    return read_key


def _prompt(lines: list[str], keys: list[str] | None = None, page_height: int = 10, **options) -> SelectionPrompt:
    return SelectionPrompt(
        LineStore.load(lines),
        SelectorOptions(**options),
        page_height=page_height,
        width=80,
        read_key=_scripted(keys or []),
    )


class PromptNavigationTests(unittest.TestCase):
    def test_initial_state_matches_everything(self) -> None:
        prompt = _prompt(["a", "b", "c"])
        self.assertEqual(prompt.matches, [0, 1, 2])
        self.assertEqual(prompt.state.cursor, 0)
        self.assertEqual(prompt.state.outcome, RUNNING)

    def test_arrow_keys_stop_at_bounds(self) -> None:
        prompt = _prompt(["a", "b"])
        prompt.handle_key("UP")
        self.assertEqual(prompt.state.cursor, 0)
        prompt.handle_key("DOWN")
        prompt.handle_key("DOWN")
        self.assertEqual(prompt.state.cursor, 1)

    def test_page_down_clamps_to_last_match(self) -> None:
        prompt = _prompt(["1", "2", "3", "4", "5"], page_height=2)
        prompt.handle_key("PAGE_DOWN")
        self.assertEqual(prompt.state.cursor, 2)
        prompt.handle_key("PAGE_DOWN")
        self.assertEqual(prompt.state.cursor, 4)
        prompt.handle_key("PAGE_UP")
        self.assertEqual(prompt.state.cursor, 2)
        prompt.handle_key("PAGE_UP")
        prompt.handle_key("PAGE_UP")
        self.assertEqual(prompt.state.cursor, 0)

    def test_navigation_with_no_matches_keeps_cursor_at_zero(self) -> None:
        prompt = _prompt(["a", "b"])
        prompt.handle_key("z")
        self.assertEqual(prompt.matches, [])
        for key in ("DOWN", "PAGE_DOWN", "UP", "PAGE_UP", "TAB"):
            prompt.handle_key(key)
            self.assertEqual(prompt.state.cursor, 0)
        self.assertEqual(prompt.store.selected_lines(), [])


class PromptFilterTests(unittest.TestCase):
    def test_filter_change_with_new_count_resets_cursor(self) -> None:
        prompt = _prompt(["ab", "ac", "b"])
        prompt.handle_key("DOWN")
        prompt.handle_key("a")
        self.assertEqual(prompt.matches, [0, 1])
        self.assertEqual(prompt.state.cursor, 0)

    def test_filter_change_with_same_count_keeps_cursor(self) -> None:
        prompt = _prompt(["xa1", "xa2", "y"])
        prompt.handle_key("x")
        prompt.handle_key("DOWN")
        self.assertEqual(prompt.state.cursor, 1)
        prompt.handle_key("a")
        self.assertEqual(prompt.matches, [0, 1])
        self.assertEqual(prompt.state.cursor, 1)

    def test_backspace_on_empty_filter_is_noop(self) -> None:
        prompt = _prompt(["a", "b", "c"])
        prompt.handle_key("DOWN")
        prompt.handle_key("BACKSPACE")
        self.assertEqual(prompt.state.query, "")
        self.assertEqual(prompt.matches, [0, 1, 2])
        self.assertEqual(prompt.state.cursor, 1)

    def test_query_length_is_bounded(self) -> None:
        prompt = _prompt(["a"])
        for _ in range(MAX_QUERY_LENGTH + 5):
            prompt.handle_key("q")
        self.assertEqual(len(prompt.state.query), MAX_QUERY_LENGTH)

    def test_unknown_key_changes_nothing(self) -> None:
        prompt = _prompt(["a", "b"])
        prompt.handle_key("UNKNOWN")
        self.assertEqual(prompt.state.query, "")
        self.assertEqual(prompt.state.outcome, RUNNING)

    def test_case_insensitive_option(self) -> None:
        prompt = _prompt(["Apple", "banana"], insensitive=True)
        prompt.handle_key("A")
        self.assertEqual(prompt.matches, [0, 1])


class PromptSelectionTests(unittest.TestCase):
    def test_single_mode_keeps_at_most_one_selection(self) -> None:
        prompt = _prompt(["a", "b", "c"])
        prompt.handle_key("TAB")
        prompt.handle_key("DOWN")
        prompt.handle_key("TAB")
        self.assertEqual(prompt.store.selected_lines(), ["b"])

    def test_multi_mode_toggles_independently(self) -> None:
        prompt = _prompt(["a", "b", "c"], multiselect=True)
        prompt.handle_key("TAB")
        prompt.handle_key("DOWN")
        prompt.handle_key("DOWN")
        prompt.handle_key("TAB")
        self.assertEqual(prompt.store.selected_lines(), ["a", "c"])
        prompt.handle_key("TAB")
        self.assertEqual(prompt.store.selected_lines(), ["a"])

    def test_escape_clears_all_selections(self) -> None:
        prompt = _prompt(["a", "b", "c"], ["TAB", "DOWN", "TAB", "b", "ESC"], multiselect=True)
        self.assertEqual(prompt.run(), CANCELLED)
        self.assertEqual(prompt.store.selected_lines(), [])

    def test_enter_preserves_selection(self) -> None:
        prompt = _prompt(["a", "bb", "ccc"], ["b", "TAB", "ENTER"])
        self.assertEqual(prompt.run(), CONFIRMED)
        self.assertEqual(prompt.store.selected_lines(), ["bb"])

    def test_autoselect_follows_cursor(self) -> None:
        prompt = _prompt(["a", "b", "c"], ["DOWN", "DOWN", "ENTER"], autoselect=True)
        self.assertEqual(prompt.run(), CONFIRMED)
        self.assertEqual(prompt.store.selected_lines(), ["c"])

    def test_autoselect_is_ignored_in_multiselect(self) -> None:
        prompt = _prompt(["a", "b"], ["DOWN", "ENTER"], autoselect=True, multiselect=True)
        prompt.run()
        self.assertEqual(prompt.store.selected_lines(), [])

    def test_autoselect_with_no_matches_selects_nothing(self) -> None:
        prompt = _prompt(["a", "b"], ["z", "ENTER"], autoselect=True)
        prompt.run()
        self.assertEqual(prompt.store.selected_lines(), [])


class PromptDrawTests(unittest.TestCase):
    def test_run_draws_each_iteration(self) -> None:
        surface = io.StringIO()
        prompt = SelectionPrompt(
            LineStore.load(["a", "bb"]),
            SelectorOptions(prompt="pick"),
            page_height=2,
            width=80,
            read_key=_scripted(["b", "ENTER"]),
            screen=Screen(surface, 2),
        )
        prompt.run()
        output = surface.getvalue()
        self.assertTrue(output.startswith(" >a\n  bb\n2/2 pick>"))
        self.assertTrue(output.endswith(" >bb\n\n1/2 pick>b"))


if __name__ == "__main__":
    unittest.main()
