"""Interactive selection prompt: the filter/cursor/selection state machine.

Each iteration applies autoselect, redraws the page, reads one key, and
applies it. The loop ends on Enter (confirmed) or Escape (cancelled).
Final screen erase and output of selected lines belong to the caller.
"""

from __future__ import annotations

from collections.abc import Callable

from .config import SelectorOptions
from .input import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_PAGE_DOWN,
    KEY_PAGE_UP,
    KEY_TAB,
    KEY_UP,
)
from .line_store import LineStore
from .matching import Matcher
from .render import Screen, build_status_line, render_rows
from .state import CANCELLED, CONFIRMED, RUNNING, PromptState

MAX_QUERY_LENGTH = 79


class SelectionPrompt:
    """Owns the session state for one interactive selection run."""

    def __init__(
        self,
        store: LineStore,
        options: SelectorOptions,
        page_height: int,
        width: int,
        read_key: Callable[[], str],
        screen: Screen | None = None,
    ) -> None:
        self.store = store
        self.options = options
        self.page_height = max(1, page_height)
        self.width = width
        self.read_key = read_key
        self.screen = screen
        self.state = PromptState()
        self.matcher = Matcher(store, options.predicate)
        self.matcher.refresh(self.state.query)

    @property
    def matches(self) -> list[int]:
        return self.matcher.matches

    def _clamp_cursor(self, cursor: int) -> int:
        return max(0, min(cursor, len(self.matches) - 1))

    def current_index(self) -> int | None:
        """Store index of the line under the cursor, or ``None`` with no matches."""
        if not self.matches:
            return None
        return self.matches[self.state.cursor]

    def apply_autoselect(self) -> None:
        """Move the automatic selection to the line under the cursor."""
        if self.state.autoselected is not None:
            self.store[self.state.autoselected].selected = False
        self.state.autoselected = self.current_index()
        if self.state.autoselected is not None:
            self.store[self.state.autoselected].selected = True

    def toggle_current(self) -> None:
        """Flip selection of the cursor line; single mode clears others first."""
        index = self.current_index()
        if index is None:
            return
        if not self.options.multiselect:
            self.store.deselect_all()
        line = self.store[index]
        line.selected = not line.selected

    def handle_key(self, key: str) -> None:
        """Apply one key event to the session state."""
        state = self.state
        last = len(self.matches) - 1
        query_changed = False

        if key == KEY_UP:
            state.cursor = max(state.cursor - 1, 0)
        elif key == KEY_DOWN:
            state.cursor = max(0, min(state.cursor + 1, last))
        elif key == KEY_PAGE_UP:
            state.cursor = max(state.cursor - self.page_height, 0)
        elif key == KEY_PAGE_DOWN:
            state.cursor = max(0, min(state.cursor + self.page_height, last))
        elif key == KEY_ESC:
            self.store.deselect_all()
            state.outcome = CANCELLED
        elif key == KEY_ENTER:
            state.outcome = CONFIRMED
        elif key == KEY_BACKSPACE:
            if state.query:
                state.query = state.query[:-1]
                query_changed = True
        elif key == KEY_TAB:
            self.toggle_current()
        elif len(key) == 1:
            # Keys past the length limit are dropped.
            if len(state.query) < MAX_QUERY_LENGTH:
                state.query += key
                query_changed = True

        if query_changed and self.matcher.refresh(state.query):
            state.cursor = 0
        state.cursor = self._clamp_cursor(state.cursor)

    def draw(self) -> None:
        if self.screen is None:
            return
        rows = render_rows(
            self.store,
            self.matches,
            self.state.cursor,
            self.page_height,
            self.width,
            numbers=self.options.numbers,
        )
        status = build_status_line(
            len(self.matches),
            len(self.store),
            self.options.prompt,
            self.state.query,
            self.width,
        )
        self.screen.draw(rows, status)

    def run(self) -> str:
        """Loop until Enter or Escape; return the final outcome."""
        while self.state.outcome == RUNNING:
            if self.options.effective_autoselect:
                self.apply_autoselect()
            self.draw()
            self.handle_key(self.read_key())
        return self.state.outcome
