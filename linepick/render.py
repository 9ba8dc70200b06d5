"""Page layout and drawing of the match list on the display surface.

The visible page is derived from the cursor alone: page ``cursor // height``
shows match indices ``[page * height, (page + 1) * height)``. Every draw
produces exactly ``height`` rows plus one status line, so erasing the
previous block is always ``height + 1`` lines.
"""

from __future__ import annotations

from typing import TextIO

from .line_store import LineStore

SELECTED_MARK = "*"
CURSOR_MARK = ">"
MARKER_COLUMNS = 2

ERASE_LINE = "\033[G\033[K"
CURSOR_UP = "\033[1A"


def number_width(total: int) -> int:
    """Digit count needed to print line numbers up to ``total``."""
    return len(str(max(1, total)))


def page_bounds(cursor: int, page_height: int) -> tuple[int, int]:
    """Return the half-open match-index window of the page containing ``cursor``."""
    height = max(1, page_height)
    start = (max(0, cursor) // height) * height
    return start, start + height


def render_row(
    text: str,
    selected: bool,
    is_cursor: bool,
    width: int,
    number: int | None = None,
    num_width: int = 0,
) -> str:
    """Render one match row: optional number, selection mark, cursor mark, clipped text."""
    prefix = f"{number:0{num_width}d}" if number is not None else ""
    prefix += SELECTED_MARK if selected else " "
    prefix += CURSOR_MARK if is_cursor else " "
    text_width = max(0, width - MARKER_COLUMNS - (num_width if number is not None else 0))
    return prefix + text[:text_width]


def render_rows(
    store: LineStore,
    matches: list[int],
    cursor: int,
    page_height: int,
    width: int,
    numbers: bool = False,
) -> list[str]:
    """Render the visible page as exactly ``page_height`` rows.

    Rows past the end of ``matches`` are blank. Numbers are 1-based match
    positions zero-padded to the digit count of the whole store.
    """
    start, end = page_bounds(cursor, page_height)
    num_width = number_width(len(store)) if numbers else 0
    rows: list[str] = []
    for idx in range(start, end):
        if idx >= len(matches):
            rows.append("")
            continue
        line = store[matches[idx]]
        rows.append(
            render_row(
                line.text,
                line.selected,
                idx == cursor,
                width,
                number=idx + 1 if numbers else None,
                num_width=num_width,
            )
        )
    return rows


def build_status_line(match_count: int, total: int, prompt: str, query: str, width: int | None = None) -> str:
    """Compose ``matches/total prompt>query``, clipped to ``width`` when given."""
    status = f"{match_count}/{total} {prompt}>{query}"
    if width is not None:
        return status[: max(0, width)]
    return status


def erase_block(page_height: int) -> str:
    """Escape sequence erasing the status line and ``page_height`` rows above it.

    Leaves the cursor at column 1 of the first erased row.
    """
    return ERASE_LINE + (CURSOR_UP + ERASE_LINE) * max(0, page_height)


class Screen:
    """Draws page blocks on a text stream, erasing the previous block first."""

    def __init__(self, surface: TextIO, page_height: int) -> None:
        self.surface = surface
        self.page_height = page_height
        self.drawn = False

    def draw(self, rows: list[str], status: str) -> None:
        out: list[str] = []
        if self.drawn:
            out.append(erase_block(self.page_height))
        for row in rows:
            out.append(row)
            out.append("\n")
        out.append(status)
        self.surface.write("".join(out))
        self.surface.flush()
        self.drawn = True

    def clear(self) -> None:
        """Erase the last drawn block, if any."""
        if not self.drawn:
            return
        self.surface.write(erase_block(self.page_height))
        self.surface.flush()
        self.drawn = False
