"""Terminal control helpers for the selection session.

Owns the interactive device, raw-mode lifecycle, and size queries. The
display surface is stderr, so output post-processing stays enabled while in
raw mode.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

TTY_PATH = "/dev/tty"
DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


def open_tty(path: str = TTY_PATH) -> int:
    """Open the interactive device, exiting with a fatal message on failure."""
    try:
        return os.open(path, os.O_RDWR)
    except OSError as exc:
        raise SystemExit(f"FATAL: Can't reopen tty: {exc}") from exc


def terminal_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` for ``fd``, falling back to 80x24."""
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        return DEFAULT_COLUMNS, DEFAULT_ROWS
    columns = size.columns if size.columns > 0 else DEFAULT_COLUMNS
    rows = size.lines if size.lines > 0 else DEFAULT_ROWS
    return columns, rows


class TerminalController:
    """Manage raw-mode transitions for the interactive input device."""

    def __init__(self, tty_fd: int) -> None:
        """Capture tty state for later restoration."""
        self.tty_fd = tty_fd
        self._saved_tty_state = termios.tcgetattr(tty_fd)

    def enable_raw_mode(self) -> None:
        """Switch to non-canonical, non-echoing, single-byte reads."""
        tty.setraw(self.tty_fd, termios.TCSAFLUSH)
        # Keep newline translation for the rows written to the display surface.
        mode = termios.tcgetattr(self.tty_fd)
        mode[tty.OFLAG] |= termios.OPOST
        termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, mode)

    def restore(self) -> None:
        """Restore the tty attributes captured at construction."""
        termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/restore."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.restore()
