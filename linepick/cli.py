"""Command-line front door for linepick.

Reads candidate lines from stdin, runs the interactive prompt on the
controlling terminal, and prints the selected lines to stdout.
"""

from __future__ import annotations

import argparse
import functools
import os
import sys
from typing import BinaryIO, TextIO

from . import __version__
from .config import SelectorOptions, build_options
from .input import read_key
from .line_store import LineStore, encode_line
from .prompt import SelectionPrompt
from .render import Screen
from .state import CONFIRMED
from .terminal import TerminalController, open_tty, terminal_size

USAGE_EXAMPLE = """\
Example:
    cat file.txt | linepick -m -i > custom_selection.txt
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linepick",
        description="Interactively filter and select lines read from stdin.",
        epilog=USAGE_EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-a",
        "--autoselect",
        action="store_true",
        help="The line under the cursor is also selected (no effect with -m).",
    )
    parser.add_argument("-i", "--insensitive", action="store_true", help="Enable case insensitive matching.")
    parser.add_argument("-m", "--multiselect", action="store_true", help="Select and output more than one line.")
    parser.add_argument("-n", "--numbers", action="store_true", help="Display line numbers.")
    parser.add_argument("-p", "--prompt", default=None, help="The prompt displayed in the search bar.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_selection(
    store: LineStore,
    options: SelectorOptions,
    tty_fd: int,
    surface: TextIO,
) -> str:
    """Run the prompt on ``tty_fd`` in raw mode and return its outcome.

    Page height is the terminal height minus the status line. The drawn
    block is erased before raw mode is released.
    """
    columns, rows = terminal_size(tty_fd)
    page_height = max(1, rows - 1)
    screen = Screen(surface, page_height)
    prompt = SelectionPrompt(
        store,
        options,
        page_height,
        columns,
        functools.partial(read_key, tty_fd),
        screen,
    )
    terminal = TerminalController(tty_fd)
    with terminal.raw_mode():
        try:
            return prompt.run()
        finally:
            screen.clear()


def write_selection(store: LineStore, out: BinaryIO) -> int:
    """Write selected lines to the byte stream ``out``; return how many were written.

    Lines are re-encoded with the input error handler, so they come out
    byte-for-byte as read.
    """
    selected = store.selected_lines()
    for text in selected:
        out.write(encode_line(text) + b"\n")
    out.flush()
    return len(selected)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the selector, and return the process exit status.

    Exit status is ``0`` when at least one line was written, else ``1``.
    """
    args = build_parser().parse_args(argv)
    options = build_options(
        autoselect=args.autoselect,
        insensitive=args.insensitive,
        multiselect=args.multiselect,
        numbers=args.numbers,
        prompt=args.prompt,
    )

    store = LineStore.load_binary(sys.stdin.buffer)
    tty_fd = open_tty()
    try:
        outcome = run_selection(store, options, tty_fd, sys.stderr)
    finally:
        os.close(tty_fd)

    if outcome != CONFIRMED:
        return 1
    return 0 if write_selection(store, sys.stdout.buffer) > 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
