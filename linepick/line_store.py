"""Ordered input lines with per-line selection flags.

Line identity is its index in the store; the store never grows, shrinks, or
reorders after ``load``. Only ``selected`` flags change afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import BinaryIO

# Undecodable input bytes round-trip through lone surrogates.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


@dataclass
class Line:
    text: str
    selected: bool = False


def decode_line(raw: bytes) -> str:
    return raw.decode(TEXT_ENCODING, TEXT_ERRORS)


def encode_line(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def strip_line_terminator(raw: str) -> str:
    """Drop one trailing ``\\n`` / ``\\r\\n`` terminator, keeping inner text intact."""
    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith("\n"):
        return raw[:-1]
    return raw


class LineStore:
    """Fixed, ordered collection of ``Line`` records."""

    def __init__(self, lines: list[Line]) -> None:
        self._lines = lines

    @classmethod
    def load(cls, raw_lines: Iterable[str]) -> LineStore:
        """Build a store from raw input records; empty lines are kept."""
        return cls([Line(strip_line_terminator(raw)) for raw in raw_lines])

    @classmethod
    def load_binary(cls, stream: BinaryIO) -> LineStore:
        """Build a store from a byte stream, keeping undecodable bytes intact."""
        return cls.load(decode_line(raw) for raw in stream)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def set_selection(self, selected: bool, predicate: Callable[[Line], bool] | None = None) -> None:
        """Set ``selected`` on every line, or only on lines where ``predicate`` holds."""
        for line in self._lines:
            if predicate is None or predicate(line):
                line.selected = selected

    def deselect_all(self) -> None:
        self.set_selection(False)

    def selected_count(self) -> int:
        return sum(1 for line in self._lines if line.selected)

    def selected_lines(self) -> list[str]:
        """Return texts of selected lines in input order."""
        return [line.text for line in self._lines if line.selected]
