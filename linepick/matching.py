"""Substring matching of the line store against the filter query.

Matches are line-store indices, never copies, so selection changes made
through a match are visible in the store without re-matching.
"""

from __future__ import annotations

from collections.abc import Callable

from .line_store import LineStore

Predicate = Callable[[str, str], bool]


def contains(haystack: str, needle: str) -> bool:
    """Case-sensitive containment; an empty needle always matches."""
    return needle in haystack


def contains_ignore_case(haystack: str, needle: str) -> bool:
    """Case-insensitive containment using Unicode case folding."""
    return needle.casefold() in haystack.casefold()


def match_indices(store: LineStore, query: str, predicate: Predicate = contains) -> list[int]:
    """Return store indices whose text satisfies ``predicate(text, query)``, in order."""
    return [idx for idx, line in enumerate(store) if predicate(line.text, query)]


class Matcher:
    """Re-runs matching and reports whether the match count changed.

    Only the size is compared with the previous run; a membership change at
    equal size is reported as unchanged.
    """

    def __init__(self, store: LineStore, predicate: Predicate = contains) -> None:
        self.store = store
        self.predicate = predicate
        self.matches: list[int] = []

    def refresh(self, query: str) -> bool:
        """Recompute matches for ``query``; return ``True`` when the count changed."""
        previous_count = len(self.matches)
        self.matches = match_indices(self.store, query, self.predicate)
        return len(self.matches) != previous_count
