"""Search index: precomputed searchable text, filtering, match counts, highlighting."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TypeVar

from rich.markup import escape

from .config import MAX_SEARCH_LENGTH
from .keys import is_search_char
from .types import GroupedEntries, Option, SearchableEntry

T = TypeVar("T")

SEARCH_DELIMITER = "|"
ALL_TAB_ID = "all"


def _searchable_text(*parts: str | None) -> str:
    return SEARCH_DELIMITER.join(part or "" for part in parts).lower()


def build_searchable(options: Sequence[Option[T]]) -> list[SearchableEntry[T]]:
    """Precompute lower-cased searchable text for each option (once per option set)."""
    return [
        SearchableEntry(
            option=opt,
            searchable_text=_searchable_text(opt.label, opt.hint, opt.description),
        )
        for opt in options
    ]


def build_grouped_searchable(groups: Mapping[str, Sequence[Option[T]]]) -> list[GroupedEntries[T]]:
    """Precompute searchable entries per group; the group name is searchable too."""
    return [
        GroupedEntries(
            group_name=name,
            searchable_text=name.lower(),
            entries=tuple(
                SearchableEntry(
                    option=opt,
                    searchable_text=_searchable_text(opt.label, name, opt.hint, opt.description),
                    group=name,
                )
                for opt in options
            ),
        )
        for name, options in groups.items()
    ]


def filter_entries(entries: Sequence[SearchableEntry[T]], term: str) -> Sequence[SearchableEntry[T]]:
    """Return entries containing ``term``, in original order.

    An empty term returns ``entries`` itself.
    """
    if not term:
        return entries
    needle = term.lower()
    return [entry for entry in entries if needle in entry.searchable_text]


def find_match(text: str, term: str) -> tuple[int, int] | None:
    """Return the [start, end) span of the first case-insensitive match."""
    if not term:
        return None
    # Spans come from the original text; lower() can change string length
    match = re.search(re.escape(term), text, re.IGNORECASE)
    if match is None:
        return None
    return match.span()


def highlight_match(text: str, term: str, style: str = "bold cyan") -> str:
    """Wrap the first case-insensitive occurrence of ``term`` in ``style`` markup.

    Returns ``text`` unchanged when ``term`` is empty or absent. Otherwise the
    result is Rich markup with the surrounding text escaped.
    """
    span = find_match(text, term)
    if span is None:
        return text
    start, end = span
    return f"{escape(text[:start])}[{style}]{escape(text[start:end])}[/{style}]{escape(text[end:])}"


def highlight_match_dim(text: str, term: str, style: str = "bold cyan", dim_style: str = "dim") -> str:
    """Like highlight_match, but everything outside the match is dimmed.

    Always returns Rich markup.
    """
    span = find_match(text, term)
    if span is None:
        return f"[{dim_style}]{escape(text)}[/{dim_style}]"
    start, end = span
    parts = []
    if start:
        parts.append(f"[{dim_style}]{escape(text[:start])}[/{dim_style}]")
    parts.append(f"[{style}]{escape(text[start:end])}[/{style}]")
    if text[end:]:
        parts.append(f"[{dim_style}]{escape(text[end:])}[/{dim_style}]")
    return "".join(parts)


def match_count_by_group(grouped: Sequence[GroupedEntries], term: str) -> dict[str, int]:
    """Count matching entries per group (keyed by group name), plus "all"."""
    counts: dict[str, int] = {}
    total = 0
    for group in grouped:
        count = len(filter_entries(group.entries, term))
        counts[group.group_name] = count
        total += count
    counts[ALL_TAB_ID] = total
    return counts


class MatchCounter:
    """Memoized ``match_count_by_group`` keyed by the search term."""

    def __init__(self, grouped: Sequence[GroupedEntries]):
        self.grouped = grouped
        self._cache: dict[str, int] | None = None
        self._cache_key = ""

    def counts(self, term: str) -> dict[str, int]:
        if self._cache is None or self._cache_key != term:
            self._cache = match_count_by_group(self.grouped, term)
            self._cache_key = term
        return self._cache

    def invalidate(self) -> None:
        self._cache = None


class SearchQuery:
    """Accumulates the search term from individual key presses."""

    def __init__(self, max_length: int = MAX_SEARCH_LENGTH):
        self.term = ""
        self.max_length = max_length

    def __bool__(self) -> bool:
        return bool(self.term)

    def append(self, char: str) -> bool:
        """Append a search character. Returns True if the term changed."""
        if not is_search_char(char) or len(self.term) >= self.max_length:
            return False
        self.term += char
        return True

    def backspace(self) -> bool:
        if not self.term:
            return False
        self.term = self.term[:-1]
        return True

    def clear(self) -> bool:
        if not self.term:
            return False
        self.term = ""
        return True
