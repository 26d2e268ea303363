"""Tab-filtered list view shared by the tabbed prompts."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..search import ALL_TAB_ID, MatchCounter, filter_entries
from ..tabs import TabNavigation, create_category_tabs
from ..types import GroupedEntries, SearchableEntry

logger = logging.getLogger(__name__)


class TabbedEntries:
    """Searchable entries split across category tabs plus "All".

    Entry values must be positions in the caller's item list; the "All" tab
    lists every entry in position order. The filtered list is memoized by
    ``(term, active tab id)`` and the match counts by term; both are dropped
    eagerly by ``refresh``.

    Args:
        grouped: Entries per category. A group with an empty name holds
            uncategorized entries, which only appear under "All".
        max_visible: Rows shown per tab before scrolling.
    """

    def __init__(self, grouped: Sequence[GroupedEntries[int]], max_visible: int):
        self.grouped = list(grouped)
        self.all_entries: list[SearchableEntry[int]] = sorted(
            (entry for group in self.grouped for entry in group.entries),
            key=lambda entry: entry.value,
        )
        by_name = {group.group_name: group for group in self.grouped if group.group_name}
        tabs = create_category_tabs(sorted(by_name))
        # Counted under tab ids, which stay unique when names differ only in case
        tab_groups = [replace(by_name[tab.label], group_name=tab.id) for tab in tabs[1:]]
        self.by_tab: dict[str, tuple[SearchableEntry[int], ...]] = {
            group.group_name: group.entries for group in tab_groups
        }
        self.nav = TabNavigation(tabs, max_visible)
        self.counter = MatchCounter(tab_groups)
        self._filtered: Sequence[SearchableEntry[int]] | None = None
        self._filtered_key: tuple[str, str] | None = None

    @property
    def has_categories(self) -> bool:
        return len(self.nav.tabs) > 1

    def entries_for_tab(self, tab_id: str) -> Sequence[SearchableEntry[int]]:
        if tab_id == ALL_TAB_ID:
            return self.all_entries
        return self.by_tab.get(tab_id, ())

    def filtered(self, term: str) -> Sequence[SearchableEntry[int]]:
        key = (term, self.nav.active_tab().id)
        if self._filtered is None or self._filtered_key != key:
            self._filtered = filter_entries(self.entries_for_tab(key[1]), term)
            self._filtered_key = key
        return self._filtered

    def counts(self, term: str) -> dict[str, int]:
        counts = dict(self.counter.counts(term))
        # Uncategorized entries count towards "All" only
        counts[ALL_TAB_ID] = len(filter_entries(self.all_entries, term))
        return counts

    def current(self, term: str) -> SearchableEntry[int] | None:
        rows = self.filtered(term)
        if not rows:
            return None
        return rows[min(self.nav.active_tab_state().cursor, len(rows) - 1)]

    def refresh(self, term: str) -> None:
        """Invalidate memos, update badges and reclamp after a term change."""
        self._filtered = None
        self.counter.invalidate()
        self.nav.update_badges(self.counts(term) if term else None)
        self.nav.reset_content(len(self.filtered(term)))

    def switch_tab(self, step: int, term: str) -> None:
        if step < 0:
            self.nav.navigate_left()
        else:
            self.nav.navigate_right()
        logger.debug("Active tab: %s", self.nav.active_tab().id)
        # The term may have changed since this tab was last shown
        count = len(self.filtered(term))
        if self.nav.active_tab_state().cursor >= count:
            self.nav.reset_content(count)
