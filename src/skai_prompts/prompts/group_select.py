"""Grouped pick-many prompt: group header rows followed by their options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from ..keys import Action, KeyEvent
from ..render import (
    render_above_indicator,
    render_below_indicator,
    render_empty,
    render_footer,
    render_group_row,
    render_header,
    render_hint_line,
    render_item_row,
    render_no_results,
    render_search_box,
)
from ..scroll import DOWN, UP, ScrollWindow
from ..search import build_grouped_searchable, filter_entries
from ..types import GroupedEntries, Option, SearchableEntry
from .base import BasePrompt

HINTS = "↑↓ navigate • space select (group: all/none) • enter confirm • esc cancel"


@dataclass(frozen=True)
class GroupRow:
    """One visible row: a group header (entry is None) or an option."""

    group: GroupedEntries[int]
    entry: SearchableEntry[int] | None = None

    @property
    def is_header(self) -> bool:
        return self.entry is None


class GroupMultiSelectPrompt(BasePrompt):
    """Pick-many over named groups of options.

    A group whose name matches the search term keeps all of its options.
    Space on a group header selects every option in the group, or deselects
    them all when the group is already fully selected.
    """

    noun = "skills"

    def __init__(
        self,
        message: str,
        groups: Mapping[str, Sequence[Option]],
        initial_values: Iterable[Any] = (),
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.options: list[Option] = []
        positioned: dict[str, list[Option]] = {}
        for name, options in groups.items():
            positioned[name] = []
            for opt in options:
                positioned[name].append(replace(opt, value=len(self.options)))
                self.options.append(opt)
        self.grouped: list[GroupedEntries[int]] = build_grouped_searchable(positioned)

        initial = list(initial_values)
        self.selected: set[int] = {i for i, opt in enumerate(self.options) if opt.value in initial}
        self.window = ScrollWindow(self.max_visible)
        self._rows: list[GroupRow] | None = None

    def rows(self) -> list[GroupRow]:
        """Visible rows for the current term, memoized until the term changes."""
        if self._rows is None:
            term = self.search_term.lower()
            rows: list[GroupRow] = []
            for group in self.grouped:
                if not term or term in group.searchable_text:
                    entries = group.entries
                else:
                    entries = filter_entries(group.entries, term)
                if term and not entries:
                    continue
                rows.append(GroupRow(group))
                rows.extend(GroupRow(group, entry) for entry in entries)
            self._rows = rows
        return self._rows

    def current(self) -> GroupRow | None:
        rows = self.rows()
        if not rows:
            return None
        return rows[min(self.window.cursor, len(rows) - 1)]

    def group_counts(self, group: GroupedEntries[int]) -> tuple[int, int]:
        selected = sum(1 for entry in group.entries if entry.value in self.selected)
        return selected, len(group.entries)

    def toggle_group(self, group: GroupedEntries[int]) -> None:
        positions = {entry.value for entry in group.entries}
        if positions and positions <= self.selected:
            self.selected -= positions
        else:
            self.selected |= positions

    def toggle(self, position: int) -> None:
        if position in self.selected:
            self.selected.discard(position)
        else:
            self.selected.add(position)

    def value(self) -> list[Any]:
        return [self.options[i].value for i in sorted(self.selected)]

    def selected_labels(self) -> list[str]:
        return [self.options[i].label for i in sorted(self.selected)]

    def _on_search_changed(self) -> None:
        self._rows = None
        self.window.reset(len(self.rows()))

    def _on_action(self, event: KeyEvent) -> None:
        count = len(self.rows())
        action = event.action
        if action is Action.UP:
            self.window.navigate(UP, count)
        elif action is Action.DOWN:
            self.window.navigate(DOWN, count)
        elif action is Action.PAGE_UP:
            self.window.navigate_page(UP, count)
        elif action is Action.PAGE_DOWN:
            self.window.navigate_page(DOWN, count)
        elif action is Action.TOGGLE:
            row = self.current()
            if row is None:
                return
            if row.is_header:
                self.toggle_group(row.group)
            else:
                self.toggle(row.entry.value)

    def _render_active(self) -> list[str]:
        theme = self.theme
        lines = render_header(self.state, self.message, theme)
        if not self.grouped:
            lines.extend(render_empty([f"No {self.noun} available"], theme))
            return lines

        lines.extend(render_search_box(self.search_term, True, theme, flash=self.search_flash))
        lines.append(render_hint_line(HINTS, theme, selected=len(self.selected)))

        rows = self.rows()
        if not rows:
            lines.extend(render_no_results(self.search_term, theme, self.noun))
            lines.extend(render_footer(theme))
            return lines

        above, below = self.window.scroll_indicators(len(rows))
        lines.extend(render_above_indicator(above, theme))
        start, end = self.window.visible_range(len(rows))
        for index in range(start, end):
            row = rows[index]
            is_active = index == self.window.cursor
            if row.is_header:
                selected, total = self.group_counts(row.group)
                lines.append(
                    render_group_row(
                        row.group.group_name,
                        selected,
                        total,
                        is_all_selected=total > 0 and selected == total,
                        is_active=is_active,
                        search_term=self.search_term,
                        theme=theme,
                    )
                )
            else:
                lines.append(
                    render_item_row(
                        row.entry.label,
                        row.entry.hint,
                        is_selected=row.entry.value in self.selected,
                        is_active=is_active,
                        search_term=self.search_term,
                        theme=theme,
                        indent="  ",
                    )
                )
        lines.extend(render_below_indicator(below, theme))
        lines.extend(render_footer(theme))
        return lines
