"""Tabbed pick-many prompt: one tab per group plus "All", with live badges."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from ..keys import Action, KeyEvent
from ..render import (
    render_above_indicator,
    render_below_indicator,
    render_empty,
    render_footer,
    render_header,
    render_hint_line,
    render_item_row,
    render_no_results,
    render_search_box,
)
from ..scroll import DOWN, UP
from ..search import ALL_TAB_ID, build_grouped_searchable
from ..tabs import TabNavigation
from ..types import Option, SearchableEntry
from .base import BasePrompt
from .view import TabbedEntries

HINTS = "←→/tab switch • ↑↓ navigate • space select • enter confirm • esc cancel"


class TabbedMultiSelectPrompt(BasePrompt):
    """Pick-many over groups shown as tabs.

    While searching each tab shows its match count, and tabs without matches
    are struck through (but stay reachable). Every tab keeps its own cursor.
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
        grouped = build_grouped_searchable(positioned)
        self.group_of: dict[int, str] = {
            entry.value: group.group_name for group in grouped for entry in group.entries
        }
        self.view = TabbedEntries(grouped, self.max_visible)

        initial = list(initial_values)
        self.selected: set[int] = {i for i, opt in enumerate(self.options) if opt.value in initial}

    @property
    def nav(self) -> TabNavigation:
        return self.view.nav

    def filtered(self) -> Sequence[SearchableEntry[int]]:
        return self.view.filtered(self.search_term)

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
        self.view.refresh(self.search_term)

    def _on_action(self, event: KeyEvent) -> None:
        count = len(self.filtered())
        action = event.action
        if action in (Action.LEFT, Action.PREV_TAB):
            self.view.switch_tab(-1, self.search_term)
        elif action in (Action.RIGHT, Action.NEXT_TAB):
            self.view.switch_tab(1, self.search_term)
        elif action is Action.UP:
            self.nav.navigate_content(UP, count)
        elif action is Action.DOWN:
            self.nav.navigate_content(DOWN, count)
        elif action is Action.PAGE_UP:
            self.nav.navigate_content_page(UP, count)
        elif action is Action.PAGE_DOWN:
            self.nav.navigate_content_page(DOWN, count)
        elif action is Action.TOGGLE:
            entry = self.view.current(self.search_term)
            if entry is not None:
                self.toggle(entry.value)

    def _render_active(self) -> list[str]:
        theme = self.theme
        lines = render_header(self.state, self.message, theme)
        if not self.options:
            lines.extend(render_empty([f"No {self.noun} available"], theme))
            return lines

        lines.extend(render_search_box(self.search_term, True, theme, flash=self.search_flash))
        lines.extend(self.nav.render_tab_bar(theme))
        lines.append(render_hint_line(HINTS, theme, selected=len(self.selected)))

        rows = self.filtered()
        if not rows:
            lines.extend(render_no_results(self.search_term, theme, self.noun))
            lines.extend(render_footer(theme))
            return lines

        window = self.nav.window()
        in_all_tab = self.nav.active_tab().id == ALL_TAB_ID
        above, below = window.scroll_indicators(len(rows))
        lines.extend(render_above_indicator(above, theme))
        start, end = window.visible_range(len(rows))
        for index in range(start, end):
            entry = rows[index]
            hint = entry.hint
            if in_all_tab and not hint:
                hint = self.group_of.get(entry.value)
            lines.append(
                render_item_row(
                    entry.label,
                    hint,
                    is_selected=entry.value in self.selected,
                    is_active=index == window.cursor,
                    search_term=self.search_term,
                    theme=theme,
                )
            )
        lines.extend(render_below_indicator(below, theme))
        lines.extend(render_footer(theme))
        return lines
