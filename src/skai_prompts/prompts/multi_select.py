"""Flat searchable pick-many prompt."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
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
    render_search_line,
)
from ..scroll import DOWN, UP, ScrollWindow
from ..search import build_searchable, filter_entries
from ..types import Option, SearchableEntry
from .base import BasePrompt

HINTS = "↑↓ navigate • space select • enter confirm • esc cancel"


class MultiSelectPrompt(BasePrompt):
    """Pick-many over a flat option list with inline search.

    Selection is tracked by option position, so option values need not be
    hashable. Toggling always resolves against the filtered view.
    """

    noun = "skills"

    def __init__(
        self,
        message: str,
        options: Sequence[Option],
        initial_values: Iterable[Any] = (),
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.options = list(options)
        # Entry values are positions into self.options
        self.entries: list[SearchableEntry[int]] = build_searchable(
            [replace(opt, value=i) for i, opt in enumerate(self.options)]
        )
        initial = list(initial_values)
        self.selected: set[int] = {i for i, opt in enumerate(self.options) if opt.value in initial}
        self.window = ScrollWindow(self.max_visible)
        self._filtered: Sequence[SearchableEntry[int]] | None = None

    def filtered(self) -> Sequence[SearchableEntry[int]]:
        if self._filtered is None:
            self._filtered = filter_entries(self.entries, self.search_term)
        return self._filtered

    def current(self) -> SearchableEntry[int] | None:
        rows = self.filtered()
        if not rows:
            return None
        return rows[min(self.window.cursor, len(rows) - 1)]

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
        self._filtered = None
        self.window.reset(len(self.filtered()))

    def _on_action(self, event: KeyEvent) -> None:
        count = len(self.filtered())
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
            entry = self.current()
            if entry is not None:
                self.toggle(entry.value)

    def _render_active(self) -> list[str]:
        theme = self.theme
        lines = render_header(self.state, self.message, theme)
        if not self.options:
            lines.extend(render_empty([f"No {self.noun} available"], theme))
            return lines

        rows = self.filtered()
        count_text = f"({len(rows)} of {len(self.options)} {self.noun})"
        lines.append(render_search_line(self.search_term, True, count_text, len(self.selected), theme))
        lines.append(render_hint_line(HINTS, theme))

        if not rows:
            lines.extend(render_no_results(self.search_term, theme, self.noun))
            lines.extend(render_footer(theme))
            return lines

        above, below = self.window.scroll_indicators(len(rows))
        lines.extend(render_above_indicator(above, theme))
        start, end = self.window.visible_range(len(rows))
        for index in range(start, end):
            entry = rows[index]
            lines.append(
                render_item_row(
                    entry.label,
                    entry.hint,
                    is_selected=entry.value in self.selected,
                    is_active=index == self.window.cursor,
                    search_term=self.search_term,
                    theme=theme,
                )
            )
        lines.extend(render_below_indicator(below, theme))
        lines.extend(render_footer(theme))
        return lines
