"""Toggle manager prompt: stage enable/disable changes, commit on confirm."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..keys import Action, KeyEvent
from ..render import (
    render_above_indicator,
    render_below_indicator,
    render_column_header,
    render_empty,
    render_footer,
    render_header,
    render_hint_line,
    render_no_results,
    render_search_box,
    render_toggle_row,
)
from ..scroll import DOWN, UP
from ..search import build_grouped_searchable
from ..tabs import TabNavigation
from ..types import ManagedEntry, Option, SearchableEntry
from .base import BasePrompt
from .view import TabbedEntries

logger = logging.getLogger(__name__)

HINTS = "space toggle • ←→ tabs • enter apply • esc cancel"
DEFAULT_HEADERS = ("SKILL", "AGENT", "SCOPE")


class ToggleManagerPrompt(BasePrompt):
    """Toggle the enabled state of installed entries.

    Nothing is applied here: toggles are staged in ``pending``, which holds a
    key only while its new state differs from the entry's original state.
    On submit the result is ``(entries, pending)``.

    Args:
        message: Prompt title.
        entries: Installed entries; ``original_enabled`` is never mutated.
        headers: Column headers (name first). Missing ones are left blank.
    """

    noun = "skills"

    def __init__(
        self,
        message: str,
        entries: Sequence[ManagedEntry],
        headers: Sequence[str] = DEFAULT_HEADERS,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.entries = list(entries)
        self.pending: dict[str, bool] = {}

        width = max((len(entry.columns) for entry in self.entries), default=0) + 1
        self.headers = list(headers[:width]) + [""] * max(0, width - len(headers))

        by_category: dict[str, list[Option]] = {}
        for i, entry in enumerate(self.entries):
            option = Option(value=i, label=entry.name, hint=entry.hint, description=" ".join(entry.columns))
            by_category.setdefault(entry.category or "", []).append(option)
        self.view = TabbedEntries(build_grouped_searchable(by_category), self.max_visible)

    @property
    def nav(self) -> TabNavigation:
        return self.view.nav

    def filtered(self) -> Sequence[SearchableEntry[int]]:
        return self.view.filtered(self.search_term)

    def effective(self, entry: ManagedEntry) -> bool:
        """Current state: the staged value if any, else the original."""
        return self.pending.get(entry.key, entry.original_enabled)

    def toggle(self, entry: ManagedEntry) -> None:
        new_state = not self.effective(entry)
        if new_state == entry.original_enabled:
            self.pending.pop(entry.key, None)
        else:
            self.pending[entry.key] = new_state
        logger.debug("Toggled %s -> %s (%d pending)", entry.key, new_state, len(self.pending))

    def value(self) -> tuple[list[ManagedEntry], dict[str, bool]]:
        return self.entries, dict(self.pending)

    def selected_labels(self) -> list[str]:
        return [entry.name for entry in self.entries if entry.key in self.pending]

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
            current = self.view.current(self.search_term)
            if current is not None:
                self.toggle(self.entries[current.value])

    def _render_active(self) -> list[str]:
        theme = self.theme
        lines = render_header(self.state, self.message, theme)
        if not self.entries:
            lines.extend(render_empty(["No skills installed"], theme))
            return lines

        lines.extend(render_search_box(self.search_term, True, theme, flash=self.search_flash))
        if self.view.has_categories:
            lines.extend(self.nav.render_tab_bar(theme))
        lines.append(render_hint_line(HINTS, theme, pending=len(self.pending)))

        rows = self.filtered()
        if not rows:
            lines.extend(render_no_results(self.search_term, theme, self.noun))
            lines.extend(render_footer(theme))
            return lines

        lines.append(render_column_header(self.headers, theme))
        window = self.nav.window()
        above, below = window.scroll_indicators(len(rows))
        lines.extend(render_above_indicator(above, theme))
        start, end = window.visible_range(len(rows))
        for index in range(start, end):
            entry = self.entries[rows[index].value]
            lines.append(
                render_toggle_row(
                    entry.name,
                    entry.columns,
                    enabled=self.effective(entry),
                    original_enabled=entry.original_enabled,
                    is_active=index == window.cursor,
                    search_term=self.search_term,
                    theme=theme,
                )
            )
        lines.extend(render_below_indicator(below, theme))
        lines.extend(render_footer(theme))
        return lines
