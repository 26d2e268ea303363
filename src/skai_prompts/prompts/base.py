"""Shared state machine for all selection prompts.

A prompt is driven one event at a time through ``dispatch`` (or
``handle_key`` for raw keys) and rendered with ``render``, which never
mutates state. Lifecycle: ``active -> submit | cancel``; both are terminal.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..config import DEFAULT_CONFIG, PromptConfig
from ..errors import CANCEL
from ..keys import Action, KeyEvent, decode_key
from ..render import render_cancel_state, render_header, render_submit_state
from ..search import SearchQuery
from ..themes import Theme
from ..timers import ScheduledTask, TimerFactory
from ..types import PromptState

logger = logging.getLogger(__name__)


class BasePrompt:
    """Base class for selection prompts.

    Subclasses implement ``_on_action`` for navigation/toggle events,
    ``_on_search_changed`` to refresh filtered views, ``_render_active`` for
    the live frame, ``selected_labels`` for the closed summary, and ``value``
    for the result.

    Args:
        message: Prompt title shown in the header.
        config: Layout/behaviour settings (defaults when None).
        theme: Explicit theme; built from ``config`` when None.
        timer_factory: Factory for the clear-search flash timer.
    """

    searchable = True

    def __init__(
        self,
        message: str,
        config: PromptConfig | None = None,
        theme: Theme | None = None,
        timer_factory: TimerFactory | None = None,
    ):
        self.message = message
        self.config = config or DEFAULT_CONFIG
        self.theme = theme or self.config.build_theme()
        self.max_visible = self.theme.max_visible_items
        self.state = PromptState.ACTIVE
        self.search = SearchQuery()
        self.search_flash = False
        self._flash_task = ScheduledTask(self.config.flash_delay, self._end_flash, timer_factory)
        self._listener: Callable[[], None] | None = None

    # ── lifecycle ──────────────────────────────────────────────────────

    @property
    def search_term(self) -> str:
        return self.search.term

    @property
    def is_active(self) -> bool:
        return self.state is PromptState.ACTIVE

    def attach(self, listener: Callable[[], None]) -> None:
        """Register the redraw callback used by out-of-band updates (the flash)."""
        self._listener = listener

    def close(self) -> None:
        """Cancel pending timers and detach the listener. Safe to call repeatedly."""
        self._flash_task.cancel()
        self._listener = None

    def submit(self) -> PromptState:
        return self._finish(PromptState.SUBMIT)

    def cancel(self) -> PromptState:
        return self._finish(PromptState.CANCEL)

    def _finish(self, state: PromptState) -> PromptState:
        if self.state.is_terminal:
            return self.state
        self.close()
        self.state = state
        logger.debug("%s: %s", self.__class__.__name__, state)
        return state

    def result(self) -> Any:
        """The prompt's value on submit, CANCEL otherwise."""
        if self.state is PromptState.SUBMIT:
            return self.value()
        return CANCEL

    def value(self) -> Any:
        raise NotImplementedError

    # ── events ─────────────────────────────────────────────────────────

    def handle_key(self, key: str) -> PromptState:
        """Decode a raw key and dispatch it. Returns the resulting state."""
        return self.dispatch(decode_key(key))

    def dispatch(self, event: KeyEvent) -> PromptState:
        """Apply one event to the prompt. No-op once the prompt is closed."""
        if self.state.is_terminal:
            return self.state

        action = event.action
        if action is Action.SUBMIT:
            return self.submit()
        if action is Action.ABORT:
            return self.cancel()
        if action is Action.CANCEL:
            # Two-stage: the first Esc only clears an active search
            if self.searchable and self.search.clear():
                self._on_search_changed()
                return self.state
            return self.cancel()

        if self.searchable:
            if action is Action.CHAR:
                if self.search.append(event.char):
                    self._on_search_changed()
                return self.state
            if action is Action.BACKSPACE:
                if self.search.backspace():
                    self._on_search_changed()
                return self.state
            if action is Action.CLEAR_SEARCH:
                self.clear_search()
                return self.state

        self._on_action(event)
        return self.state

    def clear_search(self) -> None:
        """Empty the term at once and flash the search box briefly."""
        self.search.clear()
        self._on_search_changed()
        self.search_flash = True
        self._flash_task.schedule()

    def _end_flash(self) -> None:
        if not self.is_active:
            return
        self.search_flash = False
        listener = self._listener
        if listener is not None:
            listener()

    def _on_search_changed(self) -> None:
        """Invalidate memoized views and reclamp cursors after a term change."""

    def _on_action(self, event: KeyEvent) -> None:
        """Handle navigation/toggle events."""

    # ── rendering ──────────────────────────────────────────────────────

    def render(self) -> str:
        """Render the current frame as Rich markup."""
        if self.state.is_terminal:
            return "\n".join(self._render_closed())
        return "\n".join(self._render_active())

    def _render_active(self) -> list[str]:
        raise NotImplementedError

    def selected_labels(self) -> list[str]:
        """Labels summarised on the closed frame."""
        return []

    def _render_closed(self) -> list[str]:
        lines = render_header(self.state, self.message, self.theme)
        if self.state is PromptState.SUBMIT:
            lines.extend(render_submit_state(self.selected_labels(), self.theme))
        else:
            lines.extend(render_cancel_state(self.selected_labels(), self.theme))
        return lines
