"""Cursor and viewport arithmetic shared by every list-like prompt."""

from __future__ import annotations

from .types import ScrollState

UP = "up"
DOWN = "down"


def _check_direction(direction: str) -> None:
    if direction not in (UP, DOWN):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")


def adjust_scroll(state: ScrollState, max_visible: int) -> ScrollState:
    """Shift the scroll offset just enough to keep the cursor visible."""
    if state.cursor < state.scroll_offset:
        state.scroll_offset = state.cursor
    elif state.cursor >= state.scroll_offset + max_visible:
        state.scroll_offset = state.cursor - max_visible + 1
    return state


def step(state: ScrollState, direction: str, item_count: int, amount: int, max_visible: int) -> ScrollState:
    """Move the cursor ``amount`` rows, clamped to the list, then rescroll."""
    _check_direction(direction)
    if item_count == 0:
        return state
    moved = state.cursor - amount if direction == UP else state.cursor + amount
    state.cursor = min(item_count - 1, max(0, moved))
    return adjust_scroll(state, max_visible)


def clamp(state: ScrollState, item_count: int, max_visible: int) -> ScrollState:
    """Clamp the cursor into a (possibly shrunk) list and recompute the offset."""
    state.cursor = min(state.cursor, max(0, item_count - 1))
    state.scroll_offset = 0
    if state.cursor >= max_visible:
        state.scroll_offset = state.cursor - max_visible + 1
    return state


class ScrollWindow:
    """Windowed view over an ordered list.

    Keeps ``scroll_offset <= cursor <= scroll_offset + max_visible - 1``
    whenever the list is non-empty.

    Args:
        max_visible: Number of rows shown at once.
        state: Optional existing state to operate on (shared, not copied).
    """

    def __init__(self, max_visible: int, state: ScrollState | None = None):
        if max_visible < 1:
            raise ValueError("max_visible must be at least 1")
        self.max_visible = max_visible
        self.state = state if state is not None else ScrollState()

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def scroll_offset(self) -> int:
        return self.state.scroll_offset

    def set_cursor(self, cursor: int) -> None:
        """Set the cursor and adjust scroll in one step."""
        self.state.cursor = cursor
        adjust_scroll(self.state, self.max_visible)

    def navigate(self, direction: str, item_count: int) -> None:
        step(self.state, direction, item_count, 1, self.max_visible)

    def navigate_page(self, direction: str, item_count: int) -> None:
        step(self.state, direction, item_count, self.max_visible, self.max_visible)

    def reset(self, item_count: int) -> None:
        clamp(self.state, item_count, self.max_visible)

    def visible_range(self, item_count: int | None = None) -> tuple[int, int]:
        """Return the [start, end) slice of visible rows."""
        start = self.state.scroll_offset
        end = start + self.max_visible
        if item_count is not None:
            start = min(start, item_count)
            end = min(end, item_count)
        return start, end

    def scroll_indicators(self, item_count: int) -> tuple[int, int]:
        """Return (hidden above, hidden below) counts."""
        above = self.state.scroll_offset
        below = max(0, item_count - self.state.scroll_offset - self.max_visible)
        return above, below
