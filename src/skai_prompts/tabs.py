"""Tab bar rendering and per-tab navigation state.

Each tab owns its own ScrollState, so switching tabs and back restores the
cursor exactly where the user left it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from rich.markup import escape

from .scroll import ScrollWindow
from .search import ALL_TAB_ID
from .themes import DEFAULT_THEME, Theme
from .types import ScrollState, Tab

ALL_TAB_LABEL = "All"


def create_category_tabs(categories: Iterable[str]) -> list[Tab]:
    """Create tabs from category names, always led by an "All" tab.

    Tab ids are the lower-cased names, suffixed ("tools-2") where two names
    collide so every tab keeps its own state.
    """
    tabs = [Tab(id=ALL_TAB_ID, label=ALL_TAB_LABEL)]
    used = {ALL_TAB_ID}
    for category in categories:
        base = category.lower()
        tab_id, n = base, 2
        while tab_id in used:
            tab_id = f"{base}-{n}"
            n += 1
        used.add(tab_id)
        tabs.append(Tab(id=tab_id, label=category))
    return tabs


def navigate_left(current_index: int, tab_count: int) -> int:
    """Index of the previous tab, wrapping to the last."""
    if tab_count == 0:
        return 0
    return current_index - 1 if current_index > 0 else tab_count - 1


def navigate_right(current_index: int, tab_count: int) -> int:
    """Index of the next tab, wrapping to the first."""
    if tab_count == 0:
        return 0
    return current_index + 1 if current_index < tab_count - 1 else 0


def tab_display_label(tab: Tab) -> str:
    if tab.badge is not None and tab.badge > 0:
        return f"{tab.label} ({tab.badge})"
    return tab.label


def _tab_width(tab: Tab) -> int:
    # " label " plus the two-space gap between tabs
    return len(tab_display_label(tab)) + 4


def calculate_visible_tabs(tabs: list[Tab], active_index: int, available_width: int) -> tuple[int, int]:
    """Return the [start, end) tab slice that fits, grown outward from the active tab."""
    if not tabs:
        return 0, 0

    widths = [_tab_width(tab) for tab in tabs]
    if sum(widths) <= available_width:
        return 0, len(tabs)

    start, end = active_index, active_index + 1
    used = widths[active_index]
    while True:
        grew = False
        if start > 0 and used + widths[start - 1] <= available_width:
            start -= 1
            used += widths[start]
            grew = True
        if end < len(tabs) and used + widths[end] <= available_width:
            used += widths[end]
            end += 1
            grew = True
        if not grew:
            break
    return start, end


def render_tab_bar(tabs: list[Tab], active_index: int, theme: Theme = DEFAULT_THEME) -> list[str]:
    """Render the tab bar line and its separator as Rich markup.

    Overflow arrows keep a fixed-width placeholder so the layout never shifts.
    """
    if not tabs:
        return []

    width = theme.tab_bar_width
    available = width - len(theme.overflow_left) - len(theme.overflow_right)
    start, end = calculate_visible_tabs(tabs, active_index, available)

    muted = theme.muted_color
    parts: list[str] = []
    for i in range(start, end):
        tab = tabs[i]
        label = escape(tab_display_label(tab))
        if i == active_index:
            parts.append(f"[black on {theme.accent_color}] {label} [/black on {theme.accent_color}]")
        elif tab.disabled:
            parts.append(f" [{muted} strike]{label}[/{muted} strike] ")
        else:
            parts.append(f" [{muted}]{label}[/{muted}] ")

    left = f"[{muted}]{theme.overflow_left}[/{muted}]" if start > 0 else " " * len(theme.overflow_left)
    right = f"[{muted}]{theme.overflow_right}[/{muted}]" if end < len(tabs) else " " * len(theme.overflow_right)

    return [
        left + "  ".join(parts) + right,
        f"[{muted}]{theme.box_horizontal * width}[/{muted}]",
    ]


class TabNavigation:
    """Ordered tabs with an active tab and independent scroll state per tab.

    Args:
        tabs: Tabs in display order.
        max_visible: Rows shown per tab before scrolling.
        initial_index: Index of the initially active tab.
        skip_disabled: When True, left/right navigation skips disabled tabs.
    """

    def __init__(
        self,
        tabs: list[Tab],
        max_visible: int = DEFAULT_THEME.max_visible_items,
        initial_index: int = 0,
        skip_disabled: bool = False,
    ):
        self.tabs = tabs
        self.active_index = initial_index if 0 <= initial_index < len(tabs) else 0
        self.max_visible = max_visible
        self.skip_disabled = skip_disabled
        self.tab_states: dict[str, ScrollState] = {tab.id: ScrollState() for tab in tabs}

    def active_tab(self) -> Tab:
        return self.tabs[self.active_index]

    def active_tab_state(self) -> ScrollState:
        tab = self.active_tab()
        return self.tab_states.setdefault(tab.id, ScrollState())

    def set_active_tab_state(self, cursor: int | None = None, scroll_offset: int | None = None) -> None:
        """Update only the given fields of the active tab's state."""
        state = self.active_tab_state()
        if cursor is not None:
            state.cursor = cursor
        if scroll_offset is not None:
            state.scroll_offset = scroll_offset

    def window(self) -> ScrollWindow:
        """Scroll window operating directly on the active tab's state."""
        return ScrollWindow(self.max_visible, self.active_tab_state())

    def _move(self, step) -> None:
        if not self.tabs:
            return
        index = step(self.active_index, len(self.tabs))
        if self.skip_disabled:
            for _ in range(len(self.tabs)):
                if not self.tabs[index].disabled:
                    break
                index = step(index, len(self.tabs))
            else:
                return
        self.active_index = index

    def navigate_left(self) -> None:
        self._move(navigate_left)

    def navigate_right(self) -> None:
        self._move(navigate_right)

    def navigate_content(self, direction: str, item_count: int) -> None:
        self.window().navigate(direction, item_count)

    def navigate_content_page(self, direction: str, item_count: int) -> None:
        self.window().navigate_page(direction, item_count)

    def reset_content(self, item_count: int) -> None:
        """Clamp the active tab's cursor after its list changed size."""
        self.window().reset(item_count)

    def update_badges(self, counts: Mapping[str, int] | None) -> None:
        """Set live match badges; None clears badges and disabled flags."""
        for tab in self.tabs:
            if counts is None:
                tab.badge = None
                tab.disabled = False
            else:
                count = counts.get(tab.id, 0)
                tab.badge = count
                tab.disabled = tab.id != ALL_TAB_ID and count == 0

    def render_tab_bar(self, theme: Theme = DEFAULT_THEME) -> list[str]:
        return render_tab_bar(self.tabs, self.active_index, theme)
