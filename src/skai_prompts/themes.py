"""Configurable themes for skai-prompts.

The Theme dataclass holds every visual element (colors, glyphs, layout) and is
passed explicitly into the render helpers, so rendering has no hidden global
state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Theme:
    """Visual theme for prompt rendering.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        accent_color: Active borders, cursor glyphs, the active tab.
        success_color: Selected/enabled glyphs and the submit symbol.
        warning_color: Pending-change indicators.
        error_color: Cancel symbol and pending-disable glyphs.
        muted_color: Dimmed rows, hints and separators.
        highlight_color: Search match emphasis.
        bar_color: Left gutter bar.

        max_visible_items: Rows shown before scrolling.
        tab_bar_width: Width of the tab bar, search box and separators.
        label_width: Label column width in pick-many rows.
        name_width: Name column width in the toggle manager.
        column_width: Width of each extra toggle-manager column.
    """

    name: str = "default"

    # Colors
    accent_color: str = "cyan"
    success_color: str = "green"
    warning_color: str = "yellow"
    error_color: str = "red"
    muted_color: str = "dim"
    highlight_color: str = "bold cyan"
    bar_color: str = "grey50"

    # Step symbols
    step_active_icon: str = "◆"
    step_cancel_icon: str = "■"
    step_submit_icon: str = "◇"
    bar_icon: str = "│"
    bar_end_icon: str = "└"

    # Checkbox / toggle glyphs
    checkbox_on_icon: str = "◼"
    checkbox_off_icon: str = "◻"
    change_icon: str = "*"

    # Tree
    expanded_icon: str = "▼"
    collapsed_icon: str = "▶"

    # Search box
    search_icon: str = "⌕"
    box_top_left: str = "╭"
    box_top_right: str = "╮"
    box_bottom_left: str = "╰"
    box_bottom_right: str = "╯"
    box_horizontal: str = "─"
    box_vertical: str = "│"

    # Scroll / overflow
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"
    overflow_left: str = "‹ "
    overflow_right: str = " ›"

    # Layout
    max_visible_items: int = 10
    tab_bar_width: int = 50
    label_width: int = 30
    name_width: int = 25
    column_width: int = 14


DEFAULT_THEME = Theme()

_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "mono": Theme(
        name="mono",
        accent_color="bold",
        success_color="bold",
        warning_color="underline",
        error_color="bold",
        muted_color="dim",
        highlight_color="reverse",
        bar_color="dim",
    ),
    "ocean": Theme(
        name="ocean",
        accent_color="color(31)",
        success_color="color(36)",
        warning_color="color(179)",
        error_color="color(167)",
        muted_color="grey50",
        highlight_color="bold color(45)",
        bar_color="color(24)",
    ),
}


def _normalize_theme_key(value: str) -> str:
    return value.strip().lower().replace("_", "-")


def available_themes() -> list[str]:
    return sorted(_THEMES)


def get_theme(name: str | None = None, **overrides) -> Theme:
    """Return a named theme (default when unknown), with layout overrides applied."""
    theme = _THEMES.get(_normalize_theme_key(name), DEFAULT_THEME) if name else DEFAULT_THEME
    if overrides:
        theme = replace(theme, **overrides)
    return theme
