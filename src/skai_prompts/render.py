"""Shared rendering helpers for prompts.

Pure functions turning prompt state into Rich markup lines. Every helper takes
the Theme explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape

from .search import find_match, highlight_match, highlight_match_dim
from .themes import DEFAULT_THEME, Theme
from .types import PromptState


def styled(text: str, style: str) -> str:
    """Wrap already-escaped markup in a style tag."""
    return f"[{style}]{text}[/{style}]" if style else text


def truncate(text: str, width: int, ellipsis: str = "…") -> str:
    """Cut ``text`` to ``width`` characters, ending with ``ellipsis`` when cut."""
    if len(text) <= width:
        return text
    return text[: max(0, width - len(ellipsis))] + ellipsis


def fit(text: str, width: int, ellipsis: str = "…") -> str:
    """Truncate then pad to exactly ``width`` characters."""
    return truncate(text, width, ellipsis).ljust(width)


def bar(theme: Theme = DEFAULT_THEME, active: bool = True) -> str:
    """The left gutter bar; accent-colored while the prompt is active."""
    return styled(theme.bar_icon, theme.accent_color if active else theme.bar_color)


def symbol(state: PromptState, theme: Theme = DEFAULT_THEME) -> str:
    """Step symbol for a prompt state."""
    if state is PromptState.CANCEL:
        return styled(theme.step_cancel_icon, theme.error_color)
    if state is PromptState.SUBMIT:
        return styled(theme.step_submit_icon, theme.success_color)
    return styled(theme.step_active_icon, theme.success_color)


def render_header(state: PromptState, message: str, theme: Theme = DEFAULT_THEME) -> list[str]:
    return [
        bar(theme, active=False),
        f"{symbol(state, theme)}  {escape(message)}",
    ]


def render_submit_state(labels: Sequence[str], theme: Theme = DEFAULT_THEME) -> list[str]:
    summary = ", ".join(escape(label) for label in labels) or "none"
    return [f"{bar(theme, active=False)}  {styled(summary, theme.muted_color)}"]


def render_cancel_state(labels: Sequence[str], theme: Theme = DEFAULT_THEME) -> list[str]:
    lines = []
    if labels:
        stricken = ", ".join(styled(escape(label), f"{theme.muted_color} strike") for label in labels)
        lines.append(f"{bar(theme, active=False)}  {stricken}")
    lines.append(bar(theme, active=False))
    return lines


def render_above_indicator(count: int, theme: Theme = DEFAULT_THEME) -> list[str]:
    if count <= 0:
        return []
    return [f"{bar(theme)}  {styled(f'{theme.scroll_up_icon} {count} more above', theme.muted_color)}"]


def render_below_indicator(count: int, theme: Theme = DEFAULT_THEME) -> list[str]:
    if count <= 0:
        return []
    return [
        bar(theme),
        f"{bar(theme)}  {styled(f'{theme.scroll_down_icon} {count} more below', theme.muted_color)}",
    ]


def render_footer(theme: Theme = DEFAULT_THEME) -> list[str]:
    return [styled(theme.bar_end_icon, theme.accent_color)]


def render_no_results(search_term: str, theme: Theme = DEFAULT_THEME, noun: str = "skills") -> list[str]:
    message = escape(f'No {noun} match "{search_term}"')
    return [f"{bar(theme)}  {styled(message, theme.muted_color)}"]


def render_empty(messages: Sequence[str], theme: Theme = DEFAULT_THEME) -> list[str]:
    """Explicit "nothing available" block, closed with the footer."""
    lines = [bar(theme)]
    for message in messages:
        lines.append(f"{bar(theme)}  {styled(escape(message), theme.muted_color)}")
    lines.extend(render_footer(theme))
    return lines


def render_hint_line(hints: str, theme: Theme = DEFAULT_THEME, pending: int = 0, selected: int = 0) -> str:
    """Navigation hint line with optional pending-change / selected counts."""
    line = f"{bar(theme)}  {styled(escape(hints), theme.muted_color)}"
    if pending > 0:
        line += styled(f" • {pending} pending change(s)", theme.warning_color)
    if selected > 0:
        line += styled(f" • {selected} selected", theme.success_color)
    return line


def checkbox_symbol(is_selected: bool, is_active: bool, theme: Theme = DEFAULT_THEME) -> str:
    if is_selected:
        return styled(theme.checkbox_on_icon, theme.success_color)
    if is_active:
        return styled(theme.checkbox_off_icon, theme.accent_color)
    return styled(theme.checkbox_off_icon, theme.muted_color)


def toggle_symbol(enabled: bool, original_enabled: bool, is_active: bool, theme: Theme = DEFAULT_THEME) -> str:
    """Toggle glyph: enabled, disabled, pending-enable or pending-disable.

    The row under the cursor gets the bold variant (and the accent color when
    plainly disabled).
    """
    if enabled and not original_enabled:
        style, icon = theme.warning_color, theme.checkbox_on_icon
    elif not enabled and original_enabled:
        style, icon = theme.error_color, theme.checkbox_off_icon
    elif enabled:
        style, icon = theme.success_color, theme.checkbox_on_icon
    else:
        style = theme.accent_color if is_active else theme.muted_color
        icon = theme.checkbox_off_icon
    if is_active:
        style = f"bold {style}"
    return styled(icon, style)


def label_markup(text: str, search_term: str, is_active: bool, theme: Theme = DEFAULT_THEME) -> str:
    """Label markup: full emphasis at the cursor, dimmed elsewhere, matches highlighted."""
    if not is_active:
        return highlight_match_dim(text, search_term, theme.highlight_color, theme.muted_color)
    if find_match(text, search_term) is None:
        return escape(text)
    return highlight_match(text, search_term, theme.highlight_color)


def render_item_row(
    label: str,
    hint: str | None,
    is_selected: bool,
    is_active: bool,
    search_term: str = "",
    theme: Theme = DEFAULT_THEME,
    indent: str = "",
) -> str:
    """Checkbox, truncated+padded label (highlighted), dimmed hint."""
    checkbox = checkbox_symbol(is_selected, is_active, theme)
    display = label_markup(fit(label, theme.label_width), search_term, is_active, theme)
    line = f"{bar(theme)}  {indent}{checkbox} {display}"
    if hint:
        line += f" {styled(escape(hint), theme.muted_color)}"
    return line


def render_group_row(
    group_name: str,
    selected_count: int,
    total_count: int,
    is_all_selected: bool,
    is_active: bool,
    search_term: str = "",
    theme: Theme = DEFAULT_THEME,
    indent: str = "",
) -> str:
    """Group header row with checkbox and (selected/total) count."""
    checkbox = checkbox_symbol(is_all_selected, is_active, theme)
    if is_active and not find_match(group_name, search_term):
        label = styled(escape(group_name), "bold")
    else:
        label = label_markup(group_name, search_term, is_active, theme)
    if selected_count > 0:
        count = styled(f" ({selected_count}/{total_count})", theme.muted_color)
    else:
        count = styled(f" ({total_count})", theme.muted_color)
    return f"{bar(theme)}  {indent}{checkbox} {label}{count}"


def render_column_header(headers: Sequence[str], theme: Theme = DEFAULT_THEME) -> str:
    """Column header for the toggle manager: name, extra columns, status."""
    name, *columns = headers
    text = "   " + name.ljust(theme.name_width)
    text += "".join(column.ljust(theme.column_width) for column in columns)
    text += "STATUS"
    return f"{bar(theme)}  {styled(escape(text), theme.muted_color)}"


def render_toggle_row(
    name: str,
    columns: Sequence[str],
    enabled: bool,
    original_enabled: bool,
    is_active: bool,
    search_term: str = "",
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Toggle glyph, name, extra columns, status and change marker."""
    glyph = toggle_symbol(enabled, original_enabled, is_active, theme)
    display_name = label_markup(fit(name, theme.name_width, ".."), search_term, is_active, theme)
    cells = "".join(fit(column, theme.column_width, "..") for column in columns)
    if cells and not is_active:
        cells = styled(escape(cells), theme.muted_color)
    else:
        cells = escape(cells)
    status = styled("enabled", theme.success_color) if enabled else styled("disabled", theme.muted_color)
    changed = styled(f" {theme.change_icon}", theme.warning_color) if enabled != original_enabled else ""
    return f"{bar(theme)}  {glyph} {display_name}{cells}{status}{changed}"


def render_tree_row(
    label: str,
    hint: str | None,
    depth: int,
    is_group: bool,
    is_expanded: bool,
    is_selected: bool,
    is_active: bool,
    counts: tuple[int, int] | None = None,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Tree row: indent, expand arrow or checkbox, label, count or hint."""
    indent = "  " * depth
    if is_group:
        prefix = (theme.expanded_icon if is_expanded else theme.collapsed_icon) + " "
        style = "bold" if is_active else "blue"
    else:
        prefix = checkbox_symbol(is_selected, is_active, theme) + " "
        style = "bold" if is_active else ""
    line = f"{bar(theme)}  {indent}{prefix}{styled(escape(label), style)}"
    if is_group and counts is not None:
        line += styled(f" ({counts[0]}/{counts[1]})", theme.muted_color)
    elif not is_group and hint:
        line += styled(escape(f" - {hint}"), theme.muted_color)
    return line


def render_search_box(
    search_term: str, is_active: bool, theme: Theme = DEFAULT_THEME, flash: bool = False
) -> list[str]:
    """Rounded search box; accent border while focused, warning border while flashing."""
    width = theme.tab_bar_width
    inner = width - 4
    cursor = "[reverse] [/reverse]" if is_active else ""
    if search_term:
        content = f"{theme.search_icon} {escape(search_term)}{cursor}"
        visible = len(theme.search_icon) + 1 + len(search_term) + (1 if is_active else 0)
    elif is_active:
        content = f"{theme.search_icon} {cursor}"
        visible = len(theme.search_icon) + 2
    else:
        content = styled(f"{theme.search_icon} Filter...", theme.muted_color)
        visible = len(theme.search_icon) + 1 + len("Filter...")
    padding = " " * max(0, inner - visible)

    if flash:
        border = theme.warning_color
    else:
        border = theme.accent_color if is_active else theme.muted_color
    horizontal = theme.box_horizontal * (inner + 2)
    return [
        styled(f"{theme.box_top_left}{horizontal}{theme.box_top_right}", border),
        f"{styled(theme.box_vertical, border)} {content}{padding} {styled(theme.box_vertical, border)}",
        styled(f"{theme.box_bottom_left}{horizontal}{theme.box_bottom_right}", border),
    ]


def render_search_line(
    search_term: str,
    is_active: bool,
    count_text: str,
    selected: int = 0,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Single-line "Search: term▌ (N of M skills)" variant of the search box."""
    cursor = "[reverse] [/reverse]" if is_active else "_"
    line = f"{bar(theme)}  Search: {escape(search_term)}{cursor}  {styled(escape(count_text), theme.muted_color)}"
    if selected > 0:
        line += styled(f" • {selected} selected", theme.success_color)
    return line
