"""Expandable tree pick-many prompt."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..items import collect_group_ids, collect_leaf_ids, count_selected, flatten, iter_leaves
from ..keys import Action, KeyEvent
from ..render import (
    render_above_indicator,
    render_below_indicator,
    render_empty,
    render_footer,
    render_header,
    render_hint_line,
    render_tree_row,
)
from ..scroll import DOWN, UP, ScrollWindow
from ..types import FlatNode, Item
from .base import BasePrompt

HINTS = "↑↓ navigate • →← expand/collapse • space toggle • a all • i invert • enter confirm"


class TreeSelectPrompt(BasePrompt):
    """Pick-many over an item tree with expandable groups.

    Letters are commands here, so the prompt is not searchable: ``a`` selects
    every leaf of the current category and ``i`` inverts the whole selection.
    All groups start expanded.
    """

    searchable = False

    def __init__(
        self,
        message: str,
        items: Sequence[Item],
        initial_selected: Iterable[str] = (),
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.items = list(items)
        self.leaves = [leaf for leaf, _ in iter_leaves(self.items)]
        leaf_ids = {leaf.id for leaf in self.leaves}
        self.expanded: set[str] = collect_group_ids(self.items)
        self.selected: set[str] = {item_id for item_id in initial_selected if item_id in leaf_ids}
        self.window = ScrollWindow(self.max_visible)

    def rows(self) -> list[FlatNode]:
        return flatten(self.items, self.expanded)

    def current(self) -> FlatNode | None:
        rows = self.rows()
        if not rows:
            return None
        return rows[min(self.window.cursor, len(rows) - 1)]

    def toggle(self, item: Item) -> None:
        if item.is_leaf:
            if item.id in self.selected:
                self.selected.discard(item.id)
            else:
                self.selected.add(item.id)
            return
        ids = set(collect_leaf_ids(item))
        if ids and ids <= self.selected:
            self.selected -= ids
        else:
            self.selected |= ids

    def select_category(self, node: FlatNode) -> None:
        """Select every leaf of the group under the cursor (or of its parent)."""
        if node.item.is_group:
            group = node.item
        elif node.parent_id is not None:
            group = self._find(node.parent_id)
        else:
            return
        if group is not None:
            self.selected |= set(collect_leaf_ids(group))

    def invert(self) -> None:
        self.selected = {leaf.id for leaf in self.leaves} - self.selected

    def expand(self, node: FlatNode) -> None:
        if node.item.is_group:
            self.expanded.add(node.item.id)

    def collapse(self, node: FlatNode) -> None:
        """Collapse an expanded group, otherwise jump to the parent row."""
        if node.item.is_group and node.item.id in self.expanded:
            self.expanded.discard(node.item.id)
            self.window.reset(len(self.rows()))
            return
        if node.parent_id is None:
            return
        for index, row in enumerate(self.rows()):
            if row.item.id == node.parent_id:
                self.window.set_cursor(index)
                break

    def _find(self, item_id: str) -> Item | None:
        stack = list(self.items)
        while stack:
            item = stack.pop()
            if item.id == item_id:
                return item
            if item.children:
                stack.extend(item.children)
        return None

    def value(self) -> list[Any]:
        return [leaf.payload for leaf in self.leaves if leaf.id in self.selected]

    def selected_labels(self) -> list[str]:
        return [leaf.label for leaf in self.leaves if leaf.id in self.selected]

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
        elif action is Action.CHAR and event.char == "i":
            self.invert()
        else:
            node = self.current()
            if node is None:
                return
            if action is Action.RIGHT:
                self.expand(node)
            elif action is Action.LEFT:
                self.collapse(node)
            elif action is Action.TOGGLE:
                self.toggle(node.item)
            elif action is Action.CHAR and event.char == "a":
                self.select_category(node)

    def _render_active(self) -> list[str]:
        theme = self.theme
        lines = render_header(self.state, self.message, theme)
        rows = self.rows()
        if not rows:
            lines.extend(render_empty(["No items available"], theme))
            return lines

        lines.append(render_hint_line(HINTS, theme, selected=len(self.selected)))
        above, below = self.window.scroll_indicators(len(rows))
        lines.extend(render_above_indicator(above, theme))
        start, end = self.window.visible_range(len(rows))
        for index in range(start, end):
            node = rows[index]
            item = node.item
            lines.append(
                render_tree_row(
                    item.label,
                    item.hint,
                    depth=node.depth,
                    is_group=item.is_group,
                    is_expanded=item.id in self.expanded,
                    is_selected=item.id in self.selected,
                    is_active=index == self.window.cursor,
                    counts=count_selected(item, self.selected) if item.is_group else None,
                    theme=theme,
                )
            )
        lines.extend(render_below_indicator(below, theme))
        lines.extend(render_footer(theme))
        return lines
