"""Convenience entry points: build a prompt, run it, interpret the result."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from rich.console import Console

from .config import PromptConfig
from .errors import SelectionCancelled, get_error_message, is_cancel
from .items import categorize
from .prompts import (
    GroupMultiSelectPrompt,
    MultiSelectPrompt,
    TabbedMultiSelectPrompt,
    ToggleManagerPrompt,
    TreeSelectPrompt,
)
from .runner import run_prompt
from .types import Item, ManagedEntry, ManageResult, Option

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Select skills to install:"
OTHER_GROUP = "Other"


def _picked(result: Any) -> list[Any]:
    if is_cancel(result):
        raise SelectionCancelled()
    return result


def searchable_multiselect(
    options: Sequence[Option],
    message: str = DEFAULT_MESSAGE,
    initial_values: Iterable[Any] = (),
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> list[Any]:
    """Flat searchable pick-many. Raises SelectionCancelled on cancel."""
    prompt = MultiSelectPrompt(message, options, initial_values, config=config)
    return _picked(run_prompt(prompt, console))


def grouped_multiselect(
    groups: Mapping[str, Sequence[Option]],
    message: str = DEFAULT_MESSAGE,
    initial_values: Iterable[Any] = (),
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> list[Any]:
    """Grouped pick-many with group header rows. Raises SelectionCancelled on cancel."""
    prompt = GroupMultiSelectPrompt(message, groups, initial_values, config=config)
    return _picked(run_prompt(prompt, console))


def tabbed_group_multiselect(
    groups: Mapping[str, Sequence[Option]],
    message: str = DEFAULT_MESSAGE,
    initial_values: Iterable[Any] = (),
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> list[Any]:
    """Pick-many with one tab per group. Raises SelectionCancelled on cancel."""
    prompt = TabbedMultiSelectPrompt(message, groups, initial_values, config=config)
    return _picked(run_prompt(prompt, console))


def tree_select(
    items: Sequence[Item],
    message: str = DEFAULT_MESSAGE,
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> list[Any]:
    """Pick leaf payloads from an item tree, choosing the prompt by its shape.

    Only top-level leaves: a flat searchable list. Any groups: tabs, with
    top-level leaves collected into an "Other" group. Nothing selectable:
    returns [] without prompting.

    Raises:
        SelectionCancelled: If the user cancels.
    """
    categorized = categorize(items)
    if categorized.ungrouped and not categorized.groups:
        return searchable_multiselect(categorized.ungrouped, message, config=config, console=console)

    if categorized.groups:
        groups = dict(categorized.groups)
        if categorized.ungrouped:
            groups[OTHER_GROUP] = groups.get(OTHER_GROUP, []) + categorized.ungrouped
        return tabbed_group_multiselect(groups, message, config=config, console=console)

    logger.warning("No skills available to select.")
    return []


def tree_browse(
    items: Sequence[Item],
    message: str = DEFAULT_MESSAGE,
    initial_selected: Iterable[str] = (),
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> list[Any]:
    """Pick leaf payloads through the expandable tree prompt."""
    prompt = TreeSelectPrompt(message, items, initial_selected, config=config)
    return _picked(run_prompt(prompt, console))


def manage_toggles(
    entries: Sequence[ManagedEntry],
    message: str = "Manage installed skills",
    headers: Sequence[str] | None = None,
    config: PromptConfig | None = None,
    console: Console | None = None,
) -> tuple[list[ManagedEntry], dict[str, bool]] | None:
    """Run the toggle manager. Returns (entries, changes), or None on cancel."""
    kwargs = {"headers": headers} if headers is not None else {}
    prompt = ToggleManagerPrompt(message, entries, config=config, **kwargs)
    result = run_prompt(prompt, console)
    if is_cancel(result):
        return None
    return result


def apply_changes(
    entries: Iterable[ManagedEntry],
    changes: Mapping[str, bool],
    toggle: Callable[[ManagedEntry, bool], Any],
) -> ManageResult:
    """Apply the net changes from the toggle manager.

    ``toggle(entry, new_state)`` is called only for entries whose key is in
    ``changes`` with a state different from the original. A failing toggle
    is logged and counted; the remaining changes are still applied.
    """
    result = ManageResult()
    if not changes:
        return result

    for entry in entries:
        if entry.key not in changes:
            continue
        new_state = changes[entry.key]
        if new_state == entry.original_enabled:
            continue
        try:
            toggle(entry, new_state)
        except Exception as e:
            message = get_error_message(e)
            logger.warning("Failed to %s %s: %s", "enable" if new_state else "disable", entry.name, message)
            result.failed += 1
            result.errors.append((entry.name, message))
            continue
        if new_state:
            result.enabled += 1
        else:
            result.disabled += 1
    logger.debug("Applied changes: %s", result)
    return result
