"""Searchable, tabbed terminal selection prompts.

Example:
    from skai_prompts import Item, tree_select

    items = [
        Item.group("frontend", "Frontend", [
            Item.leaf("react", "React", payload={"id": "react"}, hint="UI library"),
        ]),
        Item.leaf("git", "Git", payload={"id": "git"}),
    ]
    picked = tree_select(items)  # [{"id": "react"}]
"""

__version__ = "0.3.0"

from .config import PromptConfig, load_config
from .errors import (
    CANCEL,
    CatalogError,
    SelectionCancelled,
    get_error_message,
    handle_cancellation,
    is_cancel,
)
from .items import categorize, collect_leaf_ids, count_selected, flatten, load_catalog
from .prompts import (
    BasePrompt,
    GroupMultiSelectPrompt,
    MultiSelectPrompt,
    TabbedMultiSelectPrompt,
    ToggleManagerPrompt,
    TreeSelectPrompt,
)
from .runner import run_prompt
from .scroll import ScrollWindow
from .select import (
    apply_changes,
    grouped_multiselect,
    manage_toggles,
    searchable_multiselect,
    tabbed_group_multiselect,
    tree_browse,
    tree_select,
)
from .tabs import TabNavigation
from .themes import Theme, get_theme
from .types import Item, ManagedEntry, ManageResult, Option, PromptState, Tab

__all__ = [
    "__version__",
    # Model
    "Item",
    "Option",
    "ManagedEntry",
    "ManageResult",
    "PromptState",
    "Tab",
    "flatten",
    "count_selected",
    "collect_leaf_ids",
    "categorize",
    "load_catalog",
    # Building blocks
    "ScrollWindow",
    "TabNavigation",
    "Theme",
    "get_theme",
    "PromptConfig",
    "load_config",
    # Prompts
    "BasePrompt",
    "MultiSelectPrompt",
    "GroupMultiSelectPrompt",
    "TabbedMultiSelectPrompt",
    "ToggleManagerPrompt",
    "TreeSelectPrompt",
    "run_prompt",
    # Entry points
    "searchable_multiselect",
    "grouped_multiselect",
    "tabbed_group_multiselect",
    "tree_select",
    "tree_browse",
    "manage_toggles",
    "apply_changes",
    # Errors
    "CANCEL",
    "CatalogError",
    "SelectionCancelled",
    "is_cancel",
    "handle_cancellation",
    "get_error_message",
]
