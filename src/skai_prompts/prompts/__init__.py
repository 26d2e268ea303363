"""Selection prompt state machines."""

from .base import BasePrompt
from .group_select import GroupMultiSelectPrompt
from .manager import ToggleManagerPrompt
from .multi_select import MultiSelectPrompt
from .tabbed_select import TabbedMultiSelectPrompt
from .tree import TreeSelectPrompt

__all__ = [
    "BasePrompt",
    "GroupMultiSelectPrompt",
    "MultiSelectPrompt",
    "TabbedMultiSelectPrompt",
    "ToggleManagerPrompt",
    "TreeSelectPrompt",
]
