"""Type definitions for skai-prompts.

Shared dataclasses and enums used by the item model, search index, tab
navigation and the prompt state machines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class PromptState(str, Enum):
    """Lifecycle state of a prompt. SUBMIT and CANCEL are terminal."""

    ACTIVE = "active"
    SUBMIT = "submit"
    CANCEL = "cancel"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self is not PromptState.ACTIVE


@dataclass(frozen=True)
class Item:
    """A node in the catalog tree: a leaf (payload) or a group (children).

    Attributes:
        id: Unique identifier across the whole tree.
        label: Display text.
        hint: Optional short description shown dimmed next to the label.
        payload: Domain object returned when a leaf is selected.
        children: Child nodes; set (possibly empty) only on groups.
    """

    id: str
    label: str
    hint: str | None = None
    payload: Any = None
    children: tuple[Item, ...] | None = None

    def __post_init__(self):
        if self.children is not None and self.payload is not None:
            raise ValueError(f"Item {self.id!r} cannot have both payload and children")
        if self.children is None and self.payload is None:
            raise ValueError(f"Item {self.id!r} must have a payload or children")
        if self.children is not None and not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def leaf(cls, id: str, label: str, payload: Any, hint: str | None = None) -> Item:
        return cls(id=id, label=label, hint=hint, payload=payload)

    @classmethod
    def group(
        cls, id: str, label: str, children: list[Item] | tuple[Item, ...] = (), hint: str | None = None
    ) -> Item:
        return cls(id=id, label=label, hint=hint, children=tuple(children))

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def is_group(self) -> bool:
        return self.children is not None


@dataclass(frozen=True)
class FlatNode:
    """One visible row of a flattened tree."""

    item: Item
    depth: int
    parent_id: str | None = None


@dataclass(frozen=True)
class Option(Generic[T]):
    """A selectable option derived from a leaf item."""

    value: T
    label: str
    hint: str | None = None
    description: str = ""


@dataclass(frozen=True)
class SearchableEntry(Generic[T]):
    """Option plus its precomputed, lower-cased searchable text."""

    option: Option[T]
    searchable_text: str
    group: str | None = None

    @property
    def value(self) -> T:
        return self.option.value

    @property
    def label(self) -> str:
        return self.option.label

    @property
    def hint(self) -> str | None:
        return self.option.hint


@dataclass(frozen=True)
class GroupedEntries(Generic[T]):
    """All searchable entries of one named group."""

    group_name: str
    entries: tuple[SearchableEntry[T], ...]
    searchable_text: str


@dataclass
class ScrollState:
    """Cursor and viewport offset of one scrollable list."""

    cursor: int = 0
    scroll_offset: int = 0


@dataclass
class Tab:
    """A tab in the tab bar.

    Attributes:
        id: Stable key (lower-cased category name, or "all").
        label: Display text.
        badge: Live match count while searching, None otherwise.
        disabled: True when a search leaves this tab without results.
    """

    id: str
    label: str
    badge: int | None = None
    disabled: bool = False


@dataclass(frozen=True)
class ManagedEntry:
    """An installed item whose enabled state can be toggled.

    Attributes:
        key: Stable identity used as the pending-change map key.
        name: Display name.
        original_enabled: State before the prompt opened; never mutated.
        columns: Extra column values rendered after the name (e.g. agent, scope).
        category: Optional category used to build tabs.
        hint: Optional text included in search matching.
        payload: Domain object handed back to the caller.
    """

    key: str
    name: str
    original_enabled: bool
    columns: tuple[str, ...] = ()
    category: str | None = None
    hint: str | None = None
    payload: Any = None


@dataclass
class ManageResult:
    """Outcome of applying pending changes."""

    enabled: int = 0
    disabled: int = 0
    failed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.enabled + self.disabled + self.failed
