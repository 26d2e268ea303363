"""Catalog item model: flattening, counting and categorizing item trees.

Also loads catalogs from YAML/JSON files into immutable Item trees.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import CatalogError
from .types import FlatNode, Item, Option


def iter_flat(
    items: Iterable[Item],
    expanded: set[str] | frozenset[str],
    depth: int = 0,
    parent_id: str | None = None,
) -> Iterator[FlatNode]:
    """Yield visible nodes depth-first, pre-order.

    A group's children are yielded only when the group id is in ``expanded``.
    """
    for item in items:
        yield FlatNode(item=item, depth=depth, parent_id=parent_id)
        if item.children and item.id in expanded:
            yield from iter_flat(item.children, expanded, depth + 1, item.id)


def flatten(items: Iterable[Item], expanded: set[str] | frozenset[str]) -> list[FlatNode]:
    """Flatten an item tree into visible rows, recomputed on every call."""
    return list(iter_flat(items, expanded))


def count_selected(item: Item, selected_ids: set[str]) -> tuple[int, int]:
    """Return (selected, total) leaf counts under ``item``."""
    if item.is_leaf:
        return (1 if item.id in selected_ids else 0), 1

    selected = 0
    total = 0
    for child in item.children:
        child_selected, child_total = count_selected(child, selected_ids)
        selected += child_selected
        total += child_total
    return selected, total


def collect_leaf_ids(item: Item) -> list[str]:
    """Return every leaf id under ``item`` in pre-order."""
    if item.is_leaf:
        return [item.id]
    ids: list[str] = []
    for child in item.children:
        ids.extend(collect_leaf_ids(child))
    return ids


def collect_group_ids(items: Iterable[Item]) -> set[str]:
    """Return the ids of every non-empty group in the tree."""
    ids: set[str] = set()
    for item in items:
        if item.children:
            ids.add(item.id)
            ids |= collect_group_ids(item.children)
    return ids


def iter_leaves(items: Iterable[Item], parent: Item | None = None) -> Iterator[tuple[Item, Item | None]]:
    """Yield (leaf, immediate parent group) pairs in pre-order."""
    for item in items:
        if item.is_leaf:
            yield item, parent
        else:
            yield from iter_leaves(item.children, item)


def _payload_description(payload: Any) -> str:
    if isinstance(payload, dict):
        return str(payload.get("description") or "")
    return str(getattr(payload, "description", "") or "")


def to_option(item: Item) -> Option:
    """Build a selectable option from a leaf item."""
    return Option(
        value=item.payload,
        label=item.label,
        hint=item.hint,
        description=_payload_description(item.payload),
    )


@dataclass
class Categorized:
    """Top-level leaves and named groups of options."""

    ungrouped: list[Option] = field(default_factory=list)
    groups: dict[str, list[Option]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.ungrouped) + sum(len(opts) for opts in self.groups.values())


def categorize(items: Iterable[Item]) -> Categorized:
    """Split top-level nodes into ungrouped leaves and named groups.

    A group nested inside another group becomes its own top-level group
    (keyed by its label) rather than a sub-list. Empty groups are kept.
    """
    result = Categorized()
    for item in items:
        if item.is_leaf:
            result.ungrouped.append(to_option(item))
        else:
            result.groups[item.label] = []
            _add_children_to_group(item.children, result.groups[item.label], result.groups)
    return result


def _add_children_to_group(
    children: Iterable[Item],
    current: list[Option],
    all_groups: dict[str, list[Option]],
) -> None:
    for child in children:
        if child.is_leaf:
            current.append(to_option(child))
        else:
            nested = all_groups.setdefault(child.label, [])
            _add_children_to_group(child.children, nested, all_groups)


# ── Catalog loading ─────────────────────────────────────────────────────


def items_from_data(data: Any) -> list[Item]:
    """Build an item tree from parsed catalog data.

    Accepts either a list of entries or a mapping with an ``items`` list.
    Entries with a ``children`` key become groups; all others become leaves
    whose payload is the entry mapping itself.
    """
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise CatalogError("Catalog must be a list of items or a mapping with 'items'")

    seen: set[str] = set()
    return [_item_from_entry(entry, seen) for entry in data]


def _item_from_entry(entry: Any, seen: set[str]) -> Item:
    if isinstance(entry, str):
        entry = {"id": entry}
    if not isinstance(entry, dict):
        raise CatalogError(f"Invalid catalog entry: {entry!r}")

    item_id = str(entry.get("id") or entry.get("name") or "").strip()
    if not item_id:
        raise CatalogError(f"Catalog entry without id: {entry!r}")
    if item_id in seen:
        raise CatalogError(f"Duplicate catalog id: {item_id}")
    seen.add(item_id)

    label = str(entry.get("label") or entry.get("name") or item_id)
    hint = entry.get("hint")
    hint = str(hint) if hint is not None else None

    if "children" in entry:
        children = entry.get("children") or []
        if not isinstance(children, list):
            raise CatalogError(f"'children' of {item_id} must be a list")
        return Item.group(item_id, label, [_item_from_entry(c, seen) for c in children], hint=hint)

    payload = dict(entry)
    payload.setdefault("id", item_id)
    return Item.leaf(item_id, label, payload, hint=hint)


def load_catalog(path: str | Path) -> list[Item]:
    """Load a YAML (or JSON) catalog file into an item tree."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e
    return items_from_data(data or [])
