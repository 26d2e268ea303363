"""Tests for the item model and catalog loading."""

import pytest

from skai_prompts.errors import CatalogError
from skai_prompts.items import (
    categorize,
    collect_group_ids,
    collect_leaf_ids,
    count_selected,
    flatten,
    items_from_data,
    iter_leaves,
    load_catalog,
    to_option,
)
from skai_prompts.types import Item


@pytest.fixture
def nested(make_leaf):
    leaf = make_leaf
    return [
        Item.group("g1", "G1", [leaf("a"), Item.group("g2", "G2", [leaf("b"), leaf("c")])]),
        leaf("d"),
        Item.group("empty", "Empty", []),
    ]


class TestItem:
    def test_leaf_and_group(self, make_leaf):
        assert make_leaf("x").is_leaf
        assert Item.group("g", "G").is_group

    def test_both_payload_and_children_rejected(self):
        with pytest.raises(ValueError):
            Item(id="x", label="x", payload={}, children=())

    def test_neither_rejected(self):
        with pytest.raises(ValueError):
            Item(id="x", label="x")

    def test_children_list_becomes_tuple(self, make_leaf):
        group = Item(id="g", label="G", children=[make_leaf("x")])
        assert isinstance(group.children, tuple)


class TestFlatten:
    def test_nothing_expanded_returns_top_level(self, nested):
        rows = flatten(nested, set())
        assert [r.item.id for r in rows] == ["g1", "d", "empty"]
        assert all(r.depth == 0 and r.parent_id is None for r in rows)

    def test_expanding_inserts_direct_children(self, nested):
        rows = flatten(nested, {"g1"})
        assert [r.item.id for r in rows] == ["g1", "a", "g2", "d", "empty"]
        assert rows[1].depth == 1
        assert rows[1].parent_id == "g1"

    def test_nested_expansion(self, nested):
        rows = flatten(nested, {"g1", "g2"})
        assert [r.item.id for r in rows] == ["g1", "a", "g2", "b", "c", "d", "empty"]
        assert rows[3].depth == 2
        assert rows[3].parent_id == "g2"

    def test_child_expanded_without_parent_stays_hidden(self, nested):
        rows = flatten(nested, {"g2"})
        assert [r.item.id for r in rows] == ["g1", "d", "empty"]

    def test_restartable(self, nested):
        assert flatten(nested, {"g1"}) == flatten(nested, {"g1"})


class TestCounting:
    def test_leaf_counts(self, make_leaf):
        assert count_selected(make_leaf("x"), {"x"}) == (1, 1)
        assert count_selected(make_leaf("x"), set()) == (0, 1)

    def test_group_sums_recursively(self, nested):
        assert count_selected(nested[0], {"a", "c"}) == (2, 3)

    def test_empty_group(self):
        assert count_selected(Item.group("g", "G"), {"x"}) == (0, 0)

    def test_selected_never_exceeds_total(self, nested):
        for item in nested:
            selected, total = count_selected(item, {"a", "b", "c", "d", "zzz"})
            assert selected <= total

    def test_collect_leaf_ids_preorder(self, nested):
        assert collect_leaf_ids(nested[0]) == ["a", "b", "c"]
        assert collect_leaf_ids(nested[2]) == []

    def test_collect_group_ids_skips_empty(self, nested):
        assert collect_group_ids(nested) == {"g1", "g2"}

    def test_iter_leaves_reports_parent(self, nested):
        pairs = [(item.id, parent.id if parent else None) for item, parent in iter_leaves(nested)]
        assert pairs == [("a", "g1"), ("b", "g2"), ("c", "g2"), ("d", None)]


class TestCategorize:
    def test_splits_ungrouped_and_groups(self, catalog, make_leaf):
        result = categorize([*catalog, make_leaf("w")])
        assert [o.label for o in result.ungrouped] == ["w"]
        assert list(result.groups) == ["A", "B"]
        assert [o.label for o in result.groups["A"]] == ["x", "y"]
        assert result.total == 4

    def test_nested_group_becomes_sibling(self, nested):
        result = categorize(nested)
        assert list(result.groups) == ["G1", "G2", "Empty"]
        assert [o.label for o in result.groups["G1"]] == ["a"]
        assert [o.label for o in result.groups["G2"]] == ["b", "c"]

    def test_empty_group_kept(self, nested):
        assert categorize(nested).groups["Empty"] == []

    def test_option_carries_payload_and_description(self, make_leaf):
        option = to_option(make_leaf("x", hint="h", description="long text"))
        assert option.value == {"id": "x", "description": "long text"}
        assert option.hint == "h"
        assert option.description == "long text"


class TestCatalogLoading:
    def test_items_from_mapping(self):
        items = items_from_data(
            {
                "items": [
                    {"id": "fe", "label": "Frontend", "children": [{"id": "react", "hint": "UI"}]},
                    "git",
                ]
            }
        )
        assert items[0].is_group
        assert items[0].children[0].hint == "UI"
        assert items[0].children[0].payload["id"] == "react"
        assert items[1].label == "git"

    def test_name_used_as_id_and_label(self):
        (item,) = items_from_data([{"name": "lint"}])
        assert item.id == "lint"
        assert item.label == "lint"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            items_from_data(["a", {"id": "g", "children": ["a"]}])

    def test_entry_without_id_rejected(self):
        with pytest.raises(CatalogError):
            items_from_data([{"label": "nameless"}])

    def test_non_list_rejected(self):
        with pytest.raises(CatalogError):
            items_from_data("nope")

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("items:\n  - id: a\n    children:\n      - id: x\n")
        items = load_catalog(path)
        assert items[0].children[0].id == "x"

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("")
        assert load_catalog(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("items: [unclosed\n")
        with pytest.raises(CatalogError, match="Invalid"):
            load_catalog(path)
