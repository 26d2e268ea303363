"""Tests for the grouped pick-many prompt."""

import pytest
from readchar import key

from skai_prompts.prompts import GroupMultiSelectPrompt
from skai_prompts.types import Option


def press(prompt, *keys):
    for k in keys:
        prompt.handle_key(k)


@pytest.fixture
def prompt(catalog_groups):
    return GroupMultiSelectPrompt("Pick", catalog_groups)


def row_labels(prompt):
    return [row.group.group_name if row.is_header else row.entry.label for row in prompt.rows()]


class TestRows:
    def test_headers_precede_options(self, prompt):
        assert row_labels(prompt) == ["A", "x", "y", "B", "z"]

    def test_search_drops_empty_groups(self, prompt):
        press(prompt, "z")
        assert row_labels(prompt) == ["B", "z"]

    def test_group_name_match_keeps_all_options(self):
        prompt = GroupMultiSelectPrompt(
            "Pick",
            {
                "Frontend": [Option(value="react", label="React"), Option(value="vue", label="Vue")],
                "Tools": [Option(value="git", label="Git")],
            },
        )
        press(prompt, "f", "r", "o", "n", "t")
        assert row_labels(prompt) == ["Frontend", "React", "Vue"]

    def test_empty_group_listed_without_search(self):
        prompt = GroupMultiSelectPrompt("Pick", {"Empty": [], "B": [Option(value="z", label="z")]})
        assert row_labels(prompt) == ["Empty", "B", "z"]


class TestSelection:
    def test_down_twice_selects_y(self, prompt):
        press(prompt, key.DOWN, key.DOWN, " ", key.ENTER)
        assert prompt.result() == ["y"]

    def test_group_toggle_selects_all(self, prompt):
        press(prompt, " ", key.ENTER)
        assert prompt.result() == ["x", "y"]

    def test_group_toggle_completes_partial_selection(self, prompt):
        press(prompt, key.DOWN, " ", key.UP, " ")
        assert prompt.value() == ["x", "y"]

    def test_group_toggle_deselects_full_group(self, prompt):
        press(prompt, " ", " ")
        assert prompt.value() == []

    def test_group_toggle_covers_options_hidden_by_search(self):
        prompt = GroupMultiSelectPrompt(
            "Pick",
            {"A": [Option(value="x", label="xa"), Option(value="y", label="yb")]},
        )
        press(prompt, "x", " ")
        assert row_labels(prompt) == ["A", "xa"]
        assert prompt.value() == ["x", "y"]

    def test_toggle_on_empty_group_is_noop(self):
        prompt = GroupMultiSelectPrompt("Pick", {"Empty": []})
        press(prompt, " ", key.ENTER)
        assert prompt.result() == []


class TestRender:
    def test_group_counts(self, prompt, plain):
        press(prompt, key.DOWN, " ")
        text = plain(prompt.render())
        assert "A (1/2)" in text
        assert "B (1)" in text
        assert "1 selected" in text

    def test_search_box_shows_term(self, prompt, plain):
        press(prompt, "z")
        text = plain(prompt.render())
        assert "⌕ z" in text
        assert "A (" not in text

    def test_no_results(self, prompt, plain):
        press(prompt, "q")
        assert 'No skills match "q"' in plain(prompt.render())

    def test_empty(self, plain):
        assert "No skills available" in plain(GroupMultiSelectPrompt("Pick", {}).render())
