"""Tests for the tabbed pick-many prompt."""

import pytest
from readchar import key

from skai_prompts.keys import CTRL_R, SHIFT_TAB
from skai_prompts.prompts import TabbedMultiSelectPrompt
from skai_prompts.types import Option


def press(prompt, *keys):
    for k in keys:
        prompt.handle_key(k)


@pytest.fixture
def prompt(catalog_groups, timers):
    return TabbedMultiSelectPrompt("Pick", catalog_groups, timer_factory=timers)


def labels(prompt):
    return [entry.label for entry in prompt.filtered()]


class TestTabs:
    def test_all_tab_lists_everything(self, prompt):
        assert [t.id for t in prompt.nav.tabs] == ["all", "a", "b"]
        assert labels(prompt) == ["x", "y", "z"]

    def test_switching_tabs(self, prompt):
        press(prompt, key.RIGHT)
        assert labels(prompt) == ["x", "y"]
        press(prompt, "\t")
        assert labels(prompt) == ["z"]
        press(prompt, SHIFT_TAB, key.LEFT)
        assert prompt.nav.active_tab().id == "all"

    def test_cursor_restored_per_tab(self, prompt):
        press(prompt, key.DOWN, key.DOWN, key.RIGHT, key.DOWN, key.LEFT)
        assert prompt.nav.active_tab_state().cursor == 2
        press(prompt, key.RIGHT)
        assert prompt.nav.active_tab_state().cursor == 1

    def test_typing_z_updates_badges(self, prompt):
        press(prompt, "z")
        tabs = {t.id: t for t in prompt.nav.tabs}
        assert tabs["b"].badge == 1
        assert not tabs["b"].disabled
        assert tabs["a"].disabled
        assert not tabs["all"].disabled
        assert labels(prompt) == ["z"]

    def test_disabled_tab_still_reachable(self, prompt):
        press(prompt, "z", key.RIGHT)
        assert prompt.nav.active_tab().id == "a"
        assert labels(prompt) == []

    def test_clearing_search_clears_badges(self, prompt):
        press(prompt, "z", CTRL_R)
        assert all(t.badge is None and not t.disabled for t in prompt.nav.tabs)
        assert labels(prompt) == ["x", "y", "z"]

    def test_category_tabs_sorted(self):
        groups = {"Zeta": [Option(value="z", label="z")], "Alpha": [Option(value="a", label="a")]}
        prompt = TabbedMultiSelectPrompt("Pick", groups)
        assert [t.label for t in prompt.nav.tabs] == ["All", "Alpha", "Zeta"]

    def test_names_differing_in_case_get_separate_tabs(self):
        groups = {
            "Tools": [Option(value="a", label="a"), Option(value="c", label="c")],
            "tools": [Option(value="b", label="b")],
        }
        prompt = TabbedMultiSelectPrompt("Pick", groups)
        assert [t.id for t in prompt.nav.tabs] == ["all", "tools", "tools-2"]
        press(prompt, key.RIGHT, key.DOWN)
        assert labels(prompt) == ["a", "c"]
        press(prompt, key.RIGHT)
        assert labels(prompt) == ["b"]
        assert prompt.nav.active_tab_state().cursor == 0
        press(prompt, key.LEFT)
        assert prompt.nav.active_tab_state().cursor == 1

    def test_badges_for_names_differing_in_case(self):
        groups = {"Tools": [Option(value="a", label="a")], "tools": [Option(value="b", label="b")]}
        prompt = TabbedMultiSelectPrompt("Pick", groups)
        press(prompt, "b")
        tabs = {t.id: t for t in prompt.nav.tabs}
        assert tabs["tools"].disabled
        assert tabs["tools-2"].badge == 1
        assert tabs["all"].badge == 1

    def test_search_reclamps_other_tab_on_switch(self, prompt):
        press(prompt, key.RIGHT, key.DOWN)
        press(prompt, key.LEFT, "x", key.RIGHT)
        assert labels(prompt) == ["x"]
        assert prompt.nav.active_tab_state().cursor == 0


class TestSelection:
    def test_toggle_in_category_tab(self, prompt):
        press(prompt, key.RIGHT, key.RIGHT, " ", key.ENTER)
        assert prompt.result() == ["z"]

    def test_selection_survives_tab_and_filter_changes(self, prompt):
        press(prompt, " ", key.RIGHT, key.RIGHT, " ", "q", key.ENTER)
        assert prompt.result() == ["x", "z"]

    def test_filtered_memo_keyed_by_term_and_tab(self, prompt):
        first = prompt.filtered()
        assert prompt.filtered() is first
        press(prompt, key.RIGHT)
        assert prompt.filtered() is not first


class TestRender:
    def test_frame_layout(self, prompt, plain):
        text = plain(prompt.render())
        lines = text.splitlines()
        assert lines[1] == "◆  Pick"
        assert "╭" in lines[2]
        assert "All" in lines[5]
        assert "─" * 50 == lines[6]
        assert "x" in text and "└" == lines[-1]

    def test_badges_rendered(self, prompt, plain):
        press(prompt, "z")
        text = plain(prompt.render())
        assert "All (1)" in text
        assert "B (1)" in text

    def test_all_tab_falls_back_to_group_hint(self, prompt, plain):
        text = plain(prompt.render())
        assert "x" in text and " A" in text

    def test_empty(self, plain):
        prompt = TabbedMultiSelectPrompt("Pick", {"A": []})
        assert "No skills available" in plain(prompt.render())


def test_many_tabs_overflow(plain):
    groups = {f"Category{i}": [Option(value=i, label=f"skill{i}")] for i in range(10)}
    prompt = TabbedMultiSelectPrompt("Pick", groups)
    for _ in range(6):
        press(prompt, key.RIGHT)
    text = plain(prompt.render())
    assert "Category5" in text
    assert "‹" in text and "›" in text
