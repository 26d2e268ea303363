"""Tests for the search index."""

from rich.text import Text

from skai_prompts.search import (
    ALL_TAB_ID,
    MatchCounter,
    SearchQuery,
    build_grouped_searchable,
    build_searchable,
    filter_entries,
    find_match,
    highlight_match,
    highlight_match_dim,
    match_count_by_group,
)
from skai_prompts.types import Option

OPTIONS = [
    Option(value="react", label="React", hint="UI Library", description="Components"),
    Option(value="vue", label="Vue", hint=None, description="Progressive framework"),
    Option(value="redux", label="Redux", hint="State"),
]


class TestBuildSearchable:
    def test_text_is_lowercase_and_joined(self):
        entries = build_searchable(OPTIONS)
        assert entries[0].searchable_text == "react|ui library|components"
        assert entries[1].searchable_text == "vue||progressive framework"

    def test_entry_exposes_option_fields(self):
        entry = build_searchable(OPTIONS)[0]
        assert entry.value == "react"
        assert entry.label == "React"
        assert entry.hint == "UI Library"

    def test_grouped_text_includes_group_name(self):
        grouped = build_grouped_searchable({"Frontend": OPTIONS[:1]})
        assert grouped[0].searchable_text == "frontend"
        assert grouped[0].entries[0].searchable_text == "react|frontend|ui library|components"
        assert grouped[0].entries[0].group == "Frontend"


class TestFilter:
    def test_empty_term_is_identity(self):
        entries = build_searchable(OPTIONS)
        assert filter_entries(entries, "") is entries

    def test_case_insensitive_and_stable(self):
        entries = build_searchable(OPTIONS)
        assert [e.value for e in filter_entries(entries, "RE")] == ["react", "vue", "redux"]
        assert [e.value for e in filter_entries(entries, "red")] == ["redux"]

    def test_matches_hint_and_description(self):
        entries = build_searchable(OPTIONS)
        assert [e.value for e in filter_entries(entries, "state")] == ["redux"]
        assert [e.value for e in filter_entries(entries, "progress")] == ["vue"]

    def test_extending_term_narrows_results(self):
        entries = build_searchable(OPTIONS)
        for term in ["r", "re", "rea", "reac", "react"]:
            wider = filter_entries(entries, term[:-1]) if len(term) > 1 else entries
            narrower = filter_entries(entries, term)
            assert all(entry in wider for entry in narrower)
            positions = [list(wider).index(entry) for entry in narrower]
            assert positions == sorted(positions)


class TestHighlight:
    def test_empty_term_returns_text(self):
        assert highlight_match("React", "") == "React"

    def test_absent_term_returns_text(self):
        assert highlight_match("React", "vue") == "React"

    def test_marks_first_occurrence_only(self):
        result = highlight_match("banana", "AN", style="bold")
        assert result == "b[bold]an[/bold]ana"

    def test_preserves_original_casing(self):
        result = highlight_match("ReAct", "react", style="u")
        assert result == "[u]ReAct[/u]"
        assert Text.from_markup(result).plain == "ReAct"

    def test_escapes_markup_in_text(self):
        result = highlight_match("[x] tool", "tool")
        assert Text.from_markup(result).plain == "[x] tool"

    def test_dim_variant_always_markup(self):
        assert highlight_match_dim("vue", "", dim_style="dim") == "[dim]vue[/dim]"
        result = highlight_match_dim("React", "ac", style="b", dim_style="dim")
        assert result == "[dim]Re[/dim][b]ac[/b][dim]t[/dim]"

    def test_span_indexes_original_text(self):
        # "İ" lower-cases to two characters
        assert find_match("İstanbul-x", "x") == (9, 10)
        result = highlight_match("İstanbul-x", "x", style="b")
        assert result == "İstanbul-[b]x[/b]"

    def test_find_match(self):
        assert find_match("React", "ACT") == (2, 5)
        assert find_match("React", "") is None
        assert find_match("React", "x") is None


class TestMatchCounts:
    def _grouped(self):
        return build_grouped_searchable(
            {
                "A": [Option(value="x", label="x"), Option(value="y", label="y")],
                "B": [Option(value="z", label="z")],
            }
        )

    def test_empty_term_counts_group_sizes(self):
        assert match_count_by_group(self._grouped(), "") == {"A": 2, "B": 1, ALL_TAB_ID: 3}

    def test_counts_per_group(self):
        assert match_count_by_group(self._grouped(), "z") == {"A": 0, "B": 1, ALL_TAB_ID: 1}

    def test_counter_memoizes_by_term(self):
        counter = MatchCounter(self._grouped())
        first = counter.counts("z")
        assert counter.counts("z") is first
        assert counter.counts("x") is not first

    def test_invalidate_recomputes(self):
        counter = MatchCounter(self._grouped())
        first = counter.counts("z")
        counter.invalidate()
        assert counter.counts("z") is not first


class TestSearchQuery:
    def test_append_accepts_search_chars(self):
        query = SearchQuery()
        for char in "Ab-_./9":
            assert query.append(char)
        assert query.term == "Ab-_./9"

    def test_rejects_other_chars(self):
        query = SearchQuery()
        assert not query.append(" ")
        assert not query.append("!")
        assert not query.append("é")
        assert query.term == ""

    def test_max_length(self):
        query = SearchQuery(max_length=3)
        for char in "abcd":
            query.append(char)
        assert query.term == "abc"

    def test_backspace_and_clear(self):
        query = SearchQuery()
        query.append("a")
        query.append("b")
        assert query.backspace()
        assert query.term == "a"
        assert query.clear()
        assert not query.clear()
        assert not query.backspace()
        assert not query
