"""Tests for the index builder and section models."""

import pytest

from docsieve.constants import CAT_CONCEPT, CAT_DIRECTIVE, CAT_MODULE, CAT_RUNE
from docsieve.index.builder import build_index, category_counts
from docsieve.index.models import Section, build_url, title_to_anchor


class TestTitleToAnchor:
    def test_collapses_runs(self):
        assert title_to_anchor("$app/stores") == "app-stores"

    def test_strips_edges(self):
        assert title_to_anchor("  Hello, World!  ") == "hello-world"

    def test_symbols_only(self):
        assert title_to_anchor("$$") == ""


class TestBuildUrl:
    def test_joins_base_and_anchor(self):
        assert build_url("https://svelte.dev/docs/kit/", "Form actions") == (
            "https://svelte.dev/docs/kit/form-actions"
        )

    def test_empty_anchor_returns_base(self):
        assert build_url("https://svelte.dev/docs/kit", "$") == "https://svelte.dev/docs/kit"


class TestSectionModel:
    def test_rejects_empty_title(self):
        with pytest.raises(ValueError, match="title"):
            Section(title="", body="x", ordering=0)

    def test_rejects_unknown_category(self):
        with pytest.raises(ValueError, match="category"):
            Section(title="A", body="x", ordering=0, category="widget")

    def test_line_count(self):
        assert Section(title="A", body="one\ntwo\nthree", ordering=0).line_count == 3
        assert Section(title="A", body="", ordering=0).line_count == 0


class TestBuildIndex:
    def test_concrete_scenario(self):
        text = "# Foo\nHello world\n\n# Bar\nuse:clickOutside directive here"
        sections = build_index(text, max_heading_depth=1)
        assert [(s.title, s.body) for s in sections] == [
            ("Foo", "Hello world"),
            ("Bar", "use:clickOutside directive here"),
        ]
        assert sections[0].category == CAT_CONCEPT
        assert sections[1].category == CAT_DIRECTIVE

    def test_sample_docs(self, sample_docs):
        sections = build_index(sample_docs)
        assert [s.title for s in sections] == [
            "Overview",
            "$state",
            "$derived",
            "Routing",
            "$app/stores",
            "Actions",
        ]
        assert [s.ordering for s in sections] == list(range(6))
        by_title = {s.title: s for s in sections}
        assert by_title["$state"].category == CAT_RUNE
        assert by_title["$derived"].category == CAT_RUNE
        assert by_title["$app/stores"].category == CAT_MODULE
        assert by_title["$app/stores"].keywords == ["app", "stores"]
        assert by_title["Actions"].category == CAT_DIRECTIVE
        assert by_title["Routing"].url == "https://svelte.dev/docs/kit/routing"

    def test_depth_one_merges_subsections(self, sample_docs):
        sections = build_index(sample_docs, max_heading_depth=1)
        titles = [s.title for s in sections]
        assert "$derived" not in titles
        assert "## $derived" in sections[titles.index("$state")].body

    def test_custom_base_url(self):
        sections = build_index("# Intro\ntext", docs_base_url="https://example.com/docs")
        assert sections[0].url == "https://example.com/docs/intro"
        assert sections[0].anchor == "intro"

    def test_line_spans_recorded(self):
        sections = build_index("# A\none\ntwo\n# B\nthree")
        assert (sections[0].start_line, sections[0].end_line) == (1, 3)
        assert (sections[1].start_line, sections[1].end_line) == (4, 5)

    def test_no_headings(self):
        assert build_index("plain text only") == []

    def test_category_counts(self, sample_docs):
        counts = category_counts(build_index(sample_docs))
        assert counts[CAT_RUNE] == 2
        assert sum(counts.values()) == 6
