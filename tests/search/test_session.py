"""Tests for SearchSession cache/fetch/index lifecycle."""

import pytest

from docsieve.config import Settings
from docsieve.constants import DEFAULT_CACHE_KEY
from docsieve.search.session import SOURCE_CACHE, SOURCE_REMOTE, SearchSession
from docsieve.sources.cache import MemoryCache


class TestLoad:
    def test_miss_fetches_and_writes_through(self, memory_cache, fetcher, sample_docs):
        session = SearchSession(memory_cache, fetcher)
        sections = session.load()
        assert fetcher.calls == 1
        assert session.source == SOURCE_REMOTE
        assert memory_cache.get(DEFAULT_CACHE_KEY) == sample_docs
        assert len(sections) == 6

    def test_hit_reads_through_without_fetch(self, memory_cache, fetcher, sample_docs):
        memory_cache.set(DEFAULT_CACHE_KEY, sample_docs)
        session = SearchSession(memory_cache, fetcher)
        session.load()
        assert fetcher.calls == 0
        assert session.source == SOURCE_CACHE

    def test_provenance_does_not_change_result(self, memory_cache, make_fetcher):
        remote = SearchSession(memory_cache, make_fetcher()).load()
        cached = SearchSession(memory_cache, make_fetcher(error=AssertionError("no fetch"))).load()
        assert remote == cached

    def test_expired_cache_refetches(self, make_fetcher, sample_docs):
        now = [1000.0]
        cache = MemoryCache(ttl_seconds=3600, clock=lambda: now[0])
        cache.set(DEFAULT_CACHE_KEY, sample_docs)
        now[0] += 3600
        fetcher = make_fetcher()
        session = SearchSession(cache, fetcher)
        session.load()
        assert fetcher.calls == 1
        assert session.source == SOURCE_REMOTE

    def test_fetch_failure_propagates(self, memory_cache, make_fetcher):
        fetcher = make_fetcher(error=RuntimeError("Failed to fetch docs from x: boom"))
        session = SearchSession(memory_cache, fetcher)
        with pytest.raises(RuntimeError, match="Failed to fetch"):
            session.load()
        assert memory_cache.get(DEFAULT_CACHE_KEY) is None
        assert not session.loaded

    def test_settings_applied(self, memory_cache, fetcher):
        settings = Settings(max_heading_depth=1, cache_key="custom-key")
        session = SearchSession(memory_cache, fetcher, settings)
        titles = [s.title for s in session.load()]
        assert "$derived" not in titles
        assert memory_cache.get("custom-key") is not None

    def test_headingless_document_is_empty_not_error(self, memory_cache, make_fetcher):
        session = SearchSession(memory_cache, make_fetcher(text="no headings here"))
        assert session.load() == []
        assert session.search("anything") == []


class TestRefreshAndClear:
    def test_refresh_invalidates_and_refetches(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        session.load()
        session.refresh()
        assert fetcher.calls == 2
        assert session.source == SOURCE_REMOTE

    def test_clear_cache(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        session.load()
        session.clear_cache()
        assert memory_cache.get(DEFAULT_CACHE_KEY) is None
        assert not session.loaded
        assert session.source is None


class TestSearch:
    def test_search_autoloads(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        results = session.search("routing")
        assert session.loaded
        assert [s.title for s in results] == ["Routing"]

    def test_empty_query_returns_all_in_order(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        assert session.search("") == session.sections

    def test_repeat_search_is_idempotent(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        assert session.search("state") == session.search("state")
        assert fetcher.calls == 1

    def test_search_with_scores(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        results = session.search_with_scores("state", limit=1)
        assert len(results) == 1
        section, score = results[0]
        assert section.title == "$state"
        assert score > 0

    def test_find_title_case_insensitive(self, memory_cache, fetcher):
        session = SearchSession(memory_cache, fetcher)
        assert session.find_title("  routing ").title == "Routing"
        assert session.find_title("missing") is None
