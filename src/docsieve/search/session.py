"""Search session: ties the cache, the fetcher and the index together.

Lifecycle: read-through on load, write-through after a successful fetch,
explicit invalidation on refresh. The cache is passed in, never global.
"""

from __future__ import annotations

import logging
from typing import Protocol

from docsieve.config import Settings
from docsieve.index.builder import build_index
from docsieve.index.models import Section
from docsieve.search.ranker import rank_with_scores
from docsieve.sources.cache import TextCache

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_REMOTE = "remote"


class Fetcher(Protocol):
    def fetch(self) -> str: ...


class SearchSession:
    """Holds one in-memory index for the lifetime of a session."""

    def __init__(self, cache: TextCache, fetcher: Fetcher, settings: Settings | None = None):
        self.cache = cache
        self.fetcher = fetcher
        self.settings = settings or Settings()
        self._sections: list[Section] | None = None
        self.source: str | None = None

    @property
    def loaded(self) -> bool:
        return self._sections is not None

    @property
    def sections(self) -> list[Section]:
        """The current index, loading it first if needed."""
        if self._sections is None:
            return self.load()
        return self._sections

    def load(self) -> list[Section]:
        """(Re)build the index from the cached copy, or fetch on a miss."""
        key = self.settings.cache_key
        text = self.cache.get(key)
        if text is not None:
            source = SOURCE_CACHE
            logger.debug("Loaded docs from cache key %r", key)
        else:
            text = self.fetcher.fetch()
            self.cache.set(key, text)
            source = SOURCE_REMOTE

        self._sections = build_index(
            text,
            max_heading_depth=self.settings.max_heading_depth,
            normalize_callouts=self.settings.normalize_callouts,
            docs_base_url=self.settings.docs_base_url,
        )
        self.source = source
        logger.info("Docs loaded from %s: %d sections indexed", source, len(self._sections))
        return self._sections

    def refresh(self) -> list[Section]:
        """Drop the cached copy and load again from the remote source."""
        self.clear_cache()
        return self.load()

    def clear_cache(self) -> None:
        """Invalidate the cached copy; the in-memory index is discarded too."""
        self.cache.remove(self.settings.cache_key)
        self._sections = None
        self.source = None

    def search_with_scores(
        self,
        query: str | None,
        limit: int | None = None,
        category: str | None = None,
    ) -> list[tuple[Section, int | None]]:
        return rank_with_scores(self.sections, query, limit=limit, category=category)

    def search(
        self,
        query: str | None,
        limit: int | None = None,
        category: str | None = None,
    ) -> list[Section]:
        """Ranked sections for a query; an empty query returns everything in order."""
        return [s for s, _ in self.search_with_scores(query, limit=limit, category=category)]

    def find_title(self, title: str) -> Section | None:
        """First section whose title equals ``title`` ignoring case."""
        wanted = title.strip().lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None
