"""Index builder: segments, classifies and tags one documentation corpus."""

from __future__ import annotations

import logging
import time
from collections import Counter

from docsieve.constants import DEFAULT_DOCS_BASE_URL, DEFAULT_MAX_HEADING_DEPTH
from docsieve.index.classifier import classify
from docsieve.index.keywords import extract_keywords
from docsieve.index.models import Section, build_url, title_to_anchor
from docsieve.index.segmenter import segment

logger = logging.getLogger(__name__)


def build_index(
    text: str,
    max_heading_depth: int = DEFAULT_MAX_HEADING_DEPTH,
    normalize_callouts: bool = True,
    docs_base_url: str = DEFAULT_DOCS_BASE_URL,
) -> list[Section]:
    """Turn raw document text into the ordered list of searchable sections.

    Rebuilt from scratch on every call; the result is identical whether the
    text came from the network or from the cache.
    """
    start = time.monotonic()
    raw_sections = segment(text, max_heading_depth=max_heading_depth, normalize=normalize_callouts)

    sections = [
        Section(
            title=raw.title,
            body=raw.body,
            ordering=i,
            category=classify(raw.title, raw.body),
            keywords=extract_keywords(raw.title),
            anchor=title_to_anchor(raw.title),
            url=build_url(docs_base_url, raw.title),
            start_line=raw.start_line,
            end_line=raw.end_line,
        )
        for i, raw in enumerate(raw_sections)
    ]

    duration_ms = int((time.monotonic() - start) * 1000)
    logger.info("Indexed %d sections in %dms", len(sections), duration_ms)
    if sections:
        logger.debug("Category counts: %s", dict(category_counts(sections)))
    return sections


def category_counts(sections: list[Section]) -> Counter:
    """Count sections per category."""
    return Counter(s.category for s in sections)
