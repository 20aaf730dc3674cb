"""Deterministic additive ranking of sections against a free-text query.

Scoring (additive, a section can collect several bonuses):

    +100  a keyword equals the query
    +50   a keyword contains the query
    +30   the title equals the query
    +20   the title contains the query
    +10   the body contains the query

Matching is case-insensitive. Ties keep document order (stable sort). An
empty query returns every section in document order, unscored. The query is
only lowercased, so a whitespace-only query is matched literally.
"""

from __future__ import annotations

from collections.abc import Sequence

from docsieve.index.models import Section

SCORE_KEYWORD_EXACT = 100
SCORE_KEYWORD_CONTAINS = 50
SCORE_TITLE_EXACT = 30
SCORE_TITLE_CONTAINS = 20
SCORE_BODY_CONTAINS = 10


def normalize_query(query: str | None) -> str:
    return (query or "").lower()


def matches(section: Section, query: str) -> bool:
    """Inclusion test for an already-normalised, non-empty query."""
    return (
        query in section.title.lower()
        or any(query in k for k in section.keywords)
        or query in section.body.lower()
    )


def score(section: Section, query: str) -> int:
    """Relevance score for an already-normalised query."""
    title = section.title.lower()
    total = 0
    if any(k == query for k in section.keywords):
        total += SCORE_KEYWORD_EXACT
    if any(query in k for k in section.keywords):
        total += SCORE_KEYWORD_CONTAINS
    if title == query:
        total += SCORE_TITLE_EXACT
    if query in title:
        total += SCORE_TITLE_CONTAINS
    if query in section.body.lower():
        total += SCORE_BODY_CONTAINS
    return total


def rank_with_scores(
    sections: Sequence[Section],
    query: str | None,
    limit: int | None = None,
    category: str | None = None,
) -> list[tuple[Section, int | None]]:
    """Filter and order sections, returning (section, score) pairs.

    Score is None for every entry when the query is empty.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    candidates = [s for s in sections if category is None or s.category == category]
    q = normalize_query(query)

    if not q:
        results: list[tuple[Section, int | None]] = [(s, None) for s in candidates]
    else:
        scored = [(s, score(s, q)) for s in candidates if matches(s, q)]
        # sorted() is stable: equal scores keep document order
        results = sorted(scored, key=lambda pair: pair[1], reverse=True)

    return results if limit is None else results[:limit]


def rank(
    sections: Sequence[Section],
    query: str | None,
    limit: int | None = None,
    category: str | None = None,
) -> list[Section]:
    """Return matching sections, most relevant first."""
    return [s for s, _ in rank_with_scores(sections, query, limit=limit, category=category)]
