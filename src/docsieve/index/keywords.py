"""Keyword extraction from section titles."""

from __future__ import annotations

import re

# Token separator: anything but lowercase letters, digits and the '$' sigil
_SPLIT_RE = re.compile(r"[^a-z0-9$]+")

MIN_KEYWORD_LENGTH = 3


def extract_keywords(title: str) -> list[str]:
    """Lowercase title tokens longer than 2 chars, sigil stripped, first-seen order.

    "$app/stores" -> ["app", "stores"]
    """
    keywords: list[str] = []
    for token in _SPLIT_RE.split(title.lower()):
        word = token.strip("$")
        if len(word) >= MIN_KEYWORD_LENGTH and word not in keywords:
            keywords.append(word)
    return keywords
