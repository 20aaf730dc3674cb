"""Data models for indexed documentation sections."""

from __future__ import annotations

import dataclasses
import re

from docsieve.constants import CAT_CONCEPT, VALID_CATEGORIES


@dataclasses.dataclass(frozen=True)
class RawSection:
    """A titled span produced by the segmenter, before classification."""

    title: str
    body: str
    start_line: int  # 1-based line of the heading
    end_line: int  # 1-based line of the last body line


@dataclasses.dataclass
class Section:
    """A classified, keyword-tagged section ready for search and display."""

    title: str
    body: str
    ordering: int
    category: str = CAT_CONCEPT
    keywords: list[str] = dataclasses.field(default_factory=list)
    anchor: str = ""
    url: str = ""
    start_line: int | None = None
    end_line: int | None = None

    def __post_init__(self):
        if not self.title:
            raise ValueError("title must be non-empty")
        if self.category not in VALID_CATEGORIES:
            raise ValueError(
                f"category must be one of {sorted(VALID_CATEGORIES)}, got {self.category!r}"
            )

    @property
    def line_count(self) -> int:
        """Number of body lines."""
        return len(self.body.split("\n")) if self.body else 0

    def __repr__(self) -> str:
        preview = self.body[:60] + "..." if len(self.body) > 60 else self.body
        return f"Section(title={self.title!r}, category={self.category!r}, body={preview!r})"


def title_to_anchor(title: str) -> str:
    """Convert a heading title to a URL-safe slug."""
    # Lowercase, collapse non-alphanumeric runs to a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
    return slug.strip("-")


def build_url(base_url: str, title: str) -> str:
    """Deterministic external documentation URL for a section title."""
    anchor = title_to_anchor(title)
    base = base_url.rstrip("/")
    return f"{base}/{anchor}" if anchor else base
