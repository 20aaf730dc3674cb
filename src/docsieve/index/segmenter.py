"""Markdown segmenter: splits one documentation corpus into titled sections.

Boundary policy: any ATX heading at column 0 whose depth is <= max_heading_depth
(default 3) starts a new section. Deeper headings are kept as body text.
Lines inside fenced code blocks are never boundaries.
"""

from __future__ import annotations

import dataclasses
import re

from docsieve.constants import DEFAULT_MAX_HEADING_DEPTH
from docsieve.index.models import RawSection

# Callout tags -> single glyph prefix. Substitution is per tag, never spans lines.
CALLOUT_GLYPHS: dict[str, str] = {
    "NOTE": "ℹ️",
    "TIP": "\U0001f4a1",
    "IMPORTANT": "❗",
    "WARNING": "⚠️",
    "CAUTION": "\U0001f6d1",
    "LEGACY": "\U0001f570️",
    "DETAILS": "▸",
}

_CALLOUT_RE = re.compile(
    r"\[!(" + "|".join(CALLOUT_GLYPHS) + r")\]",
    re.IGNORECASE,
)

# Opening/closing code fence (up to 3 spaces of indent, as CommonMark allows)
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")

# Optional ATX closing sequence: "## Title ##"
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")


def normalize_callouts(text: str) -> str:
    """Replace bracketed admonition tags with single-glyph prefixes."""
    return _CALLOUT_RE.sub(lambda m: CALLOUT_GLYPHS[m.group(1).upper()], text)


def heading_pattern(max_heading_depth: int) -> re.Pattern[str]:
    """Compile the boundary regex for headings of depth 1..max_heading_depth."""
    if not 1 <= max_heading_depth <= 6:
        raise ValueError(f"max_heading_depth must be in 1..6, got {max_heading_depth}")
    return re.compile(r"^(#{1,%d})[ \t]+(.*)$" % max_heading_depth)


def heading_title(raw: str) -> str:
    """Strip surrounding whitespace and any closing '#' run from heading text."""
    return _CLOSING_HASHES_RE.sub("", raw.strip()).strip()


@dataclasses.dataclass(frozen=True)
class _Pending:
    """The section currently being accumulated.

    Body lines are the half-open index range [body_start, body_end) of the
    split document; the text is joined once, on close.
    """

    title: str
    start_line: int
    body_start: int
    body_end: int
    last_content_line: int = 0

    def add(self, line: str, index: int) -> _Pending:
        last = index + 1 if line.strip() else self.last_content_line
        return dataclasses.replace(self, body_end=index + 1, last_content_line=last)

    def close(self, lines: list[str]) -> RawSection | None:
        """Finish the section, or None if it has no title or an empty body."""
        body = "\n".join(lines[self.body_start:self.body_end]).strip()
        if not self.title or not body:
            return None
        return RawSection(
            title=self.title,
            body=body,
            start_line=self.start_line,
            end_line=self.last_content_line,
        )


@dataclasses.dataclass(frozen=True)
class _ScanState:
    pending: _Pending | None = None
    fence: str | None = None  # opening fence marker while inside a code block


def _fence_transition(line: str, fence: str | None) -> str | None:
    """Return the fence marker in effect after this line."""
    m = _FENCE_RE.match(line)
    if fence is None:
        return m.group(1) if m else None
    if m is None:
        return fence
    marker = m.group(1)
    # Closing fence: same character, at least as long, nothing else on the line
    if marker[0] == fence[0] and len(marker) >= len(fence) and not line.strip()[len(marker):].strip():
        return None
    return fence


def _step(
    state: _ScanState,
    lines: list[str],
    index: int,
    boundary: re.Pattern[str],
) -> tuple[_ScanState, RawSection | None]:
    """Fold line ``index`` into the scan state.

    Returns the new state and the section closed by this line, if any.
    """
    line = lines[index]
    if state.fence is None:
        m = boundary.match(line)
        if m:
            closed = state.pending.close(lines) if state.pending is not None else None
            pending = _Pending(
                title=heading_title(m.group(2)),
                start_line=index + 1,
                body_start=index + 1,
                body_end=index + 1,
            )
            return _ScanState(pending=pending), closed

    fence = _fence_transition(line, state.fence)
    # Lines before the first heading are discarded
    pending = state.pending.add(line, index) if state.pending is not None else None
    return _ScanState(pending=pending, fence=fence), None


def segment(
    text: str,
    max_heading_depth: int = DEFAULT_MAX_HEADING_DEPTH,
    normalize: bool = True,
) -> list[RawSection]:
    """Split a Markdown document into titled sections in document order.

    A heading with an empty body (immediately followed by another boundary)
    produces no section. A document without headings yields an empty list.
    Runs in time linear in the number of lines.
    """
    boundary = heading_pattern(max_heading_depth)
    if normalize:
        text = normalize_callouts(text)

    lines = text.split("\n")
    sections: list[RawSection] = []
    state = _ScanState()
    for index in range(len(lines)):
        state, closed = _step(state, lines, index, boundary)
        if closed is not None:
            sections.append(closed)
    if state.pending is not None:
        closed = state.pending.close(lines)
        if closed is not None:
            sections.append(closed)
    return sections
