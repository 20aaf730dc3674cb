#!/usr/bin/env python3
"""Classification debugger.

Segments a local Markdown file and prints, per section, the category chosen
and which patterns of the winning rule fired. Imports and calls real
production code.

Usage:
    debug_classify.py <file.md> [--depth N] [--category CAT] [--summary]
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

# Ensure the src directory is importable when running as a standalone script
_SCRIPT_DIR = Path(__file__).resolve().parent
_SRC_DIR = _SCRIPT_DIR.parent / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from docsieve.constants import CAT_CONCEPT, DEFAULT_MAX_HEADING_DEPTH
from docsieve.index.classifier import rule_for
from docsieve.index.segmenter import segment


def _fired(rule, title: str, body: str) -> list[str]:
    lower_title, lower_body = title.lower(), body.lower()
    fired = [f"title:{p.pattern}" for p in rule.title_patterns if p.search(lower_title)]
    fired += [f"body:{p.pattern}" for p in rule.body_patterns if p.search(lower_body)]
    return fired


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("path", type=Path)
    parser.add_argument("--depth", type=int, default=DEFAULT_MAX_HEADING_DEPTH)
    parser.add_argument("--category", default=None, help="Only print this category.")
    parser.add_argument("--summary", action="store_true", help="Only print category counts.")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8")
    counts: Counter = Counter()

    for raw in segment(text, max_heading_depth=args.depth):
        rule = rule_for(raw.title, raw.body)
        category = rule.category if rule else CAT_CONCEPT
        counts[category] += 1
        if args.summary or (args.category and category != args.category):
            continue
        print(f"L{raw.start_line:<6} {category:<11} {raw.title}")
        if rule is not None:
            for pattern in _fired(rule, raw.title, raw.body):
                print(f"{'':19}{pattern}")

    print()
    for category, count in counts.most_common():
        print(f"{count:>6}  {category}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
