"""Heuristic section classification.

A first-match rule chain over the lowercased title and body. Rules run from
most specific (rune sigils, directive syntax, template blocks) to the broad
topic buckets; the first rule that matches decides the category. Anything
left unmatched is a ``concept``.
"""

from __future__ import annotations

import dataclasses
import logging
import re

from docsieve.constants import (
    CAT_API,
    CAT_BLOCK,
    CAT_CONCEPT,
    CAT_CONFIG,
    CAT_CONTEXT,
    CAT_DIRECTIVE,
    CAT_ELEMENT,
    CAT_ERROR,
    CAT_LEGACY,
    CAT_LIFECYCLE,
    CAT_MIGRATION,
    CAT_MODULE,
    CAT_RUNE,
    CAT_STORES,
    CAT_STYLING,
    CAT_TESTING,
    CAT_TYPESCRIPT,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ClassificationRule:
    """One link of the chain: matches if any title or body pattern is found."""

    category: str
    title_patterns: tuple[re.Pattern[str], ...] = ()
    body_patterns: tuple[re.Pattern[str], ...] = ()

    def matches(self, title: str, body: str) -> bool:
        """Test against already-lowercased title and body."""
        return any(p.search(title) for p in self.title_patterns) or any(
            p.search(body) for p in self.body_patterns
        )


def _p(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.MULTILINE) for p in patterns)


# $state, $derived.by, $effect.pre, $props() ...
_RUNE = r"\$(?:state|derived|effect|props|bindable|inspect|host)\b"
# use:action, bind:value, on:click, transition:fade, class:active ...
_DIRECTIVE = r"(?<![\w$:/])(?:use|bind|on|transition|in|out|animate|class|style|let):[a-z_$]"
# {#if}, {#each}, {@render}, {@html} ...
_BLOCK = r"\{[#:/](?:if|else|each|await|then|catch|key|snippet)\b|\{@(?:render|html|const|debug|attach)\b"
_ELEMENT = r"<svelte:[a-z]+"

RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(CAT_RUNE, _p(_RUNE), _p(_RUNE)),
    ClassificationRule(CAT_DIRECTIVE, _p(_DIRECTIVE), _p(_DIRECTIVE)),
    ClassificationRule(CAT_BLOCK, _p(_BLOCK), _p(_BLOCK)),
    ClassificationRule(CAT_ELEMENT, _p(_ELEMENT), _p(_ELEMENT)),
    ClassificationRule(
        CAT_MODULE,
        _p(r"\$(?:app|env|lib|service-worker)\b", r"@sveltejs/", r"^svelte/[a-z]", r"\bimport\b"),
    ),
    ClassificationRule(
        CAT_API,
        # goto(...), mount(), event.locals, page.url.pathname; not file names
        _p(
            r"^[a-z_$][\w$.]*\s*\(.*\)$",
            r"^(?!.*\.(?:js|ts|json|svelte)$)[a-z_$][\w$]*\.[a-z_$][\w$.]*$",
        ),
    ),
    ClassificationRule(
        CAT_CONFIG,
        _p(r"\bconfig", r"\badapter", r"\bconfiguration\b"),
        _p(r"svelte\.config\.js", r"vite\.config\.[jt]s"),
    ),
    ClassificationRule(
        CAT_MIGRATION,
        _p(r"\bmigrat", r"\bupgrad", r"breaking changes?"),
        _p(r"sv migrate", r"migration guide"),
    ),
    ClassificationRule(
        CAT_ERROR,
        _p(r"\berrors?\b", r"\bwarnings?\b"),
        _p(r"\berror\(\d{3}"),
    ),
    ClassificationRule(
        CAT_STYLING,
        _p(r"\bstyl", r"\bcss\b"),
        _p(r"<style\b", r":global\("),
    ),
    ClassificationRule(
        CAT_TESTING,
        _p(r"\btest", r"\bvitest\b", r"\bplaywright\b"),
        _p(r"\bvitest\b", r"\bplaywright\b", r"@testing-library/"),
    ),
    ClassificationRule(
        CAT_TYPESCRIPT,
        _p(r"\btypescript\b", r"\btypes?\b"),
        _p(r"lang=[\"']ts[\"']"),
    ),
    ClassificationRule(
        CAT_STORES,
        _p(r"\bstores?\b"),
        _p(r"\b(?:writable|readable)\(", r"from [\"']svelte/store[\"']"),
    ),
    ClassificationRule(
        CAT_CONTEXT,
        _p(r"\bcontext\b"),
        _p(r"\b(?:set|get|has|create)context\("),
    ),
    ClassificationRule(
        CAT_LIFECYCLE,
        _p(r"\blifecycle\b", r"\bonmount\b", r"\bondestroy\b", r"\btick\b"),
        _p(r"\b(?:onmount|ondestroy|beforeupdate|afterupdate)\("),
    ),
    ClassificationRule(
        CAT_LEGACY,
        _p(r"\blegacy\b", r"\bdeprecated\b", r"\bsvelte 4\b"),
        _p(r"^\s*export let\b", r"^\s*\$:", r"\bdeprecated\b"),
    ),
)


def rule_for(title: str, body: str) -> ClassificationRule | None:
    """Return the first rule matching (title, body), or None."""
    lower_title = title.lower()
    lower_body = body.lower()
    for rule in RULES:
        if rule.matches(lower_title, lower_body):
            return rule
    return None


def classify(title: str, body: str) -> str:
    """Assign exactly one category; ``concept`` when no rule matches."""
    rule = rule_for(title, body)
    if rule is None:
        return CAT_CONCEPT
    logger.debug("Classified %r as %s", title, rule.category)
    return rule.category
