"""Selector extraction from raw stylesheet text.

Pattern-based, not a CSS grammar: comments are stripped, whitespace is
collapsed and every non-nested ``selector-list { declarations }`` match is
read. At-rule headers (``@media ...``) are skipped; rules nested inside
them are still picked up because the match restarts after each ``{``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..models import SelectorGroup

MAX_RULE_MATCHES = 1000

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")
_RULE_RE = re.compile(r"([^{}]+)\{[^{}]*\}")
CLASS_TOKEN_RE = re.compile(r"\.([A-Za-z_-][A-Za-z0-9_-]*)")


@dataclass(frozen=True)
class SelectorExtraction:
    """Deduplicated selector groups plus the flattened class-name list."""

    groups: tuple[SelectorGroup, ...] = ()
    class_names: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.groups)


@dataclass
class _Accumulator:
    groups: dict[str, SelectorGroup] = field(default_factory=dict)
    class_names: dict[str, None] = field(default_factory=dict)

    def add(self, group: SelectorGroup, ordered_tokens: list[str]) -> None:
        self.groups.setdefault(group.raw_text, group)
        for token in ordered_tokens:
            self.class_names.setdefault(token, None)

    def freeze(self) -> SelectorExtraction:
        return SelectorExtraction(
            groups=tuple(self.groups.values()),
            class_names=tuple(self.class_names),
        )


def normalize_css(css_text: str) -> str:
    """Strip block comments and collapse whitespace runs."""
    without_comments = _COMMENT_RE.sub("", css_text)
    return _WHITESPACE_RE.sub(" ", without_comments).strip()


def split_selector_list(selector_list: str) -> list[str]:
    """Split on commas that are not inside parentheses or brackets.

    >>> split_selector_list(".a, .b:not(.c, .d)")
    ['.a', '.b:not(.c, .d)']
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(selector_list):
        if ch in "([":
            depth += 1
        elif ch in ")]" and depth > 0:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(selector_list[start:i])
            start = i + 1
    parts.append(selector_list[start:])
    return [p.strip() for p in parts if p.strip()]


def class_tokens_of(selector: str) -> list[str]:
    """Class tokens referenced by a selector, in order of appearance."""
    return CLASS_TOKEN_RE.findall(selector)


def make_group(selector: str) -> tuple[SelectorGroup, list[str]]:
    tokens = class_tokens_of(selector)
    return SelectorGroup(raw_text=selector, class_tokens=frozenset(tokens)), tokens


def extract_selectors(css_text: str, max_rules: int = MAX_RULE_MATCHES) -> SelectorExtraction:
    """Extract selector groups and class tokens from stylesheet text.

    Rules beyond ``max_rules`` matches are ignored. Empty or malformed
    input yields an empty extraction.
    """
    if not css_text or not css_text.strip():
        return SelectorExtraction()

    acc = _Accumulator()
    clean = normalize_css(css_text)

    for count, match in enumerate(_RULE_RE.finditer(clean)):
        if count >= max_rules:
            break
        # A statement at-rule ("@import ...;") can precede the selector
        selector_list = match.group(1).rsplit(";", 1)[-1].strip()
        if not selector_list or selector_list.startswith("@"):
            continue
        for selector in split_selector_list(selector_list):
            group, tokens = make_group(selector)
            acc.add(group, tokens)

    return acc.freeze()


def merge_extractions(extractions: list[SelectorExtraction]) -> SelectorExtraction:
    """Union several extractions, keeping first-seen order."""
    acc = _Accumulator()
    for extraction in extractions:
        for group in extraction.groups:
            acc.groups.setdefault(group.raw_text, group)
        for name in extraction.class_names:
            acc.class_names.setdefault(name, None)
    return acc.freeze()
