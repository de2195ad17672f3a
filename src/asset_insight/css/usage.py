"""Selector usage classification.

A selector group is used when it references no class at all (element, id,
attribute and pseudo selectors are never removed), or when any of its class
tokens is applied in the snapshot: present in the captured class set, written
as a single-class attribute (``class="tok"`` / ``class='tok'``), or appearing
as a whitespace-delimited word inside any ``class="..."`` value.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import SelectorGroup, UsageVerdict

_CLASS_ATTR_RE = re.compile(r"""class\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)


def markup_class_tokens(markup: str) -> frozenset[str]:
    """All whitespace-delimited words found inside class attribute values."""
    tokens: set[str] = set()
    for double, single in _CLASS_ATTR_RE.findall(markup or ""):
        tokens.update((double or single).split())
    return frozenset(tokens)


@dataclass(frozen=True)
class MarkupIndex:
    """Used-class set and markup, with class-attribute words scanned once."""

    used_classes: frozenset[str]
    markup: str
    attribute_tokens: frozenset[str]

    @classmethod
    def build(cls, used_classes: Iterable[str], markup: str) -> "MarkupIndex":
        markup = markup or ""
        return cls(
            used_classes=frozenset(used_classes),
            markup=markup,
            attribute_tokens=markup_class_tokens(markup),
        )

    def token_used(self, token: str) -> bool:
        if token in self.used_classes:
            return True
        if f'class="{token}"' in self.markup or f"class='{token}'" in self.markup:
            return True
        return token in self.attribute_tokens

    def selector_used(self, group: SelectorGroup) -> bool:
        if not group.class_tokens:
            return True
        return any(self.token_used(token) for token in sorted(group.class_tokens))


def is_selector_used(group: SelectorGroup, used_classes: Iterable[str], markup: str) -> bool:
    """Decide whether one selector group is used in the snapshot."""
    return MarkupIndex.build(used_classes, markup).selector_used(group)


def classify_selectors(groups: Iterable[SelectorGroup], index: MarkupIndex) -> list[UsageVerdict]:
    """Verdicts for ``groups`` in input order."""
    return [UsageVerdict(selector=g, used=index.selector_used(g)) for g in groups]
