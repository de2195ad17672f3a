"""Purged stylesheet reconstruction.

A textual rewrite of the original stylesheet: rules whose selector list has
no used group are dropped wholesale, everything else is copied verbatim in
the original order. Nothing is minified and no declaration is edited.

Text outside rule bodies (comments, ``@import``/``@charset`` statements,
blank lines) always passes through. Conditional group at-rules keep their
wrapper while their nested rules are filtered; any other block at-rule
(``@font-face``, ``@keyframes``...) is copied as an opaque unit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .extractor import make_group, normalize_css, split_selector_list
from .usage import MarkupIndex

GROUP_AT_RULES = frozenset({"media", "supports", "container", "layer", "document", "scope"})

_AT_KEYWORD_RE = re.compile(r"@(-?[A-Za-z][\w-]*)")
_STRUCTURAL = "{};"


@dataclass(frozen=True)
class RebuiltStylesheet:
    text: str
    used_fallback: bool = False


def _skip_comment(text: str, i: int) -> int:
    """Index just past the comment starting at ``i`` (or end of text)."""
    end = text.find("*/", i + 2)
    return len(text) if end == -1 else end + 2


def _skip_string(text: str, i: int) -> int:
    quote = text[i]
    j = i + 1
    while j < len(text):
        if text[j] == "\\":
            j += 2
            continue
        if text[j] == quote:
            return j + 1
        j += 1
    return len(text)


def _find_structural(text: str, i: int) -> int:
    """Next ``{``, ``}`` or ``;`` outside comments and strings, or -1."""
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "/" and text.startswith("/*", i):
            i = _skip_comment(text, i)
        elif ch in "\"'":
            i = _skip_string(text, i)
        elif ch in _STRUCTURAL:
            return i
        else:
            i += 1
    return -1


def _matching_close(text: str, open_idx: int) -> int:
    """Index of the ``}`` closing the ``{`` at ``open_idx``, or -1."""
    depth = 0
    i = open_idx
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "/" and text.startswith("/*", i):
            i = _skip_comment(text, i)
            continue
        if ch in "\"'":
            i = _skip_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _skip_line_tail(text: str, i: int) -> int:
    """Consume trailing blanks and one newline after a dropped rule."""
    j = i
    while j < len(text) and text[j] in " \t\r":
        j += 1
    if j < len(text) and text[j] == "\n":
        return j + 1
    return i


def rule_is_used(selector_text: str, index: MarkupIndex) -> bool:
    """A rule is kept when any group of its selector list is used."""
    selectors = split_selector_list(normalize_css(selector_text))
    if not selectors:
        return True
    return any(index.selector_used(make_group(s)[0]) for s in selectors)


def _rebuild_block(text: str, i: int, index: MarkupIndex, nested: bool) -> tuple[list[str], int]:
    """Rebuild statements from ``i`` until end of text or the closing brace.

    Returns the kept pieces and the position after the block.
    """
    out: list[str] = []
    n = len(text)

    while i < n:
        ch = text[i]

        if ch.isspace():
            j = i
            while j < n and text[j].isspace():
                j += 1
            out.append(text[i:j])
            i = j
            continue

        if ch == "/" and text.startswith("/*", i):
            j = _skip_comment(text, i)
            out.append(text[i:j])
            i = j
            continue

        if ch == "}":
            out.append(ch)
            i += 1
            if nested:
                return out, i
            continue

        stop = _find_structural(text, i)
        if stop == -1:
            out.append(text[i:])
            return out, n

        marker = text[stop]
        if marker == ";":
            out.append(text[i : stop + 1])
            i = stop + 1
            continue
        if marker == "}":
            out.append(text[i:stop])
            i = stop
            continue

        # marker == "{": a rule or a block at-rule
        prelude = text[i:stop]
        keyword = _AT_KEYWORD_RE.match(prelude)

        if keyword and keyword.group(1).lower() in GROUP_AT_RULES:
            out.append(text[i : stop + 1])
            inner, i = _rebuild_block(text, stop + 1, index, nested=True)
            out.extend(inner)
            continue

        close = _matching_close(text, stop)
        if close == -1:
            out.append(text[i:])
            return out, n

        if keyword or rule_is_used(prelude, index):
            out.append(text[i : close + 1])
            i = close + 1
        else:
            i = _skip_line_tail(text, close + 1)

    return out, i


def placeholder_stylesheet(used_classes: Iterable[str]) -> str:
    """One empty rule per used class token, sorted."""
    return "\n".join(f".{name}{{/* styles for {name} */}}" for name in sorted(set(used_classes)))


def rebuild_stylesheet(
    css_text: str, used_classes: Iterable[str], markup: str
) -> RebuiltStylesheet:
    """Reproduce ``css_text`` keeping only rules that are used.

    Never raises: if reconstruction fails, a placeholder stylesheet built
    from the used classes is returned with ``used_fallback`` set.
    """
    used = frozenset(used_classes)
    try:
        index = MarkupIndex.build(used, markup)
        pieces, _ = _rebuild_block(css_text or "", 0, index, nested=False)
        return RebuiltStylesheet(text="".join(pieces))
    except Exception:
        return RebuiltStylesheet(text=placeholder_stylesheet(used), used_fallback=True)
