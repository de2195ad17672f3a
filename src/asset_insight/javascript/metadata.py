"""Best-effort metadata scans over script text.

Regex based, like the rest of the script heuristics: results are exposed on
the verdict for display and never influence the used/unused decision.
"""

from __future__ import annotations

import re

_FUNCTION_PATTERNS = (
    re.compile(r"function\s+([A-Za-z_$][\w$]*)\s*\("),
    re.compile(r"const\s+([A-Za-z_$][\w$]*)\s*=\s*\("),
)

# (library, literal substrings that reference it)
KNOWN_LIBRARIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("jQuery", ("jQuery", "$(", "$.")),
    ("React", ("React",)),
    ("Vue", ("Vue",)),
    ("Angular", ("Angular",)),
    ("Bootstrap", ("bootstrap",)),
)

_JQUERY_NAME_RE = re.compile(r"jquery", re.IGNORECASE)


def extract_functions(content: str) -> list[str]:
    """Function-like identifiers from declaration and const-arrow scans, deduplicated."""
    names: dict[str, None] = {}
    for pattern in _FUNCTION_PATTERNS:
        for match in pattern.finditer(content):
            names.setdefault(match.group(1), None)
    return list(names)


def extract_dependencies(content: str) -> list[str]:
    """Well-known libraries referenced by literal substring."""
    return [
        library
        for library, needles in KNOWN_LIBRARIES
        if any(needle in content for needle in needles)
    ]


def is_jquery_family(file_name: str) -> bool:
    return bool(_JQUERY_NAME_RE.search(file_name))


def path_flags(url: str) -> dict[str, bool]:
    """Informational path conventions: core, plugin and theme directories."""
    return {
        "is_core": "/core/" in url or "wp-includes" in url or "wp-admin" in url,
        "is_plugin": "/plugins/" in url,
        "is_theme": "/themes/" in url,
    }
