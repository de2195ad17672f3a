"""Loose version-string parsing shared by the jQuery and platform heuristics."""

from __future__ import annotations

import re
from typing import Optional, Union

_MAJOR_MINOR_RE = re.compile(r"(\d+)(?:\.(\d+))?")


def major_minor(version: Union[str, float, None]) -> Optional[tuple[int, int]]:
    """Parse the leading ``major[.minor]`` of a version string.

    >>> major_minor("1.12.4")
    (1, 12)
    >>> major_minor("6")
    (6, 0)
    >>> major_minor("beta") is None
    True
    """
    if version is None:
        return None
    match = _MAJOR_MINOR_RE.match(str(version).strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2) or 0)


def is_older_than(version: Union[str, None], threshold: Union[str, float]) -> bool:
    """True when ``version`` parses and is below ``threshold``; False otherwise."""
    parsed = major_minor(version)
    limit = major_minor(threshold)
    if parsed is None or limit is None:
        return False
    return parsed < limit
