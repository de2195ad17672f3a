"""Per-script heuristic rules.

Each rule is a pure function ``(ScriptContext) -> Optional[Finding]``.
Rules never see other files and never mutate the context, so they can be
evaluated in any thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import AssetFile, Finding


@dataclass(frozen=True)
class ScriptContext:
    asset: AssetFile
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS

    @property
    def content(self) -> str:
        return self.asset.content

    @property
    def file_name(self) -> str:
        return self.asset.file_name

    @property
    def size(self) -> int:
        return self.asset.byte_size

    @property
    def line_count(self) -> int:
        return len(self.asset.content.split("\n"))

    def contains_any(self, needles: tuple[str, ...]) -> list[str]:
        """Needles found in the content, in catalogue order."""
        return [n for n in needles if n in self.asset.content]


Rule = Callable[[ScriptContext], Optional[Finding]]


def empty_file(ctx: ScriptContext) -> Optional[Finding]:
    if ctx.size == 0:
        return Finding("empty_file", "Empty file", marks_unused=True)
    return None


def deprecated_browser_detection(ctx: ScriptContext) -> Optional[Finding]:
    if ctx.contains_any(("jQuery.browser", "$.browser")):
        return Finding(
            "deprecated_browser_detection", "Uses deprecated jQuery.browser", marks_unused=True
        )
    return None


def legacy_ie_code(ctx: ScriptContext) -> Optional[Finding]:
    if ctx.contains_any(("<!--[if IE", "attachEvent")):
        return Finding("legacy_ie_code", "Contains old IE-specific code", marks_unused=True)
    return None


def large_minified_blob(ctx: ScriptContext) -> Optional[Finding]:
    t = ctx.thresholds
    if ctx.size > t.large_file_bytes and ctx.line_count < t.large_file_max_lines:
        return Finding(
            "large_minified_blob",
            "Large minified file with questionable usage",
            marks_unused=True,
        )
    return None


SCRIPT_RULES: tuple[Rule, ...] = (
    empty_file,
    deprecated_browser_detection,
    legacy_ie_code,
    large_minified_blob,
)


def apply_rules(ctx: ScriptContext, rules: tuple[Rule, ...]) -> list[Finding]:
    """Evaluate ``rules`` in order, keeping the findings that fired."""
    findings = []
    for rule in rules:
        finding = rule(ctx)
        if finding is not None:
            findings.append(finding)
    return findings
