"""jQuery plugin ecosystem sub-analyzer.

Applied to scripts whose file name belongs to the jQuery family. Evidence is
additive only: findings here can mark a file unused but never clear a flag
set by the general script rules.

Catalogue:
    jQuery UI        loaded with no widget/interaction referenced
    jQuery Migrate   loaded with no deprecated feature referenced
    Validation       loaded with no .validate( / $.validator call
    DataTables       loaded with no table initialization
    Slick            loaded with no slider initialization
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..models import Finding
from ..versioning import is_older_than
from .rules import Rule, ScriptContext, apply_rules

_VERSION_PATTERNS = (
    re.compile(r"jQuery\s+v?(\d+(?:\.\d+)*)"),
    re.compile(r"jquery-?(\d+(?:\.\d+)*)"),
)

_UI_NAME_RE = re.compile(r"(?:^|[.\-_])ui(?:[.\-_]|$)", re.IGNORECASE)

PRIMARY_FILE_NAMES = frozenset({"jquery.js", "jquery.min.js"})

DEPRECATED_METHODS = (
    ".live(",
    ".die(",
    ".browser",
    ".boxModel",
    ".support",
    ".toggle(",
    ".hover(",
    ".bind(",
    ".unbind(",
    ".delegate(",
    ".undelegate(",
)


@dataclass(frozen=True)
class PluginFamily:
    """One known plugin family and the markers that show it is used."""

    key: str
    label: str
    detect: Callable[[ScriptContext], bool]
    markers: tuple[str, ...]
    unused_message: str


def _name_or_content(name_part: str, content_part: str) -> Callable[[ScriptContext], bool]:
    def detect(ctx: ScriptContext) -> bool:
        return name_part in ctx.file_name.lower() or content_part in ctx.content

    return detect


def _detect_ui(ctx: ScriptContext) -> bool:
    return bool(_UI_NAME_RE.search(ctx.file_name)) or "jquery-ui" in ctx.content


PLUGIN_FAMILIES: tuple[PluginFamily, ...] = (
    PluginFamily(
        key="jquery_ui",
        label="jQuery UI",
        detect=_detect_ui,
        markers=(
            "widget",
            "draggable",
            "droppable",
            "resizable",
            "sortable",
            "accordion",
            "datepicker",
        ),
        unused_message="jQuery UI loaded but no UI components detected in usage",
    ),
    PluginFamily(
        key="jquery_migrate",
        label="jQuery Migrate",
        detect=_name_or_content("migrate", "jquery-migrate"),
        markers=("jQuery.browser", "jQuery.sub", "jQuery.fn.size"),
        unused_message="jQuery Migrate loaded but no deprecated features detected",
    ),
    PluginFamily(
        key="jquery_validation",
        label="jQuery Validation",
        detect=_name_or_content("validate", "jquery.validate"),
        markers=(".validate(", "$.validator"),
        unused_message="jQuery Validation plugin loaded but no validation usage detected",
    ),
    PluginFamily(
        key="datatables",
        label="DataTables",
        detect=_name_or_content("datatables", "datatables"),
        markers=("DataTable(", "dataTable("),
        unused_message="DataTables plugin loaded but no table initialization detected",
    ),
    PluginFamily(
        key="slick",
        label="Slick Carousel",
        detect=_name_or_content("slick", "slick"),
        markers=(".slick(", "slick-slider"),
        unused_message="Slick carousel loaded but no slider initialization detected",
    ),
)


def detect_version(ctx: ScriptContext) -> Optional[str]:
    """jQuery version token from the content, falling back to the file name."""
    for text in (ctx.content, ctx.file_name):
        for pattern in _VERSION_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)
    return None


def old_version(ctx: ScriptContext) -> Optional[Finding]:
    version = detect_version(ctx)
    if version and is_older_than(version, ctx.thresholds.old_jquery_version):
        return Finding(
            "old_jquery_version",
            f"Old jQuery version {version} detected - consider updating",
        )
    return None


def family_rule(family: PluginFamily) -> Rule:
    """Rule flagging ``family`` as unused when none of its markers appear."""

    def rule(ctx: ScriptContext) -> Optional[Finding]:
        if not family.detect(ctx):
            return None
        found = ctx.contains_any(family.markers)
        if not found:
            return Finding(f"{family.key}_unused", family.unused_message, marks_unused=True)
        return Finding(
            f"{family.key}_usage",
            f"{family.label}: {len(found)} usage marker(s) found ({', '.join(found)})",
        )

    rule.__name__ = f"{family.key}_usage"
    return rule


def deprecated_methods(ctx: ScriptContext) -> Optional[Finding]:
    found = ctx.contains_any(DEPRECATED_METHODS)
    if found:
        return Finding(
            "deprecated_jquery_methods",
            f"Deprecated jQuery methods found: {', '.join(found)}",
        )
    return None


def undersized_core_file(ctx: ScriptContext) -> Optional[Finding]:
    if ctx.file_name.lower() in PRIMARY_FILE_NAMES and ctx.size < ctx.thresholds.jquery_min_bytes:
        return Finding(
            "undersized_jquery",
            "jQuery file seems too small or corrupted",
            marks_unused=True,
        )
    return None


PLUGIN_RULES: tuple[Rule, ...] = (
    old_version,
    *(family_rule(family) for family in PLUGIN_FAMILIES),
    deprecated_methods,
    undersized_core_file,
)


def analyze_plugin_usage(ctx: ScriptContext) -> list[Finding]:
    """Findings for a script already identified as part of the jQuery family."""
    return apply_rules(ctx, PLUGIN_RULES)
