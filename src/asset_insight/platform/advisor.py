"""Platform risk report: issues and recommendations from WordPress signals.

All checks are independent and append in a fixed order:
    1. too many plugins
    2. heavyweight plugin categories
    3. jQuery shipped among core files
    4. outdated platform version
"""

from __future__ import annotations

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import PlatformReport, PlatformSignals
from ..versioning import is_older_than

HEAVY_PLUGIN_MARKERS = ("page-builder", "slider", "social", "backup")


def assess_platform(
    signals: PlatformSignals, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> PlatformReport:
    """Turn detected platform signals into issues and recommendations."""
    issues: list[str] = []
    recommendations: list[str] = []

    if not signals.is_platform:
        return PlatformReport(signals=signals)

    plugin_count = len(signals.plugins)
    if plugin_count > thresholds.max_plugins:
        issues.append(
            f"Too many plugins ({plugin_count}). "
            "Consider reducing the number of active plugins."
        )
        recommendations.append("Audit plugins and remove unnecessary ones")

    heavy = [
        name
        for name in signals.plugin_names
        if any(marker in name for marker in HEAVY_PLUGIN_MARKERS)
    ]
    if heavy:
        issues.append(f"Potentially heavy plugins detected: {', '.join(heavy)}")
        recommendations.append("Consider lightweight alternatives for heavy plugins")

    if any("jquery" in path for path in signals.core_files):
        recommendations.append("Consider removing jQuery if not needed for modern themes")

    if signals.version and is_older_than(signals.version, thresholds.outdated_platform_version):
        issues.append(f"WordPress version {signals.version} is outdated")
        recommendations.append("Update WordPress to the latest version")

    return PlatformReport(
        signals=signals,
        issues=tuple(issues),
        recommendations=tuple(recommendations),
    )
