"""AnalysisEngine: runs the CSS and JS tracks over one snapshot.

    snapshot ──┬── css: extract → classify → rebuild ──┐
               ├── js:  classify (pool) → aggregate ───┼── performance ── AnalysisResult
               └── platform: detect? → assess ─────────┘

The two tracks share no state and run on separate threads. Each stage is
guarded by the failure policy: ``raise`` re-raises as StageFailedError,
``degrade`` substitutes the synthetic dataset and tags the result.
"""

from __future__ import annotations

import concurrent.futures
from typing import Callable, Optional, TypeVar

from .bundle import aggregate_bundle, build_optimized_bundle
from .config import AnalysisConfig
from .css import (
    MarkupIndex,
    classify_selectors,
    extract_selectors,
    merge_extractions,
    placeholder_stylesheet,
    rebuild_stylesheet,
)
from .exceptions import StageFailedError
from .fallback import degraded_css_summary, degraded_js_summary
from .javascript import classify_scripts
from .logging_config import get_logger
from .models import AnalysisResult, CSSSummary, JSSummary, PlatformReport
from .performance import estimate_performance
from .platform import assess_platform, detect_platform
from .snapshot import Snapshot

logger = get_logger(__name__)

T = TypeVar("T")

CSS_STAGE = "css"
JS_STAGE = "javascript"


class AnalysisEngine:
    """Analyze a snapshot: css + javascript + performance (+ platform)."""

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self.config = config or AnalysisConfig()

    def run(self, snapshot: Snapshot) -> AnalysisResult:
        degraded: list[str] = []

        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            css_future = executor.submit(self.analyze_css, snapshot)
            js_future = executor.submit(self.analyze_javascript, snapshot)

            css = self._resolve(
                CSS_STAGE,
                css_future.result,
                lambda: degraded_css_summary(snapshot.used_classes),
                degraded,
            )
            javascript = self._resolve(
                JS_STAGE,
                js_future.result,
                lambda: degraded_js_summary(snapshot.js_assets),
                degraded,
            )

        performance = estimate_performance(
            css.total_selectors,
            css.used,
            javascript.bundle.savings_percent,
            self.config.thresholds,
        )

        result = AnalysisResult(
            css=css,
            javascript=javascript,
            performance=performance,
            platform=self.analyze_platform(snapshot),
            degraded=bool(degraded),
            degraded_stages=tuple(degraded),
        )
        logger.info(
            f"Analysis complete: {css.used}/{css.total_selectors} selectors used, "
            f"{javascript.bundle.used_file_count}/{javascript.bundle.total_files} scripts used, "
            f"load {performance.estimated_load_time}"
        )
        return result

    def _resolve(
        self,
        stage: str,
        compute: Callable[[], T],
        substitute: Callable[[], T],
        degraded: list[str],
    ) -> T:
        """Stage result, or the failure policy applied to its exception."""
        try:
            return compute()
        except Exception as e:
            if self.config.on_stage_failure != "degrade":
                raise StageFailedError(stage, f"{type(e).__name__}: {e}") from e
            logger.warning(
                f"[yellow]{stage} analysis failed ({e}); "
                f"substituting synthetic results, output is DEGRADED[/yellow]"
            )
            degraded.append(stage)
            return substitute()

    def analyze_css(self, snapshot: Snapshot) -> CSSSummary:
        thresholds = self.config.thresholds
        extraction = merge_extractions(
            [
                extract_selectors(asset.content, max_rules=thresholds.max_rule_matches)
                for asset in snapshot.css_assets
            ]
        )
        index = MarkupIndex.build(snapshot.used_classes, snapshot.markup)
        verdicts = classify_selectors(extraction.groups, index)

        used_groups = [v.selector for v in verdicts if v.used]
        unused_groups = [v.selector for v in verdicts if not v.used]

        # Tokens that only unused groups reference
        kept_tokens = set().union(*(g.class_tokens for g in used_groups))
        dropped_tokens = set().union(*(g.class_tokens for g in unused_groups))
        unused_classes = tuple(
            name
            for name in extraction.class_names
            if name in dropped_tokens and name not in kept_tokens
        )

        optimized_css, used_fallback = self._rebuild_css(snapshot)

        logger.debug(
            f"CSS: {len(snapshot.css_assets)} files, {len(verdicts)} selector groups, "
            f"{len(unused_groups)} unused"
        )
        return CSSSummary(
            total_selectors=len(verdicts),
            used=len(used_groups),
            unused=tuple(g.raw_text for g in unused_groups),
            unused_classes=unused_classes,
            optimized_css=optimized_css,
            files=tuple((a.url, a.byte_size) for a in snapshot.css_assets),
            used_fallback_stylesheet=used_fallback,
        )

    def _rebuild_css(self, snapshot: Snapshot) -> tuple[str, bool]:
        """Rebuild stylesheets one asset at a time, joined in document order."""
        rebuilt = [
            rebuild_stylesheet(asset.content, snapshot.used_classes, snapshot.markup)
            for asset in snapshot.css_assets
        ]
        if any(r.used_fallback for r in rebuilt):
            logger.warning("Stylesheet rebuild failed; emitted placeholder rules for used classes")
            return placeholder_stylesheet(snapshot.used_classes), True
        return "\n".join(r.text for r in rebuilt if r.text), False

    def analyze_javascript(self, snapshot: Snapshot) -> JSSummary:
        thresholds = self.config.thresholds
        assets = snapshot.js_assets
        verdicts = classify_scripts(assets, thresholds, workers=self.config.effective_workers)
        bundle = aggregate_bundle(assets, verdicts)

        logger.debug(
            f"JS: {bundle.total_files} files, {bundle.original_bytes} bytes, "
            f"{bundle.savings_percent}% removable"
        )
        return JSSummary(
            bundle=bundle,
            optimized_js=build_optimized_bundle(assets, verdicts, thresholds.preview_chars),
            files=tuple(verdicts),
        )

    def analyze_platform(self, snapshot: Snapshot) -> Optional[PlatformReport]:
        signals = snapshot.platform
        if signals is None and self.config.detect_platform:
            signals = detect_platform(snapshot.markup, snapshot.asset_urls)
        if signals is None:
            return None
        return assess_platform(signals, self.config.thresholds)


def analyze_snapshot(snapshot: Snapshot, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Run the full engine over ``snapshot``."""
    return AnalysisEngine(config).run(snapshot)
