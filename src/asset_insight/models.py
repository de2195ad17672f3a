"""Data models for the analysis engine.

Every record is created fresh per run from the snapshot and is immutable
once built.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

CSS = "css"
JS = "js"


@dataclass(frozen=True)
class AssetFile:
    """A downloaded or inline CSS/JS resource.

    ``url`` may be a synthetic ``inline-N`` token. Empty content marks a
    failed fetch and is never replaced by ``None``.
    """

    url: str
    content: str = ""
    kind: str = JS

    @property
    def byte_size(self) -> int:
        return len(self.content)

    @property
    def file_name(self) -> str:
        """Final path segment of the URL, or the URL itself."""
        name = self.url.split("/")[-1]
        return name or self.url

    @property
    def is_inline(self) -> bool:
        return self.url.startswith("inline-")


@dataclass(frozen=True)
class SelectorGroup:
    raw_text: str  # trimmed, never empty
    class_tokens: frozenset[str] = frozenset()

    @property
    def has_classes(self) -> bool:
        return bool(self.class_tokens)


@dataclass(frozen=True)
class UsageVerdict:
    selector: SelectorGroup
    used: bool


@dataclass(frozen=True)
class Finding:
    """Outcome of one heuristic rule applied to a script."""

    rule: str  # "empty_file", "jquery_ui_unused", ...
    message: str  # human-readable reason
    marks_unused: bool = False


@dataclass(frozen=True)
class JSFileVerdict:
    url: str
    file_name: str
    size: int
    likely_unused: bool
    reasons: tuple[str, ...] = ()
    findings: tuple[Finding, ...] = ()
    dependencies: tuple[str, ...] = ()
    functions: tuple[str, ...] = ()
    is_core: bool = False
    is_plugin: bool = False
    is_theme: bool = False
    is_jquery: bool = False

    @classmethod
    def from_findings(
        cls, asset: AssetFile, findings: list[Finding], **metadata: Any
    ) -> "JSFileVerdict":
        """Fold rule findings into a verdict: any unused finding marks the file."""
        return cls(
            url=asset.url,
            file_name=asset.file_name,
            size=asset.byte_size,
            likely_unused=any(f.marks_unused for f in findings),
            reasons=tuple(f.message for f in findings),
            findings=tuple(findings),
            **metadata,
        )


@dataclass(frozen=True)
class BundleReport:
    total_files: int
    used_file_count: int
    unused_file_names: tuple[str, ...]
    original_bytes: int
    optimized_bytes: int
    savings_percent: int

    @property
    def unused_file_count(self) -> int:
        return self.total_files - self.used_file_count


@dataclass(frozen=True)
class CSSSummary:
    """CSS track output. Counts are per selector group."""

    total_selectors: int
    used: int
    unused: tuple[str, ...]  # raw text of unused selector groups
    unused_classes: tuple[str, ...]  # class tokens referenced only by unused groups
    optimized_css: str
    files: tuple[tuple[str, int], ...] = ()  # (url, size)
    used_fallback_stylesheet: bool = False

    @property
    def savings_percent(self) -> float:
        if self.total_selectors == 0:
            return 0.0
        return (self.total_selectors - self.used) / self.total_selectors * 100


@dataclass(frozen=True)
class JSSummary:
    bundle: BundleReport
    optimized_js: str
    files: tuple[JSFileVerdict, ...] = ()

    @property
    def total_files(self) -> int:
        return self.bundle.total_files

    @property
    def unused_files(self) -> tuple[str, ...]:
        return self.bundle.unused_file_names


@dataclass(frozen=True)
class PerformanceEstimate:
    baseline_seconds: float
    optimized_seconds: float
    combined_savings_percent: float
    improvement_percent: float
    core_web_vitals: str = "Improved LCP, CLS, FID"

    @property
    def estimated_load_time(self) -> str:
        return f"{self.baseline_seconds:.1f}s → {self.optimized_seconds:.1f}s"


@dataclass(frozen=True)
class ThemeInfo:
    name: str
    version: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class PluginInfo:
    name: str
    version: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class PlatformSignals:
    """Platform (WordPress) signals detected for a page."""

    is_platform: bool = False
    version: Optional[str] = None
    theme: Optional[ThemeInfo] = None
    plugins: tuple[PluginInfo, ...] = ()
    core_files: tuple[str, ...] = ()

    @property
    def plugin_names(self) -> list[str]:
        return [p.name for p in self.plugins]


@dataclass(frozen=True)
class PlatformReport:
    signals: PlatformSignals
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisResult:
    """Top-level output of one analysis run.

    ``degraded`` is True when at least one stage was replaced by the
    synthetic fallback dataset; ``degraded_stages`` names them.
    """

    css: CSSSummary
    javascript: JSSummary
    performance: PerformanceEstimate
    platform: Optional[PlatformReport] = None
    degraded: bool = False
    degraded_stages: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view, including derived display fields."""
        data = asdict(self)
        data["css"]["savings_percent"] = round(self.css.savings_percent, 2)
        data["performance"]["estimated_load_time"] = self.performance.estimated_load_time
        return data
