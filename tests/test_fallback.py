"""Tests for fallback.py - synthetic results for degraded runs."""

from asset_insight.fallback import (
    FALLBACK_TOTAL_FILES,
    FALLBACK_TOTAL_SELECTORS,
    PLACEHOLDER_CLASSES,
    degraded_css_summary,
    degraded_js_summary,
    placeholder_names,
)


class TestPlaceholderNames:
    def test_cycles_with_suffix(self):
        assert placeholder_names(("a", "b"), 5) == ("a", "b", "a-2", "b-2", "a-3")

    def test_zero_or_negative(self):
        assert placeholder_names(("a",), 0) == ()
        assert placeholder_names(("a",), -3) == ()


class TestDegradedCss:
    def test_counts(self):
        summary = degraded_css_summary({"hero", "card"})
        assert summary.total_selectors == FALLBACK_TOTAL_SELECTORS
        assert summary.used == 2
        assert len(summary.unused) == FALLBACK_TOTAL_SELECTORS - 2
        assert summary.unused[0] == f".{PLACEHOLDER_CLASSES[0]}"
        assert summary.used_fallback_stylesheet is True
        assert summary.optimized_css == (
            ".card{/* styles for card */}\n.hero{/* styles for hero */}"
        )

    def test_unused_names_are_distinct(self):
        summary = degraded_css_summary(set())
        assert len(set(summary.unused)) == len(summary.unused)


class TestDegradedJs:
    def test_default_file_count(self):
        summary = degraded_js_summary([])
        assert summary.bundle.total_files == FALLBACK_TOTAL_FILES
        assert summary.bundle.used_file_count == 8
        assert summary.bundle.savings_percent == 54
        assert summary.files == ()

    def test_uses_asset_count(self, make_js):
        summary = degraded_js_summary([make_js(f"{i}.js", "x") for i in range(20)])
        assert summary.bundle.total_files == 20
        assert summary.bundle.used_file_count == 14
        assert len(summary.unused_files) == 6
