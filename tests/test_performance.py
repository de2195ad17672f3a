"""Tests for performance.py - load-time estimate."""

import math

import pytest

from asset_insight.config import ThresholdConfig
from asset_insight.performance import css_savings_percent, estimate_performance


class TestCssSavings:
    def test_savings(self):
        assert css_savings_percent(4, 1) == 75.0

    def test_no_selectors(self):
        assert css_savings_percent(0, 0) == 0.0


class TestEstimatePerformance:
    def test_mean_of_css_and_js_savings(self):
        estimate = estimate_performance(2, 1, 100)
        assert estimate.combined_savings_percent == 75.0
        assert estimate.improvement_percent == 75.0
        assert estimate.optimized_seconds == pytest.approx(0.3)
        assert estimate.estimated_load_time == "1.2s → 0.3s"

    def test_improvement_is_capped(self):
        estimate = estimate_performance(10, 0, 100)
        assert estimate.improvement_percent == 80.0
        assert estimate.optimized_seconds == pytest.approx(1.2 * 0.2)

    def test_zero_savings_uses_fallback_improvement(self):
        estimate = estimate_performance(0, 0, 0)
        assert estimate.improvement_percent == 20.0
        assert estimate.optimized_seconds == pytest.approx(0.96)
        assert estimate.estimated_load_time == "1.2s → 1.0s"

    def test_non_finite_savings_uses_fallback(self):
        estimate = estimate_performance(2, 1, math.nan)
        assert estimate.improvement_percent == 20.0
        assert estimate.combined_savings_percent == 0.0

    @pytest.mark.parametrize("total,used,js", [(1, 1, 0), (5, 2, 40), (3, 0, 100), (0, 0, 99)])
    def test_optimized_never_exceeds_baseline(self, total, used, js):
        estimate = estimate_performance(total, used, js)
        assert estimate.optimized_seconds <= estimate.baseline_seconds
        assert estimate.improvement_percent <= 80.0

    def test_custom_baseline(self):
        estimate = estimate_performance(2, 1, 50, ThresholdConfig(baseline_load_seconds=2.0))
        assert estimate.baseline_seconds == 2.0
        assert estimate.optimized_seconds == pytest.approx(1.0)
