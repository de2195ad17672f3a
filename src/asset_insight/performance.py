"""Load-time estimate from CSS and JS savings.

The baseline is scaled by the average of the two savings percentages, with
the improvement capped.
"""

from __future__ import annotations

import math

from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .models import PerformanceEstimate


def css_savings_percent(total_selectors: int, used_selectors: int) -> float:
    if total_selectors <= 0:
        return 0.0
    return (total_selectors - used_selectors) / total_selectors * 100


def estimate_performance(
    total_selectors: int,
    used_selectors: int,
    js_savings_percent: float,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> PerformanceEstimate:
    """Estimate optimized load time.

    Combined savings is the unweighted mean of CSS and JS savings. When it is
    not a finite positive number the fixed fallback improvement applies;
    otherwise the improvement is the savings capped at ``max_improvement_percent``.
    """
    baseline = thresholds.baseline_load_seconds
    combined = (css_savings_percent(total_selectors, used_selectors) + js_savings_percent) / 2

    if not math.isfinite(combined) or combined <= 0:
        improvement = thresholds.fallback_improvement_percent
    else:
        improvement = min(combined, thresholds.max_improvement_percent)

    return PerformanceEstimate(
        baseline_seconds=baseline,
        optimized_seconds=baseline * (1 - improvement / 100),
        combined_savings_percent=combined if math.isfinite(combined) else 0.0,
        improvement_percent=improvement,
    )
