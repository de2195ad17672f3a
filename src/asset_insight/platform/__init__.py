"""Platform (WordPress) enrichment: static detection and risk report."""

from .advisor import HEAVY_PLUGIN_MARKERS, assess_platform
from .detector import detect_platform

__all__ = ["assess_platform", "detect_platform", "HEAVY_PLUGIN_MARKERS"]
