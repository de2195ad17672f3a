"""
asset-insight - static usage analysis for captured web pages

Decides which CSS rules and script files a rendered page actually uses,
rebuilds a purged stylesheet, summarizes the script bundle and estimates the
load-time gain. WordPress sites additionally get a plugin/theme risk report.
"""

__version__ = "0.1.0"

from .api import analyze
from .engine import AnalysisEngine, analyze_snapshot
from .models import AnalysisResult, AssetFile, JSFileVerdict
from .snapshot import Snapshot, load_snapshot

__all__ = [
    "analyze",  # Main entry point
    "AnalysisEngine",
    "analyze_snapshot",
    "AnalysisResult",
    "AssetFile",
    "JSFileVerdict",
    "Snapshot",
    "load_snapshot",
]
