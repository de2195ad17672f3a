"""Public API for asset-insight.

Example:
    >>> from asset_insight import analyze
    >>>
    >>> result = analyze("capture.json")
    >>> result.javascript.bundle.savings_percent
    42
    >>>
    >>> result = analyze("capture.json", workers=4, on_stage_failure="degrade")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import load_config
from .engine import AnalysisEngine
from .export import write_artifacts
from .logging_config import get_logger
from .models import AnalysisResult
from .snapshot import Snapshot, load_snapshot

logger = get_logger(__name__)


def analyze(
    snapshot: Union[Snapshot, str, Path],
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Analyze a page snapshot and return the usage verdicts.

    Args:
        snapshot: A Snapshot, or the path of a snapshot JSON file
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., workers=4, export_dir="out")

    Returns:
        AnalysisResult (artifacts are also written when export_dir is set)

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidSnapshotError: If the snapshot file cannot be loaded
        StageFailedError: If a stage fails and on_stage_failure is "raise"
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: workers={config.effective_workers}, "
                 f"on_stage_failure={config.on_stage_failure}")

    if not isinstance(snapshot, Snapshot):
        snapshot = load_snapshot(Path(snapshot))

    result = AnalysisEngine(config).run(snapshot)

    if config.export_dir:
        write_artifacts(result, Path(config.export_dir))

    return result
