"""Exception hierarchy for asset-insight."""

from .analysis import (
    AnalysisError,
    InvalidSnapshotError,
    SnapshotError,
    StageFailedError,
)
from .base import AssetInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "AssetInsightError",
    "AnalysisError",
    "StageFailedError",
    "SnapshotError",
    "InvalidSnapshotError",
    "ConfigurationError",
    "InvalidConfigError",
]
