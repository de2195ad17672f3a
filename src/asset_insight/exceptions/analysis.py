"""Analysis-related exceptions: stage failures and snapshot input problems."""

from pathlib import Path
from typing import Optional

from .base import AssetInsightError


class AnalysisError(AssetInsightError):
    """Base class for analysis-related errors."""
    pass


class StageFailedError(AnalysisError):
    """Raised when a whole analysis stage (css or javascript) fails."""

    def __init__(self, stage: str, reason: str):
        super().__init__(
            f"Analysis stage '{stage}' failed",
            details={"stage": stage, "reason": reason},
        )
        self.stage = stage
        self.reason = reason


class SnapshotError(AssetInsightError):
    """Base class for snapshot loading errors."""
    pass


class InvalidSnapshotError(SnapshotError):
    """Raised when a snapshot file cannot be read or has the wrong shape."""

    def __init__(self, reason: str, path: Optional[Path] = None):
        details = {"reason": reason}
        if path is not None:
            details["path"] = str(path)

        super().__init__(f"Invalid snapshot: {reason}", details=details)
        self.reason = reason
        self.path = path
