"""Tests for the asset-insight exception hierarchy."""

from pathlib import Path

import pytest

from asset_insight.exceptions import (
    AnalysisError,
    AssetInsightError,
    ConfigurationError,
    InvalidConfigError,
    InvalidSnapshotError,
    SnapshotError,
    StageFailedError,
)


class TestBaseError:
    def test_message_only(self):
        assert str(AssetInsightError("boom")) == "boom"

    def test_details_rendered(self):
        err = AssetInsightError("boom", details={"a": "1", "b": "2"})
        assert str(err) == "boom (a=1, b=2)"


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls,parent",
        [
            (StageFailedError, AnalysisError),
            (InvalidSnapshotError, SnapshotError),
            (InvalidConfigError, ConfigurationError),
            (AnalysisError, AssetInsightError),
            (SnapshotError, AssetInsightError),
            (ConfigurationError, AssetInsightError),
        ],
    )
    def test_subclass(self, cls, parent):
        assert issubclass(cls, parent)


class TestSpecificErrors:
    def test_stage_failed(self):
        err = StageFailedError("css", "RuntimeError: x")
        assert err.stage == "css"
        assert err.details == {"stage": "css", "reason": "RuntimeError: x"}
        assert str(err).startswith("Analysis stage 'css' failed")

    def test_invalid_snapshot_with_path(self):
        err = InvalidSnapshotError("not valid JSON", path=Path("a.json"))
        assert err.details == {"reason": "not valid JSON", "path": "a.json"}

    def test_invalid_snapshot_without_path(self):
        err = InvalidSnapshotError("bad shape")
        assert err.path is None
        assert "path" not in err.details

    def test_invalid_config(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert err.key == "workers"
        assert err.details["value"] == "0"
