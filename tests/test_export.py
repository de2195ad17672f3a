"""Tests for export.py - writing artifacts."""

from asset_insight.engine import AnalysisEngine
from asset_insight.export import OPTIMIZED_JS, PURGED_CSS, write_artifacts


class TestWriteArtifacts:
    def test_writes_both_files(self, sample_snapshot, tmp_path):
        result = AnalysisEngine().run(sample_snapshot)
        out = tmp_path / "out" / "nested"

        written = write_artifacts(result, out)

        assert set(written) == {PURGED_CSS, OPTIMIZED_JS}
        assert (out / PURGED_CSS).read_text(encoding="utf-8") == ".a{color:red}"
        assert (out / OPTIMIZED_JS).read_text(encoding="utf-8").startswith(
            "// Optimized JavaScript Bundle"
        )

    def test_overwrites_existing(self, sample_snapshot, tmp_path):
        (tmp_path / PURGED_CSS).write_text("old", encoding="utf-8")
        write_artifacts(AnalysisEngine().run(sample_snapshot), tmp_path)
        assert (tmp_path / PURGED_CSS).read_text(encoding="utf-8") == ".a{color:red}"
