"""Write the optimized artifacts of a result to disk."""

from __future__ import annotations

from pathlib import Path

from .logging_config import get_logger
from .models import AnalysisResult

logger = get_logger(__name__)

PURGED_CSS = "purged.css"
OPTIMIZED_JS = "optimized.js"


def write_artifacts(result: AnalysisResult, directory: Path) -> dict[str, Path]:
    """Write purged.css and optimized.js into ``directory`` (created if missing).

    Returns:
        Mapping of artifact name to written path
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, text in (
        (PURGED_CSS, result.css.optimized_css),
        (OPTIMIZED_JS, result.javascript.optimized_js),
    ):
        path = directory / name
        path.write_text(text, encoding="utf-8")
        written[name] = path
        logger.info(f"Wrote {path} ({len(text)} chars)")

    return written
