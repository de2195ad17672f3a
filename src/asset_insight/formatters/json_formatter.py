"""JSON formatter for asset-insight."""

import json

from ..models import AnalysisResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the result as JSON."""

    def __init__(self, include_artifacts: bool = False) -> None:
        self.include_artifacts = include_artifacts

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        data = result.to_dict()
        if not self.include_artifacts:
            data["css"].pop("optimized_css", None)
            data["javascript"].pop("optimized_js", None)
        return json.dumps(data, indent=2)
