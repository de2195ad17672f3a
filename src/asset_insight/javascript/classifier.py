"""Script classification: one verdict per JS asset.

Usage:
    verdicts = classify_scripts(assets, workers=4)
    # verdicts[i] belongs to assets[i], whatever order the workers finish in
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import AssetFile, JSFileVerdict
from .metadata import extract_dependencies, extract_functions, is_jquery_family, path_flags
from .plugins import analyze_plugin_usage
from .rules import SCRIPT_RULES, ScriptContext, apply_rules

# Smaller batches are classified sequentially
_PARALLEL_MIN_FILES = 10


def classify_script(
    asset: AssetFile, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> JSFileVerdict:
    """Classify one script independently of every other file."""
    ctx = ScriptContext(asset=asset, thresholds=thresholds)
    findings = apply_rules(ctx, SCRIPT_RULES)

    is_jquery = is_jquery_family(asset.file_name)
    if is_jquery:
        findings.extend(analyze_plugin_usage(ctx))

    return JSFileVerdict.from_findings(
        asset,
        findings,
        dependencies=tuple(extract_dependencies(asset.content)),
        functions=tuple(extract_functions(asset.content)),
        is_jquery=is_jquery,
        **path_flags(asset.url),
    )


def classify_scripts(
    assets: Sequence[AssetFile],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    workers: Optional[int] = None,
) -> list[JSFileVerdict]:
    """Classify all scripts, returning verdicts in input order.

    Args:
        assets: Scripts in document order
        thresholds: Heuristic thresholds
        workers: Max parallel workers (None or 1 = sequential)
    """
    if not workers or workers <= 1 or len(assets) < _PARALLEL_MIN_FILES:
        return [classify_script(asset, thresholds) for asset in assets]

    results: list[Optional[JSFileVerdict]] = [None] * len(assets)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(classify_script, asset, thresholds): i
            for i, asset in enumerate(assets)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    return [verdict for verdict in results if verdict is not None]
