"""Bundle aggregation: size totals and the optimized.js preview artifact."""

from __future__ import annotations

import math
from typing import Sequence

from .models import AssetFile, BundleReport, JSFileVerdict

DEFAULT_PREVIEW_CHARS = 500
EMPTY_BUNDLE = "// No JavaScript files remain after optimization"

_UNITS = ("Bytes", "KB", "MB", "GB")


def format_bytes(size: int) -> str:
    """Human-readable size with up to two decimals.

    >>> format_bytes(0)
    '0 Bytes'
    >>> format_bytes(1536)
    '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_UNITS[exponent]}"


def savings_percent(original: int, optimized: int) -> int:
    """Whole-number savings, rounding halves up; 0 for an empty bundle."""
    if original <= 0:
        return 0
    return int(math.floor(100 * (original - optimized) / original + 0.5))


def _check_aligned(assets: Sequence[AssetFile], verdicts: Sequence[JSFileVerdict]) -> None:
    if len(assets) != len(verdicts):
        raise ValueError(f"{len(assets)} assets but {len(verdicts)} verdicts")


def aggregate_bundle(
    assets: Sequence[AssetFile], verdicts: Sequence[JSFileVerdict]
) -> BundleReport:
    """Combine per-file verdicts into file counts and byte totals.

    ``verdicts[i]`` must describe ``assets[i]``.
    """
    _check_aligned(assets, verdicts)

    original = sum(a.byte_size for a in assets)
    optimized = sum(a.byte_size for a, v in zip(assets, verdicts) if not v.likely_unused)
    unused_names = tuple(a.file_name for a, v in zip(assets, verdicts) if v.likely_unused)

    return BundleReport(
        total_files=len(assets),
        used_file_count=len(assets) - len(unused_names),
        unused_file_names=unused_names,
        original_bytes=original,
        optimized_bytes=optimized,
        savings_percent=savings_percent(original, optimized),
    )


def _file_section(asset: AssetFile, preview_chars: int) -> str:
    if not asset.content.strip():
        return f"// === {asset.file_name} === (empty file)\n\n"
    preview = asset.content[:preview_chars]
    if len(asset.content) > preview_chars:
        preview += "...\n// (truncated for display)"
    return f"// === {asset.file_name} ===\n{preview}\n\n"


def build_optimized_bundle(
    assets: Sequence[AssetFile],
    verdicts: Sequence[JSFileVerdict],
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> str:
    """Text artifact listing every retained script with a content preview."""
    _check_aligned(assets, verdicts)
    retained = [a for a, v in zip(assets, verdicts) if not v.likely_unused]
    if not retained:
        return EMPTY_BUNDLE

    original = sum(a.byte_size for a in assets)
    optimized = sum(a.byte_size for a in retained)
    header = (
        "// Optimized JavaScript Bundle\n"
        "// Generated by asset-insight\n"
        f"// Retained files: {len(retained)} of {len(assets)}\n"
        f"// Original size: {format_bytes(original)}\n"
        f"// Optimized size: {format_bytes(optimized)}\n\n"
    )
    body = "".join(_file_section(a, preview_chars) for a in retained)
    footer = (
        "// Optimization complete\n"
        "// Consider minifying and compressing for production use\n"
    )
    return header + body + footer
