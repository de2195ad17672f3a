"""CSS track: selector extraction, usage classification, purged rebuild."""

from .extractor import (
    MAX_RULE_MATCHES,
    SelectorExtraction,
    extract_selectors,
    merge_extractions,
    split_selector_list,
)
from .rebuilder import RebuiltStylesheet, placeholder_stylesheet, rebuild_stylesheet
from .usage import MarkupIndex, classify_selectors, is_selector_used, markup_class_tokens

__all__ = [
    "MAX_RULE_MATCHES",
    "SelectorExtraction",
    "extract_selectors",
    "merge_extractions",
    "split_selector_list",
    "MarkupIndex",
    "classify_selectors",
    "is_selector_used",
    "markup_class_tokens",
    "RebuiltStylesheet",
    "rebuild_stylesheet",
    "placeholder_stylesheet",
]
