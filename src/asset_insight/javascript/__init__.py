"""JavaScript track: per-file heuristic classification."""

from .classifier import classify_script, classify_scripts
from .metadata import extract_dependencies, extract_functions, is_jquery_family
from .plugins import PLUGIN_FAMILIES, analyze_plugin_usage, detect_version
from .rules import SCRIPT_RULES, ScriptContext

__all__ = [
    "classify_script",
    "classify_scripts",
    "extract_dependencies",
    "extract_functions",
    "is_jquery_family",
    "PLUGIN_FAMILIES",
    "analyze_plugin_usage",
    "detect_version",
    "SCRIPT_RULES",
    "ScriptContext",
]
