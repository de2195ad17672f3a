"""Configuration loading and management for asset-insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.asset-insight.toml)
    3. Project config (./asset-insight.toml)
    4. Explicit config file
    5. Environment variables (ASSET_INSIGHT_* prefix)
    6. Overrides passed as kwargs (CLI flags)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
StageFailurePolicy = Literal["raise", "degrade"]

ENV_PREFIX = "ASSET_INSIGHT_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Heuristic thresholds used by the analysis engine.

    Attributes:
        CSS:
            max_rule_matches: Rule matches read per extraction call

        JavaScript:
            large_file_bytes: Files above this size may be unused blobs
            large_file_max_lines: ...when they also have fewer lines than this
            jquery_min_bytes: Primary jQuery file smaller than this is suspect
            old_jquery_version: jQuery versions below this get a note
            preview_chars: Characters of each file shown in optimized.js

        Platform:
            max_plugins: Plugin count above this is an issue
            outdated_platform_version: Platform versions below this are outdated

        Performance:
            baseline_load_seconds: Assumed load time before optimization
            max_improvement_percent: Cap on estimated improvement
            fallback_improvement_percent: Improvement used when savings are unusable
    """

    # === CSS ===
    max_rule_matches: int = 1000

    # === JavaScript ===
    large_file_bytes: int = 100_000
    large_file_max_lines: int = 50
    jquery_min_bytes: int = 10_000
    old_jquery_version: float = 3.0
    preview_chars: int = 500

    # === Platform ===
    max_plugins: int = 10
    outdated_platform_version: float = 6.0

    # === Performance ===
    baseline_load_seconds: float = 1.2
    max_improvement_percent: float = 80.0
    fallback_improvement_percent: float = 20.0

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        positive_ints = [
            "max_rule_matches",
            "large_file_bytes",
            "large_file_max_lines",
            "jquery_min_bytes",
            "preview_chars",
        ]
        for field_name in positive_ints:
            if getattr(self, field_name) < 1:
                raise ValueError(f"{field_name} must be at least 1")

        if self.max_plugins < 0:
            raise ValueError("max_plugins must be non-negative")
        if self.baseline_load_seconds <= 0:
            raise ValueError("baseline_load_seconds must be positive")

        for field_name in ("max_improvement_percent", "fallback_improvement_percent"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"{field_name} must be between 0 and 100")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        workers: Parallel workers for script classification (None = auto-detect)
        on_stage_failure: "raise" surfaces a failed stage as StageFailedError,
            "degrade" substitutes a synthetic dataset and marks the result degraded
        verbosity: Logging verbosity level
        export_dir: Directory for purged.css / optimized.js (None = no export)
        detect_platform: Derive platform signals from the markup when the
            snapshot carries none
        thresholds: Heuristic thresholds
    """

    workers: Optional[int] = None
    on_stage_failure: StageFailurePolicy = "raise"
    verbosity: Verbosity = "normal"
    export_dir: Optional[str] = None
    detect_platform: bool = True
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.on_stage_failure not in ("raise", "degrade"):
            raise ValueError("on_stage_failure must be 'raise' or 'degrade'")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be 'quiet', 'normal' or 'verbose'")

    @property
    def effective_workers(self) -> int:
        """Worker count with auto-detection applied (CPU count, capped at 8)."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 4, 8)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".asset-insight.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "asset-insight.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Boolean verbosity flags from the CLI
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds_dict)
            except (TypeError, ValueError) as e:
                raise InvalidConfigError("thresholds", thresholds_dict, str(e))
        elif isinstance(thresholds_dict, ThresholdConfig):
            merged["thresholds"] = thresholds_dict

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ASSET_INSIGHT_* environment variables.

    Supported environment variables:
        ASSET_INSIGHT_WORKERS: int
        ASSET_INSIGHT_ON_STAGE_FAILURE: raise/degrade
        ASSET_INSIGHT_VERBOSITY: quiet/normal/verbose
        ASSET_INSIGHT_EXPORT_DIR: path
        ASSET_INSIGHT_DETECT_PLATFORM: bool
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot come from the environment.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
