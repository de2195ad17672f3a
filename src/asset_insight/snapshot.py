"""Snapshot input: the frozen capture of a rendered page.

A snapshot file is JSON produced by whatever drove the browser::

    {
      "markup": "<html>...</html>",
      "used_classes": ["btn", "card"],          # optional, derived from markup
      "css": [{"url": "https://x/site.css", "content": "..."},
              {"content": "...inline <style>..."}],
      "js":  [{"url": "https://x/app.js", "content": "..."}],
      "platform": {"is_platform": true, "version": "5.9",
                   "plugins": ["contact-form-7"], "core_files": [...]}
    }

Asset order is document order and is preserved end to end. Entries without
a URL are inline blocks and get ``inline-N`` tokens. A failed fetch is an
entry with empty content.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from bs4 import BeautifulSoup

from .exceptions import InvalidSnapshotError
from .logging_config import get_logger
from .models import CSS, JS, AssetFile, PlatformSignals, PluginInfo, ThemeInfo

logger = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    markup: str
    used_classes: frozenset[str]
    css_assets: tuple[AssetFile, ...] = ()
    js_assets: tuple[AssetFile, ...] = ()
    platform: Optional[PlatformSignals] = None

    @property
    def asset_urls(self) -> list[str]:
        return [a.url for a in (*self.css_assets, *self.js_assets) if not a.is_inline]


def extract_used_classes(markup: str) -> frozenset[str]:
    """Deduplicated class tokens applied to any element of the markup."""
    soup = BeautifulSoup(markup or "", "html.parser")
    classes: set[str] = set()
    for tag in soup.find_all(class_=True):
        classes.update(c.strip() for c in tag.get("class", []) if c.strip())
    return frozenset(classes)


def _assets(entries: Any, kind: str) -> tuple[AssetFile, ...]:
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise InvalidSnapshotError(f"'{kind}' must be a list of assets")

    assets = []
    inline_index = 0
    for position, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"content": entry}
        if not isinstance(entry, dict):
            raise InvalidSnapshotError(f"{kind} asset #{position} must be an object")

        url = entry.get("url")
        if not url:
            url = f"inline-{inline_index}"
            inline_index += 1
        content = entry.get("content") or ""
        if not isinstance(content, str):
            raise InvalidSnapshotError(f"{kind} asset '{url}' content must be text")
        assets.append(AssetFile(url=str(url), content=content, kind=kind))
    return tuple(assets)


def _version(value: Any, where: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidSnapshotError(f"{where} version must be text or a number")
    return str(value)


def _optional_text(value: Any, where: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value or None
    raise InvalidSnapshotError(f"{where} must be text")


def _plugins(entries: Any) -> tuple[PluginInfo, ...]:
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise InvalidSnapshotError("'platform.plugins' must be a list")

    plugins = []
    for position, entry in enumerate(entries):
        if isinstance(entry, str):
            if entry:
                plugins.append(PluginInfo(name=entry))
            continue
        if not isinstance(entry, dict):
            raise InvalidSnapshotError(f"plugin #{position} must be a name or an object")

        name = entry.get("name")
        if name is None or name == "":
            # Unnamed entries carry nothing the advisor can use
            continue
        if not isinstance(name, str):
            raise InvalidSnapshotError(f"plugin #{position} name must be text")
        plugins.append(
            PluginInfo(
                name=name,
                version=_version(entry.get("version"), f"plugin '{name}'"),
                path=_optional_text(entry.get("path"), f"plugin '{name}' path"),
            )
        )
    return tuple(plugins)


def _theme(value: Any) -> Optional[ThemeInfo]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return ThemeInfo(name=value)
    if not isinstance(value, dict):
        raise InvalidSnapshotError("'platform.theme' must be a name or an object")

    name = value.get("name")
    if name is None or name == "":
        return None
    if not isinstance(name, str):
        raise InvalidSnapshotError("theme name must be text")
    return ThemeInfo(
        name=name,
        version=_version(value.get("version"), f"theme '{name}'"),
        path=_optional_text(value.get("path"), f"theme '{name}' path"),
    )


def _core_files(entries: Any) -> tuple[str, ...]:
    if entries is None:
        return ()
    if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
        raise InvalidSnapshotError("'platform.core_files' must be a list of paths")
    return tuple(entries)


def platform_from_dict(data: dict[str, Any]) -> PlatformSignals:
    """Build PlatformSignals from the snapshot's ``platform`` record.

    Versions may be given as numbers and are kept as text.

    Raises:
        InvalidSnapshotError: If a field has the wrong type
    """
    return PlatformSignals(
        is_platform=bool(data.get("is_platform", False)),
        version=_version(data.get("version"), "platform"),
        theme=_theme(data.get("theme")),
        plugins=_plugins(data.get("plugins")),
        core_files=_core_files(data.get("core_files")),
    )


def snapshot_from_dict(data: dict[str, Any]) -> Snapshot:
    """Build a Snapshot from its decoded JSON form.

    Raises:
        InvalidSnapshotError: If required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise InvalidSnapshotError("snapshot must be a JSON object")

    markup = data.get("markup", "")
    if not isinstance(markup, str):
        raise InvalidSnapshotError("'markup' must be text")

    raw_classes = data.get("used_classes")
    if raw_classes is None:
        used_classes = extract_used_classes(markup)
        logger.debug(f"Derived {len(used_classes)} used classes from markup")
    elif isinstance(raw_classes, list):
        used_classes = frozenset(str(c).strip() for c in raw_classes if str(c).strip())
    else:
        raise InvalidSnapshotError("'used_classes' must be a list of strings")

    platform = data.get("platform")
    if platform is not None and not isinstance(platform, dict):
        raise InvalidSnapshotError("'platform' must be an object")

    return Snapshot(
        markup=markup,
        used_classes=used_classes,
        css_assets=_assets(data.get("css"), CSS),
        js_assets=_assets(data.get("js"), JS),
        platform=platform_from_dict(platform) if platform is not None else None,
    )


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot JSON file.

    Raises:
        InvalidSnapshotError: If the file is unreadable, not JSON, or malformed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidSnapshotError(f"cannot read file: {e}", path=path)
    except json.JSONDecodeError as e:
        raise InvalidSnapshotError(f"not valid JSON: {e}", path=path)

    try:
        snapshot = snapshot_from_dict(data)
    except InvalidSnapshotError as e:
        raise InvalidSnapshotError(e.reason, path=path)

    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.css_assets)} CSS, "
        f"{len(snapshot.js_assets)} JS assets, {len(snapshot.used_classes)} classes"
    )
    return snapshot
