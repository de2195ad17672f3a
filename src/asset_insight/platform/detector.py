"""Static WordPress detection from captured markup and asset URLs.

Used when a snapshot does not carry a platform record of its own. Only
reads what is already in the snapshot; theme and plugin versions that would
need extra requests are left unset.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from bs4 import BeautifulSoup

from ..models import PlatformSignals, PluginInfo, ThemeInfo

_GENERATOR_VERSION_RE = re.compile(r"WordPress\s+([\d.]+)")
_THEME_RE = re.compile(r"wp-content/themes/([^/?#]+)")
_PLUGIN_RE = re.compile(r"wp-content/plugins/([^/?#]+)")
_CORE_MARKERS = ("wp-includes", "wp-admin", "wp-content")
REST_API_REL = "https://api.w.org/"


def _resource_urls(soup: BeautifulSoup) -> list[str]:
    urls = [tag["src"] for tag in soup.find_all("script", src=True)]
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if "stylesheet" in rel:
            urls.append(link["href"])
    return urls


def detect_platform(markup: str, asset_urls: Iterable[str] = ()) -> PlatformSignals:
    """Detect WordPress signals in a page snapshot.

    Args:
        markup: Rendered page markup
        asset_urls: URLs of downloaded CSS/JS assets, in document order

    Returns:
        PlatformSignals; ``is_platform`` is False when nothing matched
    """
    soup = BeautifulSoup(markup or "", "html.parser")
    is_platform = False
    version = None

    generator = soup.find("meta", attrs={"name": "generator"})
    if generator is not None:
        content = generator.get("content") or ""
        if "WordPress" in content:
            is_platform = True
            match = _GENERATOR_VERSION_RE.search(content)
            if match:
                version = match.group(1)

    if soup.find("link", rel=REST_API_REL) is not None:
        is_platform = True

    body = soup.find("body")
    if body is not None:
        body_classes = " ".join(body.get("class") or [])
        if "wp-" in body_classes or "wordpress" in body_classes:
            is_platform = True

    resources: dict[str, None] = {}
    for url in [*_resource_urls(soup), *asset_urls]:
        resources.setdefault(url, None)

    core_files: list[str] = []
    theme = None
    plugins: dict[str, PluginInfo] = {}

    for resource in resources:
        if any(marker in resource for marker in _CORE_MARKERS):
            is_platform = True
            core_files.append(resource)

        theme_match = _THEME_RE.search(resource)
        if theme_match and theme is None:
            theme = ThemeInfo(name=theme_match.group(1), path=resource)

        plugin_match = _PLUGIN_RE.search(resource)
        if plugin_match:
            name = plugin_match.group(1)
            plugins.setdefault(name, PluginInfo(name=name, path=resource))

    return PlatformSignals(
        is_platform=is_platform,
        version=version,
        theme=theme,
        plugins=tuple(plugins.values()),
        core_files=tuple(core_files),
    )
