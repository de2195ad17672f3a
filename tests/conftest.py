"""Shared test fixtures for asset-insight."""

import json
import logging
import os

import pytest

from asset_insight.models import CSS, JS, AssetFile
from asset_insight.snapshot import snapshot_from_dict

WP_MARKUP = """<html>
<head>
  <meta name="generator" content="WordPress 5.8.2">
  <link rel="https://api.w.org/" href="https://blog.example/wp-json/">
  <link rel="stylesheet" href="https://blog.example/wp-content/themes/twentytwenty/style.css">
  <script src="https://blog.example/wp-includes/js/jquery/jquery.min.js"></script>
  <script src="https://blog.example/wp-content/plugins/contact-form-7/index.js"></script>
</head>
<body class="home wp-custom-logo">
  <div class="hero card"><a class='btn'>Go</a></div>
</body>
</html>"""


@pytest.fixture
def make_js():
    """Factory for JS assets: make_js("app.js", "content")."""

    def _make(name="app.js", content="", base="https://site.example/js/"):
        return AssetFile(url=f"{base}{name}", content=content, kind=JS)

    return _make


@pytest.fixture
def make_css():
    """Factory for CSS assets."""

    def _make(content, name="site.css", base="https://site.example/css/"):
        return AssetFile(url=f"{base}{name}", content=content, kind=CSS)

    return _make


@pytest.fixture
def sample_snapshot_data():
    """A small non-WordPress page with one used and one unused rule per kind."""
    return {
        "markup": '<html><body><div class="a"></div></body></html>',
        "used_classes": ["a"],
        "css": [{"url": "https://site.example/site.css", "content": ".a{color:red}.b{color:blue}"}],
        "js": [
            {"url": "https://site.example/app.js", "content": "function init() { return 1; }\n"},
            {"url": "https://site.example/empty.js", "content": ""},
        ],
    }


@pytest.fixture
def sample_snapshot(sample_snapshot_data):
    return snapshot_from_dict(sample_snapshot_data)


@pytest.fixture
def snapshot_file(tmp_path, sample_snapshot_data):
    """Snapshot JSON written to disk."""
    path = tmp_path / "capture.json"
    path.write_text(json.dumps(sample_snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def wp_markup():
    return WP_MARKUP


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and ASSET_INSIGHT_* env vars out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in [k for k in os.environ if k.startswith("ASSET_INSIGHT_")]:
        monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger("asset_insight")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved[0]:
            logger.removeHandler(handler)
            handler.close()
    for handler in saved[0]:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
