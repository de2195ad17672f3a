"""Tests for javascript/rules.py - general per-script heuristics."""

from asset_insight.config import ThresholdConfig
from asset_insight.javascript.rules import (
    SCRIPT_RULES,
    ScriptContext,
    apply_rules,
    deprecated_browser_detection,
    empty_file,
    large_minified_blob,
    legacy_ie_code,
)
from asset_insight.models import AssetFile


def _ctx(content="", url="https://site.example/app.js", **thresholds):
    return ScriptContext(
        asset=AssetFile(url=url, content=content),
        thresholds=ThresholdConfig(**thresholds),
    )


class TestEmptyFile:
    def test_empty_content_marks_unused(self):
        finding = empty_file(_ctx(""))
        assert finding is not None
        assert finding.message == "Empty file"
        assert finding.marks_unused is True

    def test_whitespace_is_not_empty(self):
        assert empty_file(_ctx(" ")) is None


class TestDeprecatedBrowserDetection:
    def test_jquery_browser(self):
        finding = deprecated_browser_detection(_ctx("if (jQuery.browser.msie) {}"))
        assert finding.message == "Uses deprecated jQuery.browser"
        assert finding.marks_unused is True

    def test_dollar_browser(self):
        assert deprecated_browser_detection(_ctx("$.browser.webkit")) is not None

    def test_modern_code(self):
        assert deprecated_browser_detection(_ctx("navigator.userAgent")) is None


class TestLegacyIECode:
    def test_attach_event(self):
        finding = legacy_ie_code(_ctx("el.attachEvent('onclick', handler);"))
        assert finding.message == "Contains old IE-specific code"

    def test_conditional_comment(self):
        assert legacy_ie_code(_ctx("document.write('<!--[if IE 8]>');")) is not None

    def test_add_event_listener(self):
        assert legacy_ie_code(_ctx("el.addEventListener('click', h);")) is None


class TestLargeMinifiedBlob:
    """Size above the byte threshold with few lines."""

    def test_large_single_line_file(self):
        finding = large_minified_blob(_ctx("x" * 100_001))
        assert finding.message == "Large minified file with questionable usage"
        assert finding.marks_unused is True

    def test_large_file_with_many_lines(self):
        assert large_minified_blob(_ctx("var a = 1;\n" * 10_000)) is None

    def test_exactly_at_threshold_is_not_large(self):
        assert large_minified_blob(_ctx("x" * 100_000)) is None

    def test_custom_thresholds(self):
        ctx = _ctx("x" * 11, large_file_bytes=10, large_file_max_lines=2)
        assert large_minified_blob(ctx) is not None


class TestApplyRules:
    def test_findings_in_rule_order(self):
        ctx = _ctx("$.browser; el.attachEvent('x', f);")
        findings = apply_rules(ctx, SCRIPT_RULES)
        assert [f.rule for f in findings] == ["deprecated_browser_detection", "legacy_ie_code"]

    def test_clean_script_has_no_findings(self):
        assert apply_rules(_ctx("console.log('hi');"), SCRIPT_RULES) == []

    def test_context_properties(self):
        ctx = _ctx("a\nb\nc", url="https://cdn.example/lib/app.min.js")
        assert ctx.file_name == "app.min.js"
        assert ctx.size == 5
        assert ctx.line_count == 3
        assert ctx.contains_any(("b", "z", "a")) == ["b", "a"]
