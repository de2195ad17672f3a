"""Tests for javascript/plugins.py - jQuery plugin ecosystem heuristics."""

import pytest

from asset_insight.javascript.plugins import (
    PLUGIN_FAMILIES,
    analyze_plugin_usage,
    detect_version,
)
from asset_insight.javascript.rules import ScriptContext
from asset_insight.models import AssetFile


def _ctx(name, content=""):
    return ScriptContext(asset=AssetFile(url=f"https://site.example/js/{name}", content=content))


def _rules(findings):
    return [f.rule for f in findings]


class TestDetectVersion:
    def test_version_from_banner(self):
        assert detect_version(_ctx("jquery.min.js", "/*! jQuery v3.6.0 | (c) */")) == "3.6.0"

    def test_version_from_file_name(self):
        assert detect_version(_ctx("jquery-1.12.4.min.js", "!function(){}")) == "1.12.4"

    def test_content_wins_over_file_name(self):
        assert detect_version(_ctx("jquery-1.12.4.js", "jQuery 2.2.4")) == "2.2.4"

    def test_no_version(self):
        assert detect_version(_ctx("jquery.custom.js", "var x;")) is None


class TestOldVersion:
    def test_old_version_note_does_not_mark_unused(self):
        findings = analyze_plugin_usage(_ctx("jquery-1.12.4.min.js", "/*! jQuery v1.12.4 */"))
        old = [f for f in findings if f.rule == "old_jquery_version"]
        assert old[0].message == "Old jQuery version 1.12.4 detected - consider updating"
        assert old[0].marks_unused is False

    def test_current_version_has_no_note(self):
        findings = analyze_plugin_usage(_ctx("jquery-3.7.1.min.js", "/*! jQuery v3.7.1 */"))
        assert "old_jquery_version" not in _rules(findings)


class TestJQueryUI:
    def test_markers_found_is_not_unused(self):
        content = "$('.box').draggable(); $('.list').sortable();"
        findings = analyze_plugin_usage(_ctx("jquery-ui.min.js", content))
        ui = [f for f in findings if f.rule.startswith("jquery_ui")]
        assert ui[0].rule == "jquery_ui_usage"
        assert ui[0].marks_unused is False
        assert ui[0].message == "jQuery UI: 2 usage marker(s) found (draggable, sortable)"

    def test_no_markers_marks_unused(self):
        findings = analyze_plugin_usage(_ctx("jquery-ui.min.js", "var noop = 1;"))
        ui = [f for f in findings if f.rule == "jquery_ui_unused"]
        assert ui[0].message == "jQuery UI loaded but no UI components detected in usage"
        assert ui[0].marks_unused is True

    @pytest.mark.parametrize("name", ["jquery.ui.core.js", "jquery-ui-1.13.js", "jquery_ui.js"])
    def test_ui_file_name_variants(self, name):
        assert "jquery_ui_unused" in _rules(analyze_plugin_usage(_ctx(name, "x")))

    def test_ui_substring_in_word_is_not_ui(self):
        findings = analyze_plugin_usage(_ctx("jquery.build.js", "x"))
        assert "jquery_ui_unused" not in _rules(findings)


class TestOtherFamilies:
    def test_migrate_without_deprecated_features(self):
        findings = analyze_plugin_usage(_ctx("jquery-migrate.min.js", "var m;"))
        assert "jquery_migrate_unused" in _rules(findings)

    def test_migrate_with_deprecated_feature(self):
        findings = analyze_plugin_usage(_ctx("jquery-migrate.min.js", "jQuery.fn.size = f;"))
        assert "jquery_migrate_usage" in _rules(findings)

    def test_validation_usage(self):
        findings = analyze_plugin_usage(_ctx("jquery.validate.min.js", "$('#f').validate({});"))
        assert "jquery_validation_usage" in _rules(findings)
        assert "jquery_validation_unused" not in _rules(findings)

    def test_datatables_unused(self):
        findings = analyze_plugin_usage(_ctx("jquery.dataTables.min.js", "var t;"))
        unused = [f for f in findings if f.rule == "datatables_unused"]
        assert unused[0].message == "DataTables plugin loaded but no table initialization detected"

    def test_slick_detected_by_content(self):
        findings = analyze_plugin_usage(_ctx("jquery.carousel.js", "/* slick */ var s;"))
        assert "slick_unused" in _rules(findings)

    def test_every_family_has_unused_message(self):
        assert {f.key for f in PLUGIN_FAMILIES} == {
            "jquery_ui",
            "jquery_migrate",
            "jquery_validation",
            "datatables",
            "slick",
        }
        assert all(f.unused_message for f in PLUGIN_FAMILIES)


class TestDeprecatedMethodsAndCoreFile:
    def test_deprecated_methods_listed(self):
        findings = analyze_plugin_usage(_ctx("jquery.plugin.js", "$(a).bind('x'); $(b).live('y');"))
        deprecated = [f for f in findings if f.rule == "deprecated_jquery_methods"]
        assert deprecated[0].message == "Deprecated jQuery methods found: .live(, .bind("
        assert deprecated[0].marks_unused is False

    def test_undersized_primary_file(self):
        findings = analyze_plugin_usage(_ctx("jquery.min.js", "x" * 100))
        undersized = [f for f in findings if f.rule == "undersized_jquery"]
        assert undersized[0].message == "jQuery file seems too small or corrupted"
        assert undersized[0].marks_unused is True

    def test_full_size_primary_file(self):
        findings = analyze_plugin_usage(_ctx("jquery.min.js", "x" * 20_000))
        assert "undersized_jquery" not in _rules(findings)

    def test_size_check_only_applies_to_primary_file(self):
        findings = analyze_plugin_usage(_ctx("jquery.plugin.js", "x"))
        assert "undersized_jquery" not in _rules(findings)
