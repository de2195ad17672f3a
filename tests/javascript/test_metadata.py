"""Tests for javascript/metadata.py - informational script scans."""

from asset_insight.javascript.metadata import (
    extract_dependencies,
    extract_functions,
    is_jquery_family,
    path_flags,
)


class TestExtractFunctions:
    def test_declarations_and_const_arrows(self):
        content = "function init(a) {}\nconst render = (x) => x;\nfunction init() {}"
        assert extract_functions(content) == ["init", "render"]

    def test_no_functions(self):
        assert extract_functions("var x = 1;") == []


class TestExtractDependencies:
    def test_known_libraries_in_catalogue_order(self):
        content = "React.render(); jQuery(function () {});"
        assert extract_dependencies(content) == ["jQuery", "React"]

    def test_dollar_call_counts_as_jquery(self):
        assert extract_dependencies("$('.menu').show();") == ["jQuery"]
        assert extract_dependencies("$.ajax({});") == ["jQuery"]

    def test_bare_dollar_sign_is_not_jquery(self):
        assert extract_dependencies("var price = '$5';") == []

    def test_bootstrap(self):
        assert extract_dependencies("import 'bootstrap';") == ["Bootstrap"]


class TestFileNameAndPath:
    def test_jquery_family_is_case_insensitive(self):
        assert is_jquery_family("JQuery.Min.js")
        assert is_jquery_family("jquery-ui.min.js")
        assert not is_jquery_family("app.js")

    def test_path_flags(self):
        assert path_flags("https://x/wp-includes/js/a.js") == {
            "is_core": True,
            "is_plugin": False,
            "is_theme": False,
        }
        assert path_flags("https://x/wp-content/plugins/form/a.js")["is_plugin"] is True
        assert path_flags("https://x/wp-content/themes/t/a.js")["is_theme"] is True
        assert path_flags("https://x/app.js") == {
            "is_core": False,
            "is_plugin": False,
            "is_theme": False,
        }
