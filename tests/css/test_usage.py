"""Tests for css/usage.py - selector usage classification."""

import pytest

from asset_insight.css.extractor import make_group
from asset_insight.css.usage import (
    MarkupIndex,
    classify_selectors,
    is_selector_used,
    markup_class_tokens,
)


def _group(selector):
    return make_group(selector)[0]


class TestMarkupClassTokens:
    """Test class attribute scanning."""

    def test_double_and_single_quotes(self):
        markup = """<div class="a b"></div><span class='c'></span>"""
        assert markup_class_tokens(markup) == frozenset({"a", "b", "c"})

    def test_spaces_around_equals(self):
        assert markup_class_tokens('<p class = "x">') == frozenset({"x"})

    def test_empty_markup(self):
        assert markup_class_tokens("") == frozenset()


class TestSelectorUsage:
    """Test is_selector_used decisions."""

    @pytest.mark.parametrize("selector", ["body", "#main", "a:hover", "input[type=text]", "*"])
    def test_classless_selectors_always_used(self, selector):
        assert is_selector_used(_group(selector), set(), "") is True

    def test_token_in_used_classes(self):
        assert is_selector_used(_group(".card"), {"card"}, "") is True

    def test_exact_class_attribute_in_markup(self):
        assert is_selector_used(_group(".card"), set(), '<div class="card"></div>') is True
        assert is_selector_used(_group(".card"), set(), "<div class='card'></div>") is True

    def test_word_inside_multi_class_attribute(self):
        markup = '<div class="hero card shadow"></div>'
        assert is_selector_used(_group(".card"), set(), markup) is True

    def test_prefix_of_another_class_is_not_used(self):
        markup = '<div class="card-body"></div>'
        assert is_selector_used(_group(".card"), set(), markup) is False

    def test_text_outside_class_attribute_is_not_used(self):
        markup = "<p>card</p>"
        assert is_selector_used(_group(".card"), set(), markup) is False

    def test_compound_selector_used_when_any_token_used(self):
        assert is_selector_used(_group(".nav .item.active"), {"active"}, "") is True

    def test_unused_class_selector(self):
        assert is_selector_used(_group(".b"), {"a"}, '<div class="a"></div>') is False


class TestClassifySelectors:
    """Test batch classification."""

    def test_verdicts_in_input_order(self):
        groups = [_group(s) for s in (".b", "h1", ".a")]
        index = MarkupIndex.build({"a"}, "")
        verdicts = classify_selectors(groups, index)
        assert [v.selector.raw_text for v in verdicts] == [".b", "h1", ".a"]
        assert [v.used for v in verdicts] == [False, True, True]

    def test_index_build_tolerates_none_markup(self):
        index = MarkupIndex.build(["a"], None)
        assert index.markup == ""
        assert index.selector_used(_group(".a"))
