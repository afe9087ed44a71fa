"""
Tests for the Rule Tree Flattener: selector combination, tree building,
media promotion and rendering.
"""

from pscss.model import Rule, Selector
from pscss.rules import (
    build_rule_tree,
    combine_selectors,
    flatten_rule_tree,
    flatten_rules,
    is_custom_property,
    is_media_query,
    render_rules,
)
from pscss.tokenizer import tokenize


def flatten(text, root_selector=None):
    return flatten_rules(tokenize(text), root_selector)


class TestCombineSelectors:

    def test_descendant(self):
        assert combine_selectors(Selector("a"), "b") == Selector("a b")

    def test_root_parent(self):
        assert combine_selectors(Selector(""), "b") == Selector("b")

    def test_parent_reference(self):
        assert combine_selectors(Selector("a"), "&:hover") == Selector("a:hover")

    def test_every_parent_reference_is_replaced(self):
        assert combine_selectors(Selector(".x"), "& + &") == Selector(".x + .x")

    def test_suffix_reference(self):
        assert combine_selectors(Selector(".btn"), ".dark &") == Selector(".dark .btn")

    def test_media_is_promoted(self):
        combined = combine_selectors(Selector("a"), "@media (min-width: 1px)")
        assert combined == Selector("a", "(min-width: 1px)")

    def test_nested_media_is_merged(self):
        combined = combine_selectors(Selector("a", "screen"), "@media (min-width: 1px)")
        assert combined == Selector("a", "screen and (min-width: 1px)")

    def test_media_is_inherited(self):
        assert combine_selectors(Selector("a", "print"), "b") == Selector("a b", "print")

    def test_is_media_query(self):
        assert is_media_query("@media print")
        assert not is_media_query("@mediafoo")
        assert not is_media_query("a")


class TestBuildRuleTree:

    def test_nesting(self):
        tree = build_rule_tree(tokenize("a { x: 1; b { y: 2; } }"))
        (a,) = tree.children
        assert a.selectors == [Selector("a")]
        assert a.declarations == ["x: 1;"]
        assert a.children[0].selectors == [Selector("a b")]

    def test_selector_list_cross_product(self):
        tree = build_rule_tree(tokenize("a, b { c, d { x: 1; } }"))
        inner = tree.children[0].children[0]
        assert [s.text for s in inner.selectors] == ["a c", "b c", "a d", "b d"]

    def test_commas_inside_parentheses_do_not_split(self):
        tree = build_rule_tree(tokenize(":is(a, b) { x: 1; }"))
        assert tree.children[0].selectors == [Selector(":is(a, b)")]

    def test_declaration_whitespace_is_collapsed(self):
        tree = build_rule_tree(tokenize("a { margin :\n 0   1px; }"))
        assert tree.children[0].declarations == ["margin : 0 1px;"]

    def test_root_selector(self):
        tree = build_rule_tree(tokenize("x: 1;"), ".inline")
        assert tree.selectors == [Selector(".inline")]
        assert tree.declarations == ["x: 1;"]

    def test_unbalanced_close_is_tolerated(self):
        tree = build_rule_tree(tokenize("a { x: 1; } } b { y: 2; }"))
        assert [c.selectors[0].text for c in tree.children] == ["a"]

    def test_unclosed_block_runs_to_end(self):
        tree = build_rule_tree(tokenize("a { x: 1;"))
        assert tree.children[0].declarations == ["x: 1;"]

    def test_flatten_is_pre_order(self):
        tree = build_rule_tree(tokenize("a { b { c { } } d { } }"))
        texts = [r.selectors[0].text for r in flatten_rule_tree(tree)]
        assert texts == ["", "a", "a b", "a b c", "a d"]


class TestRender:

    def test_empty_rules_are_dropped(self):
        assert flatten("a { b { } }") == ""

    def test_parent_before_children(self):
        assert flatten("a { x: 1; b { y: 2; } z: 3; }") == "a { x: 1; z: 3; }\na b { y: 2; }\n"

    def test_selector_list(self):
        assert flatten("a, b { x: 1; }") == "a, b { x: 1; }\n"

    def test_media_promotion(self):
        css = flatten("a { x: 1; @media (min-width: 1px) { x: 2; } }")
        assert css == "a { x: 1; }\n@media (min-width: 1px) { a { x: 2; } }\n"

    def test_nested_media(self):
        css = flatten("a { @media screen { @media (min-width: 1px) { x: 2; } } }")
        assert css == "@media screen and (min-width: 1px) { a { x: 2; } }\n"

    def test_top_level_media(self):
        css = flatten("@media print { a { x: 1; } }")
        assert css == "@media print { a { x: 1; } }\n"

    def test_root_custom_properties(self):
        css = flatten("--a: 1; $b: 2; c: var(--a); @import x; d { e: f; }")
        assert css == "@import x;\n:root { --a: 1; $b: 2; c: var(--a); }\nd { e: f; }\n"

    def test_root_selector_wraps_declarations(self):
        css = flatten("color: red; b { x: 1; }", ".inline")
        assert css == ".inline { color: red; }\n.inline b { x: 1; }\n"

    def test_root_selector_keeps_custom_properties_inside(self):
        assert flatten("--a: 1;", ".inline") == ".inline { --a: 1; }\n"

    def test_render_rules_without_implicit_root(self):
        rules = [Rule([Selector("a")], ["x: 1;"])]
        assert render_rules(rules, implicit_root=False) == "a { x: 1; }\n"

    def test_duplicate_selectors_render_once(self):
        rules = [Rule(), Rule([Selector("a"), Selector("a")], ["x: 1;"])]
        assert render_rules(rules) == "a { x: 1; }\n"


class TestCustomProperty:

    def test_detection(self):
        assert is_custom_property("--a: 1;")
        assert is_custom_property("$a: 1;")
        assert is_custom_property("var(--a);")
        assert is_custom_property("color: var(--a);")
        assert not is_custom_property("color: red;")
        assert not is_custom_property("@import x;")
