"""
End-to-end tests for convert() and convert_file().
"""

import warnings

import pytest
from pscss import (
    ConversionOptions,
    DictLoader,
    FileLoader,
    PscssWarning,
    ResourceCache,
    ResourceLoadError,
    convert,
    convert_file,
)
from pscss.converter import PIPELINE, create_context


def run(source, *args, **kwargs):
    kwargs.setdefault("cache", ResourceCache())
    kwargs.setdefault("loader", DictLoader())
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", PscssWarning)
        return convert(source, *args, **kwargs)


class TestBasics:

    def test_empty(self):
        assert run("") == ""
        assert run(None) == ""

    def test_plain_css_passes_through(self):
        assert run("a { color: red; }") == "a { color: red; }\n"

    def test_nesting(self):
        css = run("a { color: red; b { margin: 0; } &.on { x: y; } }")
        assert css == "a { color: red; }\na b { margin: 0; }\na.on { x: y; }\n"

    def test_crlf_input(self):
        assert run("a {\r\n  b: c;\r\n}\r\n") == "a { b: c; }\n"

    def test_variables(self):
        css = run("$accent: red;\na { color: $accent; }")
        assert css == ":root { --accent: red; }\na { color: var(--accent); }\n"

    def test_variable_used_in_mixin_body(self):
        """Usages brought in by an include are rewritten too."""
        css = run("$c: red;\n@mixin m { color: $c; }\na { @include m; }")
        assert css == ":root { --c: red; }\na { color: var(--c); }\n"

    def test_mixin_parameters_are_bound_before_variable_rewriting(self):
        css = run("@mixin m($w: 1px) { width: $w; }\na { @include m; }")
        assert css == "a { width: 1px; }\n"

    def test_nested_properties(self):
        css = run("a { font: { size: 2px; weight: bold; } }")
        assert css == "a { font-size: 2px; font-weight: bold; }\n"

    def test_media_promotion(self):
        css = run("a { @media print { display: none; } }")
        assert css == "@media print { a { display: none; } }\n"

    def test_root_selector(self):
        assert run("color: red;", ".el") == ".el { color: red; }\n"


class TestQuotes:

    def test_literals_are_untouched(self):
        source = 'a { content: "// not a comment; { }"; }'
        assert run(source) == 'a { content: "// not a comment; { }"; }\n'

    def test_single_quotes(self):
        assert run("a { content: '/* x */'; }") == "a { content: '/* x */'; }\n"

    def test_url_import_passes_through(self):
        assert run('@import "theme.css";') == '@import "theme.css";\n'


class TestComments:

    def test_comments_are_removed(self):
        assert run("// a\na { /* b */ c: d; } // e") == "a { c: d; }\n"

    def test_nested_comments_option(self):
        source = "/* a /* b */ c */ x { y: z; }"
        nested = run(source, options=ConversionOptions(nested_comments=True))
        assert nested == "x { y: z; }\n"
        assert run(source) == "c */ x { y: z; }\n"


class TestRobustness:
    """convert() repairs or skips malformed input instead of raising."""

    @pytest.mark.parametrize("source", [
        "}}} {{{ ;;;",
        "@include ; @mixin",
        "@mixin m($a { x: $a; }",
        "a { b: c",
        '@import "_missing";',
        "a { @include nowhere; }",
        "$a: ;",
    ])
    def test_never_raises(self, source):
        assert isinstance(run(source), str)

    def test_missing_semicolon_is_reported(self):
        context = create_context(cache=ResourceCache(), loader=DictLoader())
        with pytest.warns(PscssWarning, match="missing semicolon"):
            css = convert("a { b: c }", context=context)
        assert css == "a { b: c; }\n"
        (diagnostic,) = context.diagnostics
        assert diagnostic.message == 'missing semicolon for "b: c"'
        assert diagnostic.line == 1

    def test_diagnostic_names_the_source(self):
        context = create_context(base_path="css/site.pscss", cache=ResourceCache(), loader=DictLoader())
        with pytest.warns(PscssWarning, match=r"^css/site\.pscss:1: unknown @include"):
            convert("a { @include nowhere; }", context=context)

    def test_idempotent_on_output(self):
        css = run("$a: 1;\na { b { c: $a; } @media print { d: e; } }")
        assert run(css) == css


class TestContext:

    def test_context_exposes_tables(self):
        context = create_context(cache=ResourceCache(), loader=DictLoader())
        convert('$font: "Serif";\n@mixin m { x: 1; }', context=context)
        assert list(context.variables) == ["font"]
        assert "m" in context.mixins
        assert context.quotes.restore(context.variables["font"]) == '"Serif"'

    def test_pipeline_steps_are_text_passes(self):
        context = create_context(cache=ResourceCache(), loader=DictLoader())
        text = "a { b: c; }"
        for step in PIPELINE:
            text = step(text, context)
            assert isinstance(text, str)


class TestConvertFile:

    def test_relative_imports(self, tmp_path):
        (tmp_path / "css").mkdir()
        (tmp_path / "css" / "main.pscss").write_text('@import "_vars";\na { color: $c; }')
        (tmp_path / "css" / "vars").write_text("$c: red;")
        css = convert_file("css/main.pscss", loader=FileLoader(str(tmp_path)), cache=ResourceCache())
        assert css == ":root { --c: red; }\na { color: var(--c); }\n"

    def test_import_back_to_self_is_skipped(self):
        loader = DictLoader({"a.pscss": '@import "b.pscss";\nx { y: z; }', "b.pscss": '@import "a.pscss";'})
        assert convert_file("a.pscss", loader=loader, cache=ResourceCache()) == "x { y: z; }\n"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ResourceLoadError, match="failed to load: nope.pscss"):
            convert_file("nope.pscss", loader=FileLoader(str(tmp_path)), cache=ResourceCache())

    def test_context_base_path(self):
        context = create_context(loader=DictLoader({"x.pscss": "a { b: c; }"}), cache=ResourceCache())
        assert convert_file("x.pscss", context=context) == "a { b: c; }\n"
        assert context.base_path == "x.pscss"
