"""
pscss -> CSS conversion pipeline.

    source
      -> newlines, quotes, comments, imports          (clean-up and inlining)
      -> semicolons, nested properties                (declaration repair)
      -> mixin registration, variables, includes      (macro expansion)
      -> plugin converters, plugin functions          (extension hooks)
      -> tokens -> rule tree -> CSS                   (flattening)
      -> quote restoration

Each step is a function `(text, context) -> text`. The rule flattener is
the terminal step and produces the CSS text directly.

IMPORTANT:
    convert() does not raise on malformed pscss. Problems are repaired or
    skipped and reported as PscssWarning diagnostics.
"""

from typing import Callable, List, Optional

from pscss.comments import strip_comments
from pscss.context import ConversionContext
from pscss.declarations import fix_missing_semicolons, flatten_nested_properties
from pscss.imports import (
    DEFAULT_RESOURCE_CACHE,
    FileLoader,
    Loader,
    ResourceCache,
    ResourceLoadError,
    resolve_imports,
)
from pscss.mixins import expand_includes, register_mixins
from pscss.model import ConversionOptions
from pscss.plugins import PluginRegistry, run_converters, run_functions
from pscss.rules import flatten_rules
from pscss.textutils import normalize_newlines
from pscss.tokenizer import tokenize
from pscss.variables import substitute_variables


Pass = Callable[[str, ConversionContext], str]


def _strip_comments(text: str, context: ConversionContext) -> str:
    return strip_comments(text, context.options.nested_comments)


# Order matters: mixins are registered before variables are rewritten so the
# stored bodies keep their `$parameter` names, and variables are rewritten a
# second time for the usages that expanded mixin bodies bring in.
PIPELINE: List[Pass] = [
    lambda text, context: normalize_newlines(text),
    lambda text, context: context.quotes.protect(text),
    _strip_comments,
    resolve_imports,
    fix_missing_semicolons,
    lambda text, context: flatten_nested_properties(text),
    register_mixins,
    substitute_variables,
    expand_includes,
    substitute_variables,
    run_converters,
    run_functions,
]


def create_context(base_path: Optional[str] = None,
                   options: Optional[ConversionOptions] = None,
                   plugins: Optional[PluginRegistry] = None,
                   loader: Optional[Loader] = None,
                   cache: Optional[ResourceCache] = None) -> ConversionContext:
    """Create a fresh context, filling in defaults for anything not given."""
    return ConversionContext(
        options=options or ConversionOptions(),
        plugins=plugins or PluginRegistry(),
        loader=loader or FileLoader(),
        cache=cache if cache is not None else DEFAULT_RESOURCE_CACHE,
        base_path=base_path,
    )


def convert(source: Optional[str],
            root_selector: Optional[str] = None,
            base_path: Optional[str] = None,
            *,
            options: Optional[ConversionOptions] = None,
            plugins: Optional[PluginRegistry] = None,
            loader: Optional[Loader] = None,
            cache: Optional[ResourceCache] = None,
            context: Optional[ConversionContext] = None) -> str:
    """
    Convert pscss text to CSS.

    Args:
        source: pscss text
        root_selector: Selector wrapping top-level declarations (for inline
            fragments); None converts a whole sheet
        base_path: Path of the source; anchors relative imports and labels
            diagnostics
        options: Conversion flags
        plugins: Converter and function plugins
        loader: Callable fetching imported resources (default: filesystem)
        cache: Already loaded resources (default: process-wide cache)
        context: Use this context instead of building one; lets callers
            inspect the variable and mixin tables and the diagnostics
            afterwards. The other keyword arguments are ignored when given.

    Returns:
        CSS text
    """
    if context is None:
        context = create_context(base_path, options, plugins, loader, cache)
    elif base_path is not None:
        context.base_path = base_path

    text = source or ""
    for step in PIPELINE:
        text = step(text, context) or ""

    css = flatten_rules(tokenize(text), root_selector)
    return context.quotes.restore(css)


def convert_file(path: str,
                 root_selector: Optional[str] = None,
                 *,
                 options: Optional[ConversionOptions] = None,
                 plugins: Optional[PluginRegistry] = None,
                 loader: Optional[Loader] = None,
                 cache: Optional[ResourceCache] = None,
                 context: Optional[ConversionContext] = None) -> str:
    """
    Load a pscss resource and convert it.

    The resource is claimed in the cache first, so imports pointing back at
    it are not inlined again.

    Raises:
        ResourceLoadError: If the resource cannot be loaded
    """
    if context is None:
        context = create_context(path, options, plugins, loader, cache)
    else:
        context.base_path = path

    context.cache.claim(path)
    try:
        source = context.loader(path)
    except OSError as e:
        raise ResourceLoadError(f"failed to load: {path}") from e
    return convert(source, root_selector, context=context)
