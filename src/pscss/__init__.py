"""
pscss: partial SCSS to CSS converter.

Converts a CSS superset with nesting, `$variables`, `@mixin`/`@include`,
selective `@import` and `//` comments into flat standard CSS.

The conversion is a pipeline of ordered text passes, not a full parser.
Anything the passes do not recognize is passed through as plain CSS.

Usage:
    from pscss import convert
    css = convert("a { b { color: red; } }")
"""

from pscss.converter import convert, convert_file
from pscss.diagnostics import Diagnostic, PscssWarning
from pscss.imports import DictLoader, FileLoader, ResourceCache, ResourceLoadError
from pscss.model import ConversionOptions
from pscss.plugins import PluginRegistry

__version__ = "0.1.0"

__all__ = [
    "convert",
    "convert_file",
    "ConversionOptions",
    "Diagnostic",
    "DictLoader",
    "FileLoader",
    "PluginRegistry",
    "PscssWarning",
    "ResourceCache",
    "ResourceLoadError",
]
