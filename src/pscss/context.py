"""
Conversion context: the state shared by the passes of one conversion.

A context is created for each top-level `convert` call. Inlined imports use
the context of the document that imports them, so their variables and
mixins are visible to the rest of the sheet.
"""

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pscss.diagnostics import Diagnostic, PscssWarning
from pscss.imports import DEFAULT_RESOURCE_CACHE, FileLoader, Loader, ResourceCache
from pscss.model import ConversionOptions, Mixin
from pscss.plugins import PluginRegistry
from pscss.quotes import QuoteVault


@dataclass
class ConversionContext:
    """
    Properties:
        quotes: Vault of protected string literals
        variables: Flat variable table (name without `$` -> value)
        mixins: Mixin table (dash-normalized name -> Mixin)
        plugins: Converters and functions
        options: Conversion flags
        loader: Callable fetching imported resources
        cache: Already loaded resources (shared across conversions)
        base_path: Path of the converted resource, anchors imports and
            labels diagnostics
        diagnostics: Every diagnostic emitted during the conversion
    """

    quotes: QuoteVault = field(default_factory=QuoteVault)
    variables: Dict[str, str] = field(default_factory=dict)
    mixins: Dict[str, Mixin] = field(default_factory=dict)
    plugins: PluginRegistry = field(default_factory=PluginRegistry)
    options: ConversionOptions = field(default_factory=ConversionOptions)
    loader: Loader = field(default_factory=FileLoader)
    cache: ResourceCache = DEFAULT_RESOURCE_CACHE
    base_path: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def source(self) -> str:
        return self.base_path or "pscss"

    def warn(self, message: str, line: Optional[int] = None, construct: Optional[str] = None) -> Diagnostic:
        """Record a diagnostic and emit it as a PscssWarning."""
        diagnostic = Diagnostic(message=message, source=self.source, line=line, construct=construct)
        self.diagnostics.append(diagnostic)
        warnings.warn(str(diagnostic), PscssWarning, stacklevel=2)
        return diagnostic
