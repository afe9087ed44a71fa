"""
Plugin hooks.

Two registries let the embedding application extend the conversion:

    converters:
        Functions `converter(text, quotes, variables, mixins) -> str` run
        in registration order after variables and mixins are resolved.

    functions:
        `name -> function(raw_args) -> str`. Any remaining `name(args)` in
        the text whose name is registered is replaced by the result.
        Unregistered names (calc, rgba, url, ...) are plain CSS and stay.

Both registries are empty by default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from pscss.context import ConversionContext


Converter = Callable[..., str]
Function = Callable[[str], Any]

_FUNCTION_CALL_RE = re.compile(r"([\w-]+)\(([^);]*)\)")


@dataclass
class PluginRegistry:
    """Ordered converters and named functions applied during conversion."""

    converters: List[Converter] = field(default_factory=list)
    functions: Dict[str, Function] = field(default_factory=dict)

    def converter(self, func: Converter) -> Converter:
        """Register `func` as a converter. Usable as a decorator."""
        self.converters.append(func)
        return func

    def function(self, name: str) -> Callable[[Function], Function]:
        """Register a function under `name`. Usable as a decorator."""
        def _register(func: Function) -> Function:
            self.functions[name] = func
            return func
        return _register


def run_converters(text: str, context: ConversionContext) -> str:
    """Apply every registered converter in order."""
    for converter in context.plugins.converters:
        text = converter(text, context.quotes, context.variables, context.mixins) or ""
    return text


def run_functions(text: str, context: ConversionContext) -> str:
    """Replace calls to registered functions with their results."""
    functions = context.plugins.functions
    if not functions:
        return text

    def _call(match: re.Match) -> str:
        function = functions.get(match.group(1))
        if function is None:
            return match.group(0)
        result = function(match.group(2))
        return "" if result is None else str(result)

    return _FUNCTION_CALL_RE.sub(_call, text)
