"""
Variable Substitutor.

    $accent: red;          ->  --accent: red;
    color: $accent;        ->  color: var(--accent);
    color: $accent !important;  ->  color: var(--accent) !important;

The variable table is flat for the whole conversion and values are copied
when declared: `$b: $a;` stores the value `$a` has at that point, not a
reference to `$a`. Usage rewriting is purely syntactic and never consults
the table.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pscss.context import ConversionContext


_DECLARATION_RE = re.compile(r"\$([-\w$]+)(\s*:\s*)(.+?);")
_USAGE_RE = re.compile(r"\$([-\w$]+)(\s+!important)?(\s*;)")
_REFERENCE_RE = re.compile(r"\$([-\w]+)")


def substitute_variables(text: str, context: ConversionContext) -> str:
    """Rewrite `$name` declarations and usages to custom-property syntax."""
    def _declare(match: re.Match) -> str:
        name, separator, value = match.groups()
        reference = _REFERENCE_RE.fullmatch(value.strip())
        if reference is not None:
            context.variables[name] = context.variables.get(reference.group(1), value)
        else:
            context.variables[name] = value
        return f"--{name}{separator}{value};"

    text = _DECLARATION_RE.sub(_declare, text)
    return _USAGE_RE.sub(r"var(--\1)\2\3", text)
