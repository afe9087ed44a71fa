"""
Declaration passes: missing-semicolon repair and nested-property flattening.

Both passes are heuristics on plain text, not parsers:
    - The semicolon repair only recognizes single-word values and can
      trigger on selectors written across lines (`a:hover` + newline).
    - Property flattening handles one level of nesting only:
      `font: { family: x; size: 2px; }` works,
      `font: { size: { adjust: 1; } }` does not.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pscss.quotes import QUOTE_CLOSE, QUOTE_OPEN
from pscss.textutils import line_number

if TYPE_CHECKING:
    from pscss.context import ConversionContext


_MISSING_SEMICOLON_RE = re.compile(
    r"(\w+\s*:\s*[\w\"'" + QUOTE_OPEN + QUOTE_CLOSE + r"]+)( *[}\n])"
)
_NESTED_PROPERTY_RE = re.compile(r"([\w-]+)\s*:\s*{([^}]+)}")
_SUB_PROPERTY_RE = re.compile(r"([\w-]+)\s*:")


def fix_missing_semicolons(text: str, context: ConversionContext) -> str:
    """
    Insert a `;` after `name: value` pairs that end at a `}` or line break.

    Each repair is reported as a diagnostic with the estimated line.
    """
    def _fix(match: re.Match) -> str:
        declaration = match.group(1)
        context.warn(
            f'missing semicolon for "{context.quotes.restore(declaration)}"',
            line=line_number(text, match.start()),
            construct=declaration,
        )
        return declaration + ";" + match.group(2)

    return _MISSING_SEMICOLON_RE.sub(_fix, text)


def flatten_nested_properties(text: str) -> str:
    """
    Expand nested-property shorthand into dash-joined property names.

    `margin: { top: 1px; left: 2px; }` becomes `margin-top: 1px; margin-left: 2px;`
    """
    def _flatten(match: re.Match) -> str:
        prefix = match.group(1)
        return _SUB_PROPERTY_RE.sub(lambda sub: f"{prefix}-{sub.group(1)}:", match.group(2))

    return _NESTED_PROPERTY_RE.sub(_flatten, text)
