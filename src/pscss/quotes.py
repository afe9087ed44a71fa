"""
Quote Vault.

Quoted literals are moved out of the text before any other pass runs, so
that comment markers, braces or semicolons inside a string are never seen
by the textual passes. They are put back as the very last step.
"""

import re
from typing import List


QUOTE_OPEN = "\ue000"
QUOTE_CLOSE = "\ue001"

# A quote, the shortest run that does not end in a backslash, the same quote.
_LITERAL_RE = re.compile(r"""(['"])(?:.*?[^\\])?\1""")
PLACEHOLDER_RE = re.compile(QUOTE_OPEN + r"(\d+)" + QUOTE_CLOSE)


class QuoteVault:
    """Stores quoted literals and hands out placeholders for them."""

    def __init__(self) -> None:
        self.literals: List[str] = []

    def __len__(self) -> int:
        return len(self.literals)

    def __getitem__(self, index: int) -> str:
        return self.literals[index]

    def store(self, literal: str) -> str:
        """Add a literal and return its placeholder."""
        self.literals.append(literal)
        return placeholder(len(self.literals))

    def protect(self, text: str) -> str:
        """Replace every quoted literal in `text` with a placeholder."""
        return _LITERAL_RE.sub(lambda m: self.store(m.group(0)), text)

    def restore(self, text: str) -> str:
        """Replace every placeholder with its original literal."""
        return PLACEHOLDER_RE.sub(lambda m: self.literals[int(m.group(1)) - 1], text)

    def literal(self, token: str) -> str:
        """Return the literal behind a single placeholder token."""
        match = PLACEHOLDER_RE.fullmatch(token)
        if match is None:
            raise KeyError(f"Not a quote placeholder: {token!r}")
        return self.literals[int(match.group(1)) - 1]


def placeholder(index: int) -> str:
    """Placeholder for the 1-based vault entry `index`."""
    return f"{QUOTE_OPEN}{index}{QUOTE_CLOSE}"


def unquote(literal: str) -> str:
    """Strip the surrounding quote characters of a literal."""
    if len(literal) >= 2 and literal[0] in "'\"" and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal
