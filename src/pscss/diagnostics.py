"""
Diagnostics raised while converting pscss.

Conversion never fails on malformed input. Problems that were repaired or
skipped are reported through the standard `warnings` machinery using the
`PscssWarning` category, and recorded on the conversion context so callers
can inspect them without installing a warnings filter.

Diagnostics are advisory only. They never change the produced CSS.
"""

from dataclasses import dataclass
from typing import Optional


class PscssWarning(UserWarning):
    """Category for recoverable pscss conversion problems."""
    pass


@dataclass
class Diagnostic:
    """
    A single conversion diagnostic.

    Properties:
        message: What went wrong (e.g. 'unknown @include mixin: "m"')
        source: Base path of the converted resource, or "pscss"
        line: Estimated 1-based line number, if known
        construct: The offending text fragment, if any
    """

    message: str
    source: str = "pscss"
    line: Optional[int] = None
    construct: Optional[str] = None

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.source}: {self.message}"
        return f"{self.source}:{self.line}: {self.message}"
