"""
Small text helpers shared by the conversion passes.

None of these know anything about pscss syntax. They only deal with
newlines, offsets and balanced delimiters.
"""

import re
from typing import List


_NEWLINES_RE = re.compile(r"\r\n|\r")

# Separator used for mixin parameters, mixin arguments and variable lists
LIST_SEPARATOR_RE = re.compile(r"\s*[\n,]+\s*")


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return _NEWLINES_RE.sub("\n", text)


def line_number(text: str, offset: int) -> int:
    """Estimate the 1-based line of `offset` by counting preceding newlines."""
    return text.count("\n", 0, max(offset, 0)) + 1


def split_list(text: str) -> List[str]:
    """Split a comma/newline separated list, dropping empty entries."""
    return [item for item in LIST_SEPARATOR_RE.split(text.strip()) if item]


def find_block_end(text: str, start: int, opener: str = "{", closer: str = "}") -> int:
    """
    Find the end of a balanced block.

    Args:
        text: Text to scan
        start: Index of the opening delimiter
        opener: Opening delimiter (may be more than one character)
        closer: Closing delimiter

    Returns:
        Index just past the matching closer, or -1 when the block is
        never closed.
    """
    depth = 0
    pos = start
    while pos < len(text):
        if text.startswith(opener, pos):
            depth += 1
            pos += len(opener)
        elif text.startswith(closer, pos):
            depth -= 1
            pos += len(closer)
            if depth == 0:
                return pos
        else:
            pos += 1
    return -1


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on `separator` outside of parentheses and brackets."""
    parts = []
    depth = 0
    current = []
    for char in text:
        if char in "([":
            depth += 1
        elif char in ")]" and depth > 0:
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [" ".join(part.split()) for part in parts if part.strip()]
