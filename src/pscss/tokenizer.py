"""Tokenizer: cuts text into statements and `;`, `{`, `}` delimiters."""

import re
from collections import deque
from typing import Deque


_TOKEN_RE = re.compile(r"([\s\S]*?)([;{}])")


def tokenize(text: str) -> Deque[str]:
    """
    Split `text` into a queue of tokens.

    Example:
        "a { color: red; }" -> ["a", "{", "color: red", ";", "}"]

    Text after the last delimiter is kept as a final token.
    """
    tokens: Deque[str] = deque()
    end = 0
    for match in _TOKEN_RE.finditer(text):
        statement = match.group(1).strip()
        if statement:
            tokens.append(statement)
        tokens.append(match.group(2))
        end = match.end()

    remainder = text[end:].strip()
    if remainder:
        tokens.append(remainder)
    return tokens
