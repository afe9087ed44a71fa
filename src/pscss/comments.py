"""
Comment Stripper.

Must run after quote protection so comment-like sequences inside string
literals are never touched.
"""

import re

from pscss.textutils import find_block_end


_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")


def strip_comments(text: str, allow_nested: bool = False) -> str:
    """
    Remove block and line comments.

    Args:
        text: Quote-protected pscss text
        allow_nested: Track `/*` depth so `/* a /* b */ c */` is removed as a
            whole. By default the first `*/` closes the comment.

    Returns:
        Text without comments
    """
    if allow_nested:
        text = _strip_nested_block_comments(text)
    else:
        text = _BLOCK_COMMENT_RE.sub("", text)
    return _LINE_COMMENT_RE.sub("", text)


def _strip_nested_block_comments(text: str) -> str:
    pieces = []
    pos = 0
    while True:
        start = text.find("/*", pos)
        if start < 0:
            pieces.append(text[pos:])
            return "".join(pieces)
        pieces.append(text[pos:start])
        end = find_block_end(text, start, "/*", "*/")
        if end < 0:
            # unterminated, runs to the end of the text
            return "".join(pieces)
        pos = end
