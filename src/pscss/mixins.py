"""
Mixin Registry & Expander.

Registration:
    @mixin button($color, $size: 1em) { ... }

    Definitions are collected into the mixin table (keyed by the
    dash-normalized name) and removed from the text.

Expansion:
    @include button(red);                   statement form
    @include frame(2px) { color: red; }     block form, fills @content

Argument binding is positional and textual. There is no arity check:
a missing argument takes the parameter default, or else the value bound
to the previous parameter.

Recursion is guarded by the set of mixins currently being expanded. The
set starts empty for every outermost @include and is shared by the
includes nested inside it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Dict, List, Optional, Set

from pscss.model import Mixin, MixinParameter
from pscss.textutils import find_block_end, line_number, split_list

if TYPE_CHECKING:
    from pscss.context import ConversionContext


_MIXIN_RE = re.compile(r"@mixin\s+([\w-]+)(?:\s*\(([^)]*)\))?\s*{")
_INCLUDE_RE = re.compile(r"@include\s+([\w-]+)(?:\s*\(([^)]*)\))?\s*(;|{|(?=}))")
_CONTENT_RE = re.compile(r"@content\s*;?")

SPREAD = "..."


def normalize_name(name: str) -> str:
    """Mixin names are compared with underscores read as dashes."""
    return name.replace("_", "-")


def parse_parameters(params: Optional[str]) -> List[MixinParameter]:
    """
    Parse a mixin parameter list.

    Example:
        "$a, $b: 2px" -> [MixinParameter("$a"), MixinParameter("$b", "2px")]
    """
    parameters = []
    for param in split_list(params or ""):
        name, _, default = param.partition(":")
        parameters.append(MixinParameter(name.strip(), default.strip() or None))
    return parameters


def register_mixins(text: str, context: ConversionContext) -> str:
    """
    Move every `@mixin` definition from `text` into the mixin table.

    Returns:
        Text with the definitions removed
    """
    pos = 0
    while True:
        match = _MIXIN_RE.search(text, pos)
        if match is None:
            return text

        end = find_block_end(text, match.end() - 1)
        if end < 0:
            body, end = text[match.end():], len(text)
        else:
            body = text[match.end():end - 1]

        name = match.group(1)
        key = normalize_name(name)
        if key in context.mixins:
            context.warn(
                f'duplicate @mixin "{name}"',
                line=line_number(text, match.start()),
                construct=match.group(0),
            )
        else:
            context.mixins[key] = Mixin(name=name, parameters=parse_parameters(match.group(2)), body=body)

        text = text[:match.start()] + text[end:]
        pos = match.start()


def expand_includes(text: str, context: ConversionContext, guard: Optional[Set[str]] = None) -> str:
    """
    Replace every `@include` in `text` with the expanded mixin body.

    Args:
        text: Text containing includes
        context: Conversion context (mixin and variable tables are used)
        guard: Names of mixins currently being expanded; None at top level

    Returns:
        Text with all includes expanded (unknown or recursive ones removed)
    """
    pos = 0
    while True:
        match = _INCLUDE_RE.search(text, pos)
        if match is None:
            return text

        end = match.end()
        content = None
        if match.group(3) == "{":
            block_end = find_block_end(text, end - 1)
            if block_end < 0:
                content, end = text[end:], len(text)
            else:
                content, end = text[end:block_end - 1], block_end

        replacement = _expand(
            match.group(1),
            match.group(2),
            content,
            context,
            set() if guard is None else guard,
            line_number(text, match.start()) if guard is None else None,
        )
        text = text[:match.start()] + replacement + text[end:]
        pos = match.start() + len(replacement)


def _expand(name: str, args: Optional[str], content: Optional[str],
            context: ConversionContext, guard: Set[str], line: Optional[int]) -> str:
    key = normalize_name(name)
    if key in guard:
        context.warn(f'endless recursion in @mixin "{name}"', line=line, construct=f"@include {name}")
        return ""

    mixin = context.mixins.get(key)
    if mixin is None:
        context.warn(f'unknown @include mixin: "{name}"', line=line, construct=f"@include {name}")
        return ""

    # content belongs to the caller, so it is expanded before entering the mixin
    content = expand_includes(content, context, guard) if content else ""

    guard.add(key)
    try:
        body = expand_includes(mixin.body, context, guard)
    finally:
        guard.discard(key)

    body = bind_arguments(body, mixin.parameters, actual_arguments(args, context))
    return _CONTENT_RE.sub(lambda _: content, body)


def actual_arguments(args: Optional[str], context: ConversionContext) -> List[str]:
    """
    Split include arguments, splicing in `$list...` variables.

    `$list...` is replaced by the items of the (comma/newline separated)
    value of variable `list`.
    """
    arguments: List[str] = []
    for arg in split_list(args or ""):
        if arg.endswith(SPREAD):
            value = context.variables.get(arg[:-len(SPREAD)].lstrip("$"), "")
            arguments.extend(split_list(value))
        else:
            arguments.append(arg)
    return arguments


def bind_arguments(body: str, parameters: List[MixinParameter], arguments: List[str]) -> str:
    """
    Substitute parameter names in `body` with their bound values.

    A parameter takes its argument, else its default, else the value of the
    previous parameter. A spread parameter takes all remaining arguments.
    """
    bindings: Dict[str, str] = {}
    last = "0"
    for index, parameter in enumerate(parameters):
        if parameter.is_spread:
            actual = ", ".join(arguments[index:])
        else:
            actual = arguments[index] if index < len(arguments) else ""
        last = actual or parameter.default or last
        bindings[parameter.placeholder] = last

    if not bindings:
        return body

    names = sorted(bindings, key=len, reverse=True)
    pattern = re.compile(r"(?<!\w)(?:" + "|".join(re.escape(n) for n in names) + r")(?![\w-])")
    return pattern.sub(lambda m: bindings[m.group(0)], body)
