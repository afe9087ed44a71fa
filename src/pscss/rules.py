"""
Rule Tree Flattener.

Turns the token queue into standard, un-nested CSS:

    a {                         a { color: red; }
      color: red;               a b { color: blue; }
      b { color: blue; }   ->   a:hover { color: green; }
      &:hover { color: green; } @media (min-width: 1px) { a { width: 1px; } }
      @media (min-width: 1px) { width: 1px; }
    }

Works in three steps:
    1. build_rule_tree: recursive descent over the token queue
    2. flatten_rule_tree: pre-order walk, parents before children
    3. render_rules: CSS text, dropping rules without selectors or declarations

Selector combination:
    - `@media cond` child: the parent selector is kept and the condition is
      promoted to wrap it; nested conditions are joined with "and"
    - child containing `&`: every `&` is replaced by the parent selector
    - otherwise: descendant combination `parent child`
"""

import re
from typing import Deque, Dict, List, Optional

from pscss.model import Rule, Selector
from pscss.textutils import split_top_level


MEDIA_RE = re.compile(r"^@media\b\s*")
PARENT_REFERENCE = "&"

_CUSTOM_PROPERTY_RE = re.compile(r"^(\$|--|var\()|^[^:]+:\s*var\(")


def is_media_query(selector: str) -> bool:
    return bool(MEDIA_RE.match(selector))


def combine_selectors(parent: Selector, child: str) -> Selector:
    """
    Combine a parent selector with one nested selector fragment.

    Args:
        parent: Selector of the enclosing block
        child: One fragment of the nested block's selector list

    Returns:
        The combined Selector
    """
    if is_media_query(child):
        condition = MEDIA_RE.sub("", child, count=1).strip()
        if parent.media:
            condition = f"{parent.media} and {condition}"
        return Selector(text=parent.text, media=condition)

    if PARENT_REFERENCE in child:
        text = child.replace(PARENT_REFERENCE, parent.text)
    else:
        text = f"{parent.text} {child}"
    return Selector(text=text.strip(), media=parent.media)


def build_rule_tree(tokens: Deque[str], root_selector: Optional[str] = None) -> Rule:
    """
    Consume `tokens` and build the rule tree.

    Args:
        tokens: Token queue from the tokenizer (consumed destructively)
        root_selector: Selector wrapping top-level declarations; None for
            the implicit document root

    Returns:
        The root Rule
    """
    root = Rule(selectors=[Selector(text=root_selector or "")])
    _parse_block(tokens, root)
    return root


def _parse_block(tokens: Deque[str], rule: Rule) -> None:
    while tokens:
        token = tokens.popleft()
        if token == "}":
            return
        if token == ";":
            continue

        if token == "{":
            # anonymous block, keeps the enclosing selectors
            child = Rule(selectors=list(rule.selectors))
        elif tokens and tokens[0] == "{":
            tokens.popleft()
            child = Rule(selectors=[
                combine_selectors(parent, fragment)
                for fragment in split_top_level(token)
                for parent in rule.selectors
            ])
        else:
            rule.declarations.append(" ".join(token.split()) + ";")
            continue

        rule.children.append(child)
        _parse_block(tokens, child)


def flatten_rule_tree(tree: Rule) -> List[Rule]:
    """Return the rules of `tree` in pre-order, without children."""
    rules = [Rule(selectors=tree.selectors, declarations=tree.declarations)]
    for child in tree.children:
        rules.extend(flatten_rule_tree(child))
    return rules


def is_custom_property(declaration: str) -> bool:
    """True for `--x: ...`, `$x: ...` and declarations whose value is a var()."""
    return bool(_CUSTOM_PROPERTY_RE.match(declaration))


def render_rules(rules: List[Rule], implicit_root: bool = True) -> str:
    """
    Render flattened rules as CSS text.

    Args:
        rules: Flattened rules, the first one being the root
        implicit_root: The first rule is the implicit document root, whose
            custom properties go to `:root` and other declarations stay bare

    Returns:
        CSS text, one rule per line
    """
    lines: List[str] = []
    for index, rule in enumerate(rules):
        if not rule.selectors or not rule.declarations:
            continue
        if index == 0 and implicit_root:
            lines.extend(_render_root(rule))
        else:
            lines.extend(_render_rule(rule))
    return "\n".join(lines) + "\n" if lines else ""


def _render_root(rule: Rule) -> List[str]:
    custom = [d for d in rule.declarations if is_custom_property(d)]
    lines = [d for d in rule.declarations if not is_custom_property(d)]
    if custom:
        lines.append(f":root {{ {' '.join(custom)} }}")
    return lines


def _render_rule(rule: Rule) -> List[str]:
    body = " ".join(rule.declarations)

    by_media: Dict[str, List[str]] = {}
    for selector in rule.selectors:
        texts = by_media.setdefault(selector.media, [])
        if selector.text and selector.text not in texts:
            texts.append(selector.text)

    lines = []
    for media, texts in by_media.items():
        block = f"{', '.join(texts)} {{ {body} }}" if texts else body
        lines.append(f"@media {media} {{ {block} }}" if media else block)
    return lines


def flatten_rules(tokens: Deque[str], root_selector: Optional[str] = None) -> str:
    """Build, flatten and render the rule tree for `tokens`."""
    tree = build_rule_tree(tokens, root_selector)
    return render_rules(flatten_rule_tree(tree), implicit_root=not root_selector)
