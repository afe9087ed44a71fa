"""
Core pscss Model Objects

Plain data classes shared by the conversion passes:
    - ConversionOptions (the flat options bag)
    - MixinParameter / Mixin (entries of the mixin table)
    - Selector (a selector with its promoted media condition)
    - Rule (a node of the transient rule tree)

ARCHITECTURAL RULE:
    These objects hold structure only.
    Parsing lives in the pass modules, rendering lives in rules.py.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ConversionOptions:
    """
    Flags recognized by the converter.

    Properties:
        nested_comments:
            Treat `/* ... */` as balanced pairs so an outer block comment is
            only closed once every inner `/*` has been closed.
            Known as the `nc` flag.
    """

    nested_comments: bool = False


@dataclass(frozen=True)
class MixinParameter:
    """
    A formal mixin parameter.

    Examples:
        - `$x`          -> MixinParameter("$x")
        - `$x: 1px`     -> MixinParameter("$x", "1px")
        - `$rest...`    -> MixinParameter("$rest...")

    The name is kept exactly as written because binding is textual:
    every occurrence of the name in the body is replaced.
    """

    name: str
    default: Optional[str] = None

    @property
    def is_spread(self) -> bool:
        """True for a trailing `$name...` parameter."""
        return self.name.endswith("...")

    @property
    def placeholder(self) -> str:
        """The text substituted inside the body (spread marker removed)."""
        return self.name[:-3] if self.is_spread else self.name


@dataclass(frozen=True)
class Mixin:
    """
    A registered `@mixin` definition.

    Properties:
        name: Name as declared (the table key is the dash-normalized form)
        parameters: Ordered formal parameters
        body: Raw, unexpanded body text

    IMPORTANT:
        A mixin is immutable once registered.
        A later definition with a colliding name is ignored.
    """

    name: str
    parameters: List[MixinParameter] = field(default_factory=list)
    body: str = ""


@dataclass(frozen=True)
class Selector:
    """
    A fully combined selector.

    Media conditions are kept apart from the selector text so that a nested
    `@media` can be promoted to wrap the rule instead of being nested as a
    descendant selector.

    Examples:
        - `a b`                                -> Selector("a b")
        - `a { @media (min-width: 1px) {} }`   -> Selector("a", "(min-width: 1px)")

    Properties:
        text: Selector text; empty for the implicit document root
        media: Media condition without the `@media` keyword, or empty
    """

    text: str = ""
    media: str = ""

    def __str__(self) -> str:
        if self.media:
            return f"@media {self.media} {{ {self.text} }}" if self.text else f"@media {self.media}"
        return self.text


@dataclass
class Rule:
    """
    A node of the rule tree.

    Properties:
        selectors: Combined selectors of this block
        declarations: Declarations in source order, each ending with ';'
        children: Nested blocks in source order

    The tree is transient: built from the token queue and rendered in the
    same conversion.
    """

    selectors: List[Selector] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)
    children: List["Rule"] = field(default_factory=list)
