"""
Example pscss sheet for demos and tests.

Uses every feature of the converter: comments, partial and extension
imports, variables, nested properties, nesting with `&`, mixins with
defaults, spread parameters and content blocks, and media promotion.
"""
from pscss.imports import DictLoader


EXAMPLE_BASE_PATH = "styles/main.pscss"

EXAMPLE_PARTIALS = {
    "styles/colors.pscss": """\
$accent: #0a6;
$muted: #777;
""",
    "styles/mixins.pscss": """\
@mixin rounded($radius: 4px) {
  border-radius: $radius;
}

@mixin card($padding, $shadow...) {
  padding: $padding;
  box-shadow: $shadow;
  @include rounded();
  @content;
}
""",
}

EXAMPLE_SHEET = """\
// Example pscss sheet
@import "_colors.pscss";
@import "mixins.pscss";
@import "print.css";

/* page layout */
body {
  margin: 0;
  font: {
    family: "Helvetica Neue", sans-serif;
    size: 14px;
  }

  a {
    color: $accent;
    &:hover { color: $muted; }
  }

  .card {
    @include card(8px, 0 1px 2px #000) {
      background: white;
    }
  }

  @media (max-width: 600px) {
    margin: 4px;
  }
}
"""

EXAMPLE_CSS = """\
@import "print.css";
:root { --accent: #0a6; --muted: #777; }
body { margin: 0; font-family: "Helvetica Neue", sans-serif; font-size: 14px; }
body a { color: var(--accent); }
body a:hover { color: var(--muted); }
body .card { padding: 8px; box-shadow: 0 1px 2px #000; border-radius: 4px; background: white; }
@media (max-width: 600px) { body { margin: 4px; } }
"""


def build_example_loader() -> DictLoader:
    """Loader serving the example sheet and its partials."""
    resources = dict(EXAMPLE_PARTIALS)
    resources[EXAMPLE_BASE_PATH] = EXAMPLE_SHEET
    return DictLoader(resources)
