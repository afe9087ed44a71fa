#!/usr/bin/env python3
"""
Complete Pipeline Demo: pscss -> CSS

Shows the full workflow on the bundled example sheet:
1. Inline imports through an in-memory loader
2. Run every text pass, printing the intermediate text
3. Flatten the rule tree to CSS
4. Report what the conversion collected (variables, mixins, diagnostics)
"""

import warnings

from pscss.converter import PIPELINE, create_context
from pscss.examples import EXAMPLE_BASE_PATH, EXAMPLE_SHEET, build_example_loader
from pscss.imports import ResourceCache
from pscss.rules import flatten_rules
from pscss.serialization import context_to_yaml
from pscss.tokenizer import tokenize


def main():
    context = create_context(
        base_path=EXAMPLE_BASE_PATH,
        loader=build_example_loader(),
        cache=ResourceCache(),
    )

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: pscss -> CSS")
    print("=" * 80)

    # =========================================================================
    # STEP 1-2: Text passes
    # =========================================================================
    text = EXAMPLE_SHEET
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        for index, step in enumerate(PIPELINE, start=1):
            text = step(text, context) or ""
            name = getattr(step, "__name__", "<lambda>")
            print(f"\n{index}. {name}")
            print("-" * 80)
            print(context.quotes.restore(text).strip())

    # =========================================================================
    # STEP 3: Flatten
    # =========================================================================
    tokens = tokenize(text)
    print(f"\nTOKENS: {len(tokens)}")
    css = context.quotes.restore(flatten_rules(tokens))
    print("\nCSS OUTPUT:")
    print("-" * 80)
    print(css)

    # =========================================================================
    # STEP 4: Context snapshot
    # =========================================================================
    print("CONTEXT:")
    print("-" * 80)
    print(context_to_yaml(context))


if __name__ == "__main__":
    main()
