"""
Serialization helpers for pscss objects (Mixin, Rule, ConversionContext).

Snapshots of the mixin table, the variable table and rule trees as plain
dicts, JSON or YAML. Useful to inspect what a conversion collected, or to
compare rule trees in tests. Mixins and rule trees round-trip losslessly;
context snapshots are one-way (they hold no loader or plugins).
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from pscss.config import options_to_dict
from pscss.context import ConversionContext
from pscss.model import Mixin, MixinParameter, Rule, Selector


def mixin_to_dict(m: Mixin) -> Dict[str, Any]:
    return {
        "name": m.name,
        "parameters": [{"name": p.name, "default": p.default} for p in m.parameters],
        "body": m.body,
    }


def mixin_from_dict(d: Dict[str, Any]) -> Mixin:
    return Mixin(
        name=d["name"],
        parameters=[MixinParameter(p["name"], p.get("default")) for p in d.get("parameters", [])],
        body=d.get("body", ""),
    )


def selector_to_dict(s: Selector) -> Dict[str, Any]:
    return {"text": s.text, "media": s.media}


def selector_from_dict(d: Dict[str, Any]) -> Selector:
    return Selector(text=d.get("text", ""), media=d.get("media", ""))


def rule_to_dict(r: Rule) -> Dict[str, Any]:
    return {
        "selectors": [selector_to_dict(s) for s in r.selectors],
        "declarations": list(r.declarations),
        "children": [rule_to_dict(c) for c in r.children],
    }


def rule_from_dict(d: Dict[str, Any]) -> Rule:
    return Rule(
        selectors=[selector_from_dict(s) for s in d.get("selectors", [])],
        declarations=list(d.get("declarations", [])),
        children=[rule_from_dict(c) for c in d.get("children", [])],
    )


def context_to_dict(c: ConversionContext) -> Dict[str, Any]:
    """Snapshot of what a conversion collected. Quote placeholders are restored."""
    return {
        "base_path": c.base_path,
        "options": options_to_dict(c.options),
        "variables": {name: c.quotes.restore(value) for name, value in c.variables.items()},
        "mixins": {key: {**mixin_to_dict(m), "body": c.quotes.restore(m.body)} for key, m in c.mixins.items()},
        "quotes": list(c.quotes.literals),
        "diagnostics": [str(d) for d in c.diagnostics],
    }


def rule_to_json(r: Rule) -> str:
    return json.dumps(rule_to_dict(r), sort_keys=True)


def rule_from_json(s: str) -> Rule:
    return rule_from_dict(json.loads(s))


def rule_to_yaml(r: Rule) -> str:
    return yaml.safe_dump(rule_to_dict(r))


def rule_from_yaml(s: str) -> Rule:
    return rule_from_dict(yaml.safe_load(s))


def context_to_json(c: ConversionContext) -> str:
    return json.dumps(context_to_dict(c), sort_keys=True)


def context_to_yaml(c: ConversionContext) -> str:
    return yaml.safe_dump(context_to_dict(c))
