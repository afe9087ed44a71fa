"""
Options loading.

The converter recognizes a flat bag of flags. They can be given as a dict
(e.g. attributes collected by an embedding page) or as a YAML document:

    # pscss.yaml
    nc: true
"""

from typing import Any, Dict, Optional

import yaml

from pscss.model import ConversionOptions


# flag name -> ConversionOptions field
OPTION_FLAGS = {
    "nc": "nested_comments",
    "nested_comments": "nested_comments",
}


class ConfigError(Exception):
    """Raised when an options bag contains unknown or malformed entries."""
    pass


def _flag(value: Any) -> bool:
    # An attribute without value (nc="" or nc: ) switches the flag on
    if value is None or value == "":
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "off")
    return bool(value)


def options_from_dict(d: Optional[Dict[str, Any]]) -> ConversionOptions:
    """
    Build ConversionOptions from a flat mapping of flags.

    Raises:
        ConfigError: If a key is not a recognized flag
    """
    values = {}
    for key, value in (d or {}).items():
        field_name = OPTION_FLAGS.get(str(key).replace("-", "_"))
        if field_name is None:
            raise ConfigError(f"Unknown pscss option: {key!r}")
        values[field_name] = _flag(value)
    return ConversionOptions(**values)


def options_to_dict(options: ConversionOptions) -> Dict[str, Any]:
    return {"nc": options.nested_comments}


def options_from_yaml(s: str) -> ConversionOptions:
    d = yaml.safe_load(s)
    if d is not None and not isinstance(d, dict):
        raise ConfigError(f"pscss options must be a mapping, got {type(d).__name__}")
    return options_from_dict(d)


def options_to_yaml(options: ConversionOptions) -> str:
    return yaml.safe_dump(options_to_dict(options))


def load_options(path: str) -> ConversionOptions:
    """
    Read options from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the content is not a valid options mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"pscss options file not found: {path}")

    try:
        return options_from_yaml(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
