"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from rustdoc_md.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "title": "Crate Documentation",
    "code_lang": "rust",
    "workers": 1,
    "sections": {
        "attributes": True,
        "reexports": True,
        "blanket_impls": True,
    },
    "tables": {
        "first_line_only": True,
    },
}


class ConfigError(ValueError):
    """Raised when a configuration file is not a valid YAML mapping."""


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                msg = f"{p}: invalid YAML: {e}"
                raise ConfigError(msg) from e
            if not isinstance(user_config, dict):
                msg = f"{p}: configuration must be a mapping"
                raise ConfigError(msg)
            config = deep_merge(config, user_config)
    return config


def resolve_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Fill in defaults for a partial (or missing) in-memory configuration."""
    if config is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    return deep_merge(copy.deepcopy(DEFAULT_CONFIG), config)
