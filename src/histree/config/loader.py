"""
histree.config.loader - Configuration discovery, loading and merging.

Configuration comes from three layers, later layers winning:
1. DEFAULT_CONFIG
2. The nearest .histree.toml (searched upward from the working directory)
3. HISTREE_<SECTION>_<KEY> environment variables
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.toml_document import TOMLDocument

from histree.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX


def find_config_file(start: Path) -> Optional[Path]:
    """Find the nearest config file in ``start`` or its parents.

    Args:
        start: Directory to begin the search from.

    Returns:
        Path to the config file, or None if none exists.
    """
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def parse_toml_document(path: Path) -> TOMLDocument:
    """Parse a TOML file into a format-preserving document.

    Raises:
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
    """
    return tomlkit.parse(path.read_text(encoding="utf-8"))


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        path: Config file to read. When None, only defaults and
            environment overrides apply.

    Returns:
        Plain dict configuration.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        config = merge_configs(config, parse_toml_document(path).unwrap())
    return _apply_env_overrides(config)


def parse_value(value: str) -> Any:
    """Convert an environment string to a typed value.

    ``true``/``false`` become booleans, integers become ints, and strings
    starting with ``[`` or ``{`` are parsed as JSON. Anything else
    (including malformed JSON) is returned unchanged.
    """
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    stripped = value.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply HISTREE_<SECTION>_<KEY> environment variables to ``config``.

    ``HISTREE_HISTORY_DEDUP=strict`` sets ``config["history"]["dedup"]``.
    Variables without a key part are ignored.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not key:
            continue
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = parse_value(raw)
    return config


def get_value(config: Dict[str, Any], dotted_key: str) -> Any:
    """Look up ``section.key`` in a config dict.

    Raises:
        KeyError: If any part of the key is missing.
    """
    value: Any = config
    for part in dotted_key.split("."):
        if not isinstance(value, dict) or part not in value:
            raise KeyError(dotted_key)
        value = value[part]
    return value
