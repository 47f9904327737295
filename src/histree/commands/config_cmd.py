"""
histree.commands.config_cmd - Inspect and edit .histree.toml.

Subcommands:
- path: Show which config file is in effect
- show: Print the merged configuration
- get KEY: Print one value (dotted key, e.g. history.dedup)
- set KEY VALUE: Write one value, preserving file formatting
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit

from histree.config import (
    CONFIG_FILENAME,
    find_config_file,
    get_value,
    load_config,
    parse_toml_document,
    parse_value,
)
from histree.history import DedupPolicy


def resolve_config_path(args: argparse.Namespace) -> Optional[Path]:
    """Return the --config path if given, else the nearest config file."""
    if getattr(args, "config", None):
        return args.config
    return find_config_file(Path.cwd())


def load_configuration(args: argparse.Namespace) -> Dict[str, Any]:
    """Load configuration from file (if any) merged over the defaults."""
    config_path = resolve_config_path(args)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return load_config(config_path)


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)

    if action == "path":
        return _cmd_path(args)
    elif action == "show":
        return _cmd_show(args)
    elif action == "get":
        return _cmd_get(args)
    elif action == "set":
        return _cmd_set(args)

    print("Usage: histree config {path,show,get,set}", file=sys.stderr)
    return 1


def _cmd_path(args: argparse.Namespace) -> int:
    config_path = resolve_config_path(args)
    if config_path is None:
        print(f"No {CONFIG_FILENAME} found (using defaults)")
        return 1
    print(config_path)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    config = load_configuration(args)
    if args.json:
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0


def _cmd_get(args: argparse.Namespace) -> int:
    config = load_configuration(args)
    try:
        value = get_value(config, args.key)
    except KeyError:
        print(f"Unknown config key: {args.key}", file=sys.stderr)
        return 1

    if isinstance(value, str):
        print(value)
    else:
        print(json.dumps(value))
    return 0


def _cmd_set(args: argparse.Namespace) -> int:
    section, _, key = args.key.partition(".")
    if not section or not key or "." in key:
        print(f"Config key must look like SECTION.KEY, got: {args.key}", file=sys.stderr)
        return 1

    value = parse_value(args.value)
    if (section, key) == ("history", "dedup"):
        value = DedupPolicy.from_name(value).value

    config_path = resolve_config_path(args) or Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        doc = parse_toml_document(config_path)
    else:
        doc = tomlkit.document()

    if section not in doc:
        doc.add(section, tomlkit.table())
    doc[section][key] = value

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    print(f"Set {section}.{key} = {value!r} in {config_path}")
    return 0
