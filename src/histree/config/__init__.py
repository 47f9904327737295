"""
histree.config - Configuration loading and defaults
"""

from histree.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from histree.config.loader import (
    find_config_file,
    get_value,
    load_config,
    merge_configs,
    parse_toml_document,
    parse_value,
)

__all__ = [
    "load_config",
    "find_config_file",
    "merge_configs",
    "parse_toml_document",
    "get_value",
    "parse_value",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
]
