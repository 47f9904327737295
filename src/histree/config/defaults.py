"""
histree.config.defaults - Default configuration values
"""

from typing import Any, Dict

CONFIG_FILENAME = ".histree.toml"

ENV_PREFIX = "HISTREE_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "history": {
        # keep-stored | replace | strict
        "dedup": "keep-stored",
    },
    "counter": {
        "start": 0,
    },
    "output": {
        # text | json | markdown | csv
        "format": "text",
    },
}
