"""
histree.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "counter_cmd",
]
