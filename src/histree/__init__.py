"""
histree - Branching undo/redo history engine

Every change to an application's model goes through a reversible
operation, and every operation ever applied stays in a navigable tree:
undo steps back, and redo can resume any branch explored before, not
just the most recent one.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("histree")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from histree.history import (
    INIT,
    DedupPolicy,
    Do,
    History,
    Operation,
    Options,
    Redo,
    Undo,
    goto,
    init,
    operation,
    options,
    perform,
    redo,
    reseed,
    step,
    undo,
)

__all__ = [
    "__version__",
    "INIT",
    "DedupPolicy",
    "Do",
    "History",
    "Operation",
    "Options",
    "Redo",
    "Undo",
    "goto",
    "init",
    "operation",
    "options",
    "perform",
    "redo",
    "reseed",
    "step",
    "undo",
]
