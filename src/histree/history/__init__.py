"""History module - Branching operation-history engine.

Exports:
- Operation: Labelled forward/inverse transform pair
- ROOT: Sentinel payload of the root node
- HistoryNode: A recorded point in history
- Edge: Predecessor -> successor link
- HistoryGraph: Append-only tree storage
- History: Engine state (graph, cursor, model, next id)
- Options: Snapshot of available undo/redo kinds
- DedupPolicy: What a dedup hit does with the reused node
- init, perform, undo, redo, options, reseed, goto: Engine operations
- Do, Undo, Redo, INIT, step, replay: Intent vocabulary
"""

from histree.history.engine import (
    DedupPolicy,
    History,
    Options,
    StaleOperationError,
    goto,
    init,
    options,
    perform,
    redo,
    reseed,
    undo,
)
from histree.history.graph import ROOT_ID, HistoryGraph, HistoryIntegrityError
from histree.history.HistoryNode import HistoryNode
from histree.history.intents import INIT, Do, Init, Intent, Redo, Undo, replay, step
from histree.history.operation import ROOT, Operation, Root, kind_label, operation
from histree.history.relations import Edge

__all__ = [
    "ROOT",
    "ROOT_ID",
    "Root",
    "Operation",
    "operation",
    "kind_label",
    "HistoryNode",
    "Edge",
    "HistoryGraph",
    "HistoryIntegrityError",
    "History",
    "Options",
    "DedupPolicy",
    "StaleOperationError",
    "init",
    "perform",
    "undo",
    "redo",
    "options",
    "reseed",
    "goto",
    "INIT",
    "Init",
    "Do",
    "Undo",
    "Redo",
    "Intent",
    "step",
    "replay",
]
