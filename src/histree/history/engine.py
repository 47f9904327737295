"""History Engine - Perform, undo and redo over a branching history.

The engine is a set of pure functions from a History value to a new
History value. Successive values share an append-only node store, but each
value reads it through ``History.graph``, a snapshot holding only the ids
below its own ``next_id``. Appending from a value that is not the newest in
its store, or overwriting a stored operation, forks the store first, so no
step is ever visible through another value.

Example:
    >>> h = init(1)
    >>> h = perform(operation("inc", lambda m: m + 1, lambda m: m - 1), h)
    >>> h.model, h.cursor
    (2, 1)
    >>> h = undo(h)
    >>> h.model, options(h).redo
    (1, ('inc',))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from histree.history.graph import ROOT_ID, HistoryGraph, HistoryIntegrityError
from histree.history.HistoryNode import HistoryNode
from histree.history.operation import Operation

K = TypeVar("K")
M = TypeVar("M")

logger = logging.getLogger(__name__)


class DedupPolicy(Enum):
    """What a dedup hit does with the node it reuses.

    - KEEP_STORED: Keep the stored operation; only the supplied forward is
      applied to the model.
    - REPLACE: Overwrite the stored operation with the supplied one.
    - STRICT: Raise StaleOperationError when the supplied operation's
      captured ``data`` differs from the stored one.
    """

    KEEP_STORED = "keep-stored"
    REPLACE = "replace"
    STRICT = "strict"

    @classmethod
    def from_name(cls, name: str | DedupPolicy) -> DedupPolicy:
        """Resolve a policy from its config name (e.g. "keep-stored").

        Raises:
            ValueError: If ``name`` is not a known policy.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower().replace("_", "-")
        for policy in cls:
            if policy.value == normalized:
                return policy
        valid = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown dedup policy '{name}' (expected one of: {valid})")


class StaleOperationError(ValueError):
    """A same-kind operation captured different data than the stored one."""

    def __init__(self, node: HistoryNode, supplied: Operation) -> None:
        self.node = node
        self.supplied = supplied
        stored = node.operation
        super().__init__(
            f"Operation {supplied} does not match {stored} stored at node #{node.id}"
        )


@dataclass(frozen=True)
class Options(Generic[K]):
    """Snapshot of what undo and redo can currently do.

    Attributes:
        undo: Kind that undo would revert, or None at the root.
        redo: Kinds redo can select, in edge-creation order.
    """

    undo: K | None = None
    redo: tuple[K, ...] = ()


@dataclass(frozen=True)
class History(Generic[K, M]):
    """The engine's full state.

    Attributes:
        store: Append-only node store, shared between successive values.
            Read it through ``graph``.
        cursor: Id of the node describing how ``model`` was reached.
        model: The current materialized model.
        next_id: Id the next created node will receive; ids at or above it
            belong to other values sharing the store.
        dedup: Policy applied on dedup hits.
    """

    store: HistoryGraph = field(repr=False)
    cursor: int
    model: M
    next_id: int
    dedup: DedupPolicy = DedupPolicy.KEEP_STORED

    @property
    def graph(self) -> HistoryGraph:
        """Read-only view of the history as this value recorded it."""
        return self.store.snapshot(self.next_id)

    def _writable_store(self) -> HistoryGraph:
        """The store to append to, forked if a newer value already grew it."""
        if self.store.next_free_id() == self.next_id:
            return self.store
        return self.store.fork(self.next_id)

    @property
    def current(self) -> HistoryNode:
        """The node at the cursor."""
        return self.graph.get(self.cursor)

    @property
    def at_root(self) -> bool:
        """True if the cursor is at the root node."""
        return self.cursor == ROOT_ID


def init(
    initial_model: M,
    dedup: DedupPolicy | str = DedupPolicy.KEEP_STORED,
) -> History[Any, M]:
    """Create a History containing only the root node.

    Args:
        initial_model: The starting model value.
        dedup: Dedup policy (member or config name).

    Returns:
        History with ``cursor == 0`` and ``next_id == 1``.
    """
    store = HistoryGraph()
    store.add_root()
    return History(
        store=store,
        cursor=ROOT_ID,
        model=initial_model,
        next_id=ROOT_ID + 1,
        dedup=DedupPolicy.from_name(dedup),
    )


def reseed(h: History[K, M]) -> History[K, M]:
    """Start a fresh History seeded with the current model."""
    logger.debug("Re-seeding history at model %r (%d nodes dropped)", h.model, len(h.graph))
    return init(h.model, dedup=h.dedup)


def options(h: History[K, M]) -> Options[K]:
    """Return the kinds undo and redo can currently act on. Pure."""
    return Options(
        undo=h.current.kind,
        redo=tuple(node.kind for node in h.graph.iter_futures(h.cursor)),
    )


def _futures_of_kind(h: History[K, M], kind: K) -> list[HistoryNode]:
    return [node for node in h.graph.iter_futures(h.cursor) if node.kind == kind]


def perform(op: Operation[K, M], h: History[K, M]) -> History[K, M]:
    """Apply ``op`` and record it in the history.

    If the cursor already has exactly one successor of ``op.kind``, the
    cursor moves there without creating a node; the model is updated with
    ``op.forward`` (the supplied one, not the stored one). What happens to
    the stored operation depends on ``h.dedup``. Otherwise a new node and
    edge are appended. Other branches are never touched.

    ``op.forward`` runs before anything is written, so if it raises, the
    history is left exactly as it was.

    Raises:
        StaleOperationError: Only under DedupPolicy.STRICT.
    """
    matches = _futures_of_kind(h, op.kind)

    if len(matches) == 1:
        target = matches[0]
        stored = target.operation
        if h.dedup is DedupPolicy.STRICT and stored is not None and stored.data != op.data:
            raise StaleOperationError(target, op)
        model = op.forward(h.model)
        store = h.store
        if h.dedup is DedupPolicy.REPLACE:
            store = h.store.fork(h.next_id)
            store.replace_payload(target.id, op)
        logger.debug("Dedup hit: %s reuses node #%d", op, target.id)
        return replace(h, store=store, cursor=target.id, model=model)

    model = op.forward(h.model)
    store = h._writable_store()
    node_id = h.next_id
    store.add_node(HistoryNode(id=node_id, payload=op), parent_id=h.cursor)
    logger.debug("Recorded %s as node #%d under #%d", op, node_id, h.cursor)
    return replace(h, store=store, cursor=node_id, model=model, next_id=node_id + 1)


def undo(h: History[K, M]) -> History[K, M]:
    """Revert the operation stored at the cursor and step to its parent.

    At the root this is a no-op and ``h`` is returned unchanged.

    Raises:
        HistoryIntegrityError: If the cursor does not have exactly one
            predecessor.
    """
    node = h.current
    op = node.operation
    if op is None:
        logger.debug("Undo at root: nothing to revert")
        return h

    model = op.inverse(h.model)
    past = list(h.graph.iter_past(node.id))
    if len(past) != 1:
        raise HistoryIntegrityError(
            f"Node #{node.id} has {len(past)} predecessors; expected exactly 1"
        )
    return replace(h, cursor=past[0].id, model=model)


def redo(kind: K, h: History[K, M]) -> History[K, M]:
    """Step into the cursor's successor of ``kind`` using its stored forward.

    Returns ``h`` unchanged unless exactly one successor matches.
    """
    matches = _futures_of_kind(h, kind)
    if len(matches) != 1:
        logger.debug("Redo %r: %d matching futures, nothing to do", kind, len(matches))
        return h

    target = matches[0]
    op = target.operation
    if op is None:
        raise HistoryIntegrityError(f"Successor node #{target.id} carries no operation")
    return replace(h, cursor=target.id, model=op.forward(h.model))


def goto(node_id: int, h: History[K, M]) -> History[K, M]:
    """Navigate to any recorded node through undo and redo steps.

    Undoes until the cursor lies on the target's root path, then redoes
    down that path selecting each step by the stored kind.

    Raises:
        KeyError: If ``node_id`` is not in the graph.
    """
    path = h.graph.path_from_root(node_id)
    on_path = set(path)

    while h.cursor not in on_path:
        h = undo(h)

    for step_id in path[path.index(h.cursor) + 1 :]:
        moved = redo(h.graph.get(step_id).kind, h)
        if moved.cursor != step_id:
            raise HistoryIntegrityError(
                f"Redo from #{h.cursor} did not reach #{step_id} on the way to #{node_id}"
            )
        h = moved
    return h


__all__ = [
    "DedupPolicy",
    "History",
    "Options",
    "StaleOperationError",
    "goto",
    "init",
    "options",
    "perform",
    "redo",
    "reseed",
    "undo",
]
