"""History Graph - Append-only arena of history nodes.

Nodes are stored in a flat arena keyed by dense integer id, with two
adjacency indexes:
- id -> ordered list of child ids (the node's futures)
- id -> parent id (the node's single past)

A single parent slot per id makes convergent edges unrepresentable, so the
graph is always a tree rooted at node 0.

Ids are allocated densely in creation order, so the nodes that existed when
a graph had ``n`` nodes are exactly the ids below ``n``. ``snapshot(n)``
exposes that earlier state without copying; ``fork(n)`` copies it into an
independent graph.
"""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Iterator

from histree.history.HistoryNode import HistoryNode
from histree.history.operation import ROOT, Operation
from histree.history.relations import Edge

ROOT_ID = 0


class HistoryIntegrityError(AssertionError):
    """The single-root / single-parent tree invariant was violated."""


class HistoryGraph:
    """Append-only tree of history nodes.

    Nothing is removed once written. The only in-place change is
    ``replace_payload``, which rebinds a slot to a new immutable node.

    Example:
        >>> graph = HistoryGraph()
        >>> root = graph.add_root()
        >>> graph.node_count()
        1
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._nodes: dict[int, HistoryNode] = {}
        self._children: dict[int, list[int]] = {}
        self._parent: dict[int, int] = {}
        # Snapshots only see ids below this bound; None for a writable graph.
        self._limit: int | None = None

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshots
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_snapshot(self) -> bool:
        """True for a read-only view returned by snapshot()."""
        return self._limit is not None

    def snapshot(self, limit: int) -> HistoryGraph:
        """Read-only view of the nodes with ids below ``limit``.

        The view shares storage with this graph; nodes appended later
        (ids >= ``limit``) are invisible to it.
        """
        view = HistoryGraph()
        view._nodes = self._nodes
        view._children = self._children
        view._parent = self._parent
        view._limit = limit
        return view

    def fork(self, limit: int) -> HistoryGraph:
        """Independent writable copy of the nodes with ids below ``limit``."""
        copy = HistoryGraph()
        for node_id, node in self._nodes.items():
            if node_id >= limit:
                continue
            copy._nodes[node_id] = node
            copy._children[node_id] = [c for c in self._children[node_id] if c < limit]
            if node_id in self._parent:
                copy._parent[node_id] = self._parent[node_id]
        return copy

    def _visible(self, node_id: object) -> bool:
        if node_id not in self._nodes:
            return False
        return self._limit is None or node_id < self._limit  # type: ignore[operator]

    def _check_writable(self) -> None:
        if self._limit is not None:
            raise HistoryIntegrityError("History graph snapshots are read-only")

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    def add_root(self) -> HistoryNode:
        """Create the root node (id 0).

        Raises:
            HistoryIntegrityError: If a root already exists.
        """
        self._check_writable()
        if ROOT_ID in self._nodes:
            raise HistoryIntegrityError("History graph already has a root")
        node = HistoryNode(id=ROOT_ID, payload=ROOT)
        self._nodes[ROOT_ID] = node
        self._children[ROOT_ID] = []
        return node

    def add_node(self, node: HistoryNode, parent_id: int) -> Edge:
        """Append a node and the edge ``parent_id -> node.id``.

        Args:
            node: A non-root node with an unused id.
            parent_id: Id of an existing node.

        Returns:
            The created Edge.

        Raises:
            HistoryIntegrityError: If ``node`` carries the root sentinel, or
                this graph is a snapshot.
            ValueError: If the id is taken or the parent does not exist.
        """
        self._check_writable()
        if node.is_root:
            raise HistoryIntegrityError("Only add_root() may create the root node")
        if node.id in self._nodes:
            raise ValueError(f"Node #{node.id} already exists")
        if parent_id not in self._nodes:
            raise ValueError(f"Parent node #{parent_id} not found")

        self._nodes[node.id] = node
        self._children[node.id] = []
        self._children[parent_id].append(node.id)
        self._parent[node.id] = parent_id
        return Edge(source=parent_id, target=node.id)

    def replace_payload(self, node_id: int, op: Operation) -> HistoryNode:
        """Rebind a non-root node's slot to a copy carrying ``op``.

        Ids and edges are unchanged.

        Raises:
            KeyError: If ``node_id`` is not found.
            HistoryIntegrityError: If ``node_id`` is the root, or this graph
                is a snapshot.
        """
        self._check_writable()
        current = self.get(node_id)
        if current.is_root:
            raise HistoryIntegrityError("The root node carries no operation")
        updated = replace(current, payload=op)
        self._nodes[node_id] = updated
        return updated

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def __contains__(self, node_id: object) -> bool:
        return self._visible(node_id)

    def __len__(self) -> int:
        return self.node_count()

    def get(self, node_id: int) -> HistoryNode:
        """Return the node with ``node_id``.

        Raises:
            KeyError: If ``node_id`` is not found.
        """
        if not self._visible(node_id):
            raise KeyError(f"Node #{node_id} not found")
        return self._nodes[node_id]

    def find_by_id(self, node_id: int) -> HistoryNode | None:
        """Find node by id, or None if not found."""
        return self._nodes[node_id] if self._visible(node_id) else None

    @property
    def root(self) -> HistoryNode:
        """The root node."""
        return self.get(ROOT_ID)

    def node_count(self) -> int:
        """Return total number of nodes in the graph."""
        if self._limit is None:
            return len(self._nodes)
        return sum(1 for node_id in self._nodes if node_id < self._limit)

    def next_free_id(self) -> int:
        """Return an id greater than every id in the graph."""
        return max(self._ids(), default=-1) + 1

    def all_nodes(self) -> Iterator[HistoryNode]:
        """Iterate all nodes in id order."""
        for node_id in sorted(self._ids()):
            yield self._nodes[node_id]

    def _ids(self) -> Iterator[int]:
        for node_id in self._nodes:
            if self._limit is None or node_id < self._limit:
                yield node_id

    # ─────────────────────────────────────────────────────────────────────────
    # Adjacency
    # ─────────────────────────────────────────────────────────────────────────

    def iter_futures(self, node_id: int) -> Iterator[HistoryNode]:
        """Iterate successor nodes in edge-creation order."""
        for child_id in self._children_of(node_id):
            yield self._nodes[child_id]

    def iter_outgoing_edges(self, node_id: int) -> Iterator[Edge]:
        """Iterate outgoing edges in creation order."""
        for child_id in self._children_of(node_id):
            yield Edge(source=node_id, target=child_id)

    def iter_past(self, node_id: int) -> Iterator[HistoryNode]:
        """Iterate predecessor nodes (at most one; none for the root)."""
        for edge in self.iter_incoming_edges(node_id):
            yield self._nodes[edge.source]

    def iter_incoming_edges(self, node_id: int) -> Iterator[Edge]:
        """Iterate incoming edges (at most one; none for the root)."""
        self.get(node_id)
        parent_id = self._parent.get(node_id)
        if parent_id is not None:
            yield Edge(source=parent_id, target=node_id)

    def parent_of(self, node_id: int) -> int | None:
        """Return the parent id, or None for the root."""
        self.get(node_id)
        return self._parent.get(node_id)

    def child_count(self, node_id: int) -> int:
        """Return number of successors."""
        return len(self._children_of(node_id))

    def _children_of(self, node_id: int) -> list[int]:
        self.get(node_id)
        children = self._children[node_id]
        if self._limit is None:
            return children
        return [child_id for child_id in children if child_id < self._limit]

    # ─────────────────────────────────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────────────────────────────────

    def path_from_root(self, node_id: int) -> list[int]:
        """Return node ids from the root down to ``node_id`` (inclusive)."""
        path = [node_id]
        current = self.parent_of(node_id)
        while current is not None:
            path.append(current)
            current = self._parent.get(current)
        path.reverse()
        return path

    def depth(self, node_id: int) -> int:
        """Number of edges between the root and ``node_id``."""
        return len(self.path_from_root(node_id)) - 1

    def walk(self, order: str = "pre") -> Iterator[HistoryNode]:
        """Iterate all nodes reachable from the root.

        Args:
            order: Traversal order:
                - "pre": Parent first (depth-first, pre-order)
                - "post": Children first (depth-first, post-order)
                - "level": Breadth-first (level order)

        Yields:
            HistoryNode instances in the specified order.
        """
        if not self._visible(ROOT_ID):
            return
        if order == "pre":
            yield from self._walk_preorder()
        elif order == "post":
            yield from self._walk_postorder()
        elif order == "level":
            yield from self._walk_level()
        else:
            raise ValueError(f"Unknown traversal order: {order}")

    def _walk_preorder(self) -> Iterator[HistoryNode]:
        stack = [ROOT_ID]
        while stack:
            node_id = stack.pop()
            yield self._nodes[node_id]
            stack.extend(reversed(self._children_of(node_id)))

    def _walk_postorder(self) -> Iterator[HistoryNode]:
        # Iterative; history paths can be far deeper than the recursion limit.
        stack: list[tuple[int, bool]] = [(ROOT_ID, False)]
        while stack:
            node_id, expanded = stack.pop()
            if expanded:
                yield self._nodes[node_id]
                continue
            stack.append((node_id, True))
            for child_id in reversed(self._children_of(node_id)):
                stack.append((child_id, False))

    def _walk_level(self) -> Iterator[HistoryNode]:
        queue: deque[int] = deque([ROOT_ID])
        while queue:
            node_id = queue.popleft()
            yield self._nodes[node_id]
            queue.extend(self._children_of(node_id))


__all__ = ["ROOT_ID", "HistoryGraph", "HistoryIntegrityError"]
