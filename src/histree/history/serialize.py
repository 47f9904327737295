"""History Serialization - Export a History to various formats.

This module provides functions to serialize a History and its nodes
to JSON-compatible dicts, JSON text, a markdown tree, and CSV.
"""

from __future__ import annotations

import csv
import io
import json
from typing import TYPE_CHECKING, Any

from histree.history.operation import kind_label

if TYPE_CHECKING:
    from histree.history.engine import History
    from histree.history.graph import HistoryGraph
    from histree.history.HistoryNode import HistoryNode


def serialize_node(node: HistoryNode, graph: HistoryGraph) -> dict[str, Any]:
    """Serialize a HistoryNode to a JSON-compatible dict.

    Args:
        node: The node to serialize.
        graph: The graph the node belongs to (for adjacency).

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "id": node.id,
        "kind": kind_label(node.kind),
        "parent": graph.parent_of(node.id),
        "children": [child.id for child in graph.iter_futures(node.id)],
    }

    op = node.operation
    if op is not None and op.data is not None:
        result["data"] = op.data

    return result


def serialize_history(h: History, include_model: bool = True) -> dict[str, Any]:
    """Serialize a History to a JSON-compatible dict.

    Args:
        h: The history to serialize.
        include_model: Whether to include the current model value.

    Returns:
        Dict with cursor, nodes, and metadata.
    """
    graph = h.graph
    nodes: dict[str, Any] = {}
    kind_counts: dict[str, int] = {}
    for node in graph.all_nodes():
        nodes[str(node.id)] = serialize_node(node, graph)
        if not node.is_root:
            label = kind_label(node.kind) or ""
            kind_counts[label] = kind_counts.get(label, 0) + 1

    result: dict[str, Any] = {
        "cursor": h.cursor,
        "next_id": h.next_id,
        "dedup": h.dedup.value,
        "nodes": nodes,
        "metadata": {
            "node_count": graph.node_count(),
            "kind_counts": kind_counts,
        },
    }
    if include_model:
        result["model"] = h.model
    return result


def to_json(h: History, indent: int | None = 2) -> str:
    """Serialize a History to JSON text.

    Values that JSON cannot represent (model, captured data) fall back
    to ``str()``.
    """
    return json.dumps(serialize_history(h), indent=indent, default=str)


def to_markdown(h: History) -> str:
    """Render the history tree as an indented markdown list.

    The node at the cursor is marked with ``<- cursor``; siblings appear
    in creation order.
    """
    graph = h.graph
    lines = [f"# History ({graph.node_count()} nodes, cursor #{h.cursor})", ""]
    for node in graph.walk("pre"):
        indent = "  " * graph.depth(node.id)
        text = "ROOT" if node.is_root else str(node.operation)
        marker = " <- cursor" if node.id == h.cursor else ""
        lines.append(f"{indent}- #{node.id} {text}{marker}")
    return "\n".join(lines) + "\n"


def to_csv(h: History) -> str:
    """Serialize history nodes to CSV (one row per node, id order)."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["id", "parent", "kind", "depth", "data", "cursor"])
    graph = h.graph
    for node in graph.all_nodes():
        op = node.operation
        parent = graph.parent_of(node.id)
        writer.writerow(
            [
                node.id,
                "" if parent is None else parent,
                kind_label(node.kind) or "",
                graph.depth(node.id),
                "" if op is None or op.data is None else op.data,
                "yes" if node.id == h.cursor else "",
            ]
        )
    return output.getvalue()


__all__ = ["serialize_node", "serialize_history", "to_json", "to_markdown", "to_csv"]
