"""Relations - Edges between history nodes.

An edge ``predecessor -> successor`` records that applying the successor's
stored ``forward`` to the model reached at the predecessor yields the model
reached at the successor. Edges are created by the do-path only and are
never removed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Edge:
    """A directed edge between two history nodes.

    Attributes:
        source: Id of the predecessor node.
        target: Id of the successor node.
    """

    source: int
    target: int

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"#{self.source} -> #{self.target}"
