"""HistoryNode - A recorded point in the operation history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from histree.history.operation import Operation, Root


@dataclass(frozen=True)
class HistoryNode:
    """A node in the history graph.

    Exactly one node (the root, id 0) carries the ``ROOT`` sentinel; every
    other node carries the Operation that was applied to reach it.

    Attributes:
        id: Dense integer id, 0 for the root.
        payload: ``ROOT`` or the stored Operation.
    """

    id: int
    payload: Union[Root, Operation]

    @property
    def is_root(self) -> bool:
        """True if this node carries the root sentinel."""
        return isinstance(self.payload, Root)

    @property
    def operation(self) -> Operation | None:
        """The stored operation, or None for the root."""
        if isinstance(self.payload, Operation):
            return self.payload
        return None

    @property
    def kind(self) -> Any:
        """Kind of the stored operation, or None for the root."""
        op = self.operation
        return op.kind if op is not None else None

    def __str__(self) -> str:
        if self.is_root:
            return f"#{self.id} ROOT"
        return f"#{self.id} {self.payload}"
