"""Operation - Reversible, labelled state transitions.

This module provides the payload types stored in history nodes:
- Operation: A labelled forward/inverse transform pair
- Root: Sentinel payload carried only by the root node
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

K = TypeVar("K")
M = TypeVar("M")


class Root:
    """Sentinel payload for the root node (no operation)."""

    _instance: Root | None = None

    def __new__(cls) -> Root:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ROOT"

    def __reduce__(self) -> str:
        return "ROOT"


ROOT = Root()


@dataclass(frozen=True)
class Operation(Generic[K, M]):
    """A reversible transition of the caller's model.

    Two operations may share a ``kind`` while carrying different closures.
    The kind is the only key used for branch matching and redo selection.

    Attributes:
        kind: Equality-comparable label (e.g. an Enum member).
        forward: Transforms a model into its successor state.
        inverse: Reverts that specific transition.
        data: Optional value the closures captured (e.g. a jump target).
            Not used for branch matching.
    """

    kind: K
    forward: Callable[[M], M]
    inverse: Callable[[M], M]
    data: Any = None

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.data is None:
            return f"{kind_label(self.kind)}"
        return f"{kind_label(self.kind)}({self.data!r})"


def operation(
    kind: K,
    forward: Callable[[M], M],
    inverse: Callable[[M], M],
    data: Any = None,
) -> Operation[K, M]:
    """Construct an Operation.

    The engine does not verify that ``forward`` and ``inverse`` are true
    inverses of each other.
    """
    return Operation(kind=kind, forward=forward, inverse=inverse, data=data)


def kind_label(kind: Any) -> str | None:
    """Render a kind for display: enum members by name, others via str()."""
    if kind is None:
        return None
    name = getattr(kind, "name", None)
    if isinstance(name, str):
        return name
    return str(kind)


__all__ = ["ROOT", "Root", "Operation", "operation", "kind_label"]
