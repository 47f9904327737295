"""Intents - The vocabulary a caller uses to drive a History.

- Do: Perform an operation, or re-seed when carrying ``INIT``
- Undo: Revert the operation at the cursor
- Redo: Resume the future branch of a given kind
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union

from histree.history.engine import History, perform, redo, reseed, undo
from histree.history.operation import Operation


class Init:
    """Sentinel payload for ``Do``: rebase history on the current model."""

    def __repr__(self) -> str:
        return "INIT"


INIT = Init()


@dataclass(frozen=True)
class Do:
    """Perform ``operation`` (or re-seed when it is ``INIT``)."""

    operation: Union[Operation, Init]


@dataclass(frozen=True)
class Undo:
    """Revert the operation at the cursor."""


@dataclass(frozen=True)
class Redo:
    """Redo along the future branch labelled ``kind``."""

    kind: Any


Intent = Union[Do, Undo, Redo]


def step(h: History, intent: Intent) -> History:
    """Apply one intent and return the next History.

    Raises:
        TypeError: If ``intent`` is not a Do, Undo or Redo.
    """
    if isinstance(intent, Do):
        if isinstance(intent.operation, Init):
            return reseed(h)
        return perform(intent.operation, h)
    elif isinstance(intent, Undo):
        return undo(h)
    elif isinstance(intent, Redo):
        return redo(intent.kind, h)
    raise TypeError(f"Not an intent: {intent!r}")


def replay(h: History, intents: Iterable[Intent]) -> History:
    """Apply intents in order, returning the final History."""
    for intent in intents:
        h = step(h, intent)
    return h


__all__ = ["INIT", "Init", "Do", "Undo", "Redo", "Intent", "step", "replay"]
