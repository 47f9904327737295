"""
histree.demos.counter - Integer counter driven through the history engine.

Kinds:
- INC: add a step
- DEC: subtract a step
- JUMP: set the counter to a value captured when the operation is built
"""

from __future__ import annotations

from enum import Enum

from histree.history import INIT, Do, Intent, Operation, Redo, Undo


class CounterKind(Enum):
    """Operation kinds for the counter."""

    INC = "inc"
    DEC = "dec"
    JUMP = "jump"


def increment(step: int = 1) -> Operation[CounterKind, int]:
    """Add ``step`` to the counter."""
    return Operation(
        kind=CounterKind.INC,
        forward=lambda m: m + step,
        inverse=lambda m: m - step,
        data=None if step == 1 else step,
    )


def decrement(step: int = 1) -> Operation[CounterKind, int]:
    """Subtract ``step`` from the counter."""
    return Operation(
        kind=CounterKind.DEC,
        forward=lambda m: m - step,
        inverse=lambda m: m + step,
        data=None if step == 1 else step,
    )


def jump_to(current: int, target: int) -> Operation[CounterKind, int]:
    """Set the counter to ``target``; undo restores ``current``.

    Both values are captured now, so a later dedup hit that keeps this
    stored operation will undo back to ``current`` regardless of where the
    counter was when the hit happened.
    """
    return Operation(
        kind=CounterKind.JUMP,
        forward=lambda m: target,
        inverse=lambda m: current,
        data=target,
    )


def parse_kind(text: str) -> CounterKind:
    """Parse a kind name such as "inc" or "JUMP".

    Raises:
        ValueError: If ``text`` names no CounterKind.
    """
    try:
        return CounterKind(text.strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in CounterKind)
        raise ValueError(f"Unknown counter kind '{text}' (expected one of: {valid})") from None


def parse_intent(token: str, current: int) -> Intent:
    """Translate a CLI token into an intent.

    Tokens: ``inc``, ``dec``, ``inc:N``, ``dec:N``, ``jump:N``, ``undo``,
    ``redo:KIND``, ``reset``.

    Args:
        token: The token to parse.
        current: Current counter value (captured by ``jump``).

    Raises:
        ValueError: If the token is not recognized.
    """
    name, _, arg = token.strip().lower().partition(":")

    if name == "undo" and not arg:
        return Undo()
    if name == "reset" and not arg:
        return Do(INIT)
    if name == "redo" and arg:
        return Redo(parse_kind(arg))
    if name in ("inc", "dec"):
        step = _parse_int(token, arg) if arg else 1
        return Do(increment(step) if name == "inc" else decrement(step))
    if name == "jump" and arg:
        return Do(jump_to(current, _parse_int(token, arg)))

    raise ValueError(
        f"Unknown step '{token}' (expected inc, dec, jump:N, undo, redo:KIND or reset)"
    )


def _parse_int(token: str, text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Step '{token}' needs an integer argument") from None
