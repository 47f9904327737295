"""Tests for the counter demo operations and token parsing."""

import pytest

from histree.demos.counter import (
    CounterKind,
    decrement,
    increment,
    jump_to,
    parse_intent,
    parse_kind,
)
from histree.history import INIT, Do, Redo, Undo


class TestOperations:
    """Tests for counter operation constructors."""

    def test_increment(self):
        op = increment()

        assert op.kind is CounterKind.INC
        assert op.forward(4) == 5
        assert op.inverse(5) == 4
        assert op.data is None

    def test_increment_step(self):
        op = increment(3)

        assert op.forward(0) == 3
        assert op.data == 3

    def test_decrement(self):
        op = decrement(2)

        assert op.kind is CounterKind.DEC
        assert op.forward(5) == 3
        assert op.inverse(3) == 5

    def test_jump_captures_values(self):
        op = jump_to(3, 10)

        assert op.kind is CounterKind.JUMP
        assert op.forward(99) == 10
        assert op.inverse(99) == 3
        assert op.data == 10


class TestParseKind:
    """Tests for parse_kind()."""

    def test_case_insensitive(self):
        assert parse_kind("INC") is CounterKind.INC
        assert parse_kind("jump") is CounterKind.JUMP

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown counter kind"):
            parse_kind("mul")


class TestParseIntent:
    """Tests for parse_intent()."""

    def test_undo(self):
        assert parse_intent("undo", 0) == Undo()

    def test_reset(self):
        assert parse_intent("reset", 0) == Do(INIT)

    def test_redo(self):
        assert parse_intent("redo:dec", 0) == Redo(CounterKind.DEC)

    def test_inc_default_step(self):
        intent = parse_intent("inc", 0)

        assert isinstance(intent, Do)
        assert intent.operation.forward(0) == 1

    def test_dec_with_step(self):
        intent = parse_intent("dec:5", 0)

        assert intent.operation.kind is CounterKind.DEC
        assert intent.operation.forward(0) == -5

    def test_jump_captures_current(self):
        intent = parse_intent("jump:8", 3)

        assert intent.operation.forward(0) == 8
        assert intent.operation.inverse(8) == 3

    @pytest.mark.parametrize("token", ["", "mul", "redo", "jump", "jump:x", "undo:1", "inc:two"])
    def test_invalid(self, token):
        with pytest.raises(ValueError):
            parse_intent(token, 0)
