"""Shared pytest fixtures."""

import pytest


@pytest.fixture
def fresh_history():
    """History over an integer counter starting at 1."""
    from histree.history import init

    return init(1)


@pytest.fixture
def branched_history():
    """Start at 1, INC, undo, DEC: root has INC (#1) and DEC (#2) futures."""
    from histree.demos.counter import decrement, increment
    from histree.history import init, perform, undo

    h = init(1)
    h = perform(increment(), h)
    h = undo(h)
    return perform(decrement(), h)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no HISTREE_* environment."""
    import os

    for name in list(os.environ):
        if name.startswith("HISTREE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
