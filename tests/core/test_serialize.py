"""Tests for History serialization."""

import json

from histree.demos.counter import jump_to
from histree.history import init, perform, undo
from histree.history.serialize import (
    serialize_history,
    serialize_node,
    to_csv,
    to_json,
    to_markdown,
)


class TestSerializeNode:
    """Tests for serialize_node()."""

    def test_root(self, branched_history):
        graph = branched_history.graph
        result = serialize_node(graph.root, graph)

        assert result == {"id": 0, "kind": None, "parent": None, "children": [1, 2]}

    def test_operation_node(self, branched_history):
        graph = branched_history.graph
        result = serialize_node(graph.get(2), graph)

        assert result == {"id": 2, "kind": "DEC", "parent": 0, "children": []}

    def test_captured_data(self):
        h = perform(jump_to(0, 9), init(0))

        assert serialize_node(h.graph.get(1), h.graph)["data"] == 9

    def test_adjacency_comes_from_given_graph(self, fresh_history):
        later = perform(jump_to(1, 4), fresh_history)
        root = later.graph.root

        assert serialize_node(root, later.graph)["children"] == [1]
        assert serialize_node(root, fresh_history.graph)["children"] == []


class TestSerializeHistory:
    """Tests for serialize_history()."""

    def test_structure(self, branched_history):
        result = serialize_history(branched_history)

        assert result["cursor"] == 2
        assert result["next_id"] == 3
        assert result["dedup"] == "keep-stored"
        assert result["model"] == 0
        assert set(result["nodes"]) == {"0", "1", "2"}
        assert result["metadata"] == {
            "node_count": 3,
            "kind_counts": {"INC": 1, "DEC": 1},
        }

    def test_without_model(self, branched_history):
        assert "model" not in serialize_history(branched_history, include_model=False)

    def test_json(self, branched_history):
        data = json.loads(to_json(branched_history))

        assert data["cursor"] == 2
        assert data["nodes"]["0"]["children"] == [1, 2]

    def test_json_stringifies_unknown_values(self):
        h = init(object())

        assert json.loads(to_json(h))["model"].startswith("<object")


class TestMarkdown:
    """Tests for to_markdown()."""

    def test_tree(self, branched_history):
        lines = to_markdown(branched_history).splitlines()

        assert lines == [
            "# History (3 nodes, cursor #2)",
            "",
            "- #0 ROOT",
            "  - #1 INC",
            "  - #2 DEC <- cursor",
        ]

    def test_cursor_at_root(self, branched_history):
        text = to_markdown(undo(branched_history))

        assert "- #0 ROOT <- cursor" in text


class TestCsv:
    """Tests for to_csv()."""

    def test_rows(self, branched_history):
        lines = to_csv(branched_history).splitlines()

        assert lines[0] == "id,parent,kind,depth,data,cursor"
        assert lines[1] == "0,,,0,,"
        assert lines[2] == "1,0,INC,1,,"
        assert lines[3] == "2,0,DEC,1,,yes"
