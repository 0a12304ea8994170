"""Tests for Step snapshots, the StepBuilder and the data-structure views."""

import pytest

from algoviz.errors import InvalidRequestError
from algoviz.graph import NodeState, EdgeState
from algoviz.algorithms.step import AlgorithmMetrics, AlgorithmParams, StepBuilder, reconstruct_path
from algoviz.algorithms.views import group_view, list_view, table_view, value_view


class TestStepBuilder:
    def test_first_step_has_complete_pristine_maps(self, path_graph):
        sb = StepBuilder(path_graph)
        step = sb.build("hello", 0, "Init")
        assert step.step_number == 1
        assert set(step.node_states) == set(path_graph.nodes)
        assert set(step.edge_states) == set(path_graph.edges)
        assert set(step.node_states.values()) == {NodeState.UNVISITED}
        assert step.metrics == AlgorithmMetrics()

    def test_snapshots_are_independent(self, path_graph):
        sb = StepBuilder(path_graph)
        first = sb.build("one", 0, "")
        sb.set_node("A", NodeState.CURRENT)
        second = sb.build("two", 0, "")
        first.node_states["B"] = NodeState.VISITED
        assert first.node_states["A"] is NodeState.UNVISITED
        assert second.node_states["B"] is NodeState.UNVISITED
        assert sb.node_state("B") is NodeState.UNVISITED

    def test_unknown_ids_do_not_grow_the_maps(self, path_graph):
        sb = StepBuilder(path_graph)
        sb.set_node("ghost", NodeState.CURRENT)
        sb.set_edge("ghost-edge", EdgeState.EXAMINING)
        step = sb.build("", 0, "")
        assert "ghost" not in step.node_states
        assert "ghost-edge" not in step.edge_states

    def test_solution_edge_never_downgraded(self, path_graph):
        sb = StepBuilder(path_graph)
        sb.choose_edge("e0")
        sb.examine_edge("e0")
        sb.reject_edge("e0")
        assert sb.edge_state("e0") is EdgeState.IN_SOLUTION
        sb.reject_edge("e1")
        assert sb.edge_state("e1") is EdgeState.REJECTED

    def test_metrics_accumulate(self, path_graph):
        sb = StepBuilder(path_graph)
        sb.count(nodes=1, operations=2)
        sb.count(edges=3, comparisons=1)
        step = sb.build("", 0, "")
        assert step.metrics.to_dict() == {
            "nodes_visited": 1, "edges_examined": 3, "operations_count": 2, "comparisons": 1,
        }

    def test_missing_labels(self, path_graph):
        sb = StepBuilder(path_graph)
        assert sb.name("ghost") == "?"
        assert sb.names(["A", "ghost", "B"]) == ["A", "B"]
        assert sb.path_text(["A", "B", "C"]) == "A → B → C"


class TestStep:
    def test_view_lookup_and_to_dict(self, path_graph):
        sb = StepBuilder(path_graph)
        sb.set_node("A", NodeState.CURRENT)
        step = sb.build("desc", 3, "Op", list_view("queue", ["B"]), value_view("total", 4))
        assert step.view("queue").as_list() == ["B"]
        assert step.view("nope") is None
        assert step.nodes_in(NodeState.CURRENT) == ["A"]

        data = step.to_dict()
        assert data["node_states"]["A"] == "current"
        assert data["edge_states"]["e0"] == "unexamined"
        assert data["data_structures"] == [
            {"kind": "list", "name": "queue", "items": ["B"]},
            {"kind": "value", "name": "total", "value": 4},
        ]
        assert data["pseudocode_line"] == 3


class TestViews:
    def test_views_freeze_their_input(self):
        items = ["A"]
        view = list_view("queue", items)
        items.append("B")
        assert view.as_list() == ["A"]

    def test_table_and_group_capabilities(self):
        table = table_view("distances", {"A": "0", "B": "∞"})
        assert table.as_table() == {"A": "0", "B": "∞"}
        assert table.kind == "table"
        groups = group_view("components", {"Component 1": ["A", "B"]})
        assert groups.as_table() == {"Component 1": ["A", "B"]}
        assert groups.to_dict()["kind"] == "groups"


class TestParams:
    def test_from_dict_accepts_camel_and_snake_case(self):
        assert AlgorithmParams.from_dict({"startNodeId": "A", "endNodeId": "B"}) == AlgorithmParams("A", "B")
        assert AlgorithmParams.from_dict({"start_node_id": 1}).start_node_id == "1"
        assert AlgorithmParams.from_dict(None) == AlgorithmParams()
        assert AlgorithmParams.from_dict({"heuristic": "manhattan"}).heuristic == "manhattan"

    @pytest.mark.parametrize("heuristic", [["x"], 3, {"name": "manhattan"}])
    def test_non_string_heuristic_is_rejected(self, heuristic):
        with pytest.raises(InvalidRequestError, match="heuristic"):
            AlgorithmParams.from_dict({"heuristic": heuristic})

    def test_empty_heuristic_falls_back_to_euclidean(self):
        assert AlgorithmParams.from_dict({"heuristic": ""}).heuristic == "euclidean"


def test_reconstruct_path_handles_cycles():
    assert reconstruct_path({"C": "B", "B": "A", "A": None}, "C") == ["A", "B", "C"]
    assert reconstruct_path({"A": "B", "B": "A"}, "A") == ["B", "A"]
    assert reconstruct_path({}, "X") == ["X"]
