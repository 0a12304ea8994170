"""Topological sort, cycle detection and connected components."""

import sys

from algoviz.graph import NodeState, EdgeState
from algoviz.algorithms import AlgorithmParams, execute
from algoviz.algorithms.components import PALETTE, component_state
from algoviz.algorithms.cycle_detection import cycle_detection


# ========================================================================
# Topological sort
# ========================================================================


class TestTopologicalSort:
    def test_dag_order(self, dag):
        steps = execute("topological", dag)
        last = steps[-1]
        assert last.current_operation == "Complete"
        order = last.view("result").as_list()
        assert order == ["A", "B", "C"]
        assert last.description == "Topological sort complete: A → B → C"
        assert set(last.nodes_in(NodeState.IN_SOLUTION)) == {"A", "B", "C"}
        assert set(last.edges_in(EdgeState.IN_SOLUTION)) == {"e0", "e1", "e2"}

    def test_initial_in_degrees(self, dag):
        first = execute("topological", dag)[0]
        assert first.view("inDegrees").as_table() == {"A": 0, "B": 1, "C": 2}

    def test_every_edge_respects_the_order(self, make_graph):
        g = make_graph(
            "ABCDEF",
            [("E", "A"), ("F", "A"), ("F", "C"), ("C", "D"), ("D", "B"), ("E", "B")],
            directed=True,
        )
        order = execute("topological", g)[-1].view("result").as_list()
        position = {label: i for i, label in enumerate(order)}
        assert len(order) == 6
        for edge in g.edges.values():
            assert position[edge.source] < position[edge.target]

    def test_cycle_detected(self, directed_cycle):
        last = execute("topological", directed_cycle)[-1]
        assert last.current_operation == "Cycle Detected"
        assert len(last.view("result").as_list()) < 3
        assert last.description == "Cycle detected! Only 0 of 3 nodes processed."

    def test_partial_order_before_cycle(self, make_graph):
        g = make_graph("ABC", [("A", "B"), ("B", "C"), ("C", "B")], directed=True)
        last = execute("topological", g)[-1]
        assert last.view("result").as_list() == ["A"]

    def test_undirected_graph_gives_empty_trace(self, path_graph):
        assert execute("topological", path_graph) == []

    def test_metrics(self, dag):
        metrics = execute("topological", dag)[-1].metrics
        assert metrics.nodes_visited == 3
        assert metrics.edges_examined == 3


# ========================================================================
# Cycle detection
# ========================================================================


class TestCycleDetection:
    def test_single_undirected_edge_is_acyclic(self, make_graph):
        g = make_graph("AB", [("A", "B")])
        last = execute("cycleDetection", g)[-1]
        assert last.view("hasCycle").value is False
        assert last.current_operation == "Complete - No Cycle"
        assert set(last.nodes_in(NodeState.IN_SOLUTION)) == {"A", "B"}

    def test_two_node_directed_cycle(self, make_graph):
        g = make_graph("AB", [("A", "B"), ("B", "A")], directed=True)
        steps = execute("cycleDetection", g)
        found = [s for s in steps if s.current_operation == "Cycle Found"]
        assert len(found) == 1
        assert found[0].view("cycleEdge").value == "B → A"
        assert found[0].edge_states["e1"] is EdgeState.IN_SOLUTION
        assert found[0].node_states["A"] is NodeState.IN_SOLUTION
        assert steps[-1].view("hasCycle").value is True

    def test_undirected_triangle_has_cycle(self, make_graph):
        g = make_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])
        assert execute("cycleDetection", g)[-1].view("hasCycle").value is True

    def test_parallel_undirected_edges_form_a_cycle(self, make_graph):
        g = make_graph("AB", [("A", "B"), ("B", "A")])
        assert execute("cycleDetection", g)[-1].view("hasCycle").value is True

    def test_undirected_tree_is_acyclic(self, path_graph):
        steps = execute("cycleDetection", path_graph)
        assert steps[-1].view("hasCycle").value is False
        finishes = [s.current_operation for s in steps if s.current_operation.startswith("Finish")]
        assert finishes == ["Finish D", "Finish C", "Finish B", "Finish A"]

    def test_dag_cross_edge_is_not_a_cycle(self, dag):
        steps = execute("cycleDetection", dag)
        assert steps[-1].view("hasCycle").value is False
        # A→C is examined after C is already BLACK
        assert steps[-1].edge_states["e2"] is EdgeState.REJECTED

    def test_stops_at_first_back_edge(self, make_graph):
        g = make_graph("ABCD", [("A", "B"), ("B", "A"), ("C", "D")], directed=True)
        steps = execute("cycleDetection", g)
        assert not any(s.current_operation == "Visit C" for s in steps)
        assert steps[-1].node_states["C"] is NodeState.UNVISITED

    def test_chain_deeper_than_the_recursion_limit(self, make_graph):
        ids = [f"n{i}" for i in range(sys.getrecursionlimit() + 100)]
        g = make_graph(ids, list(zip(ids, ids[1:])), directed=True)
        last = None
        for last in cycle_detection(g, AlgorithmParams()):
            pass
        assert last.view("hasCycle").value is False

    def test_colors_view(self, make_graph):
        g = make_graph("AB", [("A", "B")])
        first = execute("cycleDetection", g)[0]
        assert first.view("colors").as_table() == {"A": "white", "B": "white"}


# ========================================================================
# Connected components
# ========================================================================


class TestConnectedComponents:
    def test_components(self, disconnected):
        last = execute("connectedComponents", disconnected)[-1]
        assert last.view("componentCount").value == 3
        assert last.view("components").as_table() == {
            "Component 1": ["A", "B"],
            "Component 2": ["C", "D"],
            "Component 3": ["E"],
        }
        assert last.description == "Found 3 connected component(s)."

    def test_palette_by_component(self, disconnected):
        last = execute("connectedComponents", disconnected)[-1]
        assert last.node_states["A"] is PALETTE[0]
        assert last.node_states["C"] is PALETTE[1]
        assert last.node_states["E"] is PALETTE[2]

    def test_palette_repeats(self, make_graph):
        g = make_graph("ABCDEFG", [])
        last = execute("connectedComponents", g)[-1]
        assert last.node_states["F"] is last.node_states["A"] is NodeState.IN_SOLUTION
        assert last.node_states["G"] is NodeState.VISITING
        assert component_state(12) is PALETTE[2]

    def test_tree_edges_marked(self, make_graph):
        g = make_graph("ABC", [("A", "B"), ("B", "C"), ("A", "C")])
        last = execute("connectedComponents", g)[-1]
        assert last.edge_states["e0"] is EdgeState.IN_SOLUTION
        assert last.edge_states["e1"] is EdgeState.IN_SOLUTION
        assert last.edge_states["e2"] is EdgeState.UNEXAMINED

    def test_visit_order_is_depth_first(self, make_graph):
        g = make_graph("ABCD", [("A", "B"), ("A", "C"), ("B", "D")])
        visits = [s.current_operation for s in execute("connectedComponents", g) if s.current_operation.startswith("Visit")]
        assert visits == ["Visit A", "Visit B", "Visit D", "Visit C"]

    def test_directed_graph_gives_empty_trace(self, dag):
        assert execute("connectedComponents", dag) == []
