"""Kruskal and Prim traces."""

import pytest

from algoviz.graph import NodeState, EdgeState
from algoviz.algorithms import AlgorithmParams, execute
from algoviz.algorithms.kruskal import UnionFind


# ========================================================================
# Union-Find
# ========================================================================


class TestUnionFind:
    def test_union_and_find(self):
        uf = UnionFind("ABCD")
        assert uf.union("A", "B")
        assert uf.union("C", "D")
        assert not uf.union("B", "A")
        assert uf.find("A") == uf.find("B")
        assert uf.find("A") != uf.find("C")
        assert uf.find("C") == uf.find("D")
        assert uf.union("B", "D")
        assert len({uf.find(x) for x in "ABCD"}) == 1

    def test_path_compression(self):
        uf = UnionFind("ABCDE")
        for a, b in [("A", "B"), ("C", "D"), ("A", "C"), ("E", "A")]:
            uf.union(a, b)
        root = uf.find("D")
        assert all(uf.parent[x] == root for x in "ABCDE" if x != root)


# ========================================================================
# Kruskal
# ========================================================================


class TestKruskal:
    def test_complete_graph_weight(self, complete4):
        steps = execute("kruskal", complete4)
        last = steps[-1]
        assert last.view("totalWeight").value == 6
        assert last.view("edgeCount").value == 3
        assert set(last.edges_in(EdgeState.IN_SOLUTION)) == {"e0", "e1", "e2"}

    def test_stops_after_v_minus_one_edges(self, complete4):
        steps = execute("kruskal", complete4)
        # sort + three (consider, add) pairs + summary
        assert len(steps) == 8
        assert steps[-1].edge_states["e5"] is EdgeState.UNEXAMINED

    def test_sorted_edges_view(self, make_graph):
        g = make_graph("ABC", [("A", "B", 5), ("B", "C", 1), ("A", "C", 5)], weighted=True)
        first = execute("kruskal", g)[0]
        assert first.view("sortedEdges").as_list() == ["B-C(1)", "A-B(5)", "A-C(5)"]

    def test_cycle_edge_rejected(self, make_graph):
        g = make_graph("ABC", [("A", "B", 1), ("B", "C", 2), ("A", "C", 3), ("A", "C", 4)], weighted=True)
        # fourth edge is never reached: |V| - 1 edges are found first
        steps = execute("kruskal", g)
        assert steps[-1].view("totalWeight").value == 3

        g = make_graph("ABCD", [("A", "B", 1), ("B", "C", 2), ("A", "C", 3), ("C", "D", 4)], weighted=True)
        steps = execute("kruskal", g)
        rejects = [s for s in steps if s.current_operation == "Reject edge"]
        assert len(rejects) == 1
        assert rejects[0].edge_states["e2"] is EdgeState.REJECTED
        assert rejects[0].pseudocode_line == 5
        assert steps[-1].view("totalWeight").value == 7

    def test_disconnected_graph_gives_forest(self, disconnected):
        last = execute("kruskal", disconnected)[-1]
        assert last.view("edgeCount").value == 2
        assert last.node_states["E"] is NodeState.UNVISITED
        assert last.metrics.nodes_visited == 4

    def test_unweighted_graph_counts_edges(self, path_graph):
        path_graph.weighted = False
        last = execute("kruskal", path_graph)[-1]
        assert last.view("totalWeight").value == 3


# ========================================================================
# Prim
# ========================================================================


class TestPrim:
    def test_complete_graph_weight(self, complete4):
        last = execute("prim", complete4, AlgorithmParams(start_node_id="A"))[-1]
        assert last.view("totalWeight").value == 6
        assert last.view("nodeCount").value == 4
        assert set(last.edges_in(EdgeState.IN_SOLUTION)) == {"e0", "e1", "e2"}
        assert last.description == "Prim's complete. MST has 4 nodes with total weight: 6"

    @pytest.mark.parametrize("start", ["A", "B", "C", "D"])
    def test_weight_independent_of_start(self, complete4, start):
        last = execute("prim", complete4, AlgorithmParams(start_node_id=start))[-1]
        assert last.view("totalWeight").value == 6

    def test_key_decreased_in_place(self, make_graph):
        g = make_graph("ABC", [("A", "B", 1), ("A", "C", 5), ("B", "C", 2)], weighted=True)
        steps = execute("prim", g, AlgorithmParams(start_node_id="A"))
        adds = [s.current_operation for s in steps if s.current_operation.startswith("Add")]
        assert adds == ["Add A", "Add B", "Add C"]
        last = steps[-1]
        assert last.view("totalWeight").value == 3
        # A-C was examined, then its key was lowered via B; it is not rejected
        assert last.edge_states["e1"] is EdgeState.EXAMINING
        assert set(last.edges_in(EdgeState.IN_SOLUTION)) == {"e0", "e2"}

    def test_keys_view(self, complete4):
        first = execute("prim", complete4, AlgorithmParams(start_node_id="A"))[0]
        assert first.view("keys").as_table() == {"A": "0", "B": "∞", "C": "∞", "D": "∞"}

    def test_disconnected_nodes_join_without_edge(self, disconnected):
        last = execute("prim", disconnected, AlgorithmParams(start_node_id="A"))[-1]
        assert last.view("nodeCount").value == 5
        assert last.view("totalWeight").value == 2
        assert len(last.nodes_in(NodeState.IN_SOLUTION)) == 5

    def test_missing_start(self, complete4):
        assert execute("prim", complete4, AlgorithmParams()) == []
