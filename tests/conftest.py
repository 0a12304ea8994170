"""Shared test fixtures for the algorithm engine."""

import pytest

from algoviz.graph import Graph


def _build(nodes, edges, directed=False, weighted=False):
    g = Graph(directed=directed, weighted=weighted)
    for i, nid in enumerate(nodes):
        g.create_node(nid, x=i * 100, y=0)
    for i, edge in enumerate(edges):
        source, target = edge[0], edge[1]
        weight = edge[2] if len(edge) > 2 else 1
        g.create_edge(source, target, weight, edge_id=f"e{i}")
    return g


@pytest.fixture
def make_graph():
    """Factory: make_graph(["A", "B"], [("A", "B", 3)], directed=False, weighted=True)."""
    return _build


@pytest.fixture
def path_graph():
    """A - B - C - D, undirected, unweighted."""
    return _build("ABCD", [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def triangle():
    """A-B(1), B-C(2), A-C(10): the direct edge is the expensive one."""
    return _build("ABC", [("A", "B", 1), ("B", "C", 2), ("A", "C", 10)], weighted=True)


@pytest.fixture
def disconnected():
    """A-B, C-D and an isolated E."""
    return _build("ABCDE", [("A", "B"), ("C", "D")])


@pytest.fixture
def complete4():
    """K4 on A..D with weights 1..6."""
    return _build(
        "ABCD",
        [("A", "B", 1), ("A", "C", 2), ("A", "D", 3), ("B", "C", 4), ("B", "D", 5), ("C", "D", 6)],
        weighted=True,
    )


@pytest.fixture
def dag():
    """A→B, B→C, A→C."""
    return _build("ABC", [("A", "B"), ("B", "C"), ("A", "C")], directed=True)


@pytest.fixture
def directed_cycle():
    """A→B→C→A."""
    return _build("ABC", [("A", "B"), ("B", "C"), ("C", "A")], directed=True)


@pytest.fixture
def graph_json():
    """Dict form of a small weighted undirected graph, as the API receives it."""
    return {
        "directed": False,
        "weighted": True,
        "nodes": [
            {"id": "A", "x": 0, "y": 0},
            {"id": "B", "x": 100, "y": 0},
            {"id": "C", "x": 200, "y": 0},
        ],
        "edges": [
            {"id": "e0", "source": "A", "target": "B", "weight": 1},
            {"id": "e1", "source": "B", "target": "C", "weight": 2},
            {"id": "e2", "source": "A", "target": "C", "weight": 10},
        ],
    }
