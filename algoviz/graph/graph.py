"""
graph.py — Graph Snapshot
=========================
Single source of truth for the graph an algorithm runs on.  Executors
and the registry only read it; nothing in the engine mutates a Graph
after it has been handed to `execute`.

Responsibilities:
  1. Build a snapshot                       (add_node / add_edge / create_*)
  2. Adjacency queries                      (adjacency, outgoing)
  3. Edge lookup                            (get_edge_between)
  4. Serialisation round-trip               (to_dict / from_dict)
  5. Integrity report                       (integrity_problems)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id; dict insertion order
    IS the graph order every algorithm iterates in.
  - `adjacency()` is rebuilt on every call so each run owns its own map.
  - An edge whose endpoint is missing is kept (it still gets a visual
    state) but never shows up in adjacency queries.
"""

from typing import Dict, List, NamedTuple, Optional, Iterable

from algoviz.errors import GraphError
from algoviz.graph.node import Node
from algoviz.graph.edge import Edge


class Neighbor(NamedTuple):
    node_id: str
    weight:  float
    edge_id: str


def generate_label(index: int) -> str:
    """0 → 'A', 25 → 'Z', 26 → 'AA', 27 → 'AB', …"""
    label = ""
    num = index
    while True:
        label = chr(65 + num % 26) + label
        num = num // 26 - 1
        if num < 0:
            return label


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}  (ordered)
        edges    : {edge_id: Edge}  (ordered)
        directed : bool – edges are one-way when True
        weighted : bool – when False every edge costs 1
    """

    def __init__(self, directed: bool = False, weighted: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self.weighted: bool            = weighted

    # ==================================================================
    # BUILDING
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise GraphError(f"Duplicate node id: {node.id}")
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id, x=x, y=y, label=label))

    def add_edge(self, edge: Edge) -> Edge:
        if edge.id in self.edges:
            raise GraphError(f"Duplicate edge id: {edge.id}")
        self.edges[edge.id] = edge
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1, edge_id: Optional[str] = None) -> Edge:
        if edge_id is None:
            edge_id = f"e{len(self.edges)}"
            while edge_id in self.edges:
                edge_id += "'"
        return self.add_edge(Edge(edge_id, source, target, weight))

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self.nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def label(self, node_id: Optional[str]) -> Optional[str]:
        """Label of a node, or None when the id does not resolve."""
        node = self.get_node(node_id)
        return node.label if node else None

    def labels(self, node_ids: Iterable[str]) -> List[str]:
        """Labels for the ids that resolve; unknown ids are left out."""
        return [self.nodes[n].label for n in node_ids if n in self.nodes]

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware).  None when absent."""
        for edge in self.edges.values():
            if edge.connects(a, b, self.directed):
                return edge
        return None

    def effective_weight(self, edge: Edge) -> float:
        return edge.weight if self.weighted else 1

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def connected_edges(self) -> List[Edge]:
        """Edges whose two endpoints both exist, in graph order."""
        return [e for e in self.edges.values() if e.source in self.nodes and e.target in self.nodes]

    def adjacency(self) -> Dict[str, List[Neighbor]]:
        """
        {node_id: [Neighbor(node_id, weight, edge_id)]} in edge order.
        An undirected edge contributes one entry at each endpoint.
        """
        adj: Dict[str, List[Neighbor]] = {nid: [] for nid in self.nodes}
        for edge in self.connected_edges():
            weight = self.effective_weight(edge)
            adj[edge.source].append(Neighbor(edge.target, weight, edge.id))
            if not self.directed:
                adj[edge.target].append(Neighbor(edge.source, weight, edge.id))
        return adj

    def outgoing(self, node_id: str) -> List[Edge]:
        """Edges leaving node_id in a directed reading (source == node_id)."""
        return [e for e in self.connected_edges() if e.source == node_id]

    # ==================================================================
    # INTEGRITY
    # ==================================================================
    def integrity_problems(self) -> List[str]:
        problems = []
        for edge in self.edges.values():
            for end in (edge.source, edge.target):
                if end not in self.nodes:
                    problems.append(f"Edge {edge.id} references missing node {end}")
        return problems

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "weighted": self.weighted,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict, strict: bool = True) -> "Graph":
        """
        Build a Graph from its dict form.

        Raises GraphError on duplicate ids, malformed entries or (when
        `strict`) edges that reference missing nodes.
        """
        if not isinstance(data, dict):
            raise GraphError("Graph data must be an object")
        for flag in ("directed", "weighted"):
            if not isinstance(data.get(flag, False), bool):
                raise GraphError(f"'{flag}' must be true or false, got {data[flag]!r}")
        for section in ("nodes", "edges"):
            if not isinstance(data.get(section, []), list):
                raise GraphError(f"'{section}' must be a list")

        g = cls(directed=data.get("directed", False), weighted=data.get("weighted", False))
        for i, nd in enumerate(data.get("nodes", [])):
            if not isinstance(nd, dict) or "id" not in nd:
                raise GraphError(f"Node #{i} has no id")
            g.add_node(Node.from_dict(nd, default_label=generate_label(i)))
        for i, ed in enumerate(data.get("edges", [])):
            if not isinstance(ed, dict):
                raise GraphError(f"Edge #{i} is not an object")
            g.add_edge(Edge.from_dict(ed, default_id=f"e{i}"))
        if strict:
            problems = g.integrity_problems()
            if problems:
                raise GraphError("; ".join(problems))
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"
