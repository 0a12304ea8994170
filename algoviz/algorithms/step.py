"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a playback layer
needs to render one frame:

    • The state of EVERY node and EVERY edge (complete maps, not deltas)
    • The helper data structures (queue, stack, distances, colours, …)
    • Which line of pseudocode is executing right now
    • A plain-English description of what just happened
    • The running metrics counters

Design decisions:
  - Step is a frozen dataclass.  Each one owns private copies of its
    state maps, so mutating one Step's dict can never leak into another
    Step, and jumping to step i never depends on step i-1.
  - StepBuilder is the only writer.  It holds the LIVE maps and counters
    for one run and snapshots them on `build()`.
  - An edge that has once been part of the solution is never shown as
    rejected afterwards (`reject_edge` restores it instead).
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Tuple

from algoviz.errors import InvalidRequestError
from algoviz.graph import Graph, NodeState, EdgeState
from algoviz.algorithms.views import DataView


NO_LINE = -1   # pseudocode_line when nothing should be highlighted


@dataclass(frozen=True)
class AlgorithmMetrics:
    nodes_visited:    int = 0
    edges_examined:   int = 0
    operations_count: int = 0
    comparisons:      int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AlgorithmParams:
    """
    Attributes:
        start_node_id : Source node for traversals, shortest paths, Prim.
        end_node_id   : Target node for Dijkstra (optional) and A* (required).
        heuristic     : "euclidean" or "manhattan" (A* only).
    """

    start_node_id: Optional[str] = None
    end_node_id:   Optional[str] = None
    heuristic:     str           = "euclidean"

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AlgorithmParams":
        """
        Accepts snake_case or camelCase keys; unknown keys are ignored.
        Raises InvalidRequestError when `heuristic` is not a string.
        """
        data = data or {}
        start = data.get("start_node_id", data.get("startNodeId"))
        end = data.get("end_node_id", data.get("endNodeId"))
        heuristic = data.get("heuristic") or "euclidean"
        if not isinstance(heuristic, str):
            raise InvalidRequestError(f"'heuristic' must be a string, got {heuristic!r}")
        return cls(
            start_node_id=str(start) if start is not None else None,
            end_node_id=str(end) if end is not None else None,
            heuristic=heuristic,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number       : 1-based position of this step in the run.
        description       : Human-readable sentence for the explanation panel.
        pseudocode_line   : 0-based index into the algorithm's PSEUDOCODE, or NO_LINE.
        node_states       : {node_id: NodeState} for every node in the graph.
        edge_states       : {edge_id: EdgeState} for every edge in the graph.
        data_structures   : Named views of the helper structures.
        current_operation : Short label, e.g. "Dequeue A".
        metrics           : Counters accumulated up to and including this step.
    """

    step_number:       int
    description:       str
    pseudocode_line:   int
    node_states:       Dict[str, NodeState]
    edge_states:       Dict[str, EdgeState]
    data_structures:   Tuple[DataView, ...]    = ()
    current_operation: str                     = ""
    metrics:           AlgorithmMetrics        = field(default_factory=AlgorithmMetrics)

    def view(self, name: str) -> Optional[DataView]:
        for v in self.data_structures:
            if v.name == name:
                return v
        return None

    def nodes_in(self, state: NodeState) -> List[str]:
        return [nid for nid, s in self.node_states.items() if s is state]

    def edges_in(self, state: EdgeState) -> List[str]:
        return [eid for eid, s in self.edge_states.items() if s is state]

    def to_dict(self) -> dict:
        return {
            "step_number":       self.step_number,
            "description":       self.description,
            "pseudocode_line":   self.pseudocode_line,
            "node_states":       {k: v.value for k, v in self.node_states.items()},
            "edge_states":       {k: v.value for k, v in self.edge_states.items()},
            "data_structures":   [v.to_dict() for v in self.data_structures],
            "current_operation": self.current_operation,
            "metrics":           self.metrics.to_dict(),
        }


# ---------------------------------------------------------------------------
# Builder — the live state of one run
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that an algorithm generator drives.

    Usage inside an algorithm generator:
        sb = StepBuilder(graph)
        sb.set_node("A", NodeState.CURRENT)
        sb.count(operations=1)
        yield sb.build("Dequeue A.", 5, "Dequeue A", list_view("queue", ["B"]))
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self.node_states: Dict[str, NodeState] = {nid: NodeState.UNVISITED for nid in graph.nodes}
        self.edge_states: Dict[str, EdgeState] = {eid: EdgeState.UNEXAMINED for eid in graph.edges}
        self.metrics: Dict[str, int] = {
            "nodes_visited":    0,
            "edges_examined":   0,
            "operations_count": 0,
            "comparisons":      0,
        }
        self.step_count = 0
        self._solution_edges = set()

    # -- node helpers --
    def set_node(self, node_id: str, state: NodeState) -> None:
        if node_id in self.node_states:
            self.node_states[node_id] = state

    def set_nodes(self, node_ids: Iterable[str], state: NodeState) -> None:
        for nid in node_ids:
            self.set_node(nid, state)

    def node_state(self, node_id: str) -> Optional[NodeState]:
        return self.node_states.get(node_id)

    # -- edge helpers --
    def set_edge(self, edge_id: Optional[str], state: EdgeState) -> None:
        if edge_id is None or edge_id not in self.edge_states:
            return
        if state is EdgeState.IN_SOLUTION:
            self._solution_edges.add(edge_id)
        self.edge_states[edge_id] = state

    def examine_edge(self, edge_id: Optional[str]) -> None:
        self.set_edge(edge_id, EdgeState.EXAMINING)

    def choose_edge(self, edge_id: Optional[str]) -> None:
        self.set_edge(edge_id, EdgeState.IN_SOLUTION)

    def reject_edge(self, edge_id: Optional[str]) -> None:
        """REJECTED, unless the edge already belongs to the solution."""
        if edge_id in self._solution_edges:
            self.set_edge(edge_id, EdgeState.IN_SOLUTION)
        else:
            self.set_edge(edge_id, EdgeState.REJECTED)

    def edge_state(self, edge_id: str) -> Optional[EdgeState]:
        return self.edge_states.get(edge_id)

    # -- metrics --
    def count(self, nodes: int = 0, edges: int = 0, operations: int = 0, comparisons: int = 0) -> None:
        self.metrics["nodes_visited"]    += nodes
        self.metrics["edges_examined"]   += edges
        self.metrics["operations_count"] += operations
        self.metrics["comparisons"]      += comparisons

    # -- labels --
    def name(self, node_id: Optional[str]) -> str:
        """Label for descriptions; '?' when the node does not exist."""
        label = self.graph.label(node_id)
        return label if label is not None else "?"

    def names(self, node_ids: Iterable[str]) -> List[str]:
        return self.graph.labels(node_ids)

    def path_text(self, node_ids: Iterable[str]) -> str:
        return " → ".join(self.names(node_ids))

    # -- snapshot --
    def build(
        self,
        description: str,
        pseudocode_line: int,
        operation: str,
        *views: DataView,
    ) -> Step:
        self.step_count += 1
        return Step(
            step_number=self.step_count,
            description=description,
            pseudocode_line=pseudocode_line,
            node_states=dict(self.node_states),
            edge_states=dict(self.edge_states),
            data_structures=tuple(views),
            current_operation=operation,
            metrics=AlgorithmMetrics(**self.metrics),
        )


def reconstruct_path(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    """Walk parent pointers back from target; returns source … target."""
    path: List[str] = []
    cur: Optional[str] = target
    seen = set()
    while cur is not None and cur not in seen:
        seen.add(cur)
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
