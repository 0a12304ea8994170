"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algoviz.algorithms import REGISTRY, get_algorithm, execute

REGISTRY is an ordered dict:
    {
        "bfs": AlgorithmConfig(id, name, category, fn, pseudocode, requires_*, …),
        …
    }

AlgorithmConfig is a frozen dataclass.  The engine, the recorder and the
HTTP layer all consume it, so adding a new algorithm is: write the
generator, add one entry here.

Every executor is a generator; `AlgorithmConfig.execute` drains it into a
list, so a run is complete (and replayable) the moment it returns.  A run
whose parameters do not fit the algorithm simply comes back empty.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from algoviz.errors import UnknownAlgorithmError
from algoviz.graph import Graph, ValidationResult
from algoviz.algorithms.step import Step, AlgorithmParams, AlgorithmMetrics, StepBuilder, NO_LINE

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algoviz.algorithms.bfs             import bfs                  as _bfs,   PSEUDOCODE as _bfs_pc
from algoviz.algorithms.dfs             import dfs                  as _dfs,   PSEUDOCODE as _dfs_pc
from algoviz.algorithms.dijkstra        import dijkstra             as _dij,   PSEUDOCODE as _dij_pc
from algoviz.algorithms.astar           import astar                as _ast,   PSEUDOCODE as _ast_pc
from algoviz.algorithms.kruskal         import kruskal              as _kru,   PSEUDOCODE as _kru_pc
from algoviz.algorithms.prim            import prim                 as _prim,  PSEUDOCODE as _prim_pc
from algoviz.algorithms.topological     import topological_sort     as _topo,  PSEUDOCODE as _topo_pc
from algoviz.algorithms.cycle_detection import cycle_detection      as _cyc,   PSEUDOCODE as _cyc_pc
from algoviz.algorithms.components      import connected_components as _cc,    PSEUDOCODE as _cc_pc


logger = logging.getLogger(__name__)

Executor = Callable[[Graph, AlgorithmParams], Iterator[Step]]


class Category(Enum):
    TRAVERSAL     = "traversal"
    SHORTEST_PATH = "shortestPath"
    MST           = "mst"
    OTHER         = "other"


CATEGORY_NAMES: Dict[Category, str] = {
    Category.TRAVERSAL:     "Traversal",
    Category.SHORTEST_PATH: "Shortest Path",
    Category.MST:           "Minimum Spanning Tree",
    Category.OTHER:         "Other Algorithms",
}


# ---------------------------------------------------------------------------
# AlgorithmConfig — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmConfig:
    id:                    str                    # registry key, e.g. "bfs"
    name:                  str                    # human label, e.g. "Breadth-First Search"
    category:              Category
    fn:                    Executor               # the generator function
    pseudocode:            Tuple[str, ...]        # lines for the side-panel
    description:           str            = ""    # one-liner for the UI card
    time_complexity:       str            = ""    # e.g. "O(V + E)"
    space_complexity:      str            = ""    # e.g. "O(V)"
    requires_weighted:     bool           = False
    requires_directed:     Optional[bool] = None  # True / False / None = either
    requires_start_node:   bool           = False
    requires_end_node:     bool           = False
    requires_non_negative: bool           = False  # Dijkstra / A* / Prim
    has_heuristic:         bool           = False  # expose heuristic selector?
    tags:                  Tuple[str, ...] = field(default=())

    def execute(self, graph: Graph, params: Optional[AlgorithmParams] = None) -> List[Step]:
        """Run to completion and return every step.  Never mutates `graph`."""
        steps = list(self.fn(graph, params or AlgorithmParams()))
        logger.debug("%s produced %d steps on %r", self.id, len(steps), graph)
        return steps

    def to_dict(self) -> dict:
        return {
            "id":                    self.id,
            "name":                  self.name,
            "category":              self.category.value,
            "description":           self.description,
            "time_complexity":       self.time_complexity,
            "space_complexity":      self.space_complexity,
            "pseudocode":            list(self.pseudocode),
            "requires_weighted":     self.requires_weighted,
            "requires_directed":     self.requires_directed,
            "requires_start_node":   self.requires_start_node,
            "requires_end_node":     self.requires_end_node,
            "requires_non_negative": self.requires_non_negative,
            "has_heuristic":         self.has_heuristic,
            "tags":                  list(self.tags),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgorithmConfig] = {

    "bfs": AlgorithmConfig(
        id="bfs", name="Breadth-First Search", category=Category.TRAVERSAL,
        fn=_bfs, pseudocode=tuple(_bfs_pc),
        requires_start_node=True,
        time_complexity="O(V + E)", space_complexity="O(V)",
        tags=("unweighted", "traversal"),
        description="Explores layer by layer using a queue. Finds shortest paths by hop count.",
    ),

    "dfs": AlgorithmConfig(
        id="dfs", name="Depth-First Search", category=Category.TRAVERSAL,
        fn=_dfs, pseudocode=tuple(_dfs_pc),
        requires_start_node=True,
        time_complexity="O(V + E)", space_complexity="O(V)",
        tags=("unweighted", "traversal"),
        description="Dives as deep as possible along each branch before backtracking. Uses a stack.",
    ),

    "dijkstra": AlgorithmConfig(
        id="dijkstra", name="Dijkstra's Algorithm", category=Category.SHORTEST_PATH,
        fn=_dij, pseudocode=tuple(_dij_pc),
        requires_start_node=True, requires_non_negative=True,
        time_complexity="O((V + E) log V)", space_complexity="O(V)",
        tags=("weighted", "shortest-path"),
        description="Shortest paths from a source in a graph with non-negative weights. The target is optional.",
    ),

    "astar": AlgorithmConfig(
        id="astar", name="A* Search", category=Category.SHORTEST_PATH,
        fn=_ast, pseudocode=tuple(_ast_pc),
        requires_start_node=True, requires_end_node=True, requires_non_negative=True,
        has_heuristic=True,
        time_complexity="O(E)", space_complexity="O(V)",
        tags=("weighted", "shortest-path", "heuristic"),
        description="Dijkstra guided by a distance heuristic towards the goal.",
    ),

    "kruskal": AlgorithmConfig(
        id="kruskal", name="Kruskal's Algorithm", category=Category.MST,
        fn=_kru, pseudocode=tuple(_kru_pc),
        requires_directed=False,
        time_complexity="O(E log E)", space_complexity="O(V)",
        tags=("weighted", "mst", "union-find"),
        description="Greedily adds the lightest edge that does not create a cycle.",
    ),

    "prim": AlgorithmConfig(
        id="prim", name="Prim's Algorithm", category=Category.MST,
        fn=_prim, pseudocode=tuple(_prim_pc),
        requires_directed=False, requires_start_node=True, requires_non_negative=True,
        time_complexity="O((V + E) log V)", space_complexity="O(V)",
        tags=("weighted", "mst"),
        description="Grows one tree from the start node, always taking the cheapest edge leaving it.",
    ),

    "topological": AlgorithmConfig(
        id="topological", name="Topological Sort", category=Category.OTHER,
        fn=_topo, pseudocode=tuple(_topo_pc),
        requires_directed=True,
        time_complexity="O(V + E)", space_complexity="O(V)",
        tags=("dag", "ordering"),
        description="Kahn's algorithm: orders a DAG so every edge u → v has u before v.",
    ),

    "cycleDetection": AlgorithmConfig(
        id="cycleDetection", name="Cycle Detection", category=Category.OTHER,
        fn=_cyc, pseudocode=tuple(_cyc_pc),
        time_complexity="O(V + E)", space_complexity="O(V)",
        tags=("dfs", "cycles"),
        description="DFS with white/gray/black colouring. A back edge to a gray node closes a cycle.",
    ),

    "connectedComponents": AlgorithmConfig(
        id="connectedComponents", name="Connected Components", category=Category.OTHER,
        fn=_cc, pseudocode=tuple(_cc_pc),
        requires_directed=False,
        time_complexity="O(V + E)", space_complexity="O(V)",
        tags=("dfs", "components"),
        description="Finds every connected component of an undirected graph with DFS.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(algorithm_id: str) -> Optional[AlgorithmConfig]:
    """Return the AlgorithmConfig for an id, or None."""
    return REGISTRY.get(algorithm_id)


def list_algorithms() -> List[AlgorithmConfig]:
    """Return all registered algorithms in registration order."""
    return list(REGISTRY.values())


def algorithms_by_category() -> Dict[Category, List[AlgorithmConfig]]:
    groups: Dict[Category, List[AlgorithmConfig]] = {c: [] for c in Category}
    for algo in REGISTRY.values():
        groups[algo.category].append(algo)
    return groups


def algorithms_by_tag(tag: str) -> List[AlgorithmConfig]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Preconditions  (predicates, never raise)
# ---------------------------------------------------------------------------
def is_valid_for_graph(algorithm_id: str, graph: Graph) -> ValidationResult:
    """Directedness only; start/end nodes are checked by `check_params`."""
    algo = get_algorithm(algorithm_id)
    if algo is None:
        return ValidationResult(False, "Algorithm not found")
    if algo.requires_directed is True and not graph.directed:
        return ValidationResult(False, "This algorithm requires a directed graph")
    if algo.requires_directed is False and graph.directed:
        return ValidationResult(False, "This algorithm requires an undirected graph")
    return ValidationResult(True)


def check_params(algorithm_id: str, graph: Graph, params: AlgorithmParams) -> ValidationResult:
    algo = get_algorithm(algorithm_id)
    if algo is None:
        return ValidationResult(False, "Algorithm not found")
    if algo.requires_start_node:
        if params.start_node_id is None:
            return ValidationResult(False, "Select a start node")
        if graph.get_node(params.start_node_id) is None:
            return ValidationResult(False, f"Start node {params.start_node_id} does not exist")
    if algo.requires_end_node:
        if params.end_node_id is None:
            return ValidationResult(False, "Select an end node")
        if graph.get_node(params.end_node_id) is None:
            return ValidationResult(False, f"End node {params.end_node_id} does not exist")
    return ValidationResult(True)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------
def execute(algorithm_id: str, graph: Graph, params: Optional[AlgorithmParams] = None) -> List[Step]:
    """
    Run an algorithm by id.

    Raises UnknownAlgorithmError for an id that is not registered.  Any
    other unmet precondition yields an empty list.
    """
    algo = get_algorithm(algorithm_id)
    if algo is None:
        raise UnknownAlgorithmError(algorithm_id)
    return algo.execute(graph, params)


__all__ = [
    "AlgorithmConfig",
    "AlgorithmMetrics",
    "AlgorithmParams",
    "Category",
    "CATEGORY_NAMES",
    "NO_LINE",
    "REGISTRY",
    "Step",
    "StepBuilder",
    "algorithms_by_category",
    "algorithms_by_tag",
    "check_params",
    "execute",
    "get_algorithm",
    "is_valid_for_graph",
    "list_algorithms",
]
