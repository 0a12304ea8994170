"""
astar.py — A* Search
=====================
Generator-based A* guided by a geometric heuristic on node positions.

Built-in heuristics (distance to the goal, scaled by HEURISTIC_SCALE so it
stays commensurate with typical edge weights):
  • euclidean   – √(Δx² + Δy²)      (default)
  • manhattan   – |Δx| + |Δy|

Differences from Dijkstra that are part of the trace:
  • A node enters the open set only the first time it is improved; later
    improvements update g/f but do not push a duplicate entry.
  • A node in the closed set is never examined again.
  • Reaching the goal stops the run immediately.

The "scores" view shows g and f for every node.
"""

import math
from typing import Callable, Dict, Iterator, List, Optional

from algoviz.graph import Graph, Node, NodeState, distance, format_number
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams, reconstruct_path
from algoviz.algorithms.pqueue import PriorityQueue
from algoviz.algorithms.views import list_view, table_view


HEURISTIC_SCALE = 1 / 100


# ---------------------------------------------------------------------------
# Built-in heuristics  (all take two Node objects, return float)
# ---------------------------------------------------------------------------
def manhattan(a: Node, b: Node) -> float:
    return distance(a, b, "manhattan")

def euclidean(a: Node, b: Node) -> float:
    return distance(a, b, "euclidean")

HEURISTICS: Dict[str, Callable[[Node, Node], float]] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
}


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(graph, start, goal, h):",                  # 0
    "    g[start] ← 0",                                   # 1
    "    f[start] ← h(start)",                            # 2
    "    open_set ← {start}",                             # 3
    "    while open_set is not empty:",                   # 4
    "        current ← node in open_set with lowest f",   # 5
    "        if current == goal: return path(current)",   # 6
    "        closed.add(current)",                        # 7
    "        for (nbr, w) in adj(current):",              # 8
    "            if nbr in closed: continue",             # 9
    "            tentative_g ← g[current] + w",           # 10
    "            if tentative_g < g[nbr]:",               # 11
    "                came_from[nbr] ← current",           # 12
    "                g[nbr] ← tentative_g; f[nbr] ← g[nbr] + h(nbr)",  # 13
    "                if nbr not in open_set: open_set.add(nbr)",    # 14
    "    return NOT FOUND",                               # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    start_node = graph.get_node(params.start_node_id)
    goal_node  = graph.get_node(params.end_node_id)
    if start_node is None or goal_node is None:
        return

    heuristic = params.heuristic if params.heuristic in HEURISTICS else "euclidean"
    h_fn      = HEURISTICS[heuristic]
    start, goal = start_node.id, goal_node.id

    sb  = StepBuilder(graph)
    adj = graph.adjacency()

    g_score:   Dict[str, float]         = {nid: math.inf for nid in graph.nodes}
    f_score:   Dict[str, float]         = {nid: math.inf for nid in graph.nodes}
    came_from: Dict[str, Optional[str]] = {}
    closed:    set                      = set()
    open_set:  PriorityQueue[str]       = PriorityQueue()

    def h(node_id: str) -> float:
        node = graph.get_node(node_id)
        if node is None:
            return math.inf
        return h_fn(node, goal_node) * HEURISTIC_SCALE

    def scores():
        return table_view("scores", {
            n.label: f"g:{format_number(g_score[n.id], 1)}, f:{format_number(f_score[n.id], 1)}"
            for n in graph.nodes.values()
        })

    def open_view():
        return list_view("openSet", sb.names(open_set.values()))

    # --- init step ---
    g_score[start] = 0
    f_score[start] = h(start)
    open_set.push(start, f_score[start])
    sb.set_node(start, NodeState.VISITING)
    yield sb.build(
        f"Initialize A*. Start: {start_node.label}, Goal: {goal_node.label}. Using {heuristic} heuristic.",
        3, "Initialize", scores(), open_view(),
    )

    # --- main loop ---
    while open_set:
        _, node = open_set.pop()
        sb.count(operations=1)
        sb.set_node(node, NodeState.CURRENT)
        yield sb.build(
            f"Select {sb.name(node)} with lowest f-score: {format_number(f_score[node], 1)}.",
            5, f"Process {sb.name(node)}", scores(), open_view(),
        )

        # -- goal check --
        if node == goal:
            path = reconstruct_path(came_from, goal)
            sb.set_nodes(path, NodeState.IN_SOLUTION)
            for a, b in zip(path, path[1:]):
                edge = graph.get_edge_between(a, b)
                if edge:
                    sb.choose_edge(edge.id)
            yield sb.build(
                f"Goal reached! Path: {sb.path_text(path)}. Cost: {format_number(g_score[goal], 1)}",
                6, "Path Found", list_view("path", sb.names(path)),
            )
            return

        closed.add(node)
        sb.set_node(node, NodeState.VISITED)
        sb.count(nodes=1)

        # -- relax neighbours --
        for nbr in adj[node]:
            if nbr.node_id in closed:
                continue

            sb.count(edges=1, comparisons=1)
            sb.examine_edge(nbr.edge_id)
            tentative_g = g_score[node] + nbr.weight
            yield sb.build(
                f"Check neighbour {sb.name(nbr.node_id)}. Tentative g: {format_number(tentative_g, 1)}, "
                f"current g: {format_number(g_score[nbr.node_id], 1)}.",
                10, f"Check {sb.name(nbr.node_id)}", scores(),
            )

            if tentative_g < g_score[nbr.node_id]:
                came_from[nbr.node_id] = node
                g_score[nbr.node_id]   = tentative_g
                f_score[nbr.node_id]   = tentative_g + h(nbr.node_id)
                if nbr.node_id not in open_set:
                    open_set.push(nbr.node_id, f_score[nbr.node_id])
                    sb.set_node(nbr.node_id, NodeState.VISITING)
                yield sb.build(
                    f"Update {sb.name(nbr.node_id)}: g={format_number(tentative_g, 1)}, "
                    f"f={format_number(f_score[nbr.node_id], 1)}.",
                    13, f"Update {sb.name(nbr.node_id)}", scores(), open_view(),
                )
            else:
                sb.reject_edge(nbr.edge_id)

    # --- not found ---
    yield sb.build(
        f"No path found from {start_node.label} to {goal_node.label}.",
        4, "No Path",
    )
