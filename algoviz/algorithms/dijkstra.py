"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra on a stable min-priority queue.

Yields a Step at:
  1. Initialise distances / push source
  2. Extract minimum (non-stale) node  →  CURRENT
  3. Each relaxation attempt           →  edge EXAMINING
  4. Successful relaxation             →  update distance, push again
  5. Target extracted                  →  path IN_SOLUTION, stop at once
  6. Queue empty                       →  "no path" (target given) or
                                          all reachable nodes IN_SOLUTION

The queue is NOT deduplicated: a node can be queued several times and
stale entries are skipped when popped.  Failed relaxations reject the
edge unless it is already part of the solution.

Correctness note: Dijkstra requires non-negative weights.  The caller
checks that with `validate_for_shortest_path` before running.
"""

import math
from typing import Dict, Iterator, List, Optional

from algoviz.graph import Graph, NodeState, format_number
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams, reconstruct_path
from algoviz.algorithms.pqueue import PriorityQueue
from algoviz.algorithms.views import list_view, table_view


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",              # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",    # 1
    "    pq ← [(0, source)]",                            # 2
    "    while pq is not empty:",                        # 3
    "        (d, u) ← pq.extract_min()",                 # 4
    "        if d > dist[u] or u is done: continue",     # 5
    "        if u == target: return path(u)",            # 6
    "        for (v, w) in adj(u):",                     # 7
    "            alt ← dist[u] + w",                     # 8
    "            if alt < dist[v]:",                     # 9
    "                dist[v] ← alt; parent[v] ← u",      # 10
    "                pq.push((alt, v))",                 # 11
    "    return dist",                                   # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    source = params.start_node_id
    target = params.end_node_id
    if graph.get_node(source) is None:
        return

    sb  = StepBuilder(graph)
    adj = graph.adjacency()

    dist:    Dict[str, float]         = {nid: math.inf for nid in graph.nodes}
    parent:  Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    visited: set                      = set()
    pq:      PriorityQueue[str]       = PriorityQueue()
    dist[source] = 0

    def distances():
        return table_view("distances", {n.label: format_number(dist[n.id]) for n in graph.nodes.values()})

    def queue():
        return list_view("priorityQueue", [f"({format_number(d)}, {sb.name(n)})" for d, n in pq.items()])

    # --- init step ---
    pq.push(source, 0)
    sb.set_node(source, NodeState.VISITING)
    sb.count(operations=1)
    yield sb.build(
        f"Initialize: set distance to {sb.name(source)} = 0, all others = ∞.",
        1, "Initialize", distances(), queue(),
    )

    # --- main loop ---
    while pq:
        d, node = pq.pop()
        sb.count(operations=1, comparisons=1)

        # stale entry or already finalised
        if d > dist[node] or node in visited:
            continue

        visited.add(node)
        sb.set_node(node, NodeState.CURRENT)
        sb.count(nodes=1)
        yield sb.build(
            f"Extract minimum: node {sb.name(node)} with distance {format_number(d)}.",
            4, f"Process {sb.name(node)}", distances(), queue(),
        )

        # -- target check --
        if target is not None and node == target:
            path = reconstruct_path(parent, target)
            sb.set_nodes(path, NodeState.IN_SOLUTION)
            for a, b in zip(path, path[1:]):
                edge = graph.get_edge_between(a, b)
                if edge:
                    sb.choose_edge(edge.id)
            yield sb.build(
                f"Target {sb.name(node)} reached! Shortest path distance: {format_number(d)}. "
                f"Path: {sb.path_text(path)}",
                6, "Path Found", distances(), list_view("path", sb.names(path)),
            )
            return

        # -- relax neighbours --
        for nbr in adj[node]:
            if nbr.node_id in visited:
                continue

            sb.count(edges=1, comparisons=1, operations=1)
            sb.examine_edge(nbr.edge_id)
            alt     = dist[node] + nbr.weight
            current = dist[nbr.node_id]
            yield sb.build(
                f"Check edge {sb.name(node)} → {sb.name(nbr.node_id)} (weight: {format_number(nbr.weight)}). "
                f"New distance: {format_number(alt)}, current: {format_number(current)}.",
                8, f"Relax edge to {sb.name(nbr.node_id)}", distances(), queue(),
            )

            if alt < current:
                dist[nbr.node_id]   = alt
                parent[nbr.node_id] = node
                pq.push(nbr.node_id, alt)
                sb.set_node(nbr.node_id, NodeState.VISITING)
                yield sb.build(
                    f"Update distance to {sb.name(nbr.node_id)}: {format_number(alt)} (via {sb.name(node)}).",
                    10, f"Update {sb.name(nbr.node_id)}", distances(), queue(),
                )
            else:
                sb.reject_edge(nbr.edge_id)

        sb.set_node(node, NodeState.VISITED)

    # --- queue drained ---
    if target is None:
        sb.set_nodes([nid for nid, dv in dist.items() if not math.isinf(dv)], NodeState.IN_SOLUTION)
        yield sb.build(
            f"Dijkstra complete. Computed shortest paths from {sb.name(source)} to all reachable nodes.",
            12, "Complete", distances(),
        )
    else:
        yield sb.build(
            f"No path found from {sb.name(source)} to {sb.name(target)}.",
            3, "No Path", distances(),
        )
