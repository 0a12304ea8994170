"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows a single tree from the start node, always adding the cheapest edge
that leaves the tree.

Every node is queued up front (start with key 0, the rest with ∞).  When
a cheaper connecting edge is found the node's queue entry is lowered in
place instead of pushing a second copy; entries for nodes that are already
in the tree are skipped when popped.

Yields a Step at:
  1. Initialise keys
  2. Pop the minimum-key node  →  IN_SOLUTION, parent edge IN_SOLUTION
  3. Check each non-tree edge  →  EXAMINING
  4. Key improved              →  neighbour VISITING, key/parent updated
  5. Queue empty               →  summary with total weight

On a disconnected graph the unreachable nodes are still popped (with key
∞) and join the tree without a connecting edge.
"""

import math
from typing import Dict, Iterator, List

from algoviz.graph import Graph, NodeState, format_number
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.pqueue import PriorityQueue
from algoviz.algorithms.views import table_view, value_view


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                              # 0
    "    key[start] ← 0; key[v] ← ∞ for every other v",     # 1
    "    pq ← all vertices keyed by key",                   # 2
    "    while pq is not empty:",                           # 3
    "        u ← pq.extract_min()",                         # 4
    "        tree.add(u)  (with edge parent[u] → u)",       # 5
    "        for (v, w) in adj(u) with v not in tree:",     # 6
    "            if w < key[v]:",                           # 7
    "                parent[v] ← u",                        # 8
    "                key[v] ← w; pq.decrease(v, w)",        # 9
    "    return tree",                                      # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def prim(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    start = params.start_node_id
    if graph.get_node(start) is None:
        return

    sb  = StepBuilder(graph)
    adj = graph.adjacency()

    key:         Dict[str, float] = {}
    parent:      Dict[str, str]   = {}       # node → parent node
    parent_edge: Dict[str, str]   = {}       # node → edge id joining it to its parent
    tree:        Dict[str, bool]  = {}       # ordered set
    pq:          PriorityQueue[str] = PriorityQueue()

    for nid in graph.nodes:
        key[nid] = 0 if nid == start else math.inf
        pq.push_or_decrease(nid, key[nid])

    def keys():
        return table_view("keys", {n.label: format_number(key[n.id]) for n in graph.nodes.values()})

    total = 0

    # --- init step ---
    yield sb.build(
        f"Initialize Prim's from {sb.name(start)}. Set key[{sb.name(start)}] = 0.",
        1, "Initialize", keys(),
    )

    # --- main loop ---
    while pq:
        _, node = pq.pop()
        sb.count(operations=1)

        if node in tree:
            continue

        tree[node] = True
        sb.set_node(node, NodeState.IN_SOLUTION)
        sb.count(nodes=1)

        via = ""
        if node in parent_edge:
            sb.choose_edge(parent_edge[node])
            total += key[node]
            via = f" via edge from {sb.name(parent[node])}"

        yield sb.build(
            f"Add {sb.name(node)} to the MST{via}.",
            5, f"Add {sb.name(node)}",
            keys(), value_view("totalWeight", total), value_view("mstSize", len(tree)),
        )

        for nbr in adj[node]:
            if nbr.node_id in tree:
                continue

            sb.count(edges=1, comparisons=1)
            sb.examine_edge(nbr.edge_id)
            yield sb.build(
                f"Check edge {sb.name(node)}-{sb.name(nbr.node_id)} (weight: {format_number(nbr.weight)}). "
                f"Current key[{sb.name(nbr.node_id)}] = {format_number(key[nbr.node_id])}",
                7, f"Check {sb.name(nbr.node_id)}", keys(),
            )

            if nbr.weight < key[nbr.node_id]:
                key[nbr.node_id]         = nbr.weight
                parent[nbr.node_id]      = node
                parent_edge[nbr.node_id] = nbr.edge_id
                pq.push_or_decrease(nbr.node_id, nbr.weight)
                sb.set_node(nbr.node_id, NodeState.VISITING)
                yield sb.build(
                    f"Update key[{sb.name(nbr.node_id)}] = {format_number(nbr.weight)}, parent = {sb.name(node)}",
                    9, f"Update {sb.name(nbr.node_id)}", keys(),
                )
            else:
                sb.reject_edge(nbr.edge_id)

    # --- summary ---
    yield sb.build(
        f"Prim's complete. MST has {len(tree)} nodes with total weight: {format_number(total)}",
        10, "Complete",
        value_view("totalWeight", total), value_view("nodeCount", len(tree)),
    )
