"""
topological.py — Topological Sort (Kahn's Algorithm)
=====================================================
Repeatedly removes a node with in-degree 0 and lowers the in-degree of its
successors.  Works on directed graphs only; an undirected graph yields no
steps at all.

If some nodes never reach in-degree 0 the graph has a cycle: the run ends
with a "Cycle Detected" step and a partial result.
"""

from collections import deque
from typing import Dict, Iterator, List

from algoviz.graph import Graph, NodeState
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import list_view, table_view


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def TopologicalSort(graph):",                       # 0
    "    compute in_degree[v] for every v",              # 1
    "    queue ← [v for v in V if in_degree[v] == 0]",   # 2
    "    result ← []",                                   # 3
    "    while queue is not empty:",                     # 4
    "        u ← queue.dequeue()",                       # 5
    "        result.append(u)",                          # 6
    "        for (u, v) in out_edges(u):",               # 7
    "            in_degree[v] ← in_degree[v] - 1",       # 8
    "            if in_degree[v] == 0: queue.enqueue(v)",# 9
    "    if len(result) < |V|: cycle detected",          # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def topological_sort(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    if not graph.directed:
        return

    sb = StepBuilder(graph)
    in_degree: Dict[str, int] = {nid: 0 for nid in graph.nodes}
    for edge in graph.connected_edges():
        in_degree[edge.target] += 1

    queue:  deque     = deque()
    result: List[str] = []

    def degrees():
        return table_view("inDegrees", {n.label: in_degree[n.id] for n in graph.nodes.values()})

    def views():
        return (
            degrees(),
            list_view("queue", sb.names(queue)),
            list_view("result", sb.names(result)),
        )

    # --- in-degrees ---
    yield sb.build("Calculate the in-degree of each vertex.", 1, "Calculate in-degrees", degrees())

    # --- seed queue ---
    for nid, deg in in_degree.items():
        if deg == 0:
            queue.append(nid)
            sb.set_node(nid, NodeState.VISITING)
    yield sb.build(
        f"Initialize queue with nodes having in-degree 0: {', '.join(sb.names(queue))}",
        2, "Initialize queue", degrees(), list_view("queue", sb.names(queue)),
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        result.append(node)
        sb.count(nodes=1, operations=1)
        sb.set_node(node, NodeState.CURRENT)
        yield sb.build(
            f"Dequeue {sb.name(node)}. Add it to the result.",
            5, f"Process {sb.name(node)}", *views(),
        )

        for edge in graph.outgoing(node):
            target = edge.target
            sb.count(edges=1)
            sb.choose_edge(edge.id)
            in_degree[target] -= 1
            yield sb.build(
                f"Decrement in-degree of {sb.name(target)} to {in_degree[target]}.",
                8, f"Update {sb.name(target)}", *views(),
            )

            if in_degree[target] == 0:
                queue.append(target)
                sb.set_node(target, NodeState.VISITING)
                yield sb.build(
                    f"{sb.name(target)} has in-degree 0. Add it to the queue.",
                    9, f"Enqueue {sb.name(target)}", *views(),
                )

        sb.set_node(node, NodeState.IN_SOLUTION)

    # --- result ---
    if len(result) < graph.node_count():
        yield sb.build(
            f"Cycle detected! Only {len(result)} of {graph.node_count()} nodes processed.",
            10, "Cycle Detected", list_view("result", sb.names(result)),
        )
    else:
        yield sb.build(
            f"Topological sort complete: {sb.path_text(result)}",
            10, "Complete", list_view("result", sb.names(result)),
        )
