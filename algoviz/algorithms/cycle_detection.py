"""
cycle_detection.py — Cycle Detection (DFS three-colouring)
===========================================================
    WHITE  – not visited yet
    GRAY   – on the current DFS path
    BLACK  – finished

An edge to a GRAY node is a back edge, which closes a cycle.  The first
back edge ends the whole run: no further node is visited.

The DFS runs on an explicit work stack of (node, arrival edge, cursor)
frames, so deep graphs never hit Python's recursion limit.  Steps come out
in exactly the order a recursive DFS would produce them.

Undirected graphs: the edge a node was entered by is not followed back to
its parent, otherwise every single edge would look like a cycle.  Two
parallel edges between the same pair still form one.
"""

from enum import Enum
from typing import Dict, Iterator, List, Optional

from algoviz.graph import Graph, NodeState
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import table_view, value_view


class Color(Enum):
    WHITE = "white"
    GRAY  = "gray"
    BLACK = "black"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def HasCycle(graph):",                              # 0
    "    color[v] ← WHITE for every v",                  # 1
    "    for v in V:",                                   # 2
    "        if color[v] == WHITE:",                     # 3
    "            if visit(v):",                          # 4
    "                return True",                       # 5
    "    return False",                                  # 6
    "",                                                  # 7
    "def visit(u):",                                     # 8
    "    color[u] ← GRAY",                               # 9
    "    for v in adj(u):",                              # 10
    "        if color[v] == GRAY: return True",          # 11
    "        if color[v] == WHITE and visit(v): return True",  # 12
    "    color[u] ← BLACK",                              # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def cycle_detection(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    sb  = StepBuilder(graph)
    adj = graph.adjacency()
    color: Dict[str, Color] = {nid: Color.WHITE for nid in graph.nodes}

    def colors():
        return table_view("colors", {n.label: color[n.id].value for n in graph.nodes.values()})

    # --- init ---
    yield sb.build("Initialize: colour all vertices WHITE.", 1, "Initialize", colors())

    cycle_edge: Optional[tuple] = None

    def visit(node: str) -> Step:
        color[node] = Color.GRAY
        sb.set_node(node, NodeState.VISITING)
        sb.count(nodes=1, operations=1)
        return sb.build(
            f"Visit {sb.name(node)}. Colour it GRAY (on the current path).",
            9, f"Visit {sb.name(node)}", colors(),
        )

    for root in graph.nodes:
        if color[root] is not Color.WHITE:
            continue

        yield sb.build(
            f"Start DFS from unvisited node {sb.name(root)}.",
            3, f"Start from {sb.name(root)}", colors(),
        )
        yield visit(root)
        stack: List[list] = [[root, None, 0]]     # [node, arrival edge id, neighbour cursor]

        while stack:
            frame = stack[-1]
            node, arrived_by, cursor = frame

            if cursor == len(adj[node]):
                stack.pop()
                color[node] = Color.BLACK
                sb.set_node(node, NodeState.VISITED)
                yield sb.build(
                    f"Finish {sb.name(node)}. Colour it BLACK (completely processed).",
                    13, f"Finish {sb.name(node)}", colors(),
                )
                continue

            nbr = adj[node][cursor]
            frame[2] += 1
            if not graph.directed and nbr.edge_id == arrived_by:
                continue

            sb.count(edges=1, comparisons=1)
            sb.examine_edge(nbr.edge_id)
            nbr_color = color[nbr.node_id]
            yield sb.build(
                f"Check neighbour {sb.name(nbr.node_id)}. Colour: {nbr_color.value}.",
                10, f"Check {sb.name(nbr.node_id)}", colors(),
            )

            if nbr_color is Color.GRAY:
                cycle_edge = (node, nbr.node_id)
                sb.choose_edge(nbr.edge_id)
                sb.set_node(nbr.node_id, NodeState.IN_SOLUTION)
                yield sb.build(
                    f"CYCLE DETECTED! Back edge from {sb.name(node)} to {sb.name(nbr.node_id)} (GRAY node).",
                    11, "Cycle Found",
                    value_view("cycleEdge", f"{sb.name(node)} → {sb.name(nbr.node_id)}"),
                )
                break

            if nbr_color is Color.WHITE:
                sb.choose_edge(nbr.edge_id)
                yield visit(nbr.node_id)
                stack.append([nbr.node_id, nbr.edge_id, 0])
            else:
                sb.reject_edge(nbr.edge_id)

        if cycle_edge:
            break

    # --- verdict ---
    if cycle_edge:
        src, dst = cycle_edge
        yield sb.build(
            f"Cycle detection complete. CYCLE FOUND via edge {sb.name(src)} → {sb.name(dst)}",
            5, "Complete - Cycle Found", value_view("hasCycle", True),
        )
    else:
        sb.set_nodes(graph.nodes, NodeState.IN_SOLUTION)
        yield sb.build(
            "Cycle detection complete. NO CYCLE found. The graph is acyclic.",
            6, "Complete - No Cycle", value_view("hasCycle", False),
        )
