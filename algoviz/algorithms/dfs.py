"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  1. Push start onto the stack
  2. Pop an already-visited node  →  skip
  3. Pop a new node               →  CURRENT, visited
  4. Push each unvisited neighbour →  edge IN_SOLUTION, neighbour VISITING
  5. Stack empty                  →  every visited node IN_SOLUTION

Neighbours are pushed in REVERSE adjacency order so that they pop in the
order a recursive DFS would visit them.  A node may sit on the stack more
than once; duplicates are filtered when popped, not when pushed, and
every pop counts towards the metrics.

The "stack" view lists the top of the stack first.
"""

from typing import Dict, Iterator, List

from algoviz.graph import Graph, NodeState
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import list_view


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                    # 0
    "    stack ← []",                            # 1
    "    stack.push(start)",                     # 2
    "    while stack is not empty:",             # 3
    "        node ← stack.pop()",                # 4
    "        if node in visited: continue",      # 5
    "        visited.add(node)",                 # 6
    "        process(node)",                     # 7
    "        for neighbour in reversed(adj(node)):", # 8
    "            stack.push(neighbour)",         # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    start = params.start_node_id
    if graph.get_node(start) is None:
        return

    sb    = StepBuilder(graph)
    adj   = graph.adjacency()
    stack: List[str] = [start]
    visited: Dict[str, bool] = {}                # ordered set

    def views():
        return (
            list_view("stack", sb.names(reversed(stack))),
            list_view("visited", sb.names(visited)),
        )

    # --- init step ---
    sb.set_node(start, NodeState.VISITING)
    sb.count(operations=1)
    yield sb.build(
        f"Start DFS from node {sb.name(start)}. Push it onto the stack.",
        2, "Initialize", *views(),
    )

    # --- main loop ---
    while stack:
        node = stack.pop()
        sb.count(operations=1, comparisons=1)

        # already visited (possible because duplicates are filtered on pop)
        if node in visited:
            yield sb.build(
                f"Node {sb.name(node)} already visited. Skip.",
                5, f"Skip {sb.name(node)}", *views(),
            )
            continue

        visited[node] = True
        sb.set_node(node, NodeState.CURRENT)
        sb.count(nodes=1)
        yield sb.build(
            f"Pop node {sb.name(node)} from the stack. Mark it visited.",
            6, f"Visit {sb.name(node)}", *views(),
        )

        for nbr in reversed(adj[node]):
            sb.count(edges=1, operations=1)

            if nbr.node_id in visited:
                sb.reject_edge(nbr.edge_id)
                continue

            sb.examine_edge(nbr.edge_id)
            stack.append(nbr.node_id)
            if sb.node_state(nbr.node_id) is NodeState.UNVISITED:
                sb.set_node(nbr.node_id, NodeState.VISITING)
            sb.choose_edge(nbr.edge_id)
            yield sb.build(
                f"Push neighbour {sb.name(nbr.node_id)} onto the stack.",
                9, f"Push {sb.name(nbr.node_id)}", *views(),
            )

        sb.set_node(node, NodeState.VISITED)

    # --- summary ---
    sb.set_nodes(visited, NodeState.IN_SOLUTION)
    yield sb.build(
        f"DFS complete. Visited {len(visited)} nodes.",
        9, "Complete",
        list_view("stack", []), list_view("visited", sb.names(visited)),
    )
