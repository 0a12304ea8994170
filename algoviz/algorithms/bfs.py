"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS from a start node.  Yields a Step at every event:
  1. Start             →  start node VISITING, placed in the queue
  2. Dequeue a node    →  mark it CURRENT
  3. Examine an edge   →  edge EXAMINING, then IN_SOLUTION (tree edge)
                          or REJECTED (neighbour already seen)
  4. Discover a node   →  mark it VISITING, enqueue
  5. Finish a node     →  mark it VISITED
  6. Summary           →  every reachable node IN_SOLUTION

Neighbours are examined in adjacency (edge insertion) order, never sorted.
Pseudocode lines are 0-indexed and match the PSEUDOCODE constant.
"""

from collections import deque
from typing import Dict, Iterator, List

from algoviz.graph import Graph, NodeState
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import list_view


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                    # 0
    "    queue ← [start]",                       # 1
    "    visited ← {start}",                     # 2
    "    while queue is not empty:",             # 3
    "        node ← queue.dequeue()",            # 4
    "        for neighbour in adj(node):",       # 5
    "            if neighbour not in visited:",  # 6
    "                visited.add(neighbour)",    # 7
    "                queue.enqueue(neighbour)",  # 8
    "        node is finished",                  # 9
    "    return visited",                        # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    """
    Yields Step snapshots for every event during BFS execution.
    Yields nothing when the start node is missing or unknown.
    """
    start = params.start_node_id
    if graph.get_node(start) is None:
        return

    sb    = StepBuilder(graph)
    adj   = graph.adjacency()
    queue = deque([start])
    visited: Dict[str, bool] = {start: True}     # ordered set

    def views():
        return (
            list_view("queue", sb.names(queue)),
            list_view("visited", sb.names(visited)),
        )

    # --- initialisation step ---
    sb.set_node(start, NodeState.VISITING)
    sb.count(nodes=1, operations=1)
    yield sb.build(
        f"Start BFS from node {sb.name(start)}. Add it to the queue.",
        1, "Initialize", *views(),
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        sb.set_node(node, NodeState.CURRENT)
        sb.count(operations=1)
        yield sb.build(
            f"Dequeue node {sb.name(node)} from the queue.",
            4, f"Dequeue {sb.name(node)}", *views(),
        )

        for nbr in adj[node]:
            sb.count(edges=1, comparisons=1, operations=1)
            sb.examine_edge(nbr.edge_id)
            yield sb.build(
                f"Examine edge from {sb.name(node)} to {sb.name(nbr.node_id)}.",
                5, f"Check neighbour {sb.name(nbr.node_id)}", *views(),
            )

            if nbr.node_id not in visited:
                visited[nbr.node_id] = True
                queue.append(nbr.node_id)
                sb.set_node(nbr.node_id, NodeState.VISITING)
                sb.choose_edge(nbr.edge_id)
                sb.count(nodes=1)
                yield sb.build(
                    f"Node {sb.name(nbr.node_id)} not visited. Mark it visited and add it to the queue.",
                    7, f"Enqueue {sb.name(nbr.node_id)}", *views(),
                )
            else:
                sb.reject_edge(nbr.edge_id)

        sb.set_node(node, NodeState.VISITED)
        yield sb.build(
            f"Finished processing node {sb.name(node)}.",
            9, f"Complete {sb.name(node)}", *views(),
        )

    # --- summary ---
    sb.set_nodes(visited, NodeState.IN_SOLUTION)
    yield sb.build(
        f"BFS complete. Visited {len(visited)} nodes.",
        10, "Complete",
        list_view("queue", []), list_view("visited", sb.names(visited)),
    )
