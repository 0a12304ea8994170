"""
components.py — Connected Components
=====================================
Labels every node of an undirected graph with the id of its component.
Directed graphs yield no steps.

Each new unvisited node (in graph order) starts a component; a DFS from it
claims every node it can reach.  Nodes are coloured by component through a
fixed palette of NodeStates that repeats every five components.
"""

from typing import Dict, Iterator, List

from algoviz.graph import Graph, NodeState
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import group_view, value_view


PALETTE = (
    NodeState.IN_SOLUTION,
    NodeState.VISITING,
    NodeState.VISITED,
    NodeState.IN_PATH,
    NodeState.CURRENT,
)


def component_state(component_id: int) -> NodeState:
    return PALETTE[component_id % len(PALETTE)]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def ConnectedComponents(graph):",           # 0
    "    k ← 0",                                 # 1
    "    for v in V:",                           # 2
    "        if v not visited:",                 # 3
    "            explore(v, k)",                 # 4
    "            k ← k + 1",                     # 5
    "    return component",                      # 6
    "",                                          # 7
    "def explore(v, k):",                        # 8
    "    visited.add(v); component[v] ← k",      # 9
    "    for u in adj(v):",                      # 10
    "        if u not visited: explore(u, k)",   # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def connected_components(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    if graph.directed:
        return

    sb  = StepBuilder(graph)
    adj = graph.adjacency()
    component: Dict[str, int] = {}           # node → component id, in visit order

    def groups():
        named: Dict[str, List[str]] = {}
        for nid, k in component.items():
            named.setdefault(f"Component {k + 1}", []).append(sb.name(nid))
        return group_view("components", named)

    def visit(node: str, k: int) -> Step:
        component[node] = k
        sb.set_node(node, component_state(k))
        sb.count(nodes=1, operations=1)
        return sb.build(
            f"Visit {sb.name(node)}. Assign it to component {k + 1}.",
            9, f"Visit {sb.name(node)}",
            value_view("componentCount", k + 1), groups(),
        )

    yield sb.build("Start finding connected components.", 1, "Initialize", value_view("componentCount", 0))

    count = 0
    for root in graph.nodes:
        if root in component:
            continue

        yield sb.build(
            f"Start new component {count + 1} from {sb.name(root)}.",
            4, f"New component from {sb.name(root)}",
            value_view("componentCount", count + 1),
        )
        yield visit(root, count)
        stack: List[list] = [[root, 0]]           # [node, neighbour cursor]

        while stack:
            frame = stack[-1]
            node, cursor = frame
            if cursor == len(adj[node]):
                stack.pop()
                continue

            nbr = adj[node][cursor]
            frame[1] += 1
            sb.count(edges=1)
            if nbr.node_id not in component:
                sb.choose_edge(nbr.edge_id)
                yield visit(nbr.node_id, count)
                stack.append([nbr.node_id, 0])

        count += 1

    yield sb.build(
        f"Found {count} connected component(s).",
        6, "Complete",
        value_view("componentCount", count), groups(),
    )
