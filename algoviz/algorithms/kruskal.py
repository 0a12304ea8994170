"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Greedy MST: take edges in ascending weight order, keep every edge that
joins two different components.

Yields a Step at:
  1. Sort the edges            →  "sortedEdges" view
  2. Consider each edge        →  edge EXAMINING
  3. Accept (different trees)  →  edge + both endpoints IN_SOLUTION
     Reject (same tree)        →  edge REJECTED
  4. Summary                   →  total weight and MST edge count

The sort is stable, so equal weights keep their original edge order.
Iteration stops as soon as the forest has |V| - 1 edges; on a disconnected
graph it simply runs out of edges first.
"""

from typing import Dict, Iterable, Iterator, List

from algoviz.graph import Edge, Graph, NodeState, format_number
from algoviz.algorithms.step import Step, StepBuilder, AlgorithmParams
from algoviz.algorithms.views import list_view, value_view


# ---------------------------------------------------------------------------
# Union-Find
# ---------------------------------------------------------------------------
class UnionFind:
    """Disjoint sets with union by rank and path compression on find."""

    def __init__(self, items: Iterable[str]):
        self.parent: Dict[str, str] = {x: x for x in items}
        self.rank:   Dict[str, int] = {x: 0 for x in self.parent}

    def find(self, x: str) -> str:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: str, b: str) -> bool:
        """Merge the sets of a and b.  False when they were already one set."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                        # 0
    "    sort edges by weight ascending",         # 1
    "    mst ← []",                               # 2
    "    make_set(v) for v in V",                 # 3
    "    for (u, v) in sorted edges:",            # 4
    "        if find(u) == find(v): reject",      # 5
    "        mst.append((u, v))",                 # 6
    "        union(u, v)",                        # 7
    "    return mst",                             # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kruskal(graph: Graph, params: AlgorithmParams) -> Iterator[Step]:
    sb  = StepBuilder(graph)
    uf  = UnionFind(graph.nodes)
    ordered = sorted(graph.connected_edges(), key=graph.effective_weight)

    mst: List[Edge] = []
    total = 0

    def edge_text(edge: Edge) -> str:
        return f"{sb.name(edge.source)}-{sb.name(edge.target)}"

    def progress():
        return (
            list_view("mstEdges", [edge_text(e) for e in mst]),
            value_view("totalWeight", total),
        )

    # --- sort step ---
    yield sb.build(
        f"Sort {len(ordered)} edges by weight.",
        1, "Sort edges",
        list_view("sortedEdges", [
            f"{edge_text(e)}({format_number(graph.effective_weight(e))})" for e in ordered
        ]),
    )

    # --- main loop ---
    for edge in ordered:
        weight = graph.effective_weight(edge)
        sb.count(edges=1, comparisons=1, operations=1)
        sb.examine_edge(edge.id)
        yield sb.build(
            f"Consider edge {edge_text(edge)} (weight: {format_number(weight)}).",
            4, "Check edge", *progress(),
        )

        if uf.union(edge.source, edge.target):
            mst.append(edge)
            total += weight
            sb.choose_edge(edge.id)
            sb.set_nodes((edge.source, edge.target), NodeState.IN_SOLUTION)
            sb.count(nodes=2)
            yield sb.build(
                f"Add edge {edge_text(edge)} to the MST. No cycle created.",
                6, "Add to MST", *progress(),
            )
        else:
            sb.reject_edge(edge.id)
            yield sb.build(
                f"Reject edge {edge_text(edge)}. It would create a cycle.",
                5, "Reject edge", *progress(),
            )

        if len(mst) == graph.node_count() - 1:
            break

    # --- summary ---
    yield sb.build(
        f"Kruskal's complete. MST has {len(mst)} edges with total weight: {format_number(total)}",
        8, "Complete",
        value_view("totalWeight", total), value_view("edgeCount", len(mst)),
    )
