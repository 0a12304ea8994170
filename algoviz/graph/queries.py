"""
queries.py — Read-only helpers over a graph snapshot
=====================================================
  • distance(a, b, metric)            – heuristic feed for A* only
  • validate_for_shortest_path(g)     – non-negative weights?
  • validate_for_topological_sort(g)  – directed?
  • format_number(x)                  – display form, ∞ for unreachable

The validators are predicates: they return a ValidationResult and never
raise.  The caller decides whether to block a run.
"""

import math
from dataclasses import dataclass
from typing import Optional

from algoviz.graph.node import Node
from algoviz.graph.graph import Graph


UNREACHABLE = "∞"


@dataclass(frozen=True)
class ValidationResult:
    valid:  bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {"valid": self.valid, "reason": self.reason}


OK = ValidationResult(True)


def distance(a: Node, b: Node, metric: str = "euclidean") -> float:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    if metric == "manhattan":
        return dx + dy
    return math.sqrt(dx * dx + dy * dy)


def validate_for_shortest_path(graph: Graph) -> ValidationResult:
    """Dijkstra, A* and Prim assume non-negative weights."""
    if graph.weighted:
        for edge in graph.edges.values():
            if edge.weight < 0:
                return ValidationResult(False, "Shortest-path and MST algorithms require non-negative edge weights")
    return OK


def validate_for_topological_sort(graph: Graph) -> ValidationResult:
    if not graph.directed:
        return ValidationResult(False, "Topological sort requires a directed graph")
    return OK


def format_number(value: float, decimals: Optional[int] = None) -> str:
    """3.0 → '3', 2.5 → '2.5', inf → '∞'; fixed decimals when asked."""
    if math.isinf(value):
        return UNREACHABLE
    if decimals is not None:
        return f"{value:.{decimals}f}"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
