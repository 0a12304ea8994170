"""
edge.py — Graph Edge
====================
Connects two nodes and carries a numeric weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Directedness lives on the Graph, not on the edge: the same Edge is
    order-sensitive in a directed graph and symmetric in an undirected
    one.  Its own source/target fields are never rewritten.
  - The per-step visual state lives in each Step, so an Edge has none.
"""

import math
from enum import Enum
from typing import Optional

from algoviz.errors import GraphError


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    UNEXAMINED  = "unexamined"    # thin, neutral grey
    EXAMINING   = "examining"     # the edge being looked at RIGHT NOW
    IN_SOLUTION = "in_solution"   # tree / path / MST edge
    REJECTED    = "rejected"      # explicitly discarded by the algorithm


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id     : Unique identifier within the graph.
        source : ID of the tail node.
        target : ID of the head node.
        weight : Finite numeric cost (default 1).
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(self, edge_id: str, source: str, target: str, weight: float = 1.0):
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise GraphError(f"Edge {edge_id}: weight must be a number, got {weight!r}")
        if not math.isfinite(weight):
            raise GraphError(f"Edge {edge_id}: weight must be finite, got {weight!r}")
        self.id:     str   = edge_id
        self.source: str   = source
        self.target: str   = target
        self.weight: float = weight

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str, directed: bool) -> bool:
        """True if this edge links node_a → node_b (either way when undirected)."""
        if self.source == node_a and self.target == node_b:
            return True
        return not directed and self.source == node_b and self.target == node_a

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict, default_id: Optional[str] = None) -> "Edge":
        try:
            source = str(data["source"])
            target = str(data["target"])
        except KeyError as exc:
            raise GraphError(f"Edge is missing its {exc.args[0]!r} endpoint") from exc
        edge_id = data.get("id", default_id)
        if edge_id is None:
            raise GraphError(f"Edge {source}-{target} has no id")
        return cls(
            edge_id=str(edge_id),
            source=source,
            target=target,
            weight=data.get("weight", 1),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.id}: {self.source}-{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
