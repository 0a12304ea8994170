import math
from enum import Enum
from typing import Optional, Dict, Any

from algoviz.errors import GraphError


# ---------------------------------------------------------------------------
# Node State Enum — per-step visual label, never stored on the Node itself
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED   = "unvisited"     # default grey
    VISITING    = "visiting"      # discovered / queued, not yet processed
    VISITED     = "visited"       # fully processed
    IN_PATH     = "in_path"       # on a path under construction
    IN_SOLUTION = "in_solution"   # part of the final answer
    CURRENT     = "current"       # the node being processed RIGHT NOW


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    A vertex of the graph snapshot.  Algorithms only ever read it.

    Attributes:
        id       : Unique identifier within the graph.
        label    : Human-readable name used in every step description.
        x, y     : Canvas coordinates; A* feeds them to its heuristic.
        metadata : Free-form dict owned by the editing layer.
    """

    __slots__ = ("id", "label", "x", "y", "metadata")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.id: str                  = node_id
        self.label: str               = label if label is not None else node_id
        self.x: float                 = float(x)
        self.y: float                 = float(y)
        self.metadata: Dict[str, Any] = dict(metadata or {})

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: dict, default_label: Optional[str] = None) -> "Node":
        """Raises GraphError for non-numeric or non-finite coordinates."""
        node_id = str(data["id"])
        coords = []
        for axis in ("x", "y"):
            value = data.get(axis, 0.0)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise GraphError(f"Node {node_id}: {axis} must be a finite number, got {value!r}")
            coords.append(value)
        metadata = data.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise GraphError(f"Node {node_id}: metadata must be an object")
        label = data.get("label")
        return cls(
            node_id=node_id,
            x=coords[0],
            y=coords[1],
            label=str(label) if label is not None else default_label,
            metadata=metadata,
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
