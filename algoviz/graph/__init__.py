"""
graph/
-----
Core data layer.  Public API:

    from algoviz.graph import Graph, Node, Edge
    from algoviz.graph import NodeState, EdgeState
"""

from algoviz.graph.node    import Node,  NodeState
from algoviz.graph.edge    import Edge,  EdgeState
from algoviz.graph.graph   import Graph, Neighbor, generate_label
from algoviz.graph.queries import (
    UNREACHABLE,
    ValidationResult,
    distance,
    format_number,
    validate_for_shortest_path,
    validate_for_topological_sort,
)

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "Graph",     "Neighbor",
    "generate_label",
    "UNREACHABLE",
    "ValidationResult",
    "distance",
    "format_number",
    "validate_for_shortest_path",
    "validate_for_topological_sort",
]
