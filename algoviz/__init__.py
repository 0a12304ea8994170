"""
algoviz
=======
Step-trace engine for classic graph algorithms.  Every run turns a static
graph snapshot into an ordered list of immutable Steps that a playback
layer can scrub forward, backward or jump through without re-running.

    from algoviz.graph import Graph
    from algoviz.algorithms import execute, AlgorithmParams

    steps = execute("bfs", graph, AlgorithmParams(start_node_id="A"))
"""

__version__ = "1.0.0"
