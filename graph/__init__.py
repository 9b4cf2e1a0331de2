"""
graph/
-----
Graph substrate for the pathfinding and ordering tracers.  Public API:

    from graph import Graph, Node, Edge, cell_id
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, GRID_DIRECTIONS, cell_id

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GRID_DIRECTIONS",
    "cell_id",
]
