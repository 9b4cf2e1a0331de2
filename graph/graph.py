"""
graph.py — Graph Container
===========================
The small graph substrate the pathfinding and ordering tracers run on.

Responsibilities:
  1. Node & edge storage                    (add / create / get)
  2. Adjacency queries                      (neighbours, in-degrees, …)
  3. Factory class-methods                  (from_edges, grid)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally, in edge-insertion order.  Tracers iterate
    neighbours in that order, which keeps every trace deterministic.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from graph.edge import Edge
from graph.node import Node


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool – graph-level directedness
        weighted   : bool – whether weights are meaningful
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False, weighted: bool = True):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool           = directed
        self.weighted: bool           = weighted
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, blocked: bool = False) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, x=x, y=y, blocked=blocked))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                self.create_node(end)
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1.0) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge leading from a to b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in insertion order."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def in_degrees(self) -> Dict[str, int]:
        """Incoming edge count per node (directed graphs)."""
        degrees = {nid: 0 for nid in self.nodes}
        for edge in self.edges.values():
            degrees[edge.target] += 1
        return degrees

    def edge_list(self) -> List[Tuple[str, str, float]]:
        return [(e.source, e.target, e.weight) for e in self.edges.values()]

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def from_edges(
        cls,
        node_ids: Iterable[str],
        edges: Sequence[Sequence],
        directed: bool = True,
    ) -> "Graph":
        """
        Build from an id list and (source, target[, weight]) tuples.
        Nodes keep the order of `node_ids`; unknown endpoints are appended.
        """
        g = cls(directed=directed, weighted=any(len(e) > 2 for e in edges))
        for nid in node_ids:
            g.create_node(str(nid))
        for e in edges:
            weight = e[2] if len(e) > 2 else 1.0
            g.create_edge(str(e[0]), str(e[1]), weight=weight)
        return g

    @classmethod
    def grid(
        cls,
        rows: int,
        cols: int,
        walls: Iterable[Tuple[int, int]] = (),
    ) -> "Graph":
        """
        4-connected grid.  Node ids are "row,col", x = col, y = row.
        Each cell gets directed unit edges to its in-bounds neighbours in
        the order up, down, left, right.  Wall cells are marked blocked.
        """
        wall_set = set(walls)
        g = cls(directed=True, weighted=False)
        for r in range(rows):
            for c in range(cols):
                g.create_node(cell_id(r, c), x=c, y=r, blocked=(r, c) in wall_set)
        for r in range(rows):
            for c in range(cols):
                for dr, dc in GRID_DIRECTIONS:
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < rows and 0 <= nc < cols:
                        g.create_edge(cell_id(r, c), cell_id(nr, nc), weight=1)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"


# up, down, left, right
GRID_DIRECTIONS: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def cell_id(row: int, col: int) -> str:
    return f"{row},{col}"
