"""
node.py — Graph Node
====================
Identity, position and an obstacle flag.  Positions double as grid
coordinates (x = column, y = row) for the A* grid.
"""

from typing import Optional


class Node:
    """
    Attributes:
        id       : Unique identifier (e.g. "A", "3" or "row,col").
        label    : Human-readable name.
        x, y     : Coordinates; for grids x = column, y = row.
        blocked  : Obstacle flag — pathfinders never enter blocked nodes.
    """

    __slots__ = ("id", "label", "x", "y", "blocked")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        blocked: bool = False,
    ):
        self.id:      str   = node_id
        self.label:   str   = label or node_id
        self.x:       float = x
        self.y:       float = y
        self.blocked: bool  = blocked

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def manhattan_to(self, other: "Node") -> float:
        """|Δx| + |Δy| — admissible on 4-connected grids."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:g},{self.y:g}), blocked={self.blocked})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
