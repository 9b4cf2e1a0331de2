"""
edge.py — Graph Edge
====================
Connects two nodes by id and carries a weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
  - Weight defaults to 1 for unweighted graphs.
  - Default ids are derived from the endpoints ("A->B") so traces that
    mention edges are reproducible run to run.
"""

from typing import Optional


class Edge:
    """
    Attributes:
        id       : Identifier, "source->target" unless supplied.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1).
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        self.id:       str   = edge_id or f"{source}->{target}"
        self.source:   str   = source
        self.target:   str   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"
