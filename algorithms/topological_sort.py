"""
topological_sort.py — Kahn's Algorithm
=======================================
Generator-based topological ordering of a directed graph.

Yields a Step at:
  1. Initialise the graph
  2. In-degree counting
  3. Every enqueue of a zero in-degree node
  4. Every dequeue (node appended to the order)
  5. Every in-degree decrement of a neighbour
  6. Cycle detected (processed < |V|) — before the final done step

Snapshot: {"nodes": [ids], "edges": [[src, dst]], "in_degree": {id: n},
           "queue": [...], "order": [...]}
"""

from collections import deque
from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder
from graph import Graph


NODES: List[str] = ["A", "B", "C", "D", "E", "F"]
EDGES: List[Tuple[str, str]] = [
    ("A", "C"), ("A", "D"), ("B", "D"),
    ("C", "E"), ("D", "E"), ("D", "F"),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def kahn(graph):",                               # 0
    "    indeg ← in-degree of every node",            # 1
    "    queue ← [v for v if indeg[v] == 0]",         # 2
    "    while queue:",                               # 3
    "        u ← queue.popleft(); order.append(u)",   # 4
    "        for v in adj(u):",                       # 5
    "            indeg[v] -= 1",                      # 6
    "            if indeg[v] == 0: queue.append(v)",  # 7
    "    if len(order) < |V|: CYCLE",                 # 8
    "    return order",                               # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def topological_sort(
    nodes: Optional[Sequence[str]] = None,
    edges: Optional[Sequence[Sequence[str]]] = None,
) -> Generator[Step, None, None]:
    """
    Args:
        nodes : Node ids (defaults to NODES).
        edges : (source, target) pairs (defaults to EDGES).
    """
    graph = Graph.from_edges(NODES if nodes is None else nodes, EDGES if edges is None else edges)
    in_degree = {nid: 0 for nid in graph.node_ids()}
    queue: deque = deque()
    order: List[str] = []

    def snap():
        return {
            "nodes": graph.node_ids(),
            "edges": [[s, t] for s, t, _ in graph.edge_list()],
            "in_degree": in_degree,
            "queue": list(queue),
            "order": order,
        }

    sb = StepBuilder(counters=("edges_processed",))
    yield sb.emit(
        "init",
        f"Directed graph with {graph.node_count()} nodes and {graph.edge_count()} edges",
        snap(),
        code_line=0,
    )

    in_degree.update(graph.in_degrees())
    yield sb.emit(
        "count_degrees",
        "In-degrees: " + ", ".join(f"{k}={v}" for k, v in in_degree.items()),
        snap(),
        code_line=1,
    )

    for nid, deg in in_degree.items():
        if deg == 0:
            queue.append(nid)
            yield sb.emit(
                "enqueue",
                f"{nid} has in-degree 0: enqueue",
                snap(),
                code_line=2,
                variables={"node": nid},
                node=nid,
            )

    while queue:
        u = queue.popleft()
        order.append(u)
        yield sb.emit(
            "process",
            f"Dequeue {u} → order {order}",
            snap(),
            code_line=4,
            variables={"u": u},
            node=u,
        )
        for v, _edge in graph.neighbours(u):
            in_degree[v] -= 1
            sb.count("edges_processed")
            ready = in_degree[v] == 0
            if ready:
                queue.append(v)
            yield sb.emit(
                "decrement",
                f"Edge {u}→{v}: in-degree of {v} drops to {in_degree[v]}" + (", enqueue" if ready else ""),
                snap(),
                code_line=7 if ready else 6,
                variables={"u": u, "v": v, "indeg": in_degree[v]},
                node=v,
                edge=(u, v),
            )

    if len(order) < graph.node_count():
        stuck = [nid for nid in graph.node_ids() if nid not in order]
        yield sb.emit(
            "cycle",
            f"Only {len(order)} of {graph.node_count()} nodes processed: cycle among {stuck}",
            snap(),
            code_line=8,
            variables={"processed": len(order), "total": graph.node_count()},
            nodes=stuck,
        )
        yield sb.done("No topological order exists (graph has a cycle)", snap())
        return

    yield sb.done(f"Topological order: {' → '.join(order)}", snap())
