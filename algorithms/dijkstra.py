"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq) on a small directed,
weighted graph.  Computes distances to every node; `target` only picks
which path the final step highlights.

Yields a Step at:
  1. Initialise distances / push source
  2. Pop minimum-distance node  →  "visit"
  3. Stale heap entry popped    →  "skip"
  4. Each relaxation attempt    →  "relax" (improved) or "no_change"
  5. Done, with the shortest-path tree

Snapshot: {"nodes", "edges": [[src, dst, w]], "distances": {id: d | None},
           "previous": {id: id | None}, "visited": [...], "queue": [[d, id]]}
None in "distances" means ∞ (not reached yet).

Correctness note: Dijkstra requires non-negative weights.
"""

import heapq
from typing import Dict, Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder
from graph import Graph


NODES: List[str] = ["0", "1", "2", "3", "4", "5"]
EDGES: List[tuple] = [
    ("0", "1", 4), ("0", "2", 2),
    ("1", "3", 5),
    ("2", "1", 1), ("2", "4", 4),
    ("3", "5", 2),
    ("4", "3", 1), ("4", "5", 3),
]
SOURCE = "0"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    pq ← [(0, source)]",                      # 3
    "    while pq is not empty:",                  # 4
    "        (d, node) ← pq.pop_min()",            # 5
    "        if d > dist[node]: continue",         # 6
    "        for (neighbour, w) in adj(node):",    # 7
    "            new_dist ← dist[node] + w",       # 8
    "            if new_dist < dist[neighbour]:",  # 9
    "                dist[neighbour] ← new_dist",  # 10
    "                prev[neighbour] ← node",      # 11
    "                pq.push((new_dist, nbr))",    # 12
    "    return dist, prev",                       # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    nodes: Optional[Sequence[str]] = None,
    edges: Optional[Sequence[Sequence]] = None,
    source: str = SOURCE,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:
    """
    Args:
        nodes  : Node ids (defaults to NODES).
        edges  : (source, target, weight) triples (defaults to EDGES).
        source : Start node id.
        target : Optional node whose shortest path the done step highlights.
    """
    graph = Graph.from_edges(NODES if nodes is None else nodes, EDGES if edges is None else edges)
    source = str(source)
    if graph.get_node(source) is None:
        raise ValueError(f"source {source!r} is not a node of the graph")

    INF = float("inf")
    dist: Dict[str, float]              = {nid: INF for nid in graph.nodes}
    prev: Dict[str, Optional[str]]      = {nid: None for nid in graph.nodes}
    visited: List[str]                  = []
    dist[source] = 0
    pq = [(0, source)]

    def snap():
        return {
            "nodes": graph.node_ids(),
            "edges": [[s, t, w] for s, t, w in graph.edge_list()],
            "distances": {nid: (None if d == INF else d) for nid, d in dist.items()},
            "previous": prev,
            "visited": visited,
            "queue": [[d, n] for d, n in sorted(pq)],
        }

    sb = StepBuilder(counters=("relaxations",))
    yield sb.emit(
        "init",
        f"All distances ∞ except source {source} = 0. Push ({source}, 0)",
        snap(),
        code_line=3,
        current=source,
    )

    while pq:
        d, node = heapq.heappop(pq)

        if d > dist[node]:
            yield sb.emit(
                "skip",
                f"Pop ({node}, {d}): stale entry, best known is {dist[node]}. Skip",
                snap(),
                code_line=6,
                variables={"node": node, "d": d},
                current=node,
            )
            continue

        visited.append(node)
        yield sb.emit(
            "visit",
            f"Pop {node} with distance {d}: smallest in the queue, now final",
            snap(),
            code_line=5,
            variables={"node": node, "d": d},
            current=node,
        )

        for nbr, edge in graph.neighbours(node):
            new_dist = dist[node] + edge.weight
            sb.count("relaxations")
            if new_dist < dist[nbr]:
                old = dist[nbr]
                dist[nbr] = new_dist
                prev[nbr] = node
                heapq.heappush(pq, (new_dist, nbr))
                yield sb.emit(
                    "relax",
                    f"Relax {node}→{nbr}: {dist[node]} + {edge.weight:g} = {new_dist:g} "
                    f"< {'∞' if old == INF else f'{old:g}'} → update",
                    snap(),
                    code_line=10,
                    variables={"node": node, "neighbour": nbr, "new_dist": new_dist},
                    current=node,
                    edge=(node, nbr),
                )
            else:
                yield sb.emit(
                    "no_change",
                    f"Edge {node}→{nbr}: {dist[node]} + {edge.weight:g} = {new_dist:g} "
                    f"≥ {dist[nbr]:g} → no improvement",
                    snap(),
                    code_line=9,
                    variables={"node": node, "neighbour": nbr, "new_dist": new_dist},
                    current=node,
                    edge=(node, nbr),
                )

    unreachable = [nid for nid, d in dist.items() if d == INF]
    path = _reconstruct(prev, source, target) if target is not None else []
    summary = ", ".join(f"{nid}={'∞' if d == INF else f'{d:g}'}" for nid, d in dist.items())
    yield sb.done(
        f"Shortest distances from {source}: {summary}"
        + (f". Unreachable: {unreachable}" if unreachable else ""),
        snap(),
        path=path,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _reconstruct(prev: Dict[str, Optional[str]], source: str, target: str) -> List[str]:
    if target not in prev:
        return []
    path, cur = [], target
    while cur is not None:
        path.append(cur)
        cur = prev.get(cur)
    path.reverse()
    return path if path[0] == source else []
