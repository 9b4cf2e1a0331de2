"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over an undirected graph.  Yields a Step at every
meaningful event:
  1. Source enqueued and marked visited
  2. Dequeue a node  →  "visit"
  3. Examine each neighbour  →  "enqueue" (new) or "seen" (already visited)
  4. Target dequeued  →  "found" with the hop-count shortest path
  5. Queue exhausted with a target never reached  →  "not_found"

Nodes are marked visited when enqueued, so each node enters the queue once.

Snapshot: {"nodes", "edges": [[a, b]], "visited", "queue", "order",
           "parent": {id: id | None}}
"""

from collections import deque
from typing import Dict, Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder
from graph import Graph


NODES: List[str] = ["0", "1", "2", "3", "4", "5", "6", "7"]
EDGES: List[tuple] = [
    ("0", "1"), ("0", "2"),
    ("1", "3"), ("1", "4"),
    ("2", "5"), ("2", "6"),
    ("3", "7"), ("4", "7"),
]
SOURCE = "0"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                   # 0
    "    queue ← [source]",                      # 1
    "    visited ← {source}",                    # 2
    "    while queue is not empty:",             # 3
    "        node ← queue.dequeue()",            # 4
    "        if node == target: return path",    # 5
    "        for neighbour in adj(node):",       # 6
    "            if neighbour not in visited:",  # 7
    "                visited.add(neighbour)",    # 8
    "                queue.enqueue(neighbour)",  # 9
    "    return visit order",                    # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    nodes: Optional[Sequence[str]] = None,
    edges: Optional[Sequence[Sequence]] = None,
    source: str = SOURCE,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:
    """
    Args:
        nodes  : Node ids (defaults to NODES).
        edges  : (a, b) pairs, traversable both ways (defaults to EDGES).
        source : Start node id.
        target : Optional goal; BFS stops when it is dequeued.
    """
    graph = Graph.from_edges(NODES if nodes is None else nodes, EDGES if edges is None else edges, directed=False)
    source = str(source)
    target = None if target is None else str(target)
    if graph.get_node(source) is None:
        raise ValueError(f"source {source!r} is not a node of the graph")

    queue = deque([source])
    visited: List[str]                  = [source]
    order:   List[str]                  = []
    parent:  Dict[str, Optional[str]]   = {source: None}

    def snap():
        return {
            "nodes": graph.node_ids(),
            "edges": [[a, b] for a, b, _ in graph.edge_list()],
            "visited": visited,
            "queue": list(queue),
            "order": order,
            "parent": parent,
        }

    sb = StepBuilder(counters=("nodes_visited", "edges_examined"))
    yield sb.emit(
        "init",
        f"Enqueue source {source} and mark it visited. BFS explores layer by layer",
        snap(),
        code_line=1,
        current=source,
    )

    found = False
    while queue:
        node = queue.popleft()
        order.append(node)
        sb.count("nodes_visited")
        yield sb.emit(
            "visit",
            f"Dequeue {node}: the earliest discovered node still waiting (FIFO)",
            snap(),
            code_line=4,
            variables={"node": node, "queue": list(queue)},
            current=node,
        )

        if node == target:
            path = _reconstruct(parent, node)
            found = True
            yield sb.emit(
                "found",
                f"Reached {target} in {len(path) - 1} hop(s): {' → '.join(path)}",
                snap(),
                code_line=5,
                variables={"node": node, "hops": len(path) - 1},
                current=node,
                path=path,
            )
            break

        for nbr, _ in graph.neighbours(node):
            sb.count("edges_examined")
            if nbr in parent:
                yield sb.emit(
                    "seen",
                    f"Edge {node}–{nbr}: {nbr} already visited, skip",
                    snap(),
                    code_line=7,
                    variables={"node": node, "neighbour": nbr},
                    current=node,
                    edge=(node, nbr),
                )
                continue
            visited.append(nbr)
            parent[nbr] = node
            queue.append(nbr)
            yield sb.emit(
                "enqueue",
                f"Edge {node}–{nbr}: {nbr} is new, mark visited and enqueue",
                snap(),
                code_line=9,
                variables={"node": node, "neighbour": nbr, "queue": list(queue)},
                current=node,
                edge=(node, nbr),
            )

    if target is not None and not found:
        yield sb.emit(
            "not_found",
            f"Queue empty: {target} is not reachable from {source}",
            snap(),
            code_line=10,
            variables={"target": target},
        )

    yield sb.done(
        f"BFS order from {source}: {' → '.join(order)}",
        snap(),
        path=_reconstruct(parent, target) if found else [],
    )


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
