"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  1. Push source onto stack
  2. Pop a node already visited  →  "skip"
  3. Pop a new node  →  "visit"
  4. Push each unvisited neighbour  →  "push"
  5. Target popped  →  "found" with the DFS-tree path
  6. Stack empty with a target never reached  →  "not_found"

Nodes are marked visited when popped, so a node can sit on the stack more
than once.  Neighbours are pushed in reverse so the lowest one is explored
first.  Each stack entry remembers who pushed it; that pusher becomes the
parent when the entry is popped.

Snapshot: {"nodes", "edges": [[a, b]], "visited", "stack" (bottom → top),
           "order", "parent": {id: id | None}}
"""

from typing import Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.bfs import EDGES, NODES, SOURCE, _reconstruct
from algorithms.step import Step, StepBuilder
from graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, source):",                   # 0
    "    stack ← [source]",                      # 1
    "    while stack is not empty:",             # 2
    "        node ← stack.pop()",                # 3
    "        if node in visited: continue",      # 4
    "        visited.add(node)",                 # 5
    "        if node == target: return path",    # 6
    "        for neighbour in reversed(adj(node)):",  # 7
    "            if neighbour not in visited:",  # 8
    "                stack.push(neighbour)",     # 9
    "    return visit order",                    # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(
    nodes: Optional[Sequence[str]] = None,
    edges: Optional[Sequence[Sequence]] = None,
    source: str = SOURCE,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:
    """
    Args:
        nodes  : Node ids (defaults to the BFS sample graph).
        edges  : (a, b) pairs, traversable both ways.
        source : Start node id.
        target : Optional goal; DFS stops when it is popped.
    """
    graph = Graph.from_edges(NODES if nodes is None else nodes, EDGES if edges is None else edges, directed=False)
    source = str(source)
    target = None if target is None else str(target)
    if graph.get_node(source) is None:
        raise ValueError(f"source {source!r} is not a node of the graph")

    stack:   List[Tuple[str, Optional[str]]] = [(source, None)]
    visited: List[str]                       = []
    order:   List[str]                       = []
    parent:  Dict[str, Optional[str]]        = {}

    def snap():
        return {
            "nodes": graph.node_ids(),
            "edges": [[a, b] for a, b, _ in graph.edge_list()],
            "visited": visited,
            "stack": [n for n, _ in stack],
            "order": order,
            "parent": parent,
        }

    sb = StepBuilder(counters=("nodes_visited", "edges_examined"))
    yield sb.emit(
        "init",
        f"Push source {source}. DFS dives as deep as possible before backtracking",
        snap(),
        code_line=1,
        current=source,
    )

    found = False
    while stack:
        node, pushed_by = stack.pop()

        # mark-on-pop leaves duplicates behind
        if node in parent:
            yield sb.emit(
                "skip",
                f"Pop {node}: already visited, skip",
                snap(),
                code_line=4,
                variables={"node": node},
                current=node,
            )
            continue

        parent[node] = pushed_by
        visited.append(node)
        order.append(node)
        sb.count("nodes_visited")
        yield sb.emit(
            "visit",
            f"Pop {node} and mark it visited"
            + (f" (reached from {pushed_by})" if pushed_by is not None else ""),
            snap(),
            code_line=5,
            variables={"node": node, "stack": [n for n, _ in stack]},
            current=node,
        )

        if node == target:
            path = _reconstruct(parent, node)
            found = True
            yield sb.emit(
                "found",
                f"Reached {target}: {' → '.join(path)}",
                snap(),
                code_line=6,
                variables={"node": node, "hops": len(path) - 1},
                current=node,
                path=path,
            )
            break

        for nbr, _ in reversed(graph.neighbours(node)):
            sb.count("edges_examined")
            if nbr in parent:
                continue
            stack.append((nbr, node))
            yield sb.emit(
                "push",
                f"Edge {node}–{nbr}: {nbr} not visited yet, push",
                snap(),
                code_line=9,
                variables={"node": node, "neighbour": nbr},
                current=node,
                edge=(node, nbr),
            )

    if target is not None and not found:
        yield sb.emit(
            "not_found",
            f"Stack empty: {target} is not reachable from {source}",
            snap(),
            code_line=10,
            variables={"target": target},
        )

    yield sb.done(
        f"DFS order from {source}: {' → '.join(order)}",
        snap(),
        path=_reconstruct(parent, target) if found else [],
    )
