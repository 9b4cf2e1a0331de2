"""
astar.py — A* Search on a Grid
===============================
Generator-based A* over a 4-connected grid with walls.

  • Heuristic: Manhattan distance (admissible on 4-connected grids)
  • Neighbour order: up, down, left, right
  • Open set is an explicit list scanned in O(n) for the lowest f;
    ties on f go to the lower h, then to whichever entered first
  • Early exit as soon as the goal is dequeued

Yields a Step at:
  1. Initialise (start in the open set)
  2. Evaluate — the cell with the lowest f is taken from the open set
  3. Expand neighbour — a neighbour is added to / improved in the open set
  4. Path found (goal dequeued) or no path (open set exhausted)
  5. Done

Snapshot:
    {"rows", "cols", "start", "goal", "walls": [ids],
     "open": [ids], "closed": [ids], "scores": {id: {"g","h","f"}},
     "path": [ids]}
"""

from typing import Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder
from graph import Graph, cell_id


ROWS, COLS = 8, 12
START: Tuple[int, int] = (1, 1)
GOAL:  Tuple[int, int] = (6, 10)
WALLS: List[Tuple[int, int]] = [
    (0, 4), (1, 4), (2, 4), (3, 4), (5, 4), (6, 4), (7, 4),
    (3, 6), (4, 6), (5, 6), (6, 6),
    (2, 8), (3, 8), (4, 8),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, goal):",                     # 0
    "    open ← [start]; closed ← {}",                   # 1
    "    g[start] ← 0; f[start] ← h(start)",             # 2
    "    while open:",                                   # 3
    "        cur ← argmin f (tie: lower h) in open",     # 4
    "        if cur == goal: return path(cur)",          # 5
    "        open.remove(cur); closed.add(cur)",         # 6
    "        for nbr in up, down, left, right:",         # 7
    "            if wall or nbr in closed: continue",    # 8
    "            tentative ← g[cur] + 1",                # 9
    "            if nbr ∉ open or tentative < g[nbr]:",  # 10
    "                parent[nbr] ← cur; g, f ← …",       # 11
    "                open.add(nbr)",                     # 12
    "    return NO PATH",                                # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(
    rows: int = ROWS,
    cols: int = COLS,
    start: Sequence[int] = START,
    goal: Sequence[int] = GOAL,
    walls: Sequence[Sequence[int]] = WALLS,
) -> Generator[Step, None, None]:
    """
    Args:
        rows, cols : Grid dimensions.
        start      : (row, col) of the start cell.
        goal       : (row, col) of the goal cell.
        walls      : (row, col) cells that cannot be entered.
    """
    grid = Graph.grid(rows, cols, walls=[tuple(w) for w in walls])
    source, target = cell_id(*start), cell_id(*goal)
    target_node = grid.get_node(target)
    if target_node is None or grid.get_node(source) is None:
        raise ValueError(f"start {source} and goal {target} must lie inside a {rows}x{cols} grid")

    def h(nid: str) -> float:
        return grid.get_node(nid).manhattan_to(target_node)

    g_score: Dict[str, float]         = {source: 0}
    h_score: Dict[str, float]         = {source: h(source)}
    parent:  Dict[str, Optional[str]] = {source: None}
    open_list: List[str]              = [source]
    closed:    List[str]              = []

    def snap(path: Optional[List[str]] = None):
        return {
            "rows": rows,
            "cols": cols,
            "start": source,
            "goal": target,
            "walls": [nid for nid, n in grid.nodes.items() if n.blocked],
            "open": open_list,
            "closed": closed,
            "scores": {
                nid: {"g": g_score[nid], "h": h_score[nid], "f": g_score[nid] + h_score[nid]}
                for nid in g_score
            },
            "path": path or [],
        }

    sb = StepBuilder(counters=("expanded", "evaluated"))
    yield sb.emit(
        "init",
        f"Start at {source}, goal {target}. h(start) = {h_score[source]:g} (Manhattan)",
        snap(),
        code_line=2,
        variables={"g": 0, "h": h_score[source], "f": h_score[source]},
        current=source,
    )

    while open_list:
        # O(n) scan: lowest f, then lowest h, then earliest entry
        current = open_list[0]
        for nid in open_list[1:]:
            f_new, f_cur = g_score[nid] + h_score[nid], g_score[current] + h_score[current]
            if f_new < f_cur or (f_new == f_cur and h_score[nid] < h_score[current]):
                current = nid

        sb.count("evaluated")
        f_cur = g_score[current] + h_score[current]
        yield sb.emit(
            "evaluate",
            f"Evaluate {current}: g={g_score[current]:g}, h={h_score[current]:g}, f={f_cur:g} (lowest f in open set)",
            snap(),
            code_line=4,
            variables={"g": g_score[current], "h": h_score[current], "f": f_cur},
            current=current,
        )

        if current == target:
            path = _reconstruct(parent, target)
            yield sb.emit(
                "path_found",
                f"Goal reached! Path length {len(path) - 1}, cost {g_score[target]:g}",
                snap(path),
                code_line=5,
                variables={"cost": g_score[target], "length": len(path) - 1},
                current=current,
            )
            yield sb.done(f"A* finished: optimal path of cost {g_score[target]:g} found", snap(path))
            return

        open_list.remove(current)
        closed.append(current)

        for nbr, edge in grid.neighbours(current):
            if grid.get_node(nbr).blocked or nbr in closed:
                continue
            tentative = g_score[current] + edge.weight
            if nbr in open_list and tentative >= g_score[nbr]:
                continue

            improved = nbr in open_list
            parent[nbr]  = current
            g_score[nbr] = tentative
            h_score[nbr] = h(nbr)
            if not improved:
                open_list.append(nbr)
            sb.count("expanded")
            yield sb.emit(
                "expand_neighbor",
                f"{'Improve' if improved else 'Add'} {nbr}: g={tentative:g}, h={h_score[nbr]:g}, "
                f"f={tentative + h_score[nbr]:g}",
                snap(),
                code_line=11,
                variables={"g": tentative, "h": h_score[nbr], "f": tentative + h_score[nbr]},
                current=current,
                neighbor=nbr,
            )

    yield sb.emit(
        "no_path",
        f"Open set is empty: {target} is unreachable from {source}",
        snap(),
        code_line=13,
    )
    yield sb.done("A* finished: no path exists", snap())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    path, cur = [], target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
