"""
union_find.py — Disjoint Set Union
===================================
Generator-based union / find / connected with union by rank and path
compression.

Snapshot: {"parent": [...], "rank": [...]}
"""

from typing import Generator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder


SIZE = 8

OPERATIONS: List[Tuple] = [
    ("union", 0, 1),
    ("union", 2, 3),
    ("union", 4, 5),
    ("union", 6, 7),
    ("union", 0, 2),
    ("union", 4, 6),
    ("find", 3),
    ("connected", 1, 3),
    ("connected", 0, 5),
    ("union", 0, 4),
    ("connected", 3, 7),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def find(x):",                                       # 0
    "    if parent[x] != x: parent[x] ← find(parent[x])", # 1
    "    return parent[x]",                               # 2
    "def union(a, b):",                                   # 3
    "    ra, rb ← find(a), find(b)",                      # 4
    "    if ra == rb: return",                            # 5
    "    attach lower-rank root under higher-rank root",  # 6
    "    if ranks equal: rank[new root] += 1",            # 7
    "def connected(a, b): return find(a) == find(b)",     # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def union_find(
    operations: Sequence[Tuple] = OPERATIONS,
    size: int = SIZE,
) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("union", a, b), ("find", x) or ("connected", a, b).
        size       : Number of elements 0 … size-1.
    """
    parent = list(range(size))
    rank = [0] * size

    def snap():
        return {"parent": parent, "rank": rank}

    sb = StepBuilder(counters=("unions", "compressions"))
    yield sb.emit("init", f"{size} singleton sets: every element is its own root", snap())

    for op, *args in operations:
        if op == "find":
            (x,) = args
            root = yield from _find(sb, parent, x, snap)
            yield sb.emit(
                "found",
                f"find({x}) → root {root}",
                snap(),
                code_line=2,
                variables={"x": x, "root": root},
                node=x,
                root=root,
            )

        elif op == "union":
            a, b = args
            ra = yield from _find(sb, parent, a, snap)
            rb = yield from _find(sb, parent, b, snap)
            if ra == rb:
                yield sb.emit(
                    "same_set",
                    f"union({a}, {b}): already in the same set (root {ra})",
                    snap(),
                    code_line=5,
                    variables={"a": a, "b": b, "root": ra},
                    nodes=(a, b),
                )
                continue
            if rank[ra] < rank[rb]:
                ra, rb = rb, ra
            parent[rb] = ra
            grew = rank[ra] == rank[rb]
            if grew:
                rank[ra] += 1
            sb.count("unions")
            yield sb.emit(
                "union",
                f"union({a}, {b}): attach root {rb} under root {ra}"
                + (f", rank of {ra} → {rank[ra]}" if grew else ""),
                snap(),
                code_line=7 if grew else 6,
                variables={"a": a, "b": b, "root": ra, "child": rb},
                nodes=(a, b),
                root=ra,
            )

        elif op == "connected":
            a, b = args
            ra = yield from _find(sb, parent, a, snap)
            rb = yield from _find(sb, parent, b, snap)
            same = ra == rb
            yield sb.emit(
                "connected",
                f"connected({a}, {b}) → {'true' if same else 'false'} (roots {ra} and {rb})",
                snap(),
                code_line=8,
                variables={"a": a, "b": b, "result": same},
                nodes=(a, b),
                result=same,
            )

    sets = len({_root(parent, x) for x in range(size)})
    yield sb.done(f"Done. {sets} disjoint set(s)", snap())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _root(parent: List[int], x: int) -> int:
    while parent[x] != x:
        x = parent[x]
    return x


def _find(sb: StepBuilder, parent: List[int], x: int, snap) -> Generator[Step, None, int]:
    """Walk to the root, then point every node on the way straight at it."""
    path = [x]
    while parent[path[-1]] != path[-1]:
        path.append(parent[path[-1]])
    root = path[-1]
    yield sb.emit(
        "find",
        f"find({x}): path {' → '.join(map(str, path))}",
        snap(),
        code_line=1,
        variables={"x": x, "root": root},
        node=x,
        path=path,
    )
    compressed = [n for n in path[:-1] if parent[n] != root]
    for n in compressed:
        parent[n] = root
    if compressed:
        sb.count("compressions", len(compressed))
        yield sb.emit(
            "compress",
            f"Path compression: {compressed} now point directly at {root}",
            snap(),
            code_line=1,
            variables={"x": x, "root": root},
            nodes=compressed,
            root=root,
        )
    return root
