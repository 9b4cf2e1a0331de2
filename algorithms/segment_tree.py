"""
segment_tree.py — Segment Tree (range sum)
===========================================
Recursive build / query / point-update over an array, stored heap-style:
node 1 covers the whole array and node k has children 2k and 2k+1.

  • build   : one step per node, leaves first (post-order)
  • query   : one step per node visited, classified as no / full /
              partial overlap with [ql, qr]
  • update  : one step per node on the root-to-leaf path, then one per
              ancestor as the sums are recomputed on the way back up

Recursion is expressed as nested generators (`yield from`); the query
sum comes back as the inner generator's return value.

Snapshot: {"array", "tree": [{"id", "lo", "hi", "sum"}] sorted by id}
"""

from typing import Dict, Generator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder


INITIAL_ARRAY: List[int] = [1, 3, 5, 7, 9, 11]

OPERATIONS: List[Tuple[str, int, int]] = [
    ("query",  1, 4),
    ("query",  0, 2),
    ("update", 2, 6),
    ("query",  1, 4),
    ("query",  0, 5),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def build(node, l, r):",                             # 0
    "    if l == r: tree[node] ← a[l]; return",           # 1
    "    build(2·node, l, mid); build(2·node+1, mid+1, r)",  # 2
    "    tree[node] ← tree[2·node] + tree[2·node+1]",     # 3
    "def query(node, l, r, ql, qr):",                     # 4
    "    if qr < l or r < ql: return 0",                  # 5
    "    if ql ≤ l and r ≤ qr: return tree[node]",        # 6
    "    return query(left…) + query(right…)",            # 7
    "def update(node, l, r, i, v):",                      # 8
    "    if l == r: tree[node] ← v; return",              # 9
    "    recurse into the child whose range holds i",     # 10
    "    tree[node] ← tree[2·node] + tree[2·node+1]",     # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def segment_tree(
    array: Sequence[int] = INITIAL_ARRAY,
    operations: Sequence[Tuple[str, int, int]] = OPERATIONS,
) -> Generator[Step, None, None]:
    """
    Args:
        array      : Values to index.
        operations : ("query", ql, qr) or ("update", index, value) triples.
    """
    arr = list(array)
    n = len(arr)
    tree: Dict[int, dict] = {}

    def snap():
        return {"array": arr, "tree": [tree[k] for k in sorted(tree)]}

    sb = StepBuilder(counters=("nodes_visited",))

    # -- build ------------------------------------------------------------
    def build(node: int, lo: int, hi: int) -> Generator[Step, None, None]:
        if lo == hi:
            tree[node] = {"id": node, "lo": lo, "hi": hi, "sum": arr[lo]}
            yield sb.emit(
                "build",
                f"Leaf {node} covers [{lo}] = {arr[lo]}",
                snap(),
                code_line=1,
                variables={"node": node, "l": lo, "r": hi},
                node=node,
            )
            return
        mid = (lo + hi) // 2
        yield from build(2 * node, lo, mid)
        yield from build(2 * node + 1, mid + 1, hi)
        total = tree[2 * node]["sum"] + tree[2 * node + 1]["sum"]
        tree[node] = {"id": node, "lo": lo, "hi": hi, "sum": total}
        yield sb.emit(
            "build",
            f"Node {node} covers [{lo}, {hi}] = {tree[2 * node]['sum']} + {tree[2 * node + 1]['sum']} = {total}",
            snap(),
            code_line=3,
            variables={"node": node, "l": lo, "r": hi, "sum": total},
            node=node,
            children=[2 * node, 2 * node + 1],
        )

    # -- query ------------------------------------------------------------
    def query(node: int, lo: int, hi: int, ql: int, qr: int) -> Generator[Step, None, int]:
        sb.count("nodes_visited")
        if qr < lo or hi < ql:
            yield sb.emit(
                "no_overlap",
                f"Node {node} [{lo}, {hi}] lies outside [{ql}, {qr}] → 0",
                snap(),
                code_line=5,
                variables={"node": node, "l": lo, "r": hi},
                node=node,
                query=(ql, qr),
            )
            return 0
        if ql <= lo and hi <= qr:
            yield sb.emit(
                "full_overlap",
                f"Node {node} [{lo}, {hi}] lies inside [{ql}, {qr}] → {tree[node]['sum']}",
                snap(),
                code_line=6,
                variables={"node": node, "l": lo, "r": hi, "sum": tree[node]["sum"]},
                node=node,
                query=(ql, qr),
            )
            return tree[node]["sum"]
        yield sb.emit(
            "partial_overlap",
            f"Node {node} [{lo}, {hi}] straddles [{ql}, {qr}]: ask both children",
            snap(),
            code_line=7,
            variables={"node": node, "l": lo, "r": hi},
            node=node,
            query=(ql, qr),
        )
        mid = (lo + hi) // 2
        left = yield from query(2 * node, lo, mid, ql, qr)
        right = yield from query(2 * node + 1, mid + 1, hi, ql, qr)
        return left + right

    # -- update -----------------------------------------------------------
    def update(node: int, lo: int, hi: int, index: int, value: int) -> Generator[Step, None, None]:
        sb.count("nodes_visited")
        if lo == hi:
            old = tree[node]["sum"]
            tree[node]["sum"] = value
            arr[index] = value
            yield sb.emit(
                "set_leaf",
                f"Leaf {node}: a[{index}] {old} → {value}",
                snap(),
                code_line=9,
                variables={"node": node, "i": index, "v": value},
                node=node,
            )
            return
        mid = (lo + hi) // 2
        child = 2 * node if index <= mid else 2 * node + 1
        yield sb.emit(
            "descend",
            f"Node {node} [{lo}, {hi}]: index {index} is in the "
            + ("left" if child == 2 * node else "right") + f" child {child}",
            snap(),
            code_line=10,
            variables={"node": node, "l": lo, "r": hi, "mid": mid},
            node=node,
        )
        if child == 2 * node:
            yield from update(child, lo, mid, index, value)
        else:
            yield from update(child, mid + 1, hi, index, value)
        tree[node]["sum"] = tree[2 * node]["sum"] + tree[2 * node + 1]["sum"]
        yield sb.emit(
            "recompute",
            f"Node {node} [{lo}, {hi}] = {tree[2 * node]['sum']} + {tree[2 * node + 1]['sum']} = {tree[node]['sum']}",
            snap(),
            code_line=11,
            variables={"node": node, "sum": tree[node]["sum"]},
            node=node,
            children=[2 * node, 2 * node + 1],
        )

    yield sb.emit("init", f"Build a range-sum segment tree over {arr}", snap(), variables={"n": n})
    if n:
        yield from build(1, 0, n - 1)

    for op, a, b in operations:
        if op == "query":
            if not (0 <= a <= b < n):
                yield sb.emit(
                    "out_of_bounds",
                    f"query({a}, {b}): range outside [0, {n - 1}]",
                    snap(),
                    code_line=4,
                    variables={"ql": a, "qr": b, "n": n},
                )
                continue
            yield sb.emit(
                "query",
                f"query({a}, {b}): sum of a[{a}…{b}]",
                snap(),
                code_line=4,
                variables={"ql": a, "qr": b},
                query=(a, b),
            )
            total = yield from query(1, 0, n - 1, a, b)
            yield sb.emit(
                "result",
                f"query({a}, {b}) = {total}",
                snap(),
                code_line=7,
                variables={"ql": a, "qr": b, "result": total},
                query=(a, b),
                result=total,
            )

        elif op == "update":
            if not 0 <= a < n:
                yield sb.emit(
                    "out_of_bounds",
                    f"update({a}, {b}): index outside [0, {n - 1}]",
                    snap(),
                    code_line=8,
                    variables={"i": a, "n": n},
                )
                continue
            yield sb.emit(
                "update",
                f"update({a}, {b}): a[{a}] {arr[a]} → {b}",
                snap(),
                code_line=8,
                variables={"i": a, "old": arr[a], "v": b},
                index=a,
            )
            yield from update(1, 0, n - 1, a, b)

    yield sb.done(
        f"Done. Root sum {tree[1]['sum'] if n else 0}, {sb.metrics['nodes_visited']} node visit(s)",
        snap(),
    )
