"""
skip_list.py — Skip List
=========================
Generator-based search and insert on a skip list with a header node.

Levels of newly inserted nodes come from, in priority order:
  1. the explicit `levels` sequence (consumed one per insert), or
  2. a coin-flip (p = 0.5) drawn from random.Random(seed).
Same seed / same levels → same trace.

Snapshot:
    {"max_level", "level",
     "nodes": [{"value", "level", "forward": [index | None] * MAX_LEVEL}, …]}
Node 0 is the header (value None).  `forward[l]` is the index of the next
node on level l.
"""

import random
from typing import Generator, Iterator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


MAX_LEVEL = 4
P = 0.5

# (value, level) of the prebuilt list
INITIAL_NODES: List[Tuple[int, int]] = [(3, 3), (6, 2), (7, 1), (9, 2), (12, 1)]

OPERATIONS: List[Tuple[str, int]] = [
    ("search", 9),
    ("insert", 8),
    ("insert", 10),
    ("search", 8),
    ("search", 5),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def search(key):",                                       # 0
    "    x ← header",                                         # 1
    "    for lvl in top … 0:",                                # 2
    "        while x.next[lvl] and x.next[lvl].value < key:", # 3
    "            x ← x.next[lvl]",                            # 4
    "    x ← x.next[0]",                                      # 5
    "    return x.value == key",                              # 6
    "def insert(key):",                                       # 7
    "    update[lvl] ← last node before key on each level",   # 8
    "    lvl ← random_level()",                               # 9
    "    for i in 0 … lvl-1:",                                # 10
    "        new.next[i] ← update[i].next[i]",                # 11
    "        update[i].next[i] ← new",                        # 12
]


def random_levels(seed: Optional[int] = None, max_level: int = MAX_LEVEL) -> Iterator[int]:
    """Endless stream of geometric(p=0.5) levels capped at max_level."""
    rng = random.Random(seed)
    while True:
        level = 1
        while rng.random() < P and level < max_level:
            level += 1
        yield level


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def skip_list(
    operations: Sequence[Tuple[str, int]] = OPERATIONS,
    seed: Optional[int] = None,
    levels: Optional[Sequence[int]] = None,
) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("search", key) or ("insert", key) pairs.
        seed       : Seed for the level coin-flips.
        levels     : Explicit level per insert; overrides `seed` while it lasts.
    """
    explicit = iter(levels or [])
    coin = random_levels(seed)

    def next_level() -> int:
        level = next(explicit, None)
        if level is None:
            level = next(coin)
        return max(1, min(MAX_LEVEL, level))

    sl = _SkipList()
    for value, level in INITIAL_NODES:
        sl.link(value, level, sl.predecessors(value))

    sb = StepBuilder(counters=("comparisons",))
    yield sb.emit(
        "init",
        f"Skip list with {len(INITIAL_NODES)} nodes, max level {MAX_LEVEL}",
        sl.snapshot(),
        variables={"level": sl.level},
    )

    for op, key in operations:
        if op == "search":
            yield from _search(sb, sl, key)
        elif op == "insert":
            yield from _insert(sb, sl, key, next_level)

    yield sb.done(f"Done. Level 0: {sl.values()}", sl.snapshot())


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------
class _SkipList:
    def __init__(self):
        self.nodes: List[dict] = [{"value": None, "level": MAX_LEVEL, "forward": [None] * MAX_LEVEL}]
        self.level = 1

    def snapshot(self) -> dict:
        return {"max_level": MAX_LEVEL, "level": self.level, "nodes": self.nodes}

    def next_of(self, idx: int, lvl: int) -> Optional[int]:
        return self.nodes[idx]["forward"][lvl]

    def value(self, idx: Optional[int]):
        return None if idx is None else self.nodes[idx]["value"]

    def predecessors(self, key: int) -> List[int]:
        update, x = [0] * MAX_LEVEL, 0
        for lvl in range(MAX_LEVEL - 1, -1, -1):
            while self.next_of(x, lvl) is not None and self.value(self.next_of(x, lvl)) < key:
                x = self.next_of(x, lvl)
            update[lvl] = x
        return update

    def link(self, value: int, level: int, update: List[int]) -> int:
        idx = len(self.nodes)
        self.nodes.append({"value": value, "level": level, "forward": [None] * MAX_LEVEL})
        for lvl in range(level):
            self.nodes[idx]["forward"][lvl] = self.next_of(update[lvl], lvl)
            self.nodes[update[lvl]]["forward"][lvl] = idx
        self.level = max(self.level, level)
        return idx

    def values(self) -> List[int]:
        out, x = [], self.next_of(0, 0)
        while x is not None:
            out.append(self.nodes[x]["value"])
            x = self.next_of(x, 0)
        return out


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
def _walk(sb: StepBuilder, sl: _SkipList, key: int, op: str) -> Generator[Step, None, List[int]]:
    """Top-down traversal; returns the per-level predecessor indices."""
    update, x = [0] * MAX_LEVEL, 0
    path = [0]
    for lvl in range(sl.level - 1, -1, -1):
        while True:
            nxt = sl.next_of(x, lvl)
            if nxt is None:
                break
            sb.count("comparisons")
            if sl.value(nxt) >= key:
                break
            x = nxt
            path.append(x)
            yield sb.emit(
                op,
                f"Level {lvl}: {sl.value(x)} < {key}, move right",
                sl.snapshot(),
                code_line=4,
                variables={"key": key, "level": lvl, "current": sl.value(x)},
                node=x,
                level=lvl,
                path=list(path),
            )
        update[lvl] = x
        if lvl > 0:
            nxt = sl.next_of(x, lvl)
            reason = "end of level" if nxt is None else f"next is {sl.value(nxt)} ≥ {key}"
            yield sb.emit(
                "level_down",
                f"Level {lvl}: {reason}, drop to level {lvl - 1}",
                sl.snapshot(),
                code_line=2,
                variables={"key": key, "level": lvl - 1},
                node=x,
                level=lvl - 1,
                path=list(path),
            )
    for lvl in range(sl.level, MAX_LEVEL):
        update[lvl] = 0
    return update


def _search(sb: StepBuilder, sl: _SkipList, key: int) -> Generator[Step, None, None]:
    yield sb.emit(
        "search",
        f"search({key}): start at the header on level {sl.level - 1}",
        sl.snapshot(),
        code_line=1,
        variables={"key": key, "level": sl.level - 1},
        node=0,
        level=sl.level - 1,
    )
    update = yield from _walk(sb, sl, key, "search")
    candidate = sl.next_of(update[0], 0)
    if candidate is not None and sl.value(candidate) == key:
        yield sb.emit(
            "found",
            f"Found {key}",
            sl.snapshot(),
            code_line=6,
            variables={"key": key},
            node=candidate,
            level=0,
        )
    else:
        yield sb.emit(
            "not_found",
            f"{key} is not in the list (next on level 0 is {sl.value(candidate)})",
            sl.snapshot(),
            code_line=6,
            variables={"key": key},
            node=update[0],
            level=0,
        )


def _insert(sb: StepBuilder, sl: _SkipList, key: int, next_level) -> Generator[Step, None, None]:
    yield sb.emit(
        "insert",
        f"insert({key}): find the predecessor on every level",
        sl.snapshot(),
        code_line=8,
        variables={"key": key},
        node=0,
        level=sl.level - 1,
    )
    update = yield from _walk(sb, sl, key, "insert")
    candidate = sl.next_of(update[0], 0)
    if candidate is not None and sl.value(candidate) == key:
        yield sb.emit(
            "duplicate",
            f"{key} is already present",
            sl.snapshot(),
            variables={"key": key},
            node=candidate,
        )
        return

    level = next_level()
    idx = len(sl.nodes)
    sl.nodes.append({"value": key, "level": level, "forward": [None] * MAX_LEVEL})
    yield sb.emit(
        "insert",
        f"random_level() → {level}: new node {key} spans levels 0 … {level - 1}",
        sl.snapshot(),
        code_line=9,
        variables={"key": key, "new_level": level},
        node=idx,
        level=level - 1,
    )
    for lvl in range(level):
        pred = update[lvl]
        sl.nodes[idx]["forward"][lvl] = sl.next_of(pred, lvl)
        sl.nodes[pred]["forward"][lvl] = idx
        sl.level = max(sl.level, lvl + 1)
        after = sl.value(sl.nodes[idx]["forward"][lvl])
        yield sb.emit(
            "link",
            f"Level {lvl}: link {sl.value(pred) if pred else 'header'} → {key} → "
            f"{after if after is not None else 'end'}",
            sl.snapshot(),
            code_line=12,
            variables={"key": key, "level": lvl},
            node=idx,
            level=lvl,
            predecessor=pred,
        )
