"""
lru_cache.py — LRU Cache
=========================
Generator-based trace of a fixed-capacity least-recently-used cache
(hash map + recency list).  An OrderedDict keeps the recency order:
the last entry is the most recently used.

Snapshot: {"capacity", "entries": [[key, value], …] most → least recent}
"""

from collections import OrderedDict
from typing import Any, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


CAPACITY = 3

OPERATIONS: List[Tuple[str, int, Optional[str]]] = [
    ("put", 1, "A"),
    ("put", 2, "B"),
    ("put", 3, "C"),
    ("get", 2, None),
    ("put", 4, "D"),     # evicts 1
    ("get", 1, None),    # miss
    ("get", 3, None),
    ("put", 5, "E"),     # evicts 2
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def get(key):",                                 # 0
    "    if key not in map: return -1",              # 1
    "    move node to head; return node.value",      # 2
    "def put(key, value):",                          # 3
    "    if key in map: update, move to head",       # 4
    "    else:",                                     # 5
    "        if size == capacity: evict tail",       # 6
    "        insert new node at head",               # 7
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def lru_cache(
    operations: Sequence[Tuple[str, Any, Optional[Any]]] = OPERATIONS,
    capacity: int = CAPACITY,
) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("put", key, value) or ("get", key, None) triples.
        capacity   : Maximum number of entries (at least 1).
    """
    capacity = max(1, capacity)
    cache: "OrderedDict[Any, Any]" = OrderedDict()

    def snap():
        return {
            "capacity": capacity,
            "entries": [[k, v] for k, v in reversed(cache.items())],
        }

    sb = StepBuilder(counters=("hits", "misses", "evictions"))
    yield sb.emit("init", f"Empty LRU cache with capacity {capacity}", snap())

    for op, key, value in operations:
        if op == "get":
            if key not in cache:
                sb.count("misses")
                yield sb.emit(
                    "miss",
                    f"get({key}) → miss (-1)",
                    snap(),
                    code_line=1,
                    variables={"key": key, "result": -1},
                    key=key,
                )
                continue
            cache.move_to_end(key)
            sb.count("hits")
            yield sb.emit(
                "hit",
                f"get({key}) → {cache[key]}; {key} becomes most recently used",
                snap(),
                code_line=2,
                variables={"key": key, "result": cache[key]},
                key=key,
            )

        elif op == "put":
            if key in cache:
                cache[key] = value
                cache.move_to_end(key)
                yield sb.emit(
                    "update",
                    f"put({key}, {value}): key exists, update and move to head",
                    snap(),
                    code_line=4,
                    variables={"key": key, "value": value},
                    key=key,
                )
                continue
            if len(cache) >= capacity:
                evicted, evicted_value = cache.popitem(last=False)
                sb.count("evictions")
                yield sb.emit(
                    "evict",
                    f"Cache full: evict least recently used {evicted}={evicted_value}",
                    snap(),
                    code_line=6,
                    variables={"evicted": evicted, "size": len(cache)},
                    key=evicted,
                )
            cache[key] = value
            yield sb.emit(
                "put",
                f"put({key}, {value}) → inserted at head",
                snap(),
                code_line=7,
                variables={"key": key, "value": value, "size": len(cache)},
                key=key,
            )

    yield sb.done(
        f"Done. {sb.metrics['hits']} hit(s), {sb.metrics['misses']} miss(es), "
        f"{sb.metrics['evictions']} eviction(s)",
        snap(),
    )
