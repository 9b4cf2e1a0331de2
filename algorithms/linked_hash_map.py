"""
linked_hash_map.py — LinkedHashMap
===================================
A chained hash map whose entries are also threaded on a doubly linked
list.  Iteration follows the list, not the buckets.

  • insertion order : a put of a new key links it at the tail; updates and
                      gets leave the list alone
  • access order    : every hit (get or update) also moves the entry to the
                      tail, so the head is the least recently used entry

An OrderedDict stands in for the linked list.

Snapshot: {"buckets": [[{"key", "value"}]], "order": [keys head → tail],
           "access_order": bool}
"""

from collections import OrderedDict
from typing import Any, Generator, List, Optional, Sequence, Tuple

from algorithms.hash_map import hash_code
from algorithms.step import Step, StepBuilder


BUCKETS = 6

OPERATIONS: List[Tuple[str, str, Optional[Any]]] = [
    ("put", "A", 10),
    ("put", "B", 20),
    ("put", "C", 30),
    ("put", "D", 40),
    ("get", "A", None),     # moves A to the tail in access order
    ("put", "E", 50),
    ("get", "B", None),
    ("put", "A", 15),       # update
    ("get", "Z", None),     # miss
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def put(key, value):",                        # 0
    "    e ← buckets[hash(key) % n].put(key, value)",  # 1
    "    if e is new: link e at tail",             # 2
    "    elif access_order: move e to tail",       # 3
    "def get(key):",                               # 4
    "    e ← buckets[hash(key) % n].get(key)",     # 5
    "    if e is null: return null",               # 6
    "    if access_order: move e to tail",         # 7
    "    return e.value",                          # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def linked_hash_map(
    operations: Sequence[Tuple[str, str, Optional[Any]]] = OPERATIONS,
    buckets: int = BUCKETS,
    access_order: bool = True,
) -> Generator[Step, None, None]:
    """
    Args:
        operations   : ("put", key, value) or ("get", key, None) triples.
        buckets      : Number of buckets (at least 1).
        access_order : Move entries to the tail on every hit.
    """
    buckets = max(1, buckets)
    table: List[List[dict]] = [[] for _ in range(buckets)]
    links: "OrderedDict[str, dict]" = OrderedDict()

    def snap():
        return {"buckets": table, "order": list(links), "access_order": access_order}

    mode = "access order (LRU)" if access_order else "insertion order"
    sb = StepBuilder(counters=("hits", "misses", "moves"))
    yield sb.emit("init", f"Empty LinkedHashMap with {buckets} buckets, iterating in {mode}", snap())

    for op, key, value in operations:
        h = hash_code(key)
        index = h % buckets
        yield sb.emit(
            "hash",
            f'{op}("{key}"): hash = {h} → bucket {index}',
            snap(),
            code_line=1 if op == "put" else 5,
            variables={"key": key, "hash": h, "bucket": index},
            key=key,
            bucket=index,
        )
        entry = links.get(key)

        if op == "put" and entry is None:
            entry = {"key": key, "value": value}
            table[index].append(entry)
            before = next(reversed(links), None)
            links[key] = entry
            yield sb.emit(
                "link",
                f'New entry "{key}" → bucket {index}, linked at the tail'
                + (f' after "{before}"' if before is not None else ""),
                snap(),
                code_line=2,
                variables={"key": key, "value": value, "prev": before},
                key=key,
                bucket=index,
            )

        elif op == "put":
            old = entry["value"]
            entry["value"] = value
            if access_order:
                links.move_to_end(key)
                sb.count("moves")
            yield sb.emit(
                "update",
                f'Update "{key}": {old} → {value}; '
                + ("moved to the tail" if access_order else "list position unchanged"),
                snap(),
                code_line=3,
                variables={"key": key, "old": old, "value": value},
                key=key,
                bucket=index,
            )

        elif op == "get" and entry is None:
            sb.count("misses")
            yield sb.emit(
                "miss",
                f'get("{key}") → null',
                snap(),
                code_line=6,
                variables={"key": key, "result": None},
                key=key,
                bucket=index,
            )

        elif op == "get":
            sb.count("hits")
            if access_order:
                links.move_to_end(key)
                sb.count("moves")
            yield sb.emit(
                "access" if access_order else "hit",
                f'get("{key}") → {entry["value"]}'
                + ("; moved to the tail" if access_order else ""),
                snap(),
                code_line=7 if access_order else 8,
                variables={"key": key, "result": entry["value"]},
                key=key,
                bucket=index,
            )

    yield sb.done(
        f"Done. {len(links)} entries; iteration order {' → '.join(links) or '(empty)'}",
        snap(),
    )
