"""
array_list.py — Dynamic Array (ArrayList)
==========================================
Generator-based trace of a growable array with a doubling strategy.

Yields a Step at:
  1. Initialise an empty backing array of INITIAL_CAPACITY slots
  2. Every resize (capacity doubled, elements copied) — emitted BEFORE
     the append / insert that triggered it
  3. Every append, positional insert (shift right, then write),
     removal (clear, then shift left) and indexed read
  4. Out-of-range indices → "out_of_bounds" step, never an exception

Snapshot: {"array": [...capacity slots, None = empty], "size", "capacity"}
"""

from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


INITIAL_CAPACITY = 4

# (operation, value, index)
OPERATIONS: List[Tuple[str, Optional[int], Optional[int]]] = [
    ("add",    10, None),
    ("add",    20, None),
    ("add",    30, None),
    ("add",    40, None),
    ("add",    50, None),    # triggers resize 4 → 8
    ("get",    None, 2),
    ("add_at", 25, 2),
    ("remove", None, 1),
    ("get",    None, 0),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add(value):",                               # 0
    "    if size == capacity: grow()",               # 1
    "    data[size] ← value; size += 1",             # 2
    "def grow():",                                   # 3
    "    new ← array(capacity * 2)",                 # 4
    "    copy data → new; data ← new",               # 5
    "def add_at(index, value):",                     # 6
    "    shift data[index:size] right by one",       # 7
    "    data[index] ← value; size += 1",            # 8
    "def remove(index):",                            # 9
    "    shift data[index+1:size] left by one",      # 10
    "    data[size-1] ← null; size -= 1",            # 11
    "def get(index):",                               # 12
    "    return data[index]",                        # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def array_list(
    operations: Sequence[Tuple[str, Optional[int], Optional[int]]] = OPERATIONS,
    initial_capacity: int = INITIAL_CAPACITY,
) -> Generator[Step, None, None]:
    """
    Args:
        operations       : (op, value, index) triples; op is one of
                           "add", "add_at", "remove", "get".
        initial_capacity : Slots in the first backing array.
    """
    capacity = max(1, initial_capacity)
    data: List[Optional[int]] = [None] * capacity
    size = 0

    def snap() -> Dict[str, Any]:
        return {"array": data, "size": size, "capacity": capacity}

    sb = StepBuilder(counters=("resizes",))
    yield sb.emit(
        "init",
        f"Empty ArrayList with capacity {capacity}",
        snap(),
        variables={"size": 0, "capacity": capacity},
    )

    for op, value, index in operations:
        if op in ("add", "add_at") and size == capacity:
            old_array, old_capacity = list(data), capacity
            capacity *= 2
            data = data + [None] * (capacity - old_capacity)
            sb.count("resizes")
            yield sb.emit(
                "resize",
                f"Array full ({size}/{old_capacity}). Grow to {capacity} and copy {size} elements",
                snap(),
                code_line=4,
                variables={"old_capacity": old_capacity, "new_capacity": capacity},
                old_array=old_array,
                old_capacity=old_capacity,
            )

        if op == "add":
            data[size] = value
            size += 1
            yield sb.emit(
                "add",
                f"add({value}) → stored at index {size - 1}",
                snap(),
                code_line=2,
                variables={"value": value, "size": size},
                index=size - 1,
            )

        elif op == "add_at":
            if index is None or not 0 <= index <= size:
                yield _out_of_bounds(sb, op, index, size, snap())
                continue
            shifted = list(range(index + 1, size + 1))
            for i in range(size, index, -1):
                data[i] = data[i - 1]
            data[index] = None
            yield sb.emit(
                "shift",
                f"Shift {len(shifted)} element(s) right to open index {index}",
                snap(),
                code_line=7,
                variables={"index": index, "size": size},
                index=index,
                shift_indices=shifted,
            )
            data[index] = value
            size += 1
            yield sb.emit(
                "add_at",
                f"add({index}, {value}) → written at index {index}",
                snap(),
                code_line=8,
                variables={"index": index, "value": value, "size": size},
                index=index,
            )

        elif op == "remove":
            if index is None or not 0 <= index < size:
                yield _out_of_bounds(sb, op, index, size, snap())
                continue
            removed = data[index]
            yield sb.emit(
                "remove",
                f"remove({index}) → removing {removed}",
                snap(),
                code_line=9,
                variables={"index": index, "removed": removed},
                index=index,
            )
            for i in range(index, size - 1):
                data[i] = data[i + 1]
            data[size - 1] = None
            size -= 1
            yield sb.emit(
                "shift",
                f"Shift elements after index {index} left; size is now {size}",
                snap(),
                code_line=10,
                variables={"index": index, "size": size},
                index=index,
                shift_indices=list(range(index, size)),
            )

        elif op == "get":
            if index is None or not 0 <= index < size:
                yield _out_of_bounds(sb, op, index, size, snap())
                continue
            yield sb.emit(
                "get",
                f"get({index}) → {data[index]}  (O(1) random access)",
                snap(),
                code_line=13,
                variables={"index": index, "result": data[index]},
                index=index,
            )

    yield sb.done(
        f"Done. size={size}, capacity={capacity}, resizes={sb.metrics['resizes']}",
        snap(),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _out_of_bounds(sb: StepBuilder, op: str, index: Optional[int], size: int, snapshot: Dict) -> Step:
    return sb.emit(
        "out_of_bounds",
        f"{op}({index}) rejected: index out of bounds for size {size}",
        snapshot,
        variables={"index": index, "size": size},
        index=index,
    )
