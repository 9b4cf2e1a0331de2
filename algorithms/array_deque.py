"""
array_deque.py — ArrayDeque (circular buffer)
==============================================
Double-ended queue over a ring of slots with `head` and `tail` indices:

  • head points at the first element, tail at the slot after the last one
  • both indices wrap modulo the capacity
  • one slot always stays free, so head == tail means empty
  • when an add would fill that last free slot the buffer doubles and the
    elements are copied out in deque order, head reset to 0

Snapshot: {"array": slots (None = free), "head", "tail", "capacity", "size"}
"""

from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


INITIAL_CAPACITY = 4

OPERATIONS: List[Tuple[str, Optional[int]]] = [
    ("add_last",     10),
    ("add_last",     20),
    ("add_first",     5),
    ("add_last",     30),      # grows 4 → 8
    ("add_first",     1),      # head wraps to the end
    ("remove_first", None),
    ("remove_last",  None),
    ("add_last",     40),
    ("add_last",     50),
    ("add_first",     0),
    ("add_last",     60),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add_first(e):",                             # 0
    "    if size == capacity - 1: grow()",           # 1
    "    head ← (head - 1) mod capacity",            # 2
    "    a[head] ← e",                               # 3
    "def add_last(e):",                              # 4
    "    if size == capacity - 1: grow()",           # 5
    "    a[tail] ← e",                               # 6
    "    tail ← (tail + 1) mod capacity",            # 7
    "def remove_first():",                           # 8
    "    e ← a[head]; a[head] ← null",               # 9
    "    head ← (head + 1) mod capacity",            # 10
    "def remove_last():",                            # 11
    "    tail ← (tail - 1) mod capacity",            # 12
    "    e ← a[tail]; a[tail] ← null",               # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def array_deque(
    operations: Sequence[Tuple[str, Optional[int]]] = OPERATIONS,
    initial_capacity: int = INITIAL_CAPACITY,
) -> Generator[Step, None, None]:
    """
    Args:
        operations       : ("add_first" | "add_last", value) or
                           ("remove_first" | "remove_last", None) pairs.
        initial_capacity : Slots in the first ring (at least 1).
    """
    capacity = max(1, initial_capacity)
    data: List[Optional[int]] = [None] * capacity
    head = tail = 0

    def size() -> int:
        return (tail - head) % capacity

    def snap() -> Dict[str, Any]:
        return {"array": data, "head": head, "tail": tail, "capacity": capacity, "size": size()}

    sb = StepBuilder(counters=("resizes",))
    yield sb.emit(
        "init",
        f"Empty ArrayDeque with capacity {capacity}; head = tail = 0",
        snap(),
        variables={"head": head, "tail": tail, "capacity": capacity},
    )

    for op, value in operations:
        if op in ("add_first", "add_last") and size() == capacity - 1:
            old_capacity = capacity
            items = [data[(head + k) % capacity] for k in range(size())]
            capacity *= 2
            data = items + [None] * (capacity - len(items))
            head, tail = 0, len(items)
            sb.count("resizes")
            yield sb.emit(
                "resize",
                f"Only the spare slot is left: grow {old_capacity} → {capacity}, "
                f"copy {len(items)} element(s) in order, head reset to 0",
                snap(),
                code_line=1 if op == "add_first" else 5,
                variables={"old_capacity": old_capacity, "capacity": capacity, "size": size()},
            )

        if op == "add_first":
            old_head = head
            head = (head - 1) % capacity
            data[head] = value
            yield sb.emit(
                "add_first",
                f"add_first({value}): head = ({old_head} - 1) mod {capacity} = {head}",
                snap(),
                code_line=3,
                variables={"value": value, "head": head, "tail": tail, "size": size()},
                index=head,
            )

        elif op == "add_last":
            slot = tail
            data[slot] = value
            tail = (tail + 1) % capacity
            yield sb.emit(
                "add_last",
                f"add_last({value}): a[{slot}] = {value}, tail = ({slot} + 1) mod {capacity} = {tail}",
                snap(),
                code_line=7,
                variables={"value": value, "head": head, "tail": tail, "size": size()},
                index=slot,
            )

        elif op in ("remove_first", "remove_last"):
            if head == tail:
                yield sb.emit(
                    "empty",
                    f"{op}(): deque is empty",
                    snap(),
                    code_line=8 if op == "remove_first" else 11,
                    variables={"head": head, "tail": tail},
                )
                continue
            if op == "remove_first":
                slot = head
                removed, data[slot] = data[slot], None
                head = (head + 1) % capacity
                line = 10
            else:
                tail = (tail - 1) % capacity
                slot = tail
                removed, data[slot] = data[slot], None
                line = 13
            yield sb.emit(
                op,
                f"{op}() → {removed} from index {slot}; head = {head}, tail = {tail}",
                snap(),
                code_line=line,
                variables={"removed": removed, "head": head, "tail": tail, "size": size()},
                index=slot,
                value=removed,
            )

    contents = [data[(head + k) % capacity] for k in range(size())]
    yield sb.done(
        f"Done. {size()} element(s) {contents}, capacity {capacity}, {sb.metrics['resizes']} resize(s)",
        snap(),
    )
