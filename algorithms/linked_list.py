"""
linked_list.py — Singly Linked List
====================================
Generator-based trace of head / tail insertions and removals plus
indexed access (which has to walk from the head).

Snapshot: {"values": [head … tail], "size"}
"""

from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


OPERATIONS: List[Tuple[str, Optional[int]]] = [
    ("add_first", 10),
    ("add_last", 20),
    ("add_last", 30),
    ("add_first", 5),
    ("add_last", 40),
    ("get", 2),
    ("remove_first", None),
    ("remove_last", None),
    ("get", 1),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add_first(x): node.next ← head; head ← node",   # 0
    "def add_last(x): tail.next ← node; tail ← node",    # 1
    "def get(i):",                                       # 2
    "    cur ← head; repeat i times: cur ← cur.next",    # 3
    "    return cur.value",                              # 4
    "def remove_first(): head ← head.next",              # 5
    "def remove_last():",                                # 6
    "    walk to the node before tail; cut tail",        # 7
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def linked_list(operations: Sequence[Tuple[str, Optional[int]]] = OPERATIONS) -> Generator[Step, None, None]:
    """
    Args:
        operations : (op, arg) pairs; arg is a value for add_*, an index for
                     get, None for remove_*.
    """
    values: List[int] = []

    def snap():
        return {"values": values, "size": len(values)}

    sb = StepBuilder(counters=("hops",))
    yield sb.emit("init", "Empty linked list (head = tail = null)", snap())

    for op, arg in operations:
        if op == "add_first":
            values.insert(0, arg)
            yield sb.emit("add_first", f"add_first({arg}): new head", snap(), code_line=0,
                          variables={"value": arg}, index=0)

        elif op == "add_last":
            values.append(arg)
            yield sb.emit("add_last", f"add_last({arg}): new tail", snap(), code_line=1,
                          variables={"value": arg}, index=len(values) - 1)

        elif op == "get":
            if arg is None or not 0 <= arg < len(values):
                yield sb.emit("out_of_bounds", f"get({arg}): index out of bounds for size {len(values)}",
                              snap(), variables={"index": arg})
                continue
            for i in range(arg + 1):
                if i:
                    sb.count("hops")
                yield sb.emit(
                    "traverse",
                    f"get({arg}): at node {i} (value {values[i]})",
                    snap(),
                    code_line=3,
                    variables={"index": arg, "i": i},
                    index=i,
                )
            yield sb.emit("get", f"get({arg}) → {values[arg]}", snap(), code_line=4,
                          variables={"index": arg, "result": values[arg]}, index=arg)

        elif op in ("remove_first", "remove_last"):
            if not values:
                yield sb.emit("empty", f"{op}(): list is empty", snap())
                continue
            if op == "remove_first":
                removed = values.pop(0)
                yield sb.emit("remove_first", f"remove_first() → {removed}; head moves forward",
                              snap(), code_line=5, variables={"removed": removed})
            else:
                for i in range(len(values) - 1):
                    if i:
                        sb.count("hops")
                    yield sb.emit("traverse", f"remove_last(): walking, at node {i}", snap(),
                                  code_line=7, variables={"i": i}, index=i)
                removed = values.pop()
                yield sb.emit("remove_last", f"remove_last() → {removed}; new tail cut",
                              snap(), code_line=7, variables={"removed": removed})

    yield sb.done(f"Done. List: {values}", snap())
