"""
priority_queue.py — Min-Heap Priority Queue
============================================
Generator-based trace of offer / poll on a binary min-heap.

Every sift step carries highlights["phase"]:
  • "compare" – looking at a parent/child pair
  • "swap"    – the pair was out of order and has been swapped
  • "settled" – the element has reached its place; the whole array is a
                valid min-heap again at this step

Polling an empty queue emits an "empty" step instead of raising.

Snapshot: {"heap": [...]}
"""

from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.heap_sort import parent
from algorithms.step import Step, StepBuilder


OPERATIONS: List[Tuple[str, Optional[int]]] = [
    ("offer", 50),
    ("offer", 30),
    ("offer", 70),
    ("offer", 20),
    ("offer", 40),
    ("offer", 10),
    ("poll",  None),
    ("poll",  None),
    ("offer", 15),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def offer(x):",                                    # 0
    "    heap.append(x); sift_up(len(heap) - 1)",       # 1
    "def sift_up(i):",                                  # 2
    "    while i > 0 and heap[i] < heap[parent(i)]:",   # 3
    "        swap(i, parent(i)); i ← parent(i)",        # 4
    "def poll():",                                      # 5
    "    if heap is empty: return null",                # 6
    "    top ← heap[0]; heap[0] ← heap.pop()",          # 7
    "    sift_down(0); return top",                     # 8
    "def sift_down(i):",                                # 9
    "    smallest ← min(i, 2i+1, 2i+2)",                # 10
    "    if smallest ≠ i: swap(i, smallest); sift_down(smallest)",  # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def priority_queue(
    operations: Sequence[Tuple[str, Optional[int]]] = OPERATIONS,
) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("offer", value) or ("poll", None) pairs.
    """
    heap: List[int] = []
    sb = StepBuilder(counters=("comparisons", "swaps"))
    yield sb.emit("init", "Empty min-heap priority queue", {"heap": heap})

    for op, value in operations:
        if op == "offer":
            heap.append(value)
            yield sb.emit(
                "offer",
                f"offer({value}) → append at index {len(heap) - 1}",
                {"heap": heap},
                code_line=1,
                variables={"value": value, "size": len(heap)},
                index=len(heap) - 1,
            )
            yield from _sift_up(sb, heap, len(heap) - 1)

        elif op == "poll":
            if not heap:
                yield sb.emit(
                    "empty",
                    "poll() on an empty queue → null",
                    {"heap": heap},
                    code_line=6,
                    variables={"size": 0},
                )
                continue
            top = heap[0]
            last = heap.pop()
            if heap:
                heap[0] = last
            yield sb.emit(
                "poll",
                f"poll() → {top}; move last element {last} to the root"
                if heap else f"poll() → {top}; queue is now empty",
                {"heap": heap},
                code_line=7,
                variables={"result": top, "size": len(heap)},
                index=0,
                polled=top,
            )
            if heap:
                yield from _sift_down(sb, heap, 0)

    yield sb.done(f"Done. Heap: {heap}", {"heap": heap})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _sift_up(sb: StepBuilder, heap: List[int], i: int) -> Generator[Step, None, None]:
    while i > 0:
        p = parent(i)
        sb.count("comparisons")
        yield sb.emit(
            "sift_up",
            f"Compare heap[{i}]={heap[i]} with parent heap[{p}]={heap[p]}",
            {"heap": heap},
            code_line=3,
            variables={"i": i, "parent": p},
            phase="compare",
            indices=(p, i),
        )
        if heap[i] >= heap[p]:
            yield sb.emit(
                "sift_up",
                f"{heap[i]} ≥ {heap[p]}: heap property satisfied",
                {"heap": heap},
                code_line=3,
                variables={"i": i, "parent": p},
                phase="settled",
                index=i,
            )
            return
        heap[i], heap[p] = heap[p], heap[i]
        sb.count("swaps")
        yield sb.emit(
            "sift_up",
            f"Swap: {heap[p]} moves up to index {p}",
            {"heap": heap},
            code_line=4,
            variables={"i": p},
            phase="swap",
            indices=(p, i),
        )
        i = p

    yield sb.emit(
        "sift_up",
        f"Reached the root: {heap[0]} is the minimum",
        {"heap": heap},
        code_line=3,
        variables={"i": 0},
        phase="settled",
        index=0,
    )


def _sift_down(sb: StepBuilder, heap: List[int], i: int) -> Generator[Step, None, None]:
    n = len(heap)
    while True:
        left, right = 2 * i + 1, 2 * i + 2
        smallest = i
        for child in (left, right):
            if child < n:
                sb.count("comparisons")
                yield sb.emit(
                    "sift_down",
                    f"Compare heap[{child}]={heap[child]} with heap[{smallest}]={heap[smallest]}",
                    {"heap": heap},
                    code_line=10,
                    variables={"i": i, "smallest": smallest, "child": child},
                    phase="compare",
                    indices=(smallest, child),
                )
                if heap[child] < heap[smallest]:
                    smallest = child

        if smallest == i:
            yield sb.emit(
                "sift_down",
                f"heap[{i}]={heap[i]} is not larger than its children: heap property satisfied",
                {"heap": heap},
                code_line=11,
                variables={"i": i},
                phase="settled",
                index=i,
            )
            return

        heap[i], heap[smallest] = heap[smallest], heap[i]
        sb.count("swaps")
        yield sb.emit(
            "sift_down",
            f"Swap heap[{i}] and heap[{smallest}] → {heap[smallest]} moves down",
            {"heap": heap},
            code_line=11,
            variables={"i": i, "smallest": smallest},
            phase="swap",
            indices=(i, smallest),
        )
        i = smallest
