"""
heap_sort.py — Binary Max-Heap & Heap Sort
===========================================
Generator-based heap sort.  Two phases share one heapify routine:

  BUILD  – heapify every internal node from n//2 - 1 down to 0
  SORT   – swap the root (max) with the last heap slot, shrink the heap
           bound by one, heapify the root again

0-indexed layout:  parent(i) = (i - 1) // 2,  left = 2i + 1,  right = 2i + 2

Snapshot: {"array", "heap_size", "phase", "sorted_from"}
Metrics : cumulative "comparisons" and "swaps".
"""

from typing import Any, Dict, Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder


INITIAL_ARRAY: List[int] = [4, 10, 3, 5, 1, 8, 7, 2, 9, 6]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def heap_sort(arr):",                               # 0
    "    for i in n//2-1 … 0: heapify(arr, n, i)",       # 1
    "    for end in n-1 … 1:",                           # 2
    "        swap(arr[0], arr[end])",                    # 3
    "        heapify(arr, end, 0)",                      # 4
    "def heapify(arr, n, i):",                           # 5
    "    largest ← i; l ← 2i+1; r ← 2i+2",               # 6
    "    if l < n and arr[l] > arr[largest]: largest ← l",  # 7
    "    if r < n and arr[r] > arr[largest]: largest ← r",  # 8
    "    if largest ≠ i:",                               # 9
    "        swap(arr[i], arr[largest])",                # 10
    "        heapify(arr, n, largest)",                  # 11
]


def parent(i: int) -> int:
    return (i - 1) // 2


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def heap_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    """
    Args:
        array : Values to sort; defaults to INITIAL_ARRAY.
    """
    arr = list(INITIAL_ARRAY if array is None else array)
    n = len(arr)
    state = {"heap_size": n, "phase": "build", "sorted_from": n}

    def snap() -> Dict[str, Any]:
        return {"array": arr, **state}

    sb = StepBuilder(counters=("comparisons", "swaps"))
    yield sb.emit("init", f"Initial array of {n} elements", snap(), code_line=0)

    # --- build phase ---
    yield sb.emit(
        "build_heap",
        f"Build max-heap: heapify internal nodes {n // 2 - 1} … 0",
        snap(),
        code_line=1,
        variables={"n": n},
    )
    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(sb, arr, n, i, snap)
    yield sb.emit(
        "build_heap",
        f"Max-heap built: root {arr[0]} is the largest" if arr else "Empty array, nothing to build",
        snap(),
        code_line=1,
        heap_size=n,
    )

    # --- sort phase ---
    state["phase"] = "sort"
    for end in range(n - 1, 0, -1):
        yield sb.emit(
            "extract",
            f"Extract max {arr[0]}: swap root with arr[{end}] = {arr[end]}",
            snap(),
            code_line=3,
            variables={"end": end},
            indices=(0, end),
        )
        arr[0], arr[end] = arr[end], arr[0]
        sb.count("swaps")
        state["heap_size"] = end
        state["sorted_from"] = end
        yield sb.emit(
            "extract",
            f"{arr[end]} placed at index {end}; heap shrinks to {end}",
            snap(),
            code_line=3,
            variables={"end": end},
            indices=(0, end),
        )
        yield from _heapify(sb, arr, end, 0, snap)

    state["heap_size"] = 0
    state["sorted_from"] = 0
    yield sb.emit("heap_sort", f"Sorted: {arr}", snap(), code_line=2)
    yield sb.done(
        f"Heap sort complete: {sb.metrics['comparisons']} comparisons, {sb.metrics['swaps']} swaps",
        snap(),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _heapify(sb: StepBuilder, arr: List[int], heap_size: int, i: int, snap) -> Generator[Step, None, None]:
    largest = i
    left, right = 2 * i + 1, 2 * i + 2
    yield sb.emit(
        "heapify",
        f"heapify(i={i}): left={left}, right={right}, heap size {heap_size}",
        snap(),
        code_line=6,
        variables={"i": i, "left": left, "right": right, "n": heap_size},
        index=i,
    )

    for child, line in ((left, 7), (right, 8)):
        if child < heap_size:
            sb.count("comparisons")
            bigger = arr[child] > arr[largest]
            yield sb.emit(
                "compare",
                f"Compare arr[{child}]={arr[child]} with arr[{largest}]={arr[largest]}"
                + (f" → {arr[child]} is larger" if bigger else ""),
                snap(),
                code_line=line,
                variables={"i": i, "largest": child if bigger else largest},
                indices=(largest, child),
            )
            if bigger:
                largest = child

    if largest != i:
        arr[i], arr[largest] = arr[largest], arr[i]
        sb.count("swaps")
        yield sb.emit(
            "swap",
            f"Swap arr[{i}] and arr[{largest}] → {arr[i]} moves up",
            snap(),
            code_line=10,
            variables={"i": i, "largest": largest},
            indices=(i, largest),
        )
        yield from _heapify(sb, arr, heap_size, largest, snap)
