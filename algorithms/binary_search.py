"""
binary_search.py — Binary Search
=================================
Generator-based binary search over a sorted array.  An unsorted input is
sorted first (the init step shows the sorted array).

Snapshot: {"array", "low", "high", "mid", "eliminated": [indices]}
"""

from typing import Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder


DEFAULT_ARRAY: List[int] = [2, 5, 8, 12, 16, 23, 38, 56, 72, 91]
DEFAULT_TARGET = 23


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",              # 0
    "    lo, hi ← 0, n - 1",                      # 1
    "    while lo ≤ hi:",                         # 2
    "        mid ← (lo + hi) // 2",               # 3
    "        if a[mid] == target: return mid",    # 4
    "        if a[mid] < target: lo ← mid + 1",   # 5
    "        else: hi ← mid - 1",                 # 6
    "    return -1",                              # 7
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def binary_search(
    array: Optional[Sequence[int]] = None,
    target: int = DEFAULT_TARGET,
) -> Generator[Step, None, None]:
    arr = sorted(DEFAULT_ARRAY if array is None else array)
    lo, hi, mid = 0, len(arr) - 1, None

    def snap():
        return {
            "array": arr,
            "low": lo,
            "high": hi,
            "mid": mid,
            "eliminated": [i for i in range(len(arr)) if i < lo or i > hi],
        }

    sb = StepBuilder(counters=("comparisons",))
    yield sb.emit(
        "init",
        f"Search for {target} in {len(arr)} sorted elements",
        snap(),
        code_line=1,
        variables={"lo": lo, "hi": hi, "target": target},
    )

    while lo <= hi:
        mid = (lo + hi) // 2
        yield sb.emit(
            "mid",
            f"mid = ({lo} + {hi}) // 2 = {mid} → a[{mid}] = {arr[mid]}",
            snap(),
            code_line=3,
            variables={"lo": lo, "hi": hi, "mid": mid},
            index=mid,
        )
        sb.count("comparisons")
        if arr[mid] == target:
            yield sb.emit(
                "found",
                f"a[{mid}] = {target}: found at index {mid}",
                snap(),
                code_line=4,
                variables={"mid": mid, "result": mid},
                index=mid,
            )
            yield sb.done(f"Found {target} after {sb.metrics['comparisons']} comparison(s)", snap(), index=mid)
            return
        if arr[mid] < target:
            lo = mid + 1
            yield sb.emit(
                "go_right",
                f"{arr[mid]} < {target}: discard the left half, lo = {lo}",
                snap(),
                code_line=5,
                variables={"lo": lo, "hi": hi, "mid": mid},
                index=mid,
            )
        else:
            hi = mid - 1
            yield sb.emit(
                "go_left",
                f"{arr[mid]} > {target}: discard the right half, hi = {hi}",
                snap(),
                code_line=6,
                variables={"lo": lo, "hi": hi, "mid": mid},
                index=mid,
            )

    mid = None
    yield sb.emit(
        "not_found",
        f"lo ({lo}) > hi ({hi}): {target} is not in the array",
        snap(),
        code_line=7,
        variables={"lo": lo, "hi": hi, "result": -1},
    )
    yield sb.done(f"{target} not found after {sb.metrics['comparisons']} comparison(s)", snap())
