"""
sorting.py — Comparison Sorts
==============================
Generator-based bubble, selection, insertion, quick (Lomuto) and merge
sort.  All five share the same snapshot shape so the comparison view can
play two of them side by side:

    {"array": [...], "sorted": [indices known to be in final position]}

Metrics are cumulative over the whole run and never reset per pass:
  • comparisons – every element-vs-element comparison
  • swaps       – every swap; insertion sort counts each shift and
                  merge sort counts each write-back
"""

from typing import Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder


DEFAULT_ARRAY: List[int] = [64, 34, 25, 12, 22, 11, 90, 5]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
BUBBLE_PSEUDOCODE: List[str] = [
    "for i in 0 … n-2:",                          # 0
    "    swapped ← false",                        # 1
    "    for j in 0 … n-2-i:",                    # 2
    "        if a[j] > a[j+1]:",                  # 3
    "            swap(a[j], a[j+1]); swapped ← true",  # 4
    "    if not swapped: break",                  # 5
]

SELECTION_PSEUDOCODE: List[str] = [
    "for i in 0 … n-2:",                          # 0
    "    min ← i",                                # 1
    "    for j in i+1 … n-1:",                    # 2
    "        if a[j] < a[min]: min ← j",          # 3
    "    swap(a[i], a[min])",                     # 4
]

INSERTION_PSEUDOCODE: List[str] = [
    "for i in 1 … n-1:",                          # 0
    "    key ← a[i]; j ← i - 1",                  # 1
    "    while j ≥ 0 and a[j] > key:",            # 2
    "        a[j+1] ← a[j]; j ← j - 1",           # 3
    "    a[j+1] ← key",                           # 4
]

QUICK_PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                 # 0
    "    if lo < hi:",                            # 1
    "        p ← partition(a, lo, hi)",           # 2
    "        quick_sort(a, lo, p-1); quick_sort(a, p+1, hi)",  # 3
    "def partition(a, lo, hi):",                  # 4
    "    pivot ← a[hi]; i ← lo - 1",              # 5
    "    for j in lo … hi-1:",                    # 6
    "        if a[j] < pivot: i += 1; swap(a[i], a[j])",  # 7
    "    swap(a[i+1], a[hi]); return i + 1",      # 8
]

MERGE_PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                 # 0
    "    if hi - lo < 1: return",                 # 1
    "    mid ← (lo + hi) // 2",                   # 2
    "    merge_sort(a, lo, mid); merge_sort(a, mid+1, hi)",  # 3
    "    merge(a, lo, mid, hi):",                 # 4
    "        take the smaller head of left / right",  # 5
    "        write it back into a[k]",            # 6
]


def _new_builder() -> StepBuilder:
    return StepBuilder(counters=("comparisons", "swaps"))


def _start(array: Optional[Sequence[int]]) -> List[int]:
    return list(DEFAULT_ARRAY if array is None else array)


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    arr = _start(array)
    n = len(arr)
    done: List[int] = []
    sb = _new_builder()
    yield sb.emit("init", f"Bubble sort on {n} elements", {"array": arr, "sorted": done})

    for i in range(n - 1):
        swapped = False
        yield sb.emit(
            "pass",
            f"Pass {i + 1}: bubble the largest of a[0…{n - 1 - i}] to the end",
            {"array": arr, "sorted": done},
            code_line=0,
            variables={"i": i},
        )
        for j in range(n - 1 - i):
            sb.count("comparisons")
            yield sb.emit(
                "compare",
                f"Compare a[{j}]={arr[j]} and a[{j + 1}]={arr[j + 1]}",
                {"array": arr, "sorted": done},
                code_line=3,
                variables={"i": i, "j": j},
                indices=(j, j + 1),
            )
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                sb.count("swaps")
                swapped = True
                yield sb.emit(
                    "swap",
                    f"{arr[j + 1]} > {arr[j]}: swap",
                    {"array": arr, "sorted": done},
                    code_line=4,
                    variables={"i": i, "j": j},
                    indices=(j, j + 1),
                )
        done.insert(0, n - 1 - i)
        if not swapped:
            done[:] = list(range(n))
            yield sb.emit(
                "sorted",
                "No swaps in this pass: the array is sorted",
                {"array": arr, "sorted": done},
                code_line=5,
                variables={"i": i},
            )
            break

    done[:] = list(range(n))
    yield sb.done(_summary("Bubble sort", sb), {"array": arr, "sorted": done})


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    arr = _start(array)
    n = len(arr)
    done: List[int] = []
    sb = _new_builder()
    yield sb.emit("init", f"Selection sort on {n} elements", {"array": arr, "sorted": done})

    for i in range(n - 1):
        min_idx = i
        yield sb.emit(
            "pass",
            f"Pass {i + 1}: find the minimum of a[{i}…{n - 1}]",
            {"array": arr, "sorted": done},
            code_line=1,
            variables={"i": i, "min": min_idx},
            index=i,
        )
        for j in range(i + 1, n):
            sb.count("comparisons")
            smaller = arr[j] < arr[min_idx]
            yield sb.emit(
                "compare",
                f"Compare a[{j}]={arr[j]} with current min a[{min_idx}]={arr[min_idx]}"
                + (" → new minimum" if smaller else ""),
                {"array": arr, "sorted": done},
                code_line=3,
                variables={"i": i, "j": j, "min": j if smaller else min_idx},
                indices=(min_idx, j),
            )
            if smaller:
                min_idx = j
        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            sb.count("swaps")
            yield sb.emit(
                "swap",
                f"Swap a[{i}] and a[{min_idx}]: {arr[i]} is in place",
                {"array": arr, "sorted": done},
                code_line=4,
                variables={"i": i, "min": min_idx},
                indices=(i, min_idx),
            )
        done.append(i)

    done[:] = list(range(n))
    yield sb.done(_summary("Selection sort", sb), {"array": arr, "sorted": done})


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    arr = _start(array)
    n = len(arr)
    sb = _new_builder()
    yield sb.emit("init", f"Insertion sort on {n} elements", {"array": arr, "sorted": [0] if n else []})

    for i in range(1, n):
        key = arr[i]
        j = i - 1
        yield sb.emit(
            "pass",
            f"Take key {key} from index {i}",
            {"array": arr, "sorted": list(range(i))},
            code_line=1,
            variables={"i": i, "key": key, "j": j},
            index=i,
        )
        while j >= 0:
            sb.count("comparisons")
            bigger = arr[j] > key
            yield sb.emit(
                "compare",
                f"Compare a[{j}]={arr[j]} with key {key}" + (" → shift right" if bigger else " → stop"),
                {"array": arr, "sorted": list(range(i))},
                code_line=2,
                variables={"i": i, "key": key, "j": j},
                indices=(j, j + 1),
            )
            if not bigger:
                break
            arr[j + 1] = arr[j]
            sb.count("swaps")
            yield sb.emit(
                "shift",
                f"Shift {arr[j]} from index {j} to {j + 1}",
                {"array": arr, "sorted": list(range(i))},
                code_line=3,
                variables={"i": i, "key": key, "j": j},
                indices=(j, j + 1),
            )
            j -= 1
        arr[j + 1] = key
        yield sb.emit(
            "insert",
            f"Insert key {key} at index {j + 1}",
            {"array": arr, "sorted": list(range(i + 1))},
            code_line=4,
            variables={"i": i, "key": key, "j": j},
            index=j + 1,
        )

    yield sb.done(_summary("Insertion sort", sb), {"array": arr, "sorted": list(range(n))})


# ---------------------------------------------------------------------------
# Quick sort  (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    arr = _start(array)
    n = len(arr)
    done: List[int] = []
    sb = _new_builder()
    yield sb.emit("init", f"Quick sort on {n} elements", {"array": arr, "sorted": done})
    yield from _quick(sb, arr, 0, n - 1, done)
    yield sb.done(_summary("Quick sort", sb), {"array": arr, "sorted": list(range(n))})


def _quick(sb: StepBuilder, arr: List[int], lo: int, hi: int, done: List[int]) -> Generator[Step, None, None]:
    if lo > hi:
        return
    if lo == hi:
        done.append(lo)
        return

    pivot = arr[hi]
    yield sb.emit(
        "pivot",
        f"Partition a[{lo}…{hi}] around pivot {pivot} (last element)",
        {"array": arr, "sorted": done},
        code_line=5,
        variables={"lo": lo, "hi": hi, "pivot": pivot},
        pivot=hi,
        range=(lo, hi),
    )
    i = lo - 1
    for j in range(lo, hi):
        sb.count("comparisons")
        less = arr[j] < pivot
        yield sb.emit(
            "compare",
            f"Compare a[{j}]={arr[j]} with pivot {pivot}" + (" → move left" if less else ""),
            {"array": arr, "sorted": done},
            code_line=7,
            variables={"lo": lo, "hi": hi, "i": i, "j": j, "pivot": pivot},
            indices=(j, hi),
            pivot=hi,
            range=(lo, hi),
        )
        if less:
            i += 1
            if i != j:
                arr[i], arr[j] = arr[j], arr[i]
                sb.count("swaps")
                yield sb.emit(
                    "swap",
                    f"Swap a[{i}] and a[{j}]",
                    {"array": arr, "sorted": done},
                    code_line=7,
                    variables={"lo": lo, "hi": hi, "i": i, "j": j, "pivot": pivot},
                    indices=(i, j),
                    pivot=hi,
                    range=(lo, hi),
                )

    p = i + 1
    if p != hi:
        arr[p], arr[hi] = arr[hi], arr[p]
        sb.count("swaps")
    done.append(p)
    yield sb.emit(
        "partition",
        f"Pivot {pivot} placed at index {p}",
        {"array": arr, "sorted": done},
        code_line=8,
        variables={"lo": lo, "hi": hi, "p": p},
        pivot=p,
        range=(lo, hi),
    )
    yield from _quick(sb, arr, lo, p - 1, done)
    yield from _quick(sb, arr, p + 1, hi, done)


# ---------------------------------------------------------------------------
# Merge sort  (top-down)
# ---------------------------------------------------------------------------
def merge_sort(array: Optional[Sequence[int]] = None) -> Generator[Step, None, None]:
    arr = _start(array)
    n = len(arr)
    sb = _new_builder()
    yield sb.emit("init", f"Merge sort on {n} elements", {"array": arr, "sorted": []})
    yield from _merge_sort(sb, arr, 0, n - 1)
    yield sb.done(_summary("Merge sort", sb), {"array": arr, "sorted": list(range(n))})


def _merge_sort(sb: StepBuilder, arr: List[int], lo: int, hi: int) -> Generator[Step, None, None]:
    if hi - lo < 1:
        return
    mid = (lo + hi) // 2
    yield sb.emit(
        "divide",
        f"Split a[{lo}…{hi}] into a[{lo}…{mid}] and a[{mid + 1}…{hi}]",
        {"array": arr, "sorted": []},
        code_line=2,
        variables={"lo": lo, "mid": mid, "hi": hi},
        range=(lo, hi),
        mid=mid,
    )
    yield from _merge_sort(sb, arr, lo, mid)
    yield from _merge_sort(sb, arr, mid + 1, hi)

    left, right = arr[lo:mid + 1], arr[mid + 1:hi + 1]
    yield sb.emit(
        "merge",
        f"Merge {left} and {right}",
        {"array": arr, "sorted": []},
        code_line=4,
        variables={"lo": lo, "mid": mid, "hi": hi},
        range=(lo, hi),
        mid=mid,
    )
    i = j = 0
    k = lo
    while i < len(left) and j < len(right):
        sb.count("comparisons")
        yield sb.emit(
            "compare",
            f"Compare {left[i]} (left) with {right[j]} (right)",
            {"array": arr, "sorted": []},
            code_line=5,
            variables={"i": i, "j": j, "k": k},
            indices=(lo + i, mid + 1 + j),
            range=(lo, hi),
        )
        if left[i] <= right[j]:
            arr[k] = left[i]
            i += 1
        else:
            arr[k] = right[j]
            j += 1
        sb.count("swaps")
        yield sb.emit(
            "write",
            f"Write {arr[k]} to index {k}",
            {"array": arr, "sorted": []},
            code_line=6,
            variables={"i": i, "j": j, "k": k},
            index=k,
            range=(lo, hi),
        )
        k += 1

    for rest in (left[i:], right[j:]):
        for value in rest:
            arr[k] = value
            sb.count("swaps")
            yield sb.emit(
                "write",
                f"Copy remaining {value} to index {k}",
                {"array": arr, "sorted": []},
                code_line=6,
                variables={"k": k},
                index=k,
                range=(lo, hi),
            )
            k += 1


def _summary(name: str, sb: StepBuilder) -> str:
    return f"{name} complete: {sb.metrics['comparisons']} comparisons, {sb.metrics['swaps']} swaps"
