"""
knapsack.py — 0/1 Knapsack (Dynamic Programming)
=================================================
Fills the (n+1) × (W+1) table row by row:

    dp[i][w] = dp[i-1][w]                                  if weight_i > w
             = max(dp[i-1][w], dp[i-1][w-weight_i] + value_i)  otherwise

Row 0 and column 0 are the base case (all zeros).  One step per cell,
then one step per row while walking back from dp[n][W] to recover which
items were taken.

Snapshot: {"items": [[weight, value]], "capacity", "table": dp,
           "chosen": [item indices]}
"""

from typing import Generator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder


ITEMS: List[Tuple[int, int]] = [(2, 3), (3, 4), (4, 5), (5, 6)]   # (weight, value)
CAPACITY = 8


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "dp ← (n+1) × (W+1) table of 0",                    # 0
    "for i = 1 to n:",                                  # 1
    "    for w = 1 to W:",                              # 2
    "        if item[i].weight > w:",                   # 3
    "            dp[i][w] ← dp[i-1][w]",                # 4
    "        else:",                                    # 5
    "            skip ← dp[i-1][w]",                    # 6
    "            take ← dp[i-1][w - weight] + value",   # 7
    "            dp[i][w] ← max(skip, take)",           # 8
    "w ← W; for i = n down to 1:",                      # 9
    "    if dp[i][w] ≠ dp[i-1][w]: take i; w -= weight", # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def knapsack(
    items: Sequence[Tuple[int, int]] = ITEMS,
    capacity: int = CAPACITY,
) -> Generator[Step, None, None]:
    """
    Args:
        items    : (weight, value) pairs; weights must be positive.
        capacity : Knapsack capacity W (negative values count as 0).
    """
    items = [(int(w), int(v)) for w, v in items]
    if any(w <= 0 for w, _ in items):
        raise ValueError("item weights must be positive")
    capacity = max(0, capacity)
    n = len(items)
    dp: List[List[int]] = [[0] * (capacity + 1) for _ in range(n + 1)]
    chosen: List[int] = []

    def snap():
        return {
            "items": [[w, v] for w, v in items],
            "capacity": capacity,
            "table": dp,
            "chosen": sorted(chosen),
        }

    sb = StepBuilder(counters=("cells",))
    yield sb.emit(
        "init",
        f"DP table: {n + 1} rows (items) × {capacity + 1} columns (capacity). "
        f"Base case dp[0][*] = dp[*][0] = 0",
        snap(),
        code_line=0,
    )

    # -- fill --
    for i in range(1, n + 1):
        weight, value = items[i - 1]
        for w in range(1, capacity + 1):
            sb.count("cells")
            skip = dp[i - 1][w]
            if weight > w:
                dp[i][w] = skip
                yield sb.emit(
                    "too_heavy",
                    f"Item {i} (w={weight}, v={value}) does not fit in {w}: "
                    f"dp[{i}][{w}] = dp[{i - 1}][{w}] = {skip}",
                    snap(),
                    code_line=4,
                    variables={"i": i, "w": w, "weight": weight, "skip": skip},
                    cell=(i, w),
                    sources=[(i - 1, w)],
                )
                continue

            take = dp[i - 1][w - weight] + value
            if take > skip:
                dp[i][w] = take
                op, verdict = "take", f"take ({take}) > skip ({skip})"
            else:
                dp[i][w] = skip
                op, verdict = "skip", f"skip ({skip}) ≥ take ({take})"
            yield sb.emit(
                op,
                f"Item {i}: {verdict} → dp[{i}][{w}] = {dp[i][w]}",
                snap(),
                code_line=8,
                variables={"i": i, "w": w, "skip": skip, "take": take, "best": dp[i][w]},
                cell=(i, w),
                sources=[(i - 1, w), (i - 1, w - weight)],
            )

    # -- walk back --
    w = capacity
    for i in range(n, 0, -1):
        weight, value = items[i - 1]
        if dp[i][w] != dp[i - 1][w]:
            chosen.append(i - 1)
            yield sb.emit(
                "pick",
                f"dp[{i}][{w}] = {dp[i][w]} ≠ dp[{i - 1}][{w}] = {dp[i - 1][w]}: "
                f"item {i} (w={weight}, v={value}) is in the knapsack",
                snap(),
                code_line=10,
                variables={"i": i, "w": w},
                cell=(i, w),
                item=i - 1,
            )
            w -= weight
        else:
            yield sb.emit(
                "leave",
                f"dp[{i}][{w}] = dp[{i - 1}][{w}] = {dp[i][w]}: item {i} is left out",
                snap(),
                code_line=10,
                variables={"i": i, "w": w},
                cell=(i, w),
                item=i - 1,
            )

    yield sb.done(
        f"Maximum value {dp[n][capacity]} using item(s) {[i + 1 for i in sorted(chosen)]}",
        snap(),
        cell=(n, capacity),
        chosen=sorted(chosen),
    )
