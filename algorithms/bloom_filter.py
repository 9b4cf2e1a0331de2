"""
bloom_filter.py — Bloom Filter
===============================
Generator-based trace of adds and membership checks on a fixed-size
bit array with three hand-rolled hash functions.

A check stops at the first 0 bit ("definitely not").  When every bit is
set the answer is "probably yes"; the trace labels it a false positive
when the element was never actually added.  No deletion.

Snapshot: {"bits": [0/1 …], "added": [elements]}
"""

from typing import Callable, Generator, List, Sequence

from algorithms.step import Step, StepBuilder


SIZE = 16
ADD_ELEMENTS:   List[str] = ["apple", "banana", "cherry"]
CHECK_ELEMENTS: List[str] = ["apple", "grape", "banana", "mango"]


# ---------------------------------------------------------------------------
# Hash functions  (all take a string and the bit-array size)
# ---------------------------------------------------------------------------
def hash1(s: str, size: int) -> int:
    h = 0
    for ch in s:
        h = (h * 31 + ord(ch)) % size
    return h

def hash2(s: str, size: int) -> int:
    """djb2, reduced every round."""
    h = 5381
    for ch in s:
        h = ((h << 5) + h + ord(ch)) % size
    return h

def hash3(s: str, size: int) -> int:
    h = 0
    for i, ch in enumerate(s):
        h = (h * 17 + ord(ch) * (i + 1)) % size
    return h

HASH_FUNCTIONS: List[Callable[[str, int], int]] = [hash1, hash2, hash3]


def bit_positions(element: str, size: int = SIZE) -> List[int]:
    return [fn(element, size) for fn in HASH_FUNCTIONS]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add(x):",                                    # 0
    "    for h in hashes: bits[h(x) % m] ← 1",        # 1
    "def might_contain(x):",                          # 2
    "    for h in hashes:",                           # 3
    "        if bits[h(x) % m] == 0:",                # 4
    "            return DEFINITELY NOT",              # 5
    "    return PROBABLY YES",                        # 6
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bloom_filter(
    add_elements: Sequence[str] = ADD_ELEMENTS,
    check_elements: Sequence[str] = CHECK_ELEMENTS,
    size: int = SIZE,
) -> Generator[Step, None, None]:
    """
    Args:
        add_elements   : Elements inserted first, in order.
        check_elements : Elements queried afterwards.
        size           : Number of bits.
    """
    bits: List[int] = [0] * size
    added: List[str] = []

    def snap():
        return {"bits": bits, "added": added}

    sb = StepBuilder(counters=("bits_set", "false_positives"))
    yield sb.emit(
        "init",
        f"Bloom filter: {size} bits, {len(HASH_FUNCTIONS)} hash functions",
        snap(),
        variables={"m": size, "k": len(HASH_FUNCTIONS)},
    )

    # --- adds ---
    for element in add_elements:
        positions = bit_positions(element, size)
        yield sb.emit(
            "add",
            f'add("{element}")',
            snap(),
            code_line=0,
            variables={"element": element},
            element=element,
        )
        yield sb.emit(
            "hash",
            f'Hashes of "{element}" → bits {positions}',
            snap(),
            code_line=1,
            variables={f"h{i + 1}": p for i, p in enumerate(positions)},
            element=element,
            positions=positions,
        )
        for i, pos in enumerate(positions):
            was_set = bits[pos] == 1
            bits[pos] = 1
            if not was_set:
                sb.count("bits_set")
            yield sb.emit(
                "set_bit",
                f"h{i + 1} → bit {pos} " + ("was already 1" if was_set else "set to 1"),
                snap(),
                code_line=1,
                variables={"hash": f"h{i + 1}", "position": pos},
                element=element,
                position=pos,
            )
        added.append(element)

    # --- checks ---
    for element in check_elements:
        positions = bit_positions(element, size)
        yield sb.emit(
            "check",
            f'might_contain("{element}") → check bits {positions}',
            snap(),
            code_line=2,
            variables={"element": element},
            element=element,
            positions=positions,
        )

        result = "probably_yes"
        for i, pos in enumerate(positions):
            yield sb.emit(
                "check_bit",
                f"h{i + 1} → bit {pos} is {bits[pos]}",
                snap(),
                code_line=4,
                variables={"hash": f"h{i + 1}", "position": pos, "bit": bits[pos]},
                element=element,
                position=pos,
            )
            if bits[pos] == 0:
                result = "definitely_not"
                break

        if result == "probably_yes" and element not in added:
            result = "false_positive"
            sb.count("false_positives")

        descriptions = {
            "definitely_not": f'"{element}" is DEFINITELY NOT in the set (a bit is 0)',
            "probably_yes":   f'"{element}" is PROBABLY in the set (all bits are 1)',
            "false_positive": f'"{element}" reports PROBABLY YES but was never added: false positive',
        }
        yield sb.emit(
            "result",
            descriptions[result],
            snap(),
            code_line=5 if result == "definitely_not" else 6,
            variables={"element": element, "result": result},
            element=element,
            result=result,
        )

    yield sb.done(
        f"Done. {sum(bits)}/{size} bits set, {sb.metrics['false_positives']} false positive(s)",
        snap(),
    )
