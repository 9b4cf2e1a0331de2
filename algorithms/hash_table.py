"""
hash_table.py — Hash Table with Linear Probing
===============================================
Open addressing: every key lives directly in a slot.  A key hashes to
its home slot; if that slot is taken the search walks forward one slot
at a time (wrapping) until it finds the key or a free slot.

When the load factor passes 0.7 the table grows to 2n + 1 slots and every
key is re-inserted, so collision runs stay short.

Yields a Step at:
  1. Hash computation (home slot)
  2. Each occupied slot stepped over  →  "collision"
  3. Key stored  →  "place" (or "duplicate" when already present)
  4. Load factor over the threshold  →  "rehash", then one "move" per key
  5. Lookups  →  "found" or "not_found" (stopped by a free slot)

Snapshot: {"slots": [key | None], "count", "capacity", "load_factor"}
"""

from typing import Generator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder


INITIAL_SIZE = 7
LOAD_FACTOR_THRESHOLD = 0.7

KEYS: List[str] = ["apple", "banana", "cherry", "date", "elderberry", "fig", "grape"]
LOOKUPS: List[str] = ["cherry", "kiwi"]


def slot_of(key: str, size: int) -> int:
    """Polynomial string hash reduced modulo the table size at every character."""
    h = 0
    for ch in key:
        h = (h * 31 + ord(ch)) % size
    return h


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insert(key):",                                   # 0
    "    i ← hash(key) mod size",                         # 1
    "    while slots[i] is taken:",                       # 2
    "        if slots[i] == key: return",                 # 3
    "        i ← (i + 1) mod size",                       # 4
    "    slots[i] ← key; count += 1",                     # 5
    "    if count / size > 0.7: rehash(2 · size + 1)",    # 6
    "def lookup(key):",                                   # 7
    "    i ← hash(key) mod size",                         # 8
    "    while slots[i] is taken:",                       # 9
    "        if slots[i] == key: return i",               # 10
    "        i ← (i + 1) mod size",                       # 11
    "    return NOT FOUND",                               # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def hash_table(
    keys: Sequence[str] = KEYS,
    lookups: Sequence[str] = LOOKUPS,
    initial_size: int = INITIAL_SIZE,
) -> Generator[Step, None, None]:
    """
    Args:
        keys         : Keys inserted in order.
        lookups      : Keys searched for after every insert.
        initial_size : Slots before the first rehash (at least 1).
    """
    slots: List[Optional[str]] = [None] * max(1, initial_size)
    count = 0

    def snap():
        return {
            "slots": slots,
            "count": count,
            "capacity": len(slots),
            "load_factor": round(count / len(slots), 2),
        }

    sb = StepBuilder(counters=("collisions", "rehashes"))
    yield sb.emit(
        "init",
        f"Empty table with {len(slots)} slots, rehash above load factor {LOAD_FACTOR_THRESHOLD}",
        snap(),
    )

    def scan(key: str, insert_line: bool) -> Generator[Step, None, int]:
        """Walk from the home slot to `key` or the first free slot; returns that index."""
        i = slot_of(key, len(slots))
        while slots[i] is not None and slots[i] != key:
            sb.count("collisions")
            nxt = (i + 1) % len(slots)
            yield sb.emit(
                "collision",
                f'Slot {i} holds "{slots[i]}": step to slot {nxt}',
                snap(),
                code_line=4 if insert_line else 11,
                variables={"key": key, "i": i, "next": nxt},
                key=key,
                slot=i,
            )
            i = nxt
        return i

    for key in keys:
        home = slot_of(key, len(slots))
        yield sb.emit(
            "hash",
            f'insert("{key}"): hash mod {len(slots)} = {home}',
            snap(),
            code_line=1,
            variables={"key": key, "i": home, "size": len(slots)},
            key=key,
            slot=home,
        )
        i = yield from scan(key, insert_line=True)
        if slots[i] == key:
            yield sb.emit(
                "duplicate",
                f'"{key}" is already in slot {i}',
                snap(),
                code_line=3,
                variables={"key": key, "i": i},
                key=key,
                slot=i,
            )
            continue
        slots[i] = key
        count += 1
        yield sb.emit(
            "place",
            f'Place "{key}" in slot {i}. Load factor {count}/{len(slots)} = {count / len(slots):.2f}',
            snap(),
            code_line=5,
            variables={"key": key, "i": i, "count": count},
            key=key,
            slot=i,
        )

        if count / len(slots) > LOAD_FACTOR_THRESHOLD:
            old = [k for k in slots if k is not None]
            new_size = 2 * len(slots) + 1
            sb.count("rehashes")
            yield sb.emit(
                "rehash",
                f"Load factor {count / len(slots):.2f} > {LOAD_FACTOR_THRESHOLD}: "
                f"grow {len(slots)} → {new_size} slots and re-insert every key",
                snap(),
                code_line=6,
                variables={"count": count, "size": len(slots), "new_size": new_size},
            )
            slots = [None] * new_size
            count = 0
            for moved in old:
                j = yield from scan(moved, insert_line=True)
                slots[j] = moved
                count += 1
                yield sb.emit(
                    "move",
                    f'Re-insert "{moved}" at slot {j}',
                    snap(),
                    code_line=5,
                    variables={"key": moved, "i": j},
                    key=moved,
                    slot=j,
                )

    for key in lookups:
        home = slot_of(key, len(slots))
        yield sb.emit(
            "hash",
            f'lookup("{key}"): hash mod {len(slots)} = {home}',
            snap(),
            code_line=8,
            variables={"key": key, "i": home, "size": len(slots)},
            key=key,
            slot=home,
        )
        i = yield from scan(key, insert_line=False)
        if slots[i] == key:
            yield sb.emit(
                "found",
                f'"{key}" found in slot {i}',
                snap(),
                code_line=10,
                variables={"key": key, "i": i},
                key=key,
                slot=i,
            )
        else:
            yield sb.emit(
                "not_found",
                f'Slot {i} is free: "{key}" is not in the table',
                snap(),
                code_line=12,
                variables={"key": key, "i": i},
                key=key,
                slot=i,
            )

    yield sb.done(
        f"Done. {count} key(s) in {len(slots)} slots, load factor {count / len(slots):.2f}, "
        f"{sb.metrics['collisions']} collision(s), {sb.metrics['rehashes']} rehash(es)",
        snap(),
    )
